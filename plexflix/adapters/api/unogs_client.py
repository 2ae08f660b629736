"""
Client uNoGS pour le catalogue Netflix (via RapidAPI).

Implemente ICatalogLookupClient : un GET authentifie par l'en-tete
X-RapidAPI-Key, qui retourne le corps brut de la reponse. Aucun retry,
aucun cache : chaque appel part sur le reseau.

Fournit aussi la construction des deux URLs utilisees par les services:
- recherche avancee par titre et annee (build_search_url)
- detail d'un titre par identifiant Netflix (build_detail_url)

Usage:
    client = UnogsClient()
    body = await client.fetch(build_detail_url("70131314"), api_key="xxx")
    await client.close()
"""

from typing import Optional
from urllib.parse import quote_plus

import httpx
from loguru import logger

from plexflix.core.errors import BodyReadError, RequestBuildError, TransportError
from plexflix.core.ports.api_clients import ICatalogLookupClient, SearchFilters

UNOGS_BASE_URL = "https://unogs-unogs-v1.p.rapidapi.com/aaapi.cgi"
API_KEY_HEADER = "X-RapidAPI-Key"


def build_search_url(
    title: str,
    year: int,
    filters: SearchFilters = SearchFilters(),
    base_url: str = UNOGS_BASE_URL,
) -> str:
    """
    Construit l'URL de recherche avancee pour un titre sur une seule annee.

    La grammaire de q est propre a uNoGS: champs separes par "-!",
    l'annee est passee deux fois comme intervalle min,max.

    Args:
        title: Titre deja normalise
        year: Annee de sortie
        filters: Filtres fixes (note, disponibilite, tri, page)
        base_url: Endpoint aaapi.cgi

    Returns:
        URL complete avec query string
    """
    query = (
        f"{quote_plus(title)}-!{year},{year}-!0,5-!0,10-!0-!Any-!Any-!Any"
        f"-!{filters.rating_floor}-!{{{filters.availability_flag}}}"
    )
    return (
        f"{base_url}?q={query}&t=ns&cl=all&st=adv"
        f"&ob={filters.order_by}&p={filters.page}&sa={filters.semantics}"
    )


def build_detail_url(identifier: str, base_url: str = UNOGS_BASE_URL) -> str:
    """Construit l'URL "loadvideo" donnant les pays de disponibilite d'un titre."""
    return f"{base_url}?t=loadvideo&q={identifier}"


class UnogsClient(ICatalogLookupClient):
    """
    Client HTTP du catalogue uNoGS.

    Le code HTTP n'est pas inspecte: une reponse 4xx/5xx est retournee
    telle quelle, c'est le parsing JSON en aval qui signale un contenu
    inattendu.

    Correspondance des erreurs httpx:
        httpx.InvalidURL, httpx.UnsupportedProtocol -> RequestBuildError
        httpx.TransportError (connexion, timeout, DNS, TLS) -> TransportError
        erreur pendant la lecture ou le decodage du corps -> BodyReadError
    """

    def __init__(
        self,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialise le client uNoGS.

        Args:
            timeout: Timeout du transport en secondes
            transport: Transport httpx alternatif (tests)
        """
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={"Accept": "application/json"},
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    def _build_request(self, url: str, api_key: str) -> httpx.Request:
        client = self._get_client()
        try:
            return client.build_request("GET", url, headers={API_KEY_HEADER: api_key})
        except (httpx.InvalidURL, httpx.UnsupportedProtocol, ValueError) as e:
            raise RequestBuildError(f"creating request: {e}") from e

    async def fetch(self, url: str, api_key: str) -> bytes:
        """
        Execute un GET authentifie et retourne le corps complet.

        Args:
            url: URL complete a appeler
            api_key: Cle RapidAPI

        Returns:
            Corps de la reponse, quel que soit le code HTTP

        Raises:
            RequestBuildError: URL invalide
            TransportError: Echec reseau
            BodyReadError: Corps illisible
        """
        request = self._build_request(url, api_key)
        client = self._get_client()

        try:
            response = await client.send(request, stream=True)
        except httpx.UnsupportedProtocol as e:
            raise RequestBuildError(f"creating request: {e}") from e
        except httpx.TransportError as e:
            raise TransportError(f"calling uNoGS: {e}") from e

        try:
            body = await response.aread()
        except (httpx.TransportError, httpx.DecodingError, httpx.StreamError) as e:
            raise BodyReadError(f"reading uNoGS body: {e}") from e
        finally:
            await response.aclose()

        logger.debug(
            "Reponse uNoGS",
            url=str(request.url),
            status=response.status_code,
            size=len(body),
        )
        return body

    async def close(self) -> None:
        """
        Ferme le client HTTP.

        Doit etre appele a la fin du scan pour liberer les ressources reseau.
        """
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
