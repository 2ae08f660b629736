"""
Resolution de l'identifiant Netflix d'un titre de la videotheque.

Interroge la recherche avancee uNoGS sur l'annee exacte du titre et retient
le premier resultat dont le titre est strictement identique au titre
normalise. Aucun matching approximatif: mieux vaut ne rien trouver qu'un
faux positif.
"""

from loguru import logger
from pydantic import ValidationError

from plexflix.adapters.api.unogs_client import UNOGS_BASE_URL, build_search_url
from plexflix.core.errors import MalformedResponseError
from plexflix.core.ports.api_clients import (
    CatalogSearchResult,
    ICatalogLookupClient,
    SearchFilters,
)
from plexflix.services.title_normalizer import normalize_title

IDENTIFIER_FIELD = "netflixid"


class IdentifierResolver:
    """Trouve l'identifiant Netflix correspondant a un couple (titre, annee)."""

    def __init__(
        self,
        lookup_client: ICatalogLookupClient,
        filters: SearchFilters = SearchFilters(),
        base_url: str = UNOGS_BASE_URL,
    ) -> None:
        """
        Args:
            lookup_client: Client HTTP du catalogue
            filters: Filtres fixes de la recherche avancee
            base_url: Endpoint du catalogue
        """
        self._lookup_client = lookup_client
        self._filters = filters
        self._base_url = base_url

    async def resolve(self, title: str, year: int, api_key: str) -> str:
        """
        Resout l'identifiant Netflix d'un titre.

        Args:
            title: Titre brut de la videotheque
            year: Annee de sortie
            api_key: Cle RapidAPI

        Returns:
            Identifiant Netflix, ou "" si aucun resultat ne correspond exactement

        Raises:
            CatalogError: Echec de l'appel HTTP
            MalformedResponseError: Reponse qui n'est pas une recherche uNoGS valide
        """
        normalized = normalize_title(title)
        url = build_search_url(normalized, year, self._filters, self._base_url)

        body = await self._lookup_client.fetch(url, api_key)
        try:
            result = CatalogSearchResult.model_validate_json(body)
        except ValidationError as e:
            raise MalformedResponseError(body) from e

        for item in result.items:
            if item.get("title") == normalized:
                return item.get(IDENTIFIER_FIELD, "")

        logger.debug(
            "Aucun titre exact dans le catalogue",
            title=normalized,
            year=year,
            count=result.count,
        )
        return ""
