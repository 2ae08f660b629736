"""
Verification de la disponibilite regionale d'un titre Netflix.
"""

from pydantic import ValidationError

from plexflix.adapters.api.unogs_client import UNOGS_BASE_URL, build_detail_url
from plexflix.core.errors import MalformedResponseError
from plexflix.core.ports.api_clients import CatalogDetail, ICatalogLookupClient


class AvailabilityChecker:
    """Interroge le detail uNoGS d'un identifiant et teste la presence d'un pays."""

    def __init__(
        self,
        lookup_client: ICatalogLookupClient,
        base_url: str = UNOGS_BASE_URL,
    ) -> None:
        self._lookup_client = lookup_client
        self._base_url = base_url

    async def is_available(self, identifier: str, api_key: str, region_code: str) -> bool:
        """
        Indique si le titre est disponible dans la region.

        Un identifiant vide retourne False sans appel reseau.

        Args:
            identifier: Identifiant Netflix
            api_key: Cle RapidAPI
            region_code: Code pays a deux lettres, en minuscules (ex: "us")

        Raises:
            CatalogError: Echec de l'appel HTTP
            MalformedResponseError: Reponse de detail invalide
        """
        if not identifier:
            return False

        body = await self._lookup_client.fetch(
            build_detail_url(identifier, self._base_url), api_key
        )
        try:
            detail = CatalogDetail.model_validate_json(body)
        except ValidationError as e:
            raise MalformedResponseError(body) from e

        return region_code in detail.country_codes
