"""
Service de reconciliation videotheque / catalogue Netflix.

Pour chaque titre: resolution de l'identifiant Netflix, puis verification
de la disponibilite dans la region configuree. Les deux etapes sont
strictement sequentielles pour un titre donne; plusieurs titres peuvent
etre traites en parallele dans la limite de max_concurrency.

Politique d'erreur:
- reconcile() propage toute erreur (aucun retry, aucune recuperation)
- reconcile_all() collecte les erreurs par titre dans le ScanReport et
  poursuit le scan, sauf en mode fail_fast
"""

import asyncio
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from loguru import logger

from plexflix.core.entities.media import MediaItem
from plexflix.core.errors import IdentifierResolutionError
from plexflix.services.availability_checker import AvailabilityChecker
from plexflix.services.identifier_resolver import IdentifierResolver


@dataclass(frozen=True)
class ReconciliationResult:
    """
    Resultat de la reconciliation d'un titre.

    Attributes:
        item: Titre de la videotheque
        available: True si disponible dans la region
        error: Erreur rencontree, None si le titre a pu etre verifie
    """

    item: MediaItem
    available: bool = False
    error: Optional[Exception] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class ScanReport:
    """Resultats d'un scan, dans l'ordre d'enumeration de la videotheque."""

    results: list[ReconciliationResult] = field(default_factory=list)

    @property
    def matches(self) -> list[ReconciliationResult]:
        """Titres disponibles dans la region."""
        return [r for r in self.results if r.available]

    @property
    def failures(self) -> list[ReconciliationResult]:
        """Titres dont la verification a echoue."""
        return [r for r in self.results if r.failed]

    @property
    def checked(self) -> int:
        """Nombre de titres verifies sans erreur."""
        return len(self.results) - len(self.failures)

    def extend(self, other: "ScanReport") -> None:
        self.results.extend(other.results)


class ReconciliationService:
    """
    Enchaine IdentifierResolver et AvailabilityChecker pour un titre.

    La region et la limite de parallelisme sont des parametres explicites,
    aucune valeur n'est figee dans le service.
    """

    def __init__(
        self,
        resolver: IdentifierResolver,
        checker: AvailabilityChecker,
        region_code: str = "us",
        max_concurrency: int = 1,
    ) -> None:
        """
        Args:
            resolver: Resolution titre -> identifiant Netflix
            checker: Verification identifiant -> region
            region_code: Code pays cible (minuscules)
            max_concurrency: Nombre maximum de titres traites simultanement
        """
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")
        self._resolver = resolver
        self._checker = checker
        self._region_code = region_code
        self._max_concurrency = max_concurrency

    @property
    def region_code(self) -> str:
        return self._region_code

    async def reconcile(self, item: MediaItem, api_key: str) -> bool:
        """
        Indique si un titre de la videotheque est disponible dans la region.

        Args:
            item: Titre de la videotheque
            api_key: Cle RapidAPI

        Returns:
            True si disponible, False si absent du catalogue ou de la region

        Raises:
            IdentifierResolutionError: Echec de la resolution (cause chainee)
            CatalogError: Echec de la verification de disponibilite
        """
        try:
            identifier = await self._resolver.resolve(item.title, item.year, api_key)
        except Exception as e:
            raise IdentifierResolutionError(e) from e

        if not identifier:
            return False

        return await self._checker.is_available(identifier, api_key, self._region_code)

    async def reconcile_all(
        self,
        items: Iterable[MediaItem],
        api_key: str,
        fail_fast: bool = False,
        on_result: Optional[Callable[[ReconciliationResult], None]] = None,
    ) -> ScanReport:
        """
        Reconcilie une serie de titres independants.

        Args:
            items: Titres a verifier
            api_key: Cle RapidAPI
            fail_fast: Si True, la premiere erreur interrompt le scan et est propagee
            on_result: Callback appele a chaque titre termine (progression)

        Returns:
            ScanReport dans l'ordre des titres fournis
        """
        semaphore = asyncio.Semaphore(self._max_concurrency)
        aborted = asyncio.Event()

        async def _run(item: MediaItem) -> ReconciliationResult:
            async with semaphore:
                if aborted.is_set():
                    # Scan interrompu: ce resultat n'est jamais retourne
                    return ReconciliationResult(item=item)
                try:
                    available = await self.reconcile(item, api_key)
                except Exception as e:
                    if fail_fast:
                        aborted.set()
                        raise
                    logger.error("finding on Netflix", title=item.title, error=str(e))
                    result = ReconciliationResult(item=item, error=e)
                else:
                    if available:
                        logger.info("found on netflix", title=item.title)
                    result = ReconciliationResult(item=item, available=available)
            if on_result is not None:
                on_result(result)
            return result

        tasks = [asyncio.ensure_future(_run(item)) for item in items]
        try:
            results = await asyncio.gather(*tasks)
        except Exception:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        return ScanReport(results=list(results))
