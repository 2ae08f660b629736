"""
Parcours complet de la videotheque.

Enumere les bibliotheques du serveur de medias puis leurs titres, et
delegue la verification de chaque titre au ReconciliationService.
Les erreurs d'enumeration (serveur injoignable) sont fatales; les erreurs
par titre sont collectees dans le rapport.
"""

from typing import Callable, Optional

from loguru import logger

from plexflix.core.entities.media import Library
from plexflix.core.ports.media_library import IMediaLibrary
from plexflix.services.reconciliation import (
    ReconciliationResult,
    ReconciliationService,
    ScanReport,
)


class LibraryScanService:
    """Scanne toutes les bibliotheques d'un serveur de medias."""

    def __init__(
        self,
        media_library: IMediaLibrary,
        reconciliation: ReconciliationService,
    ) -> None:
        self._media_library = media_library
        self._reconciliation = reconciliation

    async def scan(
        self,
        api_key: str,
        fail_fast: bool = False,
        on_library: Optional[Callable[[Library, int], None]] = None,
        on_result: Optional[Callable[[ReconciliationResult], None]] = None,
    ) -> ScanReport:
        """
        Verifie la disponibilite de tous les titres de toutes les bibliotheques.

        Args:
            api_key: Cle RapidAPI
            fail_fast: Interrompt le scan a la premiere erreur de titre
            on_library: Callback (bibliotheque, nombre de titres) avant chaque bibliotheque
            on_result: Callback appele pour chaque titre termine

        Returns:
            ScanReport agrege, dans l'ordre des bibliotheques puis des titres

        Raises:
            MediaLibraryError: Enumeration impossible
        """
        report = ScanReport()

        for library in await self._media_library.list_libraries():
            logger.info("searching section", section=library.title)
            items = await self._media_library.list_items(library)
            if on_library is not None:
                on_library(library, len(items))

            library_report = await self._reconciliation.reconcile_all(
                items, api_key, fail_fast=fail_fast, on_result=on_result
            )
            report.extend(library_report)

        logger.info(
            "scan termine",
            checked=report.checked,
            found=len(report.matches),
            failed=len(report.failures),
        )
        return report
