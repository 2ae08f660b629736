"""
Tests unitaires pour la commande CLI scan.

Tests couvrant:
- scan complet sans erreur (code 0)
- erreurs de demarrage: secrets, serveur Plex (code 1)
- titres en erreur ou --fail-fast (code 2)
- surcharges CLI: hote Plex, region, parallelisme
"""

from unittest.mock import ANY, AsyncMock, MagicMock, patch

import pytest
import typer
from typer.testing import CliRunner

from plexflix.adapters.cli.commands import scan
from plexflix.core.entities.media import Library, MediaItem
from plexflix.core.errors import (
    IdentifierResolutionError,
    MediaLibraryError,
    SecretsError,
    TransportError,
)
from plexflix.services.reconciliation import ReconciliationResult, ScanReport

runner = CliRunner()

app = typer.Typer()
app.command()(scan)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def mock_container(test_settings):
    """Mock le Container pour les tests.

    Patche Container dans helpers.py car c'est la que le decorateur
    @with_container() l'importe et l'instancie.
    """
    with patch("plexflix.adapters.cli.helpers.Container") as mock_cls:
        container_instance = MagicMock()
        mock_cls.return_value = container_instance
        container_instance.config.return_value = test_settings
        container_instance.secret_store.return_value.load = AsyncMock(return_value={
            "RAPID_API_KEY": "rapid-key",
            "PLEX_TOKEN": "plex-token",
        })
        container_instance.plex_client.return_value = AsyncMock()
        container_instance.unogs_client.return_value = AsyncMock()

        scan_service = AsyncMock()
        scan_service.scan.return_value = ScanReport(
            results=[
                ReconciliationResult(item=MediaItem("Inception (2010)", 2010), available=True),
                ReconciliationResult(item=MediaItem("Heat", 1995)),
            ]
        )
        container_instance.library_scan_service.return_value = scan_service
        yield container_instance


# ============================================================================
# Tests
# ============================================================================


class TestScanCommand:

    def test_successful_scan(self, mock_container):
        result = runner.invoke(app, [])

        assert result.exit_code == 0
        assert "Inception (2010)" in result.output
        scan_service = mock_container.library_scan_service.return_value
        scan_service.scan.assert_awaited_once_with(
            "rapid-key", fail_fast=False, on_library=ANY, on_result=ANY
        )

    def test_uses_settings_by_default(self, mock_container):
        runner.invoke(app, [])

        mock_container.plex_client.assert_called_once_with(
            base_url="http://plex.test:32400",
            token="plex-token",
        )
        mock_container.reconciliation_service.assert_called_once_with(
            region_code="us",
            max_concurrency=1,
        )

    def test_cli_overrides(self, mock_container):
        result = runner.invoke(
            app,
            ["--plex-host", "nas.local", "--plex-port", "32401", "--region", "CA", "-c", "4"],
        )

        assert result.exit_code == 0
        mock_container.plex_client.assert_called_once_with(
            base_url="http://nas.local:32401",
            token="plex-token",
        )
        mock_container.reconciliation_service.assert_called_once_with(
            region_code="ca",
            max_concurrency=4,
        )

    def test_clients_are_closed(self, mock_container):
        runner.invoke(app, [])

        mock_container.plex_client.return_value.close.assert_awaited_once()
        mock_container.unogs_client.return_value.close.assert_awaited_once()

    def test_secrets_error_exits_1(self, mock_container):
        mock_container.secret_store.return_value.load.side_effect = SecretsError(
            "reading secrets.json"
        )

        result = runner.invoke(app, [])

        assert result.exit_code == 1
        mock_container.library_scan_service.assert_not_called()

    def test_plex_unreachable_exits_1(self, mock_container):
        scan_service = mock_container.library_scan_service.return_value
        scan_service.scan.side_effect = MediaLibraryError("connection refused")

        result = runner.invoke(app, [])

        assert result.exit_code == 1
        mock_container.plex_client.return_value.close.assert_awaited_once()

    def test_item_failures_exit_2(self, mock_container):
        scan_service = mock_container.library_scan_service.return_value
        scan_service.scan.return_value = ScanReport(
            results=[
                ReconciliationResult(
                    item=MediaItem("Heat", 1995),
                    error=IdentifierResolutionError(TransportError("timeout")),
                ),
            ]
        )

        result = runner.invoke(app, [])

        assert result.exit_code == 2
        assert "Heat" in result.output

    def test_fail_fast_abort_exits_2(self, mock_container):
        scan_service = mock_container.library_scan_service.return_value
        scan_service.scan.side_effect = IdentifierResolutionError(TransportError("timeout"))

        result = runner.invoke(app, ["--fail-fast"])

        assert result.exit_code == 2
        scan_service.scan.assert_awaited_once_with(
            "rapid-key", fail_fast=True, on_library=ANY, on_result=ANY
        )

    def test_progress_lines_printed_per_title(self, mock_container):
        """Les callbacks de progression affichent une ligne par titre."""
        report = ScanReport(
            results=[ReconciliationResult(item=MediaItem("Solaris", 1972))]
        )

        async def fake_scan(api_key, fail_fast, on_library, on_result):
            on_library(Library(key="1", title="Films", kind="movie"), 1)
            on_result(report.results[0])
            return report

        scan_service = mock_container.library_scan_service.return_value
        scan_service.scan.side_effect = fake_scan

        result = runner.invoke(app, [])

        assert result.exit_code == 0
        assert "Solaris (1972)" in result.output

    def test_error_with_markup_characters_is_displayed(self, mock_container):
        scan_service = mock_container.library_scan_service.return_value
        scan_service.scan.return_value = ScanReport(
            results=[
                ReconciliationResult(
                    item=MediaItem("Heat", 1995),
                    error=IdentifierResolutionError(TransportError("[/bad] markup")),
                ),
            ]
        )

        result = runner.invoke(app, [])

        assert result.exit_code == 2
        assert "[/bad] markup" in result.output
