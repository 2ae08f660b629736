"""
Fixtures pytest partagees pour les tests PlexFlix.

Ce module contient les fixtures communes utilisees dans les tests:
- Mock du port ICatalogLookupClient
- Settings de test avec chemins temporaires
- Titres de videotheque types
"""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from plexflix.config import Settings
from plexflix.core.entities.media import MediaItem
from plexflix.core.ports.api_clients import ICatalogLookupClient


@pytest.fixture
def mock_lookup_client() -> AsyncMock:
    """
    Mock de ICatalogLookupClient pour les tests.

    fetch() doit etre configure dans chaque test (return_value ou side_effect
    avec des bytes).
    """
    return AsyncMock(spec=ICatalogLookupClient)


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Les identifiants sont fournis directement: aucun dechiffrement ejson.
    """
    return Settings(
        plex_host="plex.test",
        plex_token="plex-token",
        rapid_api_key="rapid-key",
        secrets_file=tmp_path / "secrets.json",
        ejson_keydir=tmp_path / "keys",
        log_file=tmp_path / "test.log",
    )


@pytest.fixture
def inception() -> MediaItem:
    """Titre Plex portant l'annee dans son titre."""
    return MediaItem(title="Inception (2010)", year=2010)


@pytest.fixture
def schindler() -> MediaItem:
    """Titre Plex avec apostrophe."""
    return MediaItem(title="Schindler's List", year=1993)
