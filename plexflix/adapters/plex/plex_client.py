"""
Client Plex pour l'enumeration des bibliotheques.

Implemente IMediaLibrary via l'API HTTP du serveur Plex (port 32400 par
defaut). Le jeton est passe dans l'en-tete X-Plex-Token et les reponses
sont demandees en JSON.

Usage:
    client = PlexLibraryClient(base_url="http://localhost:32400", token="xxx")
    for library in await client.list_libraries():
        items = await client.list_items(library)
    await client.close()
"""

from typing import Any, Optional

import httpx
from loguru import logger

from plexflix.core.entities.media import Library, MediaItem
from plexflix.core.errors import MediaLibraryError
from plexflix.core.ports.media_library import IMediaLibrary


class PlexLibraryClient(IMediaLibrary):
    """
    Client API Plex limite a la lecture des bibliotheques.

    Endpoints utilises:
    - GET /library/sections : liste des bibliotheques (MediaContainer.Directory)
    - GET /library/sections/<key>/all : contenu (MediaContainer.Metadata)
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialise le client Plex.

        Args:
            base_url: URL du serveur (ex: http://localhost:32400)
            token: Jeton X-Plex-Token
            timeout: Timeout des requetes en secondes
            transport: Transport httpx alternatif (tests)
        """
        self._base_url = base_url
        self._token = token
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers={
                    "Accept": "application/json",
                    "X-Plex-Token": self._token,
                },
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def _get_container(self, path: str) -> dict[str, Any]:
        """GET sur le serveur et retourne le MediaContainer de la reponse."""
        client = self._get_client()
        try:
            response = await client.get(path)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise MediaLibraryError(f"calling Plex {path}: {e}") from e
        except ValueError as e:
            raise MediaLibraryError(f"decoding Plex response for {path}: {e}") from e

        container = data.get("MediaContainer") if isinstance(data, dict) else None
        if not isinstance(container, dict):
            raise MediaLibraryError(f"no MediaContainer in Plex response for {path}")
        return container

    async def list_libraries(self) -> list[Library]:
        """
        Liste les bibliotheques du serveur.

        Returns:
            Liste de Library dans l'ordre du serveur
        """
        container = await self._get_container("/library/sections")
        libraries = [
            Library(
                key=str(directory["key"]),
                title=directory.get("title", ""),
                kind=directory.get("type", ""),
            )
            for directory in container.get("Directory", [])
            if "key" in directory
        ]
        logger.debug("Bibliotheques Plex", count=len(libraries))
        return libraries

    async def list_items(self, library: Library) -> list[MediaItem]:
        """
        Liste les titres d'une bibliotheque.

        L'annee est absente pour certains contenus (musique, photos):
        elle vaut alors 0.

        Args:
            library: Bibliotheque a parcourir

        Returns:
            Liste de MediaItem dans l'ordre du serveur
        """
        container = await self._get_container(f"/library/sections/{library.key}/all")
        return [
            MediaItem(title=metadata.get("title", ""), year=int(metadata.get("year") or 0))
            for metadata in container.get("Metadata", [])
        ]

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
