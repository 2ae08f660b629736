"""
Interface port pour la bibliothèque de médias.

Le serveur de médias (Plex) est un collaborateur externe : le domaine ne
consomme que la liste des bibliothèques et les couples (titre, année).
"""

from abc import ABC, abstractmethod

from plexflix.core.entities.media import Library, MediaItem


class IMediaLibrary(ABC):
    """Énumération des bibliothèques et de leurs titres."""

    @abstractmethod
    async def list_libraries(self) -> list[Library]:
        """
        Liste les bibliothèques du serveur.

        Lève :
            MediaLibraryError si le serveur est injoignable ou répond une erreur
        """
        ...

    @abstractmethod
    async def list_items(self, library: Library) -> list[MediaItem]:
        """
        Liste les titres d'une bibliothèque, dans l'ordre du serveur.

        Lève :
            MediaLibraryError si le serveur est injoignable ou répond une erreur
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Libère les ressources réseau."""
        ...
