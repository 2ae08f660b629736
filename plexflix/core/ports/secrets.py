"""
Interface port pour le magasin de secrets.
"""

from abc import ABC, abstractmethod


class ISecretStore(ABC):
    """Fournit les identifiants nommés (clé RapidAPI, jeton Plex) en clair."""

    @abstractmethod
    async def load(self) -> dict[str, str]:
        """
        Retourne le dictionnaire des secrets déchiffrés.

        Lève :
            SecretsError si les secrets ne peuvent pas être obtenus
        """
        ...
