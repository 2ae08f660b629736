"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Ports client API : Contrats pour le catalogue uNoGS
- ICatalogLookupClient : Appel HTTP authentifié, retourne le corps brut
- SearchFilters : Filtres fixes de la recherche avancée
- CatalogSearchResult : Réponse de l'endpoint de recherche
- CatalogDetail : Réponse de l'endpoint de détail (pays)

Port bibliothèque de médias :
- IMediaLibrary : Énumération des bibliothèques et de leurs titres

Port secrets :
- ISecretStore : Fourniture des identifiants déchiffrés
"""

from plexflix.core.ports.api_clients import (
    CatalogDetail,
    CatalogSearchResult,
    ICatalogLookupClient,
    SearchFilters,
)
from plexflix.core.ports.media_library import IMediaLibrary
from plexflix.core.ports.secrets import ISecretStore

__all__ = [
    # Clients API
    "ICatalogLookupClient",
    "SearchFilters",
    "CatalogSearchResult",
    "CatalogDetail",
    # Bibliothèque de médias
    "IMediaLibrary",
    # Secrets
    "ISecretStore",
]
