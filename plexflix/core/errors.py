"""
Exceptions de PlexFlix.

Hierarchie:
- CatalogError : erreurs a la frontiere HTTP/JSON du catalogue uNoGS
- IdentifierResolutionError : echec de resolution d'un identifiant Netflix
- SetupError : erreurs fatales de demarrage (secrets, serveur Plex)

Chaque couche ajoute un seul niveau de contexte via le chainage
d'exceptions (raise ... from exc), l'erreur d'origine reste dans __cause__.
"""


class PlexFlixError(Exception):
    """Exception de base de l'application."""


class CatalogError(PlexFlixError):
    """Erreur lors d'un appel au catalogue uNoGS."""


class RequestBuildError(CatalogError):
    """L'URL ne peut pas etre transformee en requete HTTP valide."""


class TransportError(CatalogError):
    """L'appel reseau a echoue (connexion, timeout, DNS, TLS)."""


class BodyReadError(CatalogError):
    """Le corps de la reponse n'a pas pu etre lu entierement."""


class MalformedResponseError(CatalogError):
    """
    La reponse du catalogue n'a pas la forme JSON attendue.

    Attributes:
        body: Corps brut de la reponse, conserve pour le diagnostic
    """

    def __init__(self, body: bytes) -> None:
        self.body = body
        text = body.decode("utf-8", errors="replace")
        super().__init__(f"unmarshaling netflix API response: {text}")


class IdentifierResolutionError(PlexFlixError):
    """La recherche de l'identifiant Netflix d'un titre a echoue."""

    def __init__(self, cause: Exception) -> None:
        super().__init__(f"finding Netflix ID: {cause}")


class SetupError(PlexFlixError):
    """Erreur fatale empechant le demarrage d'un scan."""


class SecretsError(SetupError):
    """Les secrets n'ont pas pu etre dechiffres ou lus."""


class MediaLibraryError(SetupError):
    """Le serveur de medias est injoignable ou a repondu une erreur."""
