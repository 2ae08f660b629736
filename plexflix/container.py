"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI: configuration,
clients HTTP (uNoGS, Plex), magasin de secrets et services de reconciliation.
"""

from dependency_injector import containers, providers

from .adapters.api.unogs_client import UnogsClient
from .adapters.plex.plex_client import PlexLibraryClient
from .adapters.secrets.ejson_store import PLEX_TOKEN, RAPID_API_KEY, EjsonSecretStore
from .config import Settings
from .services.availability_checker import AvailabilityChecker
from .services.identifier_resolver import IdentifierResolver
from .services.library_scan import LibraryScanService
from .services.reconciliation import ReconciliationService


def _secret_overrides(settings: Settings) -> dict[str, str | None]:
    """Identifiants deja fournis par la configuration (prioritaires sur ejson)."""
    return {
        RAPID_API_KEY: settings.rapid_api_key,
        PLEX_TOKEN: settings.plex_token,
    }


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        secrets = await container.secret_store().load()
        plex = container.plex_client(token=secrets["PLEX_TOKEN"])
        scan = container.library_scan_service(media_library=plex)
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Secrets - overrides depuis la configuration
    secret_store = providers.Singleton(
        EjsonSecretStore,
        secrets_file=config.provided.secrets_file,
        keydir=config.provided.ejson_keydir,
        binary=config.provided.ejson_binary,
        overrides=providers.Callable(_secret_overrides, config),
    )

    # Client uNoGS - Singleton, un seul pool de connexions pour tout le scan
    unogs_client = providers.Singleton(
        UnogsClient,
        timeout=config.provided.http_timeout,
    )

    # Client Plex - Factory car le jeton vient des secrets
    # Utiliser: container.plex_client(token=...)
    plex_client = providers.Factory(
        PlexLibraryClient,
        base_url=config.provided.plex_url,
        timeout=config.provided.http_timeout,
    )

    # Services du pipeline (stateless - Singletons)
    identifier_resolver = providers.Singleton(
        IdentifierResolver,
        lookup_client=unogs_client,
        filters=config.provided.search_filters,
        base_url=config.provided.unogs_base_url,
    )

    availability_checker = providers.Singleton(
        AvailabilityChecker,
        lookup_client=unogs_client,
        base_url=config.provided.unogs_base_url,
    )

    # Region et parallelisme surchargeables depuis la CLI
    reconciliation_service = providers.Factory(
        ReconciliationService,
        resolver=identifier_resolver,
        checker=availability_checker,
        region_code=config.provided.region_code,
        max_concurrency=config.provided.max_concurrency,
    )

    # Service de scan - Factory car depend du client Plex
    # Utiliser: container.library_scan_service(media_library=plex)
    library_scan_service = providers.Factory(
        LibraryScanService,
        reconciliation=reconciliation_service,
    )
