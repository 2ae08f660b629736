"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe PLEXFLIX_,
et peut optionnellement être fournie via un fichier .env.

La clé RapidAPI et le jeton Plex sont optionnels ici : s'ils ne sont pas fournis,
ils sont lus depuis le fichier de secrets chiffré par ejson.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from plexflix.core.ports.api_clients import SearchFilters

# Trouver le fichier .env à la racine du projet (parent de plexflix/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe PLEXFLIX_.
    Exemple : PLEXFLIX_REGION_CODE=ca

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="PLEXFLIX_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Serveur Plex
    plex_host: str = Field(default="localhost")
    plex_port: int = Field(default=32400, ge=1, le=65535)

    # Identifiants (OPTIONNELS - sinon lus depuis le fichier ejson)
    plex_token: Optional[str] = Field(default=None)
    rapid_api_key: Optional[str] = Field(default=None)

    # Secrets chiffrés
    secrets_file: Path = Field(default=Path("secrets.json"))
    ejson_keydir: Path = Field(default=Path("/opt/ejson/keys"))
    ejson_binary: str = Field(default="ejson")

    # Catalogue uNoGS
    unogs_base_url: str = Field(default="https://unogs-unogs-v1.p.rapidapi.com/aaapi.cgi")
    region_code: str = Field(default="us", min_length=2, max_length=2)
    search_rating_floor: str = Field(default="gt100")
    search_availability_flag: str = Field(default="downloadable")
    search_order_by: str = Field(default="Relevance")
    search_page: int = Field(default=1, ge=1)
    search_semantics: str = Field(default="and")

    # Traitement
    max_concurrency: int = Field(default=1, ge=1)
    http_timeout: float = Field(default=30.0, gt=0)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/plexflix.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("secrets_file", "ejson_keydir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @field_validator("region_code")
    @classmethod
    def lower_region(cls, v: str) -> str:
        """Les codes pays du catalogue sont en minuscules."""
        return v.lower()

    @property
    def plex_url(self) -> str:
        """URL de base du serveur Plex."""
        return f"http://{self.plex_host}:{self.plex_port}"

    @property
    def search_filters(self) -> SearchFilters:
        """Filtres fixes de la recherche catalogue."""
        return SearchFilters(
            rating_floor=self.search_rating_floor,
            availability_flag=self.search_availability_flag,
            order_by=self.search_order_by,
            page=self.search_page,
            semantics=self.search_semantics,
        )
