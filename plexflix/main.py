"""
Point d'entrée CLI de PlexFlix.

Configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import scan
from .config import Settings
from .container import Container
from .logging_config import configure_logging

app = typer.Typer(
    name="plexflix",
    help="Disponibilité Netflix d'une vidéothèque Plex",
)
container = Container()


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Logs de debug en console"
        ),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """PlexFlix - Quels films de ma vidéothèque sont sur Netflix ?"""
    console_level = None
    if quiet:
        console_level = "ERROR"
    elif verbose:
        console_level = "DEBUG"

    configure_logging(get_config(), console_level=console_level)
    logger.debug("Démarrage de PlexFlix", version=__version__)


app.command()(scan)


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    logger.info("Configuration PlexFlix")
    typer.echo(f"Serveur Plex : {config.plex_url}")
    typer.echo(f"Jeton Plex : {'configuré' if config.plex_token else 'depuis ' + str(config.secrets_file)}")
    typer.echo(f"Clé RapidAPI : {'configurée' if config.rapid_api_key else 'depuis ' + str(config.secrets_file)}")
    typer.echo(f"Catalogue : {config.unogs_base_url}")
    typer.echo(f"Région : {config.region_code}")
    typer.echo(f"Parallélisme : {config.max_concurrency}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"PlexFlix v{__version__}")


def main() -> None:
    """Point d'entrée de l'application."""
    app()


if __name__ == "__main__":
    main()
