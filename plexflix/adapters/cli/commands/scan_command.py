"""
Commande CLI scan : disponibilite Netflix de toute la videotheque Plex.

Codes de sortie:
- 0 : scan termine sans erreur de titre
- 1 : erreur de demarrage (secrets, serveur Plex injoignable)
- 2 : scan termine avec des titres en erreur, ou interrompu par --fail-fast
"""

import asyncio
from typing import Annotated, Optional

import typer
from loguru import logger
from rich.markup import escape
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
)
from rich.table import Table

from plexflix.adapters.cli.helpers import console, suppress_loguru, with_container
from plexflix.adapters.secrets.ejson_store import PLEX_TOKEN, RAPID_API_KEY
from plexflix.core.entities.media import Library
from plexflix.core.errors import PlexFlixError, SetupError
from plexflix.services.reconciliation import ReconciliationResult, ScanReport

EXIT_SETUP_ERROR = 1
EXIT_ITEM_FAILURES = 2


def scan(
    plex_host: Annotated[
        Optional[str],
        typer.Option("--plex-host", help="Nom d'hote du serveur Plex"),
    ] = None,
    plex_port: Annotated[
        Optional[int],
        typer.Option("--plex-port", help="Port du serveur Plex"),
    ] = None,
    region: Annotated[
        Optional[str],
        typer.Option("--region", "-r", help="Code pays a verifier (ex: us, ca, fr)"),
    ] = None,
    concurrency: Annotated[
        Optional[int],
        typer.Option("--concurrency", "-c", min=1, help="Titres verifies en parallele"),
    ] = None,
    fail_fast: Annotated[
        bool,
        typer.Option("--fail-fast", help="Arrete le scan a la premiere erreur de titre"),
    ] = False,
) -> None:
    """Verifie quels titres de la videotheque Plex sont disponibles sur Netflix."""
    asyncio.run(_scan_async(plex_host, plex_port, region, concurrency, fail_fast))


@with_container()
async def _scan_async(
    container,
    plex_host: Optional[str],
    plex_port: Optional[int],
    region: Optional[str],
    concurrency: Optional[int],
    fail_fast: bool,
) -> None:
    """Implementation async de la commande scan."""
    settings = container.config()

    try:
        secrets = await container.secret_store().load()
    except SetupError as e:
        logger.error("getting secrets", error=str(e))
        console.print(f"[red]Secrets indisponibles: {e}[/red]")
        raise typer.Exit(EXIT_SETUP_ERROR)

    host = plex_host or settings.plex_host
    port = plex_port or settings.plex_port
    region_code = (region or settings.region_code).lower()

    plex_client = container.plex_client(
        base_url=f"http://{host}:{port}",
        token=secrets[PLEX_TOKEN],
    )
    unogs_client = container.unogs_client()
    reconciliation = container.reconciliation_service(
        region_code=region_code,
        max_concurrency=concurrency or settings.max_concurrency,
    )
    scan_service = container.library_scan_service(
        media_library=plex_client,
        reconciliation=reconciliation,
    )

    try:
        with suppress_loguru():
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                console=console,
                transient=False,
            ) as progress:
                current_task = None

                def on_library(library: Library, total: int) -> None:
                    nonlocal current_task
                    current_task = progress.add_task(f"[cyan]{library.title}", total=total)

                def on_result(result: ReconciliationResult) -> None:
                    if current_task is not None:
                        progress.advance(current_task)
                    _print_result(progress.console, result)

                report = await scan_service.scan(
                    secrets[RAPID_API_KEY],
                    fail_fast=fail_fast,
                    on_library=on_library,
                    on_result=on_result,
                )
    except SetupError as e:
        logger.error("getting libraries", error=str(e))
        console.print(f"[red]Serveur Plex indisponible: {e}[/red]")
        raise typer.Exit(EXIT_SETUP_ERROR)
    except PlexFlixError as e:
        logger.error("finding on Netflix", error=str(e))
        console.print(f"[red]Scan interrompu: {e}[/red]")
        raise typer.Exit(EXIT_ITEM_FAILURES)
    finally:
        await plex_client.close()
        await unogs_client.close()

    _display_report(report, region_code)

    if report.failures:
        raise typer.Exit(EXIT_ITEM_FAILURES)


def _print_result(out, result: ReconciliationResult) -> None:
    """Affiche une ligne par titre termine pendant la progression."""
    year_str = f" ({result.item.year})" if result.item.year else ""
    title = escape(f"{result.item.title}{year_str}")

    if result.failed:
        out.print(f"  [red]✗[/red] {title} - {escape(str(result.error))}")
    elif result.available:
        out.print(f"  [green]✓[/green] {title}")
    else:
        out.print(f"  [dim]-[/dim] {title}")


def _display_report(report: ScanReport, region_code: str) -> None:
    """Affiche les titres trouves et les titres en erreur."""
    console.print(
        f"\n[bold]Resume:[/bold] {report.checked} titre(s) verifie(s), "
        f"[green]{len(report.matches)}[/green] disponible(s) ({region_code})"
    )

    if report.matches:
        table = Table(title=f"Disponibles sur Netflix ({region_code})")
        table.add_column("Titre", style="cyan")
        table.add_column("Annee", justify="right")
        for result in report.matches:
            table.add_row(escape(result.item.title), str(result.item.year or ""))
        console.print(table)

    if report.failures:
        table = Table(title="Titres en erreur", show_header=True)
        table.add_column("Titre", style="cyan")
        table.add_column("Erreur", style="red")
        for result in report.failures:
            table.add_row(escape(result.item.title), escape(str(result.error)))
        console.print(table)
