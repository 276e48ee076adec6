"""Commandes CLI scan et purge : evaluation de la retention et suppression."""

import asyncio
from typing import Annotated, Optional

import typer
from rich.prompt import Confirm
from rich.status import Status

from jellyclean.adapters.cli.display import (
    display_eligible,
    display_log,
    display_report_summary,
)
from jellyclean.adapters.cli.helpers import console, suppress_loguru, with_container
from jellyclean.services.session import (
    CatalogUnavailableError,
    CleanupSession,
    ServiceNotConfiguredError,
)


async def scan_or_exit(session: CleanupSession) -> None:
    """Lance le scan ; affiche une erreur et quitte si le catalogue est indisponible."""
    try:
        with Status("[cyan]Scan de la mediatheque...", console=console):
            await session.scan()
    except ServiceNotConfiguredError as e:
        console.print(f"[red]Erreur: {e}[/red]")
        console.print("[dim]Definir JELLYCLEAN_JELLYFIN_URL et JELLYCLEAN_JELLYFIN_API_KEY[/dim]")
        raise typer.Exit(1)
    except CatalogUnavailableError as e:
        console.print(f"[red]Erreur: Jellyfin injoignable ({e})[/red]")
        raise typer.Exit(1)


def scan() -> None:
    """Liste les elements ayant depasse leur duree de retention."""
    asyncio.run(_scan_async())


@with_container()
async def _scan_async(container) -> None:
    """Implementation async de la commande scan."""
    session = container.cleanup_session()

    with suppress_loguru():
        await scan_or_exit(session)
        policy = session.policy
        console.print(
            f"[dim]Retention : films {policy.movie_days} j, saisons {policy.season_days} j[/dim]"
        )
        display_eligible(session.pool)


def purge(
    only: Annotated[
        Optional[list[str]],
        typer.Option("--only", help="Ne supprimer que cet ID (option repetable)"),
    ] = None,
    skip: Annotated[
        Optional[list[str]],
        typer.Option("--skip", help="Garder cet ID pour cette execution (option repetable)"),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Ne pas demander de confirmation"),
    ] = False,
) -> None:
    """Supprime les elements eligibles via Radarr et Sonarr."""
    asyncio.run(_purge_async(only, skip, yes))


@with_container()
async def _purge_async(
    container,
    only: Optional[list[str]],
    skip: Optional[list[str]],
    yes: bool,
) -> None:
    """Implementation async de la commande purge."""
    session = container.cleanup_session()

    with suppress_loguru():
        await scan_or_exit(session)

        batch = session.select(only=only, skip=skip)
        if not batch:
            console.print("[green]Aucun element a supprimer.[/green]")
            return

        display_eligible(batch, title="Lot de suppression")
        if not yes and not Confirm.ask(
            f"Supprimer ces {len(batch)} element(s) ?", console=console, default=False
        ):
            console.print("[yellow]Suppression annulee.[/yellow]")
            return

        with Status("[cyan]Suppression en cours...", console=console):
            report = await session.delete(batch)

        display_log(report.entries)
        display_report_summary(report, total=len(batch))

        if report.aborted:
            raise typer.Exit(1)

        console.print()
        display_eligible(session.pool, title="Elements eligibles restants")
