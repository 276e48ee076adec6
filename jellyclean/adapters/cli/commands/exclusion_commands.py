"""Commandes CLI de gestion de la liste d'exclusion."""

import asyncio
from typing import Annotated

import typer

from jellyclean.adapters.cli.commands.cleanup_commands import scan_or_exit
from jellyclean.adapters.cli.display import display_entries
from jellyclean.adapters.cli.helpers import console, suppress_loguru, with_container


# Application Typer pour les commandes d'exclusion
exclusions_app = typer.Typer(
    name="exclusions",
    help="Gestion de la liste d'exclusion (elements jamais supprimes)",
    rich_markup_mode="rich",
)


@exclusions_app.command("list")
def exclusions_list() -> None:
    """Affiche les elements exclus."""
    asyncio.run(_exclusions_list_async())


@with_container()
async def _exclusions_list_async(container) -> None:
    service = container.exclusion_service()
    ids = service.excluded_ids()

    if not ids:
        console.print("[dim]La liste d'exclusion est vide.[/dim]")
        return

    with suppress_loguru():
        entries = await service.list_excluded_entries()
        display_entries(entries, f"Elements exclus ({len(ids)})")

        # Elements exclus qui n'existent plus dans le catalogue
        unknown = sorted(ids - {entry.id for entry in entries})
        if unknown:
            console.print(f"[yellow]{len(unknown)} ID(s) absent(s) du catalogue :[/yellow]")
            for item_id in unknown:
                console.print(f"  [dim]{item_id}[/dim]")


@exclusions_app.command("add")
def exclusions_add(
    item_ids: Annotated[list[str], typer.Argument(help="IDs Jellyfin a exclure")],
) -> None:
    """Exclut un ou plusieurs elements de la suppression."""
    asyncio.run(_exclusions_add_async(item_ids))


@with_container()
async def _exclusions_add_async(container, item_ids: list[str]) -> None:
    session = container.cleanup_session()
    for item_id in item_ids:
        session.exclude(item_id)
    console.print(f"[green]{len(item_ids)} element(s) exclu(s).[/green]")


@exclusions_app.command("remove")
def exclusions_remove(
    item_ids: Annotated[list[str], typer.Argument(help="IDs Jellyfin a retirer")],
) -> None:
    """Retire un ou plusieurs elements de la liste d'exclusion."""
    asyncio.run(_exclusions_remove_async(item_ids))


@with_container()
async def _exclusions_remove_async(container, item_ids: list[str]) -> None:
    session = container.cleanup_session()
    for item_id in item_ids:
        session.unexclude(item_id)
    console.print(f"[green]{len(item_ids)} element(s) retire(s) de la liste d'exclusion.[/green]")


@exclusions_app.command("add-eligible")
def exclusions_add_eligible() -> None:
    """Exclut tous les elements actuellement eligibles."""
    asyncio.run(_exclusions_add_eligible_async())


@with_container()
async def _exclusions_add_eligible_async(container) -> None:
    session = container.cleanup_session()

    with suppress_loguru():
        await scan_or_exit(session)
        count = session.exclude_all()

    if count:
        console.print(f"[green]{count} element(s) eligible(s) exclu(s).[/green]")
    else:
        console.print("[dim]Aucun element eligible a exclure.[/dim]")
