"""Commande CLI status : etat des services et derniers ajouts."""

import asyncio

from rich.status import Status

from jellyclean.adapters.cli.display import display_snapshot
from jellyclean.adapters.cli.helpers import console, suppress_loguru, with_container


def status() -> None:
    """Affiche l'etat de Jellyfin, Radarr et Sonarr."""
    asyncio.run(_status_async())


@with_container(requires_db=False)
async def _status_async(container) -> None:
    dashboard = container.dashboard_service()

    with suppress_loguru():
        with Status("[cyan]Interrogation des services...", console=console):
            snapshot = await dashboard.snapshot()
        display_snapshot(snapshot)
