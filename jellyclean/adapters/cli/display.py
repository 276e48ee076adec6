"""
Affichage Rich des resultats : pool eligible, journal, tableau de bord.

Responsabilites:
- Tableau des elements eligibles
- Journal d'execution colore par niveau
- Resume d'un rapport de suppression
- Tableau de bord (etat des services, derniers ajouts, calendrier)
"""

from typing import TYPE_CHECKING, Iterable

from rich.panel import Panel
from rich.table import Table

from jellyclean.adapters.cli.helpers import console
from jellyclean.core.entities.catalog import CatalogEntry, ItemKind
from jellyclean.core.entities.outcome import DeletionReport, LogEntry, LogLevel

if TYPE_CHECKING:
    from jellyclean.core.value_objects.retention import EligibleItem
    from jellyclean.services.dashboard import DashboardSnapshot, ServiceStatus


LEVEL_STYLES = {
    LogLevel.INFO: "white",
    LogLevel.SUCCESS: "green",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "red",
}

STATUS_STYLES = {
    "online": "[green]en ligne[/green]",
    "offline": "[red]hors ligne[/red]",
    "unconfigured": "[dim]non configure[/dim]",
}

KIND_LABELS = {
    ItemKind.MOVIE: "Film",
    ItemKind.SEASON: "Saison",
    ItemKind.SERIES: "Serie",
}


def display_eligible(items: list["EligibleItem"], title: str = "Elements eligibles") -> None:
    """Affiche les elements eligibles sous forme de tableau."""
    if not items:
        console.print("[green]Aucun element eligible a la suppression.[/green]")
        return

    table = Table(title=title, show_header=True)
    table.add_column("ID", style="dim")
    table.add_column("Type", style="cyan")
    table.add_column("Nom")
    table.add_column("Ajoute le")
    table.add_column("Age (j)", justify="right")

    for item in items:
        table.add_row(
            item.id,
            KIND_LABELS.get(item.kind, item.kind.value),
            item.entry.display_name,
            item.entry.created_at.strftime("%Y-%m-%d"),
            f"{item.age_days:.1f}",
        )
    console.print(table)


def display_entries(entries: list[CatalogEntry], title: str) -> None:
    """Affiche des entrees du catalogue (ex: liste d'exclusion)."""
    table = Table(title=title, show_header=True)
    table.add_column("ID", style="dim")
    table.add_column("Type", style="cyan")
    table.add_column("Nom")
    for entry in entries:
        table.add_row(entry.id, KIND_LABELS.get(entry.kind, entry.kind.value), entry.display_name)
    console.print(table)


def display_log(entries: Iterable[LogEntry]) -> None:
    """Affiche les entrees du journal, dans l'ordre de sequence."""
    for entry in sorted(entries, key=lambda e: e.seq):
        style = LEVEL_STYLES[entry.level]
        console.print(f"[{style}]{entry.format()}[/{style}]", highlight=False)


def display_report_summary(report: DeletionReport, total: int) -> None:
    """Affiche le resume d'une execution de suppression."""
    if report.aborted:
        console.print(
            Panel(
                f"[red]Execution interrompue : {report.error}[/red]",
                title="Erreur",
                border_style="red",
            )
        )
        return

    console.print("\n[bold]Resume de la suppression:[/bold]")
    console.print(f"  [green]{report.success_count}[/green]/{total} reussi(s)")
    if report.skipped_count:
        console.print(f"  [yellow]{report.skipped_count}[/yellow] ignore(s)")
    if report.failure_count:
        console.print(f"  [red]{report.failure_count}[/red] en echec")
    if report.cancelled:
        console.print(f"  [yellow]{total - len(report.outcomes)}[/yellow] non traite(s) (annulation)")


def _status_label(status: "ServiceStatus") -> str:
    return STATUS_STYLES.get(status.value, status.value)


def display_snapshot(snapshot: "DashboardSnapshot") -> None:
    """Affiche le tableau de bord."""
    services = Table(title="Services", show_header=True)
    services.add_column("Service", style="cyan")
    services.add_column("Etat")
    services.add_row("Jellyfin", _status_label(snapshot.jellyfin))
    services.add_row("Radarr", _status_label(snapshot.radarr))
    services.add_row("Sonarr", _status_label(snapshot.sonarr))
    console.print(services)

    if snapshot.latest_movies:
        display_entries(snapshot.latest_movies, "Derniers films ajoutes")
    if snapshot.latest_series:
        display_entries(snapshot.latest_series, "Dernieres series ajoutees")

    if snapshot.upcoming:
        table = Table(title="A venir (14 jours)", show_header=True)
        table.add_column("Date", style="dim")
        table.add_column("Serie", style="cyan")
        table.add_column("Episode")
        for episode in snapshot.upcoming:
            date = episode.air_date_utc.strftime("%Y-%m-%d %H:%M") if episode.air_date_utc else "?"
            table.add_row(date, episode.series_title, episode.label)
        console.print(table)
