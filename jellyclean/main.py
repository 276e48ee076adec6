"""
Point d'entrée CLI de JellyClean.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from typing import Annotated, Optional

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import exclusions_app, purge, scan, status
from .config import Settings
from .container import Container
from .logging_config import configure_logging, verbosity_to_level

app = typer.Typer(
    name="jellyclean",
    help="Nettoyage de la médiathèque Jellyfin selon une durée de rétention",
)
container = Container()


def _configure(verbose: int, quiet: bool) -> None:
    settings = container.config()
    configure_logging(
        log_level=verbosity_to_level(verbose, quiet, default=settings.log_level),
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Augmenter la verbosite (-v, -vv)"
        ),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """JellyClean - Suppression automatique des médias anciens."""
    if verbose or quiet:
        _configure(verbose, quiet)


# Commandes de nettoyage
app.command()(scan)
app.command()(purge)
app.command()(status)

# Monter exclusions_app comme sous-commande
app.add_typer(exclusions_app, name="exclusions")


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


def _mask(secret: Optional[str]) -> str:
    if not secret:
        return "non définie"
    return f"{secret[:4]}****" if len(secret) > 8 else "****"


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    logger.info("Configuration JellyClean")
    typer.echo(f"Jellyfin : {config.jellyfin_url or 'non configuré'} (clé {_mask(config.jellyfin_api_key)})")
    typer.echo(f"Radarr : {config.radarr_url or 'non configuré'} (clé {_mask(config.radarr_api_key)})")
    typer.echo(f"Sonarr : {config.sonarr_url or 'non configuré'} (clé {_mask(config.sonarr_api_key)})")
    typer.echo(f"Rétention films : {config.movie_retention_days} jours")
    typer.echo(f"Rétention saisons : {config.season_retention_days} jours")
    typer.echo(f"Base de données : {config.database_url}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"JellyClean v{__version__}")


def main() -> None:
    """Point d'entrée de l'application."""
    # Charge la configuration et configure le logging
    _configure(verbose=0, quiet=False)

    logger.info("Démarrage de JellyClean", version=__version__)

    # Lance la CLI
    app()


if __name__ == "__main__":
    main()
