"""
Entités du domaine.

- catalog : Entrées du catalogue Jellyfin (CatalogEntry, ItemKind)
- acquisition : Enregistrements Radarr/Sonarr
- outcome : Resultats de suppression et journal d'execution
"""

from jellyclean.core.entities.acquisition import (
    EpisodeRecord,
    MovieRecord,
    SeriesRecord,
    UpcomingEpisode,
    normalize_external_id,
)
from jellyclean.core.entities.catalog import CatalogEntry, ItemKind
from jellyclean.core.entities.outcome import (
    DeletionOutcome,
    DeletionReport,
    LogEntry,
    LogEvent,
    LogLevel,
    OutcomeStatus,
)

__all__ = [
    "CatalogEntry",
    "ItemKind",
    "MovieRecord",
    "SeriesRecord",
    "EpisodeRecord",
    "UpcomingEpisode",
    "normalize_external_id",
    "DeletionOutcome",
    "DeletionReport",
    "LogEntry",
    "LogEvent",
    "LogLevel",
    "OutcomeStatus",
]
