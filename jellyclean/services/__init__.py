"""
Services metier de JellyClean.

- retention : Evaluation de la politique de retention
- resolver : Correspondance catalogue / Radarr / Sonarr
- deletion : Orchestration des suppressions
- exclusions : Liste d'exclusion
- session : Surface de commande (scan, exclusions, suppressions)
- dashboard : Etat des services et derniers ajouts
"""

from jellyclean.services.dashboard import DashboardService, DashboardSnapshot, ServiceStatus
from jellyclean.services.deletion import DeletionOrchestrator
from jellyclean.services.exclusions import ExclusionService
from jellyclean.services.resolver import (
    CorrelationError,
    FirstDigitRunSeasonParser,
    MissingExternalIdError,
    MissingSeasonNumberError,
    NoMatchError,
)
from jellyclean.services.retention import evaluate
from jellyclean.services.run_log import RunLog
from jellyclean.services.session import (
    CatalogUnavailableError,
    CleanupSession,
    ServiceNotConfiguredError,
)

__all__ = [
    "evaluate",
    "CorrelationError",
    "MissingExternalIdError",
    "MissingSeasonNumberError",
    "NoMatchError",
    "FirstDigitRunSeasonParser",
    "RunLog",
    "DeletionOrchestrator",
    "ExclusionService",
    "CleanupSession",
    "CatalogUnavailableError",
    "ServiceNotConfiguredError",
    "DashboardService",
    "DashboardSnapshot",
    "ServiceStatus",
]
