"""
Resultats de suppression et entrees du journal d'execution.

Chaque element d'un lot de suppression produit exactement un DeletionOutcome.
Le journal (suite ordonnee de LogEntry) contient ces resultats ainsi que les
marqueurs de cycle de vie (scan demarre, elements trouves, suppression terminee...).
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class OutcomeStatus(str, Enum):
    """Resultat terminal d'un element apres orchestration."""

    SUCCEEDED = "succeeded"
    SKIPPED_UNCONFIGURED = "skipped_unconfigured"
    SKIPPED_NO_EXTERNAL_ID = "skipped_no_external_id"
    SKIPPED_NO_MATCH = "skipped_no_match"
    SKIPPED_NO_SEASON_NUMBER = "skipped_no_season_number"
    PARTIALLY_FAILED = "partially_failed"
    FAILED = "failed"

    @property
    def is_failure(self) -> bool:
        return self in (OutcomeStatus.FAILED, OutcomeStatus.PARTIALLY_FAILED)

    @property
    def is_skip(self) -> bool:
        return self.value.startswith("skipped")


class LogLevel(str, Enum):
    """Niveau d'une entree du journal (aligne sur les niveaux loguru)."""

    INFO = "INFO"
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    ERROR = "ERROR"


class LogEvent(str, Enum):
    """Evenement trace dans le journal d'execution."""

    SCAN_STARTED = "scan_started"
    SCAN_FOUND = "scan_found"
    SCAN_COMPLETED = "scan_completed"
    SCAN_FAILED = "scan_failed"
    ITEM_EXCLUDED = "item_excluded"
    ALL_EXCLUDED = "all_excluded"
    ITEM_UNEXCLUDED = "item_unexcluded"
    DELETION_STARTED = "deletion_started"
    ITEM_OUTCOME = "item_outcome"
    EPISODE_FAILED = "episode_failed"
    DELETION_COMPLETED = "deletion_completed"
    RUN_FAILED = "run_failed"
    RUN_CANCELLED = "run_cancelled"


@dataclass(frozen=True)
class DeletionOutcome:
    """
    Resultat du traitement d'un element du lot.

    Attributes:
        item_id: ID de l'entree du catalogue
        name: Nom affiche de l'entree
        status: Resultat terminal
        detail: Message lisible (erreur, nombre d'episodes supprimes...)
        timestamp: Instant ou le resultat a ete produit
    """

    item_id: str
    name: str
    status: OutcomeStatus
    detail: str
    timestamp: datetime


@dataclass(frozen=True)
class LogEntry:
    """
    Entree du journal d'execution.

    Attributes:
        seq: Numero de sequence strictement croissant (ordre d'affichage)
        timestamp: Instant de l'ajout
        level: Niveau de l'entree
        event: Type d'evenement
        message: Message lisible
        item_id: ID de l'element concerne, le cas echeant
    """

    seq: int
    timestamp: datetime
    level: LogLevel
    event: LogEvent
    message: str
    item_id: Optional[str] = None

    def format(self) -> str:
        """Format d'affichage : "[HH:MM:SS] message"."""
        return f"[{self.timestamp.strftime('%H:%M:%S')}] {self.message}"


@dataclass
class DeletionReport:
    """
    Rapport complet d'une execution de suppression.

    Attributes:
        outcomes: Un resultat par element traite, dans l'ordre de traitement
        entries: Entrees du journal produites pendant l'execution
        aborted: True si une erreur globale (pre-chargement) a interrompu le lot
        cancelled: True si l'appelant a annule l'execution entre deux elements
        error: Message de l'erreur globale, le cas echeant
    """

    outcomes: list[DeletionOutcome] = field(default_factory=list)
    entries: list[LogEntry] = field(default_factory=list)
    aborted: bool = False
    cancelled: bool = False
    error: Optional[str] = None

    @property
    def success_count(self) -> int:
        return sum(1 for o in self.outcomes if o.status == OutcomeStatus.SUCCEEDED)

    @property
    def failure_count(self) -> int:
        return sum(1 for o in self.outcomes if o.status.is_failure)

    @property
    def skipped_count(self) -> int:
        return sum(1 for o in self.outcomes if o.status.is_skip)

    @property
    def rescan_required(self) -> bool:
        """Une execution modifie l'etat externe : le pool doit toujours etre re-evalue."""
        return True
