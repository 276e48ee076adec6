"""
Journal d'execution (scan, exclusions, suppressions).

Le journal est une suite ordonnee et append-only de LogEntry, affichee a
l'operateur. Chaque entree est aussi envoyee a loguru au niveau
correspondant, ce qui la conserve dans le fichier de log JSON.
"""

import itertools
import threading
from datetime import datetime, timezone
from typing import Optional

from loguru import logger

from jellyclean.core.entities.outcome import LogEntry, LogEvent, LogLevel, OutcomeStatus

_STATUS_LEVELS = {
    OutcomeStatus.SUCCEEDED: LogLevel.SUCCESS,
    OutcomeStatus.SKIPPED_NO_MATCH: LogLevel.INFO,
    OutcomeStatus.SKIPPED_UNCONFIGURED: LogLevel.WARNING,
    OutcomeStatus.SKIPPED_NO_EXTERNAL_ID: LogLevel.WARNING,
    OutcomeStatus.SKIPPED_NO_SEASON_NUMBER: LogLevel.WARNING,
    OutcomeStatus.PARTIALLY_FAILED: LogLevel.ERROR,
    OutcomeStatus.FAILED: LogLevel.ERROR,
}


def level_for(status: OutcomeStatus) -> LogLevel:
    """Niveau de journal d'un resultat de suppression."""
    return _STATUS_LEVELS[status]


class RunLog:
    """
    Journal append-only avec numeros de sequence strictement croissants.

    L'ajout est protege par un verrou : l'ordre des numeros de sequence
    reste stable meme si plusieurs taches ecrivent dans le journal.
    """

    def __init__(self) -> None:
        self._entries: list[LogEntry] = []
        self._lock = threading.Lock()
        self._seq = itertools.count(1)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> list[LogEntry]:
        """Copie des entrees, dans l'ordre d'ajout."""
        with self._lock:
            return list(self._entries)

    def since(self, position: int) -> list[LogEntry]:
        """Entrees ajoutees apres la position donnee (voir len())."""
        with self._lock:
            return self._entries[position:]

    def append(
        self,
        level: LogLevel,
        event: LogEvent,
        message: str,
        item_id: Optional[str] = None,
    ) -> LogEntry:
        """Ajoute une entree au journal et la transmet a loguru."""
        with self._lock:
            entry = LogEntry(
                seq=next(self._seq),
                timestamp=datetime.now(timezone.utc),
                level=level,
                event=event,
                message=message,
                item_id=item_id,
            )
            self._entries.append(entry)

        logger.bind(event=event.value, item_id=item_id).log(level.value, message)
        return entry

    def info(self, event: LogEvent, message: str, item_id: Optional[str] = None) -> LogEntry:
        return self.append(LogLevel.INFO, event, message, item_id)

    def success(self, event: LogEvent, message: str, item_id: Optional[str] = None) -> LogEntry:
        return self.append(LogLevel.SUCCESS, event, message, item_id)

    def warning(self, event: LogEvent, message: str, item_id: Optional[str] = None) -> LogEntry:
        return self.append(LogLevel.WARNING, event, message, item_id)

    def error(self, event: LogEvent, message: str, item_id: Optional[str] = None) -> LogEntry:
        return self.append(LogLevel.ERROR, event, message, item_id)
