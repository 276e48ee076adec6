"""
Session de nettoyage : scan, exclusions et suppressions.

CleanupSession est la surface de commande utilisee par la CLI. Elle detient
le pool d'elements eligibles du dernier scan et le journal d'execution, et
delegue tout le reste aux services (evaluation, exclusions, orchestration).
"""

import asyncio
from datetime import datetime
from typing import Iterable, Optional, Sequence

from loguru import logger

from jellyclean.core.entities.catalog import ItemKind
from jellyclean.core.entities.outcome import DeletionReport, LogEvent
from jellyclean.core.ports.api_clients import ICatalogClient
from jellyclean.core.value_objects.retention import EligibleItem, RetentionPolicy
from jellyclean.services.deletion import DeletionOrchestrator, describe_error
from jellyclean.services.exclusions import ExclusionService
from jellyclean.services.retention import evaluate
from jellyclean.services.run_log import RunLog

SCANNED_KINDS = (ItemKind.MOVIE, ItemKind.SEASON)


class ServiceNotConfiguredError(Exception):
    """Le catalogue Jellyfin n'est pas configure : aucun scan possible."""


class CatalogUnavailableError(Exception):
    """Le catalogue Jellyfin est injoignable ou a renvoye une erreur."""


class CleanupSession:
    """
    Session de nettoyage.

    Le pool n'est modifie que par scan() (remplacement complet) et par les
    exclusions (retrait immediat, sans rescan).
    """

    def __init__(
        self,
        catalog: Optional[ICatalogClient],
        exclusions: ExclusionService,
        orchestrator: DeletionOrchestrator,
        policy: RetentionPolicy,
        log: Optional[RunLog] = None,
    ) -> None:
        self._catalog = catalog
        self._exclusions = exclusions
        self._orchestrator = orchestrator
        self._policy = policy
        self._log = log or RunLog()
        self._pool: list[EligibleItem] = []

    @property
    def log(self) -> RunLog:
        return self._log

    @property
    def pool(self) -> list[EligibleItem]:
        """Elements eligibles du dernier scan (copie)."""
        return list(self._pool)

    @property
    def policy(self) -> RetentionPolicy:
        return self._policy

    async def scan(self, now: Optional[datetime] = None) -> list[EligibleItem]:
        """
        Recupere le catalogue et recalcule le pool d'elements eligibles.

        Raises:
            ServiceNotConfiguredError: Si Jellyfin n'est pas configure
            CatalogUnavailableError: Si la recuperation du catalogue echoue
        """
        if self._catalog is None:
            raise ServiceNotConfiguredError("Jellyfin n'est pas configure")

        self._log.info(LogEvent.SCAN_STARTED, "Scan de la mediatheque...")
        try:
            entries = await self._catalog.list_entries(SCANNED_KINDS)
        except Exception as e:
            self._log.error(LogEvent.SCAN_FAILED, f"Echec du scan : {describe_error(e)}")
            raise CatalogUnavailableError(describe_error(e)) from e

        self._log.info(LogEvent.SCAN_FOUND, f"{len(entries)} element(s) dans le catalogue")
        self._pool = evaluate(entries, self._exclusions.excluded_ids(), self._policy, now)
        self._log.info(
            LogEvent.SCAN_COMPLETED,
            f"Scan termine : {len(self._pool)} element(s) eligible(s) a la suppression",
        )
        return self.pool

    def select(
        self,
        only: Optional[Iterable[str]] = None,
        skip: Optional[Iterable[str]] = None,
    ) -> list[EligibleItem]:
        """
        Construit un lot de suppression a partir du pool.

        Args:
            only: Si fourni, ne garder que ces identifiants
            skip: Identifiants a retirer du lot
        """
        only_ids = set(only) if only else None
        skip_ids = set(skip or ())
        return [
            item
            for item in self._pool
            if (only_ids is None or item.id in only_ids) and item.id not in skip_ids
        ]

    def _pool_name(self, item_id: str) -> str:
        for item in self._pool:
            if item.id == item_id:
                return item.entry.display_name
        return item_id

    def exclude(self, item_id: str) -> None:
        """Exclut un element et le retire immediatement du pool."""
        name = self._pool_name(item_id)
        self._exclusions.exclude(item_id)
        self._pool = [item for item in self._pool if item.id != item_id]
        self._log.info(LogEvent.ITEM_EXCLUDED, f"{name} exclu de la suppression", item_id=item_id)

    def exclude_all(self, item_ids: Optional[Iterable[str]] = None) -> int:
        """
        Exclut plusieurs elements (par defaut tout le pool) en une ecriture.

        Returns:
            Nombre d'elements retires du pool
        """
        ids = set(item_ids) if item_ids is not None else {item.id for item in self._pool}
        if not ids:
            return 0

        self._exclusions.exclude_all(ids)
        before = len(self._pool)
        self._pool = [item for item in self._pool if item.id not in ids]
        self._log.info(LogEvent.ALL_EXCLUDED, f"{len(ids)} element(s) exclu(s) de la suppression")
        return before - len(self._pool)

    def unexclude(self, item_id: str) -> None:
        """Retire un element de la liste d'exclusion (visible au prochain scan)."""
        self._exclusions.unexclude(item_id)
        self._log.info(
            LogEvent.ITEM_UNEXCLUDED,
            f"{item_id} n'est plus exclu de la suppression",
            item_id=item_id,
        )

    async def delete(
        self,
        batch: Sequence[EligibleItem],
        cancel_event: Optional[asyncio.Event] = None,
    ) -> DeletionReport:
        """
        Supprime un lot puis relance le scan.

        Un echec du scan de fin est journalise sans etre propage : le rapport
        de suppression est toujours retourne.
        """
        report = await self._orchestrator.run(batch, self._log, cancel_event)

        if report.rescan_required:
            try:
                await self.scan()
            except Exception as e:
                logger.warning(f"Scan apres suppression impossible : {describe_error(e)}")
        return report
