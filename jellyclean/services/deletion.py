"""
Orchestration des suppressions Radarr / Sonarr.

DeletionOrchestrator traite un lot d'elements eligibles, un element a la
fois, et produit exactement un DeletionOutcome par element traite. L'echec
d'un element n'interrompt jamais le lot : seule une erreur pendant le
pre-chargement des enregistrements (erreur globale) arrete l'execution.

Deroulement d'une execution :
1. Pre-chargement (en parallele) : films Radarr, series Sonarr, et series
   parentes Jellyfin des saisons du lot (pour obtenir leur ID TVDB)
2. Traitement sequentiel des elements (film -> Radarr, saison -> Sonarr)
3. Marqueur de fin avec le nombre de succes

L'orchestrateur ne modifie ni la liste d'exclusion ni le pool d'elements
eligibles : l'appelant relance le scan apres l'execution.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Sequence

from loguru import logger

from jellyclean.core.entities.acquisition import (
    MovieRecord,
    SeriesRecord,
    normalize_external_id,
)
from jellyclean.core.entities.catalog import CatalogEntry, ItemKind
from jellyclean.core.entities.outcome import (
    DeletionOutcome,
    DeletionReport,
    LogEvent,
    OutcomeStatus,
)
from jellyclean.core.ports.api_clients import (
    ICatalogClient,
    IMovieManagerClient,
    ISeriesManagerClient,
)
from jellyclean.core.value_objects.retention import EligibleItem
from jellyclean.services.resolver import (
    SERIES_PROVIDER,
    CorrelationError,
    FirstDigitRunSeasonParser,
    MissingExternalIdError,
    MissingSeasonNumberError,
    NoMatchError,
    SeasonNumberParser,
    resolve_movie,
    resolve_season,
)
from jellyclean.services.run_log import RunLog, level_for

_CORRELATION_STATUSES = {
    MissingExternalIdError: OutcomeStatus.SKIPPED_NO_EXTERNAL_ID,
    MissingSeasonNumberError: OutcomeStatus.SKIPPED_NO_SEASON_NUMBER,
    NoMatchError: OutcomeStatus.SKIPPED_NO_MATCH,
}


def describe_error(error: BaseException) -> str:
    """Message lisible d'une exception (nom de la classe si le message est vide)."""
    return str(error) or type(error).__name__


@dataclass
class PrefetchedRecords:
    """Enregistrements charges une fois par execution."""

    movies: list[MovieRecord] = field(default_factory=list)
    series: list[SeriesRecord] = field(default_factory=list)
    series_tvdb_lookup: dict[str, Optional[str]] = field(default_factory=dict)


class DeletionOrchestrator:
    """
    Orchestrateur des suppressions.

    Un gestionnaire absent (None) est considere comme non configure : les
    elements qui en dependent sont ignores (SKIPPED_UNCONFIGURED), sans erreur.
    """

    def __init__(
        self,
        catalog: Optional[ICatalogClient],
        movie_client: Optional[IMovieManagerClient] = None,
        series_client: Optional[ISeriesManagerClient] = None,
        season_parser: Optional[SeasonNumberParser] = None,
    ) -> None:
        """
        Initialise l'orchestrateur.

        Args:
            catalog: Client du catalogue (series parentes des saisons)
            movie_client: Client Radarr, None si non configure
            series_client: Client Sonarr, None si non configure
            season_parser: Strategie d'extraction du numero de saison
        """
        self._catalog = catalog
        self._movie_client = movie_client
        self._series_client = series_client
        self._season_parser = season_parser or FirstDigitRunSeasonParser()

    async def run(
        self,
        batch: Sequence[EligibleItem],
        log: RunLog,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> DeletionReport:
        """
        Execute la suppression d'un lot.

        Args:
            batch: Elements a supprimer (sous-ensemble choisi du pool eligible)
            log: Journal d'execution ou ajouter les entrees
            cancel_event: Si positionne, l'execution s'arrete avant l'element suivant

        Returns:
            DeletionReport avec un resultat par element traite
        """
        start = len(log)
        report = DeletionReport()
        log.info(LogEvent.DELETION_STARTED, f"Suppression de {len(batch)} element(s)")

        try:
            records = await self._prefetch(batch)
        except Exception as e:
            report.aborted = True
            report.error = describe_error(e)
            log.error(LogEvent.RUN_FAILED, f"Echec du chargement des enregistrements : {report.error}")
            report.entries = log.since(start)
            return report

        for item in batch:
            if cancel_event is not None and cancel_event.is_set():
                report.cancelled = True
                log.warning(
                    LogEvent.RUN_CANCELLED,
                    f"Execution annulee, {len(batch) - len(report.outcomes)} element(s) non traite(s)",
                )
                break

            outcome = await self._process(item, records, log)
            report.outcomes.append(outcome)
            log.append(
                level_for(outcome.status),
                LogEvent.ITEM_OUTCOME,
                f"{outcome.name} : {outcome.detail}",
                item_id=outcome.item_id,
            )

        log.info(
            LogEvent.DELETION_COMPLETED,
            f"Suppression terminee : {report.success_count}/{len(batch)} reussi(s)",
        )
        report.entries = log.since(start)
        return report

    async def _prefetch(self, batch: Sequence[EligibleItem]) -> PrefetchedRecords:
        """
        Charge les enregistrements necessaires au lot.

        Seuls les gestionnaires configures et concernes par le lot sont
        interroges. Les appels visent des services differents et sont lances
        en parallele.
        """
        has_movies = any(item.kind == ItemKind.MOVIE for item in batch)
        season_series_ids = [
            item.entry.series_id
            for item in batch
            if item.kind == ItemKind.SEASON and item.entry.series_id
        ]

        async def fetch_movies() -> list[MovieRecord]:
            if self._movie_client is None or not has_movies:
                return []
            return await self._movie_client.list_movies()

        async def fetch_series() -> list[SeriesRecord]:
            if self._series_client is None or not season_series_ids:
                return []
            return await self._series_client.list_series()

        async def fetch_parents() -> list[CatalogEntry]:
            if self._catalog is None or self._series_client is None or not season_series_ids:
                return []
            return await self._catalog.get_entries_by_ids(season_series_ids)

        movies, series, parents = await asyncio.gather(
            fetch_movies(), fetch_series(), fetch_parents()
        )
        logger.debug(
            f"Pre-chargement : {len(movies)} films, {len(series)} series, "
            f"{len(parents)} series parentes"
        )
        return PrefetchedRecords(
            movies=movies,
            series=series,
            series_tvdb_lookup={
                parent.id: normalize_external_id(parent.provider_id(SERIES_PROVIDER))
                for parent in parents
            },
        )

    async def _process(
        self,
        item: EligibleItem,
        records: PrefetchedRecords,
        log: RunLog,
    ) -> DeletionOutcome:
        """Traite un element ; toute erreur devient un resultat FAILED."""
        entry = item.entry
        try:
            if entry.kind == ItemKind.MOVIE:
                status, detail = await self._delete_movie(entry, records)
            elif entry.kind == ItemKind.SEASON:
                status, detail = await self._delete_season(entry, records, log)
            else:
                status, detail = OutcomeStatus.FAILED, f"Type non supporte : {entry.kind.value}"
        except CorrelationError as e:
            status = _CORRELATION_STATUSES.get(type(e), OutcomeStatus.SKIPPED_NO_MATCH)
            detail = str(e)
        except Exception as e:
            logger.debug(f"Echec de la suppression de {entry.display_name}: {e!r}")
            status, detail = OutcomeStatus.FAILED, describe_error(e)

        return DeletionOutcome(
            item_id=entry.id,
            name=entry.display_name,
            status=status,
            detail=detail,
            timestamp=datetime.now(timezone.utc),
        )

    async def _delete_movie(
        self,
        entry: CatalogEntry,
        records: PrefetchedRecords,
    ) -> tuple[OutcomeStatus, str]:
        if self._movie_client is None:
            return OutcomeStatus.SKIPPED_UNCONFIGURED, "Radarr non configure"

        movie = resolve_movie(entry, records.movies)
        await self._movie_client.delete_movie(movie.id)
        return OutcomeStatus.SUCCEEDED, f"Film supprime de Radarr (id {movie.id})"

    async def _delete_season(
        self,
        entry: CatalogEntry,
        records: PrefetchedRecords,
        log: RunLog,
    ) -> tuple[OutcomeStatus, str]:
        if self._series_client is None:
            return OutcomeStatus.SKIPPED_UNCONFIGURED, "Sonarr non configure"

        season_number, series = resolve_season(
            entry, records.series_tvdb_lookup, records.series, self._season_parser
        )
        episodes = await self._series_client.list_episodes(series.id)
        targets = [
            episode
            for episode in episodes
            if episode.season_number == season_number and episode.has_file
        ]
        if not targets:
            return OutcomeStatus.SUCCEEDED, f"Aucun fichier restant pour la saison {season_number}"

        # Chaque fichier est supprime independamment des autres
        failures = 0
        for episode in targets:
            try:
                await self._series_client.delete_episode_file(episode.episode_file_id)
            except Exception as e:
                failures += 1
                log.error(
                    LogEvent.EPISODE_FAILED,
                    f"{entry.display_name} : echec de l'episode "
                    f"S{episode.season_number:02d}E{episode.episode_number:02d} : {describe_error(e)}",
                    item_id=entry.id,
                )

        if failures:
            return (
                OutcomeStatus.PARTIALLY_FAILED,
                f"{failures}/{len(targets)} fichier(s) d'episode en echec",
            )
        return OutcomeStatus.SUCCEEDED, f"{len(targets)} fichier(s) d'episode supprime(s)"
