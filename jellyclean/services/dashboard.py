"""
Tableau de bord : etat des services et derniers ajouts.

Chaque partie du tableau de bord est independante : l'echec d'un service
degrade uniquement sa partie.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional, Union

from loguru import logger

from jellyclean.core.entities.acquisition import UpcomingEpisode
from jellyclean.core.entities.catalog import CatalogEntry, ItemKind
from jellyclean.core.ports.api_clients import (
    ICatalogClient,
    IMovieManagerClient,
    ISeriesManagerClient,
)

LATEST_LIMIT = 10
UPCOMING_DAYS = 14


class ServiceStatus(str, Enum):
    ONLINE = "online"
    OFFLINE = "offline"
    UNCONFIGURED = "unconfigured"


@dataclass
class DashboardSnapshot:
    """Etat du tableau de bord a un instant donne."""

    jellyfin: ServiceStatus
    radarr: ServiceStatus
    sonarr: ServiceStatus
    latest_movies: list[CatalogEntry] = field(default_factory=list)
    latest_series: list[CatalogEntry] = field(default_factory=list)
    upcoming: list[UpcomingEpisode] = field(default_factory=list)
    image_urls: dict[str, str] = field(default_factory=dict)


class DashboardService:
    """Service du tableau de bord."""

    def __init__(
        self,
        catalog: Optional[ICatalogClient],
        movie_client: Optional[IMovieManagerClient] = None,
        series_client: Optional[ISeriesManagerClient] = None,
    ) -> None:
        self._catalog = catalog
        self._movie_client = movie_client
        self._series_client = series_client

    async def snapshot(self, now: Optional[datetime] = None) -> DashboardSnapshot:
        """Interroge les trois services en parallele."""
        now = now or datetime.now(timezone.utc)
        (jellyfin, movies, series), radarr, (sonarr, upcoming) = await asyncio.gather(
            self._catalog_part(),
            self._probe("Radarr", self._movie_client),
            self._series_part(now),
        )

        image_urls = {}
        if self._catalog is not None:
            image_urls = {entry.id: self._catalog.image_url(entry) for entry in movies + series}

        return DashboardSnapshot(
            jellyfin=jellyfin,
            radarr=radarr,
            sonarr=sonarr,
            latest_movies=movies,
            latest_series=series,
            upcoming=upcoming,
            image_urls=image_urls,
        )

    async def _catalog_part(
        self,
    ) -> tuple[ServiceStatus, list[CatalogEntry], list[CatalogEntry]]:
        # Jellyfin est en ligne si la liste des derniers films est accessible
        if self._catalog is None:
            return ServiceStatus.UNCONFIGURED, [], []
        try:
            movies = await self._catalog.list_entries([ItemKind.MOVIE], limit=LATEST_LIMIT)
        except Exception as e:
            logger.warning(f"Jellyfin injoignable : {e}")
            return ServiceStatus.OFFLINE, [], []

        try:
            series = await self._catalog.list_entries([ItemKind.SERIES], limit=LATEST_LIMIT)
        except Exception as e:
            logger.warning(f"Impossible de recuperer les dernieres series : {e}")
            series = []
        return ServiceStatus.ONLINE, movies, series

    async def _probe(
        self,
        name: str,
        client: Union[IMovieManagerClient, ISeriesManagerClient, None],
    ) -> ServiceStatus:
        if client is None:
            return ServiceStatus.UNCONFIGURED
        try:
            await client.ping()
        except Exception as e:
            logger.warning(f"{name} injoignable : {e}")
            return ServiceStatus.OFFLINE
        return ServiceStatus.ONLINE

    async def _series_part(
        self, now: datetime
    ) -> tuple[ServiceStatus, list[UpcomingEpisode]]:
        status = await self._probe("Sonarr", self._series_client)
        if status != ServiceStatus.ONLINE:
            return status, []
        try:
            upcoming = await self._series_client.calendar(now, now + timedelta(days=UPCOMING_DAYS))
        except Exception as e:
            logger.warning(f"Calendrier Sonarr indisponible : {e}")
            upcoming = []
        return status, upcoming
