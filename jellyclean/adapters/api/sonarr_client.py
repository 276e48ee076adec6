"""
Client Sonarr pour la gestion des series.

Implemente l'interface ISeriesManagerClient.

Usage:
    client = SonarrClient(base_url="http://sonarr:8989", api_key="xxx")
    series = await client.list_series()
    episodes = await client.list_episodes(series[0].id)
    await client.delete_episode_file(episodes[0].episode_file_id)
    await client.close()
"""

from datetime import datetime, timezone
from typing import Any, Optional

from loguru import logger

from jellyclean.adapters.api.arr_client import ArrClient
from jellyclean.core.entities.acquisition import (
    EpisodeRecord,
    SeriesRecord,
    UpcomingEpisode,
    normalize_external_id,
)
from jellyclean.core.ports.api_clients import ISeriesManagerClient


def _parse_air_date(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def _to_utc_iso(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def series_to_record(data: dict[str, Any]) -> SeriesRecord:
    """Convertit une serie JSON Sonarr en SeriesRecord."""
    return SeriesRecord(
        id=int(data["id"]),
        tvdb_id=normalize_external_id(data.get("tvdbId")),
        title=data.get("title", ""),
    )


def episode_to_record(data: dict[str, Any]) -> EpisodeRecord:
    """Convertit un episode JSON Sonarr en EpisodeRecord."""
    return EpisodeRecord(
        id=int(data["id"]),
        season_number=int(data.get("seasonNumber", -1)),
        episode_number=int(data.get("episodeNumber", 0)),
        has_file=bool(data.get("hasFile", False)),
        episode_file_id=int(data.get("episodeFileId") or 0),
    )


def calendar_to_upcoming(data: dict[str, Any]) -> UpcomingEpisode:
    """Convertit une entree du calendrier Sonarr en UpcomingEpisode."""
    series = data.get("series") or {}
    poster = next(
        (img for img in series.get("images", []) if img.get("coverType") == "poster"),
        None,
    )
    return UpcomingEpisode(
        series_id=int(data.get("seriesId", 0)),
        series_title=series.get("title", ""),
        season_number=int(data.get("seasonNumber", 0)),
        episode_number=int(data.get("episodeNumber", 0)),
        title=data.get("title", ""),
        air_date_utc=_parse_air_date(data.get("airDateUtc")),
        poster_url=poster.get("remoteUrl") if poster else None,
    )


class SonarrClient(ArrClient, ISeriesManagerClient):
    """Client API Sonarr."""

    app_name = "Sonarr"

    async def list_series(self) -> list[SeriesRecord]:
        """Liste toutes les series gerees par Sonarr."""
        data = await self._get_json("/series")
        series = [series_to_record(item) for item in data if "id" in item]
        logger.debug(f"{self.app_name}: {len(series)} series")
        return series

    async def list_episodes(self, series_id: int) -> list[EpisodeRecord]:
        """Liste tous les episodes d'une serie (avec ou sans fichier)."""
        data = await self._get_json("/episode", params={"seriesId": series_id})
        return [episode_to_record(item) for item in data if "id" in item]

    async def delete_episode_file(self, episode_file_id: int) -> None:
        """
        Supprime le fichier d'un episode.

        Raises:
            httpx.HTTPStatusError: Si Sonarr refuse la suppression
            httpx.TransportError: En cas d'erreur reseau ou de timeout
        """
        await self._request("DELETE", f"/episodefile/{episode_file_id}")
        logger.debug(f"{self.app_name}: fichier d'episode {episode_file_id} supprime")

    async def calendar(self, start: datetime, end: datetime) -> list[UpcomingEpisode]:
        """Liste les episodes diffuses entre start et end (series incluses)."""
        data = await self._get_json(
            "/calendar",
            params={
                "start": _to_utc_iso(start),
                "end": _to_utc_iso(end),
                "includeSeries": "true",
            },
        )
        return [calendar_to_upcoming(item) for item in data]
