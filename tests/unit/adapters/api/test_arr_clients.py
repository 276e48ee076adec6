"""
Tests des clients Radarr et Sonarr (API v3).

Utilise respx pour simuler les API et verifie:
- L'authentification par header X-Api-Key
- La conversion JSON -> enregistrements
- Les appels de suppression et leurs parametres
- Le calendrier Sonarr et le test de connexion
"""

from datetime import datetime, timezone

import httpx
import pytest
import respx
from loguru import logger

from jellyclean.adapters.api.radarr_client import RadarrClient
from jellyclean.adapters.api.sonarr_client import SonarrClient
from jellyclean.core.ports import IMovieManagerClient, ISeriesManagerClient
from tests.fixtures.arr_responses import (
    RADARR_MOVIES_RESPONSE,
    SONARR_CALENDAR_RESPONSE,
    SONARR_EPISODES_RESPONSE,
    SONARR_SERIES_RESPONSE,
    SYSTEM_STATUS_RESPONSE,
)

RADARR_API = "http://radarr:7878/api/v3"
SONARR_API = "http://sonarr:8989/api/v3"


@pytest.fixture
def radarr() -> RadarrClient:
    return RadarrClient(base_url="http://radarr:7878/", api_key="radarr_key")


@pytest.fixture
def sonarr() -> SonarrClient:
    return SonarrClient(base_url="http://sonarr:8989", api_key="sonarr_key")


class TestRadarrClient:
    def test_implements_interface(self, radarr: RadarrClient) -> None:
        assert isinstance(radarr, IMovieManagerClient)

    @pytest.mark.asyncio
    @respx.mock
    async def test_list_movies(self, radarr: RadarrClient) -> None:
        route = respx.get(f"{RADARR_API}/movie").mock(
            return_value=httpx.Response(200, json=RADARR_MOVIES_RESPONSE)
        )

        movies = await radarr.list_movies()

        assert [(m.id, m.tmdb_id) for m in movies] == [(1, "27205"), (2, None)]
        assert route.calls.last.request.headers["X-Api-Key"] == "radarr_key"

    @pytest.mark.asyncio
    @respx.mock
    async def test_delete_movie_with_files(self, radarr: RadarrClient) -> None:
        route = respx.delete(f"{RADARR_API}/movie/1").mock(return_value=httpx.Response(200))

        await radarr.delete_movie(1)

        params = route.calls.last.request.url.params
        assert params["deleteFiles"] == "true"
        assert params["addImportExclusion"] == "false"

    @pytest.mark.asyncio
    @respx.mock
    async def test_delete_movie_error(self, radarr: RadarrClient) -> None:
        respx.delete(f"{RADARR_API}/movie/1").mock(return_value=httpx.Response(404))

        with pytest.raises(httpx.HTTPStatusError):
            await radarr.delete_movie(1)

    @pytest.mark.asyncio
    @respx.mock
    async def test_ping(self, radarr: RadarrClient) -> None:
        route = respx.get(f"{RADARR_API}/system/status").mock(
            return_value=httpx.Response(200, json=SYSTEM_STATUS_RESPONSE)
        )

        await radarr.ping()

        assert route.called

    @pytest.mark.asyncio
    @respx.mock
    async def test_ping_logs_service_name(self, radarr: RadarrClient) -> None:
        respx.get(f"{RADARR_API}/system/status").mock(
            return_value=httpx.Response(200, json=SYSTEM_STATUS_RESPONSE)
        )
        messages: list[str] = []
        handler_id = logger.add(messages.append, level="DEBUG", format="{message}")
        try:
            await radarr.ping()
        finally:
            logger.remove(handler_id)

        assert any(m.startswith("Radarr: connexion OK") for m in messages)

    @pytest.mark.asyncio
    @respx.mock
    async def test_ping_unauthorized(self, radarr: RadarrClient) -> None:
        respx.get(f"{RADARR_API}/system/status").mock(return_value=httpx.Response(401))

        with pytest.raises(httpx.HTTPStatusError):
            await radarr.ping()

    @pytest.mark.asyncio
    @respx.mock
    async def test_close(self, radarr: RadarrClient) -> None:
        respx.get(f"{RADARR_API}/movie").mock(return_value=httpx.Response(200, json=[]))
        await radarr.list_movies()

        await radarr.close()

        assert radarr._client.is_closed


class TestSonarrClient:
    def test_implements_interface(self, sonarr: SonarrClient) -> None:
        assert isinstance(sonarr, ISeriesManagerClient)

    @pytest.mark.asyncio
    @respx.mock
    async def test_list_series(self, sonarr: SonarrClient) -> None:
        respx.get(f"{SONARR_API}/series").mock(
            return_value=httpx.Response(200, json=SONARR_SERIES_RESPONSE)
        )

        series = await sonarr.list_series()

        assert [(s.id, s.tvdb_id) for s in series] == [(10, "81189"), (11, None)]

    @pytest.mark.asyncio
    @respx.mock
    async def test_list_episodes(self, sonarr: SonarrClient) -> None:
        route = respx.get(f"{SONARR_API}/episode").mock(
            return_value=httpx.Response(200, json=SONARR_EPISODES_RESPONSE)
        )

        episodes = await sonarr.list_episodes(10)

        assert route.calls.last.request.url.params["seriesId"] == "10"
        assert [(e.season_number, e.has_file, e.episode_file_id) for e in episodes] == [
            (2, True, 500),
            (2, False, 0),
            (3, True, 501),
        ]

    @pytest.mark.asyncio
    @respx.mock
    async def test_delete_episode_file(self, sonarr: SonarrClient) -> None:
        route = respx.delete(f"{SONARR_API}/episodefile/500").mock(
            return_value=httpx.Response(200)
        )

        await sonarr.delete_episode_file(500)

        assert route.called

    @pytest.mark.asyncio
    @respx.mock
    async def test_calendar(self, sonarr: SonarrClient) -> None:
        route = respx.get(f"{SONARR_API}/calendar").mock(
            return_value=httpx.Response(200, json=SONARR_CALENDAR_RESPONSE)
        )
        start = datetime(2024, 6, 1, tzinfo=timezone.utc)
        end = datetime(2024, 6, 15, tzinfo=timezone.utc)

        upcoming = await sonarr.calendar(start, end)

        params = route.calls.last.request.url.params
        assert params["start"] == "2024-06-01T00:00:00Z"
        assert params["end"] == "2024-06-15T00:00:00Z"
        assert params["includeSeries"] == "true"
        assert len(upcoming) == 1
        assert upcoming[0].series_title == "Breaking Bad"
        assert upcoming[0].label == "6x03 - Nouvel episode"
        assert upcoming[0].poster_url == "http://img/poster.jpg"
        assert upcoming[0].air_date_utc == datetime(2024, 6, 5, 2, 0, tzinfo=timezone.utc)
