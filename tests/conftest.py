"""
Fixtures pytest partagees pour les tests JellyClean.

Ce module contient les fixtures communes utilisees dans les tests:
- Fabrique d'entrees du catalogue (make_entry)
- Mocks des ports (catalogue, Radarr, Sonarr)
- Liste d'exclusion en memoire
- Settings de test isoles de l'environnement
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from jellyclean.config import Settings
from jellyclean.core.entities import CatalogEntry, ItemKind
from jellyclean.core.ports import (
    ICatalogClient,
    IMovieManagerClient,
    ISeriesManagerClient,
)
from tests.fixtures.stores import InMemoryExclusionStore

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    """Instant de reference fixe pour les calculs d'age."""
    return NOW


@pytest.fixture
def make_entry() -> Callable[..., CatalogEntry]:
    """
    Fabrique de CatalogEntry.

    L'age est exprime en jours avant NOW pour lisibilite des tests.
    """

    def _make(
        item_id: str,
        kind: ItemKind = ItemKind.MOVIE,
        age_days: float = 10,
        name: Optional[str] = None,
        series_id: Optional[str] = None,
        series_name: Optional[str] = None,
        provider_ids: Optional[dict[str, str]] = None,
    ) -> CatalogEntry:
        return CatalogEntry(
            id=item_id,
            kind=kind,
            name=name or f"Element {item_id}",
            created_at=NOW - timedelta(days=age_days),
            series_id=series_id,
            series_name=series_name,
            provider_ids=provider_ids or {},
        )

    return _make


@pytest.fixture
def mock_catalog() -> MagicMock:
    """
    Mock de ICatalogClient.

    Par defaut le catalogue est vide.
    """
    mock = MagicMock(spec=ICatalogClient)
    mock.list_entries = AsyncMock(return_value=[])
    mock.get_entries_by_ids = AsyncMock(return_value=[])
    mock.image_url.side_effect = lambda entry: f"http://jellyfin/Items/{entry.id}/Images/Primary"
    return mock


@pytest.fixture
def mock_movie_client() -> MagicMock:
    """Mock de IMovieManagerClient (Radarr)."""
    mock = MagicMock(spec=IMovieManagerClient)
    mock.list_movies = AsyncMock(return_value=[])
    mock.delete_movie = AsyncMock(return_value=None)
    mock.ping = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def mock_series_client() -> MagicMock:
    """Mock de ISeriesManagerClient (Sonarr)."""
    mock = MagicMock(spec=ISeriesManagerClient)
    mock.list_series = AsyncMock(return_value=[])
    mock.list_episodes = AsyncMock(return_value=[])
    mock.delete_episode_file = AsyncMock(return_value=None)
    mock.calendar = AsyncMock(return_value=[])
    mock.ping = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def exclusion_store() -> InMemoryExclusionStore:
    return InMemoryExclusionStore()


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec base de donnees et logs temporaires.

    Le fichier .env eventuel est ignore.
    """
    return Settings(
        _env_file=None,
        jellyfin_url="http://jellyfin:8096",
        jellyfin_api_key="jf_key",
        radarr_url="http://radarr:7878",
        radarr_api_key="radarr_key",
        sonarr_url="http://sonarr:8989",
        sonarr_api_key="sonarr_key",
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        log_file=tmp_path / "logs" / "test.log",
    )
