"""
Tests des commandes CLI (Typer CliRunner).

Les clients API sont remplaces par des mocks via les overrides du
container ; la liste d'exclusion utilise une base SQLite temporaire.
"""

from unittest.mock import AsyncMock

import httpx
import pytest
from dependency_injector import providers
from typer.testing import CliRunner

from jellyclean.container import Container
from jellyclean.core.entities import ItemKind, MovieRecord
from jellyclean.main import app

runner = CliRunner()


@pytest.fixture
def container(monkeypatch, test_settings, mock_catalog, mock_movie_client, mock_series_client):
    """Container de test injecte dans les commandes via with_container."""
    container = Container()
    container.config.override(providers.Object(test_settings))
    container.catalog_client.override(providers.Object(mock_catalog))
    container.movie_client.override(providers.Object(mock_movie_client))
    container.series_client.override(providers.Object(mock_series_client))
    monkeypatch.setattr("jellyclean.adapters.cli.helpers.Container", lambda: container)
    return container


@pytest.fixture
def catalog_entries(make_entry, mock_catalog):
    entries = [
        make_entry("old-movie", age_days=30, name="Vieux film", provider_ids={"Tmdb": "1"}),
        make_entry("new-movie", age_days=1, name="Film recent"),
    ]
    mock_catalog.list_entries.return_value = entries
    return entries


class TestBasicCommands:
    def test_version(self) -> None:
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "JellyClean v" in result.output

    def test_info(self, monkeypatch) -> None:
        monkeypatch.setenv("JELLYCLEAN_RADARR_API_KEY", "abcdefghijkl")
        monkeypatch.setattr("jellyclean.main.container", Container())
        result = runner.invoke(app, ["info"])
        assert result.exit_code == 0
        assert "Rétention films" in result.output
        assert "abcdefghijkl" not in result.output


class TestScanCommand:
    def test_scan_lists_eligible(self, container, catalog_entries) -> None:
        result = runner.invoke(app, ["scan"])
        assert result.exit_code == 0
        assert "Vieux film" in result.output
        assert "Film recent" not in result.output

    def test_scan_catalog_down(self, container, mock_catalog) -> None:
        mock_catalog.list_entries.side_effect = httpx.ConnectError("down")
        result = runner.invoke(app, ["scan"])
        assert result.exit_code == 1
        assert "injoignable" in result.output

    def test_scan_catalog_unconfigured(self, container) -> None:
        container.catalog_client.override(providers.Object(None))
        result = runner.invoke(app, ["scan"])
        assert result.exit_code == 1


class TestPurgeCommand:
    def test_purge_with_confirmation(
        self, container, catalog_entries, mock_movie_client
    ) -> None:
        mock_movie_client.list_movies.return_value = [MovieRecord(id=7, tmdb_id="1")]

        result = runner.invoke(app, ["purge"], input="y\n")

        assert result.exit_code == 0
        mock_movie_client.delete_movie.assert_awaited_once_with(7)
        assert "1/1" in result.output

    def test_purge_declined(self, container, catalog_entries, mock_movie_client) -> None:
        result = runner.invoke(app, ["purge"], input="n\n")
        assert result.exit_code == 0
        mock_movie_client.delete_movie.assert_not_awaited()

    def test_purge_skip(self, container, catalog_entries, mock_movie_client) -> None:
        result = runner.invoke(app, ["purge", "--skip", "old-movie", "--yes"])
        assert result.exit_code == 0
        assert "Aucun element a supprimer" in result.output
        mock_movie_client.list_movies.assert_not_awaited()

    def test_purge_run_failure_exit_code(
        self, container, catalog_entries, mock_movie_client
    ) -> None:
        mock_movie_client.list_movies.side_effect = httpx.ConnectError("radarr down")
        result = runner.invoke(app, ["purge", "--yes"])
        assert result.exit_code == 1
        assert "radarr down" in result.output


class TestExclusionCommands:
    def test_add_list_remove(self, container, make_entry, mock_catalog) -> None:
        mock_catalog.get_entries_by_ids = AsyncMock(
            return_value=[make_entry("a", name="Film exclu")]
        )

        assert runner.invoke(app, ["exclusions", "add", "a", "b"]).exit_code == 0
        assert container.exclusion_service().excluded_ids() == {"a", "b"}

        result = runner.invoke(app, ["exclusions", "list"])
        assert result.exit_code == 0
        assert "Film exclu" in result.output
        assert "b" in result.output

        assert runner.invoke(app, ["exclusions", "remove", "a"]).exit_code == 0
        assert container.exclusion_service().excluded_ids() == {"b"}

    def test_list_empty(self, container) -> None:
        result = runner.invoke(app, ["exclusions", "list"])
        assert result.exit_code == 0
        assert "vide" in result.output

    def test_add_eligible(self, container, catalog_entries) -> None:
        result = runner.invoke(app, ["exclusions", "add-eligible"])
        assert result.exit_code == 0
        assert container.exclusion_service().excluded_ids() == {"old-movie"}

        # Le film exclu n'est plus propose au scan suivant
        assert "Vieux film" not in runner.invoke(app, ["scan"]).output


class TestStatusCommand:
    def test_status(self, container, make_entry, mock_catalog, mock_movie_client) -> None:
        mock_catalog.list_entries.side_effect = [
            [make_entry("m1", name="Dernier film")],
            [make_entry("s1", kind=ItemKind.SERIES, name="Derniere serie")],
        ]
        mock_movie_client.ping.side_effect = httpx.ConnectError("down")

        result = runner.invoke(app, ["status"])

        assert result.exit_code == 0
        assert "Dernier film" in result.output
        assert "hors ligne" in result.output
