"""
Tests des entites du catalogue et des resultats de suppression.
"""

from datetime import datetime, timezone

import pytest

from jellyclean.core.entities import (
    CatalogEntry,
    DeletionOutcome,
    DeletionReport,
    ItemKind,
    LogEntry,
    LogEvent,
    LogLevel,
    OutcomeStatus,
    UpcomingEpisode,
    normalize_external_id,
)
from jellyclean.core.value_objects import EligibleItem, RetentionPolicy

CREATED = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _outcome(status: OutcomeStatus) -> DeletionOutcome:
    return DeletionOutcome(item_id="x", name="X", status=status, detail="", timestamp=CREATED)


class TestItemKind:
    def test_known_values(self) -> None:
        assert ItemKind("Movie") is ItemKind.MOVIE
        assert ItemKind("Season") is ItemKind.SEASON

    def test_unknown_value_maps_to_other(self) -> None:
        """Un type Jellyfin inconnu ne casse pas le parsing."""
        assert ItemKind("MusicAlbum") is ItemKind.OTHER


class TestCatalogEntry:
    def test_provider_id_is_case_insensitive(self) -> None:
        entry = CatalogEntry("1", ItemKind.MOVIE, "Film", CREATED, provider_ids={"tmdb": "42"})
        assert entry.provider_id("Tmdb") == "42"

    def test_blank_provider_id_is_absent(self) -> None:
        entry = CatalogEntry("1", ItemKind.MOVIE, "Film", CREATED, provider_ids={"Tmdb": "  "})
        assert entry.provider_id("Tmdb") is None

    def test_missing_provider_id(self) -> None:
        entry = CatalogEntry("1", ItemKind.MOVIE, "Film", CREATED)
        assert entry.provider_id("Tvdb") is None

    def test_season_display_name_includes_series(self) -> None:
        entry = CatalogEntry(
            "s2", ItemKind.SEASON, "Saison 2", CREATED, series_id="s", series_name="Dark"
        )
        assert entry.display_name == "Dark - Saison 2"

    def test_movie_display_name(self) -> None:
        entry = CatalogEntry("1", ItemKind.MOVIE, "Inception", CREATED)
        assert entry.display_name == "Inception"


class TestNormalizeExternalId:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (27205, "27205"),
            ("12", "12"),
            (" 7 ", "7"),
            ("0042", "42"),
            ("603abc", "603"),
            ("tt1", "tt1"),
            (" tt1 ", "tt1"),
            (0, None),
            ("0", None),
            ("", None),
            ("   ", None),
            (None, None),
        ],
    )
    def test_values(self, value, expected) -> None:
        assert normalize_external_id(value) == expected


class TestRetentionPolicy:
    def test_defaults(self) -> None:
        policy = RetentionPolicy()
        assert policy.movie_days == 7
        assert policy.season_days == 28

    def test_threshold_for_kind(self) -> None:
        policy = RetentionPolicy(movie_days=3, season_days=9)
        assert policy.threshold_for(ItemKind.MOVIE) == 3
        assert policy.threshold_for(ItemKind.SEASON) == 9
        assert policy.threshold_for(ItemKind.SERIES) is None
        assert policy.threshold_for(ItemKind.EPISODE) is None

    def test_negative_threshold_rejected(self) -> None:
        with pytest.raises(ValueError):
            RetentionPolicy(movie_days=-1)

    def test_eligible_item_exposes_entry_fields(self) -> None:
        entry = CatalogEntry("1", ItemKind.MOVIE, "Film", CREATED)
        item = EligibleItem(entry=entry, age_days=8.5)
        assert item.id == "1"
        assert item.kind is ItemKind.MOVIE


class TestOutcomes:
    def test_status_classification(self) -> None:
        assert OutcomeStatus.FAILED.is_failure
        assert OutcomeStatus.PARTIALLY_FAILED.is_failure
        assert not OutcomeStatus.SKIPPED_NO_MATCH.is_failure
        assert OutcomeStatus.SKIPPED_NO_MATCH.is_skip
        assert OutcomeStatus.SKIPPED_UNCONFIGURED.is_skip
        assert not OutcomeStatus.SUCCEEDED.is_skip

    def test_report_counts(self) -> None:
        report = DeletionReport(
            outcomes=[
                _outcome(OutcomeStatus.SUCCEEDED),
                _outcome(OutcomeStatus.SUCCEEDED),
                _outcome(OutcomeStatus.SKIPPED_NO_MATCH),
                _outcome(OutcomeStatus.PARTIALLY_FAILED),
                _outcome(OutcomeStatus.FAILED),
            ]
        )
        assert report.success_count == 2
        assert report.skipped_count == 1
        assert report.failure_count == 2
        assert report.rescan_required

    def test_log_entry_format(self) -> None:
        entry = LogEntry(
            seq=1,
            timestamp=datetime(2024, 1, 1, 9, 5, 3, tzinfo=timezone.utc),
            level=LogLevel.INFO,
            event=LogEvent.SCAN_STARTED,
            message="Scan",
        )
        assert entry.format() == "[09:05:03] Scan"

    def test_upcoming_episode_label(self) -> None:
        episode = UpcomingEpisode(
            series_id=1, series_title="Dark", season_number=2, episode_number=5, title="Titre"
        )
        assert episode.label == "2x05 - Titre"
