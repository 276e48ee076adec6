"""
Correspondance entre le catalogue Jellyfin et les gestionnaires d'acquisition.

Un film est rapproche d'un enregistrement Radarr par son ID TMDB ; une saison
est rapprochee d'une serie Sonarr par l'ID TVDB de sa serie parente, puis
filtree par numero de saison.

Les echecs de correspondance levent des CorrelationError : ce ne sont pas des
erreurs fatales, ils signifient le plus souvent que le fichier a deja disparu
du gestionnaire.
"""

import re
from typing import Mapping, Optional, Protocol, Sequence

from jellyclean.core.entities.acquisition import (
    MovieRecord,
    SeriesRecord,
    normalize_external_id,
)
from jellyclean.core.entities.catalog import CatalogEntry

MOVIE_PROVIDER = "Tmdb"
SERIES_PROVIDER = "Tvdb"


class CorrelationError(Exception):
    """Erreur de base de la correspondance catalogue / gestionnaire."""


class MissingExternalIdError(CorrelationError):
    """L'entree (ou sa serie parente) n'a pas d'identifiant externe exploitable."""


class NoMatchError(CorrelationError):
    """Aucun enregistrement du gestionnaire ne porte l'identifiant externe."""


class MissingSeasonNumberError(CorrelationError):
    """Le numero de saison n'a pas pu etre determine."""


class SeasonNumberParser(Protocol):
    """Strategie d'extraction du numero de saison d'une entree."""

    def __call__(self, entry: CatalogEntry) -> Optional[int]: ...


class FirstDigitRunSeasonParser:
    """
    Prend la premiere suite de chiffres du nom affiche.

    "Saison 2" donne 2, "Specials" ne donne rien. Attention : "Season 2 (2021)"
    donne bien 2, mais "2021 - Season 2" donne 2021.
    """

    _DIGITS = re.compile(r"\d+")

    def __call__(self, entry: CatalogEntry) -> Optional[int]:
        match = self._DIGITS.search(entry.name or "")
        return int(match.group()) if match else None


def resolve_movie(entry: CatalogEntry, movies: Sequence[MovieRecord]) -> MovieRecord:
    """
    Trouve le film Radarr correspondant a l'entree.

    Les IDs sont compares une fois normalises (voir normalize_external_id).
    Le premier film dans l'ordre de recuperation l'emporte si plusieurs
    partagent le meme ID TMDB.

    Raises:
        MissingExternalIdError: ID TMDB absent ou vide sur l'entree
        NoMatchError: Aucun film Radarr avec cet ID
    """
    tmdb_id = normalize_external_id(entry.provider_id(MOVIE_PROVIDER))
    if tmdb_id is None:
        raise MissingExternalIdError(f"Pas d'ID TMDB pour {entry.display_name}")

    for movie in movies:
        if movie.tmdb_id == tmdb_id:
            return movie
    raise NoMatchError(f"Aucun film Radarr avec TMDB {tmdb_id}")


def resolve_series_external_id(
    entry: CatalogEntry,
    series_tvdb_lookup: Mapping[str, Optional[str]],
) -> str:
    """
    Retourne l'ID TVDB de la serie parente d'une saison.

    Raises:
        MissingExternalIdError: Serie parente inconnue ou sans ID TVDB
    """
    tvdb_id = series_tvdb_lookup.get(entry.series_id) if entry.series_id else None
    if tvdb_id is None:
        raise MissingExternalIdError(f"Pas d'ID TVDB pour la serie de {entry.display_name}")
    return tvdb_id


def resolve_season_number(
    entry: CatalogEntry,
    parser: Optional[SeasonNumberParser] = None,
) -> int:
    """
    Raises:
        MissingSeasonNumberError: Aucun numero de saison dans le nom
    """
    number = (parser or FirstDigitRunSeasonParser())(entry)
    if number is None:
        raise MissingSeasonNumberError(f"Numero de saison introuvable dans {entry.name!r}")
    return number


def resolve_series(tvdb_id: str, series: Sequence[SeriesRecord]) -> SeriesRecord:
    """
    Raises:
        NoMatchError: Aucune serie Sonarr avec cet ID TVDB
    """
    for record in series:
        if record.tvdb_id == tvdb_id:
            return record
    raise NoMatchError(f"Aucune serie Sonarr avec TVDB {tvdb_id}")


def resolve_season(
    entry: CatalogEntry,
    series_tvdb_lookup: Mapping[str, Optional[str]],
    series: Sequence[SeriesRecord],
    parser: Optional[SeasonNumberParser] = None,
) -> tuple[int, SeriesRecord]:
    """
    Trouve la serie Sonarr et le numero de saison d'une entree saison.

    Les verifications sont faites dans l'ordre : ID TVDB de la serie parente,
    numero de saison, puis correspondance Sonarr.

    Args:
        entry: Entree saison du catalogue
        series_tvdb_lookup: ID de serie Jellyfin -> ID TVDB
        series: Series Sonarr
        parser: Strategie d'extraction du numero de saison

    Returns:
        Tuple (numero de saison, serie Sonarr)

    Raises:
        MissingExternalIdError, MissingSeasonNumberError, NoMatchError
    """
    tvdb_id = resolve_series_external_id(entry, series_tvdb_lookup)
    season_number = resolve_season_number(entry, parser)
    return season_number, resolve_series(tvdb_id, series)
