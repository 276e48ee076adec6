"""
Enregistrements des gestionnaires d'acquisition (Radarr, Sonarr).

Ces enregistrements appartiennent aux services Radarr et Sonarr. Ils sont
recuperes a chaque execution (jamais mis en cache entre deux executions)
car les suppressions modifient leur etat.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

_LEADING_DIGITS = re.compile(r"\d+")


def normalize_external_id(value: Any) -> Optional[str]:
    """
    Normalise un identifiant externe (TMDB, TVDB) pour la comparaison.

    Un identifiant qui commence par des chiffres est reduit a sa valeur
    entiere : "0603abc" donne "603". Les autres identifiants (ex: "tt1")
    sont gardes tels quels, sans les espaces. Absent, vide ou nul donne None
    (les *arr renvoient 0 quand ils ne connaissent pas l'ID).
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    match = _LEADING_DIGITS.match(text)
    if match is None:
        return text
    number = int(match.group())
    return str(number) if number > 0 else None


@dataclass(frozen=True)
class MovieRecord:
    """
    Film gere par Radarr.

    Attributes:
        id: ID interne Radarr
        tmdb_id: ID TMDB normalise (None si Radarr ne le connait pas)
        title: Titre du film
        has_file: True si un fichier est present sur le disque
    """

    id: int
    tmdb_id: Optional[str]
    title: str = ""
    has_file: bool = False


@dataclass(frozen=True)
class SeriesRecord:
    """
    Serie geree par Sonarr.

    Attributes:
        id: ID interne Sonarr
        tvdb_id: ID TVDB normalise (None si Sonarr ne le connait pas)
        title: Titre de la serie
    """

    id: int
    tvdb_id: Optional[str]
    title: str = ""


@dataclass(frozen=True)
class EpisodeRecord:
    """
    Episode d'une serie Sonarr.

    Attributes:
        id: ID interne de l'episode
        season_number: Numero de saison
        episode_number: Numero de l'episode dans la saison
        has_file: True si un fichier est attache a l'episode
        episode_file_id: ID du fichier d'episode (0 si aucun fichier)
    """

    id: int
    season_number: int
    episode_number: int = 0
    has_file: bool = False
    episode_file_id: int = 0


@dataclass(frozen=True)
class UpcomingEpisode:
    """Episode a venir dans le calendrier Sonarr."""

    series_id: int
    series_title: str
    season_number: int
    episode_number: int
    title: str
    air_date_utc: Optional[datetime] = None
    poster_url: Optional[str] = None

    @property
    def label(self) -> str:
        """Libelle court, ex: "2x05 - Titre"."""
        return f"{self.season_number}x{self.episode_number:02d} - {self.title}"
