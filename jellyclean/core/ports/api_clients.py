"""
Interfaces ports pour les clients API.

Interfaces abstraites (ports) définissant les contrats pour les services externes.
Les implémentations (adaptateurs) fourniront les clients concrets
(Jellyfin pour le catalogue, Radarr pour les films, Sonarr pour les séries).

Le transport est de la responsabilité des adaptateurs : chaque appel doit être
borné par un timeout et lever une exception en cas d'erreur réseau ou de
réponse non-2xx.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, Optional

from jellyclean.core.entities.acquisition import (
    EpisodeRecord,
    MovieRecord,
    SeriesRecord,
    UpcomingEpisode,
)
from jellyclean.core.entities.catalog import CatalogEntry, ItemKind


class ICatalogClient(ABC):
    """
    Interface du service de bibliothèque (source de vérité du catalogue).

    Définit le contrat pour lister les entrées du catalogue et résoudre
    leurs images.
    """

    @abstractmethod
    async def list_entries(
        self,
        kinds: Iterable[ItemKind],
        limit: Optional[int] = None,
    ) -> list[CatalogEntry]:
        """
        Liste les entrées des types demandés, les plus récentes d'abord.

        Args :
            kinds : Types d'entrées à inclure
            limit : Nombre maximum d'entrées (None = toutes)
        """
        ...

    @abstractmethod
    async def get_entries_by_ids(self, ids: Iterable[str]) -> list[CatalogEntry]:
        """Récupère les entrées correspondant aux identifiants donnés."""
        ...

    @abstractmethod
    def image_url(self, entry: CatalogEntry) -> str:
        """Retourne l'URL de l'image principale d'une entrée."""
        ...

    async def close(self) -> None:
        """Libère les ressources réseau (optionnel)."""


class IMovieManagerClient(ABC):
    """
    Interface du gestionnaire d'acquisition des films (Radarr).
    """

    @abstractmethod
    async def list_movies(self) -> list[MovieRecord]:
        """Liste tous les films gérés."""
        ...

    @abstractmethod
    async def delete_movie(self, movie_id: int) -> None:
        """Supprime un film et ses fichiers."""
        ...

    @abstractmethod
    async def ping(self) -> None:
        """Vérifie la connectivité. Lève une exception si le service est injoignable."""
        ...

    async def close(self) -> None:
        """Libère les ressources réseau (optionnel)."""


class ISeriesManagerClient(ABC):
    """
    Interface du gestionnaire d'acquisition des séries (Sonarr).
    """

    @abstractmethod
    async def list_series(self) -> list[SeriesRecord]:
        """Liste toutes les séries gérées."""
        ...

    @abstractmethod
    async def list_episodes(self, series_id: int) -> list[EpisodeRecord]:
        """Liste tous les épisodes d'une série."""
        ...

    @abstractmethod
    async def delete_episode_file(self, episode_file_id: int) -> None:
        """Supprime le fichier associé à un épisode."""
        ...

    @abstractmethod
    async def calendar(self, start: datetime, end: datetime) -> list[UpcomingEpisode]:
        """Liste les épisodes à venir entre deux dates."""
        ...

    @abstractmethod
    async def ping(self) -> None:
        """Vérifie la connectivité. Lève une exception si le service est injoignable."""
        ...

    async def close(self) -> None:
        """Libère les ressources réseau (optionnel)."""
