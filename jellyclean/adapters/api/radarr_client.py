"""
Client Radarr pour la gestion des films.

Implemente l'interface IMovieManagerClient.

Usage:
    client = RadarrClient(base_url="http://radarr:7878", api_key="xxx")
    movies = await client.list_movies()
    await client.delete_movie(movies[0].id)
    await client.close()
"""

from typing import Any

from loguru import logger

from jellyclean.adapters.api.arr_client import ArrClient
from jellyclean.core.entities.acquisition import MovieRecord, normalize_external_id
from jellyclean.core.ports.api_clients import IMovieManagerClient


def movie_to_record(data: dict[str, Any]) -> MovieRecord:
    """Convertit un film JSON Radarr en MovieRecord."""
    return MovieRecord(
        id=int(data["id"]),
        tmdb_id=normalize_external_id(data.get("tmdbId")),
        title=data.get("title", ""),
        has_file=bool(data.get("hasFile", False)),
    )


class RadarrClient(ArrClient, IMovieManagerClient):
    """
    Client API Radarr.

    La suppression d'un film retire aussi ses fichiers du disque, sans
    ajouter le film a la liste d'exclusion d'import de Radarr.
    """

    app_name = "Radarr"

    async def list_movies(self) -> list[MovieRecord]:
        """Liste tous les films geres par Radarr."""
        data = await self._get_json("/movie")
        movies = [movie_to_record(item) for item in data if "id" in item]
        logger.debug(f"{self.app_name}: {len(movies)} films")
        return movies

    async def delete_movie(self, movie_id: int) -> None:
        """
        Supprime un film et ses fichiers.

        Raises:
            httpx.HTTPStatusError: Si Radarr refuse la suppression
            httpx.TransportError: En cas d'erreur reseau ou de timeout
        """
        await self._request(
            "DELETE",
            f"/movie/{movie_id}",
            params={"deleteFiles": "true", "addImportExclusion": "false"},
        )
        logger.debug(f"{self.app_name}: film {movie_id} supprime")
