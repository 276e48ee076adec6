"""
Clients API externes.

Ce module fournit les adaptateurs pour communiquer avec les services externes:
- Jellyfin: catalogue de la mediatheque (source de verite)
- Radarr: gestionnaire d'acquisition des films
- Sonarr: gestionnaire d'acquisition des series

Infrastructure partagee:
- RateLimitError: Exception pour les erreurs 429/503
- with_retry / request_with_retry: backoff exponentiel sur rate limiting

Les clients implementent les ports definis dans core/ports/api_clients.py.
"""

from jellyclean.adapters.api.jellyfin_client import JellyfinClient
from jellyclean.adapters.api.radarr_client import RadarrClient
from jellyclean.adapters.api.retry import RateLimitError, request_with_retry, with_retry
from jellyclean.adapters.api.sonarr_client import SonarrClient

__all__ = [
    "JellyfinClient",
    "RadarrClient",
    "SonarrClient",
    "RateLimitError",
    "with_retry",
    "request_with_retry",
]
