"""
Base commune des clients Radarr et Sonarr (API v3).

Radarr et Sonarr partagent la meme API "*arr" : authentification par header
X-Api-Key, prefixe /api/v3, endpoint system/status pour tester la connexion.
"""

from typing import Any, Optional

import httpx
from loguru import logger

from jellyclean.adapters.api.retry import request_with_retry


class ArrClient:
    """
    Client HTTP de base pour les API Radarr/Sonarr.

    Attributes:
        API_PREFIX: Prefixe des endpoints de l'API v3
        app_name: Nom du service pour les messages (surcharge par les sous-classes)
    """

    API_PREFIX = "/api/v3"
    app_name = "arr"

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 30.0,
        max_retries: int = 5,
    ) -> None:
        """
        Initialise le client.

        Args:
            base_url: URL du service (sans slash final)
            api_key: Cle API du service
            timeout: Timeout de chaque requete en secondes
            max_retries: Nombre de tentatives sur 429/503
        """
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._max_retries = max_retries
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=f"{self._base_url}{self.API_PREFIX}",
                headers={
                    "Accept": "application/json",
                    "X-Api-Key": self._api_key,
                },
                timeout=self._timeout,
            )
        return self._client

    async def _request(self, method: str, endpoint: str, **kwargs) -> httpx.Response:
        return await request_with_retry(
            self._get_client(),
            method,
            endpoint,
            max_attempts=self._max_retries,
            **kwargs,
        )

    async def _get_json(self, endpoint: str, **kwargs) -> Any:
        response = await self._request("GET", endpoint, **kwargs)
        return response.json()

    async def ping(self) -> None:
        """
        Teste la connexion via system/status.

        Raises:
            httpx.HTTPError: Si le service est injoignable ou refuse la cle API
        """
        await self._request("GET", "/system/status")
        logger.debug(f"{self.app_name}: connexion OK ({self._base_url})")

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
