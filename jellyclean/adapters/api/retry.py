"""
Mecanisme de retry avec backoff exponentiel pour les API externes.

Radarr et Sonarr sont sensibles au debit : les reponses 429 (rate limiting)
et 503 (service momentanement indisponible) sont relancees avec un delai
croissant et du jitter aleatoire. Le header Retry-After est respecte quand
il est fourni (dans la limite de max_wait).

Usage:
    # Avec le decorateur
    @with_retry(max_attempts=5, max_wait=60)
    async def my_api_call():
        ...

    # Avec la fonction helper
    response = await request_with_retry(client, "GET", "/movie")
"""

from typing import Optional

import httpx
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

RETRYABLE_STATUS_CODES = frozenset({429, 503})


class RateLimitError(Exception):
    """
    Exception levee quand l'API retourne 429 ou 503.

    Attributes:
        status_code: Code HTTP recu
        retry_after: Nombre de secondes a attendre (depuis le header Retry-After),
                     ou None si non specifie.
    """

    def __init__(self, retry_after: Optional[int] = None, status_code: int = 429) -> None:
        self.retry_after = retry_after
        self.status_code = status_code
        super().__init__(f"HTTP {status_code}, rate limited. Retry after: {retry_after}s")


def _parse_retry_after(value: Optional[str]) -> Optional[int]:
    """Retry-After en secondes ; les dates HTTP ne sont pas supportees."""
    if not value:
        return None
    try:
        return max(0, int(value.strip()))
    except ValueError:
        return None


class _WaitRetryAfter:
    """Strategie d'attente : Retry-After si present, sinon backoff exponentiel."""

    def __init__(self, max_wait: int) -> None:
        self._max_wait = max_wait
        self._fallback = wait_random_exponential(multiplier=1, min=1, max=max_wait)

    def __call__(self, retry_state: RetryCallState) -> float:
        outcome = retry_state.outcome
        error = outcome.exception() if outcome is not None else None
        if isinstance(error, RateLimitError) and error.retry_after is not None:
            return float(min(error.retry_after, self._max_wait))
        return self._fallback(retry_state)


def with_retry(max_attempts: int = 5, max_wait: int = 60):
    """
    Decorateur pour relancer sur RateLimitError.

    Args:
        max_attempts: Nombre maximum de tentatives (defaut: 5)
        max_wait: Delai maximum entre les tentatives en secondes (defaut: 60)

    Returns:
        Decorateur a appliquer sur une fonction async
    """
    return retry(
        retry=retry_if_exception_type(RateLimitError),
        wait=_WaitRetryAfter(max_wait),
        stop=stop_after_attempt(max_attempts),
        reraise=True,
    )


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 5,
    max_wait: int = 60,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP avec retry automatique sur 429/503.

    Les autres erreurs HTTP (4xx, 5xx) sont propagees immediatement sans retry,
    tout comme les erreurs de transport (timeout, connexion refusee) : une
    suppression ne doit pas etre rejouee a l'aveugle.

    Args:
        client: Client httpx async a utiliser
        method: Methode HTTP (GET, DELETE, etc.)
        url: URL (relative a base_url du client) a appeler
        max_attempts: Nombre maximum de tentatives (defaut: 5)
        max_wait: Delai maximum entre deux tentatives en secondes
        **kwargs: Arguments supplementaires passes a client.request()

    Returns:
        httpx.Response en cas de succes

    Raises:
        RateLimitError: Si 429/503 apres epuisement des tentatives
        httpx.HTTPStatusError: Pour les autres erreurs HTTP
        httpx.TransportError: Pour les erreurs reseau et les timeouts
    """

    @with_retry(max_attempts=max_attempts, max_wait=max_wait)
    async def _do_request() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code in RETRYABLE_STATUS_CODES:
            raise RateLimitError(
                _parse_retry_after(response.headers.get("Retry-After")),
                status_code=response.status_code,
            )
        response.raise_for_status()
        return response

    return await _do_request()
