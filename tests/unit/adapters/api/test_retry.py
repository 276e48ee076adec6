"""
Tests unitaires pour le mecanisme de retry avec backoff exponentiel.

Ces tests verifient:
- RateLimitError capture le code HTTP et le header Retry-After
- La strategie d'attente respecte Retry-After dans la limite de max_wait
- request_with_retry relance sur 429 et 503 uniquement
- Les erreurs de transport ne sont jamais rejouees
"""

from unittest.mock import MagicMock

import httpx
import pytest
import respx

from jellyclean.adapters.api.retry import (
    RateLimitError,
    _parse_retry_after,
    _WaitRetryAfter,
    request_with_retry,
    with_retry,
)

URL = "http://radarr:7878/api/v3/movie"


class TestRateLimitError:
    def test_stores_retry_after_and_status(self) -> None:
        error = RateLimitError(retry_after=60, status_code=503)
        assert error.retry_after == 60
        assert error.status_code == 503
        assert "503" in str(error)

    def test_defaults(self) -> None:
        error = RateLimitError()
        assert error.retry_after is None
        assert error.status_code == 429


class TestParseRetryAfter:
    @pytest.mark.parametrize(
        "value,expected",
        [("30", 30), (" 5 ", 5), ("-3", 0), (None, None), ("", None), ("Wed, 21 Oct 2015", None)],
    )
    def test_values(self, value, expected) -> None:
        assert _parse_retry_after(value) == expected


class TestWaitRetryAfter:
    def _state(self, error: Exception) -> MagicMock:
        state = MagicMock()
        state.outcome.exception.return_value = error
        state.attempt_number = 1
        return state

    def test_uses_retry_after(self) -> None:
        assert _WaitRetryAfter(max_wait=60)(self._state(RateLimitError(retry_after=12))) == 12

    def test_caps_retry_after(self) -> None:
        assert _WaitRetryAfter(max_wait=10)(self._state(RateLimitError(retry_after=120))) == 10

    def test_falls_back_to_exponential(self) -> None:
        wait = _WaitRetryAfter(max_wait=10)(self._state(RateLimitError()))
        assert 0 <= wait <= 10


class TestWithRetryDecorator:
    @pytest.mark.asyncio
    async def test_retries_on_rate_limit_error(self) -> None:
        call_count = 0

        @with_retry(max_attempts=3, max_wait=1)
        async def flaky() -> str:
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise RateLimitError(retry_after=0)
            return "ok"

        assert await flaky() == "ok"
        assert call_count == 3

    @pytest.mark.asyncio
    async def test_reraises_after_max_attempts(self) -> None:
        call_count = 0

        @with_retry(max_attempts=2, max_wait=1)
        async def always_limited() -> None:
            nonlocal call_count
            call_count += 1
            raise RateLimitError(retry_after=0)

        with pytest.raises(RateLimitError):
            await always_limited()
        assert call_count == 2

    @pytest.mark.asyncio
    async def test_other_exceptions_not_retried(self) -> None:
        call_count = 0

        @with_retry(max_attempts=3, max_wait=1)
        async def broken() -> None:
            nonlocal call_count
            call_count += 1
            raise ValueError("pas un rate limit")

        with pytest.raises(ValueError):
            await broken()
        assert call_count == 1


class TestRequestWithRetry:
    @pytest.mark.asyncio
    @respx.mock
    async def test_retries_429_then_succeeds(self, respx_mock: respx.Router) -> None:
        route = respx_mock.get(URL).mock(
            side_effect=[
                httpx.Response(429, headers={"Retry-After": "0"}),
                httpx.Response(200, json=[]),
            ]
        )

        async with httpx.AsyncClient() as client:
            response = await request_with_retry(client, "GET", URL, max_attempts=3, max_wait=1)

        assert response.status_code == 200
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_retries_503(self, respx_mock: respx.Router) -> None:
        route = respx_mock.get(URL).mock(
            side_effect=[
                httpx.Response(503, headers={"Retry-After": "0"}),
                httpx.Response(200, json=[]),
            ]
        )

        async with httpx.AsyncClient() as client:
            await request_with_retry(client, "GET", URL, max_attempts=3, max_wait=1)

        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_exhausted_retries_raise_rate_limit(self, respx_mock: respx.Router) -> None:
        route = respx_mock.get(URL).mock(
            return_value=httpx.Response(429, headers={"Retry-After": "0"})
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(RateLimitError) as exc_info:
                await request_with_retry(client, "GET", URL, max_attempts=2, max_wait=1)

        assert exc_info.value.retry_after == 0
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_other_status_not_retried(self, respx_mock: respx.Router) -> None:
        route = respx_mock.delete(URL).mock(return_value=httpx.Response(500))

        async with httpx.AsyncClient() as client:
            with pytest.raises(httpx.HTTPStatusError) as exc_info:
                await request_with_retry(client, "DELETE", URL)

        assert exc_info.value.response.status_code == 500
        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_error_not_retried(self, respx_mock: respx.Router) -> None:
        route = respx_mock.delete(URL).mock(side_effect=httpx.ConnectTimeout("timeout"))

        async with httpx.AsyncClient() as client:
            with pytest.raises(httpx.ConnectTimeout):
                await request_with_retry(client, "DELETE", URL)

        assert route.call_count == 1
