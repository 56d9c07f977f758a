"""Low-level HTTP transport layer wrapping httpx, with retry and backoff."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from bucharest_weather.exceptions import (
    CredentialError,
    MalformedResponseError,
    NotFoundError,
    RateLimitError,
    WeatherAPIError,
    WeatherConnectionError,
    WeatherTimeoutError,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"
DEFAULT_TIMEOUT = 10.0
DEFAULT_MAX_ATTEMPTS = 4
DEFAULT_BACKOFF = 1.0
USER_AGENT = "BucharestWeatherCLI/2.0.0"

_STATUS_ERRORS: dict[int, type[WeatherAPIError]] = {
    401: CredentialError,
    404: NotFoundError,
    429: RateLimitError,
}

Sleep = Callable[[float], Awaitable[None]]


class _Transient(Exception):
    """A failure worth retrying; carries the error to raise once attempts run out."""

    def __init__(self, error: Exception) -> None:
        self.error = error
        super().__init__(str(error))


def _handle_response(response: httpx.Response) -> Any:
    """Validate response status and return parsed JSON."""
    if response.status_code >= 500:
        raise _Transient(WeatherAPIError(response.status_code, response.text))
    if response.status_code >= 400:
        error_type = _STATUS_ERRORS.get(response.status_code, WeatherAPIError)
        raise error_type(status_code=response.status_code, message=response.text)
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MalformedResponseError(
            f"Invalid JSON from {response.request.url.path}: {exc}"
        ) from exc


def backoff_delay(attempt: int, backoff: float = DEFAULT_BACKOFF) -> float:
    """Seconds to wait after failed attempt number *attempt* (1-based)."""
    return backoff * 2**attempt


class AsyncTransport:
    """Asynchronous HTTP transport using httpx.AsyncClient.

    Transient failures (HTTP 5xx, timeouts, dropped connections) are retried
    up to ``max_attempts`` total attempts with exponential backoff. Client
    errors (4xx) are raised immediately.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        backoff: float = DEFAULT_BACKOFF,
        sleep: Sleep | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.backoff = backoff
        self._sleep = sleep or asyncio.sleep
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Accept": "application/json", "User-Agent": USER_AGENT},
        )

    async def _get_once(self, endpoint: str, params: dict[str, Any]) -> Any:
        try:
            response = await self._client.get(endpoint, params=params)
        except httpx.TimeoutException as exc:
            raise _Transient(WeatherTimeoutError(str(exc) or "request timed out")) from exc
        except httpx.TransportError as exc:
            raise _Transient(WeatherConnectionError(str(exc))) from exc
        return _handle_response(response)

    async def get(self, endpoint: str, params: dict[str, Any]) -> Any:
        """Perform an async GET request and return parsed JSON."""
        attempt = 1
        while True:
            try:
                return await self._get_once(endpoint, params)
            except _Transient as transient:
                if attempt >= self.max_attempts:
                    raise transient.error from transient.__cause__
                delay = backoff_delay(attempt, self.backoff)
                logger.warning(
                    "GET %s failed (%s), retry %d/%d in %.1fs",
                    endpoint, transient.error, attempt, self.max_attempts - 1, delay,
                )
                await self._sleep(delay)
                attempt += 1

    async def close(self) -> None:
        await self._client.aclose()
