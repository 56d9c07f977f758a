"""Custom exceptions for the Bucharest weather client."""

from __future__ import annotations


class WeatherError(Exception):
    """Base exception for all weather client errors."""


class WeatherConnectionError(WeatherError):
    """Raised when the client cannot connect to the API."""


class WeatherTimeoutError(WeatherError, TimeoutError):
    """Raised when a request to the API exceeds its deadline."""


class WeatherAPIError(WeatherError):
    """Raised when the API returns a non-retryable or exhausted error status."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message}")


class CredentialError(WeatherAPIError):
    """Raised on 401: the API key is missing, invalid or expired."""


class NotFoundError(WeatherAPIError):
    """Raised on 404: the configured city is unknown upstream."""


class RateLimitError(WeatherAPIError):
    """Raised on 429: too many requests for this API key."""


class MalformedResponseError(WeatherError):
    """Raised when a response body is not JSON or lacks required fields."""


class CacheIOError(WeatherError):
    """Raised by cache storage internals; always downgraded to a cache miss."""


class UnknownOptionError(WeatherError, ValueError):
    """Raised when a template, theme or preset name is not recognised."""
