"""Public async client for the OpenWeatherMap API."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from bucharest_weather import _normalize
from bucharest_weather._http import (
    DEFAULT_BACKOFF,
    DEFAULT_BASE_URL,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_TIMEOUT,
    AsyncTransport,
    Sleep,
)
from bucharest_weather.api_logging import log_api_call
from bucharest_weather.cache import MemoryCache, ResponseCache
from bucharest_weather.config import LocationConfig
from bucharest_weather.exceptions import MalformedResponseError
from bucharest_weather.models.air_quality import AirQuality
from bucharest_weather.models.current import WeatherRecord
from bucharest_weather.models.forecast import ForecastDay
from bucharest_weather.models.uv import UVIndex

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def cache_key(endpoint: str, location: LocationConfig, *extra: object) -> str:
    """Build a cache key that encodes every parameter shaping the response."""
    parts = [endpoint, location.city, location.country, location.units, location.language]
    parts += [str(value) for value in extra]
    return ":".join(part.lower() for part in parts)


def _restore(model: type[M], payload: Any) -> M | None:
    """Re-wrap a cached payload; a payload that no longer validates is a miss."""
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        logger.warning("discarding cached %s: %s", model.__name__, exc)
        return None


class AsyncWeatherClient:
    """Asynchronous client for the OpenWeatherMap API.

    Every endpoint checks the response cache first and stores the normalized
    payload on a miss. The location is passed to each call so one client can
    serve several cities.

    Usage:
        async with AsyncWeatherClient(api_key="...") as client:
            now = await client.current(LocationConfig())
            days = await client.forecast(LocationConfig(), days=3)
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        backoff: float = DEFAULT_BACKOFF,
        cache: ResponseCache | None = None,
        sleep: Sleep | None = None,
    ) -> None:
        self._api_key = api_key
        self._cache = cache if cache is not None else MemoryCache()
        self._transport = AsyncTransport(
            base_url=base_url,
            timeout=timeout,
            max_attempts=max_attempts,
            backoff=backoff,
            sleep=sleep,
        )

    async def __aenter__(self) -> AsyncWeatherClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP connection."""
        await self._transport.close()

    @property
    def cache(self) -> ResponseCache:
        return self._cache

    def clear_cache(self) -> None:
        self._cache.clear()

    def cache_stats(self) -> dict[str, Any]:
        return self._cache.stats()

    async def _get(self, endpoint: str, params: dict[str, Any]) -> dict[str, Any]:
        data = await self._transport.get(endpoint, {**params, "appid": self._api_key})
        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Expected a JSON object from {endpoint}, got {type(data).__name__}"
            )
        return data

    async def _cached(
        self,
        key: str,
        model: type[M],
        fetch: Callable[[], Awaitable[M]],
        use_cache: bool,
        on_hit: Callable[[M], M] | None = None,
    ) -> M:
        if use_cache:
            payload = self._cache.get(key)
            if payload is not None:
                restored = _restore(model, payload)
                if restored is not None:
                    return on_hit(restored) if on_hit else restored
        record = await fetch()
        self._cache.set(key, record.model_dump(mode="json"))
        return record

    # ── Endpoints ──────────────────────────────────────────────

    @log_api_call
    async def current(self, location: LocationConfig, use_cache: bool = True) -> WeatherRecord:
        """Get current conditions for the configured city."""

        async def fetch() -> WeatherRecord:
            data = await self._get("/weather", {
                "q": location.query,
                "units": location.units,
                "lang": location.language,
            })
            return _normalize.normalize_current(data)

        key = cache_key("current", location)
        return await self._cached(
            key, WeatherRecord, fetch, use_cache,
            on_hit=lambda record: record.model_copy(update={"from_cache": True}),
        )

    @log_api_call
    async def forecast(
        self, location: LocationConfig, days: int = 5, use_cache: bool = True,
    ) -> list[ForecastDay]:
        """Get a per-day forecast aggregated from three-hour samples."""
        if not 1 <= days <= _normalize.MAX_FORECAST_DAYS:
            raise ValueError(f"days must be between 1 and {_normalize.MAX_FORECAST_DAYS}, got {days}")

        key = cache_key("forecast", location, days)
        if use_cache:
            payload = self._cache.get(key)
            if isinstance(payload, list):
                restored = [_restore(ForecastDay, day) for day in payload]
                if all(day is not None for day in restored):
                    return restored  # type: ignore[return-value]

        data = await self._get("/forecast", {
            "q": location.query,
            "units": location.units,
            "lang": location.language,
            "cnt": days * _normalize.SAMPLES_PER_DAY,
        })
        forecast = _normalize.aggregate_forecast(data, days)
        self._cache.set(key, [day.model_dump(mode="json") for day in forecast])
        return forecast

    @log_api_call
    async def air_quality(self, location: LocationConfig, use_cache: bool = True) -> AirQuality:
        """Get the air pollution index for the configured coordinates."""

        async def fetch() -> AirQuality:
            data = await self._get("/air_pollution", {"lat": location.lat, "lon": location.lon})
            return _normalize.normalize_air_quality(data)

        key = cache_key("air_quality", location, location.lat, location.lon)
        return await self._cached(key, AirQuality, fetch, use_cache)

    @log_api_call
    async def uv_index(self, location: LocationConfig, use_cache: bool = True) -> UVIndex:
        """Get the UV index for the configured coordinates."""

        async def fetch() -> UVIndex:
            data = await self._get("/uvi", {"lat": location.lat, "lon": location.lon})
            return _normalize.normalize_uv(data)

        key = cache_key("uv_index", location, location.lat, location.lon)
        return await self._cached(key, UVIndex, fetch, use_cache)
