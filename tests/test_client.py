"""Tests for the async weather client."""

from __future__ import annotations

import httpx
import pytest
import respx

from bucharest_weather.cache import FileCache, MemoryCache
from bucharest_weather.client import AsyncWeatherClient, cache_key
from bucharest_weather.config import LocationConfig
from bucharest_weather.exceptions import CredentialError, MalformedResponseError, NotFoundError
from bucharest_weather.models import AirQuality, ForecastDay, UVIndex, WeatherRecord
from tests.conftest import BASE_URL, SAMPLE_AIR, SAMPLE_CURRENT, SAMPLE_FORECAST, SAMPLE_UV, RecordingSleep


def _client(clock, cache=None) -> AsyncWeatherClient:
    return AsyncWeatherClient(
        api_key="test-key",
        cache=cache if cache is not None else MemoryCache(clock=clock),
        sleep=RecordingSleep(),
    )


class TestCacheKey:
    def test_encodes_location_and_extras(self, location: LocationConfig) -> None:
        assert cache_key("forecast", location, 3) == "forecast:bucharest:ro:metric:ro:3"

    def test_differs_by_units(self, location: LocationConfig) -> None:
        imperial = LocationConfig(units="imperial")
        assert cache_key("current", location) != cache_key("current", imperial)


class TestCurrent:
    @respx.mock
    @pytest.mark.asyncio
    async def test_current(self, clock, location) -> None:
        route = respx.get(f"{BASE_URL}/weather").mock(
            return_value=httpx.Response(200, json=SAMPLE_CURRENT)
        )
        async with _client(clock) as client:
            record = await client.current(location)
        assert isinstance(record, WeatherRecord)
        assert record.temp == 22
        assert record.from_cache is False
        params = route.calls.last.request.url.params
        assert params["q"] == "Bucharest,RO"
        assert params["units"] == "metric"
        assert params["lang"] == "ro"
        assert params["appid"] == "test-key"

    @respx.mock
    @pytest.mark.asyncio
    async def test_second_call_served_from_cache(self, clock, location) -> None:
        route = respx.get(f"{BASE_URL}/weather").mock(
            return_value=httpx.Response(200, json=SAMPLE_CURRENT)
        )
        async with _client(clock) as client:
            first = await client.current(location)
            second = await client.current(location)
        assert route.call_count == 1
        assert second.from_cache is True
        assert second.model_copy(update={"from_cache": False}) == first

    @respx.mock
    @pytest.mark.asyncio
    async def test_expired_entry_refetches(self, clock, location) -> None:
        route = respx.get(f"{BASE_URL}/weather").mock(
            return_value=httpx.Response(200, json=SAMPLE_CURRENT)
        )
        async with _client(clock) as client:
            await client.current(location)
            clock.advance(301)
            record = await client.current(location)
        assert route.call_count == 2
        assert record.from_cache is False

    @respx.mock
    @pytest.mark.asyncio
    async def test_use_cache_false_bypasses_read(self, clock, location) -> None:
        route = respx.get(f"{BASE_URL}/weather").mock(
            return_value=httpx.Response(200, json=SAMPLE_CURRENT)
        )
        async with _client(clock) as client:
            await client.current(location)
            await client.current(location, use_cache=False)
            assert client.cache_stats()["entries"] == 1
        assert route.call_count == 2

    @respx.mock
    @pytest.mark.asyncio
    async def test_file_cache_shared_between_clients(self, clock, location, tmp_path) -> None:
        route = respx.get(f"{BASE_URL}/weather").mock(
            return_value=httpx.Response(200, json=SAMPLE_CURRENT)
        )
        async with _client(clock, FileCache(tmp_path, clock=clock)) as client:
            await client.current(location)
        async with _client(clock, FileCache(tmp_path, clock=clock)) as client:
            record = await client.current(location)
        assert route.call_count == 1
        assert record.from_cache is True

    @respx.mock
    @pytest.mark.asyncio
    async def test_stale_cached_shape_is_refetched(self, clock, location) -> None:
        route = respx.get(f"{BASE_URL}/weather").mock(
            return_value=httpx.Response(200, json=SAMPLE_CURRENT)
        )
        cache = MemoryCache(clock=clock)
        cache.set(cache_key("current", location), {"unexpected": True})
        async with _client(clock, cache) as client:
            record = await client.current(location)
        assert route.call_count == 1
        assert record.temp == 22

    @respx.mock
    @pytest.mark.asyncio
    async def test_bad_key(self, clock, location) -> None:
        respx.get(f"{BASE_URL}/weather").mock(
            return_value=httpx.Response(401, json={"cod": 401, "message": "Invalid API key"})
        )
        async with _client(clock) as client:
            with pytest.raises(CredentialError):
                await client.current(location)
            assert client.cache_stats()["entries"] == 0

    @respx.mock
    @pytest.mark.asyncio
    async def test_unknown_city(self, clock) -> None:
        respx.get(f"{BASE_URL}/weather").mock(
            return_value=httpx.Response(404, json={"cod": "404", "message": "city not found"})
        )
        async with _client(clock) as client:
            with pytest.raises(NotFoundError):
                await client.current(LocationConfig(city="Atlantis"))

    @respx.mock
    @pytest.mark.asyncio
    async def test_non_object_body(self, clock, location) -> None:
        respx.get(f"{BASE_URL}/weather").mock(return_value=httpx.Response(200, json=[1, 2]))
        async with _client(clock) as client:
            with pytest.raises(MalformedResponseError):
                await client.current(location)


class TestForecast:
    @respx.mock
    @pytest.mark.asyncio
    async def test_forecast(self, clock, location) -> None:
        route = respx.get(f"{BASE_URL}/forecast").mock(
            return_value=httpx.Response(200, json=SAMPLE_FORECAST)
        )
        async with _client(clock) as client:
            days = await client.forecast(location, days=3)
        assert len(days) == 3
        assert all(isinstance(day, ForecastDay) for day in days)
        assert route.calls.last.request.url.params["cnt"] == "24"

    @respx.mock
    @pytest.mark.asyncio
    async def test_forecast_cached_per_day_count(self, clock, location) -> None:
        route = respx.get(f"{BASE_URL}/forecast").mock(
            return_value=httpx.Response(200, json=SAMPLE_FORECAST)
        )
        async with _client(clock) as client:
            first = await client.forecast(location, days=2)
            again = await client.forecast(location, days=2)
            await client.forecast(location, days=3)
        assert again == first
        assert route.call_count == 2

    @pytest.mark.parametrize("days", [0, 6, -1])
    @pytest.mark.asyncio
    async def test_days_out_of_range(self, clock, location, days: int) -> None:
        async with _client(clock) as client:
            with pytest.raises(ValueError):
                await client.forecast(location, days=days)


class TestAirQualityAndUV:
    @respx.mock
    @pytest.mark.asyncio
    async def test_air_quality_uses_coordinates(self, clock, location) -> None:
        route = respx.get(f"{BASE_URL}/air_pollution").mock(
            return_value=httpx.Response(200, json=SAMPLE_AIR)
        )
        async with _client(clock) as client:
            air = await client.air_quality(location)
        assert isinstance(air, AirQuality)
        assert air.aqi == 2
        params = route.calls.last.request.url.params
        assert params["lat"] == "44.4268"
        assert params["lon"] == "26.1025"

    @respx.mock
    @pytest.mark.asyncio
    async def test_uv_index(self, clock, location) -> None:
        respx.get(f"{BASE_URL}/uvi").mock(return_value=httpx.Response(200, json=SAMPLE_UV))
        async with _client(clock) as client:
            uv = await client.uv_index(location)
            cached = await client.uv_index(location)
        assert isinstance(uv, UVIndex)
        assert uv.uv_index == 7.2
        assert cached == uv

    @respx.mock
    @pytest.mark.asyncio
    async def test_clear_cache(self, clock, location) -> None:
        route = respx.get(f"{BASE_URL}/uvi").mock(return_value=httpx.Response(200, json=SAMPLE_UV))
        async with _client(clock) as client:
            await client.uv_index(location)
            client.clear_cache()
            await client.uv_index(location)
        assert route.call_count == 2
