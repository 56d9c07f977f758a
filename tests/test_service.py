"""Tests for the weather service (concurrent fetches and demo fallback)."""

from __future__ import annotations

import random

import httpx
import pytest
import respx

from bucharest_weather.cache import MemoryCache
from bucharest_weather.client import AsyncWeatherClient
from bucharest_weather.exceptions import NotFoundError, WeatherAPIError
from bucharest_weather.service import WeatherService
from tests.conftest import BASE_URL, SAMPLE_AIR, SAMPLE_CURRENT, SAMPLE_FORECAST, SAMPLE_UV, RecordingSleep


def _service(clock, location) -> WeatherService:
    client = AsyncWeatherClient(api_key="test-key", cache=MemoryCache(clock=clock), sleep=RecordingSleep())
    return WeatherService(client, location, rng=random.Random(0))


def _mock_all(**overrides: httpx.Response) -> respx.Route:
    """Mock every endpoint with sample data; *overrides* maps an endpoint to its response."""
    samples = {"weather": SAMPLE_CURRENT, "air_pollution": SAMPLE_AIR, "uvi": SAMPLE_UV, "forecast": SAMPLE_FORECAST}
    routes = {
        path: respx.get(f"{BASE_URL}/{path}").mock(
            return_value=overrides[path] if path in overrides else httpx.Response(200, json=sample)
        )
        for path, sample in samples.items()
    }
    return routes["forecast"]


class TestConditions:
    @respx.mock
    @pytest.mark.asyncio
    async def test_current_only(self, clock, location) -> None:
        forecast_route = _mock_all()
        service = _service(clock, location)
        async with service.client:
            result = await service.conditions()
        assert result.weather.temp == 22
        assert result.forecast == ()
        assert result.air_quality is not None and result.air_quality.aqi == 2
        assert result.uv_index is not None and result.uv_index.uv_index == 7.2
        assert result.demo is False
        assert not forecast_route.called

    @respx.mock
    @pytest.mark.asyncio
    async def test_with_forecast(self, clock, location) -> None:
        _mock_all()
        service = _service(clock, location)
        async with service.client:
            result = await service.conditions(days=3)
        assert len(result.forecast) == 3
        assert result.insights.trend is not None

    @respx.mock
    @pytest.mark.asyncio
    async def test_uv_alert_reaches_insights(self, clock, location) -> None:
        _mock_all()
        service = _service(clock, location)
        async with service.client:
            result = await service.conditions()
        assert any("UV" in alert.message for alert in result.insights.alerts)

    @respx.mock
    @pytest.mark.asyncio
    async def test_optional_failures_degrade(self, clock, location) -> None:
        _mock_all(air_pollution=httpx.Response(503), uvi=httpx.Response(404))
        service = _service(clock, location)
        async with service.client:
            result = await service.conditions()
        assert result.air_quality is None
        assert result.uv_index is None
        assert result.weather.temp == 22

    @respx.mock
    @pytest.mark.asyncio
    async def test_forecast_failure_raises(self, clock, location) -> None:
        _mock_all(forecast=httpx.Response(404, json={"cod": "404", "message": "city not found"}))
        service = _service(clock, location)
        async with service.client:
            with pytest.raises(NotFoundError):
                await service.conditions(days=2)

    @respx.mock
    @pytest.mark.asyncio
    async def test_current_failure_raises(self, clock, location) -> None:
        _mock_all(weather=httpx.Response(500))
        service = _service(clock, location)
        async with service.client:
            with pytest.raises(WeatherAPIError):
                await service.conditions()

    @respx.mock
    @pytest.mark.asyncio
    async def test_rejected_key_falls_back_to_demo(self, clock, location) -> None:
        unauthorized = {"cod": 401, "message": "Invalid API key"}
        _mock_all(**{
            path: httpx.Response(401, json=unauthorized)
            for path in ("weather", "air_pollution", "uvi", "forecast")
        })
        service = _service(clock, location)
        async with service.client:
            result = await service.conditions(days=5)
        assert result.demo is True
        assert result.weather.description == "parțial înnorat"
        assert len(result.forecast) == 5


class TestDemo:
    def test_demo_without_forecast(self, clock, location) -> None:
        result = _service(clock, location).demo()
        assert result.demo is True
        assert result.forecast == ()
        assert result.insights.clothing

    def test_demo_forecast_is_seeded(self, clock, location) -> None:
        first = _service(clock, location).demo(days=3)
        second = _service(clock, location).demo(days=3)
        assert [day.temp_max for day in first.forecast] == [day.temp_max for day in second.forecast]
        assert all(day.temp_min <= day.temp_max for day in first.forecast)

