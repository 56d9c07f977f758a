"""Weather service: concurrent fetches, demo fallback and insight generation."""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Any

from bucharest_weather.api_logging import log_service_call
from bucharest_weather.client import AsyncWeatherClient
from bucharest_weather.config import LocationConfig
from bucharest_weather.exceptions import CredentialError
from bucharest_weather.insights import generate_insights
from bucharest_weather.mock import mock_forecast, mock_weather
from bucharest_weather.models.air_quality import AirQuality
from bucharest_weather.models.current import WeatherRecord
from bucharest_weather.models.forecast import ForecastDay
from bucharest_weather.models.insights import Insights
from bucharest_weather.models.uv import UVIndex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Conditions:
    """Everything one render pass needs."""

    weather: WeatherRecord
    insights: Insights
    forecast: tuple[ForecastDay, ...] = ()
    air_quality: AirQuality | None = None
    uv_index: UVIndex | None = None
    demo: bool = False


def _optional(name: str, outcome: Any) -> Any:
    """Unwrap a gathered result, degrading failures to None."""
    if isinstance(outcome, BaseException):
        if not isinstance(outcome, Exception):
            raise outcome
        logger.warning("%s unavailable: %s", name, outcome)
        return None
    return outcome


class WeatherService:
    """Fetch current conditions (plus optional extras) and derive insights.

    Current weather, air quality, UV index and the forecast are independent
    requests and run concurrently. Air quality and UV are best-effort. A
    rejected API key switches the whole result to demo data.
    """

    def __init__(
        self,
        client: AsyncWeatherClient,
        location: LocationConfig,
        rng: random.Random | None = None,
    ) -> None:
        self.client = client
        self.location = location
        self._rng = rng or random.Random()

    def demo(self, days: int = 0) -> Conditions:
        """Demo conditions, used when no API key is configured or it is rejected."""
        weather = mock_weather()
        forecast = tuple(mock_forecast(days, self._rng)) if days else ()
        return Conditions(
            weather=weather,
            forecast=forecast,
            insights=generate_insights(weather, forecast, rng=self._rng),
            demo=True,
        )

    @log_service_call
    async def conditions(self, days: int = 0, use_cache: bool = True) -> Conditions:
        """Return current conditions, with a *days*-long forecast when days > 0."""
        requests = [
            self.client.current(self.location, use_cache=use_cache),
            self.client.air_quality(self.location, use_cache=use_cache),
            self.client.uv_index(self.location, use_cache=use_cache),
        ]
        if days:
            requests.append(self.client.forecast(self.location, days=days, use_cache=use_cache))

        outcomes = await asyncio.gather(*requests, return_exceptions=True)
        current = outcomes[0]
        if isinstance(current, CredentialError):
            logger.warning("API key rejected, falling back to demo data: %s", current)
            return self.demo(days)
        if isinstance(current, BaseException):
            raise current

        forecast: tuple[ForecastDay, ...] = ()
        if days:
            if isinstance(outcomes[3], BaseException):
                raise outcomes[3]
            forecast = tuple(outcomes[3])

        air_quality = _optional("air quality", outcomes[1])
        uv_index = _optional("UV index", outcomes[2])
        return Conditions(
            weather=current,
            forecast=forecast,
            air_quality=air_quality,
            uv_index=uv_index,
            insights=generate_insights(current, forecast, air_quality, uv_index, rng=self._rng),
        )
