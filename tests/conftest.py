"""Shared test fixtures and sample API responses."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import pytest

from bucharest_weather import api_logging
from bucharest_weather._normalize import aggregate_forecast, normalize_current
from bucharest_weather.api_logging import set_log_dir
from bucharest_weather.config import LocationConfig
from bucharest_weather.models import ForecastDay, WeatherRecord

BASE_URL = "https://api.openweathermap.org/data/2.5"

FIXED_NOW = datetime(2024, 6, 1, 10, 0, tzinfo=UTC)

# 2024-06-01 00:00:00 UTC; Bucharest is UTC+3 in summer.
JUNE_1_UTC = 1717200000
BUCHAREST_OFFSET = 10800
HOUR = 3600


SAMPLE_CURRENT = {
    "coord": {"lon": 26.1025, "lat": 44.4268},
    "weather": [{"id": 802, "main": "Clouds", "description": "nori împrăștiați", "icon": "03d"}],
    "base": "stations",
    "main": {
        "temp": 21.6,
        "feels_like": 21.4,
        "temp_min": 20.1,
        "temp_max": 23.3,
        "pressure": 1015,
        "humidity": 58,
        "sea_level": 1015,
        "grnd_level": 1005,
    },
    "visibility": 10000,
    "wind": {"speed": 4.1, "deg": 120, "gust": 6.2},
    "clouds": {"all": 40},
    "dt": 1717236000,
    "sys": {"country": "RO", "sunrise": 1717208194, "sunset": 1717263114},
    "timezone": BUCHAREST_OFFSET,
    "id": 683506,
    "name": "Bucharest",
    "cod": 200,
}


def forecast_item(
    dt: int,
    temp: float,
    description: str,
    humidity: int = 60,
    wind: float = 3.0,
    rain: float | None = None,
    icon: str = "03d",
) -> dict[str, Any]:
    item: dict[str, Any] = {
        "dt": dt,
        "main": {"temp": temp, "feels_like": temp - 1, "humidity": humidity, "pressure": 1012},
        "weather": [{"main": "Clouds", "description": description, "icon": icon}],
        "wind": {"speed": wind, "deg": 90},
    }
    if rain is not None:
        item["rain"] = {"3h": rain}
    return item


# Local days: Sat 1 Jun (3 samples), Sun 2 Jun (4 samples), Mon 3 Jun (2 samples).
# 21:00 UTC on 1 Jun is already 2 Jun in Bucharest.
SAMPLE_FORECAST = {
    "cod": "200",
    "cnt": 9,
    "list": [
        forecast_item(JUNE_1_UTC + 9 * HOUR, 18.2, "nori împrăștiați", humidity=55, wind=2.0),
        forecast_item(JUNE_1_UTC + 12 * HOUR, 22.4, "cer senin", humidity=50, wind=3.0, icon="01d"),
        forecast_item(JUNE_1_UTC + 15 * HOUR, 24.6, "nori împrăștiați", humidity=62, wind=4.5),
        forecast_item(JUNE_1_UTC + 21 * HOUR, 16.0, "ploaie ușoară", humidity=80, wind=5.0, rain=1.2),
        forecast_item(JUNE_1_UTC + 24 * HOUR, 15.0, "cer senin", humidity=78, wind=2.5),
        forecast_item(JUNE_1_UTC + 27 * HOUR, 19.0, "ploaie ușoară", humidity=70, wind=3.5, rain=0.6),
        forecast_item(JUNE_1_UTC + 30 * HOUR, 24.0, "cer senin", humidity=52, wind=4.0),
        forecast_item(JUNE_1_UTC + 45 * HOUR, 20.0, "nori", humidity=60, wind=1.0),
        forecast_item(JUNE_1_UTC + 48 * HOUR, 27.0, "nori", humidity=40, wind=2.0),
    ],
    "city": {
        "id": 683506,
        "name": "Bucharest",
        "coord": {"lat": 44.4268, "lon": 26.1025},
        "country": "RO",
        "timezone": BUCHAREST_OFFSET,
    },
}

SAMPLE_AIR = {
    "coord": {"lon": 26.1025, "lat": 44.4268},
    "list": [
        {
            "main": {"aqi": 2},
            "components": {
                "co": 230.3,
                "no": 0.1,
                "no2": 12.4,
                "o3": 68.7,
                "so2": 2.1,
                "pm2_5": 8.5,
                "pm10": 14.2,
                "nh3": 1.3,
            },
            "dt": 1717236000,
        }
    ],
}

SAMPLE_UV = {
    "lat": 44.43,
    "lon": 26.1,
    "date_iso": "2024-06-01T12:00:00Z",
    "date": 1717243200,
    "value": 7.2,
}


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    """Async sleep stand-in that records requested delays instead of waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture(autouse=True)
def _isolated_api_log(tmp_path):
    """Keep the API call log out of the real home directory."""
    previous = api_logging._LOG_DIR
    set_log_dir(tmp_path / "logs")
    yield tmp_path / "logs"
    set_log_dir(previous)


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture
def location() -> LocationConfig:
    return LocationConfig()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def weather() -> WeatherRecord:
    return normalize_current(SAMPLE_CURRENT, now=FIXED_NOW)


@pytest.fixture
def forecast() -> list[ForecastDay]:
    return aggregate_forecast(SAMPLE_FORECAST, days=5)
