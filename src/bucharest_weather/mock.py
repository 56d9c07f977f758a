"""Demo data used when no valid API key is configured."""

from __future__ import annotations

import random
from datetime import UTC, datetime, timedelta

from bucharest_weather._normalize import round_half_up, round_tenth
from bucharest_weather.config import BUCHAREST_LAT, BUCHAREST_LON
from bucharest_weather.models.current import Coordinates, WeatherRecord
from bucharest_weather.models.forecast import ForecastDay

_DESCRIPTIONS = ("însorit", "parțial înnorat", "înnorat", "ploaie ușoară")


def mock_weather(now: datetime | None = None) -> WeatherRecord:
    """A mild, partly cloudy Bucharest afternoon."""
    return WeatherRecord(
        temp=22,
        feels_like=24,
        temp_min=18,
        temp_max=25,
        description="parțial înnorat",
        main="Clouds",
        icon="02d",
        humidity=65,
        pressure=1013,
        wind_speed=3.2,
        wind_deg=45,
        wind_direction="NE",
        visibility=10,
        cloudiness=40,
        sunrise="06:45:00",
        sunset="19:30:00",
        timestamp=(now or datetime.now(UTC)).isoformat(),
        coord=Coordinates(lat=BUCHAREST_LAT, lon=BUCHAREST_LON),
    )


def mock_forecast(
    days: int = 5,
    rng: random.Random | None = None,
    start: datetime | None = None,
) -> list[ForecastDay]:
    rng = rng or random.Random()
    start = start or datetime.now(UTC)
    forecast: list[ForecastDay] = []
    for offset in range(days):
        date = start + timedelta(days=offset)
        temp_min = round_half_up(18 + rng.random() * 5)
        temp_max = round_half_up(23 + rng.random() * 7)
        forecast.append(ForecastDay(
            date=date.strftime("%d %b %Y"),
            day_name=date.strftime("%A"),
            temp_min=temp_min,
            temp_max=temp_max,
            temp_avg=round_half_up((temp_min + temp_max) / 2),
            description=rng.choice(_DESCRIPTIONS),
            humidity_avg=round_half_up(60 + rng.random() * 20),
            wind_speed_avg=round_tenth(2 + rng.random() * 3),
            precipitation_total=round_tenth(rng.random() * 5),
        ))
    return forecast
