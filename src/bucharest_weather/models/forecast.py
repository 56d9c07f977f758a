"""Daily forecast models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class HourlySample(BaseModel):
    """One three-hour sample inside a forecast day."""

    model_config = ConfigDict(frozen=True)

    time: str
    temp: int
    description: str
    icon: str | None = None
    humidity: int | None = None
    wind_speed: float = 0.0


class ForecastDay(BaseModel):
    """Aggregate of the samples that fall on one local calendar day."""

    model_config = ConfigDict(frozen=True)

    date: str
    day_name: str
    temp_min: int
    temp_max: int
    temp_avg: int
    feels_like_avg: int | None = None
    description: str
    humidity_avg: int | None = None
    wind_speed_avg: float | None = None
    wind_speed_max: float | None = None
    precipitation_total: float = 0.0
    hourly: tuple[HourlySample, ...] = ()
