"""Current conditions model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Coordinates(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float
    lon: float


class WeatherRecord(BaseModel):
    """Snapshot of current conditions, normalized from the upstream response."""

    model_config = ConfigDict(frozen=True)

    temp: int
    feels_like: int
    temp_min: int | None = None
    temp_max: int | None = None
    description: str
    main: str | None = None
    icon: str | None = None

    humidity: int = Field(ge=0, le=100)
    pressure: float
    sea_level: float | None = None
    grnd_level: float | None = None

    wind_speed: float = 0.0
    wind_deg: float = 0.0
    wind_gust: float = 0.0
    wind_direction: str | None = None

    visibility: float = 10.0
    cloudiness: int = Field(default=0, ge=0, le=100)

    sunrise: str | None = None
    sunset: str | None = None

    rain_1h: float = 0.0
    rain_3h: float = 0.0
    snow_1h: float = 0.0
    snow_3h: float = 0.0

    timestamp: str | None = None
    timezone: int | None = None
    coord: Coordinates | None = None
    from_cache: bool = False

    @property
    def has_rain(self) -> bool:
        return self.rain_1h > 0 or self.rain_3h > 0

    @property
    def has_snow(self) -> bool:
        return self.snow_1h > 0 or self.snow_3h > 0
