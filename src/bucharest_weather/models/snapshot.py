"""Export envelope model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from bucharest_weather.models.air_quality import AirQuality
from bucharest_weather.models.current import Coordinates, WeatherRecord
from bucharest_weather.models.forecast import ForecastDay
from bucharest_weather.models.insights import Insights
from bucharest_weather.models.uv import UVIndex


class SnapshotMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    template: str
    theme: str
    generated_at: str
    source: str = "OpenWeatherMap"
    generated_by: str = "Bucharest Weather CLI"


class WeatherSnapshot(BaseModel):
    """Everything one export writes: conditions, forecast, advice and provenance."""

    model_config = ConfigDict(frozen=True)

    timestamp: str
    location: str
    coordinates: Coordinates
    current: WeatherRecord
    forecast: tuple[ForecastDay, ...] = ()
    air_quality: AirQuality | None = None
    uv_index: UVIndex | None = None
    insights: Insights | None = None
    metadata: SnapshotMetadata
