"""Weather data models."""

from bucharest_weather.models.air_quality import AirQuality
from bucharest_weather.models.current import Coordinates, WeatherRecord
from bucharest_weather.models.forecast import ForecastDay, HourlySample
from bucharest_weather.models.insights import Alert, AlertLevel, Insights
from bucharest_weather.models.snapshot import SnapshotMetadata, WeatherSnapshot
from bucharest_weather.models.uv import UVIndex

__all__ = [
    "AirQuality",
    "Alert",
    "AlertLevel",
    "Coordinates",
    "ForecastDay",
    "HourlySample",
    "Insights",
    "SnapshotMetadata",
    "UVIndex",
    "WeatherRecord",
    "WeatherSnapshot",
]
