"""Bucharest Weather: typed OpenWeatherMap client, weather insights and terminal templates."""

from bucharest_weather.cache import FileCache, MemoryCache, ResponseCache
from bucharest_weather.client import AsyncWeatherClient
from bucharest_weather.config import LocationConfig, Settings
from bucharest_weather.exceptions import (
    CredentialError,
    MalformedResponseError,
    NotFoundError,
    RateLimitError,
    UnknownOptionError,
    WeatherAPIError,
    WeatherConnectionError,
    WeatherError,
    WeatherTimeoutError,
)

__all__ = [
    "AsyncWeatherClient",
    "CredentialError",
    "FileCache",
    "LocationConfig",
    "MalformedResponseError",
    "MemoryCache",
    "NotFoundError",
    "RateLimitError",
    "ResponseCache",
    "Settings",
    "UnknownOptionError",
    "WeatherAPIError",
    "WeatherConnectionError",
    "WeatherError",
    "WeatherTimeoutError",
]

__version__ = "2.0.0"
