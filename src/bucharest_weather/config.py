"""Application configuration using Pydantic settings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Bucharest city centre, used for air quality and UV lookups.
BUCHAREST_LAT = 44.4268
BUCHAREST_LON = 26.1025

DEFAULT_HOME = Path.home() / ".bucharest-weather-cli"


@dataclass(frozen=True)
class LocationConfig:
    """Where and how to query; passed explicitly to every client call."""

    city: str = "Bucharest"
    country: str = "RO"
    language: str = "ro"
    units: str = "metric"
    lat: float = BUCHAREST_LAT
    lon: float = BUCHAREST_LON

    @property
    def query(self) -> str:
        return f"{self.city},{self.country}"

    @property
    def label(self) -> str:
        if self.city == "Bucharest" and self.country == "RO":
            return "București, România"
        return f"{self.city}, {self.country}"


class Settings(BaseSettings):
    """Settings with environment variable and ``.env`` support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    api_key: str = Field("demo_key", validation_alias=AliasChoices("api_key", "OPENWEATHER_API_KEY"))
    base_url: str = Field(
        "https://api.openweathermap.org/data/2.5",
        validation_alias=AliasChoices("base_url", "OPENWEATHER_BASE_URL"),
    )
    city: str = Field("Bucharest", validation_alias=AliasChoices("city", "WEATHER_CITY"))
    country: str = Field("RO", validation_alias=AliasChoices("country", "WEATHER_COUNTRY"))
    language: str = Field("ro", validation_alias=AliasChoices("language", "DEFAULT_LANGUAGE"))
    units: str = Field("metric", validation_alias=AliasChoices("units", "WEATHER_UNITS"))
    lat: float = Field(BUCHAREST_LAT, validation_alias=AliasChoices("lat", "WEATHER_LAT"))
    lon: float = Field(BUCHAREST_LON, validation_alias=AliasChoices("lon", "WEATHER_LON"))

    # Network
    timeout: float = Field(10.0, gt=0, validation_alias=AliasChoices("timeout", "TIMEOUT"))
    retry_attempts: int = Field(3, ge=0, validation_alias=AliasChoices("retry_attempts", "RETRY_ATTEMPTS"))

    # Cache
    cache_duration: int = Field(300, ge=0, validation_alias=AliasChoices("cache_duration", "CACHE_DURATION"))

    # Local state: cache entries, preferences and the API call log
    home: Path = Field(DEFAULT_HOME, validation_alias=AliasChoices("home", "BW_HOME"))

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key) and self.api_key != "demo_key"

    @property
    def cache_dir(self) -> Path:
        return self.home / "cache"

    @property
    def preferences_file(self) -> Path:
        return self.home / "template-config.json"

    @property
    def log_dir(self) -> Path:
        return self.home / "logs"

    def location(self) -> LocationConfig:
        return LocationConfig(
            city=self.city,
            country=self.country,
            language=self.language,
            units=self.units,
            lat=self.lat,
            lon=self.lon,
        )
