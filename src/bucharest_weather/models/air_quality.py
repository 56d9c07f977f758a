"""Air quality model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AirQuality(BaseModel):
    """Air pollution reading; ``aqi`` is the upstream 1 (good) to 5 (very poor) scale."""

    model_config = ConfigDict(frozen=True)

    aqi: int = Field(ge=1, le=5)
    aqi_description: str
    co: float | None = None
    no: float | None = None
    no2: float | None = None
    o3: float | None = None
    so2: float | None = None
    pm2_5: float | None = None
    pm10: float | None = None
    nh3: float | None = None
    timestamp: str | None = None
