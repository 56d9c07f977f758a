"""UV index model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class UVIndex(BaseModel):
    model_config = ConfigDict(frozen=True)

    uv_index: float
    uv_description: str
    timestamp: str | None = None
