"""Export a weather snapshot as JSON or a single CSV row."""

from __future__ import annotations

import csv
import io
from datetime import UTC, datetime
from pathlib import Path
from typing import Literal

from bucharest_weather.config import LocationConfig
from bucharest_weather.models.current import Coordinates
from bucharest_weather.models.snapshot import SnapshotMetadata, WeatherSnapshot
from bucharest_weather.service import Conditions

ExportFormat = Literal["json", "csv"]
FORMATS: tuple[ExportFormat, ...] = ("json", "csv")

CSV_FIELDS = (
    "date",
    "location",
    "temperature",
    "feels_like",
    "description",
    "humidity",
    "pressure",
    "wind_speed",
    "wind_direction",
    "visibility",
    "cloudiness",
    "air_quality",
    "uv_index",
    "clothing",
    "alerts",
    "template",
    "theme",
    "source",
)


def build_snapshot(
    conditions: Conditions,
    location: LocationConfig,
    template: str,
    theme: str,
    now: datetime | None = None,
) -> WeatherSnapshot:
    generated_at = (now or datetime.now(UTC)).isoformat()
    return WeatherSnapshot(
        timestamp=generated_at,
        location=location.label,
        coordinates=Coordinates(lat=location.lat, lon=location.lon),
        current=conditions.weather,
        forecast=conditions.forecast,
        air_quality=conditions.air_quality,
        uv_index=conditions.uv_index,
        insights=conditions.insights,
        metadata=SnapshotMetadata(
            template=template,
            theme=theme,
            generated_at=generated_at,
            source="Demo data" if conditions.demo else "OpenWeatherMap",
        ),
    )


def to_json(snapshot: WeatherSnapshot) -> str:
    return snapshot.model_dump_json(indent=2)


def from_json(text: str) -> WeatherSnapshot:
    return WeatherSnapshot.model_validate_json(text)


def csv_row(snapshot: WeatherSnapshot) -> dict[str, object]:
    """Flatten a snapshot into the columns of :data:`CSV_FIELDS`."""
    current = snapshot.current
    insights = snapshot.insights
    return {
        "date": snapshot.timestamp,
        "location": snapshot.location,
        "temperature": current.temp,
        "feels_like": current.feels_like,
        "description": current.description,
        "humidity": current.humidity,
        "pressure": current.pressure,
        "wind_speed": current.wind_speed,
        "wind_direction": current.wind_direction or "",
        "visibility": current.visibility,
        "cloudiness": current.cloudiness,
        "air_quality": snapshot.air_quality.aqi if snapshot.air_quality else "",
        "uv_index": snapshot.uv_index.uv_index if snapshot.uv_index else "",
        "clothing": insights.clothing if insights else "",
        "alerts": "; ".join(alert.message for alert in insights.alerts) if insights else "",
        "template": snapshot.metadata.template,
        "theme": snapshot.metadata.theme,
        "source": snapshot.metadata.source,
    }


def to_csv(snapshot: WeatherSnapshot) -> str:
    """Header plus one data row."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_FIELDS, lineterminator="\n")
    writer.writeheader()
    writer.writerow(csv_row(snapshot))
    return buffer.getvalue()


def serialize(snapshot: WeatherSnapshot, fmt: ExportFormat) -> str:
    if fmt == "csv":
        return to_csv(snapshot)
    return to_json(snapshot)


def default_filename(fmt: ExportFormat, now: datetime | None = None) -> str:
    stamp = (now or datetime.now()).strftime("%Y-%m-%d_%H-%M")
    return f"bucharest-weather-{stamp}.{fmt}"


def write_export(snapshot: WeatherSnapshot, fmt: ExportFormat, output: Path) -> Path:
    """Write the serialized snapshot; a directory *output* gets a timestamped name."""
    target = output / default_filename(fmt) if output.is_dir() else output
    target.write_text(serialize(snapshot, fmt), encoding="utf-8")
    return target
