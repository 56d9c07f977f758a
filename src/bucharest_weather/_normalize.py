"""Conversion of raw OpenWeatherMap payloads into the shared record shapes."""

from __future__ import annotations

import math
from collections import Counter
from datetime import UTC, datetime, timedelta, timezone
from typing import Any

from pydantic import ValidationError

from bucharest_weather.exceptions import MalformedResponseError
from bucharest_weather.models.air_quality import AirQuality
from bucharest_weather.models.current import WeatherRecord
from bucharest_weather.models.forecast import ForecastDay, HourlySample
from bucharest_weather.models.uv import UVIndex

DIRECTIONS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)

AQI_DESCRIPTIONS = {
    1: "Foarte bun",
    2: "Bun",
    3: "Moderat",
    4: "Slab",
    5: "Foarte slab",
}

SAMPLES_PER_DAY = 8  # one every 3 hours
MAX_FORECAST_DAYS = 5


# ── Helpers ──────────────────────────────────────────────────────────────────


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(value + 0.5)


def round_tenth(value: float) -> float:
    return math.floor(value * 10 + 0.5) / 10


def wind_direction(degrees: float) -> str:
    """Return the 16-point compass label for a wind bearing."""
    return DIRECTIONS[round_half_up(degrees / 22.5) % 16]


def most_frequent(values: list[str]) -> str:
    """Return the most common value; on a tie the one occurring last wins."""
    if not values:
        raise ValueError("most_frequent() of an empty list")
    counts = Counter(values)
    top = max(counts.values())
    return next(v for v in reversed(values) if counts[v] == top)


def aqi_description(aqi: int) -> str:
    return AQI_DESCRIPTIONS.get(aqi, "Necunoscut")


def uv_description(uv: float) -> str:
    if uv <= 2:
        return "Scăzut"
    if uv <= 5:
        return "Moderat"
    if uv <= 7:
        return "Ridicat"
    if uv <= 10:
        return "Foarte ridicat"
    return "Extrem"


def _tz(offset_seconds: int | None) -> timezone:
    return timezone(timedelta(seconds=offset_seconds or 0))


def _local_time(epoch: int | None, offset_seconds: int | None) -> str | None:
    if epoch is None:
        return None
    return datetime.fromtimestamp(epoch, tz=_tz(offset_seconds)).strftime("%H:%M:%S")


def _now_iso(now: datetime | None) -> str:
    return (now or datetime.now(UTC)).isoformat()


def _mean(values: list[float]) -> float:
    return sum(values) / len(values)


# ── Current conditions ───────────────────────────────────────────────────────


def normalize_current(data: dict[str, Any], now: datetime | None = None) -> WeatherRecord:
    """Convert a ``/weather`` response into a WeatherRecord."""
    try:
        main = data["main"]
        condition = data["weather"][0]
        wind = data.get("wind") or {}
        rain = data.get("rain") or {}
        snow = data.get("snow") or {}
        sys_block = data.get("sys") or {}
        offset = data.get("timezone")
        wind_deg = wind.get("deg") or 0
        visibility = data.get("visibility")
        return WeatherRecord(
            temp=round_half_up(main["temp"]),
            feels_like=round_half_up(main.get("feels_like", main["temp"])),
            temp_min=round_half_up(main["temp_min"]) if "temp_min" in main else None,
            temp_max=round_half_up(main["temp_max"]) if "temp_max" in main else None,
            description=condition.get("description", ""),
            main=condition.get("main"),
            icon=condition.get("icon"),
            humidity=main["humidity"],
            pressure=main["pressure"],
            sea_level=main.get("sea_level"),
            grnd_level=main.get("grnd_level"),
            wind_speed=wind.get("speed") or 0,
            wind_deg=wind_deg,
            wind_gust=wind.get("gust") or 0,
            wind_direction=wind_direction(wind_deg),
            visibility=visibility / 1000 if visibility else 10,
            cloudiness=(data.get("clouds") or {}).get("all") or 0,
            sunrise=_local_time(sys_block.get("sunrise"), offset),
            sunset=_local_time(sys_block.get("sunset"), offset),
            rain_1h=rain.get("1h") or 0,
            rain_3h=rain.get("3h") or 0,
            snow_1h=snow.get("1h") or 0,
            snow_3h=snow.get("3h") or 0,
            timestamp=_now_iso(now),
            timezone=offset,
            coord=data.get("coord"),
        )
    except (KeyError, IndexError, TypeError, ValidationError) as exc:
        raise MalformedResponseError(f"Failed to normalize current weather: {exc}") from exc


# ── Forecast ─────────────────────────────────────────────────────────────────


def _group_by_local_date(
    samples: list[dict[str, Any]], offset: int | None,
) -> dict[str, list[tuple[datetime, dict[str, Any]]]]:
    groups: dict[str, list[tuple[datetime, dict[str, Any]]]] = {}
    tz = _tz(offset)
    for item in samples:
        moment = datetime.fromtimestamp(item["dt"], tz=tz)
        groups.setdefault(moment.date().isoformat(), []).append((moment, item))
    return groups


def _precipitation(item: dict[str, Any]) -> float:
    return (item.get("rain") or {}).get("3h") or (item.get("snow") or {}).get("3h") or 0


def _aggregate_day(entries: list[tuple[datetime, dict[str, Any]]]) -> ForecastDay:
    first_moment = entries[0][0]
    temps = [item["main"]["temp"] for _, item in entries]
    feels = [item["main"].get("feels_like", item["main"]["temp"]) for _, item in entries]
    humidity = [item["main"]["humidity"] for _, item in entries]
    winds = [(item.get("wind") or {}).get("speed") or 0 for _, item in entries]
    descriptions = [item["weather"][0]["description"] for _, item in entries]
    hourly = tuple(
        HourlySample(
            time=moment.strftime("%H:%M"),
            temp=round_half_up(item["main"]["temp"]),
            description=item["weather"][0]["description"],
            icon=item["weather"][0].get("icon"),
            humidity=item["main"]["humidity"],
            wind_speed=(item.get("wind") or {}).get("speed") or 0,
        )
        for moment, item in entries
    )
    return ForecastDay(
        date=first_moment.strftime("%d %b %Y"),
        day_name=first_moment.strftime("%A"),
        temp_min=round_half_up(min(temps)),
        temp_max=round_half_up(max(temps)),
        temp_avg=round_half_up(_mean(temps)),
        feels_like_avg=round_half_up(_mean(feels)),
        description=most_frequent(descriptions),
        humidity_avg=round_half_up(_mean(humidity)),
        wind_speed_avg=round_tenth(_mean(winds)),
        wind_speed_max=round_tenth(max(winds)),
        precipitation_total=round_tenth(sum(_precipitation(item) for _, item in entries)),
        hourly=hourly,
    )


def aggregate_forecast(data: dict[str, Any], days: int) -> list[ForecastDay]:
    """Group a ``/forecast`` response by local calendar day and summarise each day.

    Days come out in the order their first sample appears; only the first
    *days* groups are kept.
    """
    try:
        offset = (data.get("city") or {}).get("timezone")
        groups = _group_by_local_date(data["list"], offset)
        return [_aggregate_day(entries) for entries in list(groups.values())[:days]]
    except (KeyError, IndexError, TypeError, ValidationError) as exc:
        raise MalformedResponseError(f"Failed to aggregate forecast: {exc}") from exc


# ── Air quality & UV ─────────────────────────────────────────────────────────


def normalize_air_quality(data: dict[str, Any], now: datetime | None = None) -> AirQuality:
    """Convert an ``/air_pollution`` response into an AirQuality record."""
    try:
        entry = data["list"][0]
        aqi = entry["main"]["aqi"]
        components = entry.get("components") or {}
        return AirQuality(
            aqi=aqi,
            aqi_description=aqi_description(aqi),
            timestamp=_now_iso(now),
            **{name: components.get(name) for name in AirQuality.model_fields if name in components},
        )
    except (KeyError, IndexError, TypeError, ValidationError) as exc:
        raise MalformedResponseError(f"Failed to normalize air quality: {exc}") from exc


def normalize_uv(data: dict[str, Any], now: datetime | None = None) -> UVIndex:
    """Convert a ``/uvi`` response into a UVIndex record."""
    try:
        value = float(data["value"])
    except (KeyError, TypeError, ValueError) as exc:
        raise MalformedResponseError(f"Failed to normalize UV index: {exc}") from exc
    return UVIndex(uv_index=value, uv_description=uv_description(value), timestamp=_now_iso(now))
