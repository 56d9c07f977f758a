"""Rule-based weather advice: clothing, activities, alerts, health and places.

Everything here is a pure function of its inputs. Rule tables are immutable
and ordered; the only non-determinism is the choice among equally valid
activities and places, drawn from an injected ``random.Random``.
"""

from __future__ import annotations

import random
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from bucharest_weather.models.air_quality import AirQuality
from bucharest_weather.models.current import WeatherRecord
from bucharest_weather.models.forecast import ForecastDay
from bucharest_weather.models.insights import Alert, Insights
from bucharest_weather.models.uv import UVIndex

WeatherType = Literal["sunny", "cloudy", "rainy", "snowy"]


@dataclass(frozen=True)
class ClothingBand:
    """Temperature range ``[min_temp, max_temp)``; an open end is None."""

    name: str
    advice: str
    min_temp: float | None = None
    max_temp: float | None = None

    def matches(self, temp: float) -> bool:
        if self.min_temp is not None and temp < self.min_temp:
            return False
        if self.max_temp is not None and temp >= self.max_temp:
            return False
        return True


CLOTHING_BANDS: tuple[ClothingBand, ...] = (
    ClothingBand("hot", "👕 Îmbrăcăminte ușoară, tricou, pantaloni scurți", min_temp=25),
    ClothingBand("warm", "👔 Cămașă subțire, pantaloni lungi", min_temp=20, max_temp=25),
    ClothingBand("mild", "🧥 Jachetă ușoară, bluză", min_temp=15, max_temp=20),
    ClothingBand("cool", "🧥 Jachetă groasă, pulover", min_temp=10, max_temp=15),
    ClothingBand("cold", "🧥 Haină de iarnă, căciulă", min_temp=5, max_temp=10),
    ClothingBand("freezing", "🧥 Echipament de iarnă complet", max_temp=5),
)
DEFAULT_CLOTHING = "👕 Îmbrăcăminte standard"

WINDY_SPEED = 10.0  # m/s
HUMID_PERCENT = 80

ACTIVITIES: dict[WeatherType, tuple[str, ...]] = {
    "sunny": ("🚴 Cycling în parc", "🏃 Jogging", "☕ Terasă la cafea"),
    "cloudy": ("🚶 Plimbare", "🛍️ Shopping", "📚 Citit în parc"),
    "rainy": ("🏠 Activități indoor", "🎬 Cinema", "☕ Cafenea"),
    "snowy": ("⛄ Activități de iarnă", "🏠 Acasă cu ceai cald"),
}

LOCATIONS: dict[WeatherType, tuple[str, ...]] = {
    "sunny": (
        "Parcul Herăstrău",
        "Grădina Cișmigiu",
        "Parcul Carol",
        "Parcul Tineretului",
        "Centrul Vechi",
    ),
    "cloudy": (
        "Calea Victoriei",
        "Muzeul Satului",
        "Grădina Botanică",
        "Piața Universității",
    ),
    "rainy": (
        "Muzeul Național de Artă",
        "Ateneul Român",
        "Cărturești Carusel",
        "Muzeul Antipa",
        "AFI Cotroceni",
    ),
    "snowy": (
        "Palatul Parlamentului",
        "Târgul din Piața Constituției",
        "Cafenelele din Centrul Vechi",
    ),
}
LOCATION_COUNT = 3

# Upstream condition groups, then icon prefixes, then description keywords.
_CONDITION_TYPES: dict[str, WeatherType] = {
    "Clear": "sunny",
    "Clouds": "cloudy",
    "Rain": "rainy",
    "Drizzle": "rainy",
    "Thunderstorm": "rainy",
    "Snow": "snowy",
}
_ICON_TYPES: dict[str, WeatherType] = {
    "01": "sunny",
    "09": "rainy",
    "10": "rainy",
    "11": "rainy",
    "13": "snowy",
}
# Keywords match at the start of a word ("soare" must not match "ninsoare").
_KEYWORD_TYPES: tuple[tuple[WeatherType, re.Pattern[str]], ...] = tuple(
    (weather_type, re.compile(r"\b(?:" + "|".join(keywords) + ")"))
    for weather_type, keywords in (
        ("snowy", ("zăpadă", "ninsoare", "snow")),
        ("rainy", ("ploaie", "burniță", "averse", "furtună", "rain", "drizzle", "storm", "thunder")),
        ("sunny", ("senin", "soare", "clear", "sun")),
    )
)

NORMAL_CONDITIONS = "✅ Condiții normale"


# ── Clothing ─────────────────────────────────────────────────────────────────


def clothing_advice(temp: float, weather: WeatherRecord | None = None) -> str:
    """Return the clothing advice for *temp*.

    With a full record, clauses for wind, rain, humidity and snow are appended.
    """
    advice = next((band.advice for band in CLOTHING_BANDS if band.matches(temp)), DEFAULT_CLOTHING)
    if weather is None:
        return advice

    extras: list[str] = []
    if weather.wind_speed > WINDY_SPEED:
        extras.append("geacă de vânt")
    if weather.has_rain:
        extras.append("umbrelă")
    if weather.humidity > HUMID_PERCENT:
        extras.append("materiale respirabile")
    if weather.has_snow:
        extras.append("încălțăminte impermeabilă")
    return " + ".join([advice, *extras])


# ── Activities & places ──────────────────────────────────────────────────────


def classify_weather(weather: WeatherRecord) -> WeatherType:
    """Bucket a record into sunny, cloudy, rainy or snowy."""
    if weather.main in _CONDITION_TYPES:
        return _CONDITION_TYPES[weather.main]
    if weather.icon and weather.icon[:2] in _ICON_TYPES:
        return _ICON_TYPES[weather.icon[:2]]
    description = weather.description.lower()
    for weather_type, pattern in _KEYWORD_TYPES:
        if pattern.search(description):
            return weather_type
    return "cloudy"


def activity_suggestion(weather: WeatherRecord, rng: random.Random) -> str:
    return rng.choice(ACTIVITIES[classify_weather(weather)])


def location_suggestions(weather: WeatherRecord, rng: random.Random) -> tuple[str, ...]:
    candidates = LOCATIONS[classify_weather(weather)]
    return tuple(rng.sample(candidates, k=min(LOCATION_COUNT, len(candidates))))


# ── Alerts ───────────────────────────────────────────────────────────────────


def _temperature_alert(weather: WeatherRecord) -> Alert | None:
    if weather.temp < 0:
        return Alert(level="danger", message="🥶 ATENȚIE: Temperaturi sub zero!")
    if weather.temp >= 35:
        return Alert(level="danger", message="🔥 ATENȚIE: Caniculă!")
    if weather.temp >= 30:
        return Alert(level="warning", message="🔥 ATENȚIE: Temperaturi ridicate!")
    return None


def _wind_alert(weather: WeatherRecord) -> Alert | None:
    if weather.wind_speed > 17:
        return Alert(level="danger", message="🌪️ Vânt foarte puternic")
    if weather.wind_speed > WINDY_SPEED:
        return Alert(level="warning", message="💨 Vânt puternic")
    return None


def _precipitation_alert(weather: WeatherRecord) -> Alert | None:
    if weather.rain_1h >= 7.6:
        return Alert(level="warning", message="🌧️ Ploaie torențială")
    if weather.snow_1h >= 2.5:
        return Alert(level="warning", message="🌨️ Ninsoare abundentă")
    return None


def _humidity_alert(weather: WeatherRecord) -> Alert | None:
    if weather.humidity > HUMID_PERCENT:
        return Alert(level="info", message="💧 Umiditate ridicată")
    return None


def _pressure_alert(weather: WeatherRecord) -> Alert | None:
    if weather.pressure < 1000:
        return Alert(level="info", message="📉 Presiune atmosferică scăzută")
    return None


def _air_quality_alert(air_quality: AirQuality | None) -> Alert | None:
    if air_quality is None:
        return None
    if air_quality.aqi >= 5:
        return Alert(level="danger", message=f"😷 Calitatea aerului: {air_quality.aqi_description}")
    if air_quality.aqi >= 4:
        return Alert(level="warning", message=f"😷 Calitatea aerului: {air_quality.aqi_description}")
    return None


def _uv_alert(uv: UVIndex | None) -> Alert | None:
    if uv is None:
        return None
    if uv.uv_index >= 8:
        return Alert(level="danger", message=f"☀️ Indice UV {uv.uv_index:g} ({uv.uv_description})")
    if uv.uv_index >= 6:
        return Alert(level="warning", message=f"☀️ Indice UV {uv.uv_index:g} ({uv.uv_description})")
    return None


def generate_alerts(
    weather: WeatherRecord,
    air_quality: AirQuality | None = None,
    uv: UVIndex | None = None,
) -> tuple[Alert, ...]:
    """Evaluate every alert rule independently.

    When nothing fires the result is a single success-level entry.
    """
    candidates = (
        _temperature_alert(weather),
        _humidity_alert(weather),
        _wind_alert(weather),
        _precipitation_alert(weather),
        _pressure_alert(weather),
        _air_quality_alert(air_quality),
        _uv_alert(uv),
    )
    alerts = tuple(alert for alert in candidates if alert is not None)
    return alerts or (Alert(level="success", message=NORMAL_CONDITIONS),)


# ── Health ───────────────────────────────────────────────────────────────────


def health_tips(
    weather: WeatherRecord,
    air_quality: AirQuality | None = None,
    uv: UVIndex | None = None,
) -> tuple[str, ...]:
    tips: list[str] = []
    if uv is not None and uv.uv_index >= 6:
        tips.append("🧴 Folosește cremă de protecție solară SPF 30+")
    elif uv is not None and uv.uv_index >= 3:
        tips.append("🕶️ Ochelari de soare recomandați")
    if air_quality is not None and air_quality.aqi >= 4:
        tips.append("😷 Limitează efortul fizic în aer liber")
    elif air_quality is not None and air_quality.aqi == 3:
        tips.append("🫁 Persoanele sensibile să evite efortul prelungit afară")
    if weather.temp >= 30:
        tips.append("💧 Bea multă apă și evită soarele între 12:00 și 16:00")
    elif weather.temp < 0:
        tips.append("🧤 Protejează extremitățile de îngheț")
    if weather.humidity > HUMID_PERCENT:
        tips.append("🌫️ Umiditate ridicată: evită efortul intens")
    elif weather.humidity < 30:
        tips.append("🚰 Aer uscat: hidratează-te frecvent")
    if weather.pressure < 1000:
        tips.append("🤕 Presiune scăzută: persoanele sensibile pot avea dureri de cap")
    return tuple(tips) or ("💚 Condiții bune pentru activități în aer liber",)


# ── Trend ────────────────────────────────────────────────────────────────────


def temperature_trend(weather: WeatherRecord, forecast: Sequence[ForecastDay] | None) -> str | None:
    """Compare tomorrow's maximum with the current temperature."""
    if not forecast or len(forecast) < 2:
        return None
    diff = forecast[1].temp_max - weather.temp
    if diff > 5:
        return "📈 Mâine va fi considerabil mai cald"
    if diff < -5:
        return "📉 Mâine va fi considerabil mai rece"
    return "➡️ Temperaturi similare mâine"


def generate_insights(
    weather: WeatherRecord,
    forecast: Sequence[ForecastDay] | None = None,
    air_quality: AirQuality | None = None,
    uv: UVIndex | None = None,
    rng: random.Random | None = None,
) -> Insights:
    """Build the full advice bundle for one record."""
    rng = rng or random.Random()
    return Insights(
        clothing=clothing_advice(weather.temp, weather),
        activity=activity_suggestion(weather, rng),
        alerts=generate_alerts(weather, air_quality, uv),
        health=health_tips(weather, air_quality, uv),
        locations=location_suggestions(weather, rng),
        trend=temperature_trend(weather, forecast),
    )
