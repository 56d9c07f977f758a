"""Building blocks shared by the templates: styled text, gauges, art."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import datetime

from rich.cells import set_cell_size
from rich.text import Text

from bucharest_weather.models.current import WeatherRecord
from bucharest_weather.models.forecast import ForecastDay
from bucharest_weather.models.insights import Alert, Insights
from bucharest_weather.rendering.themes import RAINBOW, RAINBOW_COLORS, Role, Theme

GAUGE_CELLS = 20
TEMPERATURE_RANGE = (-20.0, 50.0)
WIND_RANGE = (0.0, 30.0)
HUMIDITY_RANGE = (0.0, 100.0)

MATRIX_ROWS = 5
MATRIX_COLUMNS = 20
MATRIX_DENSITY = 0.3

RAINBOW_BORDER = "bright_magenta"

NO_INSIGHTS = Insights(clothing="—", activity="—")

_ICONS = {
    "01": "☀️",
    "02": "⛅",
    "03": "☁️",
    "04": "☁️",
    "09": "🌧️",
    "10": "🌦️",
    "11": "⛈️",
    "13": "❄️",
    "50": "🌫️",
}

_ALERT_ROLES: dict[str, Role] = {
    "success": "success",
    "info": "secondary",
    "warning": "warning",
    "danger": "danger",
}


@dataclass(frozen=True)
class TemplateContext:
    """Inputs to one template call."""

    template: str
    theme: Theme
    weather: WeatherRecord
    forecast: tuple[ForecastDay, ...] = ()
    insights: Insights = NO_INSIGHTS
    rng: random.Random = field(default_factory=random.Random, compare=False)

    def paint(self, text: str, role: Role = "text", bold: bool = False) -> Text:
        return paint(text, self.theme.color(role), bold=bold)

    def alert(self, alert: Alert) -> Text:
        return self.paint(alert.message, _ALERT_ROLES[alert.level])

    def border(self, role: Role = "primary") -> str:
        """A plain style for frames; per-character rainbow only applies to text."""
        color = self.theme.color(role)
        return RAINBOW_BORDER if color == RAINBOW else color

    @property
    def updated(self) -> str:
        label = format_timestamp(self.weather.timestamp)
        return f"{label} [Cache]" if self.weather.from_cache else label


def paint(text: str, color: str, bold: bool = False) -> Text:
    """Style *text* with a rich colour; ``"rainbow"`` cycles per character."""
    weight = "bold " if bold else ""
    if color != RAINBOW:
        return Text(text, style=f"{weight}{color}")
    styled = Text(text)
    for index in range(len(text)):
        styled.stylize(f"{weight}{RAINBOW_COLORS[index % len(RAINBOW_COLORS)]}", index, index + 1)
    return styled


def line(*parts: Text | str) -> Text:
    return Text.assemble(*parts)


def fit(text: str, width: int) -> str:
    """Crop or pad *text* to exactly *width* terminal cells."""
    return set_cell_size(text, width)


def shorten(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[: limit - 1] + "…"


def format_timestamp(timestamp: str | None) -> str:
    if not timestamp:
        return "—"
    try:
        moment = datetime.fromisoformat(timestamp)
    except ValueError:
        return timestamp
    return moment.strftime("%d.%m.%Y %H:%M")


def weather_icon(icon: str | None) -> str:
    return _ICONS.get((icon or "")[:2], "🌤️")


def temperature_role(temp: float) -> Role:
    """Hot readings are danger-coloured, mild ones warning, cold ones primary."""
    if temp >= 25:
        return "danger"
    if temp >= 15:
        return "warning"
    return "primary"


# ── Gauges ───────────────────────────────────────────────────────────────────


def gauge_percent(value: float, low: float, high: float) -> float:
    """Map *value* linearly onto [0, 100] between *low* and *high*."""
    percent = (value - low) / (high - low) * 100
    return min(max(percent, 0.0), 100.0)


def gauge_cells(value: float, low: float, high: float, cells: int = GAUGE_CELLS) -> int:
    """Number of filled cells; each cell covers an equal share of the range."""
    return int(gauge_percent(value, low, high) * cells // 100)


def gauge_bar(value: float, low: float, high: float, color: str, cells: int = GAUGE_CELLS) -> Text:
    filled = gauge_cells(value, low, high, cells)
    return Text.assemble(paint("█" * filled, color), ("░" * (cells - filled), "grey50"))


# ── Art ──────────────────────────────────────────────────────────────────────

BANNER = (
    r"__   __ ___  ___  __  __  ___    _   ",
    r"\ \ / /| _ \| __||  \/  || __|  /_\  ",
    r" \ V / |   /| _| | |\/| || _|  / _ \ ",
    r"  \_/  |_|_\|___||_|  |_||___|/_/ \_\ ",
)

_ART: dict[str, tuple[str, tuple[str, ...]]] = {
    "sunny": ("SUNNY", (
        r"    \   |   /    ",
        r"      .---.      ",
        r"  -- (     ) --  ",
        r"      `---'      ",
        r"    /   |   \    ",
    )),
    "partly": ("PARTLY CLOUDY", (
        r"   \  /          ",
        r' _ /"".-.        ',
        r"   \_(   ).      ",
        r"   /(___(__)     ",
        r"                 ",
    )),
    "rain": ("RAINY", (
        r"      .-.        ",
        r"     (   ).      ",
        r"    (___(__)     ",
        r"     ' ' ' '     ",
        r"    ' ' ' '      ",
    )),
    "snow": ("SNOWY", (
        r"      .-.        ",
        r"     (   ).      ",
        r"    (___(__)     ",
        r"     *  *  *     ",
        r"    *  *  *      ",
    )),
    "cloudy": ("CLOUDY", (
        r"                 ",
        r"      .--.       ",
        r"   .-(    ).     ",
        r"  (___.__)__)    ",
        r"                 ",
    )),
}

_ART_BY_ICON = {
    "01": "sunny",
    "02": "partly",
    "09": "rain",
    "10": "rain",
    "11": "rain",
    "13": "snow",
}


def weather_art(icon: str | None) -> tuple[str, tuple[str, ...]]:
    """Return ``(title, lines)`` of the drawing for an upstream icon code."""
    return _ART[_ART_BY_ICON.get((icon or "")[:2], "cloudy")]


def matrix_rain(
    rng: random.Random,
    rows: int = MATRIX_ROWS,
    columns: int = MATRIX_COLUMNS,
    density: float = MATRIX_DENSITY,
) -> list[str]:
    """Rows of 0/1 digits scattered over blanks at the given density."""
    return [
        "".join(rng.choice("01") if rng.random() < density else " " for _ in range(columns))
        for _ in range(rows)
    ]


def record_seed(weather: WeatherRecord) -> str:
    """Stable seed for decorative randomness, derived from the record."""
    return f"{weather.timestamp}|{weather.temp}|{weather.description}|{weather.humidity}"
