"""Render a template to a plain string."""

from __future__ import annotations

import random
from collections.abc import Sequence

from rich.console import Console, RenderableType
from rich.text import Text

from bucharest_weather.models.current import WeatherRecord
from bucharest_weather.models.forecast import ForecastDay
from bucharest_weather.models.insights import Insights
from bucharest_weather.rendering.templates import DEFAULT_TEMPLATE, TEMPLATES
from bucharest_weather.rendering.themes import DEFAULT_THEME, THEMES, Role, get_theme
from bucharest_weather.rendering.widgets import NO_INSIGHTS, TemplateContext, paint, record_seed

DEFAULT_WIDTH = 100

_ROLES: tuple[Role, ...] = ("primary", "secondary", "accent", "success", "warning", "danger", "text")


def to_text(renderable: RenderableType, color: bool = True, width: int = DEFAULT_WIDTH) -> str:
    """Print *renderable* into a string; without colour no escape codes are emitted."""
    console = Console(
        width=width,
        force_terminal=color,
        no_color=not color,
        color_system="256" if color else None,
        markup=False,
        emoji=False,
        highlight=False,
        legacy_windows=False,
    )
    with console.capture() as capture:
        console.print(renderable)
    return capture.get()


def render(
    template_id: str,
    weather: WeatherRecord,
    forecast: Sequence[ForecastDay] | None = None,
    insights: Insights | None = None,
    theme: str = DEFAULT_THEME,
    color: bool = True,
    width: int = DEFAULT_WIDTH,
) -> str:
    """Render *weather* through a template and theme.

    Unknown template ids fall back to ``classic`` and unknown themes to
    ``default``. The output depends only on the arguments: decorative
    randomness is seeded from the record.
    """
    chosen = TEMPLATES.get(template_id, TEMPLATES[DEFAULT_TEMPLATE])
    context = TemplateContext(
        template=chosen.name,
        theme=get_theme(theme),
        weather=weather,
        forecast=tuple(forecast or ()),
        insights=insights or NO_INSIGHTS,
        rng=random.Random(record_seed(weather)),
    )
    return to_text(chosen.build(context), color=color, width=width)


def available_templates() -> list[tuple[str, str]]:
    return [(entry.name, entry.description) for entry in TEMPLATES.values()]


def available_themes() -> list[tuple[str, str]]:
    return [(theme.name, theme.description) for theme in THEMES.values()]


def theme_swatch(name: str, color: bool = True) -> str:
    """One line naming every role of a theme, each in its own colour."""
    theme = get_theme(name)
    swatch = Text.assemble(
        (f"{theme.name:<10}", "bold"),
        *(part for role in _ROLES for part in (paint(role, theme.color(role)), " ")),
    )
    return to_text(swatch, color=color)
