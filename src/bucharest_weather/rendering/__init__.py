"""Terminal rendering: ten templates crossed with eight colour themes."""

from bucharest_weather.rendering.renderer import (
    available_templates,
    available_themes,
    render,
    theme_swatch,
)
from bucharest_weather.rendering.templates import DEFAULT_TEMPLATE, TEMPLATES
from bucharest_weather.rendering.themes import DEFAULT_THEME, THEMES, Theme, get_theme

__all__ = [
    "DEFAULT_TEMPLATE",
    "DEFAULT_THEME",
    "TEMPLATES",
    "THEMES",
    "Theme",
    "available_templates",
    "available_themes",
    "get_theme",
    "render",
    "theme_swatch",
]
