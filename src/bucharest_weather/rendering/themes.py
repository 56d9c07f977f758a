"""Colour themes: a palette of style roles shared by every template."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Role = Literal["primary", "secondary", "accent", "success", "warning", "danger", "text"]

RAINBOW = "rainbow"
RAINBOW_COLORS = ("red", "dark_orange", "yellow", "green", "blue", "magenta")


@dataclass(frozen=True)
class Theme:
    """Named palette. Values are rich colour names, or ``"rainbow"``."""

    name: str
    description: str
    primary: str
    secondary: str
    accent: str
    success: str
    warning: str
    danger: str
    text: str

    def color(self, role: Role) -> str:
        return getattr(self, role)


THEMES: dict[str, Theme] = {
    theme.name: theme
    for theme in (
        Theme(
            "default", "Albastru/Cyan clasic",
            primary="blue", secondary="cyan", accent="yellow",
            success="green", warning="yellow", danger="red", text="white",
        ),
        Theme(
            "dark", "Tema întunecată minimă",
            primary="grey50", secondary="white", accent="magenta",
            success="green", warning="dark_orange", danger="red", text="grey70",
        ),
        Theme(
            "ocean", "Nuanțe de albastru ocean",
            primary="blue", secondary="cyan", accent="white",
            success="cyan", warning="yellow", danger="red", text="deep_sky_blue1",
        ),
        Theme(
            "forest", "Verde natural pădure",
            primary="green", secondary="yellow", accent="white",
            success="green", warning="dark_orange", danger="red", text="green",
        ),
        Theme(
            "sunset", "Portocaliu/Roșu apus",
            primary="red", secondary="dark_orange", accent="yellow",
            success="dark_orange", warning="yellow", danger="red", text="orange1",
        ),
        Theme(
            "cyberpunk", "Magenta/Cyan futurist",
            primary="magenta", secondary="cyan", accent="green",
            success="green", warning="yellow", danger="red", text="magenta",
        ),
        Theme(
            "minimal", "Doar alb/gri simplu",
            primary="white", secondary="grey62", accent="white",
            success="white", warning="white", danger="white", text="white",
        ),
        Theme(
            "rainbow", "Culori multicolore",
            primary=RAINBOW, secondary=RAINBOW, accent=RAINBOW,
            success="green", warning="yellow", danger="red", text=RAINBOW,
        ),
    )
}

DEFAULT_THEME = "default"


def get_theme(name: str | None) -> Theme:
    """Return the named theme, or the default theme for unknown names."""
    return THEMES.get(name or DEFAULT_THEME, THEMES[DEFAULT_THEME])
