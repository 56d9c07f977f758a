"""User display preferences: current template and theme, settings, presets.

Stored as camelCase JSON in ``template-config.json`` under the state
directory. Anything missing or unreadable falls back to the defaults.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from bucharest_weather.exceptions import UnknownOptionError
from bucharest_weather.rendering import DEFAULT_TEMPLATE, DEFAULT_THEME, TEMPLATES, THEMES

logger = logging.getLogger(__name__)

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore", frozen=True)


class DisplaySettings(BaseModel):
    """Display options. ``language``/``units`` of None defer to the environment."""

    model_config = _CAMEL

    show_timestamp: bool = True
    show_cache: bool = False
    compact_mode: bool = False
    language: str | None = None
    units: str | None = None


class Preset(BaseModel):
    model_config = _CAMEL

    template: str
    theme: str
    settings: dict[str, Any] = Field(default_factory=dict)


BUILTIN_PRESETS: dict[str, Preset] = {
    "developer": Preset(template="dashboard", theme="cyberpunk", settings={"show_cache": True, "compact_mode": True}),
    "casual": Preset(template="modern", theme="default", settings={"show_timestamp": False}),
    "minimal_user": Preset(template="minimal", theme="minimal", settings={"compact_mode": True}),
    "artistic": Preset(template="ascii", theme="rainbow"),
}


class Preferences(BaseModel):
    model_config = _CAMEL

    current_template: str = DEFAULT_TEMPLATE
    current_theme: str = DEFAULT_THEME
    custom_settings: DisplaySettings = Field(default_factory=DisplaySettings)
    presets: dict[str, Preset] = Field(default_factory=lambda: dict(BUILTIN_PRESETS))

    @field_validator("presets")
    @classmethod
    def _keep_builtin_presets(cls, value: dict[str, Preset]) -> dict[str, Preset]:
        return {**BUILTIN_PRESETS, **value}


def _check_template(name: str) -> None:
    if name not in TEMPLATES:
        raise UnknownOptionError(f"Unknown template {name!r}; choose from {', '.join(TEMPLATES)}")


def _check_theme(name: str) -> None:
    if name not in THEMES:
        raise UnknownOptionError(f"Unknown theme {name!r}; choose from {', '.join(THEMES)}")


class PreferenceStore:
    """Load and persist :class:`Preferences` in one JSON file.

    Every mutating method validates its input, writes the file and returns
    the new preferences.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> Preferences:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return Preferences.model_validate(data)
        except FileNotFoundError:
            return Preferences()
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            logger.warning("ignoring unreadable preferences %s: %s", self.path, exc)
            return Preferences()

    def save(self, preferences: Preferences) -> Preferences:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".tmp")
        tmp.write_text(
            json.dumps(preferences.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
        os.replace(tmp, self.path)
        return preferences

    def set_template(self, name: str) -> Preferences:
        _check_template(name)
        return self.save(self.load().model_copy(update={"current_template": name}))

    def set_theme(self, name: str) -> Preferences:
        _check_theme(name)
        return self.save(self.load().model_copy(update={"current_theme": name}))

    def update_settings(self, **changes: Any) -> Preferences:
        current = self.load()
        settings = DisplaySettings.model_validate({**current.custom_settings.model_dump(), **changes})
        return self.save(current.model_copy(update={"custom_settings": settings}))

    def apply_preset(self, name: str) -> Preferences:
        """Switch template and theme to the preset's and merge its settings."""
        current = self.load()
        preset = current.presets.get(name)
        if preset is None:
            raise UnknownOptionError(f"Unknown preset {name!r}; choose from {', '.join(current.presets)}")
        settings = DisplaySettings.model_validate({**current.custom_settings.model_dump(), **preset.settings})
        return self.save(current.model_copy(update={
            "current_template": preset.template,
            "current_theme": preset.theme,
            "custom_settings": settings,
        }))

    def create_preset(
        self, name: str, template: str, theme: str, settings: dict[str, Any] | None = None,
    ) -> Preferences:
        _check_template(template)
        _check_theme(theme)
        current = self.load()
        preset = Preset(template=template, theme=theme, settings=settings or {})
        return self.save(current.model_copy(update={"presets": {**current.presets, name: preset}}))
