"""Command line entry point: ``bucharest-weather`` (alias ``bw``)."""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import sys
from datetime import datetime
from pathlib import Path

from rich.console import Console

from bucharest_weather import __version__
from bucharest_weather.api_logging import set_log_dir
from bucharest_weather.cache import FileCache, MemoryCache
from bucharest_weather.client import AsyncWeatherClient
from bucharest_weather.config import LocationConfig, Settings
from bucharest_weather.exceptions import WeatherError
from bucharest_weather.export import FORMATS, build_snapshot, serialize, write_export
from bucharest_weather.logging_config import configure_logging
from bucharest_weather.preferences import Preferences, PreferenceStore
from bucharest_weather.rendering import (
    TEMPLATES,
    THEMES,
    available_templates,
    available_themes,
    render,
    theme_swatch,
)
from bucharest_weather.service import Conditions, WeatherService

logger = logging.getLogger(__name__)

DEFAULT_FORECAST_DAYS = 5
WIDE = 100
COMPACT = 80

API_KEY_HINT = "⚠️  Date demo: setează OPENWEATHER_API_KEY pentru date reale."


def _days(value: str) -> int:
    days = int(value)
    if not 1 <= days <= 5:
        raise argparse.ArgumentTypeError("days must be between 1 and 5")
    return days


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--verbose", "-v", action="store_true", help="Debug logging on stderr")
    common.add_argument("--no-color", action="store_true", help="Plain text without colour codes")
    common.add_argument("--no-cache", action="store_true", help="Bypass cached responses")
    common.add_argument("--template", "-t", choices=list(TEMPLATES), help="Template for this run only")
    common.add_argument("--theme", choices=list(THEMES), help="Theme for this run only")

    parser = argparse.ArgumentParser(
        prog="bucharest-weather",
        description="Vremea în București, direct în terminal.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    commands.add_parser("now", aliases=["n"], parents=[common], help="Current conditions")

    forecast = commands.add_parser("forecast", aliases=["f"], parents=[common], help="Multi-day forecast")
    forecast.add_argument("--days", "-d", type=_days, default=DEFAULT_FORECAST_DAYS)

    export = commands.add_parser("export", aliases=["e"], parents=[common], help="Export data as JSON or CSV")
    export.add_argument("--format", choices=FORMATS, default="json")
    export.add_argument("--output", "-o", type=Path, help="File or directory; stdout when omitted")
    export.add_argument("--days", "-d", type=_days, default=DEFAULT_FORECAST_DAYS)

    templates = commands.add_parser("templates", parents=[common], help="List templates or set the current one")
    templates.add_argument("name", nargs="?", choices=list(TEMPLATES))

    theme = commands.add_parser("theme", parents=[common], help="List themes or set the current one")
    theme.add_argument("name", nargs="?", choices=list(THEMES))

    preset = commands.add_parser("preset", parents=[common], help="List presets or apply one")
    preset.add_argument("name", nargs="?")

    cache = commands.add_parser("cache", parents=[common], help="Show cache statistics")
    cache.add_argument("--clear", action="store_true", help="Remove every cached response")

    commands.add_parser("info", aliases=["i"], parents=[common], help="Configuration and system details")
    return parser


class App:
    """Wires settings, preferences and the weather service for one invocation."""

    def __init__(self, args: argparse.Namespace, settings: Settings, store: PreferenceStore) -> None:
        self.args = args
        self.settings = settings
        self.store = store
        self.preferences = store.load()
        self.color = not args.no_color
        self.out = Console(no_color=not self.color, highlight=False)
        self.err = Console(stderr=True, no_color=not self.color, highlight=False)

    @property
    def template(self) -> str:
        return self.args.template or self.preferences.current_template

    @property
    def theme(self) -> str:
        return self.args.theme or self.preferences.current_theme

    @property
    def location(self) -> LocationConfig:
        location = self.settings.location()
        display = self.preferences.custom_settings
        return dataclasses.replace(
            location,
            language=display.language or location.language,
            units=display.units or location.units,
        )

    def cache(self) -> FileCache:
        return FileCache(self.settings.cache_dir, ttl=self.settings.cache_duration)

    def client(self) -> AsyncWeatherClient:
        return AsyncWeatherClient(
            api_key=self.settings.api_key,
            base_url=self.settings.base_url,
            timeout=self.settings.timeout,
            max_attempts=self.settings.retry_attempts + 1,
            cache=MemoryCache() if self.args.no_cache else self.cache(),
        )

    async def fetch(self, days: int = 0) -> Conditions:
        async with self.client() as client:
            service = WeatherService(client, self.location)
            if not self.settings.has_api_key:
                return service.demo(days)
            return await service.conditions(days=days, use_cache=not self.args.no_cache)

    # ── Commands ───────────────────────────────────────────────

    def show(self, conditions: Conditions, template: str) -> None:
        display = self.preferences.custom_settings
        sys.stdout.write(render(
            template,
            conditions.weather,
            forecast=conditions.forecast,
            insights=conditions.insights,
            theme=self.theme,
            color=self.color,
            width=COMPACT if display.compact_mode else WIDE,
        ))
        if display.show_timestamp:
            self.out.print(f"[dim]Generat: {datetime.now():%d.%m.%Y %H:%M:%S}[/dim]")
        if display.show_cache:
            stats = self.cache().stats()
            self.out.print(f"[dim]Cache: {stats['entries']} intrări, TTL {stats['ttl']:g}s[/dim]")
        if conditions.demo:
            self.err.print(f"[yellow]{API_KEY_HINT}[/yellow]")

    def now(self) -> int:
        self.show(asyncio.run(self.fetch()), self.template)
        return 0

    def forecast(self) -> int:
        self.show(asyncio.run(self.fetch(self.args.days)), self.args.template or "dashboard")
        return 0

    def export(self) -> int:
        conditions = asyncio.run(self.fetch(self.args.days))
        snapshot = build_snapshot(conditions, self.location, self.template, self.theme)
        if self.args.output is None:
            sys.stdout.write(serialize(snapshot, self.args.format))
        else:
            target = write_export(snapshot, self.args.format, self.args.output)
            self.err.print(f"[green]✅ Date exportate în {target}[/green]")
        if conditions.demo:
            self.err.print(f"[yellow]{API_KEY_HINT}[/yellow]")
        return 0

    def templates(self) -> int:
        if self.args.name:
            self.preferences = self.store.set_template(self.args.name)
            self.out.print(f"[green]✅ Template setat: {self.args.name}[/green]")
            return 0
        for name, description in available_templates():
            marker = "→" if name == self.preferences.current_template else " "
            self.out.print(f"{marker} [bold]{name:<10}[/bold] {description}")
        return 0

    def themes(self) -> int:
        if self.args.name:
            self.preferences = self.store.set_theme(self.args.name)
            self.out.print(f"[green]✅ Temă setată: {self.args.name}[/green]")
            return 0
        for name, description in available_themes():
            marker = "→" if name == self.preferences.current_theme else " "
            sys.stdout.write(f"{marker} {theme_swatch(name, color=self.color).rstrip()}  {description}\n")
        return 0

    def presets(self) -> int:
        if self.args.name:
            self.preferences = self.store.apply_preset(self.args.name)
            self.out.print(
                f"[green]✅ Preset aplicat: {self.args.name} "
                f"({self.preferences.current_template} + {self.preferences.current_theme})[/green]"
            )
            return 0
        for name, preset in self.preferences.presets.items():
            self.out.print(f"  [bold]{name:<14}[/bold] {preset.template} + {preset.theme}")
        return 0

    def cache_command(self) -> int:
        cache = self.cache()
        if self.args.clear:
            cache.clear()
            self.out.print("[green]✅ Cache golit[/green]")
            return 0
        stats = cache.stats()
        self.out.print(f"Director: {self.settings.cache_dir}")
        self.out.print(f"Intrări valide: {stats['entries']}")
        self.out.print(f"TTL: {stats['ttl']:g}s")
        return 0

    def info(self) -> int:
        location = self.location
        prefs: Preferences = self.preferences
        rows = (
            ("Versiune", __version__),
            ("Locație", f"{location.label} ({location.lat}, {location.lon})"),
            ("Limbă / unități", f"{location.language} / {location.units}"),
            ("Cheie API", "configurată" if self.settings.has_api_key else "lipsă (date demo)"),
            ("Timeout", f"{self.settings.timeout:g}s, {self.settings.retry_attempts} reîncercări"),
            ("Director stare", str(self.settings.home)),
            ("Cache", f"{self.cache().stats()['entries']} intrări, TTL {self.settings.cache_duration}s"),
            ("Template / temă", f"{prefs.current_template} / {prefs.current_theme}"),
        )
        for label, value in rows:
            self.out.print(f"[bold]{label:<16}[/bold] {value}")
        return 0


_HANDLERS = {
    "now": App.now,
    "n": App.now,
    "forecast": App.forecast,
    "f": App.forecast,
    "export": App.export,
    "e": App.export,
    "templates": App.templates,
    "theme": App.themes,
    "preset": App.presets,
    "cache": App.cache_command,
    "info": App.info,
    "i": App.info,
}


def main(argv: list[str] | None = None, settings: Settings | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(args.verbose)
    settings = settings or Settings()
    set_log_dir(settings.log_dir)
    app = App(args, settings, PreferenceStore(settings.preferences_file))

    try:
        return _HANDLERS[args.command](app)
    except WeatherError as exc:
        logger.debug("command %s failed", args.command, exc_info=True)
        app.err.print(f"[red]❌ Eroare: {exc}[/red]")
        return 1
    except OSError as exc:
        app.err.print(f"[red]❌ Eroare de fișier: {exc}[/red]")
        return 1


def run() -> None:
    sys.exit(main())
