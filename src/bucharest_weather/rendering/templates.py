"""The ten display templates.

Each template is a function of a :class:`TemplateContext` that returns a rich
renderable. Templates register themselves in :data:`TEMPLATES` under their id.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from rich import box
from rich.align import Align
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from bucharest_weather.rendering.widgets import (
    BANNER,
    HUMIDITY_RANGE,
    TEMPERATURE_RANGE,
    WIND_RANGE,
    TemplateContext,
    fit,
    gauge_bar,
    gauge_percent,
    line,
    matrix_rain,
    shorten,
    temperature_role,
    weather_art,
    weather_icon,
)

Builder = Callable[[TemplateContext], RenderableType]


@dataclass(frozen=True)
class Template:
    name: str
    description: str
    build: Builder


TEMPLATES: dict[str, Template] = {}
DEFAULT_TEMPLATE = "classic"

MODERN_CARD_WIDTH = 25
MOBILE_CARD_WIDTH = 17
RETRO_WIDTH = 39
DASHBOARD_DAYS = 5


def template(name: str, description: str) -> Callable[[Builder], Builder]:
    """Register the decorated builder under *name*."""

    def register(build: Builder) -> Builder:
        TEMPLATES[name] = Template(name=name, description=description, build=build)
        return build

    return register


def _wind(ctx: TemplateContext) -> str:
    direction = ctx.weather.wind_direction or ""
    return f"{ctx.weather.wind_speed:g} m/s {direction}".rstrip()


def _status(ctx: TemplateContext) -> Text:
    if ctx.insights.has_warnings:
        return ctx.paint("⚠ Atenție la alerte", "warning")
    return ctx.paint("✓ Condiții optime", "success")


def _section(ctx: TemplateContext, title: str) -> list[RenderableType]:
    return [Text(), ctx.paint(f"━━━ {title} ━━━", "accent", bold=True)]


# ── classic ──────────────────────────────────────────────────────────────────


@template("classic", "Design profesional cu chenar dublu")
def classic(ctx: TemplateContext) -> RenderableType:
    w = ctx.weather
    ins = ctx.insights
    body: list[RenderableType] = [ctx.paint(row, "primary", bold=True) for row in BANNER]
    body += [
        ctx.paint("🌤️  Bucharest Weather Intelligence System", "secondary"),
        Text(f"Actualizat: {ctx.updated}", style="grey50"),
        *_section(ctx, "CONDIȚII METEOROLOGICE ACTUALE"),
        line(
            "🌡️  Temperatură: ",
            ctx.paint(f"{w.temp}°C", temperature_role(w.temp), bold=True),
            f" (simte ca {w.feels_like}°C)",
        ),
        line("☁️  Condiții: ", ctx.paint(f"{w.description} {weather_icon(w.icon)}", "secondary")),
        line(f"💨  Vânt: {_wind(ctx)}"),
        line(f"💧  Umiditate: {w.humidity}% | Presiune: {w.pressure:g} hPa"),
        line(f"👁️  Vizibilitate: {w.visibility:g} km | Nori: {w.cloudiness}%"),
    ]
    if w.sunrise and w.sunset:
        body.append(line(f"🌅  Răsărit: {w.sunrise} | 🌇  Apus: {w.sunset}"))
    if w.has_rain:
        body.append(line(f"🌧️  Ploaie: {w.rain_1h or w.rain_3h:g} mm"))
    if w.has_snow:
        body.append(line(f"🌨️  Zăpadă: {w.snow_1h or w.snow_3h:g} mm"))

    body += [
        *_section(ctx, "RECOMANDĂRI INTELIGENTE"),
        line("👔  Îmbrăcăminte: ", ctx.paint(ins.clothing, "success")),
        line("🎯  Activitate: ", ctx.paint(ins.activity, "secondary")),
    ]
    if ins.locations:
        body.append(line("📍  Locații: ", ", ".join(ins.locations)))
    if ins.trend:
        body.append(line("📊  Tendință: ", ins.trend))
    if ins.alerts:
        body += _section(ctx, "ALERTE")
        body += [ctx.alert(alert) for alert in ins.alerts]
    if ins.health:
        body += _section(ctx, "SĂNĂTATE")
        body += [Text(tip) for tip in ins.health]

    return Panel(
        Group(*body),
        box=box.DOUBLE,
        border_style=ctx.border("primary"),
        title=ctx.paint("🏛️ PROFESSIONAL WEATHER REPORT", "primary", bold=True),
        padding=(1, 2),
    )


# ── modern ───────────────────────────────────────────────────────────────────


def _card(ctx: TemplateContext, title: str, rows: list[RenderableType]) -> Panel:
    return Panel(
        Group(*rows),
        title=ctx.paint(title, "accent", bold=True),
        box=box.ROUNDED,
        border_style=ctx.border("secondary"),
        width=MODERN_CARD_WIDTH,
    )


@template("modern", "Carduri moderne alăturate")
def modern(ctx: TemplateContext) -> RenderableType:
    w = ctx.weather
    ins = ctx.insights
    now = _card(ctx, "ACUM", [
        Align.center(Text(weather_icon(w.icon))),
        Align.center(ctx.paint(f"{w.temp}°C", temperature_role(w.temp), bold=True)),
        Align.center(Text(shorten(w.description, MODERN_CARD_WIDTH - 4))),
        Align.center(Text(f"Simte ca {w.feels_like}°C", style="grey50")),
    ])
    details = _card(ctx, "DETALII", [
        Text(f"💧 {w.humidity}%"),
        Text(f"💨 {_wind(ctx)}"),
        Text(f"📊 {w.pressure:g} hPa"),
        Text(f"👁️ {w.visibility:g} km"),
    ])
    tips = _card(ctx, "AI TIPS", [
        Text(shorten(ins.clothing, 20)),
        Text(shorten(ins.activity, 20)),
        _status(ctx),
    ])

    cards = Table.grid(padding=(0, 1))
    for _ in range(3):
        cards.add_column()
    cards.add_row(now, details, tips)

    rows: list[RenderableType] = [
        line(ctx.paint("BUCUREȘTI", "primary", bold=True), Text(f"  {ctx.updated}", style="grey50")),
        cards,
    ]
    if ins.trend:
        rows.append(ctx.paint(ins.trend, "secondary"))
    return Group(*rows)


# ── dashboard ────────────────────────────────────────────────────────────────


def _day_label(index: int, day_name: str) -> str:
    if index == 0:
        return "AZI"
    if index == 1:
        return "MÂINE"
    return day_name[:3].upper()


def _forecast_table(ctx: TemplateContext) -> RenderableType:
    if not ctx.forecast:
        return Text("[FORECAST] indisponibil", style="grey50")
    table = Table(
        box=box.SIMPLE_HEAVY,
        title=ctx.paint("FORECAST", "secondary", bold=True),
        header_style=f"bold {ctx.border('secondary')}",
        border_style=ctx.border("primary"),
    )
    for column in ("ZI", "DATA", "MIN", "MAX", "CONDIȚII", "VÂNT", "UMID."):
        table.add_column(column)
    for index, day in enumerate(ctx.forecast[:DASHBOARD_DAYS]):
        wind = "—" if day.wind_speed_avg is None else f"{day.wind_speed_avg:g} m/s"
        humidity = "—" if day.humidity_avg is None else f"{day.humidity_avg}%"
        table.add_row(
            _day_label(index, day.day_name),
            day.date,
            ctx.paint(f"{day.temp_min}°", temperature_role(day.temp_min)),
            ctx.paint(f"{day.temp_max}°", temperature_role(day.temp_max)),
            shorten(day.description, 18),
            wind,
            humidity,
        )
    return table


@template("dashboard", "Tablou de bord cu prognoză")
def dashboard(ctx: TemplateContext) -> RenderableType:
    w = ctx.weather
    ins = ctx.insights
    advice: list[RenderableType] = [
        line("👔 ", ctx.paint(ins.clothing, "success")),
        line("🎯 ", ctx.paint(ins.activity, "secondary")),
    ]
    if ins.trend:
        advice.append(Text(ins.trend))
    advice += [ctx.alert(alert) for alert in ins.alerts]

    return Group(
        ctx.paint("═" * 78, "primary"),
        line(
            ctx.paint(" BUCHAREST WEATHER DASHBOARD ", "primary", bold=True),
            Text(f" {ctx.updated}", style="grey50"),
        ),
        ctx.paint("═" * 78, "primary"),
        line(
            ctx.paint("[NOW] ", "accent", bold=True),
            ctx.paint(f"{w.temp}°C", temperature_role(w.temp), bold=True),
            f"  {w.description} {weather_icon(w.icon)}",
            f"  💧{w.humidity}%  💨{_wind(ctx)}  📊{w.pressure:g} hPa",
        ),
        Text(),
        _forecast_table(ctx),
        Panel(
            Group(*advice),
            title=ctx.paint("AI INSIGHTS", "accent", bold=True),
            box=box.ROUNDED,
            border_style=ctx.border("secondary"),
        ),
    )


# ── minimal ──────────────────────────────────────────────────────────────────


@template("minimal", "Text simplu, fără decorațiuni")
def minimal(ctx: TemplateContext) -> RenderableType:
    w = ctx.weather
    rows: list[RenderableType] = [
        ctx.paint(f"București {w.temp}°C", "text", bold=True),
        Text(f"{w.description} · simte ca {w.feels_like}°C", style="grey62"),
        Text(f"umiditate {w.humidity}% · vânt {_wind(ctx)}", style="grey62"),
        ctx.paint(ctx.insights.clothing, "secondary"),
    ]
    for day in ctx.forecast:
        rows.append(Text(f"{day.day_name[:3].lower()} {day.temp_min}°/{day.temp_max}° {day.description}"))
    return Group(*rows)


# ── ascii ────────────────────────────────────────────────────────────────────


@template("ascii", "Artă ASCII după condiții")
def ascii_art(ctx: TemplateContext) -> RenderableType:
    w = ctx.weather
    title, art = weather_art(w.icon)
    rows: list[RenderableType] = [ctx.paint(row, "accent") for row in art]
    rows += [
        Text(),
        line("TEMP  ", ctx.paint(f"{w.temp}°C", temperature_role(w.temp), bold=True), f" (simte ca {w.feels_like}°C)"),
        line("COND  ", ctx.paint(w.description, "secondary")),
        Text(f"WIND  {_wind(ctx)}"),
        Text(f"HUMID {w.humidity}%"),
        Text(),
        ctx.paint(ctx.insights.clothing, "success"),
    ]
    return Panel(
        Group(*rows),
        box=box.ASCII,
        title=ctx.paint(title, "primary", bold=True),
        border_style=ctx.border("primary"),
        padding=(1, 2),
        expand=False,
    )


# ── retro ────────────────────────────────────────────────────────────────────


def _retro_row(ctx: TemplateContext, text: str) -> Text:
    return line(
        ctx.paint("║", "accent"),
        Text(fit(f" {text}", RETRO_WIDTH), style="green"),
        ctx.paint("║", "accent"),
    )


@template("retro", "Terminal retro anii '80")
def retro(ctx: TemplateContext) -> RenderableType:
    w = ctx.weather
    source = "CACHE" if w.from_cache else "OK"
    rows: list[RenderableType] = [
        Text("BUCHAREST WEATHER SYSTEM v2.1", style="bold green"),
        Text("> INITIALIZING SENSORS... OK", style="green"),
        Text("> CONNECTING TO SATELLITE... OK", style="green"),
        Text(f"> LOADING DATA... {source}", style="green"),
        Text(),
        ctx.paint("╔" + "═" * RETRO_WIDTH + "╗", "accent"),
        _retro_row(ctx, f"TEMPERATURE: {w.temp}°C"),
        _retro_row(ctx, f"FEELS LIKE:  {w.feels_like}°C"),
        _retro_row(ctx, f"CONDITIONS:  {w.description.upper()}"),
        _retro_row(ctx, f"HUMIDITY:    {w.humidity}%"),
        _retro_row(ctx, f"WIND:        {_wind(ctx).upper()}"),
        _retro_row(ctx, f"PRESSURE:    {w.pressure:g} HPA"),
        ctx.paint("╠" + "═" * RETRO_WIDTH + "╣", "accent"),
        _retro_row(ctx, f"ADVICE: {shorten(ctx.insights.clothing, RETRO_WIDTH - 10)}"),
        _retro_row(ctx, f"ACTION: {shorten(ctx.insights.activity, RETRO_WIDTH - 10)}"),
        ctx.paint("╚" + "═" * RETRO_WIDTH + "╝", "accent"),
        Text("> READY_", style="bold green"),
    ]
    return Group(*rows)


# ── map ──────────────────────────────────────────────────────────────────────

_SECTOR_ROWS = ((1, 2, 3), (6, 5, 4))
_SECTOR_WIDTH = 9


def _sector_border(
    ctx: TemplateContext, left: str, middle: str, right: str, edge: str = "     ", tail: str = "",
) -> Text:
    bar = "─" * _SECTOR_WIDTH
    return line(edge, ctx.paint(left + middle.join([bar] * 3) + right, "primary"), tail)


def _sector_cells(ctx: TemplateContext, cells: list[Text], edge: str = "     ", tail: str = "") -> Text:
    parts: list[Text | str] = [edge, ctx.paint("│", "primary")]
    for cell in cells:
        parts += [cell, ctx.paint("│", "primary")]
    parts.append(tail)
    return line(*parts)


@template("map", "Harta sectoarelor Bucureștiului")
def sector_map(ctx: TemplateContext) -> RenderableType:
    w = ctx.weather
    temp = ctx.paint(fit(f"  {w.temp}°C", _SECTOR_WIDTH), temperature_role(w.temp), bold=True)
    north, south = _SECTOR_ROWS
    rows: list[RenderableType] = [
        Text("                  N"),
        _sector_border(ctx, "┌", "┬", "┐"),
        _sector_cells(ctx, [Text(fit(f" Sector {n}", _SECTOR_WIDTH)) for n in north]),
        _sector_cells(ctx, [temp] * len(north)),
        _sector_border(ctx, "├", "┼", "┤", edge="  V  ", tail="  E"),
        _sector_cells(ctx, [Text(fit(f" Sector {n}", _SECTOR_WIDTH)) for n in south]),
        _sector_cells(ctx, [temp] * len(south)),
        _sector_border(ctx, "└", "┴", "┘"),
    ]
    rows += [
        Text("                  S"),
        Text(),
        Text("🔴 ≥25°C   🟡 15-24°C   🔵 <15°C", style="grey50"),
        line("📍 Centru: ", ctx.paint(f"{w.description} {weather_icon(w.icon)}", "secondary")),
        Text(f"💨 Vânt: {_wind(ctx)}"),
    ]
    return Panel(
        Group(*rows),
        box=box.DOUBLE,
        title=ctx.paint("🌍 WEATHER GEOGRAPHY", "primary", bold=True),
        border_style=ctx.border("primary"),
        expand=False,
    )


# ── mobile ───────────────────────────────────────────────────────────────────


def _mobile_card(ctx: TemplateContext, title: str, rows: list[Text | str]) -> list[Text]:
    edge = "─" * MOBILE_CARD_WIDTH
    side = ctx.paint("│", "primary")
    card = [
        ctx.paint(f"╭{edge}╮", "primary"),
        line(side, ctx.paint(fit(f" {title}", MOBILE_CARD_WIDTH), "accent", bold=True), side),
        ctx.paint(f"├{edge}┤", "primary"),
    ]
    for row in rows:
        cell = row if isinstance(row, Text) else Text(row)
        cell = cell.copy()
        cell.truncate(MOBILE_CARD_WIDTH - 1, pad=True)
        card.append(line(side, " ", cell, side))
    card.append(ctx.paint(f"╰{edge}╯", "primary"))
    return card


@template("mobile", "Carduri înguste pentru ecrane mici")
def mobile(ctx: TemplateContext) -> RenderableType:
    w = ctx.weather
    ins = ctx.insights
    limit = MOBILE_CARD_WIDTH - 2
    rows: list[RenderableType] = []
    rows += _mobile_card(ctx, "📱 ACUM", [
        ctx.paint(f"{w.temp}°C {weather_icon(w.icon)}", temperature_role(w.temp), bold=True),
        shorten(w.description, limit),
        f"Simte ca {w.feels_like}°C",
    ])
    rows.append(Text())
    rows += _mobile_card(ctx, "📊 DETALII", [
        f"💧 {w.humidity}%",
        f"💨 {w.wind_speed:g} m/s",
        f"📊 {w.pressure:g} hPa",
    ])
    rows.append(Text())
    rows += _mobile_card(ctx, "💡 SFATURI", [
        shorten(ins.clothing, limit),
        shorten(ins.activity, limit),
        _status(ctx),
    ])
    return Group(*rows)


# ── matrix ───────────────────────────────────────────────────────────────────


@template("matrix", "Ploaie digitală în stil Matrix")
def matrix(ctx: TemplateContext) -> RenderableType:
    w = ctx.weather
    rain = matrix_rain(ctx.rng)
    rows: list[RenderableType] = [ctx.paint(row, "success") for row in rain[:3]]
    rows += [
        ctx.paint("> SYSTEM.WEATHER.BUCHAREST", "success", bold=True),
        ctx.paint(f"> TEMP: {w.temp}°C", "success"),
        ctx.paint(f"> STATUS: {w.description.upper()}", "success"),
        ctx.paint(f"> HUMIDITY: {w.humidity}%", "success"),
        ctx.paint(f"> WIND: {_wind(ctx).upper()}", "success"),
        ctx.paint(f"> ADVICE: {ctx.insights.clothing}", "success"),
    ]
    rows += [ctx.paint(row, "success") for row in rain[3:]]
    return Group(*rows)


# ── gauge ────────────────────────────────────────────────────────────────────


@template("gauge", "Indicatoare analitice")
def gauge(ctx: TemplateContext) -> RenderableType:
    w = ctx.weather
    readings = (
        ("🌡️  Temperatură", w.temp, TEMPERATURE_RANGE, f"{w.temp}°C", temperature_role(w.temp)),
        ("💨  Vânt", w.wind_speed, WIND_RANGE, f"{w.wind_speed:g} m/s", "secondary"),
        ("💧  Umiditate", w.humidity, HUMIDITY_RANGE, f"{w.humidity}%", "primary"),
    )
    table = Table.grid(padding=(0, 2))
    for _ in range(4):
        table.add_column()
    for label, value, (low, high), shown, role in readings:
        table.add_row(
            label,
            gauge_bar(value, low, high, ctx.theme.color(role)),
            shown,
            Text(f"{gauge_percent(value, low, high):.0f}%", style="grey50"),
        )
    return Panel(
        Group(table, Text(), _status(ctx)),
        box=box.ROUNDED,
        title=ctx.paint("📈 WEATHER ANALYTICS", "primary", bold=True),
        border_style=ctx.border("primary"),
        expand=False,
    )
