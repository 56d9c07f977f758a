"""Derived advice models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

AlertLevel = Literal["info", "warning", "danger", "success"]


class Alert(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: AlertLevel
    message: str


class Insights(BaseModel):
    """Advice bundle derived from one weather record. Never cached."""

    model_config = ConfigDict(frozen=True)

    clothing: str
    activity: str
    alerts: tuple[Alert, ...] = ()
    health: tuple[str, ...] = ()
    locations: tuple[str, ...] = ()
    trend: str | None = None

    @property
    def has_warnings(self) -> bool:
        return any(alert.level in ("warning", "danger") for alert in self.alerts)
