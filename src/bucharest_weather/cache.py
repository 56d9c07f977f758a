"""Response cache with a fixed TTL.

Entries are stored with an explicit ``written_at`` timestamp read from an
injected clock, so expiry never depends on filesystem mtimes or real time in
tests. Storage failures are logged and reported as misses.
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path
from typing import Any

from bucharest_weather.exceptions import CacheIOError

logger = logging.getLogger(__name__)

DEFAULT_TTL = 300  # 5 minutes

Clock = Callable[[], float]


class ResponseCache(ABC):
    """Key/value store whose entries expire ``ttl`` seconds after being written."""

    def __init__(self, ttl: float = DEFAULT_TTL, clock: Clock | None = None) -> None:
        self.ttl = ttl
        self._clock = clock or time.time

    def _is_fresh(self, written_at: float) -> bool:
        return self._clock() - written_at < self.ttl

    def get(self, key: str) -> Any | None:
        """Return the cached payload for *key*, or None if absent or expired."""
        try:
            entry = self._read(key)
        except CacheIOError as exc:
            logger.warning("cache read failed for %s: %s", key, exc)
            return None
        if entry is None:
            logger.debug("cache miss: %s", key)
            return None
        written_at, payload = entry
        if not self._is_fresh(written_at):
            logger.debug("cache expired: %s", key)
            return None
        logger.debug("cache hit: %s", key)
        return payload

    def set(self, key: str, payload: Any) -> bool:
        """Store *payload* under *key*. Returns False if the write failed."""
        try:
            self._write(key, self._clock(), payload)
        except CacheIOError as exc:
            logger.warning("cache write failed for %s: %s", key, exc)
            return False
        return True

    def clear(self) -> None:
        """Remove all entries."""
        try:
            self._clear()
        except CacheIOError as exc:
            logger.warning("cache clear failed: %s", exc)

    def stats(self) -> dict[str, Any]:
        """Return the number of live entries and the configured TTL."""
        try:
            stamps = self._timestamps()
        except CacheIOError as exc:
            logger.warning("cache stats failed: %s", exc)
            stamps = []
        live = sum(1 for written_at in stamps if self._is_fresh(written_at))
        return {"entries": live, "ttl": self.ttl}

    @abstractmethod
    def _read(self, key: str) -> tuple[float, Any] | None: ...

    @abstractmethod
    def _write(self, key: str, written_at: float, payload: Any) -> None: ...

    @abstractmethod
    def _clear(self) -> None: ...

    @abstractmethod
    def _timestamps(self) -> list[float]: ...


class MemoryCache(ResponseCache):
    """In-process cache backed by a dict."""

    def __init__(self, ttl: float = DEFAULT_TTL, clock: Clock | None = None) -> None:
        super().__init__(ttl, clock)
        self._entries: dict[str, tuple[float, Any]] = {}

    def _read(self, key: str) -> tuple[float, Any] | None:
        return self._entries.get(key)

    def _write(self, key: str, written_at: float, payload: Any) -> None:
        self._entries[key] = (written_at, payload)

    def _clear(self) -> None:
        self._entries.clear()

    def _timestamps(self) -> list[float]:
        return [written_at for written_at, _ in self._entries.values()]


class FileCache(ResponseCache):
    """One JSON file per key under *directory*.

    Expired files are left in place and simply ignored; they are overwritten
    on the next ``set`` for the same key or removed by ``clear``.
    """

    def __init__(
        self,
        directory: str | os.PathLike[str],
        ttl: float = DEFAULT_TTL,
        clock: Clock | None = None,
    ) -> None:
        super().__init__(ttl, clock)
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return self.directory / f"{digest}.json"

    @staticmethod
    def _load(path: Path) -> dict[str, Any]:
        try:
            entry = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise CacheIOError(str(exc)) from exc
        if not isinstance(entry, dict) or not isinstance(entry.get("written_at"), (int, float)):
            raise CacheIOError(f"corrupt cache entry {path.name}")
        return entry

    def _read(self, key: str) -> tuple[float, Any] | None:
        path = self._path(key)
        if not path.exists():
            return None
        entry = self._load(path)
        return float(entry["written_at"]), entry.get("payload")

    def _write(self, key: str, written_at: float, payload: Any) -> None:
        path = self._path(key)
        entry = {"key": key, "written_at": written_at, "payload": payload}
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp = path.with_suffix(".tmp")
            tmp.write_text(json.dumps(entry), encoding="utf-8")
            os.replace(tmp, path)
        except (OSError, TypeError, ValueError) as exc:
            raise CacheIOError(str(exc)) from exc

    def _clear(self) -> None:
        if not self.directory.exists():
            return
        try:
            for path in self.directory.glob("*.json"):
                path.unlink(missing_ok=True)
        except OSError as exc:
            raise CacheIOError(str(exc)) from exc

    def _timestamps(self) -> list[float]:
        if not self.directory.exists():
            return []
        stamps: list[float] = []
        for path in self.directory.glob("*.json"):
            try:
                stamps.append(float(self._load(path)["written_at"]))
            except CacheIOError:
                continue
        return stamps
