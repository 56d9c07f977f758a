"""Tests for api_logging.py (async decorators and file logging) and logging_config.py."""

from __future__ import annotations

import logging

import pytest

import bucharest_weather.api_logging as mod
from bucharest_weather.api_logging import log_api_call, log_service_call, set_log_dir
from bucharest_weather.logging_config import configure_logging


class _FakeClient:
    """Minimal class to test logging decorators."""

    @log_api_call
    async def get_days(self, days: int) -> list[dict]:
        return [{"day": 1}, {"day": 2}]

    @log_api_call
    async def get_record(self, city: str) -> dict:
        return {"city": city}

    @log_api_call
    async def get_failing(self, key: int) -> list[dict]:
        raise ValueError("test error")

    @log_service_call
    async def compute_stuff(self, data: list) -> dict:
        return {"result": len(data)}

    @log_service_call
    async def compute_failing(self) -> None:
        raise RuntimeError("service error")


@pytest.fixture
def fake_client():
    return _FakeClient()


@pytest.fixture
def log_dir(tmp_path):
    """Redirect the API log to a fresh directory."""
    target = tmp_path / "api"
    set_log_dir(target)
    return target


def _content(log_dir) -> str:
    return (log_dir / "api_calls.log").read_text(encoding="utf-8")


class TestLogApiCall:
    @pytest.mark.asyncio
    async def test_returns_result(self, fake_client, log_dir):
        assert await fake_client.get_days(3) == [{"day": 1}, {"day": 2}]

    @pytest.mark.asyncio
    async def test_logs_call_and_ok(self, fake_client, log_dir):
        await fake_client.get_days(3)
        content = _content(log_dir)
        assert "CALL: _FakeClient.get_days(3)" in content
        assert "OK: _FakeClient.get_days(3) -> 2 items" in content

    @pytest.mark.asyncio
    async def test_single_record_counts_as_one(self, fake_client, log_dir):
        await fake_client.get_record(city="Bucharest")
        assert "OK: _FakeClient.get_record(city='Bucharest') -> 1 items" in _content(log_dir)

    @pytest.mark.asyncio
    async def test_logs_failure(self, fake_client, log_dir):
        with pytest.raises(ValueError, match="test error"):
            await fake_client.get_failing(123)
        content = _content(log_dir)
        assert "FAIL: _FakeClient.get_failing(123)" in content
        assert "ValueError" in content

    def test_preserves_function_name(self, fake_client):
        assert fake_client.get_days.__name__ == "get_days"


class TestLogServiceCall:
    @pytest.mark.asyncio
    async def test_returns_result(self, fake_client, log_dir):
        assert await fake_client.compute_stuff([1, 2, 3]) == {"result": 3}

    @pytest.mark.asyncio
    async def test_logs_service_call(self, fake_client, log_dir):
        await fake_client.compute_stuff([1, 2])
        content = _content(log_dir)
        assert "SERVICE CALL: _FakeClient.compute_stuff" in content
        assert "SERVICE OK: _FakeClient.compute_stuff" in content

    @pytest.mark.asyncio
    async def test_logs_service_failure(self, fake_client, log_dir):
        with pytest.raises(RuntimeError, match="service error"):
            await fake_client.compute_failing()
        content = _content(log_dir)
        assert "SERVICE FAIL: _FakeClient.compute_failing" in content
        assert "RuntimeError" in content


class TestLogDirectory:
    @pytest.mark.asyncio
    async def test_creates_log_directory(self, fake_client, tmp_path):
        """Log directory is created on first use."""
        new_dir = tmp_path / "nested" / "logs"
        set_log_dir(new_dir)
        await fake_client.compute_stuff([])
        assert (new_dir / "api_calls.log").exists()

    @pytest.mark.asyncio
    async def test_redirect_closes_previous_handler(self, fake_client, tmp_path):
        set_log_dir(tmp_path / "first")
        await fake_client.get_days(1)
        set_log_dir(tmp_path / "second")
        await fake_client.get_days(2)
        assert "get_days(2)" not in (tmp_path / "first" / "api_calls.log").read_text(encoding="utf-8")
        assert "get_days(2)" in (tmp_path / "second" / "api_calls.log").read_text(encoding="utf-8")

    @pytest.mark.asyncio
    async def test_unwritable_directory_is_silent(self, fake_client, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        set_log_dir(blocker / "logs")
        assert await fake_client.get_days(1) == [{"day": 1}, {"day": 2}]
        assert isinstance(mod._handler, logging.NullHandler)

    @pytest.mark.asyncio
    async def test_writes_alongside_other_handlers(self, fake_client, tmp_path):
        """A handler attached by someone else (e.g. a log capture) does not suppress the file."""
        other = logging.NullHandler()
        named_logger = logging.getLogger("bucharest_weather.api")
        named_logger.addHandler(other)
        try:
            set_log_dir(tmp_path / "shared")
            await fake_client.get_days(4)
            set_log_dir(tmp_path / "again")
            assert other in named_logger.handlers
        finally:
            named_logger.removeHandler(other)
        assert "get_days(4)" in (tmp_path / "shared" / "api_calls.log").read_text(encoding="utf-8")


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def _restore_loggers(self):
        saved = {
            name: (logging.getLogger(name).level, logging.getLogger(name).handlers[:], logging.getLogger(name).propagate)
            for name in ("bucharest_weather", "httpx")
        }
        yield
        for name, (level, handlers, propagate) in saved.items():
            logger = logging.getLogger(name)
            logger.setLevel(level)
            logger.handlers[:] = handlers
            logger.propagate = propagate

    def test_quiet_by_default(self):
        configure_logging()
        logger = logging.getLogger("bucharest_weather")
        assert logger.level == logging.WARNING
        assert logging.getLogger("httpx").level == logging.WARNING
        assert len(logger.handlers) == 1

    def test_verbose(self):
        configure_logging(verbose=True)
        assert logging.getLogger("bucharest_weather").level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.INFO

    def test_no_duplicate_handlers(self):
        configure_logging()
        configure_logging()
        assert len(logging.getLogger("bucharest_weather").handlers) == 1
