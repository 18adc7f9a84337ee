"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from todokit.core.logging import (
    add_request_context,
    clear_request_context,
    configure_logging,
    get_logger,
    reset_request_context,
)


@pytest.fixture(autouse=True)
def restore_logging() -> Generator[None, None, None]:
    """Put logging back the way the test runner had it."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    clear_request_context()
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


def last_json_line(err: str) -> dict:
    lines = [line for line in err.splitlines() if line.strip()]
    return json.loads(lines[-1])


def test_json_output_includes_context(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(level="INFO", log_format="json")
    logger = get_logger("todokit.test")

    add_request_context(request_id="r-1", method="GET")
    logger.info("todo.created", todo_id=3)

    record = last_json_line(capsys.readouterr().err)
    assert record["event"] == "todo.created"
    assert record["todo_id"] == 3
    assert record["request_id"] == "r-1"
    assert record["method"] == "GET"
    assert record["level"] == "info"
    assert "timestamp" in record


def test_reset_request_context(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(log_format="json")
    logger = get_logger("todokit.test")

    add_request_context(request_id="r-2", path="/x")
    reset_request_context("request_id")
    logger.info("after.reset")

    record = last_json_line(capsys.readouterr().err)
    assert "request_id" not in record
    assert record["path"] == "/x"


def test_level_filters_records(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(level="WARNING", log_format="json")
    logger = get_logger("todokit.test")

    logger.info("hidden")
    logger.warning("shown")

    err = capsys.readouterr().err
    assert "hidden" not in err
    assert last_json_line(err)["event"] == "shown"


def test_env_fallback(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TODOKIT_LOG_LEVEL", "ERROR")
    configure_logging()

    assert logging.getLogger().level == logging.ERROR


def test_stdlib_records_use_same_renderer(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(log_format="json")

    logging.getLogger("uvicorn.error").warning("server says %s", "hi")

    record = last_json_line(capsys.readouterr().err)
    assert record["event"] == "server says hi"
    assert record["logger"] == "uvicorn.error"
