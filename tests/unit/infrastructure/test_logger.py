# tests/unit/infrastructure/test_logger.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
from __future__ import annotations

import json
import logging
import sys

import pytest

from archespec.infrastructure.logging.logger import (
    JsonFormatter,
    configure_root_logging,
    get_json_logger,
)


def _capture_log(record_msg: str, level: int = logging.INFO, **extra) -> dict:
    """Format a record carrying ``extra`` and return the parsed JSON payload."""
    logger = logging.getLogger("test.logger")
    fmt = JsonFormatter("archespec-test")
    record = logger.makeRecord(
        name=logger.name,
        level=level,
        fn="test_logger",
        lno=123,
        msg=record_msg,
        args=(),
        exc_info=None,
        extra=extra or None,
    )
    return json.loads(fmt.format(record))


def test_configure_root_logging_installs_json_handler(monkeypatch: pytest.MonkeyPatch) -> None:
    """Root logger should get a JSON formatter and respect LOG_LEVEL."""
    monkeypatch.setenv("LOG_LEVEL", "debug")
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)

    configure_root_logging()

    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, JsonFormatter)


def test_configure_root_logging_is_idempotent(monkeypatch: pytest.MonkeyPatch) -> None:
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)

    configure_root_logging("WARNING")
    configure_root_logging("WARNING")

    assert len(root.handlers) == 1
    assert root.level == logging.WARNING


def test_json_formatter_basic_fields() -> None:
    """Formatter should emit ts, level, logger, message and service."""
    payload = _capture_log("hello-world")
    assert payload["message"] == "hello-world"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.logger"
    assert payload["service"] == "archespec-test"
    assert "ts" in payload


def test_json_formatter_merges_extras() -> None:
    payload = _capture_log("archespec.export_documents.done", kind="openapi", bytes=42, path=None)

    assert payload["kind"] == "openapi"
    assert payload["bytes"] == 42
    assert payload["path"] is None
    assert "lineno" not in payload


def test_json_formatter_includes_exception_info() -> None:
    """Formatter should add exc_type and exc_message for errors with exc_info."""
    logger = logging.getLogger("test.logger.exc")
    try:
        raise ValueError("boom")
    except ValueError:
        record = logger.makeRecord(logger.name, logging.ERROR, "f", 1, "failed", (), sys.exc_info())

    payload = json.loads(JsonFormatter("svc").format(record))

    assert payload["exc_type"] == "ValueError"
    assert payload["exc_message"] == "boom"


def test_get_json_logger_propagates_to_root() -> None:
    logger = get_json_logger("archespec.tests.logger")

    assert logger.name == "archespec.tests.logger"
    assert logger.propagate is True


def test_root_handler_tags_records_with_the_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "staging")
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)

    configure_root_logging("INFO")
    record = logging.getLogger("test.logger.env").makeRecord("test.logger.env", logging.INFO, "f", 1, "hi", (), None)
    payload = json.loads(root.handlers[0].format(record))

    assert payload["env"] == "staging"
    assert payload["service"] == "archespec"
    assert "env" not in _capture_log("no-env")
