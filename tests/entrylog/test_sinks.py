"""Tests for entry serialization, logging sinks and logging setup."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterator
from datetime import UTC, datetime
from pathlib import Path

import pytest

from packages.entrylog import (
    JsonFormatter,
    LoggingSink,
    PlainFormatter,
    configure_logging,
    configure_logging_from_settings,
    load_settings,
    serialize_entry,
)


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    """Restore root handlers and level after a logging setup test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    try:
        yield
    finally:
        root.handlers[:] = handlers
        root.setLevel(level)


def test_serialize_entry_renders_datetimes_and_keeps_order() -> None:
    """Datetimes should be ISO-8601; key order should survive."""
    entry = {
        "message": "m",
        "timestamp": datetime(2026, 1, 1, tzinfo=UTC),
        "tags": ("a", "b"),
    }

    assert serialize_entry(entry) == (
        '{"message":"m","timestamp":"2026-01-01T00:00:00+00:00","tags":["a","b"]}'
    )


def test_serialize_entry_stringifies_unknown_values() -> None:
    """Values json cannot encode should fall back to str."""

    class _Token:
        def __str__(self) -> str:
            return "token"

    assert json.loads(serialize_entry({"value": _Token()})) == {"value": "token"}


def test_logging_sink_attaches_entry_to_record(caplog: pytest.LogCaptureFixture) -> None:
    """The raw entry should travel with the log record."""
    entry = {"message": "m", "level": "info"}

    with caplog.at_level(logging.WARNING, logger="entrylog.audit"):
        LoggingSink(channel="entrylog.audit", level=logging.WARNING).flush(entry)

    assert caplog.records[0].entry is entry
    assert caplog.records[0].levelname == "WARNING"


def test_json_formatter_renders_entry_records_verbatim() -> None:
    """Records carrying an entry should render as that entry."""
    record = logging.makeLogRecord(
        {
            "name": "entrylog",
            "levelno": logging.DEBUG,
            "msg": "ignored",
            "entry": {"message": "hello", "level": "info"},
            "labels": {"service": "billing"},
        }
    )

    assert json.loads(JsonFormatter().format(record)) == {
        "message": "hello",
        "level": "info",
        "service": "billing",
    }


def test_json_formatter_renders_plain_records_with_core_fields() -> None:
    """Ordinary records should get timestamp/level/logger/message."""
    record = logging.makeLogRecord(
        {"name": "app", "levelname": "INFO", "levelno": logging.INFO, "msg": "hi %s", "args": ("there",)}
    )

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "hi there"
    assert payload["logger"] == "app"
    assert payload["level"] == "INFO"
    assert "timestamp" in payload


def test_plain_formatter_appends_sorted_labels() -> None:
    """Plain output should end with key=value labels."""
    record = logging.makeLogRecord(
        {
            "name": "app",
            "levelname": "INFO",
            "msg": "hi",
            "labels": {"service": "billing", "environment": "prod"},
        }
    )

    assert PlainFormatter().format(record).endswith("hi environment=prod service=billing")


def test_configure_logging_installs_single_stdout_handler(
    restore_root_logger: None, tmp_path: Path
) -> None:
    """Repeated configuration should leave exactly one handler."""
    settings = load_settings(
        cli_params={"logging": {"level": "DEBUG"}},
        config_path=tmp_path / "entrylog.yaml",
    )

    configure_logging_from_settings(settings)
    configure_logging_from_settings(settings)

    root = logging.getLogger()
    assert len(root.handlers) == 1
    handler = root.handlers[0]
    assert isinstance(handler, logging.StreamHandler)
    assert handler.stream is sys.stdout
    assert isinstance(handler.formatter, JsonFormatter)
    assert root.level == logging.DEBUG


def test_configure_logging_plain_output(restore_root_logger: None) -> None:
    """json_output=False should select the plain formatter."""
    configure_logging(level="warning", json_output=False)

    assert isinstance(logging.getLogger().handlers[0].formatter, PlainFormatter)


def test_configure_logging_from_settings_stamps_service_labels(
    restore_root_logger: None, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Configured service and environment should appear on emitted lines."""
    settings = load_settings(
        cli_params={"logging": {"service": "billing", "environment": "prod"}},
        config_path=tmp_path / "entrylog.yaml",
    )
    configure_logging_from_settings(settings)

    logging.getLogger("app").warning("disk low")

    payload = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert payload["message"] == "disk low"
    assert payload["service"] == "billing"
    assert payload["environment"] == "prod"
