"""Minimal stdout logging configuration for entry diagnostics.

Design goals:
- Always emit logs to stdout for container log collection.
- Render assembled entries verbatim so a JSON line is the entry itself.
- Keep API simple while allowing later extension without breaking callers.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from . import fields
from .config import EntrylogSettings
from .sinks import serialize_entry

SERVICE = "service"
ENVIRONMENT = "environment"
LOGGER = "logger"


class ServiceFilter(logging.Filter):
    """Stamp configured service/environment labels onto each log record."""

    def __init__(self, *, service: str | None, environment: str | None) -> None:
        super().__init__()
        self._labels = {
            key: value
            for key, value in ((SERVICE, service), (ENVIRONMENT, environment))
            if value
        }

    def filter(self, record: logging.LogRecord) -> bool:
        setattr(record, "labels", self._labels)
        return True


class JsonFormatter(logging.Formatter):
    """Emit newline-delimited JSON logs with stable core fields."""

    def format(self, record: logging.LogRecord) -> str:
        labels = getattr(record, "labels", None)
        entry = getattr(record, "entry", None)
        if isinstance(entry, Mapping):
            payload: dict[str, Any] = dict(entry)
        else:
            payload = {
                fields.TIMESTAMP: datetime.now(UTC).isoformat(),
                fields.LEVEL: record.levelname,
                LOGGER: record.name,
                fields.MESSAGE: record.getMessage(),
            }
            if record.exc_info:
                payload["exception"] = self.formatException(record.exc_info)

        if isinstance(labels, dict):
            for key, value in labels.items():
                payload.setdefault(key, value)

        return serialize_entry(payload)


class PlainFormatter(logging.Formatter):
    """Human-readable formatter that still appends service labels."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        labels = getattr(record, "labels", None)
        if not isinstance(labels, dict) or not labels:
            return message
        suffix = " ".join(f"{key}={value}" for key, value in sorted(labels.items()))
        return f"{message} {suffix}"


def configure_logging(
    *,
    level: str = "INFO",
    json_output: bool = True,
    service: str | None = None,
    environment: str | None = None,
) -> None:
    """Configure root logging with a single stdout handler.

    This function is idempotent for handler setup: existing root handlers are
    replaced to avoid duplicate emissions when called multiple times.
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level.upper())

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setLevel(level.upper())
    handler.addFilter(ServiceFilter(service=service, environment=environment))
    handler.setFormatter(JsonFormatter() if json_output else PlainFormatter())

    root.addHandler(handler)


def configure_logging_from_settings(settings: EntrylogSettings) -> None:
    """Apply the ``logging`` subtree of resolved settings to root logging."""
    configure_logging(
        level=settings.logging.level,
        json_output=settings.logging.json_output,
        service=settings.logging.service,
        environment=settings.logging.environment,
    )
