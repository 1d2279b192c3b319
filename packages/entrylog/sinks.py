"""Delivery contracts for assembled entries and the default logging sinks."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from typing import Any, Protocol

DEFAULT_CHANNEL = "entrylog"


class Sink(Protocol):
    """Takes ownership of one finished entry."""

    def flush(self, entry: dict[str, Any]) -> None: ...


class BulkSink(Protocol):
    """Takes ownership of every buffered entry at disposal time."""

    def bulk_flush(self, entries: Sequence[dict[str, Any]]) -> None: ...


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return list(value)
    return str(value)


def serialize_entry(entry: Mapping[str, Any]) -> str:
    """Render one entry as compact JSON, preserving key order."""
    return json.dumps(entry, default=_json_default, separators=(",", ":"))


class LoggingSink:
    """Serialize each entry onto a ``logging`` channel as it is emitted."""

    def __init__(
        self, *, channel: str = DEFAULT_CHANNEL, level: int = logging.DEBUG
    ) -> None:
        self._logger = logging.getLogger(channel)
        self._level = level

    def flush(self, entry: dict[str, Any]) -> None:
        """Emit one serialized entry; the raw entry rides along for formatters."""
        self._logger.log(self._level, serialize_entry(entry), extra={"entry": entry})


class LoggingBulkSink:
    """Serialize buffered entries onto a ``logging`` channel one by one."""

    def __init__(
        self, *, channel: str = DEFAULT_CHANNEL, level: int = logging.DEBUG
    ) -> None:
        self._sink = LoggingSink(channel=channel, level=level)

    def bulk_flush(self, entries: Sequence[dict[str, Any]]) -> None:
        for entry in entries:
            self._sink.flush(entry)
