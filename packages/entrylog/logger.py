"""Fluent structured-entry builder with per-entry and buffered delivery.

Callers chain ``with_*`` calls to accumulate fields, then call a severity
method. Each severity call assembles one entry, hands it to the sink once, and
clears the accumulated fields, even when the sink raises, so a failed
delivery never leaks stale fields into the next entry.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Collection, Iterable, Iterator, Mapping
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any

from . import fields
from .assembler import Entry, assemble_entry
from .config import EntrylogSettings
from .converters import record_fields, records_fields, request_fields, response_fields
from .exceptions import ExceptionFieldExtractor
from .levels import Level
from .results import DEFAULT_FORMATTER, ResultFormatter
from .sinks import BulkSink, LoggingBulkSink, LoggingSink, Sink
from .store import FieldStore

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(UTC)


class Logger:
    """Accumulate named fields, then emit them as one entry per severity call.

    A logger instance owns its field store. Field mutation and the
    assemble/flush/clear cycle share one re-entrant lock. Threads sharing one
    instance must hold it across a whole chain-and-emit sequence with
    :meth:`exclusive`, otherwise another thread's fields can land in their
    entry.
    """

    def __init__(
        self,
        name: str,
        *,
        sink: Sink | None = None,
        extractor: ExceptionFieldExtractor | None = None,
        clock: Clock | None = None,
        result_formatter: ResultFormatter | None = None,
    ) -> None:
        self._name = name
        self._results = (
            result_formatter if result_formatter is not None else DEFAULT_FORMATTER
        )
        self._sink = sink if sink is not None else LoggingSink()
        self._extractor = extractor if extractor is not None else ExceptionFieldExtractor()
        self._clock = clock if clock is not None else _utc_now
        self._fields = FieldStore()
        self._lock = threading.RLock()

    @classmethod
    def from_settings(
        cls,
        name: str,
        settings: EntrylogSettings,
        *,
        sink: Sink | None = None,
        clock: Clock | None = None,
    ) -> Logger:
        """Build a logger whose default sink and extractor honour ``settings``."""
        return cls(
            name,
            sink=sink
            if sink is not None
            else LoggingSink(
                channel=settings.sink.channel, level=settings.sink.level_number
            ),
            extractor=ExceptionFieldExtractor(
                max_depth=settings.exceptions.max_cause_depth
            ),
            clock=clock,
        )

    @property
    def name(self) -> str:
        return self._name

    @contextmanager
    def exclusive(self) -> Iterator[Logger]:
        """Hold the logger lock while building and emitting one entry."""
        with self._lock:
            yield self

    @property
    def pending_fields(self) -> dict[str, Any]:
        """Return a copy of the fields pending for the next entry."""
        with self._lock:
            return self._fields.snapshot()

    # Field accumulation

    def with_field(self, name: str, value: Any) -> Logger:
        """Set one field; raises ``ReservedFieldError`` for reserved names."""
        with self._lock:
            self._fields.set(name, value)
        return self

    def with_fields(self, values: Mapping[str, Any]) -> Logger:
        """Set every field in order; earlier items stay set if a later one fails."""
        with self._lock:
            self._fields.update(values)
        return self

    def with_exception(self, exc: BaseException) -> Logger:
        """Record ``exc`` and its cause chain under the ``exception_*`` fields."""
        extracted = self._extractor.extract(exc)
        with self._lock:
            self._fields.merge(extracted)
        return self

    def with_result(self, result: Any, key: str = fields.RESULT) -> Logger:
        return self.with_field(key, self._results.format(result))

    def with_results(self, results: Iterable[Any], key: str = fields.RESULTS) -> Logger:
        return self.with_field(key, self._results.format_all(results))

    def with_record(
        self, key: str, record: Any, exclude: Collection[str] | None = None
    ) -> Logger:
        """Store the populated fields of ``record`` under ``key``."""
        return self.with_field(key, record_fields(record, exclude))

    def with_records(
        self, key: str, records: Iterable[Any], exclude: Collection[str] | None = None
    ) -> Logger:
        return self.with_field(key, records_fields(records, exclude))

    def with_request(
        self,
        request: Any,
        include_headers: Collection[str] | None = None,
        *,
        key: str | None = None,
    ) -> Logger:
        """Store an HTTP request summary; headers are included only on request.

        Without ``key`` the summary lands under the reserved ``request`` field.
        An explicit ``key`` goes through the reserved-name check.
        """
        return self._with_helper_field(
            key, fields.REQUEST, request_fields(request, include_headers)
        )

    def with_response(
        self,
        response: Any,
        exclude_headers: Collection[str] | None = None,
        *,
        key: str | None = None,
    ) -> Logger:
        """Store an HTTP response summary with every header not excluded."""
        return self._with_helper_field(
            key, fields.RESPONSE, response_fields(response, exclude_headers)
        )

    def _with_helper_field(self, key: str | None, default: str, value: Any) -> Logger:
        if key is not None:
            return self.with_field(key, value)
        with self._lock:
            self._fields.merge({default: value})
        return self

    # Emission

    def write(self, message: str, level: Level | str) -> None:
        """Assemble one entry, flush it, then clear the accumulated fields."""
        level = Level(level)
        with self._lock:
            entry = assemble_entry(
                message=message,
                level=level,
                name=self._name,
                timestamp=self._clock(),
                extra=self._fields.snapshot(),
            )
            try:
                self.flush(entry)
            finally:
                self._fields.clear()

    def flush(self, entry: Entry) -> None:
        """Deliver one assembled entry; subclasses may override."""
        self._sink.flush(entry)

    def debug(self, message: str) -> None:
        self.write(message, Level.DEBUG)

    def info(self, message: str) -> None:
        self.write(message, Level.INFO)

    def notice(self, message: str) -> None:
        self.write(message, Level.NOTICE)

    def warning(self, message: str) -> None:
        self.write(message, Level.WARNING)

    def alert(self, message: str) -> None:
        self.write(message, Level.ALERT)

    def error(self, message: str) -> None:
        self.write(message, Level.ERR)

    def critical(self, message: str) -> None:
        self.write(message, Level.CRIT)

    def emergency(self, message: str) -> None:
        self.write(message, Level.EMERG)


class _EntryBuffer:
    """Sink that retains entries in emit order."""

    def __init__(self) -> None:
        self.entries: list[Entry] = []

    def flush(self, entry: Entry) -> None:
        self.entries.append(entry)


class BulkLogger(Logger):
    """Logger that buffers entries and delivers them together on ``dispose``.

    ``dispose`` does not empty the buffer: calling it twice delivers the same
    entries twice. Use the logger as a context manager to dispose exactly once
    at the end of its lifetime.
    """

    def __init__(
        self,
        name: str,
        *,
        bulk_sink: BulkSink | None = None,
        extractor: ExceptionFieldExtractor | None = None,
        clock: Clock | None = None,
        result_formatter: ResultFormatter | None = None,
    ) -> None:
        self._buffer = _EntryBuffer()
        super().__init__(
            name,
            sink=self._buffer,
            extractor=extractor,
            clock=clock,
            result_formatter=result_formatter,
        )
        self._bulk_sink = bulk_sink if bulk_sink is not None else LoggingBulkSink()

    @classmethod
    def from_settings(
        cls,
        name: str,
        settings: EntrylogSettings,
        *,
        bulk_sink: BulkSink | None = None,
        clock: Clock | None = None,
    ) -> BulkLogger:
        return cls(
            name,
            bulk_sink=bulk_sink
            if bulk_sink is not None
            else LoggingBulkSink(
                channel=settings.sink.channel, level=settings.sink.level_number
            ),
            extractor=ExceptionFieldExtractor(
                max_depth=settings.exceptions.max_cause_depth
            ),
            clock=clock,
        )

    @property
    def entries(self) -> tuple[Entry, ...]:
        """Return the buffered entries in emit order."""
        with self._lock:
            return tuple(self._buffer.entries)

    def dispose(self) -> None:
        """Deliver every buffered entry to the bulk sink in one call."""
        with self._lock:
            self._bulk_sink.bulk_flush(list(self._buffer.entries))

    def __enter__(self) -> BulkLogger:
        return self

    def __exit__(self, *_: object) -> None:
        self.dispose()
