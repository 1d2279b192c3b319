"""Structured log-entry builder.

Callers accumulate named fields on a ``Logger``, then emit them as one ordered
entry per severity call. Entries go to an injected ``Sink`` immediately, or
are buffered by ``BulkLogger`` and delivered to a ``BulkSink`` on dispose.
"""

from . import fields
from .assembler import Entry, assemble_entry
from .config import EntrylogSettings, load_settings
from .converters import (
    HttpxRequestView,
    HttpxResponseView,
    RecordLike,
    RequestLike,
    ResponseLike,
    record_fields,
    records_fields,
    request_fields,
    response_fields,
)
from .errors import EntrylogError, ReservedFieldError
from .exceptions import ExceptionFieldExtractor
from .levels import Level
from .logger import BulkLogger, Logger
from .logging_config import (
    JsonFormatter,
    PlainFormatter,
    configure_logging,
    configure_logging_from_settings,
)
from .results import (
    DeleteResult,
    ResultError,
    ResultFormatter,
    ResultKind,
    SaveResult,
    UpsertResult,
    format_result,
    format_results,
)
from .sinks import BulkSink, LoggingBulkSink, LoggingSink, Sink, serialize_entry
from .store import FieldStore

__all__ = [
    "BulkLogger",
    "BulkSink",
    "DeleteResult",
    "Entry",
    "EntrylogError",
    "EntrylogSettings",
    "ExceptionFieldExtractor",
    "FieldStore",
    "HttpxRequestView",
    "HttpxResponseView",
    "JsonFormatter",
    "Level",
    "Logger",
    "LoggingBulkSink",
    "LoggingSink",
    "PlainFormatter",
    "RecordLike",
    "RequestLike",
    "ReservedFieldError",
    "ResponseLike",
    "ResultError",
    "ResultFormatter",
    "ResultKind",
    "SaveResult",
    "Sink",
    "UpsertResult",
    "assemble_entry",
    "configure_logging",
    "configure_logging_from_settings",
    "fields",
    "format_result",
    "format_results",
    "load_settings",
    "record_fields",
    "records_fields",
    "request_fields",
    "response_fields",
    "serialize_entry",
]
