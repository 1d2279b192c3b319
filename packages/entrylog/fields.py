"""Canonical entry field names and the reserved-name policy table.

These constants define the keys the logger itself assigns meaning to. Callers
may not set any of them through ``with_field``; the table below maps each
protected name to the message template used when a caller tries.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

MESSAGE = "message"
LEVEL = "level"
NAME = "name"
TIMESTAMP = "timestamp"

# Exception fields written by ``with_exception``.
EXCEPTION_MESSAGE = "exception_message"
EXCEPTION_STACK_TRACE = "exception_stack_trace"
EXCEPTION_LINE_NUMBER = "exception_line_number"
EXCEPTION_TYPE = "exception_type"
EXCEPTION_CAUSE = "exception_cause"

# Structured-object fields written by the request/response helpers.
REQUEST = "request"
RESPONSE = "response"
HEADERS = "headers"

# Persistence result fields.
RESULT = "result"
RESULTS = "results"
RESULT_ID = "id"
RESULT_SUCCESS = "success"
RESULT_ERRORS = "errors"
RESULT_TYPE = "type"
RESULT_CREATED = "created"
ERROR_FIELDS = "fields"
ERROR_MESSAGE = "message"
ERROR_CODE = "code"

SEEDED_FIELDS: tuple[str, ...] = (MESSAGE, LEVEL, NAME, TIMESTAMP)
EXCEPTION_FIELDS: tuple[str, ...] = (
    EXCEPTION_MESSAGE,
    EXCEPTION_STACK_TRACE,
    EXCEPTION_LINE_NUMBER,
    EXCEPTION_TYPE,
    EXCEPTION_CAUSE,
)

_RESERVED = "'{name}' is a reserved field name"
_USE_WITH_EXCEPTION = "'{name}' is a reserved field name; use with_exception() instead"
_USE_WITH_REQUEST = "'{name}' is a reserved field name; use with_request() instead"
_USE_WITH_RESPONSE = "'{name}' is a reserved field name; use with_response() instead"

RESERVED_FIELDS: Mapping[str, str] = MappingProxyType(
    {
        **{name: _RESERVED for name in SEEDED_FIELDS},
        **{name: _USE_WITH_EXCEPTION for name in EXCEPTION_FIELDS},
        REQUEST: _USE_WITH_REQUEST,
        RESPONSE: _USE_WITH_RESPONSE,
    }
)


def is_reserved(name: str) -> bool:
    """Return True when ``name`` is protected (case-sensitive exact match)."""
    return name in RESERVED_FIELDS


def reserved_message(name: str) -> str:
    """Render the rejection message for one reserved field name."""
    return RESERVED_FIELDS[name].format(name=name)
