"""Exception and cause-chain extraction into loggable mappings.

An exception becomes a flat mapping of the five ``exception_*`` fields, where
``exception_cause`` nests the same shape for the wrapped cause, recursively,
until the chain ends. Python chains can be cyclic (an exception re-raised
inside its own handler), so traversal stops at an already-visited exception
and at a configurable depth cap.
"""

from __future__ import annotations

import logging
import traceback
from types import TracebackType
from typing import Any

from . import fields

DEFAULT_MAX_CAUSE_DEPTH = 50

_LOGGER = logging.getLogger("entrylog")


def exception_cause(exc: BaseException) -> BaseException | None:
    """Return the explicit cause, falling back to unsuppressed implicit context."""
    if exc.__cause__ is not None:
        return exc.__cause__
    if exc.__suppress_context__:
        return None
    return exc.__context__


def exception_type_name(exc: BaseException) -> str:
    """Return the qualified class name; builtins stay unqualified."""
    cls = type(exc)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def stack_trace_text(exc: BaseException) -> str:
    """Return formatted traceback frames, or an empty string if never raised."""
    return "".join(traceback.format_tb(exc.__traceback__))


def originating_line_number(exc: BaseException) -> int | None:
    """Return the line number of the innermost traceback frame."""
    tb: TracebackType | None = exc.__traceback__
    if tb is None:
        return None
    while tb.tb_next is not None:
        tb = tb.tb_next
    return tb.tb_lineno


class ExceptionFieldExtractor:
    """Convert exceptions plus their cause chains into nested field mappings."""

    def __init__(self, *, max_depth: int = DEFAULT_MAX_CAUSE_DEPTH) -> None:
        if max_depth <= 0:
            raise ValueError("max_depth must be positive")
        self._max_depth = max_depth

    def extract(self, exc: BaseException) -> dict[str, Any]:
        """Return the ``exception_*`` mapping for ``exc`` and its causes."""
        return self._extract(exc, depth=1, seen={id(exc)})

    def _extract(
        self, exc: BaseException, *, depth: int, seen: set[int]
    ) -> dict[str, Any]:
        cause = exception_cause(exc)
        nested: dict[str, Any] | None = None
        if cause is not None:
            if id(cause) in seen:
                _LOGGER.warning(
                    "exception cause chain is cyclic; truncated at %s",
                    exception_type_name(cause),
                )
            elif depth >= self._max_depth:
                _LOGGER.warning(
                    "exception cause chain exceeds %d levels; truncated",
                    self._max_depth,
                )
            else:
                seen.add(id(cause))
                nested = self._extract(cause, depth=depth + 1, seen=seen)

        return {
            fields.EXCEPTION_MESSAGE: str(exc),
            fields.EXCEPTION_STACK_TRACE: stack_trace_text(exc),
            fields.EXCEPTION_LINE_NUMBER: originating_line_number(exc),
            fields.EXCEPTION_TYPE: exception_type_name(exc),
            fields.EXCEPTION_CAUSE: nested,
        }
