"""Persistence-operation results and their loggable mapping form."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import singledispatch
from typing import Any, Iterable, Sequence

from . import fields


class ResultKind(str, Enum):
    """Persistence operation kind recorded as the entry ``type``."""

    SAVE = "save"
    DELETE = "delete"
    UPSERT = "upsert"


@dataclass(frozen=True)
class ResultError:
    """One failure reported by a persistence operation."""

    message: str
    status_code: str
    fields: Sequence[str] = field(default_factory=tuple)


@dataclass(frozen=True)
class SaveResult:
    """Outcome of an insert or update of one record."""

    id: str | None
    success: bool
    errors: Sequence[ResultError] = field(default_factory=tuple)


@dataclass(frozen=True)
class DeleteResult:
    """Outcome of deleting one record."""

    id: str | None
    success: bool
    errors: Sequence[ResultError] = field(default_factory=tuple)


@dataclass(frozen=True)
class UpsertResult:
    """Outcome of an upsert; ``created`` is False when a record was updated."""

    id: str | None
    success: bool
    created: bool
    errors: Sequence[ResultError] = field(default_factory=tuple)


def format_error(error: Any) -> dict[str, Any]:
    """Render one result error as ``{fields, message, code}``."""
    return {
        fields.ERROR_FIELDS: list(error.fields),
        fields.ERROR_MESSAGE: error.message,
        fields.ERROR_CODE: error.status_code,
    }


def _result_entry(result: Any, kind: ResultKind) -> dict[str, Any]:
    entry: dict[str, Any] = {
        fields.RESULT_ID: result.id,
        fields.RESULT_SUCCESS: result.success,
        fields.RESULT_ERRORS: [format_error(error) for error in result.errors],
        fields.RESULT_TYPE: kind.value,
    }
    if kind is ResultKind.UPSERT:
        entry[fields.RESULT_CREATED] = result.created
    return entry


def _unsupported(result: Any) -> dict[str, Any]:
    raise TypeError(f"unsupported persistence result type: {type(result).__name__}")


class ResultFormatter:
    """Render persistence results as ResultEntry mappings.

    Each formatter owns its dispatch registry; the built-in result dataclasses
    are registered on construction and other result classes can take part by
    declaring their kind with :meth:`register`.
    """

    def __init__(self) -> None:
        self._dispatch = singledispatch(_unsupported)
        self.register(SaveResult, ResultKind.SAVE)
        self.register(DeleteResult, ResultKind.DELETE)
        self.register(UpsertResult, ResultKind.UPSERT)

    def register(self, cls: type, kind: ResultKind) -> None:
        """Render instances of ``cls`` (and subclasses) as ``kind``."""
        self._dispatch.register(cls, lambda result: _result_entry(result, kind))

    def format(self, result: Any) -> dict[str, Any]:
        return self._dispatch(result)

    def format_all(self, results: Iterable[Any]) -> list[dict[str, Any]]:
        """Render each result independently, preserving input order."""
        return [self.format(result) for result in results]


DEFAULT_FORMATTER = ResultFormatter()


def format_result(result: Any) -> dict[str, Any]:
    """Render one persistence result with the process-wide formatter."""
    return DEFAULT_FORMATTER.format(result)


def format_results(results: Iterable[Any]) -> list[dict[str, Any]]:
    return DEFAULT_FORMATTER.format_all(results)

