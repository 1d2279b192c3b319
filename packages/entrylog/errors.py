"""Typed errors raised by the entry builder."""

from __future__ import annotations

from dataclasses import dataclass

from . import fields


@dataclass(frozen=True)
class EntrylogError(Exception):
    """Base error type for entry builder failures."""

    message: str

    def __str__(self) -> str:
        """Return the human-readable error message."""
        return self.message


@dataclass(frozen=True)
class ReservedFieldError(EntrylogError):
    """Caller tried to set a field name the logger reserves for itself."""

    field_name: str

    @classmethod
    def for_field(cls, name: str) -> ReservedFieldError:
        """Build the error for ``name`` from the reserved-name table."""
        return cls(message=fields.reserved_message(name), field_name=name)
