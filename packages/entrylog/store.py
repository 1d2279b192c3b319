"""Per-logger accumulator of pending entry fields."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from . import fields
from .errors import ReservedFieldError


class FieldStore:
    """Mutable field map that refuses reserved names on checked writes.

    ``set`` and ``update`` enforce the reserved-name policy; ``merge`` is the
    unchecked path used only by the logger for fields it owns (for example the
    ``exception_*`` keys).
    """

    def __init__(self) -> None:
        self._fields: dict[str, Any] = {}

    def set(self, name: str, value: Any) -> None:
        """Insert or overwrite one field, rejecting reserved names."""
        if fields.is_reserved(name):
            raise ReservedFieldError.for_field(name)
        self._fields[name] = value

    def update(self, values: Mapping[str, Any]) -> None:
        """Apply ``set`` per item in order; stops at the first rejection."""
        for name, value in values.items():
            self.set(name, value)

    def merge(self, values: Mapping[str, Any]) -> None:
        """Insert fields without the reserved-name check."""
        self._fields.update(values)

    def snapshot(self) -> dict[str, Any]:
        """Return a shallow copy of the accumulated fields."""
        return dict(self._fields)

    def clear(self) -> None:
        self._fields.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)
