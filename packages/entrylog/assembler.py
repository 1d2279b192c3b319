"""Entry assembly: seeded core fields followed by accumulated caller fields."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from . import fields
from .levels import Level

Entry = dict[str, Any]


def assemble_entry(
    *,
    message: str,
    level: Level,
    name: str,
    timestamp: datetime,
    extra: Mapping[str, Any],
) -> Entry:
    """Build one entry; seeded keys come first, caller fields overlay them.

    Caller fields cannot contain the seeded keys because the store rejects
    them, so the overlay never displaces ``message``/``level``/``name``/
    ``timestamp``.
    """
    entry: Entry = {
        fields.MESSAGE: message,
        fields.LEVEL: level.rendered,
        fields.NAME: name,
        fields.TIMESTAMP: timestamp,
    }
    entry.update(extra)
    return entry
