"""Severity levels accepted by the entry builder."""

from __future__ import annotations

from enum import Enum


class Level(str, Enum):
    """Syslog-style severities; the value is the rendered entry level."""

    ALERT = "alert"
    CRIT = "crit"
    DEBUG = "debug"
    ERR = "err"
    EMERG = "emerg"
    INFO = "info"
    NOTICE = "notice"
    WARNING = "warning"

    @property
    def rendered(self) -> str:
        """Return the lower-cased member name written into entries."""
        return self.name.lower()
