"""Public API for entry logging configuration."""

from .loader import load_settings
from .models import (
    DEFAULT_CONFIG_PATH,
    EntrylogSettings,
    ExceptionSettings,
    LoggingSettings,
    SinkSettings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "EntrylogSettings",
    "ExceptionSettings",
    "LoggingSettings",
    "SinkSettings",
    "load_settings",
]
