"""Settings resolution with deterministic precedence.

The cascade is always:
1) CLI params
2) Environment variables
3) ~/.config/entrylog/entrylog.yaml
4) Built-in defaults

Environment variable format:
- Prefix: ``ENTRYLOG_``
- Nested keys: ``__`` separator
- Example: ``ENTRYLOG_SINK__LEVEL=INFO`` -> ``sink.level = "INFO"``
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar, Mapping

from .models import DEFAULT_CONFIG_PATH, EntrylogSettings


def load_settings(
    *,
    cli_params: Mapping[str, Any] | None = None,
    config_path: str | Path | None = None,
) -> EntrylogSettings:
    """Resolve settings, reading YAML from ``config_path`` when given."""
    resolved = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH

    class _FileBoundSettings(EntrylogSettings):
        _config_path: ClassVar[Path] = resolved

    return _FileBoundSettings(**dict(cli_params or {}))
