"""Typed configuration models for entry logging settings."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar, Literal

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from ..exceptions import DEFAULT_MAX_CAUSE_DEPTH
from ..sinks import DEFAULT_CHANNEL

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "entrylog" / "entrylog.yaml"

LevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingSettings(BaseModel):
    """Process logging configuration applied by ``configure_logging_from_settings``."""

    level: LevelName = "INFO"
    json_output: bool = True
    service: str = "entrylog"
    environment: str = "dev"


class SinkSettings(BaseModel):
    """Diagnostic channel used by the default sinks."""

    channel: str = DEFAULT_CHANNEL
    level: LevelName = "DEBUG"

    @property
    def level_number(self) -> int:
        """Return the numeric ``logging`` level for ``level``."""
        return logging.getLevelName(self.level)


class ExceptionSettings(BaseModel):
    """Cause-chain traversal limits."""

    max_cause_depth: int = Field(default=DEFAULT_MAX_CAUSE_DEPTH, gt=0)


class EntrylogSettings(BaseSettings):
    """Root settings resolved from init/env/yaml/defaults sources."""

    model_config = SettingsConfigDict(
        env_prefix="ENTRYLOG_",
        env_nested_delimiter="__",
        extra="ignore",
        nested_model_default_partial_update=True,
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    sink: SinkSettings = Field(default_factory=SinkSettings)
    exceptions: ExceptionSettings = Field(default_factory=ExceptionSettings)

    _config_path: ClassVar[Path] = DEFAULT_CONFIG_PATH

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Apply precedence: init > env > yaml > model defaults."""
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(
                settings_cls,
                yaml_file=cls._config_path,
                yaml_file_encoding="utf-8",
            ),
        )
