"""adcloak Settings Configuration Model.

Main Settings class that consolidates all configuration domains.
"""

from __future__ import annotations

import logging
from pathlib import Path

import toml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from adcloak.config.models.app_settings import AppSettings, LoggingSettings
from adcloak.config.models.relocation_settings import RelocationSettings
from adcloak.config.models.scan_settings import ScanSettings
from adcloak.shared.constants import Encoding

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Settings facade providing unified configuration access.

    Values come from (highest priority first) init arguments, environment
    variables prefixed with ``ADCLOAK_`` (nested with ``__``, e.g.
    ``ADCLOAK_RELOCATION__UPLOAD_DIR``) and model defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="ADCLOAK_",
        env_nested_delimiter="__",
        env_ignore_empty=True,
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    scan: ScanSettings = Field(default_factory=ScanSettings)
    relocation: RelocationSettings = Field(default_factory=RelocationSettings)

    @classmethod
    def from_toml_file(cls, file_path: str | Path) -> Settings:
        """Load settings from TOML file with environment variable overrides."""
        file_path = Path(file_path)
        if not file_path.exists():
            msg = f"Configuration file not found: {file_path}"
            raise FileNotFoundError(msg)

        raw_config = toml.load(file_path)
        return cls(**raw_config)

    def to_toml_file(self, file_path: str | Path) -> None:
        """Save settings to TOML file."""
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        config_dict = self.model_dump(mode="json", by_alias=True, exclude_none=True)

        with open(file_path, "w", encoding=Encoding.DEFAULT) as f:
            toml.dump(config_dict, f)
        logger.debug("Settings written to %s", file_path)
