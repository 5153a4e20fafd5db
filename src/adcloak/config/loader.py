"""Settings loading.

Reads the TOML configuration file when it exists and otherwise falls
back to defaults plus ``ADCLOAK_`` environment overrides.
"""

from __future__ import annotations

import logging
from pathlib import Path

import toml
from pydantic import ValidationError

from adcloak.config.models.settings import Settings
from adcloak.shared.constants import FileSystem
from adcloak.shared.errors import create_config_error

logger = logging.getLogger(__name__)


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from ``config_path`` (or the default location).

    Args:
        config_path: TOML file to read. ``None`` uses the default
            ``config/adcloak.toml`` if it exists.

    Returns:
        Validated Settings instance.

    Raises:
        ApplicationError: If the file is given but missing, unparsable
            or fails validation.
    """
    explicit = config_path is not None
    path = Path(config_path) if explicit else Path(FileSystem.CONFIG_FILE)

    if not path.exists():
        if explicit:
            raise create_config_error(
                f"Configuration file not found: {path}",
                config_path=str(path),
            )
        logger.debug("No configuration file at %s, using defaults", path)
        return _build_settings(None, path)

    return _build_settings(path, path)


def _build_settings(file_path: Path | None, reported_path: Path) -> Settings:
    try:
        if file_path is None:
            return Settings()
        settings = Settings.from_toml_file(file_path)
        logger.debug("Loaded configuration from %s", file_path)
        return settings
    except (toml.TomlDecodeError, ValidationError, OSError) as e:
        raise create_config_error(
            f"Invalid configuration: {e}",
            config_path=str(reported_path),
            original_error=e,
        ) from e


def save_settings(settings: Settings, config_path: Path | str) -> None:
    """Persist settings to a TOML file.

    Raises:
        ApplicationError: If the file cannot be written.
    """
    path = Path(config_path)
    try:
        settings.to_toml_file(path)
    except OSError as e:
        logger.exception("Failed to save configuration")
        raise create_config_error(
            f"Failed to save configuration: {e}",
            config_path=str(path),
            original_error=e,
        ) from e
    logger.info("Configuration saved to %s", path)


__all__ = ["load_settings", "save_settings"]
