"""Application and logging configuration models.

This module contains configuration models for application-level
settings and logging configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from adcloak.shared.constants import Application, Logging


class AppSettings(BaseModel):
    """Application configuration."""

    name: str = Field(default=Application.NAME, description="Application name")
    version: str = Field(default=Application.VERSION, description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")


class LoggingSettings(BaseModel):
    """Logging configuration.

    This class manages logging behavior including level, format,
    file output, and console output settings.
    """

    level: str = Field(default="INFO", description="Logging level")
    format_string: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string",
        alias="format",
    )
    file: str = Field(default=Logging.DEFAULT_FILE_PATH, description="Log file path")
    max_bytes: int = Field(
        default=Logging.MAX_BYTES,
        ge=0,
        description="Maximum log file size in bytes",
    )
    backup_count: int = Field(
        default=Logging.BACKUP_COUNT,
        ge=0,
        description="Number of backup log files to keep",
    )
    console_output: bool = Field(default=True, description="Enable console logging")
    file_output: bool = Field(default=False, description="Enable rotating file logging")

    model_config = {"populate_by_name": True}


__all__ = [
    "AppSettings",
    "LoggingSettings",
]
