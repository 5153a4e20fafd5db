"""
Logging Configuration Module

This module provides centralized logging configuration for adcloak.
It sets up console logging and optional rotating file logging from
LoggingSettings, so every module can simply use
``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import copy
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import ClassVar

from adcloak.config.models.app_settings import LoggingSettings

DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(funcName)s - %(message)s"


class AdCloakFormatter(logging.Formatter):
    """
    Formatter for adcloak logging.

    Colors the level name for console output; file output uses the
    detailed, uncolored variant.
    """

    COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def __init__(self, fmt: str | None = None, *, use_colors: bool = True, detailed: bool = False):
        """
        Initialize the formatter.

        Args:
            fmt: Format string used when not detailed
            use_colors: Whether to color the level name
            detailed: Whether to include file, line and function
        """
        self.use_colors = use_colors
        self.detailed = detailed
        format_str = DETAILED_FORMAT if detailed else (fmt or LoggingSettings().format_string)
        super().__init__(format_str, DEFAULT_DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_colors:
            return super().format(record)
        # Other handlers share the record, so color a copy.
        colored = copy.copy(record)
        color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
        colored.levelname = f"{color}{record.levelname}{self.COLORS['RESET']}"
        return super().format(colored)


def setup_logging(
    settings: LoggingSettings | None = None,
    *,
    level: str | None = None,
    use_colors: bool | None = None,
) -> logging.Logger:
    """
    Set up logging for adcloak.

    Args:
        settings: Logging settings; defaults are used when omitted
        level: Level name overriding ``settings.level``
        use_colors: Force colors on/off; defaults to whether stderr is a TTY

    Returns:
        Configured root logger
    """
    settings = settings or LoggingSettings()
    log_level = getattr(logging, (level or settings.level).upper(), logging.INFO)
    if use_colors is None:
        use_colors = sys.stderr.isatty()

    logger = logging.getLogger()
    logger.setLevel(log_level)

    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    if settings.console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(AdCloakFormatter(settings.format_string, use_colors=use_colors))
        logger.addHandler(console_handler)

    if settings.file_output:
        log_path = Path(settings.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=settings.max_bytes,
            backupCount=settings.backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(AdCloakFormatter(use_colors=False, detailed=True))
        logger.addHandler(file_handler)

    if not logger.handlers:
        # Keep records off the last-resort stderr handler when all output is disabled.
        logger.addHandler(logging.NullHandler())

    return logger

