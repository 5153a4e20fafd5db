"""Configuration domain models."""

from __future__ import annotations

from .app_settings import AppSettings, LoggingSettings
from .relocation_settings import RelocationSettings
from .scan_settings import ScanSettings
from .settings import Settings

__all__ = [
    "AppSettings",
    "LoggingSettings",
    "RelocationSettings",
    "ScanSettings",
    "Settings",
]
