"""adcloak Configuration Module

This module provides unified access to configuration models and settings
loading for adcloak.
"""

from __future__ import annotations

from .loader import load_settings, save_settings
from .models import (
    AppSettings,
    LoggingSettings,
    RelocationSettings,
    ScanSettings,
    Settings,
)

__all__ = [
    "AppSettings",
    "LoggingSettings",
    "RelocationSettings",
    "ScanSettings",
    "Settings",
    "load_settings",
    "save_settings",
]
