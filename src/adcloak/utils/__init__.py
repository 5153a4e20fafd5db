"""
adcloak Utilities Module

Logging configuration and path normalization helpers.
"""

from .logging_config import AdCloakFormatter, setup_logging
from .paths import join_segments, normalize_path, relative_to_root, split_segments, to_native

__all__ = [
    "AdCloakFormatter",
    "join_segments",
    "normalize_path",
    "relative_to_root",
    "setup_logging",
    "split_segments",
    "to_native",
]
