"""Common validation functions for configuration fields.

This module provides reusable validation functions for Pydantic models
in the configuration system.
"""

from __future__ import annotations


def validate_extensions_list(extensions: list[str]) -> list[str]:
    """Validate a list of file extensions and lower-case them.

    Args:
        extensions: List of file extensions to validate

    Returns:
        The validated, lower-cased extensions list

    Raises:
        ValueError: If any extension doesn't start with a dot

    Example:
        >>> validate_extensions_list([".CSS", ".js"])
        ['.css', '.js']
    """
    if not extensions:
        return extensions

    invalid_exts = [ext for ext in extensions if not ext.startswith(".")]
    if invalid_exts:
        msg = f"Extensions {invalid_exts} must start with a dot"
        raise ValueError(msg)

    return [ext.lower() for ext in extensions]


def validate_patterns_list(patterns: list[str]) -> list[str]:
    """Validate a list of patterns are non-empty strings.

    Args:
        patterns: List of patterns to validate

    Returns:
        The validated patterns list

    Raises:
        ValueError: If any pattern is empty or not a string
    """
    if not patterns:
        return patterns

    empty_patterns = [i for i, p in enumerate(patterns) if not isinstance(p, str) or not p.strip()]
    if empty_patterns:
        msg = f"Patterns at indices {empty_patterns} must be non-empty strings"
        raise ValueError(msg)

    return patterns


def validate_segment_names(names: list[str]) -> list[str]:
    """Validate that do-not-rename entries are single path segments.

    Raises:
        ValueError: If an entry is empty or contains a path separator
    """
    invalid = [name for name in names if not name or "/" in name or "\\" in name]
    if invalid:
        msg = f"Entries {invalid} must be single path segments"
        raise ValueError(msg)
    return names


__all__ = [
    "validate_extensions_list",
    "validate_patterns_list",
    "validate_segment_names",
]
