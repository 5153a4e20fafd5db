"""Asset scan configuration model."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from adcloak.config.validators import validate_extensions_list, validate_patterns_list
from adcloak.shared.constants import AssetFormats, ExclusionPatterns, Relocation


class ScanSettings(BaseModel):
    """Where to look for assets and which files count as assets."""

    plugin_root: Path = Field(
        default=Path("wp-content/plugins"),
        description="Directory that relative asset paths are computed against",
    )
    root_patterns: list[str] = Field(
        default_factory=lambda: list(Relocation.ROOT_PATTERNS),
        description="Glob patterns (relative to plugin_root) of directories to scan; '.' is plugin_root itself",
    )
    extensions: list[str] = Field(
        default_factory=lambda: list(AssetFormats.TRACKED_EXTENSIONS),
        description="Tracked asset extensions",
    )
    excluded_dir_patterns: list[str] = Field(
        default_factory=lambda: list(ExclusionPatterns.DIRECTORY_PATTERNS),
        description="Directory name patterns pruned from the scan",
    )

    @field_validator("extensions")
    @classmethod
    def validate_extensions(cls, v: list[str]) -> list[str]:
        """Validate that extensions start with a dot."""
        return validate_extensions_list(v)

    @field_validator("root_patterns", "excluded_dir_patterns")
    @classmethod
    def validate_patterns(cls, v: list[str]) -> list[str]:
        """Validate that patterns are non-empty strings."""
        return validate_patterns_list(v)


__all__ = ["ScanSettings"]
