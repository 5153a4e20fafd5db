"""Relocation (ad blocker disguise) configuration model."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from adcloak.config.validators import validate_extensions_list, validate_segment_names
from adcloak.shared.constants import AssetFormats, FileSystem, Relocation


class RelocationSettings(BaseModel):
    """Settings of the relocated asset folder.

    ``enabled`` mirrors the "Ad blocker disguise" checkbox of the admin
    settings page; automatic updates only run while it is set.
    """

    enabled: bool = Field(default=False, description="Use the ad blocker disguise")
    upload_dir: Path | None = Field(
        default=None,
        description="Writable base directory the relocated folder is created in",
    )
    upload_url: str | None = Field(
        default=None,
        description="Public URL of upload_dir, used to report the asset URL",
    )
    state_file: Path = Field(
        default=Path(FileSystem.HOME_DIR) / FileSystem.STATE_FILE,
        description="JSON file holding folder name and lookup table",
    )
    lock_timeout: float = Field(
        default=Relocation.LOCK_TIMEOUT,
        ge=0,
        description="Seconds to wait for the rebuild lock",
    )
    do_not_rename: list[str] = Field(
        default_factory=lambda: list(Relocation.DO_NOT_RENAME),
        description="Path segments that keep their original name",
    )
    renamed_extensions: list[str] = Field(
        default_factory=lambda: list(AssetFormats.RENAMED_EXTENSIONS),
        description="File extensions whose file names are randomized",
    )
    file_mode: int = Field(
        default=Relocation.FILE_MODE,
        ge=0,
        le=0o777,
        description="Permission mode applied to copied files",
    )

    @field_validator("do_not_rename")
    @classmethod
    def validate_do_not_rename(cls, v: list[str]) -> list[str]:
        """Validate that allow-list entries are single segments."""
        return validate_segment_names(v)

    @field_validator("renamed_extensions")
    @classmethod
    def validate_renamed_extensions(cls, v: list[str]) -> list[str]:
        """Validate that extensions start with a dot."""
        return validate_extensions_list(v)

    @property
    def lock_file(self) -> Path:
        """Lock file guarding rebuilds, next to the state file."""
        return self.state_file.with_name(self.state_file.name + FileSystem.LOCK_SUFFIX)


__all__ = ["RelocationSettings"]
