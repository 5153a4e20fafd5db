"""
Data models for the asset relocation engine.

Transient values produced and consumed within one run are frozen
dataclasses; everything that is persisted or reported to a caller is a
pydantic model so it can be validated on load and dumped to JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, computed_field

from adcloak.shared.errors import AdCloakError
from adcloak.utils.paths import to_native


@dataclass(frozen=True)
class AssetRecord:
    """A scanned asset.

    Attributes:
        absolute_path: Location of the original file
        relative_path: Path relative to the plugin root, normalized
        mtime: Last modification time in whole seconds
    """

    absolute_path: Path
    relative_path: str
    mtime: int


class LookupEntry(BaseModel):
    """Where an original asset was relocated to, and at which mtime."""

    model_config = ConfigDict(frozen=True)

    relocated_path: str = Field(..., description="Path relative to the relocated folder")
    mtime: int = Field(..., description="mtime of the original when it was copied")


# original relative path -> entry
LookupTable = dict[str, LookupEntry]


class RelocationState(BaseModel):
    """Persisted state of the relocation engine.

    ``module_can_work`` is only true after a run finished without a
    fatal error; a half-built asset folder is never reported as usable.
    """

    upload_dir: str | None = Field(default=None, description="Upload directory the folder lives in")
    folder_name: str | None = Field(default=None, description="Randomized name of the relocated folder")
    module_can_work: bool = Field(default=False, description="Last run completed without errors")
    lookup_table: dict[str, LookupEntry] = Field(default_factory=dict)

    def relocated_base(self, upload_dir: Path | None) -> Path | None:
        """Absolute path of the relocated folder, if one was assigned."""
        if upload_dir is None or not self.folder_name:
            return None
        return upload_dir / self.folder_name

    def relocated_file(self, upload_dir: Path | None, original_path: str) -> Path | None:
        """Absolute path an original asset was relocated to."""
        base = self.relocated_base(upload_dir)
        entry = self.lookup_table.get(original_path)
        if base is None or entry is None:
            return None
        return to_native(base, entry.relocated_path)


class RunMode(str, Enum):
    """How a rebuild treats the existing folder and lookup table."""

    FIRST_RUN = "first_run"
    INCREMENTAL = "incremental"
    RENAME_ALL = "rename_all"


@dataclass(frozen=True)
class PlannedCopy:
    """One asset the Copy Executor has to place."""

    source_path: Path
    original_path: str
    relocated_path: str
    mtime: int


@dataclass(frozen=True)
class RelocationPlan:
    """Output of the planner.

    Attributes:
        entries: Copies to perform, in order
        segment_map: Original segment -> replacement used for this run
    """

    entries: tuple[PlannedCopy, ...] = ()
    segment_map: dict[str, str] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class CopyOutcome:
    """Result of executing a plan.

    On failure ``lookup_table`` still holds every entry committed before
    the failing file; ``error`` describes the failing path.
    """

    success: bool
    lookup_table: dict[str, LookupEntry]
    copied: int = 0
    error: AdCloakError | None = None


class ErrorReport(BaseModel):
    """A fatal error as reported to the admin caller."""

    code: str
    message: str

    @classmethod
    def from_error(cls, error: AdCloakError) -> ErrorReport:
        return cls(code=error.code.value, message=error.message)


class RebuildResult(BaseModel):
    """Outcome of ``rebuild()`` as shown to the admin."""

    success: bool
    message: str
    mode: RunMode | None = None
    folder_name: str | None = None
    copied: int = 0
    errors: list[ErrorReport] = Field(default_factory=list)


class AssetFolderStatus(BaseModel):
    """What the rebuild form shows about the relocated folder."""

    enabled: bool
    module_can_work: bool
    folder_name: str | None = None
    asset_path: str | None = None
    asset_url: str | None = None
    lookup_entries: int = 0
    stale_assets: int = 0
    message: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def needs_rebuild(self) -> bool:
        return not self.module_can_work or self.stale_assets > 0
