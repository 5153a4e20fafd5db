"""Core relocation engine: scanning, planning and copying of assets."""

from .engine import AssetRelocationEngine
from .models import AssetFolderStatus, LookupEntry, RebuildResult, RelocationState, RunMode
from .state_store import StateStore

__all__ = [
    "AssetFolderStatus",
    "AssetRelocationEngine",
    "LookupEntry",
    "RebuildResult",
    "RelocationState",
    "RunMode",
    "StateStore",
]
