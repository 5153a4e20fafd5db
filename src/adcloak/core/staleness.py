"""Staleness diff between a fresh scan and the lookup table.

An asset is stale when it has no lookup entry, when its mtime changed
since it was copied, or when its relocated copy vanished. Only stale
assets are copied by an incremental run, so running twice without
changes copies nothing the second time.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from adcloak.core.models import LookupEntry
from adcloak.core.scanner import to_asset_records
from adcloak.utils.paths import normalize_path, to_native

logger = logging.getLogger(__name__)


def is_stale(entry: LookupEntry | None, mtime: int, relocated_base: Path | None) -> bool:
    """Decide whether a single asset must be (re)copied."""
    if entry is None or relocated_base is None:
        return True
    if entry.mtime != mtime:
        return True
    return not to_native(relocated_base, entry.relocated_path).exists()


def find_stale_assets(
    scan_result: Mapping[str, int],
    lookup_table: Mapping[str, LookupEntry],
    relocated_base: Path | None,
    plugin_root: str | Path,
) -> dict[str, int]:
    """Return the subset of ``scan_result`` that is new or changed.

    Args:
        scan_result: Absolute path -> mtime, as returned by ``scan_assets``.
        lookup_table: Original relative path -> LookupEntry.
        relocated_base: Absolute path of the relocated folder, or None when
            no folder was assigned yet (then every asset is stale).
        plugin_root: Root the lookup table keys are relative to.

    Returns:
        Absolute path -> mtime of the stale assets.
    """
    stale: dict[str, int] = {}
    for record in to_asset_records(scan_result, plugin_root):
        entry = lookup_table.get(record.relative_path)
        if is_stale(entry, record.mtime, relocated_base):
            stale[normalize_path(record.absolute_path)] = record.mtime

    logger.debug("%d of %d scanned assets are stale", len(stale), len(scan_result))
    return stale
