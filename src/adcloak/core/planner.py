"""Relocation planner.

Turns the stale assets of a run into concrete destination paths inside
the relocated folder. Every path segment (directories, then the file
name) is resolved in order:

1. segments on the do-not-rename allow-list keep their name,
2. otherwise a replacement already known for that segment is reused,
3. otherwise a fresh name is allocated and remembered.

Replacements are keyed by segment name, not by full path, so a directory
shared by several assets gets one random name per run. Unless a full
rename is forced, the map is seeded from the previous lookup table so
names stay stable across incremental runs.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Mapping
from pathlib import Path, PurePosixPath

from adcloak.core.models import LookupEntry, PlannedCopy, RelocationPlan
from adcloak.core.name_allocator import allocate_unique_name
from adcloak.core.scanner import to_asset_records
from adcloak.shared.constants import AssetFormats, Relocation
from adcloak.utils.paths import join_segments, split_segments

logger = logging.getLogger(__name__)


class RelocationPlanner:
    """Decides the relocated path of every stale asset.

    Attributes:
        do_not_rename: Segments that are never randomized
        renamed_extensions: Extensions of files whose name is randomized;
            other files (images) keep their file name
        rng: Random source handed to the name allocator
    """

    def __init__(
        self,
        do_not_rename: Iterable[str] | None = None,
        renamed_extensions: Iterable[str] | None = None,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self.do_not_rename = frozenset(do_not_rename if do_not_rename is not None else Relocation.DO_NOT_RENAME)
        self.renamed_extensions = frozenset(
            ext.lower() for ext in (renamed_extensions if renamed_extensions is not None else AssetFormats.RENAMED_EXTENSIONS)
        )
        self.rng = rng or random.Random()

    def seed_segment_map(self, lookup_table: Mapping[str, LookupEntry]) -> tuple[dict[str, str], set[str]]:
        """Rebuild the segment map from a previous lookup table.

        Returns:
            Tuple of (segment map, names in use). Segments that kept their
            original name are only recorded as used, so that changing the
            allow-list takes effect on the next run.
        """
        segment_map: dict[str, str] = {}
        used: set[str] = set()
        for original_path, entry in lookup_table.items():
            original_parts = split_segments(original_path)
            relocated_parts = split_segments(entry.relocated_path)
            if len(original_parts) != len(relocated_parts):
                logger.debug("Ignoring malformed lookup entry %s -> %s", original_path, entry.relocated_path)
                continue
            for original, relocated in zip(original_parts, relocated_parts):
                used.add(relocated)
                if original != relocated:
                    segment_map[original] = relocated
        return segment_map, used

    def plan(
        self,
        stale_assets: Mapping[str, int],
        plugin_root: str | Path,
        prior_lookup_table: Mapping[str, LookupEntry] | None = None,
        *,
        force_rename_all: bool = False,
    ) -> RelocationPlan:
        """Build the copy plan for ``stale_assets``.

        Args:
            stale_assets: Absolute path -> mtime of assets to relocate.
            plugin_root: Root the relative (lookup table) paths start at.
            prior_lookup_table: Lookup table of the previous run.
            force_rename_all: Ignore every previous replacement.

        Returns:
            RelocationPlan with one PlannedCopy per asset, sorted by
            original path, and the segment map used.
        """
        if force_rename_all or not prior_lookup_table:
            segment_map: dict[str, str] = {}
            used: set[str] = set()
        else:
            segment_map, used = self.seed_segment_map(prior_lookup_table)

        entries: list[PlannedCopy] = []
        for record in to_asset_records(stale_assets, plugin_root):
            *directories, filename = split_segments(record.relative_path)
            relocated = [self._resolve_segment(directory, segment_map, used) for directory in directories]
            relocated.append(self._resolve_filename(filename, segment_map, used))

            entries.append(
                PlannedCopy(
                    source_path=record.absolute_path,
                    original_path=record.relative_path,
                    relocated_path=join_segments(relocated),
                    mtime=record.mtime,
                ),
            )

        logger.debug("Planned %d copies using %d segment replacements", len(entries), len(segment_map))
        return RelocationPlan(entries=tuple(entries), segment_map=dict(segment_map))

    def _resolve_filename(self, filename: str, segment_map: dict[str, str], used: set[str]) -> str:
        extension = PurePosixPath(filename).suffix.lower()
        if extension not in self.renamed_extensions:
            return filename
        return self._resolve_segment(filename, segment_map, used, extension)

    def _resolve_segment(
        self,
        segment: str,
        segment_map: dict[str, str],
        used: set[str],
        extension: str = "",
    ) -> str:
        if segment in self.do_not_rename:
            return segment
        if segment in segment_map:
            return segment_map[segment]

        replacement = allocate_unique_name(used, extension, rng=self.rng)
        segment_map[segment] = replacement
        used.add(replacement)
        return replacement
