"""Asset scanner for adcloak.

This module walks the extension directories with os.scandir() and
collects every tracked static asset together with its modification
time. Excluded directories (vendor, lib, admin, node_modules by default)
are pruned and never descended into.

The scan is best effort: a directory or file that cannot be read is
logged and skipped, it never aborts the walk.
"""

from __future__ import annotations

import fnmatch
import logging
import os
from collections.abc import Iterable, Iterator, Mapping, Sequence
from pathlib import Path

from adcloak.core.models import AssetRecord
from adcloak.shared.constants import AssetFormats, ExclusionPatterns
from adcloak.utils.paths import normalize_path, relative_to_root

logger = logging.getLogger(__name__)


def resolve_scan_roots(plugin_root: str | Path, patterns: Sequence[str]) -> list[Path]:
    """Expand root glob patterns into the directories to scan.

    Args:
        plugin_root: Directory the patterns are relative to.
        patterns: Glob patterns such as ``advanced-ads*``; ``.`` stands
            for ``plugin_root`` itself.

    Returns:
        Sorted, de-duplicated list of existing directories.
    """
    plugin_root = Path(plugin_root)
    if not plugin_root.is_dir():
        logger.warning("Plugin root is not a directory: %s", plugin_root)
        return []

    roots: set[Path] = set()
    for pattern in patterns:
        if pattern in (".", ""):
            roots.add(plugin_root)
            continue
        roots.update(path for path in plugin_root.glob(pattern) if path.is_dir())

    return sorted(roots)


def is_excluded_dir(name: str, excluded_dir_patterns: Sequence[str]) -> bool:
    """Check whether a directory name matches an excluded pattern."""
    return any(fnmatch.fnmatchcase(name, pattern) for pattern in excluded_dir_patterns)


def _is_tracked_file(filename: str, extensions: tuple[str, ...]) -> bool:
    return filename.lower().endswith(extensions)


def iter_asset_entries(
    root_path: str | Path,
    extensions: Sequence[str] | None = None,
    excluded_dir_patterns: Sequence[str] | None = None,
) -> Iterator[os.DirEntry[str]]:
    """Recursively yield directory entries of tracked assets under ``root_path``.

    Args:
        root_path: Directory to scan.
        extensions: Tracked extensions including the dot. Defaults to
            AssetFormats.TRACKED_EXTENSIONS.
        excluded_dir_patterns: fnmatch patterns of directory names to prune.

    Yields:
        os.DirEntry: Entries of tracked files.
    """
    root_path = Path(root_path)
    tracked = tuple(ext.lower() for ext in (extensions if extensions is not None else AssetFormats.TRACKED_EXTENSIONS))
    excluded = list(
        excluded_dir_patterns if excluded_dir_patterns is not None else ExclusionPatterns.DIRECTORY_PATTERNS,
    )

    if not root_path.is_dir():
        logger.warning("Scan root is not a directory: %s", root_path)
        return

    yield from _walk(root_path, tracked, excluded)


def _walk(directory: Path | str, tracked: tuple[str, ...], excluded: list[str]) -> Iterator[os.DirEntry[str]]:
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                try:
                    if entry.is_dir(follow_symlinks=False):
                        if is_excluded_dir(entry.name, excluded):
                            logger.debug("Skipping excluded directory: %s", entry.path)
                            continue
                        yield from _walk(entry.path, tracked, excluded)
                    elif entry.is_file() and _is_tracked_file(entry.name, tracked):
                        yield entry
                except OSError as e:
                    logger.warning("Cannot inspect %s, skipping: %s", entry.path, e)
    except PermissionError:
        logger.warning("Permission denied to access: %s", directory)
    except OSError as e:
        logger.warning("Error scanning directory %s: %s", directory, e)


def scan_assets(
    roots: Iterable[str | Path],
    extensions: Sequence[str] | None = None,
    excluded_dir_patterns: Sequence[str] | None = None,
) -> dict[str, int]:
    """Scan every root and map each asset to its modification time.

    Args:
        roots: Directories to scan recursively.
        extensions: Tracked extensions (see :func:`iter_asset_entries`).
        excluded_dir_patterns: Directory name patterns to prune.

    Returns:
        Mapping of normalized absolute path -> mtime in whole seconds.
        Callers must treat it as unordered.

    Example:
        >>> assets = scan_assets(["/srv/wp-content/plugins/advanced-ads"])
        >>> assets["/srv/wp-content/plugins/advanced-ads/public/assets/js/advanced.js"]
        1700000000
    """
    assets: dict[str, int] = {}
    for root in roots:
        for entry in iter_asset_entries(root, extensions, excluded_dir_patterns):
            try:
                mtime = int(entry.stat().st_mtime)
            except OSError as e:
                logger.warning("Cannot stat %s, skipping: %s", entry.path, e)
                continue
            assets[normalize_path(os.path.abspath(entry.path))] = mtime

    logger.debug("Scan found %d assets", len(assets))
    return assets


def to_asset_records(scan_result: Mapping[str, int], plugin_root: str | Path) -> list[AssetRecord]:
    """Attach plugin-root relative paths to scanned assets.

    Assets outside ``plugin_root`` cannot be given a relative path and are
    skipped with a warning.

    Returns:
        Records sorted by relative path.
    """
    root = normalize_path(os.path.abspath(plugin_root))
    records: list[AssetRecord] = []
    for absolute_path, mtime in scan_result.items():
        try:
            relative_path = relative_to_root(absolute_path, root)
        except ValueError:
            logger.warning("Asset %s is outside the plugin root %s, skipping", absolute_path, root)
            continue
        records.append(AssetRecord(absolute_path=Path(absolute_path), relative_path=relative_path, mtime=mtime))

    records.sort(key=lambda record: record.relative_path)
    return records
