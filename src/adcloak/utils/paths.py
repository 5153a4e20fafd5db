"""Path normalization helpers.

Every path that is stored in the lookup table or compared against it
goes through :func:`normalize_path` first, so the stored form does not
depend on the host's separator.
"""

from __future__ import annotations

import os
import re
from pathlib import Path, PurePosixPath

from adcloak.shared.constants import FileSystem

_MULTIPLE_SLASHES = re.compile(r"/{2,}")


def normalize_path(path: str | os.PathLike[str]) -> str:
    """Return ``path`` with forward slashes and no duplicate separators.

    Example:
        >>> normalize_path("C:\\\\plugins\\\\advanced-ads\\\\js")
        'C:/plugins/advanced-ads/js'
    """
    text = os.fspath(path).replace("\\", FileSystem.SEPARATOR)
    # Keep the leading double slash of UNC paths.
    prefix = "//" if text.startswith("//") else ""
    return prefix + _MULTIPLE_SLASHES.sub(FileSystem.SEPARATOR, text[len(prefix) :])


def relative_to_root(path: str | os.PathLike[str], root: str | os.PathLike[str]) -> str:
    """Return ``path`` relative to ``root`` in normalized form.

    Raises:
        ValueError: If ``path`` is not inside ``root``
    """
    normalized = PurePosixPath(normalize_path(path))
    base = PurePosixPath(normalize_path(root))
    return str(normalized.relative_to(base))


def split_segments(relative_path: str) -> list[str]:
    """Split a normalized relative path into its non-empty segments."""
    return [part for part in normalize_path(relative_path).split(FileSystem.SEPARATOR) if part]


def join_segments(segments: list[str]) -> str:
    """Join path segments with the canonical separator."""
    return FileSystem.SEPARATOR.join(segments)


def to_native(base: Path, relative_path: str) -> Path:
    """Resolve a normalized relative path under ``base``."""
    return base.joinpath(*split_segments(relative_path))
