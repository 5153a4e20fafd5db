"""Filesystem access used by the relocation engine.

LocalFilesystem wraps the handful of os/shutil calls the engine needs
behind one object so they can be swapped out in tests, and so that the
"connect" step (checking that the upload directory is usable) happens
before any state is touched.

All methods raise OSError subclasses on failure; translating them into
adcloak errors is up to the caller, which knows what the failing
operation means.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from adcloak.shared.constants import Messages
from adcloak.shared.errors import ErrorCode, ErrorContext, FilesystemConnectionError

logger = logging.getLogger(__name__)


class LocalFilesystem:
    """Direct access to the local filesystem rooted at an upload directory."""

    def __init__(self, base_dir: Path | None) -> None:
        """Initialize the filesystem.

        Args:
            base_dir: Upload directory the relocated folder lives in
        """
        self.base_dir = Path(base_dir) if base_dir is not None else None

    def connect(self) -> None:
        """Check that the base directory can be written to.

        Raises:
            FilesystemConnectionError: If it is missing, not a directory or
                not writable.
        """
        if self.base_dir is None:
            return

        reason = None
        if not self.base_dir.exists():
            reason = "does not exist"
        elif not self.base_dir.is_dir():
            reason = "is not a directory"
        elif not os.access(self.base_dir, os.W_OK | os.X_OK):
            reason = "is not writable"

        if reason is not None:
            raise FilesystemConnectionError(
                code=ErrorCode.FILESYSTEM_CONNECTION_FAILED,
                message=f"{Messages.CONNECTION_FAILED} ({self.base_dir} {reason})",
                context=ErrorContext(file_path=str(self.base_dir), operation="connect"),
            )
        logger.debug("Connected to %s", self.base_dir)

    def exists(self, path: Path) -> bool:
        return path.exists()

    def list_dir(self, path: Path) -> list[str]:
        """Names of the entries in ``path``; empty if it cannot be read."""
        try:
            return sorted(os.listdir(path))
        except OSError as e:
            logger.debug("Cannot list %s: %s", path, e)
            return []

    def mkdir_p(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)
        logger.debug("Ensured directory: %s", path)

    def copy(self, source: Path, destination: Path, mode: int | None = None) -> None:
        """Copy a file, overwriting the destination, and apply ``mode``."""
        shutil.copyfile(source, destination)
        if mode is not None:
            os.chmod(destination, mode)
        logger.debug("Copied: %s -> %s", source, destination)

    def move(self, source: Path, destination: Path) -> None:
        """Move a file or directory; refuses to overwrite an existing target."""
        if destination.exists():
            msg = f"Destination already exists: {destination}"
            raise FileExistsError(msg)
        shutil.move(str(source), str(destination))
        logger.debug("Moved: %s -> %s", source, destination)

    def rmdir_recursive(self, path: Path) -> None:
        """Remove a directory tree; a missing tree is not an error."""
        if not path.exists():
            return
        shutil.rmtree(path)
        logger.debug("Removed directory tree: %s", path)
