"""Copy execution service.

This module provides the CopyExecutor class, the only component that
writes to the relocated asset tree. It places planned copies one by one
and commits the matching lookup entry right after each successful copy.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from adcloak.core.filesystem import LocalFilesystem
from adcloak.core.models import CopyOutcome, LookupEntry, PlannedCopy, RelocationPlan
from adcloak.shared.constants import Relocation
from adcloak.shared.errors import (
    AdCloakError,
    DirectoryRemoveError,
    ErrorCode,
    ErrorContext,
    create_copy_failure_error,
    create_directory_create_error,
)
from adcloak.utils.paths import to_native

logger = logging.getLogger(__name__)


class CopyExecutor:
    """Copies planned assets into the relocated folder.

    Responsibilities:
    - Create destination directories on demand
    - Copy files and apply a safe permission mode
    - Commit lookup entries per file, never per batch
    - Stop at the first failure and report the failing path

    Attributes:
        filesystem: Filesystem the copies are performed on
        file_mode: Permission mode applied to copied files
    """

    def __init__(self, filesystem: LocalFilesystem, file_mode: int = Relocation.FILE_MODE) -> None:
        self.filesystem = filesystem
        self.file_mode = file_mode

    def execute(
        self,
        plan: RelocationPlan,
        target_root: Path,
        base_lookup_table: Mapping[str, LookupEntry] | None = None,
    ) -> CopyOutcome:
        """Execute a relocation plan.

        Entries of ``base_lookup_table`` that are not part of the plan are
        carried over unchanged. Planned entries replace their previous
        value once copied. On failure, entries committed so far are kept
        and nothing is rolled back.

        Args:
            plan: Planned copies
            target_root: Absolute path of the relocated folder
            base_lookup_table: Lookup table to merge into

        Returns:
            CopyOutcome with the merged (or partial) lookup table

        Example:
            >>> outcome = executor.execute(plan, upload_dir / "417", state.lookup_table)
            >>> if not outcome.success:
            ...     print(outcome.error.message)
        """
        lookup_table: dict[str, LookupEntry] = dict(base_lookup_table or {})
        created_dirs: set[Path] = set()
        copied = 0

        for planned in plan.entries:
            if not self.filesystem.exists(planned.source_path):
                logger.warning("Source asset vanished, skipping: %s", planned.source_path)
                continue

            try:
                self.copy_one(planned, target_root, created_dirs=created_dirs)
            except AdCloakError as e:
                self._handle_copy_error(planned, e)
                return CopyOutcome(success=False, lookup_table=lookup_table, copied=copied, error=e)

            lookup_table[planned.original_path] = LookupEntry(
                relocated_path=planned.relocated_path,
                mtime=planned.mtime,
            )
            copied += 1

        logger.info("Copied %d of %d planned assets to %s", copied, len(plan), target_root)
        return CopyOutcome(success=True, lookup_table=lookup_table, copied=copied)

    def copy_one(
        self,
        planned: PlannedCopy,
        target_root: Path,
        *,
        created_dirs: set[Path] | None = None,
    ) -> Path:
        """Copy a single planned asset.

        Args:
            planned: Asset to copy
            target_root: Absolute path of the relocated folder
            created_dirs: Cache of directories already ensured in this run

        Returns:
            Absolute destination path

        Raises:
            DirectoryCreateError: If the destination directory cannot be created
            CopyFailureError: If the file cannot be copied
        """
        destination = to_native(target_root, planned.relocated_path)
        destination_dir = destination.parent

        if created_dirs is None or destination_dir not in created_dirs:
            self._ensure_destination_directory(destination_dir)
            if created_dirs is not None:
                created_dirs.add(destination_dir)

        try:
            self.filesystem.copy(planned.source_path, destination, self.file_mode)
        except OSError as e:
            raise create_copy_failure_error(str(planned.source_path), str(destination), e) from e

        return destination

    def clear_tree(self, path: Path) -> None:
        """Remove a previously relocated tree.

        Raises:
            DirectoryRemoveError: If the tree cannot be removed
        """
        try:
            self.filesystem.rmdir_recursive(path)
        except OSError as e:
            raise DirectoryRemoveError(
                code=ErrorCode.DIRECTORY_REMOVE_FAILED,
                message=f'We do not have direct write access to the "{path}" directory',
                context=ErrorContext(file_path=str(path), operation="clear_tree"),
                original_error=e,
            ) from e
        logger.info("Cleared relocated tree %s", path)

    def _ensure_destination_directory(self, directory: Path) -> None:
        if self.filesystem.exists(directory):
            return
        try:
            self.filesystem.mkdir_p(directory)
        except OSError as e:
            raise create_directory_create_error(str(directory), e) from e

    def _handle_copy_error(self, planned: PlannedCopy, error: AdCloakError) -> None:
        """Log a failed copy with the operation it failed in."""
        if error.code == ErrorCode.DIRECTORY_CREATION_FAILED:
            logger.error(
                "Cannot create directory for '%s' -> '%s': %s",
                planned.original_path,
                planned.relocated_path,
                error.original_error,
            )
        else:
            logger.error(
                "Cannot copy '%s' -> '%s': %s",
                planned.source_path,
                planned.relocated_path,
                error.original_error,
            )
