"""
Asset relocation engine.

Orchestrates scanner, staleness diff, planner and copy executor into the
operations exposed to the admin surface: rebuild (first run, incremental
or rename-all), the automatic background update, the status shown on the
rebuild form and the uninstall cleanup.

Errors are raised internally as AdCloakError subclasses and converted
into a RebuildResult at the public boundary of ``rebuild``.
"""

from __future__ import annotations

import logging
import random
from pathlib import Path

from adcloak.config.models import Settings
from adcloak.core.executor import CopyExecutor
from adcloak.core.filesystem import LocalFilesystem
from adcloak.core.lock import rebuild_lock
from adcloak.core.models import (
    AssetFolderStatus,
    ErrorReport,
    LookupEntry,
    RebuildResult,
    RelocationState,
    RunMode,
)
from adcloak.core.name_allocator import allocate_unique_name
from adcloak.core.planner import RelocationPlanner
from adcloak.core.scanner import resolve_scan_roots, scan_assets
from adcloak.core.staleness import find_stale_assets
from adcloak.core.state_store import StateStore
from adcloak.shared.constants import Messages
from adcloak.shared.errors import (
    AdCloakError,
    ErrorCode,
    ErrorContext,
    FilesystemConnectionError,
    NoWritableDirectoryError,
    RenameFailureError,
    create_directory_create_error,
)

logger = logging.getLogger(__name__)


class AssetRelocationEngine:
    """Keeps the relocated asset folder in sync with the original assets.

    The engine is constructed explicitly; collaborators default to the
    local filesystem and the JSON state store named in ``settings``.

    Example:
        >>> engine = AssetRelocationEngine(load_settings())
        >>> result = engine.rebuild()
        >>> result.message
        'The asset folder was rebuilt successfully'
    """

    def __init__(
        self,
        settings: Settings,
        store: StateStore | None = None,
        filesystem: LocalFilesystem | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings
        self.store = store or StateStore(settings.relocation.state_file)
        self.filesystem = filesystem or LocalFilesystem(settings.relocation.upload_dir)
        self.rng = rng or random.Random()
        self.planner = RelocationPlanner(
            settings.relocation.do_not_rename,
            settings.relocation.renamed_extensions,
            rng=self.rng,
        )
        self.executor = CopyExecutor(self.filesystem, settings.relocation.file_mode)

    @property
    def upload_dir(self) -> Path | None:
        return self.settings.relocation.upload_dir

    @property
    def plugin_root(self) -> Path:
        return self.settings.scan.plugin_root

    def scan(self) -> dict[str, int]:
        """Scan every configured root for tracked assets."""
        scan_settings = self.settings.scan
        roots = resolve_scan_roots(scan_settings.plugin_root, scan_settings.root_patterns)
        return scan_assets(roots, scan_settings.extensions, scan_settings.excluded_dir_patterns)

    def stale_assets(self) -> dict[str, int]:
        """Assets that are new, changed or missing from the relocated folder."""
        state = self.store.load()
        return find_stale_assets(
            self.scan(),
            state.lookup_table,
            state.relocated_base(self.upload_dir),
            self.plugin_root,
        )

    def rebuild(self, force_rename_all: bool = False) -> RebuildResult:
        """Rebuild the relocated asset folder.

        Args:
            force_rename_all: Move the folder to a new random name and
                re-randomize every path, discarding the lookup table.

        Returns:
            RebuildResult; failures are reported, never raised.
        """
        try:
            upload_dir = self._require_upload_dir()
            self.filesystem.connect()
            with rebuild_lock(self.settings.relocation.lock_file, self.settings.relocation.lock_timeout):
                return self._rebuild_locked(upload_dir, force_rename_all)
        except AdCloakError as e:
            logger.error("Asset folder rebuild failed: %s", e)
            return RebuildResult(success=False, message=e.message, errors=[ErrorReport.from_error(e)])

    def auto_update(self) -> RebuildResult | None:
        """Run an incremental rebuild if the working folder went stale.

        Returns:
            The rebuild result, or None when nothing had to be done.
        """
        if not self.settings.relocation.enabled or self.upload_dir is None:
            return None

        state = self.store.load()
        if not state.module_can_work:
            logger.debug("Skipping automatic update: last rebuild did not succeed")
            return None

        stale = find_stale_assets(self.scan(), state.lookup_table, state.relocated_base(self.upload_dir), self.plugin_root)
        if not stale:
            return None

        try:
            self.filesystem.connect()
        except FilesystemConnectionError as e:
            # The folder can no longer be kept in sync; stop serving it until a manual rebuild.
            logger.error("Automatic asset update disabled: %s", e)
            self.store.save(state.model_copy(update={"module_can_work": False}))
            return RebuildResult(success=False, message=e.message, errors=[ErrorReport.from_error(e)])

        logger.info("Updating %d stale assets automatically", len(stale))
        result = self.rebuild()
        for error in result.errors:
            logger.error("Automatic asset update: %s", error.message)
        return result

    def status(self) -> AssetFolderStatus:
        """Describe the relocated folder as shown on the rebuild form."""
        state = self.store.load()
        upload_dir = self.upload_dir
        base = state.relocated_base(upload_dir)
        stale = find_stale_assets(self.scan(), state.lookup_table, base, self.plugin_root)

        asset_url = None
        if self.settings.relocation.upload_url and state.folder_name:
            asset_url = f"{self.settings.relocation.upload_url.rstrip('/')}/{state.folder_name}"

        status = AssetFolderStatus(
            enabled=self.settings.relocation.enabled,
            module_can_work=state.module_can_work,
            folder_name=state.folder_name,
            asset_path=str(base) if base is not None else None,
            asset_url=asset_url,
            lookup_entries=len(state.lookup_table),
            stale_assets=len(stale),
        )
        if upload_dir is None:
            status.message = Messages.NO_WRITABLE_DIRECTORY
        elif status.needs_rebuild:
            status.message = Messages.REBUILD_REQUIRED.format(folder=base or upload_dir)
        else:
            status.message = Messages.UP_TO_DATE
        return status

    def clear_assets(self) -> bool:
        """Remove the relocated folder on uninstall.

        Returns:
            True if a folder was removed.

        Raises:
            DirectoryRemoveError: If the folder cannot be removed.
        """
        state = self.store.load()
        base = state.relocated_base(self.upload_dir)
        if base is None or not state.module_can_work:
            return False

        self.filesystem.connect()
        with rebuild_lock(self.settings.relocation.lock_file, self.settings.relocation.lock_timeout):
            self.executor.clear_tree(base)
            self.store.clear()
        logger.info("Removed relocated asset folder %s", base)
        return True

    def _rebuild_locked(self, upload_dir: Path, force_rename_all: bool) -> RebuildResult:
        state = self.store.load()
        if state.folder_name and state.upload_dir not in (None, str(upload_dir)):
            logger.info("Upload directory changed from %s, starting a new asset folder", state.upload_dir)
            state = RelocationState()

        prior_table: dict[str, LookupEntry] = dict(state.lookup_table)
        if not state.folder_name:
            mode = RunMode.FIRST_RUN
            folder_name = allocate_unique_name(self.filesystem.list_dir(upload_dir), rng=self.rng)
            prior_table = {}
        elif force_rename_all:
            mode = RunMode.RENAME_ALL
            folder_name = self._rename_folder(upload_dir, state.folder_name)
            prior_table = {}
        else:
            mode = RunMode.INCREMENTAL
            folder_name = state.folder_name

        target_root = upload_dir / folder_name
        scan_result = self.scan()
        if mode is RunMode.INCREMENTAL:
            stale = find_stale_assets(scan_result, prior_table, target_root, self.plugin_root)
        else:
            stale = scan_result
        logger.info("Rebuilding asset folder %s (%s): %d of %d assets to copy", target_root, mode.value, len(stale), len(scan_result))

        # Not usable until the copy below completes.
        pending = RelocationState(
            upload_dir=str(upload_dir),
            folder_name=folder_name,
            module_can_work=False,
            lookup_table=prior_table,
        )
        self.store.save(pending)

        self._ensure_target_root(target_root)
        plan = self.planner.plan(stale, self.plugin_root, prior_table, force_rename_all=mode is RunMode.RENAME_ALL)
        outcome = self.executor.execute(plan, target_root, prior_table)

        if not outcome.success:
            self.store.save(pending.model_copy(update={"lookup_table": outcome.lookup_table}))
            reports = [ErrorReport.from_error(outcome.error)] if outcome.error is not None else []
            return RebuildResult(
                success=False,
                message=Messages.COPY_FAILED.format(folder=folder_name),
                mode=mode,
                folder_name=folder_name,
                copied=outcome.copied,
                errors=reports,
            )

        self.store.save(
            pending.model_copy(update={"lookup_table": outcome.lookup_table, "module_can_work": True}),
        )
        logger.info("Asset folder %s rebuilt, %d assets copied", target_root, outcome.copied)
        return RebuildResult(
            success=True,
            message=Messages.REBUILD_SUCCESS,
            mode=mode,
            folder_name=folder_name,
            copied=outcome.copied,
        )

    def _rename_folder(self, upload_dir: Path, old_name: str) -> str:
        """Move the relocated folder to a fresh name and empty it."""
        taken = set(self.filesystem.list_dir(upload_dir))
        taken.add(old_name)
        new_name = allocate_unique_name(taken, rng=self.rng)

        old_path = upload_dir / old_name
        new_path = upload_dir / new_name
        if self.filesystem.exists(old_path):
            try:
                self.filesystem.move(old_path, new_path)
            except OSError as e:
                raise RenameFailureError(
                    code=ErrorCode.FOLDER_RENAME_FAILED,
                    message=Messages.RENAME_FAILED.format(folder=old_path),
                    context=ErrorContext(
                        file_path=str(old_path),
                        operation="rename_folder",
                        additional_data={"new_name": new_name},
                    ),
                    original_error=e,
                ) from e
            # The old folder name is gone once moved.
            self.store.save(RelocationState(upload_dir=str(upload_dir), folder_name=new_name, module_can_work=False))
            self.executor.clear_tree(new_path)
            logger.info("Renamed asset folder %s -> %s", old_name, new_name)
        else:
            logger.info("Asset folder %s is gone, using new name %s", old_path, new_name)
        return new_name

    def _ensure_target_root(self, target_root: Path) -> None:
        try:
            self.filesystem.mkdir_p(target_root)
        except OSError as e:
            raise create_directory_create_error(str(target_root), e) from e

    def _require_upload_dir(self) -> Path:
        upload_dir = self.upload_dir
        if upload_dir is None:
            raise NoWritableDirectoryError(
                code=ErrorCode.NO_WRITABLE_DIRECTORY,
                message=Messages.NO_WRITABLE_DIRECTORY,
                context=ErrorContext(operation="rebuild"),
            )
        return upload_dir
