"""Unit tests for the CopyExecutor service.

Covers per-file commits, skipping of vanished sources and the partial
lookup table returned when a copy fails.
"""

from __future__ import annotations

import stat
from pathlib import Path

import pytest

from adcloak.core.executor import CopyExecutor
from adcloak.core.filesystem import LocalFilesystem
from adcloak.core.models import LookupEntry, PlannedCopy, RelocationPlan
from adcloak.shared.errors import CopyFailureError, DirectoryCreateError, DirectoryRemoveError, ErrorCode

# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "source"
    directory.mkdir()
    for name in ("a.css", "b.css", "c.css"):
        (directory / name).write_text(f"content of {name}")
    return directory


@pytest.fixture
def target_root(tmp_path: Path) -> Path:
    return tmp_path / "uploads" / "417"


@pytest.fixture
def plan(source_dir: Path) -> RelocationPlan:
    return RelocationPlan(
        entries=tuple(
            PlannedCopy(
                source_path=source_dir / name,
                original_path=f"ext/css/{name}",
                relocated_path=f"12/css/{index}.css",
                mtime=100 + index,
            )
            for index, name in enumerate(("a.css", "b.css", "c.css"), start=1)
        ),
    )


class FailingFilesystem(LocalFilesystem):
    """Local filesystem that refuses to copy one file."""

    def __init__(self, fail_on: str) -> None:
        super().__init__(None)
        self.fail_on = fail_on

    def copy(self, source: Path, destination: Path, mode: int | None = None) -> None:
        if source.name == self.fail_on:
            raise PermissionError(13, "Permission denied", str(destination))
        super().copy(source, destination, mode)


# ============================================================================
# Tests
# ============================================================================


class TestExecute:
    """Successful plan execution."""

    def test_copies_all_entries(self, plan: RelocationPlan, target_root: Path) -> None:
        # Given
        executor = CopyExecutor(LocalFilesystem(None))

        # When
        outcome = executor.execute(plan, target_root, {})

        # Then: every file is placed and committed
        assert outcome.success is True
        assert outcome.copied == 3
        assert (target_root / "12" / "css" / "2.css").read_text() == "content of b.css"
        assert outcome.lookup_table["ext/css/b.css"] == LookupEntry(relocated_path="12/css/2.css", mtime=102)

    def test_applies_file_mode(self, plan: RelocationPlan, target_root: Path) -> None:
        executor = CopyExecutor(LocalFilesystem(None), file_mode=0o640)

        executor.execute(plan, target_root)

        mode = stat.S_IMODE((target_root / "12" / "css" / "1.css").stat().st_mode)
        assert mode == 0o640

    def test_merges_into_base_table(self, plan: RelocationPlan, target_root: Path) -> None:
        # Given: an entry not touched by this plan
        base = {"ext/js/x.js": LookupEntry(relocated_path="12/js/9.js", mtime=5)}

        # When
        outcome = CopyExecutor(LocalFilesystem(None)).execute(plan, target_root, base)

        # Then: it is carried over and the input is not mutated
        assert outcome.lookup_table["ext/js/x.js"] == base["ext/js/x.js"]
        assert len(outcome.lookup_table) == 4
        assert len(base) == 1

    def test_skips_vanished_source(self, plan: RelocationPlan, source_dir: Path, target_root: Path) -> None:
        # Given: a source removed between scan and copy
        (source_dir / "b.css").unlink()

        # When
        outcome = CopyExecutor(LocalFilesystem(None)).execute(plan, target_root)

        # Then
        assert outcome.success is True
        assert outcome.copied == 2
        assert "ext/css/b.css" not in outcome.lookup_table

    def test_empty_plan(self, target_root: Path) -> None:
        outcome = CopyExecutor(LocalFilesystem(None)).execute(RelocationPlan(), target_root, {})

        assert outcome.success is True
        assert outcome.lookup_table == {}


class TestFailures:
    """Partial failures keep what was committed."""

    def test_copy_failure_stops_run(self, plan: RelocationPlan, target_root: Path) -> None:
        # Given: copying b.css fails
        executor = CopyExecutor(FailingFilesystem("b.css"))

        # When
        outcome = executor.execute(plan, target_root, {})

        # Then: a.css stays committed, c.css is never attempted
        assert outcome.success is False
        assert outcome.copied == 1
        assert set(outcome.lookup_table) == {"ext/css/a.css"}
        assert isinstance(outcome.error, CopyFailureError)
        assert outcome.error.code == ErrorCode.FILE_COPY_FAILED
        assert "b.css" in outcome.error.message
        assert not (target_root / "12" / "css" / "3.css").exists()

    def test_directory_failure(self, plan: RelocationPlan, target_root: Path, mocker) -> None:
        # Given: directories cannot be created
        filesystem = LocalFilesystem(None)
        mocker.patch.object(filesystem, "mkdir_p", side_effect=PermissionError("denied"))

        # When
        outcome = CopyExecutor(filesystem).execute(plan, target_root, {})

        # Then
        assert outcome.success is False
        assert isinstance(outcome.error, DirectoryCreateError)
        assert outcome.lookup_table == {}

    def test_copy_one_raises(self, plan: RelocationPlan, target_root: Path) -> None:
        executor = CopyExecutor(FailingFilesystem("a.css"))

        with pytest.raises(CopyFailureError):
            executor.copy_one(plan.entries[0], target_root)


class TestClearTree:
    def test_removes_tree(self, tmp_path: Path) -> None:
        tree = tmp_path / "417"
        (tree / "css").mkdir(parents=True)
        (tree / "css" / "1.css").write_text("x")

        CopyExecutor(LocalFilesystem(None)).clear_tree(tree)

        assert not tree.exists()

    def test_missing_tree_is_fine(self, tmp_path: Path) -> None:
        CopyExecutor(LocalFilesystem(None)).clear_tree(tmp_path / "missing")

    def test_failure_raises(self, tmp_path: Path, mocker) -> None:
        filesystem = LocalFilesystem(None)
        mocker.patch.object(filesystem, "rmdir_recursive", side_effect=OSError("busy"))

        with pytest.raises(DirectoryRemoveError) as exc_info:
            CopyExecutor(filesystem).clear_tree(tmp_path)

        assert exc_info.value.code == ErrorCode.DIRECTORY_REMOVE_FAILED
