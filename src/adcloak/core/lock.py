"""Cross-process rebuild lock."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock, Timeout

from adcloak.shared.constants import Messages
from adcloak.shared.errors import ErrorCode, ErrorContext, RebuildLockError

logger = logging.getLogger(__name__)


@contextmanager
def rebuild_lock(lock_file: Path, timeout: float) -> Iterator[None]:
    """Hold the advisory rebuild lock for the duration of the block.

    Args:
        lock_file: Path of the lock file, created on demand.
        timeout: Seconds to wait before giving up.

    Raises:
        RebuildLockError: If another process keeps the lock past ``timeout``.
    """
    lock_file = Path(lock_file)
    lock_file.parent.mkdir(parents=True, exist_ok=True)
    lock = FileLock(str(lock_file), timeout=timeout)

    try:
        lock.acquire()
    except Timeout as e:
        raise RebuildLockError(
            code=ErrorCode.CONCURRENCY_ERROR,
            message=Messages.LOCK_BUSY,
            context=ErrorContext(
                file_path=str(lock_file),
                operation="acquire_rebuild_lock",
                additional_data={"timeout": timeout},
            ),
            original_error=e,
        ) from e

    logger.debug("Acquired rebuild lock %s", lock_file)
    try:
        yield
    finally:
        lock.release()
        logger.debug("Released rebuild lock %s", lock_file)
