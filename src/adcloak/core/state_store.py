"""
Persistence of the relocation state.

The state (upload directory, folder name, module_can_work flag and the
lookup table) is kept in a single JSON file. Writes go to a temporary
file in the same directory which then replaces the original, so a crash
mid-write never leaves a truncated state behind.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from adcloak.core.models import RelocationState
from adcloak.shared.constants import Encoding
from adcloak.shared.errors import (
    ErrorCode,
    ErrorContext,
    InfrastructureError,
    StateFileCorruptedError,
)

logger = logging.getLogger(__name__)


class StateStore:
    """
    Loads and saves RelocationState as JSON.

    A missing state file is not an error: it means the engine never ran
    and a fresh state is returned.
    """

    def __init__(self, path: Path) -> None:
        """
        Initialize the StateStore.

        Args:
            path: Location of the JSON state file.
        """
        self.path = Path(path)

    def load(self) -> RelocationState:
        """
        Load the persisted state.

        Returns:
            The persisted RelocationState, or a fresh one if none exists.

        Raises:
            StateFileCorruptedError: If the file exists but cannot be parsed.
        """
        if not self.path.exists():
            logger.debug("No state file at %s, starting fresh", self.path)
            return RelocationState()

        try:
            with self.path.open("r", encoding=Encoding.DEFAULT) as f:
                data = json.load(f)
            return RelocationState.model_validate(data)
        except FileNotFoundError:
            return RelocationState()
        except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
            raise StateFileCorruptedError(
                code=ErrorCode.STATE_CORRUPTED,
                message=f"State file corrupted: {self.path}",
                context=ErrorContext(file_path=str(self.path), operation="load_state"),
                original_error=e,
            ) from e

    def save(self, state: RelocationState) -> None:
        """
        Persist ``state`` atomically.

        Raises:
            InfrastructureError: If the state file cannot be written.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                dir=self.path.parent,
            )
            try:
                with os.fdopen(fd, "w", encoding=Encoding.DEFAULT) as f:
                    json.dump(state.model_dump(mode="json"), f, indent=2, ensure_ascii=False)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise InfrastructureError(
                code=ErrorCode.STATE_WRITE_FAILED,
                message=f"Failed to save relocation state to {self.path}",
                context=ErrorContext(file_path=str(self.path), operation="save_state"),
                original_error=e,
            ) from e

        logger.debug(
            "Saved state: folder=%s module_can_work=%s entries=%d",
            state.folder_name,
            state.module_can_work,
            len(state.lookup_table),
        )

    def clear(self) -> None:
        """Remove the state file, if any."""
        self.path.unlink(missing_ok=True)
