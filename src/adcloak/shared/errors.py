"""adcloak Error Handling Module

This module defines the error handling system for adcloak, providing
structured error classes with context information and user-friendly messages.

The error hierarchy follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- User-friendly Messages: Errors can be converted to user-friendly messages
- Proper Exception Chaining: Original exceptions are preserved
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Union

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]


class ErrorCode(str, Enum):
    """Error codes for adcloak.

    This enum serves as the single source of truth for all error codes
    used throughout the application.
    """

    # File System Errors
    FILESYSTEM_CONNECTION_FAILED = "FILESYSTEM_CONNECTION_FAILED"
    NO_WRITABLE_DIRECTORY = "NO_WRITABLE_DIRECTORY"
    FOLDER_RENAME_FAILED = "FOLDER_RENAME_FAILED"
    DIRECTORY_CREATION_FAILED = "DIRECTORY_CREATION_FAILED"
    DIRECTORY_REMOVE_FAILED = "DIRECTORY_REMOVE_FAILED"
    FILE_COPY_FAILED = "FILE_COPY_FAILED"

    # State Errors
    STATE_CORRUPTED = "STATE_CORRUPTED"
    STATE_WRITE_FAILED = "STATE_WRITE_FAILED"

    # Configuration Errors
    CONFIG_ERROR = "CONFIG_ERROR"

    # Concurrency Errors
    CONCURRENCY_ERROR = "CONCURRENCY_ERROR"

    # CLI Errors
    CLI_COMMAND_FAILED = "CLI_COMMAND_FAILED"
    CLI_UNEXPECTED_ERROR = "CLI_UNEXPECTED_ERROR"


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Args:
        value: Input dictionary or None

    Returns:
        Dictionary with primitive values only, or None

    Raises:
        TypeError: If value is not a dict or contains unconvertible types
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        error_msg = f"additional_data must be dict, got {type(value).__name__}"
        raise TypeError(error_msg)

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        elif isinstance(val, Path):
            coerced[key] = str(val)
        elif isinstance(val, Enum):
            coerced[key] = val.value
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, Path, Enum are allowed."
            )
            raise TypeError(error_msg)

    return coerced


@dataclass(frozen=True)
class ErrorContext:
    """Context information for errors.

    Only primitive types (str, int, float, bool) are allowed in
    additional_data to ensure safe serialization.

    Attributes:
        file_path: Optional file path associated with the error
        operation: Optional operation name that caused the error
        additional_data: Optional dict with primitive values only
    """

    file_path: str | None = None
    operation: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        """Post-initialization validation and coercion."""
        if self.additional_data is not None:
            coerced = _coerce_primitives(self.additional_data)
            object.__setattr__(self, "additional_data", coerced)

    def safe_dict(self) -> dict[str, Any]:
        """Export context as a dict that always carries ``additional_data``."""
        data: dict[str, Any] = {}
        if self.file_path is not None:
            data["file_path"] = self.file_path
        if self.operation is not None:
            data["operation"] = self.operation
        data["additional_data"] = self.additional_data or {}
        return data


class AdCloakError(Exception):
    """Base exception class for all adcloak errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize AdCloakError.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context information
            original_error: Original exception that caused this error
        """
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error

        formatted_message = f"{code.value}: {message}"
        super().__init__(formatted_message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging and JSON output."""
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class DomainError(AdCloakError):
    """Domain-specific errors.

    These errors occur when relocation rules are violated, e.g. a
    persisted lookup table that no longer validates.
    """


class InfrastructureError(AdCloakError):
    """Infrastructure-related errors.

    These errors occur when interacting with the filesystem or the
    process-wide lock.
    """


class ApplicationError(AdCloakError):
    """Application-level errors such as configuration problems."""


class FilesystemConnectionError(InfrastructureError):
    """The filesystem abstraction cannot connect to the upload directory.

    Raised before any state is touched.
    """


class NoWritableDirectoryError(InfrastructureError):
    """The base upload directory is missing or not writable."""


class RenameFailureError(InfrastructureError):
    """Moving the existing relocated folder to a new name failed.

    Raised before any copy happens, so the prior state stays intact.
    """


class DirectoryCreateError(InfrastructureError):
    """A destination directory could not be created mid-copy."""


class DirectoryRemoveError(InfrastructureError):
    """A previously relocated tree could not be removed."""


class CopyFailureError(InfrastructureError):
    """A single asset could not be copied to its relocated path."""


class RebuildLockError(InfrastructureError):
    """Another process holds the rebuild lock."""


class StateFileCorruptedError(DomainError):
    """The persisted relocation state exists but cannot be parsed."""


def create_copy_failure_error(
    source_path: str,
    destination_path: str,
    original_error: Exception | None = None,
) -> CopyFailureError:
    """Create a copy failure error naming the failing asset."""
    return CopyFailureError(
        code=ErrorCode.FILE_COPY_FAILED,
        message=f"Unable to copy {source_path} to {destination_path}",
        context=ErrorContext(
            file_path=source_path,
            operation="copy_asset",
            additional_data={"destination_path": destination_path},
        ),
        original_error=original_error,
    )


def create_directory_create_error(
    directory: str,
    original_error: Exception | None = None,
) -> DirectoryCreateError:
    """Create a directory creation error."""
    return DirectoryCreateError(
        code=ErrorCode.DIRECTORY_CREATION_FAILED,
        message=f'We do not have direct write access to the "{directory}" directory',
        context=ErrorContext(file_path=directory, operation="create_directory"),
        original_error=original_error,
    )


def create_config_error(
    message: str,
    config_path: str | None = None,
    original_error: Exception | None = None,
) -> ApplicationError:
    """Create a configuration error."""
    return ApplicationError(
        code=ErrorCode.CONFIG_ERROR,
        message=message,
        context=ErrorContext(file_path=config_path, operation="load_config"),
        original_error=original_error,
    )
