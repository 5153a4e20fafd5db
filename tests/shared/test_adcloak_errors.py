"""Tests for the adcloak error hierarchy."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

import pytest

from adcloak.shared.errors import (
    AdCloakError,
    ApplicationError,
    CopyFailureError,
    DomainError,
    ErrorCode,
    ErrorContext,
    FilesystemConnectionError,
    InfrastructureError,
    RebuildLockError,
    StateFileCorruptedError,
    create_config_error,
    create_copy_failure_error,
    create_directory_create_error,
)


class _Mode(Enum):
    FAST = "fast"


class TestErrorContext:
    def test_coerces_paths_and_enums(self) -> None:
        context = ErrorContext(additional_data={"path": Path("/a/b"), "mode": _Mode.FAST, "count": 3})

        assert context.additional_data == {"path": "/a/b", "mode": "fast", "count": 3}

    def test_rejects_complex_values(self) -> None:
        with pytest.raises(TypeError):
            ErrorContext(additional_data={"items": [1, 2]})

    def test_safe_dict_always_has_additional_data(self) -> None:
        assert ErrorContext(operation="copy").safe_dict() == {"operation": "copy", "additional_data": {}}


class TestAdCloakError:
    def test_str_and_dict(self) -> None:
        # Given
        original = OSError("disk full")
        error = AdCloakError(
            ErrorCode.FILE_COPY_FAILED,
            "Unable to copy",
            ErrorContext(file_path="/x.js"),
            original,
        )

        # When
        data = error.to_dict()

        # Then
        assert str(error) == "FILE_COPY_FAILED: Unable to copy"
        assert data["code"] == "FILE_COPY_FAILED"
        assert data["context"]["file_path"] == "/x.js"
        assert data["original_error"] == "disk full"

    @pytest.mark.parametrize(
        ("error_class", "base"),
        [
            (FilesystemConnectionError, InfrastructureError),
            (CopyFailureError, InfrastructureError),
            (RebuildLockError, InfrastructureError),
            (StateFileCorruptedError, DomainError),
        ],
    )
    def test_hierarchy(self, error_class: type[AdCloakError], base: type[AdCloakError]) -> None:
        assert issubclass(error_class, base)
        assert issubclass(error_class, AdCloakError)


class TestFactories:
    def test_copy_failure_names_source(self) -> None:
        error = create_copy_failure_error("/plugins/a.js", "/uploads/1/2.js", OSError("boom"))

        assert isinstance(error, CopyFailureError)
        assert error.code == ErrorCode.FILE_COPY_FAILED
        assert "/plugins/a.js" in error.message
        assert error.context.file_path == "/plugins/a.js"
        assert error.context.additional_data == {"destination_path": "/uploads/1/2.js"}

    def test_directory_create(self) -> None:
        error = create_directory_create_error("/uploads/1/css")

        assert error.code == ErrorCode.DIRECTORY_CREATION_FAILED
        assert '"/uploads/1/css"' in error.message

    def test_config_error(self) -> None:
        error = create_config_error("bad", config_path="adcloak.toml")

        assert isinstance(error, ApplicationError)
        assert error.context.operation == "load_config"
