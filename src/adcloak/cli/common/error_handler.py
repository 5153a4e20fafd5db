"""
CLI Error Handling Utilities

Consistent error output for every command: errors are logged, printed
to stderr (or as a JSON document on stdout) and mapped to an exit code.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

import typer

from adcloak.shared.constants import CLIDefaults
from adcloak.shared.errors import AdCloakError, ApplicationError, ErrorCode, InfrastructureError

logger = logging.getLogger(__name__)


def format_json_output(
    command: str,
    *,
    success: bool,
    errors: list[str] | None = None,
    data: dict[str, Any] | None = None,
) -> str:
    """Format command output as a JSON document.

    Args:
        command: The command that was executed
        success: Whether the operation was successful
        errors: List of error messages
        data: Additional data to include

    Returns:
        JSON text
    """
    output: dict[str, Any] = {
        "success": success,
        "command": command,
    }

    if errors:
        output["errors"] = errors

    if data is not None:
        output["data"] = data

    return json.dumps(output, indent=2, ensure_ascii=False, default=str)


def handle_cli_error(
    error: BaseException,
    command: str,
    *,
    json_output: bool = False,
) -> int:
    """Handle CLI errors with consistent formatting and logging.

    Args:
        error: The exception that occurred
        command: The CLI command being executed
        json_output: Whether to output JSON format

    Returns:
        Exit code for the CLI command
    """
    message, code, exit_code = _map_error(error)
    _log_error(error, command, message)

    if json_output:
        typer.echo(
            format_json_output(
                command,
                success=False,
                errors=[message],
                data={
                    "error_code": code,
                    "error_type": type(error).__name__,
                    "exit_code": exit_code,
                },
            ),
        )
    else:
        sys.stderr.write(f"Error: {message}\n")

    return exit_code


def _map_error(error: BaseException) -> tuple[str, str, int]:
    """Map an exception to (message, error code, exit code)."""
    if isinstance(error, KeyboardInterrupt):
        return "Command interrupted by user", ErrorCode.CLI_COMMAND_FAILED.value, CLIDefaults.EXIT_INTERRUPTED

    if isinstance(error, ApplicationError):
        return f"Application error: {error.message}", error.code.value, CLIDefaults.EXIT_ERROR

    if isinstance(error, InfrastructureError):
        return f"Infrastructure error: {error.message}", error.code.value, CLIDefaults.EXIT_ERROR

    if isinstance(error, AdCloakError):
        return error.message, error.code.value, CLIDefaults.EXIT_ERROR

    if isinstance(error, OSError):
        return f"File system error: {error}", ErrorCode.CLI_COMMAND_FAILED.value, CLIDefaults.EXIT_ERROR

    return f"Unexpected error: {error}", ErrorCode.CLI_UNEXPECTED_ERROR.value, CLIDefaults.EXIT_ERROR


def _log_error(error: BaseException, command: str, message: str) -> None:
    if isinstance(error, KeyboardInterrupt):
        logger.warning("Command interrupted: %s", command)
    elif isinstance(error, AdCloakError):
        logger.error("CLI error in %s: %s", command, message, extra={"context": error.to_dict()})
    else:
        logger.exception("CLI error in %s: %s", command, message)
