"""Shared CLI helpers: context, options and error handling."""

from .context import CliContext, LogLevel, get_cli_context, set_cli_context
from .error_handler import format_json_output, handle_cli_error

__all__ = [
    "CliContext",
    "LogLevel",
    "format_json_output",
    "get_cli_context",
    "handle_cli_error",
    "set_cli_context",
]
