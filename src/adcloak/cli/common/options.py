"""
Reusable Typer Options Module

Annotated option types shared by the main callback and the commands, so
every command spells its common options the same way.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer

from adcloak.cli.common.context import LogLevel
from adcloak.shared.constants import Application, CLIHelp


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        typer.echo(CLIHelp.VERSION_TEXT.format(version=Application.VERSION))
        raise typer.Exit


VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Enable verbose output (equivalent to --log-level DEBUG).",
    ),
]

LogLevelOption = Annotated[
    LogLevel,
    typer.Option(
        "--log-level",
        case_sensitive=False,
        help="Set the logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Default: INFO.",
    ),
]

ConfigOption = Annotated[
    Optional[Path],
    typer.Option(
        "--config",
        "-c",
        help=CLIHelp.CONFIG_HELP,
        dir_okay=False,
    ),
]

JsonOutputOption = Annotated[
    bool,
    typer.Option(
        "--json",
        help=CLIHelp.JSON_HELP,
    ),
]

VersionOption = Annotated[
    bool,
    typer.Option(
        "--version",
        "-V",
        help="Show version information and exit.",
        callback=version_callback,
        is_eager=True,
    ),
]
