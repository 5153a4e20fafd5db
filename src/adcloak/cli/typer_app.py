"""
adcloak Typer CLI Application

Command line trigger surface of the asset relocation engine: rebuild the
relocated folder (optionally under a new name), run the automatic update,
inspect status and stale assets, and remove the folder on uninstall.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table

from adcloak.cli.common.context import CliContext, LogLevel, get_cli_context, set_cli_context
from adcloak.cli.common.error_handler import format_json_output, handle_cli_error
from adcloak.cli.common.options import (
    ConfigOption,
    JsonOutputOption,
    LogLevelOption,
    VerboseOption,
    VersionOption,
)
from adcloak.config import Settings, load_settings
from adcloak.core.engine import AssetRelocationEngine
from adcloak.core.models import RebuildResult
from adcloak.core.scanner import to_asset_records
from adcloak.shared.constants import CLICommands, CLIDefaults, CLIHelp
from adcloak.utils.logging_config import setup_logging
from adcloak.utils.paths import normalize_path

logger = logging.getLogger(__name__)

console = Console()

app = typer.Typer(
    name=CLIHelp.APP_NAME,
    help=CLIHelp.APP_DESCRIPTION,
    add_completion=False,
    rich_markup_mode=CLIHelp.APP_STYLE,
    no_args_is_help=True,
)


@app.callback()
def main(
    config: ConfigOption = None,
    verbose: VerboseOption = 0,
    log_level: LogLevelOption = LogLevel.INFO,
    version: VersionOption = False,
) -> None:
    """Relocate extension assets to randomized paths."""
    set_cli_context(CliContext(verbose=verbose, log_level=log_level, config_path=config))


def _load_engine() -> AssetRelocationEngine:
    context = get_cli_context()
    settings: Settings = load_settings(context.config_path)
    level = "DEBUG" if settings.app.debug else context.get_effective_log_level()
    setup_logging(settings.logging, level=level)
    return AssetRelocationEngine(settings)


def _emit_result(command: str, result: RebuildResult, *, json_output: bool) -> int:
    """Print a rebuild result and return the exit code."""
    if json_output:
        typer.echo(
            format_json_output(
                command,
                success=result.success,
                errors=[error.message for error in result.errors],
                data=result.model_dump(mode="json"),
            ),
        )
    elif result.success:
        console.print(f"[green]{result.message}[/green]")
        console.print(f"Folder: {result.folder_name}  Mode: {result.mode.value if result.mode else '-'}  Copied: {result.copied}")
    else:
        console.print(f"[red]{result.message}[/red]")
        for error in result.errors:
            console.print(f"  [red]{error.code}[/red]: {error.message}")

    return CLIDefaults.EXIT_SUCCESS if result.success else CLIDefaults.EXIT_ERROR


def _emit_data(command: str, data: dict[str, Any]) -> None:
    typer.echo(format_json_output(command, success=True, data=data))


@app.command(CLICommands.REBUILD, help=CLIHelp.REBUILD_HELP)
def rebuild_command(
    rename_all: Annotated[bool, typer.Option("--rename-all", help=CLIHelp.RENAME_ALL_HELP)] = False,
    json_output: JsonOutputOption = False,
) -> None:
    """Rebuild the relocated asset folder.

    Examples:
        # Copy new and changed assets
        adcloak rebuild

        # Move everything to a new random folder with new names
        adcloak rebuild --rename-all
    """
    try:
        engine = _load_engine()
        result = engine.rebuild(force_rename_all=rename_all)
    except Exception as e:  # noqa: BLE001
        raise typer.Exit(handle_cli_error(e, CLICommands.REBUILD, json_output=json_output)) from e

    raise typer.Exit(_emit_result(CLICommands.REBUILD, result, json_output=json_output))


@app.command(CLICommands.UPDATE, help=CLIHelp.UPDATE_HELP)
def update_command(json_output: JsonOutputOption = False) -> None:
    """Run the automatic update once, as a scheduler would."""
    try:
        engine = _load_engine()
        result = engine.auto_update()
    except Exception as e:  # noqa: BLE001
        raise typer.Exit(handle_cli_error(e, CLICommands.UPDATE, json_output=json_output)) from e

    if result is None:
        if json_output:
            _emit_data(CLICommands.UPDATE, {"updated": False})
        else:
            console.print("[yellow]Nothing to update[/yellow]")
        return

    raise typer.Exit(_emit_result(CLICommands.UPDATE, result, json_output=json_output))


@app.command(CLICommands.STATUS, help=CLIHelp.STATUS_HELP)
def status_command(json_output: JsonOutputOption = False) -> None:
    """Show the relocated folder as the rebuild form would."""
    try:
        engine = _load_engine()
        status = engine.status()
    except Exception as e:  # noqa: BLE001
        raise typer.Exit(handle_cli_error(e, CLICommands.STATUS, json_output=json_output)) from e

    if json_output:
        _emit_data(CLICommands.STATUS, status.model_dump(mode="json"))
        return

    table = Table(title="Asset folder", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Enabled", str(status.enabled))
    table.add_row("Working", str(status.module_can_work))
    table.add_row("Path", status.asset_path or "-")
    table.add_row("URL", status.asset_url or "-")
    table.add_row("Lookup entries", str(status.lookup_entries))
    table.add_row("Stale assets", str(status.stale_assets))
    console.print(table)

    if status.message:
        style = "yellow" if status.needs_rebuild else "green"
        console.print(f"[{style}]{status.message}[/{style}]")


@app.command(CLICommands.SCAN, help=CLIHelp.SCAN_HELP)
def scan_command(
    stale_only: Annotated[bool, typer.Option("--stale-only", help=CLIHelp.SCAN_STALE_ONLY_HELP)] = False,
    json_output: JsonOutputOption = False,
) -> None:
    """List tracked assets relative to the plugin root."""
    try:
        engine = _load_engine()
        scanned = engine.scan()
        stale = engine.stale_assets()
    except Exception as e:  # noqa: BLE001
        raise typer.Exit(handle_cli_error(e, CLICommands.SCAN, json_output=json_output)) from e

    rows = []
    for record in to_asset_records(scanned, engine.plugin_root):
        is_stale = normalize_path(record.absolute_path) in stale
        if stale_only and not is_stale:
            continue
        rows.append({"path": record.relative_path, "mtime": record.mtime, "stale": is_stale})

    if json_output:
        _emit_data(CLICommands.SCAN, {"total": len(scanned), "stale": len(stale), "assets": rows})
        return

    table = Table(title=f"Assets ({len(stale)} of {len(scanned)} stale)")
    table.add_column("Path", style="cyan")
    table.add_column("mtime", justify="right")
    table.add_column("Stale")
    for row in rows:
        table.add_row(row["path"], str(row["mtime"]), "[yellow]yes[/yellow]" if row["stale"] else "no")
    console.print(table)


@app.command(CLICommands.CLEAR, help=CLIHelp.CLEAR_HELP)
def clear_command(json_output: JsonOutputOption = False) -> None:
    """Remove the relocated asset folder."""
    try:
        engine = _load_engine()
        removed = engine.clear_assets()
    except Exception as e:  # noqa: BLE001
        raise typer.Exit(handle_cli_error(e, CLICommands.CLEAR, json_output=json_output)) from e

    if json_output:
        _emit_data(CLICommands.CLEAR, {"removed": removed})
    elif removed:
        console.print("[green]The asset folder was removed[/green]")
    else:
        console.print("[yellow]There is no asset folder to remove[/yellow]")


if __name__ == "__main__":
    app()
