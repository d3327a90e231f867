"""
emubox CLI.

Manage a directory of 86Box configuration files and launch 86Box against
one of them, picked from an interactive paginated menu.
"""

from __future__ import annotations

import contextlib
import functools
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from .common.exceptions import ConfigExists, EmuboxError, format_exception_chain
from .common.execution import find_emulator, launch_emulator
from .core.library import (
    create_config,
    default_config_dir,
    delete_config,
    init_directory,
    is_acceptable_name,
    purge_configs,
)
from .core.session import SelectionStatus, SessionConfig, run_selection
from .logging_cfg import configure_logging, set_correlation_id
from .tui import run_menu_app

app = typer.Typer(
    help="emubox: manage 86Box configurations and launch them from a menu.",
    add_completion=False,
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


@dataclass
class CliOptions:
    config_dir: Optional[Path] = None
    emulator: Optional[Path] = None


def _say(msg: str) -> None:
    console.print(f"emubox: {msg}", highlight=False)


def _warn(msg: str) -> None:
    err_console.print(f"emubox: {msg}", highlight=False)


@contextlib.contextmanager
def _handle_errors():
    """Report emubox errors on stderr and exit with their exit code."""
    try:
        yield
    except EmuboxError as exc:
        logger.debug("Command failed: %s", format_exception_chain(exc))
        _warn(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=exc.exit_code)


def _options(ctx: typer.Context) -> CliOptions:
    return ctx.obj if isinstance(ctx.obj, CliOptions) else CliOptions()


def _config_dir(ctx: typer.Context) -> Path:
    return _options(ctx).config_dir or default_config_dir()


@app.callback()
def global_options(
    ctx: typer.Context,
    config_dir: Optional[Path] = typer.Option(
        None, "--dir", help="Configuration directory (default: $EMUBOX_DIR or ~/.emubox)."
    ),
    emulator: Optional[Path] = typer.Option(
        None, "--emulator", help="Path to the 86Box binary (default: $EMUBOX_86BOX or ./86Box.AppImage)."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug information."),
):
    ctx.obj = CliOptions(config_dir=config_dir, emulator=emulator)
    set_correlation_id()
    configure_logging(level=logging.DEBUG if verbose else logging.WARNING)


@app.command("init")
def cmd_init(ctx: typer.Context):
    """Initialize the emubox directory."""
    with _handle_errors():
        init_directory(_config_dir(ctx))
    _say("done: emubox directory has been created.")


@app.command("new")
def cmd_new(
    ctx: typer.Context,
    names: List[str] = typer.Argument(..., help="Names of the configurations to create."),
):
    """Create one or more new configuration file(s)."""
    with _handle_errors():
        config_dir = _config_dir(ctx)
        for name in names:
            if not is_acceptable_name(name):
                _warn("an unexpected character was passed. Ignored.")
                continue
            try:
                path = create_config(config_dir, name)
            except ConfigExists as exc:
                _warn(escape(str(exc)))
                continue
            _say(f'done: created "{escape(path.name)}".')


@app.command("delete")
def cmd_delete(
    ctx: typer.Context,
    names: List[str] = typer.Argument(..., help="Names of the configurations to delete."),
):
    """Delete one or more existing configuration file(s)."""
    with _handle_errors():
        config_dir = _config_dir(ctx)
        for name in names:
            if not is_acceptable_name(name):
                _warn("an unexpected character was passed. Ignored.")
                continue
            path = delete_config(config_dir, name)
            _say(f"deleted config: {escape(path.name)}")


@app.command("purge")
def cmd_purge(ctx: typer.Context):
    """Purge all configuration file(s)."""
    with _handle_errors():
        deleted = purge_configs(_config_dir(ctx))
    for path in deleted:
        _say(f"deleted: {escape(path.name)}")
    if not deleted:
        _warn("no config files are present to purge.")


def _select(ctx: typer.Context, config: SessionConfig) -> None:
    with _handle_errors():
        binary = find_emulator(_options(ctx).emulator)
        outcome = run_selection(
            config,
            driver=run_menu_app,
            launcher=functools.partial(launch_emulator, binary),
            announce=lambda p: _say(f"using config: {escape(p.name)}"),
        )

    if outcome.status is SelectionStatus.NO_ENTRIES:
        _warn("no configs are available.")
    elif outcome.status is SelectionStatus.VANISHED:
        name = outcome.path.name if outcome.path else "?"
        _warn(f'[red]config "{escape(name)}" does not exist.[/red]')
        raise typer.Exit(code=1)


@app.command("select")
def cmd_select(
    ctx: typer.Context,
    language: Optional[str] = typer.Option(
        None, "--language", "-l", help="Language code passed to 86Box."
    ),
    fullscreen: bool = typer.Option(
        False, "--fullscreen", "--fsr", help="Start 86Box in fullscreen."
    ),
):
    """Select a configuration from a menu and launch 86Box with it."""
    with _handle_errors():
        config_dir = _config_dir(ctx)
    _select(ctx, SessionConfig(config_dir=config_dir, language=language, fullscreen=fullscreen))


@app.command("settings")
def cmd_settings(ctx: typer.Context):
    """Select a configuration from a menu and open its 86Box settings panel."""
    with _handle_errors():
        config_dir = _config_dir(ctx)
    _select(ctx, SessionConfig(config_dir=config_dir, settings=True))


def main():
    app()


if __name__ == "__main__":
    main()
