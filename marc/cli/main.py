"""
FILE: marc/cli/main.py
PURPOSE: Typer-based CLI for one-shot todo management commands
EXPORTS:
  - app (Typer application)
  - main() (entry point)
  - get_config(ctx) -> Config
  - add() / log() / done() / undone() / rm() / show() / edit() - Todo commands
  - tag_command() - Tag vocabulary (list, create, delete, prune)
  - version() / help() - System commands
DEPENDENCIES:
  - typer (CLI framework)
  - rich (formatted output)
  - marc.core.config (Config resolution)
  - marc.core.logs (logging setup)
NOTES:
  - Global options (--file, --verbose) are resolved once in the callback and
    handed to commands through ctx.obj
  - Error messages go to stderr
  - Exit codes: 0=success, 1=error, 2=usage error
"""

import sys
from pathlib import Path
from typing import Optional

# Fix Windows console encoding for Unicode characters
if sys.platform == "win32":
    import io
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')

import typer
from rich.console import Console
from rich.markup import escape

from .. import __version__
from ..core.config import Config
from ..core.constants import ENV_STORE_PATH
from ..core.exceptions import MarcError
from ..core.logs import configure_logging

# Typer app setup
app = typer.Typer(
    name="marc",
    help="Annotate your work: a tiny tagged todo list for the terminal",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

# Rich console for formatted output
console = Console()
error_console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"marc v{__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def default_command(
    ctx: typer.Context,
    store_file: Optional[Path] = typer.Option(
        None, "--file", "-f", envvar=ENV_STORE_PATH,
        help="Todo store file (default: ~/.marc/todos.json)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback, is_eager=True,
        help="Show version and exit",
    ),
):
    """
    Default callback - resolves configuration for every command.

    If no subcommand is invoked (just 'marc'), show the command overview.
    """
    try:
        config = Config.resolve(store_file, verbose=verbose)
    except MarcError as e:
        fail(e)

    configure_logging(config.log_level)
    ctx.obj = config

    if ctx.invoked_subcommand is None:
        from .commands.system import print_overview
        print_overview()


def get_config(ctx: typer.Context) -> Config:
    """Config resolved by the callback (falls back to env/defaults)."""
    config = ctx.find_root().obj
    if isinstance(config, Config):
        return config
    return Config.resolve()


def fail(error: Exception) -> None:
    """Print an error to stderr and exit with status 1."""
    error_console.print(f"[red]Error:[/red] {escape(str(error))}", soft_wrap=True)
    raise typer.Exit(1)


# Import command modules to register commands with app
# Commands are decorated with @app.command() in their modules
from .commands import (
    # Todo commands
    add,
    log,
    done,
    undone,
    rm,
    show,
    edit,
    # Tag commands
    tag_command,
    # System commands
    version,
    help,
)


def main():
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
