"""Main CLI application for gtokenchecker."""

from __future__ import annotations

import sys
from enum import IntEnum

import typer
from rich.console import Console

# Create the main app
app = typer.Typer(
    name="gtokenchecker",
    help="Check Discord tokens and show what each one can see",
    add_completion=False,
    no_args_is_help=True,
    invoke_without_command=True,
)

# Used when the first positional argument is not a command name
DEFAULT_COMMAND = "check"


class ExitCode(IntEnum):
    """Exit codes for gtokenchecker."""

    SUCCESS = 0
    INPUT_ERROR = 1
    CONFIG_ERROR = 2


@app.callback()
def main(
    ctx: typer.Context,
    json: bool = typer.Option(False, "--json", "-j", help="Enable JSON output mode"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose output"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Enable quiet mode"),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
) -> None:
    """gtokenchecker - Check Discord tokens and show what each one can see."""
    if version:
        from gtokenchecker import __version__

        typer.echo(f"gtokenchecker {__version__}")
        raise typer.Exit()

    # Resolve conflicts: verbose and quiet are mutually exclusive, quiet takes precedence
    if verbose and quiet:
        verbose = False

    # Store options in context
    ctx.meta["json"] = json
    ctx.meta["no_color"] = no_color
    ctx.meta["verbose"] = verbose
    ctx.meta["quiet"] = quiet

    # Global options alone do nothing; show usage
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def make_console(ctx: typer.Context) -> Console:
    """Console for stdout, respecting --no-color."""
    return Console(no_color=ctx.meta.get("no_color", False), highlight=False)


def with_default_command(args: list[str]) -> list[str]:
    """Insert the default command so ``gtokenchecker TOKEN`` means ``check TOKEN``.

    Global flags may come first; the first positional argument decides. An
    argument list with no positional (``--help``, ``--version``) is returned
    unchanged.
    """
    commands = {"check", "config"}
    for position, arg in enumerate(args):
        if arg == "--":
            break
        if arg.startswith("-"):
            continue
        if arg in commands:
            return args
        return [*args[:position], DEFAULT_COMMAND, *args[position:]]
    return args


def run_app() -> None:
    """Run the CLI app."""
    app(args=with_default_command(sys.argv[1:]), prog_name="gtokenchecker")


# Import command modules - they register themselves with the app
# These imports must come after app is defined
from gtokenchecker.cli.commands import check  # noqa: E402, F401
from gtokenchecker.cli.commands import config as config_cmd  # noqa: E402

app.add_typer(config_cmd.config_app, name="config")
