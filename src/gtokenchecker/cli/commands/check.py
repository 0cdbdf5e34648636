"""Token check command for gtokenchecker."""

from __future__ import annotations

import asyncio
import time
import tomllib

import msgspec
import typer
from rich.console import Console
from rich.markup import escape

from gtokenchecker.cli.app import ExitCode
from gtokenchecker.cli.app import app
from gtokenchecker.cli.app import make_console
from gtokenchecker.cli.progress import create_progress
from gtokenchecker.cli.progress import create_progress_callback
from gtokenchecker.config.settings import Config
from gtokenchecker.config.settings import get_config
from gtokenchecker.config.settings import with_check_overrides
from gtokenchecker.core.orchestrator import categorize_outcomes
from gtokenchecker.core.orchestrator import check_tokens
from gtokenchecker.display.json import output_json_error
from gtokenchecker.display.json import output_json_pretty
from gtokenchecker.display.json import outcomes_to_dict
from gtokenchecker.display.rich import display_outcomes
from gtokenchecker.logging_config import configure_logging
from gtokenchecker.models import CheckOutcome
from gtokenchecker.tokens import TokenInputError
from gtokenchecker.tokens import resolve_tokens


@app.command("check")
def check_command(
    ctx: typer.Context,
    token_or_file: str = typer.Argument(
        ...,
        metavar="TOKEN_OR_FILE",
        help="Token, or path to a file with one token per line",
    ),
    mask: bool = typer.Option(
        False, "--mask", "-m", help="Mask the last part of tokens in output"
    ),
    max_attempts: int | None = typer.Option(
        None, "--max-attempts", "-a", min=1, help="Attempts per token"
    ),
    rate_limit_delay: float | None = typer.Option(
        None,
        "--rate-limit-delay",
        min=0.0,
        help="Seconds to wait before retrying a rate-limited token",
    ),
    network_delay: float | None = typer.Option(
        None,
        "--network-delay",
        min=0.0,
        help="Seconds to wait before retrying after a network error",
    ),
    concurrency: int | None = typer.Option(
        None,
        "--concurrency",
        "-c",
        min=0,
        help="Tokens checked at once (0 = unbounded)",
    ),
    json_output: bool = typer.Option(
        False, "--json", "-j", help="Output in JSON format"
    ),
    verbose_flag: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose output"
    ),
    quiet_flag: bool = typer.Option(
        False, "--quiet", "-q", help="One line per token"
    ),
) -> None:
    """Check one token or a file of tokens."""
    json_mode = json_output or ctx.meta.get("json", False)
    quiet = quiet_flag or ctx.meta.get("quiet", False)
    verbose = (verbose_flag or ctx.meta.get("verbose", False)) and not quiet
    no_color = ctx.meta.get("no_color", False)

    console = make_console(ctx)
    err_console = Console(stderr=True, no_color=no_color)

    try:
        config = with_check_overrides(
            get_config(),
            max_attempts=max_attempts,
            rate_limit_delay=rate_limit_delay,
            network_delay=network_delay,
            max_concurrent=concurrency,
        )
    except (msgspec.ValidationError, tomllib.TOMLDecodeError, ValueError) as e:
        _report_input_error(err_console, json_mode, f"Invalid configuration: {e}", "configuration")
        raise typer.Exit(ExitCode.CONFIG_ERROR) from e

    configure_logging("DEBUG" if verbose else config.log_level, colors=not no_color)

    try:
        tokens = resolve_tokens(token_or_file)
    except TokenInputError as e:
        _report_input_error(err_console, json_mode, str(e), "input")
        raise typer.Exit(ExitCode.INPUT_ERROR) from e

    mask = mask or config.display.mask_tokens

    start_time = time.monotonic()
    outcomes = run_checks(tokens, config, err_console, show_progress=not (quiet or json_mode))
    duration_ms = (time.monotonic() - start_time) * 1000

    if json_mode:
        output_json_pretty(outcomes_to_dict(outcomes, mask))
        return

    display_outcomes(
        console,
        outcomes,
        mask=mask,
        date_format=config.display.date_format,
        verbose=verbose,
        quiet=quiet,
    )

    if verbose:
        categories = categorize_outcomes(outcomes)
        counts = ", ".join(
            f"{len(categories.get(key, []))} {key.replace('_', ' ')}"
            for key in ("valid", "rate_limited", "invalid", "failed")
        )
        console.print(f"[dim]{len(outcomes)} token(s) in {duration_ms:.0f}ms: {counts}[/dim]")


def run_checks(
    tokens: list[str],
    config: Config,
    console: Console,
    show_progress: bool = True,
) -> list[CheckOutcome]:
    """Run the checks for all tokens, with a progress bar on ``console``."""
    with create_progress(console, quiet=not show_progress) as tracker:
        if tracker is not None:
            tracker.start(len(tokens))
        return asyncio.run(
            check_tokens(tokens, config, on_complete=create_progress_callback(tracker))
        )


def _report_input_error(
    console: Console, json_mode: bool, message: str, category: str
) -> None:
    if json_mode:
        output_json_error(message, category=category)
        return
    console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)
