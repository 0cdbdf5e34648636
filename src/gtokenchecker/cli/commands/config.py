"""Config management commands for gtokenchecker."""

from __future__ import annotations

import tomllib

import msgspec
import msgspec.toml
import typer
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax

from gtokenchecker.cli.app import ExitCode
from gtokenchecker.cli.app import make_console
from gtokenchecker.config.paths import config_dir
from gtokenchecker.config.paths import config_file
from gtokenchecker.config.settings import Config
from gtokenchecker.config.settings import get_config
from gtokenchecker.config.settings import reload_config
from gtokenchecker.config.settings import save_config
from gtokenchecker.display.json import output_json_pretty

# Create config group
config_app = typer.Typer(help="Manage configuration settings.")


@config_app.command("show")
def config_show_command(ctx: typer.Context) -> None:
    """Display current settings."""
    console = make_console(ctx)
    config_path = config_file()
    json_mode = ctx.meta.get("json", False)
    verbose = ctx.meta.get("verbose", False)
    quiet = ctx.meta.get("quiet", False)

    try:
        config = get_config()
    except (msgspec.ValidationError, tomllib.TOMLDecodeError, ValueError) as e:
        console.print(f"[red]Invalid configuration in {config_path}:[/red] {escape(str(e))}")
        raise typer.Exit(ExitCode.CONFIG_ERROR) from e

    if json_mode:
        # Include defaults, unlike the TOML file
        data = {
            "api": msgspec.structs.asdict(config.api),
            "check": msgspec.structs.asdict(config.check),
            "display": msgspec.structs.asdict(config.display),
            "log_level": config.log_level,
            "path": str(config_path),
        }
        output_json_pretty(data)
        return

    # Quiet mode: minimal output
    if quiet:
        console.print(str(config_path))
        return

    toml_data = msgspec.toml.encode(config)
    body = toml_data.decode().strip() or "# all settings at their defaults"
    console.print(Panel(Syntax(body, "toml"), title=f"Config: {config_path}"))

    if verbose:
        if config_path.exists():
            console.print(f"[dim]File size: {config_path.stat().st_size} bytes[/dim]")
        else:
            console.print("[dim]Using default configuration (file not created yet)[/dim]")


@config_app.command("path")
def config_path_command(ctx: typer.Context) -> None:
    """Show the paths used by gtokenchecker."""
    console = make_console(ctx)

    if ctx.meta.get("json", False):
        output_json_pretty(
            {"config_dir": str(config_dir()), "config_file": str(config_file())}
        )
        return

    if ctx.meta.get("quiet", False):
        console.print(str(config_file()))
        return

    console.print(f"Config dir:    {config_dir()}")
    console.print(f"Config file:   {config_file()}")
    if ctx.meta.get("verbose", False):
        console.print(f"[dim]Config file exists: {config_file().exists()}[/dim]")


@config_app.command("init")
def config_init_command(
    ctx: typer.Context,
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing config file"
    ),
) -> None:
    """Write a config file with every setting at its default."""
    console = make_console(ctx)
    cfg_path = config_file()

    if cfg_path.exists() and not force:
        console.print(f"[yellow]Config file already exists:[/yellow] {cfg_path}")
        console.print("[dim]Use --force to overwrite it[/dim]")
        raise typer.Exit(ExitCode.CONFIG_ERROR)

    default = Config()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    # Write every field, not only those that differ from defaults
    data = {
        "api": msgspec.structs.asdict(default.api),
        "check": msgspec.structs.asdict(default.check),
        "display": msgspec.structs.asdict(default.display),
        "log_level": default.log_level,
    }
    cfg_path.write_bytes(msgspec.toml.encode(data))
    reload_config()

    if ctx.meta.get("json", False):
        output_json_pretty({"success": True, "path": str(cfg_path)})
        return
    console.print(f"[green]✓[/green] Wrote {cfg_path}")


@config_app.command("set")
def config_set_command(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Setting as section.name, e.g. check.max_attempts"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Change one setting in the config file."""
    console = make_console(ctx)

    section, _, name = key.partition(".")
    try:
        config = get_config()
        data = msgspec.to_builtins(config)
        if name:
            if section not in ("api", "check", "display"):
                raise ValueError(f"Unknown section: {section}")
            data.setdefault(section, {})[name] = _parse_value(value)
        else:
            data[section] = _parse_value(value)
        updated = msgspec.convert(data, type=Config, strict=False)
        _reject_unknown(key, updated)
    except (msgspec.ValidationError, tomllib.TOMLDecodeError, ValueError) as e:
        console.print(f"[red]Cannot set {key}:[/red] {escape(str(e))}")
        raise typer.Exit(ExitCode.CONFIG_ERROR) from e

    path = save_config(updated)

    if ctx.meta.get("json", False):
        output_json_pretty({"success": True, "key": key, "path": str(path)})
        return
    console.print(f"[green]✓[/green] {key} updated in {path}")


def _parse_value(value: str):
    """Interpret a CLI value as a TOML scalar, falling back to a string."""
    try:
        return tomllib.loads(f"value = {value}")["value"]
    except tomllib.TOMLDecodeError:
        return value


def _reject_unknown(key: str, config: Config) -> None:
    section, _, name = key.partition(".")
    target = getattr(config, section, None) if name else config
    field = name or section
    if target is None or field not in target.__struct_fields__:
        raise ValueError(f"Unknown setting: {key}")


@config_app.command("reset")
def config_reset_command(
    ctx: typer.Context,
    confirm: bool = typer.Option(
        False,
        "--confirm",
        "-y",
        help="Skip confirmation prompt",
    ),
) -> None:
    """Reset configuration to defaults."""
    console = make_console(ctx)
    json_mode = ctx.meta.get("json", False)

    if not confirm:
        # In JSON mode, auto-confirm to avoid hanging
        if json_mode:
            confirm = True
        else:
            confirm = typer.confirm(
                "This will reset your configuration to defaults. Continue?",
                default=False,
            )

    if not confirm:
        console.print("Reset cancelled")
        raise typer.Exit()

    cfg_path = config_file()
    deleted = cfg_path.exists()
    if deleted:
        cfg_path.unlink()
    reload_config()

    if json_mode:
        result = {"success": True, "reset": deleted}
        if deleted:
            result["deleted"] = str(cfg_path)
        output_json_pretty(result)
        return

    if deleted:
        console.print("[green]✓[/green] Configuration reset to defaults")
        console.print(f"\nDeleted: {cfg_path}")
    else:
        console.print("[yellow]No custom configuration to reset[/yellow]")
