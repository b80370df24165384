"""Config management commands."""

from __future__ import annotations

import os
import sys
from dataclasses import asdict
from io import StringIO
from pathlib import Path

import click
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table
from ruamel.yaml import YAML

from ..config import (
    ENV_VARS,
    ConfigError,
    config_sources,
    find_config_path,
    get_default_config_yaml,
    load_config,
    validate_config,
    validate_environment,
)

console = Console()

DEFAULT_FILENAME = "bookingprobe.yaml"
MASKED = "***"
SECRET_FIELDS = {"api_key"}


def _display(key, value):
    if value is None:
        return "[dim]-[/dim]"
    if key in SECRET_FIELDS:
        return MASKED
    return str(value)


@click.group("config")
def config():
    """Manage bookingprobe configuration.

    Settings come from defaults, then bookingprobe.yaml, then environment
    variables.
    """


@config.command()
@click.option("--force", "-f", is_flag=True, help="Overwrite existing config file")
@click.option("--filename", default=DEFAULT_FILENAME,
              help="Config filename (default: bookingprobe.yaml)")
def init(force, filename):
    """Write a commented bookingprobe.yaml template to the current directory."""
    target = Path.cwd() / filename

    if target.exists() and not force:
        console.print(f"[yellow]Config file already exists:[/yellow] {target}")
        console.print("[dim]Use --force to overwrite.[/dim]")
        return

    target.write_text(get_default_config_yaml(), encoding="utf-8")
    console.print(f"[green]Config file created:[/green] {target}")


@config.command()
@click.option("--config", "-c", "config_path", default=None, help="Config file path")
@click.option("--yaml", "as_yaml", is_flag=True, help="Print as YAML instead of a table")
def show(config_path, as_yaml):
    """Show the effective configuration and where each value comes from."""
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    values = asdict(cfg)

    if as_yaml:
        masked = {k: (MASKED if k in SECRET_FIELDS and v else v) for k, v in values.items()}
        yaml = YAML()
        yaml.default_flow_style = False
        buf = StringIO()
        yaml.dump({"bookingprobe": masked}, buf)
        console.print(Syntax(buf.getvalue(), "yaml", theme="monokai", line_numbers=False))
    else:
        sources = config_sources(config_path)
        table = Table(title="Effective configuration")
        table.add_column("Setting", style="cyan")
        table.add_column("Value")
        table.add_column("Source", style="dim")
        for key, value in values.items():
            table.add_row(key, _display(key, value), sources[key])
        console.print(table)

    found = Path(config_path).resolve() if config_path else find_config_path()
    if found:
        console.print(f"\n[dim]Config file: {found}[/dim]")
    else:
        console.print("\n[dim]No config file found (using defaults)[/dim]")


@config.command()
def env():
    """List the environment variables bookingprobe reads."""
    table = Table()
    table.add_column("Variable", style="cyan")
    table.add_column("Setting")
    table.add_column("Value")

    for var, key in ENV_VARS.items():
        value = os.environ.get(var) or None
        table.add_row(var, key, _display(key, value))

    console.print(table)


@config.command()
@click.option("--config", "-c", "config_path", default=None, help="Config file path")
def validate(config_path):
    """Validate the config file and the harness environment variables.

    Checks YAML syntax, key names and value types.
    """
    path = Path(config_path) if config_path else find_config_path()

    if path is not None and not path.exists():
        console.print(f"[red]Config file not found:[/red] {path}")
        sys.exit(1)

    errors = validate_config(path) if path is not None else []
    errors += [f"Environment: {e}" for e in validate_environment()]

    if path is None:
        console.print("[yellow]No config file found.[/yellow]")
        console.print("[dim]Run 'bookingprobe config init' to create one.[/dim]")

    if errors:
        console.print(f"[red]Config has {len(errors)} error(s):[/red] {path or 'environment'}")
        for err in errors:
            console.print(f"  [red]-[/red] {err}")
        sys.exit(1)

    if path is not None:
        console.print(f"[green]Config is valid:[/green] {path}")


@config.command()
def path():
    """Print the path to the active config file."""
    found = find_config_path()
    if found:
        click.echo(str(found))
    else:
        console.print("[dim]No config file found.[/dim]")
        sys.exit(1)
