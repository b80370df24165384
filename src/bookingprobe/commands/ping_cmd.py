"""Ping command - health check against the booking service."""

import sys
from dataclasses import replace

import click
from rich.console import Console

from ..client import BookingApiClient, TransportError
from ..config import ConfigError, load_config
from ..utils.formatting import format_elapsed

console = Console()


@click.command("ping")
@click.option("--config", "-c", "config_path", default=None, help="Config file path")
@click.option("--base-url", default=None, help="Override the configured base URL")
def ping(config_path, base_url):
    """Check that the booking service answers GET /ping."""
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    if base_url:
        cfg = replace(cfg, base_url=base_url.rstrip("/"))

    client = BookingApiClient.from_config(cfg)

    try:
        result = client.get("/ping")
    except TransportError as e:
        console.print(f"[red]Unreachable:[/red] {e}")
        sys.exit(1)

    color = "green" if 200 <= result.status < 300 else "red"
    console.print(
        f"[bold]{client.base_url}[/bold] "
        f"[{color}]HTTP {result.status}[/{color}] "
        f"[dim]({format_elapsed(result.elapsed_ms)})[/dim]"
    )
    if color == "red":
        sys.exit(1)
