"""Findings command - view a findings file written by the pytest plugin."""

import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..findings import FindingLoadError, Severity, load_findings
from ..utils.formatting import truncate_text

console = Console()

SEVERITY_COLORS = {
    Severity.CRITICAL: "red",
    Severity.WARNING: "yellow",
    Severity.INFO: "blue",
}


@click.command("findings")
@click.argument("findings_file", default="findings.json", type=click.Path(exists=True))
@click.option(
    "--severity", "-s",
    type=click.Choice([s.value for s in Severity], case_sensitive=False),
    default=None,
    help="Show only one severity",
)
def findings(findings_file, severity):
    """View findings recorded during a test run.

    Produce the file with: pytest --findings-output findings.json
    """
    try:
        items = load_findings(findings_file)
    except FindingLoadError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    counts = {s: sum(1 for f in items if f.severity is s) for s in Severity}
    console.print()
    console.print("[bold blue]Test Findings[/bold blue]")
    console.print(f"  Total: [green]{len(items)}[/green]")
    console.print(f"  Critical: [red]{counts[Severity.CRITICAL]}[/red]")
    console.print(f"  Warnings: [yellow]{counts[Severity.WARNING]}[/yellow]")
    console.print(f"  Info: [blue]{counts[Severity.INFO]}[/blue]")
    console.print()

    if severity:
        items = [f for f in items if f.severity is Severity(severity.upper())]

    if not items:
        console.print("[green]No findings to show.[/green]")
        return

    table = Table()
    table.add_column("Severity", width=10)
    table.add_column("Test", style="cyan")
    table.add_column("Message")

    for item in items:
        color = SEVERITY_COLORS[item.severity]
        table.add_row(
            f"[{color}]{item.severity.value}[/{color}]",
            escape(truncate_text(item.test, 50)),
            escape(item.message),
        )

    console.print(table)
