"""SARIF export command."""

import sys

import click
from rich.console import Console
from rich.markup import escape

from ..findings import FindingLoadError, export_sarif, load_findings

console = Console()


@click.command("sarif")
@click.argument("findings_file", default="findings.json", type=click.Path(exists=True))
@click.option("--output", "-o", default="bookingprobe.sarif.json", help="Output SARIF file path")
def sarif_export(findings_file, output):
    """Export test findings to SARIF format.

    Generates a SARIF 2.1.0 file for GitHub Code Scanning and other
    SARIF-compatible security tools.
    """
    try:
        items = load_findings(findings_file)
    except FindingLoadError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    export_sarif(output, items)

    console.print(f"[green]SARIF exported to:[/green] {output}")
    console.print(f"[dim]{len(items)} finding(s) exported[/dim]")
