"""Version command - show version."""

import click

from ..banner import print_banner


@click.command()
def version():
    """Show version."""
    print_banner()
