"""ASCII banner for bookingprobe CLI."""

from rich.console import Console

BANNER = r"""
    __                __   _
   / /_  ____  ____  / /__(_)___  ____ _____  _________  / /_  ___
  / __ \/ __ \/ __ \/ //_/ / __ \/ __ `/ __ \/ ___/ __ \/ __ \/ _ \
 / /_/ / /_/ / /_/ / ,< / / / / / /_/ / /_/ / /  / /_/ / /_/ /  __/
/_.___/\____/\____/_/|_/_/_/ /_/\__, / .___/_/   \____/_.___/\___/
                               /____/_/
"""


def print_banner(console: Console | None = None, show_version: bool = True) -> None:
    """Print the bookingprobe ASCII banner."""
    if console is None:
        console = Console()

    console.print(f"[bold cyan]{BANNER}[/bold cyan]", highlight=False, markup=True)

    if show_version:
        from bookingprobe import __version__

        console.print(f"  [dim]bookingprobe v{__version__} - booking API test harness[/dim]")
        console.print()
