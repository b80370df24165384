"""bookingprobe CLI entry point."""

import click

from .commands import config, findings, ping, sarif_export, version


@click.group()
def main():
    """bookingprobe - HTTP test harness for booking-management APIs.

    Checks the service under test, manages harness configuration and
    inspects findings recorded by the pytest plugin.
    """


main.add_command(version)
main.add_command(config)
main.add_command(ping)
main.add_command(findings)
main.add_command(sarif_export)


if __name__ == "__main__":
    main()
