"""CLI commands for bookingprobe."""

from .version import version
from .config_cmd import config
from .ping_cmd import ping
from .findings_cmd import findings
from .sarif_cmd import sarif_export

__all__ = [
    "version",
    "config",
    "ping",
    "findings",
    "sarif_export",
]
