"""Utility functions for bookingprobe."""

from .formatting import format_elapsed, truncate_text

__all__ = [
    "format_elapsed",
    "truncate_text",
]
