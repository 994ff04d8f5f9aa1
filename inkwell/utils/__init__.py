"""Utility helper functions."""

from inkwell.utils.helpers import epoch_ms, get_summary, host, utc_now

__all__ = [
    "epoch_ms",
    "get_summary",
    "host",
    "utc_now",
]
