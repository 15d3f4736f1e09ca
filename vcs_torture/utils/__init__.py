"""Utility functions for vcs-torture.

- signals: abort flag driven by SIGINT/SIGTERM
- status: rate-limited progress display
"""

from .signals import SignalCatcher
from .status import PeriodicStatus, make_progress, shorten_path

__all__ = [
    "SignalCatcher",
    "PeriodicStatus",
    "make_progress",
    "shorten_path",
]
