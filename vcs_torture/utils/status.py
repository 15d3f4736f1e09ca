"""Rate-limited status display."""

import time
from typing import Optional

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn

from vcs_torture.constants import STATUS_INTERVAL


class PeriodicStatus:
    """Decides when a status update is due.

    Updates are drawn at most once per interval so that terminal output
    stays out of the way of the commands being timed.
    """

    def __init__(self, interval: float = STATUS_INTERVAL, clock=time.monotonic):
        self.interval = interval if interval > 0 else 0.1
        self.clock = clock
        self.last_status = clock()

    def ready(self) -> bool:
        return self.clock() - self.last_status >= self.interval

    def mark(self):
        self.last_status = self.clock()


def shorten_path(path: str, width: int = 39) -> str:
    """Keep the start and end of a long path."""
    if len(path) <= width:
        return path
    keep = (width - 3) // 2
    return path[:keep] + "..." + path[-keep:]


def make_progress(console: Optional[Console] = None) -> Progress:
    """A progress display that only redraws when refresh() is called.

    Auto-refresh runs a render thread; keeping it off means nothing draws
    while an external command is being timed.
    """
    return Progress(
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TextColumn("{task.fields[detail]}"),
        console=console or Console(stderr=True),
        auto_refresh=False,
        transient=False,
    )
