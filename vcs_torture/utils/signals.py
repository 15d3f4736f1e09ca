"""Cooperative interrupt handling."""

import signal
from typing import Dict

from vcs_torture.logging_config import get_logger

logger = get_logger(__name__)

_SIGNALS = [signal.SIGINT, signal.SIGTERM]


class SignalCatcher:
    """Turns SIGINT/SIGTERM into an abort flag.

    The flag is checked by progress callbacks between external commands,
    so a run stops at the next checkpoint instead of mid-write.
    """

    def __init__(self):
        self.abort = False
        self._previous: Dict[int, object] = {}

    def _handler(self, signum, frame):
        if not self.abort:
            logger.warning(f"Caught signal {signum}; stopping at the next checkpoint")
        self.abort = True

    def capture(self):
        """Start capturing signals."""
        self.abort = False
        for signum in _SIGNALS:
            self._previous[signum] = signal.getsignal(signum)
            signal.signal(signum, self._handler)

    def release(self):
        """Restore the handlers that were installed before capture()."""
        for signum, handler in self._previous.items():
            signal.signal(signum, handler)
        self._previous.clear()

    def __enter__(self) -> "SignalCatcher":
        self.capture()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False
