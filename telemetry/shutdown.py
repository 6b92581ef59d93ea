# telemetry/shutdown.py
import signal
from typing import Iterable


class ShutdownFlag:
    """
    Process-wide stop request, set from OS signal handlers and polled by
    the render loop once per iteration.

    The handler only stores a bool; it never touches the session state and
    never takes a lock, so a signal landing inside ``set()`` cannot deadlock.
    """

    def __init__(self):
        self._requested = False

    def set(self) -> None:
        self._requested = True

    def is_set(self) -> bool:
        return self._requested

    def install(self, signals: Iterable[int] = (signal.SIGINT, signal.SIGTERM)) -> None:
        """Install handlers for ``signals``. Must be called from the main thread."""
        for signum in signals:
            signal.signal(signum, self._handle_signal)

    def _handle_signal(self, signum, frame) -> None:
        self._requested = True
