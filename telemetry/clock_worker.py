# telemetry/clock_worker.py
import logging
from typing import Callable, Iterable

from PyQt5 import QtCore

from .model import ClockTick
from .session_state import RtfSessionState

logger = logging.getLogger(__name__)

# Given a "keep going?" callback, returns the ticks to ingest
TickSourceFactory = Callable[[Callable[[], bool]], Iterable[ClockTick]]


class ClockTelemetryWorker(QtCore.QThread):
    """
    Background thread that pulls clock ticks from a source and pushes them
    into the shared session state.

    The source is built inside ``run()`` with a callback that reports
    whether the worker is still running, so blocking sources can give up
    their wait when ``stop()`` is called.
    """

    status_update = QtCore.pyqtSignal(str)   # status message
    source_exhausted = QtCore.pyqtSignal()   # source ran out of ticks

    def __init__(self, state: RtfSessionState, source_factory: TickSourceFactory, parent=None):
        super().__init__(parent)
        self.state = state
        self.source_factory = source_factory
        self.running = False
        self.ticks_seen = 0

    # ------------------ Core QThread loop ------------------ #

    def run(self):
        self.running = True
        self.status_update.emit("Clock listener started")

        try:
            for tick in self.source_factory(lambda: self.running):
                if not self.running:
                    break
                self.state.add_tick(tick)
                self.ticks_seen += 1
        except Exception as e:
            logger.error(f"Clock source failed: {e}", exc_info=True)
            self.status_update.emit(f"ERROR: clock source failed: {e}")
        else:
            if self.running:
                self.status_update.emit(f"Clock source exhausted after {self.ticks_seen} ticks")
                self.source_exhausted.emit()
        finally:
            self.running = False
            self.status_update.emit("Clock listener stopped")

    def stop(self):
        self.running = False
