# telemetry/sample_loop.py
import logging
from pathlib import Path
from typing import Callable, Optional, Union

from PyQt5 import QtCore

from .clock_worker import ClockTelemetryWorker
from .model import SessionView
from .session_codec import save_session
from .session_state import RtfSessionState
from .shutdown import ShutdownFlag

logger = logging.getLogger(__name__)


class SampleLoop(QtCore.QObject):
    """
    Composition root of the monitor.

    Owns the shared session state, the producer thread (if any) and a
    render timer on the Qt event loop. Every timer tick first polls the
    shutdown flag; once it is set the timer stops and the event loop quits.
    The next lock acquisition after the flag is set still completes, there
    is no preemption.
    """

    def __init__(
        self,
        state: RtfSessionState,
        shutdown: ShutdownFlag,
        renderer: Callable[[SessionView], object],
        worker: Optional[ClockTelemetryWorker] = None,
        redraw_ms: int = 100,
        exit_on_source_end: bool = False,
        parent=None,
    ):
        super().__init__(parent)
        self.state = state
        self.shutdown = shutdown
        self.renderer = renderer
        self.worker = worker
        self.iterations = 0

        self.timer = QtCore.QTimer(self)
        self.timer.setInterval(redraw_ms)
        self.timer.timeout.connect(self._on_timeout)

        if worker is not None:
            worker.status_update.connect(lambda msg: logger.info(f"[Clock] {msg}"))
            if exit_on_source_end:
                worker.source_exhausted.connect(self.shutdown.set)

    # ------------------ Loop ------------------ #

    def iterate(self) -> bool:
        """
        Run one render iteration. Returns False once shutdown was requested.
        """
        if self.shutdown.is_set():
            return False

        self.renderer(self.state.view())
        self.iterations += 1
        return True

    def _on_timeout(self):
        if not self.iterate():
            self.timer.stop()
            QtCore.QCoreApplication.quit()

    def start(self):
        if self.worker is not None and not self.state.loaded:
            self.worker.start()
        self.timer.start()

    def stop(self):
        """Stop rendering and join the producer thread."""
        self.timer.stop()
        if self.worker is not None and self.worker.isRunning():
            self.worker.stop()
            self.worker.wait()

    def run(self, app: QtCore.QCoreApplication) -> int:
        """Start everything and block in the Qt event loop until shutdown."""
        self.start()
        try:
            return app.exec_()
        finally:
            self.stop()

    # ------------------ Persistence ------------------ #

    def save(self, path: Union[str, Path]) -> Path:
        """Persist the current aggregates; call after the loop has exited."""
        return save_session(path, self.state.snapshot())
