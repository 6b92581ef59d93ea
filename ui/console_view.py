"""
Console presentation of the live RTF aggregates.
"""
import logging
import time
from typing import Callable, Optional

from telemetry.model import SessionView

logger = logging.getLogger(__name__)


def _fmt(value: float) -> str:
    return f"{value:.4f}"


def format_summary(view: SessionView) -> str:
    """One-line summary of a session view."""
    stats = view.snapshot.stats

    if view.loaded:
        mode = "LOADED"
    elif view.paused:
        mode = "PAUSED"
    else:
        mode = "LIVE"

    if stats.count == 0:
        return f"[{mode}] no samples yet"

    last = f" last={_fmt(view.last_rtf)}" if view.last_rtf is not None else ""
    return (
        f"[{mode}] n={stats.count}{last} mean={_fmt(stats.mean)} "
        f"var={stats.variance:.6f} min={_fmt(stats.min)} max={_fmt(stats.max)} "
        f"sim={view.snapshot.sim_time:.3f}s real={view.snapshot.real_time:.3f}s"
    )


class ConsoleView:
    """
    Renders a summary line per redraw, throttled to one line every
    ``interval`` seconds so a fast redraw timer doesn't flood the log.
    """

    def __init__(self, interval: float = 1.0, clock: Callable[[], float] = time.monotonic):
        self.interval = interval
        self.clock = clock
        self._last_render: Optional[float] = None
        self.last_line: Optional[str] = None

    def render(self, view: SessionView, force: bool = False) -> bool:
        now = self.clock()
        if not force and self._last_render is not None and now - self._last_render < self.interval:
            return False

        self._last_render = now
        self.last_line = format_summary(view)
        logger.info(self.last_line)
        return True
