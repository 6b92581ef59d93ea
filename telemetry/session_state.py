# telemetry/session_state.py
import logging
import threading
from typing import Iterable, Optional

import numpy as np

from .histogram import DEFAULT_HIST_BINS, DEFAULT_HIST_MAX, DEFAULT_HIST_MIN, HistogramAccumulator
from .model import ClockTick, SessionSnapshot, SessionView
from .rtf_converter import ClockEventConverter
from .sample_buffer import DEFAULT_RECENT_CAPACITY, RecentSampleBuffer
from .signal_stats import StatsAccumulator

logger = logging.getLogger(__name__)


class RtfSessionState:
    """
    Live RTF aggregates behind a single lock.

    The converter baseline, the statistics, the histogram and the recent
    sample buffer are updated together for every tick, and readers always
    get all of them from the same acquisition. One instance is created by
    the sample loop and handed to both the producer thread and the render
    path.

    Once a saved session is loaded the state becomes read-only: further
    ticks are ignored and snapshots return the loaded values.
    """

    def __init__(
        self,
        hist_bins: int = DEFAULT_HIST_BINS,
        hist_min: float = DEFAULT_HIST_MIN,
        hist_max: float = DEFAULT_HIST_MAX,
        recent_capacity: int = DEFAULT_RECENT_CAPACITY,
    ):
        self.lock = threading.Lock()

        self._converter = ClockEventConverter()
        self._stats = StatsAccumulator()
        self._histogram = HistogramAccumulator(hist_bins, hist_min, hist_max)
        self._recent = RecentSampleBuffer(recent_capacity)

        self._paused = False
        self._loaded: Optional[SessionSnapshot] = None

    # ------------------ Ingestion ------------------ #

    def add_tick(self, tick: ClockTick) -> Optional[float]:
        """
        Apply one clock tick. Returns the RTF sample it produced, if any.
        """
        with self.lock:
            if self._loaded is not None:
                return None

            rtf = self._converter.add_tick(tick)
            if rtf is None or self._paused:
                return None

            self._stats.insert_data(rtf)
            self._histogram.insert_data(rtf)
            self._recent.append(rtf)
            return rtf

    def add_ticks(self, ticks: Iterable[ClockTick]) -> int:
        """Apply ticks in order; returns how many produced a sample."""
        produced = 0
        for tick in ticks:
            if self.add_tick(tick) is not None:
                produced += 1
        return produced

    # ------------------ Control ------------------ #

    @property
    def paused(self) -> bool:
        return self._paused

    def set_paused(self, paused: bool) -> None:
        """
        While paused, ticks keep moving the baseline forward but no sample
        reaches the aggregates.
        """
        with self.lock:
            self._paused = bool(paused)
        logger.info("Sampling paused" if paused else "Sampling resumed")

    @property
    def loaded(self) -> bool:
        return self._loaded is not None

    def load(self, snapshot: SessionSnapshot) -> None:
        """Replace live ingestion with a previously saved session."""
        with self.lock:
            self._loaded = snapshot
            self._recent.reset()
        logger.info(f"Switched to loaded session with {snapshot.stats.count} samples")

    def configure_histogram(self, num_bins: int, range_min: float, range_max: float) -> None:
        with self.lock:
            self._histogram.configure(num_bins, range_min, range_max)

    def reset(self) -> None:
        """Drop all live aggregates and wait for a new first tick."""
        with self.lock:
            self._converter.reset()
            self._stats.reset()
            self._histogram.reset()
            self._recent.reset()

    # ------------------ Reads ------------------ #

    def _snapshot_locked(self) -> SessionSnapshot:
        if self._loaded is not None:
            return self._loaded

        last = self._converter.last_tick
        return SessionSnapshot(
            sim_time=last.sim_time if last is not None else 0.0,
            real_time=last.real_time if last is not None else 0.0,
            stats=self._stats.snapshot(),
            histogram=self._histogram.snapshot(),
        )

    def snapshot(self) -> SessionSnapshot:
        with self.lock:
            return self._snapshot_locked()

    def view(self) -> SessionView:
        with self.lock:
            if self._loaded is not None:
                recent = np.zeros(0, dtype=float)
            else:
                recent = self._recent.items()
            return SessionView(
                snapshot=self._snapshot_locked(),
                recent=recent,
                last_rtf=self._recent.latest,
                loaded=self._loaded is not None,
                paused=self._paused,
                dropped=self._converter.dropped,
            )
