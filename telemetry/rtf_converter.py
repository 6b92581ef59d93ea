# telemetry/rtf_converter.py
import logging
import math
from typing import Optional

from .model import ClockTick

logger = logging.getLogger(__name__)


class ClockEventConverter:
    """
    Turns consecutive clock ticks into real-time-factor samples.

    The first tick only becomes the baseline. Every later tick is compared
    against the previous one, so each sample is the RTF of a single
    interval rather than a cumulative average over the whole run:

        rtf = (sim - sim_prev) / (real - real_prev)

    Intervals that don't give a finite, non-negative RTF (real clock standing
    still or running backwards, sim clock reset) are dropped silently.
    """

    def __init__(self):
        self.last_tick: Optional[ClockTick] = None
        self.dropped = 0

    @property
    def streaming(self) -> bool:
        return self.last_tick is not None

    def add_tick(self, tick: ClockTick) -> Optional[float]:
        """
        Feed one tick. Returns the RTF of the interval ending at ``tick``,
        or None when no sample is produced.
        """

        # First ever tick: baseline only
        if self.last_tick is None:
            self.last_tick = tick
            return None

        real_dt = tick.real_time - self.last_tick.real_time
        sim_dt = tick.sim_time - self.last_tick.sim_time

        # Baseline always trails by exactly one tick
        self.last_tick = tick

        if real_dt <= 0.0:
            self.dropped += 1
            logger.debug(f"Dropping interval with real dt={real_dt}")
            return None

        rtf = sim_dt / real_dt
        if not math.isfinite(rtf) or rtf < 0.0:
            self.dropped += 1
            logger.debug(f"Dropping non-usable rtf={rtf}")
            return None

        return rtf

    def reset(self) -> None:
        self.last_tick = None
        self.dropped = 0
