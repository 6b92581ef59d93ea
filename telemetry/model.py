# telemetry/model.py
import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class ClockTick:
    sim_time: float    # simulated seconds
    real_time: float   # wall-clock seconds

    @classmethod
    def from_sec_nsec(cls, sim_sec: int, sim_nsec: int, real_sec: int, real_nsec: int) -> "ClockTick":
        """Build a tick from clock message (sec, nsec) pairs."""
        return cls(sim_time=sim_sec + sim_nsec * 1e-9, real_time=real_sec + real_nsec * 1e-9)


@dataclass(frozen=True)
class StatsState:
    count: int = 0
    mean: float = 0.0
    variance: float = 0.0
    min: float = math.inf
    max: float = -math.inf


@dataclass(frozen=True)
class HistogramState:
    num_bins: int
    range_min: float
    range_max: float
    counts: Tuple[int, ...]

    @property
    def total(self) -> int:
        return sum(self.counts)

    def bin_edges(self) -> np.ndarray:
        """Return the ``num_bins + 1`` bin boundaries."""
        return np.linspace(self.range_min, self.range_max, self.num_bins + 1)


@dataclass(frozen=True)
class SessionSnapshot:
    sim_time: float
    real_time: float
    stats: StatsState
    histogram: HistogramState


@dataclass(frozen=True)
class SessionView:
    """
    Everything the presentation layer needs for one redraw.

    Captured under the session lock in a single acquisition, so ``recent``
    and ``snapshot`` always describe the same prefix of the tick stream.
    """
    snapshot: SessionSnapshot
    recent: np.ndarray = field(compare=False, repr=False)
    last_rtf: Optional[float] = None
    loaded: bool = False
    paused: bool = False
    dropped: int = 0
