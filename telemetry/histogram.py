# telemetry/histogram.py
import math

import numpy as np

from .errors import ConfigurationError
from .model import HistogramState

DEFAULT_HIST_BINS = 200
DEFAULT_HIST_MIN = 0.0
DEFAULT_HIST_MAX = 2.0


class HistogramAccumulator:
    """
    Fixed-range, fixed-bin-count frequency counts over RTF samples.

    Bins split ``[range_min, range_max)`` into equal widths. Samples below
    the range go to the first bin and samples at or above ``range_max`` go
    to the last one, so ``sum(counts)`` always equals the number of inserted
    samples.
    """

    def __init__(
        self,
        num_bins: int = DEFAULT_HIST_BINS,
        range_min: float = DEFAULT_HIST_MIN,
        range_max: float = DEFAULT_HIST_MAX,
    ):
        self.configure(num_bins, range_min, range_max)

    def configure(self, num_bins: int, range_min: float, range_max: float) -> None:
        """Set bins and range. Existing counts are discarded."""
        if isinstance(num_bins, bool) or not isinstance(num_bins, (int, np.integer)):
            raise ConfigurationError(f"num_bins must be an integer, got {num_bins!r}")
        if num_bins < 1:
            raise ConfigurationError(f"num_bins must be >= 1, got {num_bins}")

        range_min = float(range_min)
        range_max = float(range_max)
        if not (math.isfinite(range_min) and math.isfinite(range_max)):
            raise ConfigurationError(
                f"Histogram range must be finite, got [{range_min}, {range_max})"
            )
        if range_min >= range_max:
            raise ConfigurationError(
                f"Histogram range_min must be < range_max, got [{range_min}, {range_max})"
            )
        if not math.isfinite(range_max - range_min):
            raise ConfigurationError(
                f"Histogram range is too wide, got [{range_min}, {range_max})"
            )

        self.num_bins = int(num_bins)
        self.range_min = range_min
        self.range_max = range_max
        self.counts = np.zeros(self.num_bins, dtype=np.int64)

    def bin_index(self, x: float) -> int:
        if x < self.range_min:
            return 0
        if x >= self.range_max:
            return self.num_bins - 1

        width = self.range_max - self.range_min
        index = int(math.floor((x - self.range_min) / width * self.num_bins))
        # Rounding can push values just under range_max onto num_bins
        return min(max(index, 0), self.num_bins - 1)

    def insert_data(self, x: float) -> None:
        self.counts[self.bin_index(x)] += 1

    def reset(self) -> None:
        self.counts[:] = 0

    def snapshot(self) -> HistogramState:
        return HistogramState(
            num_bins=self.num_bins,
            range_min=self.range_min,
            range_max=self.range_max,
            counts=tuple(int(c) for c in self.counts),
        )
