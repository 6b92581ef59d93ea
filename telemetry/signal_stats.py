# telemetry/signal_stats.py
import math

from .model import StatsState


class StatsAccumulator:
    """
    Streaming count / mean / variance / min / max.

    Mean and variance use Welford's online update, which stays accurate
    for long runs where a naive sum of squares loses precision. Variance is
    the sample variance ``M2 / (count - 1)`` and reads as 0 until there
    are at least two samples.
    """

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.count = 0
        self.mean = 0.0
        self._m2 = 0.0
        self.min = math.inf
        self.max = -math.inf

    def insert_data(self, x: float) -> None:
        self.count += 1

        delta = x - self.mean
        self.mean += delta / self.count
        self._m2 += delta * (x - self.mean)

        if x < self.min:
            self.min = x
        if x > self.max:
            self.max = x

    @property
    def variance(self) -> float:
        if self.count < 2:
            return 0.0
        return self._m2 / (self.count - 1)

    def snapshot(self) -> StatsState:
        # Caller holds the session lock
        return StatsState(
            count=self.count,
            mean=self.mean,
            variance=self.variance,
            min=self.min,
            max=self.max,
        )
