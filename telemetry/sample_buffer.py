# telemetry/sample_buffer.py
from typing import Optional

import numpy as np

from .errors import ConfigurationError

DEFAULT_RECENT_CAPACITY = 251


class RecentSampleBuffer:
    """
    Fixed-capacity ring of the most recent RTF samples, for live plotting.

    Appending to a full buffer overwrites the oldest sample in place, so
    inserts are O(1) and the buffer never grows past ``capacity``.
    """

    def __init__(self, capacity: int = DEFAULT_RECENT_CAPACITY):
        if capacity < 1:
            raise ConfigurationError(f"Buffer capacity must be >= 1, got {capacity}")
        self.capacity = int(capacity)
        self._data = np.zeros(self.capacity, dtype=float)
        self._start = 0   # index of the oldest sample
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def append(self, x: float) -> None:
        if self._size < self.capacity:
            self._data[(self._start + self._size) % self.capacity] = x
            self._size += 1
        else:
            # Full: overwrite the oldest and move the start forward
            self._data[self._start] = x
            self._start = (self._start + 1) % self.capacity

    @property
    def latest(self) -> Optional[float]:
        if self._size == 0:
            return None
        return float(self._data[(self._start + self._size - 1) % self.capacity])

    def items(self) -> np.ndarray:
        """Return a copy of the stored samples, oldest first."""
        indices = (self._start + np.arange(self._size)) % self.capacity
        return self._data[indices].copy()

    def reset(self) -> None:
        self._start = 0
        self._size = 0
