import sys
from pathlib import Path

# Ensure package import for tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from telemetry.model import HistogramState, SessionSnapshot, StatsState


@pytest.fixture
def sample_snapshot() -> SessionSnapshot:
    """A small but fully populated session snapshot."""

    return SessionSnapshot(
        sim_time=12.5,
        real_time=13.0625,
        stats=StatsState(count=4, mean=2.5, variance=5.0 / 3.0, min=1.0, max=4.0),
        histogram=HistogramState(
            num_bins=4,
            range_min=0.0,
            range_max=2.0,
            counts=(0, 1, 1, 2),
        ),
    )

