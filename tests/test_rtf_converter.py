import pytest

from telemetry.model import ClockTick
from telemetry.rtf_converter import ClockEventConverter


def _feed(converter, pairs):
    out = []
    for sim, real in pairs:
        rtf = converter.add_tick(ClockTick(sim, real))
        if rtf is not None:
            out.append(rtf)
    return out


def test_first_tick_is_baseline_only():
    conv = ClockEventConverter()
    assert not conv.streaming
    assert conv.add_tick(ClockTick(5.0, 5.0)) is None
    assert conv.streaming
    assert conv.last_tick == ClockTick(5.0, 5.0)


def test_rtf_is_per_interval_not_cumulative():
    conv = ClockEventConverter()
    assert _feed(conv, [(0, 0), (1, 1), (3, 2)]) == [1.0, 2.0]
    assert conv.last_tick == ClockTick(3, 2)


def test_zero_real_dt_is_dropped_silently():
    conv = ClockEventConverter()
    assert _feed(conv, [(0, 0), (1, 1), (2, 1)]) == [1.0]
    assert conv.dropped == 1
    # Baseline still moved to the dropped tick
    assert conv.add_tick(ClockTick(2.5, 2.0)) == pytest.approx(0.5)


def test_backwards_clocks_are_dropped():
    conv = ClockEventConverter()
    # real clock going backwards, then sim clock reset
    assert _feed(conv, [(0, 0), (1, 1), (2, 0.5), (0, 1.5), (1, 2.5)]) == [1.0, 1.0]
    assert conv.dropped == 2


def test_reset_returns_to_awaiting_first():
    conv = ClockEventConverter()
    _feed(conv, [(0, 0), (1, 1), (1, 1)])
    conv.reset()
    assert conv.last_tick is None
    assert conv.dropped == 0
    assert conv.add_tick(ClockTick(10, 10)) is None


def test_tick_from_sec_nsec():
    tick = ClockTick.from_sec_nsec(1, 500_000_000, 2, 250_000_000)
    assert tick.sim_time == pytest.approx(1.5)
    assert tick.real_time == pytest.approx(2.25)
