import io
import logging

import pytest

from telemetry.clock_source import SyntheticClock, parse_tick_line, read_clock_ticks
from telemetry.model import ClockTick


@pytest.mark.parametrize(
    "line, expected",
    [
        ("1.5 2.0", ClockTick(1.5, 2.0)),
        ("1.5,2.0\n", ClockTick(1.5, 2.0)),
        ("  3, 4  ", ClockTick(3.0, 4.0)),
        ("", None),
        ("   \n", None),
        ("# sim real", None),
    ],
)
def test_parse_tick_line(line, expected):
    assert parse_tick_line(line) == expected


@pytest.mark.parametrize("line", ["1.0", "1 2 3", "a b"])
def test_parse_tick_line_rejects(line):
    with pytest.raises(ValueError):
        parse_tick_line(line)


def test_read_clock_ticks_skips_bad_lines(caplog):
    stream = io.StringIO("# header\n0 0\n1 1\nbroken\n\n3,2\n")
    with caplog.at_level(logging.WARNING):
        ticks = list(read_clock_ticks(stream))
    assert ticks == [ClockTick(0, 0), ClockTick(1, 1), ClockTick(3, 2)]
    assert "line 4" in caplog.text


def test_read_clock_ticks_from_file(tmp_path):
    path = tmp_path / "ticks.txt"
    path.write_text("0 0\n0.5 1\n1.5 2")
    with path.open() as fh:
        ticks = list(read_clock_ticks(fh, poll_interval=0.01))
    assert ticks == [ClockTick(0, 0), ClockTick(0.5, 1), ClockTick(1.5, 2)]


def test_read_clock_ticks_stops_when_asked():
    stream = io.StringIO("".join(f"{i} {i}\n" for i in range(100)))
    seen = []
    for tick in read_clock_ticks(stream, should_continue=lambda: len(seen) < 5):
        seen.append(tick)
    assert len(seen) == 5


def test_synthetic_clock_is_deterministic_and_paced():
    sleeps = []
    clock = SyntheticClock(target_rtf=0.5, step=0.02, jitter=0.0, seed=1, sleep=sleeps.append)
    ticks = list(clock.ticks(limit=4))

    assert len(ticks) == 4
    assert ticks[0] == ClockTick(0.0, 0.0)
    assert [t.real_time for t in ticks] == pytest.approx([0.0, 0.02, 0.04, 0.06])
    assert [t.sim_time for t in ticks] == pytest.approx([0.0, 0.01, 0.02, 0.03])
    assert sleeps == [0.02, 0.02, 0.02]


def test_synthetic_clock_jitter_keeps_sim_time_monotonic():
    clock = SyntheticClock(target_rtf=1.0, step=0.01, jitter=2.0, seed=5, sleep=lambda s: None)
    ticks = list(clock.ticks(limit=500))
    assert all(b.sim_time >= a.sim_time for a, b in zip(ticks, ticks[1:]))


def test_synthetic_clock_rejects_bad_step():
    with pytest.raises(ValueError):
        SyntheticClock(step=0.0)


def test_read_clock_ticks_uses_stream_encoding(tmp_path, caplog):
    path = tmp_path / "ticks.txt"
    path.write_bytes("0 0\n1 café\n2 2\n".encode("latin-1"))
    with caplog.at_level(logging.WARNING):
        with path.open(encoding="latin-1") as fh:
            ticks = list(read_clock_ticks(fh, poll_interval=0.01))
    assert ticks == [ClockTick(0, 0), ClockTick(2, 2)]
    assert "café" in caplog.text
