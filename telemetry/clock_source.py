# telemetry/clock_source.py
"""
Clock tick sources.

How ticks reach the process is up to the caller; these helpers cover the
two cases the monitor needs out of the box:

- a text stream with one ``sim real`` pair per line (a file, or stdin
  piped from a simulator's clock topic echo)
- a synthetic clock running at a chosen real-time factor, for demos and
  smoke tests
"""
import codecs
import logging
import os
import re
import select
import time
from typing import Callable, Iterator, Optional, TextIO

import numpy as np

from .model import ClockTick

logger = logging.getLogger(__name__)

_SPLIT_RE = re.compile(r"[,\s]+")


def parse_tick_line(line: str) -> Optional[ClockTick]:
    """
    Parse ``"sim real"`` (comma and/or whitespace separated).

    Returns None for blank lines and ``#`` comments; raises ValueError for
    anything else that isn't two numbers.
    """
    line = line.strip()
    if not line or line.startswith("#"):
        return None

    parts = [p for p in _SPLIT_RE.split(line) if p]
    if len(parts) != 2:
        raise ValueError(f"expected 'sim real', got {line!r}")
    return ClockTick(sim_time=float(parts[0]), real_time=float(parts[1]))


def _iter_lines_polling(
    fd: int,
    encoding: str,
    should_continue: Callable[[], bool],
    poll_interval: float,
) -> Iterator[str]:
    """
    Read lines from a raw fd, checking ``should_continue`` between waits.

    Reading the fd bypasses the TextIO wrapper, so anything it already
    buffered is not seen here; ``encoding`` is taken from the wrapper.
    """
    decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
    pending = ""
    while should_continue():
        ready, _, _ = select.select([fd], [], [], poll_interval)
        if not ready:
            # Periodic timeout just so we can check should_continue
            continue

        chunk = os.read(fd, 4096)
        if not chunk:
            break
        pending += decoder.decode(chunk)
        *lines, pending = pending.split("\n")
        yield from lines

    pending += decoder.decode(b"", final=True)
    if pending and should_continue():
        yield pending


def _iter_lines(stream: TextIO, should_continue: Callable[[], bool], poll_interval: float) -> Iterator[str]:
    try:
        fd = stream.fileno()
        # Probe once: select() only works on pipes/ttys/files on POSIX
        select.select([fd], [], [], 0)
    except (AttributeError, OSError, ValueError):
        # In-memory streams, or select() not supported for this handle
        fd = None

    if fd is not None:
        encoding = getattr(stream, "encoding", None) or "utf-8"
        yield from _iter_lines_polling(fd, encoding, should_continue, poll_interval)
        return

    for line in stream:
        if not should_continue():
            break
        yield line


def read_clock_ticks(
    stream: TextIO,
    should_continue: Callable[[], bool] = lambda: True,
    poll_interval: float = 0.5,
) -> Iterator[ClockTick]:
    """
    Yield ticks from a line-oriented text stream until EOF or until
    ``should_continue`` returns False. Malformed lines are logged and skipped.
    """
    for line_no, line in enumerate(_iter_lines(stream, should_continue, poll_interval), start=1):
        try:
            tick = parse_tick_line(line)
        except ValueError as e:
            logger.warning(f"Skipping tick line {line_no}: {e}")
            continue
        if tick is not None:
            yield tick


class SyntheticClock:
    """
    Generates ticks for a simulation running at ``target_rtf``.

    Real time advances by ``step`` per tick; simulated time advances by
    ``step * target_rtf`` scaled by Gaussian jitter. ``sleep`` paces the
    ticks in wall-clock time and can be swapped out in tests.
    """

    def __init__(
        self,
        target_rtf: float = 1.0,
        step: float = 0.01,
        jitter: float = 0.05,
        seed: Optional[int] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if step <= 0:
            raise ValueError(f"step must be > 0, got {step}")
        self.target_rtf = target_rtf
        self.step = step
        self.jitter = jitter
        self.sleep = sleep
        self.rng = np.random.default_rng(seed)

    def ticks(
        self,
        limit: Optional[int] = None,
        should_continue: Callable[[], bool] = lambda: True,
    ) -> Iterator[ClockTick]:
        sim_time = 0.0
        real_time = 0.0
        emitted = 0

        while should_continue() and (limit is None or emitted < limit):
            if emitted:
                self.sleep(self.step)
                noise = self.jitter * float(self.rng.standard_normal())
                sim_time += max(0.0, self.step * self.target_rtf * (1.0 + noise))
                real_time += self.step

            yield ClockTick(sim_time=sim_time, real_time=real_time)
            emitted += 1
