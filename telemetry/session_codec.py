# telemetry/session_codec.py
"""
Text codec for persisted RTF sessions.

A session file is four comma-terminated lines:

    simTime,realTime,
    count,mean,variance,min,max,
    numBins,rangeMin,rangeMax,
    count_0,count_1,...,count_{numBins-1},

Reals are written with ``repr`` so decoding gives back the exact same
values. Decoding is strict: every field must parse completely, every line
must end where expected, and nothing but a final line terminator may follow
the last histogram count.
"""
import logging
import math
import re
from pathlib import Path
from typing import Callable, List, TypeVar, Union

from .errors import ParseError
from .model import HistogramState, SessionSnapshot, StatsState

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UINT_RE = re.compile(r"[0-9]+")
_REAL_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|nan)"
)


# ===================== FIELD CONVERTERS =====================

def parse_uint(text: str) -> int:
    if not _UINT_RE.fullmatch(text):
        raise ValueError(f"expected an unsigned integer, got {text!r}")
    return int(text)


def parse_real(text: str) -> float:
    if not _REAL_RE.fullmatch(text):
        raise ValueError(f"expected a real number, got {text!r}")
    return float(text)


def _format_real(value: float) -> str:
    return repr(float(value))


# ===================== ENCODE =====================

def encode(snapshot: SessionSnapshot) -> str:
    """Serialize ``snapshot`` to the four-line session format."""
    stats = snapshot.stats
    hist = snapshot.histogram

    lines = [
        [_format_real(snapshot.sim_time), _format_real(snapshot.real_time)],
        [
            str(int(stats.count)),
            _format_real(stats.mean),
            _format_real(stats.variance),
            _format_real(stats.min),
            _format_real(stats.max),
        ],
        [str(int(hist.num_bins)), _format_real(hist.range_min), _format_real(hist.range_max)],
        [str(int(c)) for c in hist.counts],
    ]
    return "".join("".join(f"{field}," for field in line) + "\n" for line in lines)


# ===================== DECODE =====================

class _SessionReader:
    """Cursor over session text that reads one comma-terminated field at a time."""

    def __init__(self, text: str):
        self.text = text
        self.offset = 0
        self.line = 1

    def read_field(self, name: str, convert: Callable[[str], T]) -> T:
        end = self.text.find(",", self.offset)
        newline = self.text.find("\n", self.offset)

        if end == -1 or (newline != -1 and newline < end):
            stop = newline if newline != -1 else len(self.text)
            raw = self.text[self.offset:stop].rstrip("\r")
            if not raw:
                raise ParseError("line ended before this field", self.line, name)
            raise ParseError("missing ',' after value", self.line, name, raw)

        raw = self.text[self.offset:end]
        try:
            value = convert(raw)
        except ValueError as e:
            raise ParseError(str(e), self.line, name, raw) from None

        self.offset = end + 1
        return value

    def end_line(self) -> None:
        if self.text.startswith("\r\n", self.offset):
            self.offset += 2
        elif self.text.startswith("\n", self.offset):
            self.offset += 1
        elif self.offset >= len(self.text):
            raise ParseError("unexpected end of input, expected a line separator", self.line)
        else:
            raise ParseError(
                "expected end of line",
                self.line,
                text=self.text[self.offset:self.offset + 32],
            )
        self.line += 1

    def end_input(self) -> None:
        # The last line may be terminated, nothing else may follow
        rest = self.text[self.offset:]
        if rest in ("", "\n", "\r\n"):
            self.offset = len(self.text)
            return
        raise ParseError("unexpected trailing data", self.line, text=rest[:32])


def decode(text: str) -> SessionSnapshot:
    """
    Parse session text produced by :func:`encode`.

    Raises:
        ParseError: if any field is malformed, a delimiter or line separator
            is missing, the histogram configuration is invalid, or data
            remains after the last histogram count.
    """
    reader = _SessionReader(text)

    sim_time = reader.read_field("simTime", parse_real)
    real_time = reader.read_field("realTime", parse_real)
    reader.end_line()

    count = reader.read_field("count", parse_uint)
    mean = reader.read_field("mean", parse_real)
    variance = reader.read_field("variance", parse_real)
    minimum = reader.read_field("min", parse_real)
    maximum = reader.read_field("max", parse_real)
    reader.end_line()

    num_bins = reader.read_field("numBins", parse_uint)
    if num_bins < 1:
        raise ParseError("histogram needs at least one bin", reader.line, "numBins", str(num_bins))
    range_min = reader.read_field("rangeMin", parse_real)
    range_max = reader.read_field("rangeMax", parse_real)
    if not (
        math.isfinite(range_min)
        and math.isfinite(range_max)
        and range_min < range_max
        and math.isfinite(range_max - range_min)
    ):
        raise ParseError(
            f"invalid histogram range [{range_min}, {range_max})", reader.line, "rangeMax"
        )
    reader.end_line()

    counts: List[int] = []
    for i in range(num_bins):
        counts.append(reader.read_field(f"count_{i}", parse_uint))
    reader.end_input()

    return SessionSnapshot(
        sim_time=sim_time,
        real_time=real_time,
        stats=StatsState(count=count, mean=mean, variance=variance, min=minimum, max=maximum),
        histogram=HistogramState(
            num_bins=num_bins,
            range_min=range_min,
            range_max=range_max,
            counts=tuple(counts),
        ),
    )


# ===================== FILE HELPERS =====================

def save_session(path: Union[str, Path], snapshot: SessionSnapshot) -> Path:
    """Write ``snapshot`` to ``path``, replacing any previous content."""
    path = Path(path)
    with path.open("w", encoding="utf-8", newline="") as fh:
        fh.write(encode(snapshot))
    logger.info(f"Saved session ({snapshot.stats.count} samples) to {path}")
    return path


def load_session(path: Union[str, Path]) -> SessionSnapshot:
    path = Path(path)
    raw = path.read_bytes()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        bad_line = raw.count(b"\n", 0, e.start) + 1
        raise ParseError(
            "file is not valid UTF-8 text",
            line=bad_line,
            text=raw[e.start:e.start + 8].decode("utf-8", errors="replace"),
        ) from e
    snapshot = decode(text)
    logger.info(f"Loaded session ({snapshot.stats.count} samples) from {path}")
    return snapshot
