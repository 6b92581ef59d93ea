# telemetry/errors.py
from typing import Optional


class RtfMonitorError(Exception):
    """Base class for errors raised by the RTF pipeline."""


class ConfigurationError(RtfMonitorError, ValueError):
    """Invalid histogram, buffer or environment configuration."""


class ParseError(RtfMonitorError, ValueError):
    """
    Malformed or incomplete persisted-session text.

    Carries the 1-based line number, the name of the field being read and
    the offending text so callers can report exactly what went wrong.
    """

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        field: Optional[str] = None,
        text: Optional[str] = None,
    ):
        self.line = line
        self.field = field
        self.text = text

        where = []
        if line is not None:
            where.append(f"line {line}")
        if field is not None:
            where.append(f"field '{field}'")
        prefix = f"{', '.join(where)}: " if where else ""
        super().__init__(f"{prefix}{message}")
