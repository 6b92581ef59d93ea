# telemetry/config.py
import logging
import os
from dataclasses import dataclass, replace
from typing import Any, Callable

from .errors import ConfigurationError
from .histogram import DEFAULT_HIST_BINS, DEFAULT_HIST_MAX, DEFAULT_HIST_MIN
from .sample_buffer import DEFAULT_RECENT_CAPACITY

# Plot range for the live RTF series
DEFAULT_RTF_MIN = 0.0
DEFAULT_RTF_MAX = 2.0


def _env(name: str, convert: Callable[[str], Any], default: Any) -> Any:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return convert(raw.strip())
    except ValueError:
        raise ConfigurationError(f"{name}={raw!r} is not a valid {convert.__name__}") from None


@dataclass(frozen=True)
class MonitorConfig:
    """
    Settings for the RTF monitor.

    Attributes:
        hist_bins: Number of histogram bins
        hist_min: Lower edge of the histogram range
        hist_max: Upper edge of the histogram range (exclusive)
        recent_capacity: Number of recent samples kept for plotting
        redraw_ms: Render loop period in milliseconds
        summary_interval: Seconds between console summary lines
        plot_min: Lower y-limit of the RTF series plot
        plot_max: Upper y-limit of the RTF series plot
        log_level: Root logging level name
    """

    hist_bins: int = DEFAULT_HIST_BINS
    hist_min: float = DEFAULT_HIST_MIN
    hist_max: float = DEFAULT_HIST_MAX
    recent_capacity: int = DEFAULT_RECENT_CAPACITY
    redraw_ms: int = 100
    summary_interval: float = 1.0
    plot_min: float = DEFAULT_RTF_MIN
    plot_max: float = DEFAULT_RTF_MAX
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "MonitorConfig":
        """Read ``RTF_*`` environment variables (load ``.env`` first)."""
        config = cls(
            hist_bins=_env("RTF_HIST_BINS", int, DEFAULT_HIST_BINS),
            hist_min=_env("RTF_HIST_MIN", float, DEFAULT_HIST_MIN),
            hist_max=_env("RTF_HIST_MAX", float, DEFAULT_HIST_MAX),
            recent_capacity=_env("RTF_RECENT_CAPACITY", int, DEFAULT_RECENT_CAPACITY),
            redraw_ms=_env("RTF_REDRAW_MS", int, 100),
            summary_interval=_env("RTF_SUMMARY_INTERVAL", float, 1.0),
            plot_min=_env("RTF_PLOT_MIN", float, DEFAULT_RTF_MIN),
            plot_max=_env("RTF_PLOT_MAX", float, DEFAULT_RTF_MAX),
            log_level=_env("RTF_LOG_LEVEL", str, "INFO").upper(),
        )
        config.validate()
        return config

    def with_overrides(self, **overrides: Any) -> "MonitorConfig":
        """Return a copy with every non-None override applied."""
        config = replace(self, **{k: v for k, v in overrides.items() if v is not None})
        config.validate()
        return config

    def validate(self) -> None:
        if self.hist_bins < 1:
            raise ConfigurationError(f"hist_bins must be >= 1, got {self.hist_bins}")
        if self.hist_min >= self.hist_max:
            raise ConfigurationError(
                f"hist_min must be < hist_max, got [{self.hist_min}, {self.hist_max})"
            )
        if self.recent_capacity < 1:
            raise ConfigurationError(f"recent_capacity must be >= 1, got {self.recent_capacity}")
        if self.redraw_ms < 1:
            raise ConfigurationError(f"redraw_ms must be >= 1, got {self.redraw_ms}")
        if self.plot_min >= self.plot_max:
            raise ConfigurationError(
                f"plot_min must be < plot_max, got [{self.plot_min}, {self.plot_max}]"
            )
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigurationError(f"Unknown log level {self.log_level!r}")
