"""
Static matplotlib figure of an RTF session: recent samples and histogram.
"""
import logging
from pathlib import Path
from typing import Union

import matplotlib
import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from telemetry.model import SessionView
from ui.styles import (
    ACCENT_BLUE,
    ACCENT_CYAN,
    ACCENT_RED,
    ACCENT_YELLOW,
    GRID_COLOR,
    MATPLOTLIB_DARK_THEME,
)

logger = logging.getLogger(__name__)


def build_rtf_figure(
    view: SessionView,
    rtf_min: float = 0.0,
    rtf_max: float = 2.0,
    width: float = 8,
    height: float = 6,
    dpi: int = 100,
) -> Figure:
    """
    Build a two-panel figure.

    Args:
        view: Session view to draw
        rtf_min: Lower y-limit of the RTF series
        rtf_max: Upper y-limit of the RTF series
        width: Figure width in inches
        height: Figure height in inches
        dpi: Dots per inch resolution
    """
    with matplotlib.rc_context(MATPLOTLIB_DARK_THEME):
        fig = Figure(figsize=(width, height), dpi=dpi)
        FigureCanvasAgg(fig)
        series_ax, hist_ax = fig.subplots(2, 1)

        stats = view.snapshot.stats
        hist = view.snapshot.histogram

        # Recent RTF series
        series_ax.set_title("Real Time Factor", fontsize=10)
        series_ax.set_xlabel("Sample", fontsize=8)
        series_ax.grid(True, color=GRID_COLOR, alpha=0.6)
        series_ax.set_ylim(rtf_min, rtf_max)
        if view.recent.size > 0:
            series_ax.plot(np.arange(view.recent.size), view.recent, linewidth=1.5, color=ACCENT_BLUE)
            series_ax.set_xlim(0, max(view.recent.size - 1, 1))
        series_ax.axhline(1.0, color=ACCENT_RED, linewidth=0.8, linestyle="--")

        # Histogram
        edges = hist.bin_edges()
        hist_ax.set_title("RTF Histogram", fontsize=10)
        hist_ax.set_xlabel("RTF", fontsize=8)
        hist_ax.set_ylabel("Count", fontsize=8)
        hist_ax.grid(True, color=GRID_COLOR, alpha=0.6)
        hist_ax.bar(edges[:-1], hist.counts, width=np.diff(edges), align="edge", color=ACCENT_CYAN)
        if stats.count > 0:
            hist_ax.axvline(stats.mean, color=ACCENT_YELLOW, linewidth=1.0)

        fig.suptitle(
            f"n={stats.count}  mean={stats.mean:.4f}  var={stats.variance:.6f}",
            fontsize=9,
        )
        fig.tight_layout(pad=1.0)

    return fig


def save_rtf_figure(
    view: SessionView,
    path: Union[str, Path],
    rtf_min: float = 0.0,
    rtf_max: float = 2.0,
) -> Path:
    path = Path(path)
    fig = build_rtf_figure(view, rtf_min=rtf_min, rtf_max=rtf_max)
    fig.savefig(path, facecolor=fig.get_facecolor())
    logger.info(f"Wrote RTF figure to {path}")
    return path
