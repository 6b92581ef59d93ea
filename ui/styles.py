"""
Styling constants for RTF figures.
"""

# =============================================================================
# Color Palette
# =============================================================================

# Dark theme colors
BG_COLOR = "#111111"          # Figure background
BG_COLOR_LIGHT = "#181818"    # Axes background
TEXT_COLOR = "#EEEEEE"        # Main text
TEXT_COLOR_DIM = "#CCCCCC"    # Dimmed text (axis labels, etc.)
GRID_COLOR = "#333333"        # Grid lines

# Accent colors
ACCENT_BLUE = "#6FA8FF"       # RTF series line
ACCENT_CYAN = "#4ECDC4"       # Histogram bars
ACCENT_YELLOW = "#FFD93D"     # Mean marker
ACCENT_RED = "#FF6B6B"        # Real-time (RTF = 1.0) reference

# =============================================================================
# Matplotlib Theme
# =============================================================================

MATPLOTLIB_DARK_THEME = {
    "figure.facecolor": BG_COLOR,
    "axes.facecolor": BG_COLOR_LIGHT,
    "axes.edgecolor": TEXT_COLOR_DIM,
    "axes.labelcolor": TEXT_COLOR_DIM,
    "axes.titlecolor": "#FFFFFF",
    "xtick.color": TEXT_COLOR_DIM,
    "ytick.color": TEXT_COLOR_DIM,
    "grid.color": GRID_COLOR,
    "grid.alpha": 0.6,
    "text.color": TEXT_COLOR,
}
