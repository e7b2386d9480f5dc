"""
Map theme and unit conversion.

Style values are expressed in ggplot-style units: point and marker sizes in
millimetres, line widths in ggplot linewidth units. Helpers here convert
them to matplotlib points and apply the plain map theme (white panel, no
axis decoration, black border).
"""

import logging

from matplotlib.axes import Axes

logger = logging.getLogger(__name__)

# Points per millimetre
PT_PER_MM = 72.27 / 25.4

# Line widths are scaled by PT_PER_MM into 1/96 inch units
LWD_TO_POINTS = 72.0 / 96.0

# Outline strokes are measured in 1/96 inch units per millimetre
STROKE_PER_MM = 96.0 / 25.4


def size_to_points(size: float) -> float:
    """Convert a millimetre marker/text size to points."""
    return size * PT_PER_MM


def size_to_scatter_area(size: float, stroke: float = 0.0) -> float:
    """
    Convert a millimetre marker size to a ``scatter`` area (points squared).

    The outline stroke adds to the marker diameter the same way it does for
    filled point shapes.
    """
    diameter = size_to_points(size) + stroke * STROKE_PER_MM / 2.0
    return diameter ** 2


def stroke_to_points(stroke: float) -> float:
    """Convert a marker outline stroke to a matplotlib edge width in points."""
    return stroke * STROKE_PER_MM / 2.0 * LWD_TO_POINTS


def linewidth_to_points(linewidth: float) -> float:
    """Convert a ggplot linewidth to a matplotlib line width in points."""
    return linewidth * PT_PER_MM * LWD_TO_POINTS


def apply_theme(ax: Axes, style, border_linewidth: float) -> None:
    """
    Apply the plain map theme to ``ax``.

    Removes axis titles, tick labels and ticks, hides the grid, fills the
    panel with the style background and draws a border around the panel.

    Parameters
    ----------
    ax : matplotlib.axes.Axes
        Map axes
    style : MapStyle
        Visual constants
    border_linewidth : float
        Border width in ggplot linewidth units
    """
    ax.set_facecolor(style.background_color)
    ax.grid(False)
    ax.set_xlabel("")
    ax.set_ylabel("")
    ax.set_xticks([])
    ax.set_yticks([])
    ax.tick_params(
        axis="both", which="both",
        bottom=False, top=False, left=False, right=False,
        labelbottom=False, labelleft=False,
    )

    border_pt = linewidth_to_points(border_linewidth)
    for spine in ax.spines.values():
        spine.set_visible(True)
        spine.set_edgecolor(style.border_color)
        spine.set_linewidth(border_pt)
        spine.set_zorder(5)

    logger.debug(f"Applied map theme (border {border_pt:.2f} pt)")
