"""
Fill legend construction.

The inset map shows a single legend keyed on the fill attribute. Its entries
follow the caller's legend order, and each swatch borrows the marker shape
of the category it stands for, so legend and map agree on both colour and
shape. Categories left out of the legend order get no entry; their points
are still drawn.
"""

from dataclasses import dataclass
from typing import Any, List, Optional
import logging

import pandas as pd
from matplotlib.axes import Axes
from matplotlib.legend import Legend
from matplotlib.lines import Line2D

from .markers import DEFAULT_MARKER, to_marker
from .selectors import UnmappedCategoryError, find_unmapped
from .theme import size_to_points, stroke_to_points

logger = logging.getLogger(__name__)

# Legend labels relative to the base text size
LEGEND_TEXT_SCALE = 0.8


@dataclass(frozen=True)
class LegendEntry:
    """One fill legend swatch."""
    key: Any
    label: str
    color: Any
    marker: Any


def _legend_marker(key, config, fill_values: pd.Series, shape_values: pd.Series):
    """Marker for the legend swatch of fill category ``key``."""
    if key in config.shape_vals:
        return to_marker(config.shape_vals[key])

    shapes = pd.unique(shape_values[(fill_values == key).to_numpy()])
    if len(shapes) == 0:
        logger.debug(f"No points in fill category {key!r}; legend uses default marker")
        return DEFAULT_MARKER
    if len(shapes) > 1:
        logger.warning(
            f"Fill category {key!r} spans {len(shapes)} shape categories {list(shapes)}; "
            f"legend shows the shape of {shapes[0]!r}"
        )

    shape = shapes[0]
    if shape not in config.shape_vals:
        raise UnmappedCategoryError("shape_vals", [shape])
    return to_marker(config.shape_vals[shape])


def build_legend_entries(config, points: pd.DataFrame) -> List[LegendEntry]:
    """
    Build fill legend entries in legend order.

    Parameters
    ----------
    config : InsetMapConfig
        Resolved map configuration
    points : pd.DataFrame
        Point features (GeoDataFrame)

    Returns
    -------
    List[LegendEntry]
        One entry per key of ``config.fill_breaks``, in that order

    Raises
    ------
    UnmappedCategoryError
        If a legend key has no colour in ``fill_vals``, or the shape category
        of its points has no entry in ``shape_vals``
    """
    missing = find_unmapped(config.fill_breaks, config.fill_vals)
    if missing:
        raise UnmappedCategoryError("fill_vals", missing)

    fill_values = config.fill_col.resolve(points)
    shape_values = config.shape_col.resolve(points)

    entries = []
    for key in config.fill_breaks:
        entries.append(
            LegendEntry(
                key=key,
                label=str(key),
                color=config.fill_vals[key],
                marker=_legend_marker(key, config, fill_values, shape_values),
            )
        )

    omitted = [k for k in pd.unique(fill_values) if k not in config.fill_breaks]
    if omitted:
        logger.debug(f"Fill categories drawn without legend entry: {omitted}")

    return entries


def add_fill_legend(
    ax: Axes,
    entries: List[LegendEntry],
    title: str,
    style,
    alpha: float = 1.0,
) -> Optional[Legend]:
    """
    Draw the fill legend to the right of the map panel.

    Returns the legend, or None when there are no entries.
    """
    if not entries:
        logger.debug("Legend order is empty; no legend drawn")
        return None

    handles = [
        Line2D(
            [], [],
            linestyle="none",
            marker=entry.marker,
            markersize=size_to_points(style.legend_marker_size),
            markerfacecolor=entry.color,
            markeredgecolor=style.point_edgecolor,
            markeredgewidth=stroke_to_points(style.point_stroke),
            alpha=alpha,
            label=entry.label,
        )
        for entry in entries
    ]

    return ax.legend(
        handles=handles,
        labels=[entry.label for entry in entries],
        title=title,
        loc="center left",
        bbox_to_anchor=(1.02, 0.5),
        frameon=False,
        fontsize=style.base_font_size * LEGEND_TEXT_SCALE,
        title_fontsize=style.base_font_size,
        borderaxespad=0.0,
    )
