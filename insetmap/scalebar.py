"""
Scale Bar Annotation

Draws a metric scale bar on a longitude/latitude map. The bar is a row of
alternating black and white segments with its length printed beside it,
placed in one corner of the panel.

The bar length is the largest "nice" distance (1, 2 or 5 x 10^k) that fits in
``width_hint`` of the map width. Map width is measured along the bar's own
latitude using haversine distances, so the bar stays true to scale at the
position where it is drawn.

Example Usage:
    >>> from insetmap.scalebar import add_scale_bar
    >>> artists = add_scale_bar(ax, (-10, 10), (30, 50), location="bl", text_cex=1.2)

Author: Steph Smith (steph.smith@unc.edu)
"""

from typing import List, Sequence, Tuple
import logging

import numpy as np
from matplotlib.axes import Axes
from matplotlib.patches import Rectangle

from .config import SCALE_BAR_LOCATIONS

logger = logging.getLogger(__name__)

# Mean Earth radius (IUGG)
EARTH_RADIUS_KM = 6371.0088

# Base text size (points) multiplied by text_cex
SCALE_TEXT_BASE_SIZE = 12.0


def haversine_km(lon1, lat1, lon2, lat2):
    """
    Great-circle distance in kilometres between points given in degrees.

    Accepts scalars or numpy arrays.

    Examples
    --------
    >>> round(float(haversine_km(0, 0, 1, 0)), 1)
    111.2
    """
    lon1, lat1, lon2, lat2 = map(np.radians, (lon1, lat1, lon2, lat2))
    dlon = lon2 - lon1
    dlat = lat2 - lat1
    a = np.sin(dlat / 2.0) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2.0) ** 2
    return 2.0 * EARTH_RADIUS_KM * np.arcsin(np.sqrt(a))


def nice_scale_length(max_length: float) -> Tuple[float, int]:
    """
    Pick a rounded scale length no longer than ``max_length``.

    Parameters
    ----------
    max_length : float
        Upper bound (any unit)

    Returns
    -------
    Tuple[float, int]
        Length (1, 2 or 5 x 10^k) and the number of bar segments

    Raises
    ------
    ValueError
        If max_length is not positive

    Examples
    --------
    >>> nice_scale_length(480)
    (200.0, 4)
    >>> nice_scale_length(0.73)
    (0.5, 5)
    """
    if not max_length > 0:
        raise ValueError(f"Scale bar length bound must be positive, got {max_length}")

    exponent = int(np.floor(np.log10(max_length)))
    leading = max_length / 10.0 ** exponent
    # guard against floating point just below an exact power of ten
    if leading >= 10.0 - 1e-9:
        exponent += 1
        leading = 1.0

    if leading >= 5:
        digit, segments = 5, 5
    elif leading >= 2:
        digit, segments = 2, 4
    else:
        digit, segments = 1, 2

    return float(digit * 10.0 ** exponent), segments


def format_distance(length_km: float) -> str:
    """
    Format a scale length for display, in km from 1 km up, otherwise in m.

    Examples
    --------
    >>> format_distance(200)
    '200 km'
    >>> format_distance(0.5)
    '500 m'
    """
    if length_km >= 1:
        return f"{length_km:g} km"
    return f"{length_km * 1000:g} m"


def add_scale_bar(
    ax: Axes,
    long_range: Sequence[float],
    lat_range: Sequence[float],
    location: str = "tl",
    text_cex: float = 1.5,
    width_hint: float = 0.25,
    pad: float = 0.04,
    bar_height: float = 0.015,
    zorder: float = 4,
) -> List:
    """
    Add a metric scale bar in one corner of a longitude/latitude map.

    Parameters
    ----------
    ax : matplotlib.axes.Axes
        Map axes, in degrees
    long_range, lat_range : sequence of two numbers
        Visible map window
    location : str, optional
        Corner: "tl", "tr", "bl" or "br" (default: "tl")
    text_cex : float, optional
        Label size multiplier relative to 12 pt (default: 1.5)
    width_hint : float, optional
        Maximum bar length as a fraction of map width (default: 0.25)
    pad : float, optional
        Gap between bar and panel edges, as a fraction of the window (default: 0.04)
    bar_height : float, optional
        Bar height as a fraction of the window height (default: 0.015)
    zorder : float, optional
        Drawing order of the bar and its label (default: 4)

    Returns
    -------
    list
        The segment patches followed by the label text artist

    Raises
    ------
    ValueError
        If location is not one of the four corners
    """
    if location not in SCALE_BAR_LOCATIONS:
        raise ValueError(
            f"Scale bar location must be one of {list(SCALE_BAR_LOCATIONS)}, got {location!r}"
        )

    x_min, x_max = float(long_range[0]), float(long_range[1])
    y_min, y_max = float(lat_range[0]), float(lat_range[1])
    map_width = x_max - x_min
    map_height = y_max - y_min
    height_deg = map_height * bar_height

    if location[0] == "t":
        y0 = y_max - map_height * pad - height_deg
    else:
        y0 = y_min + map_height * pad
    bar_lat = y0 + height_deg / 2.0

    km_per_degree = float(haversine_km(0.0, bar_lat, 1.0, bar_lat))
    map_width_km = map_width * km_per_degree
    length_km, segments = nice_scale_length(map_width_km * width_hint)
    length_deg = length_km / km_per_degree

    if location[1] == "l":
        x0 = x_min + map_width * pad
    else:
        x0 = x_max - map_width * pad - length_deg

    segment_deg = length_deg / segments
    artists = []
    for i in range(segments):
        patch = Rectangle(
            (x0 + i * segment_deg, y0),
            segment_deg,
            height_deg,
            facecolor="black" if i % 2 == 0 else "white",
            edgecolor="black",
            linewidth=0.8,
            zorder=zorder,
        )
        ax.add_patch(patch)
        artists.append(patch)

    text_gap = map_width * 0.01
    if location[1] == "l":
        text_x, ha = x0 + length_deg + text_gap, "left"
    else:
        text_x, ha = x0 - text_gap, "right"

    label = ax.text(
        text_x,
        bar_lat,
        format_distance(length_km),
        ha=ha,
        va="center",
        fontsize=SCALE_TEXT_BASE_SIZE * text_cex,
        color="black",
        zorder=zorder,
    )
    artists.append(label)

    logger.debug(
        f"Added {format_distance(length_km)} scale bar at {location} "
        f"({segments} segments, map width {map_width_km:.1f} km)"
    )
    return artists
