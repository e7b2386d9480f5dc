"""
Inset Map Generation

Renders a zoomed-in inset map of study-site locations: a land polygon layer,
a coastline outline, site markers styled by two categorical attributes, a
fill legend and a scale bar, cropped to an exact longitude/latitude window.

Map Layers (bottom to top):
1. Land polygon, filled grey with no outline
2. Coastline, thin black outline
3. Site markers
   - Shape chosen by the shape attribute through ``shape_vals``
   - Face colour chosen by the fill attribute through ``fill_vals``
   - Black outline, shared size and opacity
4. Scale bar in one corner of the panel

Legend:
- Only the fill legend is shown, ordered by ``fill_breaks``
- Each swatch uses the marker shape of its category

Theme:
- No axis titles, tick labels, ticks or grid
- White panel with a black border

All spatial inputs are expected in longitude/latitude degrees and are used
as given; nothing is loaded, reprojected or validated here. The returned
figure is neither shown nor saved.

Example Usage:
    >>> from insetmap import plot_inset_map
    >>> fig = plot_inset_map(
    ...     long_range=(-71.2, -70.4),
    ...     lat_range=(41.2, 41.8),
    ...     pts_sf=sites_gdf,
    ...     outline_poly=land_gdf,
    ...     outline_arc=coast_gdf,
    ...     shape_col="site_shape",
    ...     shape_vals={"reef": 21, "seagrass": 24},
    ...     fill_col="site_name",
    ...     fill_vals={"North": "#9D7ABE", "Middle": "#5AB4AC", "South": "#F2CC8F"},
    ...     fill_breaks=["South", "Middle", "North"],
    ...     fill_name="Site",
    ...     scale_bar_loc="bl",
    ... )
    >>> fig.savefig("inset_map.png", dpi=300, bbox_inches="tight")

Author: Steph Smith (steph.smith@unc.edu)
"""

from typing import Any, Mapping, Optional, Sequence
import logging

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from .config import InsetMapConfig, MapStyle, resolve_config
from .legend import add_fill_legend, build_legend_entries
from .markers import to_marker
from .scalebar import add_scale_bar
from .selectors import map_categories
from .theme import apply_theme, linewidth_to_points, size_to_scatter_area, stroke_to_points
from .utils import log_function_call

logger = logging.getLogger(__name__)

# Drawing order of map layers
LAND_ZORDER = 1
COASTLINE_ZORDER = 2
POINTS_ZORDER = 3
SCALE_BAR_ZORDER = 4


def plot_inset_map(
    long_range: Sequence[float],
    lat_range: Sequence[float],
    pts_sf,
    outline_poly,
    outline_arc,
    shape_col,
    shape_vals: Mapping[Any, Any],
    fill_col,
    fill_vals: Mapping[Any, Any],
    fill_breaks: Optional[Sequence[Any]] = None,
    fill_name: Optional[str] = None,
    scale_bar_loc: str = "tl",
    scale_text_cex: float = 1.5,
    point_size: float = 5,
    point_alpha: float = 0.6,
    border_linewidth: float = 2,
    style: Optional[MapStyle] = None,
    ax: Optional[Axes] = None,
) -> Figure:
    """
    Plot an inset map of site locations cropped to a lon/lat window.

    Parameters
    ----------
    long_range : sequence of two numbers
        Longitude window (min, max); the map shows exactly this range
    lat_range : sequence of two numbers
        Latitude window (min, max); the map shows exactly this range
    pts_sf : gpd.GeoDataFrame
        Site points with the shape and fill attributes
    outline_poly : gpd.GeoDataFrame or gpd.GeoSeries
        Land polygons, filled as the background layer
    outline_arc : gpd.GeoDataFrame or gpd.GeoSeries
        Coastline, drawn as an outline over the land
    shape_col : str, callable or AttributeSelector
        Attribute that determines marker shape (column name as a string,
        e.g. "site_shape")
    shape_vals : Mapping
        Shape category -> shape (R point code such as 16, ggplot shape name,
        or matplotlib marker)
    fill_col : str, callable or AttributeSelector
        Attribute that determines marker fill colour
    fill_vals : Mapping
        Fill category -> colour
    fill_breaks : sequence, optional
        Order of categories in the legend; defaults to the key order of
        ``fill_vals``. Categories left out are not listed but still drawn.
    fill_name : str, optional
        Legend title, e.g. "Site"; defaults to the fill attribute's label
    scale_bar_loc : str, optional
        Scale bar corner: "tl", "tr", "bl" or "br" (default: "tl")
    scale_text_cex : float, optional
        Scale bar text size multiplier (default: 1.5)
    point_size : float, optional
        Site marker size (default: 5)
    point_alpha : float, optional
        Site marker opacity (default: 0.6)
    border_linewidth : float, optional
        Width of the border around the plot area (default: 2)
    style : MapStyle, optional
        Visual constants (land colour, text size, ...); defaults to MapStyle()
    ax : matplotlib.axes.Axes, optional
        Existing axes to draw into, e.g. an inset axes of a larger figure.
        A new figure is created when omitted.

    Returns
    -------
    matplotlib.figure.Figure
        Figure holding the map; the caller shows, saves and closes it

    Raises
    ------
    UnmappedCategoryError
        If a point or legend category is missing from ``fill_vals``, or a
        point's shape category is missing from ``shape_vals``
    ValueError
        If ``scale_bar_loc`` is not a known corner
    """
    log_function_call(
        "plot_inset_map",
        long_range=long_range,
        lat_range=lat_range,
        scale_bar_loc=scale_bar_loc,
        point_size=point_size,
        point_alpha=point_alpha,
    )
    config = resolve_config(
        long_range=long_range,
        lat_range=lat_range,
        shape_col=shape_col,
        shape_vals=shape_vals,
        fill_col=fill_col,
        fill_vals=fill_vals,
        fill_breaks=fill_breaks,
        fill_name=fill_name,
        scale_bar_loc=scale_bar_loc,
        scale_text_cex=scale_text_cex,
        point_size=point_size,
        point_alpha=point_alpha,
        border_linewidth=border_linewidth,
        style=style,
    )
    return render_inset_map(config, pts_sf, outline_poly, outline_arc, ax=ax)


def render_inset_map(
    config: InsetMapConfig,
    pts_sf,
    outline_poly,
    outline_arc,
    ax: Optional[Axes] = None,
) -> Figure:
    """
    Render an inset map from a resolved configuration.

    Parameters
    ----------
    config : InsetMapConfig
        Output of ``resolve_config``
    pts_sf : gpd.GeoDataFrame
        Site points
    outline_poly, outline_arc : gpd.GeoDataFrame or gpd.GeoSeries
        Land polygons and coastline
    ax : matplotlib.axes.Axes, optional
        Existing axes to draw into

    Returns
    -------
    matplotlib.figure.Figure
    """
    style = config.style

    # All category lookups happen before a figure exists
    fill_colors, shape_groups = _point_styles(config, pts_sf)
    legend_entries = build_legend_entries(config, pts_sf)

    if ax is None:
        fig, ax = plt.subplots(figsize=style.figsize)
    else:
        fig = ax.figure

    _draw_land(ax, outline_poly, style)
    _draw_coastline(ax, outline_arc, style)
    _draw_points(ax, pts_sf, fill_colors, shape_groups, config)
    _crop(ax, config.long_range, config.lat_range)

    add_fill_legend(ax, legend_entries, config.fill_name, style, alpha=config.point_alpha)

    add_scale_bar(
        ax,
        config.long_range,
        config.lat_range,
        location=config.scale_bar_loc,
        text_cex=config.scale_text_cex,
        width_hint=style.scale_bar_width_hint,
        zorder=SCALE_BAR_ZORDER,
    )
    apply_theme(ax, style, config.border_linewidth)

    logger.info(
        f"Rendered inset map: {len(pts_sf)} sites, {len(legend_entries)} legend entries, "
        f"lon {config.long_range}, lat {config.lat_range}"
    )
    return fig


def _point_styles(config: InsetMapConfig, pts_sf):
    """
    Per-point face colours and point indices grouped by marker.

    Returns
    -------
    Tuple[pd.Series, List[Tuple[Any, List[int]]]]
        Fill colour per point, and (marker, positions of points using it)
        pairs in order of first appearance in the data
    """
    fill_colors = map_categories(config.fill_col.resolve(pts_sf), config.fill_vals, "fill_vals")
    shapes = map_categories(config.shape_col.resolve(pts_sf), config.shape_vals, "shape_vals")
    markers = shapes.map(to_marker)

    # Vertex-list markers are unhashable, so group on their repr
    groups = {}
    for position, marker in enumerate(markers):
        groups.setdefault(repr(marker), (marker, []))[1].append(position)
    return fill_colors, list(groups.values())


def _draw_land(ax: Axes, outline_poly, style: MapStyle) -> None:
    outline_poly.plot(
        ax=ax,
        facecolor=style.land_color,
        edgecolor="none",
        linewidth=0,
        zorder=LAND_ZORDER,
    )


def _draw_coastline(ax: Axes, outline_arc, style: MapStyle) -> None:
    outline_arc.plot(
        ax=ax,
        facecolor="none",
        edgecolor=style.coastline_color,
        linewidth=linewidth_to_points(style.coastline_linewidth),
        zorder=COASTLINE_ZORDER,
    )


def _draw_points(ax: Axes, pts_sf, fill_colors: pd.Series, shape_groups: list, config: InsetMapConfig) -> None:
    """Scatter site markers, one call per marker shape."""
    style = config.style
    area = size_to_scatter_area(config.point_size, style.point_stroke)
    edge_width = stroke_to_points(style.point_stroke)

    geometry = pts_sf.geometry
    for marker, positions in shape_groups:
        sub = geometry.iloc[positions]
        ax.scatter(
            sub.x.to_numpy(),
            sub.y.to_numpy(),
            s=area,
            marker=marker,
            c=list(fill_colors.iloc[positions]),
            edgecolors=style.point_edgecolor,
            linewidths=edge_width,
            alpha=config.point_alpha,
            zorder=POINTS_ZORDER,
        )
    logger.debug(f"Drew {len(pts_sf)} sites with {len(shape_groups)} marker shapes")


def _crop(ax: Axes, long_range, lat_range) -> None:
    """Fix the visible window to exactly the given ranges."""
    ax.set_autoscale_on(False)
    ax.margins(0)
    ax.set_xlim(long_range)
    ax.set_ylim(lat_range)

    # degree aspect at the window centre, absorbed by the axes box
    mid_lat = (lat_range[0] + lat_range[1]) / 2.0
    ax.set_aspect(1.0 / np.cos(np.radians(mid_lat)), adjustable="box")
