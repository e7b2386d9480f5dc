"""
Configuration Management for insetmap

Two frozen dataclasses describe a map:

- MapStyle: the visual constants of the inset map (land colour, coastline
  width, marker outline, text size, figure size, scale-bar width hint)
- InsetMapConfig: one fully-resolved call configuration (crop window,
  attribute selectors, styling mappings, legend order and title, scale-bar
  placement, point and border display parameters, style)

``resolve_config`` is the single place where defaults are filled in. Rendering
only ever sees a complete ``InsetMapConfig``.

Styles can also be loaded from YAML/JSON files or from environment
variables prefixed with ``INSETMAP_STYLE_``.

Example Usage:
    >>> from insetmap.config import resolve_config, load_style_from_file
    >>> config = resolve_config(
    ...     long_range=(-10, 10), lat_range=(30, 50),
    ...     shape_col="site_type", shape_vals={"A": 16, "B": 17},
    ...     fill_col="site_name", fill_vals={"X": "red", "Y": "blue", "Z": "green"},
    ...     fill_name="Site",
    ... )
    >>> config.fill_breaks
    ('X', 'Y', 'Z')
    >>> style = load_style_from_file("map_style.yaml")
    >>> config = config.update(style=style, point_size=4)

Author: Steph Smith (steph.smith@unc.edu)
"""

from dataclasses import dataclass, field, asdict, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union
import os
import json
import logging

from .selectors import AttributeSelector, as_selector

logger = logging.getLogger(__name__)

# Try to import YAML support
try:
    import yaml
    YAML_AVAILABLE = True
except ImportError:
    YAML_AVAILABLE = False
    logger.debug("PyYAML not available; YAML style files not supported")


SCALE_BAR_LOCATIONS = ("tl", "tr", "bl", "br")


# ============================================================================
# Map Style
# ============================================================================

@dataclass(frozen=True)
class MapStyle:
    """
    Visual constants for inset maps.

    Sizes are in millimetres and line widths in ggplot linewidth units; see
    ``insetmap.theme`` for the conversion to matplotlib points.

    Attributes
    ----------
    land_color : str
        Fill colour of the land polygon layer (default: "#D9D9D9", grey85)

    coastline_color : str
        Colour of the coastline layer (default: "black")

    coastline_linewidth : float
        Width of the coastline layer (default: 0.2)

    point_edgecolor : str
        Outline colour of site markers (default: "black")

    point_stroke : float
        Outline stroke of site markers (default: 0.9)

    legend_marker_size : float
        Marker size of legend swatches (default: 6)

    base_font_size : float
        Text size for legend title and labels, in points (default: 24)

    background_color : str
        Panel background colour (default: "white")

    border_color : str
        Colour of the border drawn around the panel (default: "black")

    figsize : tuple
        Figure size in inches when a new figure is created (default: (10, 8))

    scale_bar_width_hint : float
        Upper bound of the scale bar length as a fraction of the map width
        (default: 0.25)
    """
    land_color: str = "#D9D9D9"
    coastline_color: str = "black"
    coastline_linewidth: float = 0.2
    point_edgecolor: str = "black"
    point_stroke: float = 0.9
    legend_marker_size: float = 6.0
    base_font_size: float = 24.0
    background_color: str = "white"
    border_color: str = "black"
    figsize: Tuple[float, float] = (10.0, 8.0)
    scale_bar_width_hint: float = 0.25

    def __post_init__(self):
        """Validate style parameters."""
        if isinstance(self.figsize, list):
            object.__setattr__(self, 'figsize', tuple(self.figsize))
        if len(self.figsize) != 2 or min(self.figsize) <= 0:
            raise ValueError("figsize must be two positive numbers")
        if self.coastline_linewidth < 0:
            raise ValueError("coastline_linewidth must be non-negative")
        if self.point_stroke < 0:
            raise ValueError("point_stroke must be non-negative")
        if self.legend_marker_size <= 0:
            raise ValueError("legend_marker_size must be positive")
        if self.base_font_size <= 0:
            raise ValueError("base_font_size must be positive")
        if not 0 < self.scale_bar_width_hint <= 1:
            raise ValueError("scale_bar_width_hint must be in (0, 1]")

    def to_dict(self) -> Dict[str, Any]:
        """Convert style to a plain dictionary."""
        return asdict(self)


# ============================================================================
# Resolved Call Configuration
# ============================================================================

@dataclass(frozen=True)
class InsetMapConfig:
    """
    Fully-resolved configuration of one inset map.

    Built by ``resolve_config``; every field is populated.

    Attributes
    ----------
    long_range, lat_range : Tuple[float, float]
        Crop window in degrees (min, max)
    shape_col : AttributeSelector
        Attribute that drives marker shape
    shape_vals : Dict
        Shape category -> shape (R code, ggplot name or matplotlib marker)
    fill_col : AttributeSelector
        Attribute that drives marker fill
    fill_vals : Dict
        Fill category -> colour
    fill_breaks : Tuple
        Fill categories shown in the legend, in display order
    fill_name : str
        Legend title
    scale_bar_loc : str
        Scale bar corner: "tl", "tr", "bl" or "br"
    scale_text_cex : float
        Scale bar text size multiplier
    point_size : float
        Site marker size (mm)
    point_alpha : float
        Site marker opacity
    border_linewidth : float
        Panel border width
    style : MapStyle
        Visual constants
    """
    long_range: Tuple[float, float]
    lat_range: Tuple[float, float]
    shape_col: AttributeSelector
    shape_vals: Dict[Any, Any]
    fill_col: AttributeSelector
    fill_vals: Dict[Any, Any]
    fill_breaks: Tuple[Any, ...]
    fill_name: str
    scale_bar_loc: str = "tl"
    scale_text_cex: float = 1.5
    point_size: float = 5.0
    point_alpha: float = 0.6
    border_linewidth: float = 2.0
    style: MapStyle = field(default_factory=MapStyle)

    def update(self, **kwargs) -> 'InsetMapConfig':
        """
        Create a new configuration with updated values.

        Supports nested style updates using double underscore notation:
        config.update(style__land_color="#eeeeee")

        Examples
        --------
        >>> bigger = config.update(point_size=8, style__legend_marker_size=8)
        """
        top_level = {}
        style_updates = {}

        for key, value in kwargs.items():
            if '__' in key:
                component, param = key.split('__', 1)
                if component != "style":
                    raise ValueError(f"Unknown nested configuration component: {component}")
                style_updates[param] = value
            else:
                top_level[key] = value

        if style_updates:
            top_level["style"] = replace(top_level.get("style", self.style), **style_updates)

        return replace(self, **top_level)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert configuration to dictionary.

        Selectors are reported by their key (column name or callable).
        """
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, AttributeSelector):
                value = value.key
            elif isinstance(value, MapStyle):
                value = value.to_dict()
            result[f.name] = value
        return result


def resolve_config(
    long_range: Sequence[float],
    lat_range: Sequence[float],
    shape_col: Union[str, Any],
    shape_vals: Mapping[Any, Any],
    fill_col: Union[str, Any],
    fill_vals: Mapping[Any, Any],
    fill_breaks: Optional[Sequence[Any]] = None,
    fill_name: Optional[str] = None,
    scale_bar_loc: str = "tl",
    scale_text_cex: float = 1.5,
    point_size: float = 5.0,
    point_alpha: float = 0.6,
    border_linewidth: float = 2.0,
    style: Optional[MapStyle] = None,
) -> InsetMapConfig:
    """
    Resolve call arguments and their defaults into an ``InsetMapConfig``.

    Parameters
    ----------
    long_range, lat_range : sequence of two numbers
        Crop window (min, max)
    shape_col, fill_col : str, callable or AttributeSelector
        Attributes driving marker shape and fill
    shape_vals, fill_vals : Mapping
        Category -> shape / colour
    fill_breaks : sequence, optional
        Legend order; defaults to the key order of ``fill_vals``
    fill_name : str, optional
        Legend title; defaults to the fill attribute's label
    scale_bar_loc : str, optional
        "tl", "tr", "bl" or "br" (default: "tl")
    scale_text_cex : float, optional
        Scale bar text size multiplier (default: 1.5)
    point_size : float, optional
        Site marker size (default: 5)
    point_alpha : float, optional
        Site marker opacity (default: 0.6)
    border_linewidth : float, optional
        Panel border width (default: 2)
    style : MapStyle, optional
        Visual constants; defaults to ``MapStyle()``

    Returns
    -------
    InsetMapConfig

    Raises
    ------
    ValueError
        If ``scale_bar_loc`` is not one of the four corners

    Notes
    -----
    Ranges, geometries and mapping completeness are not checked here.
    """
    if scale_bar_loc not in SCALE_BAR_LOCATIONS:
        raise ValueError(
            f"scale_bar_loc must be one of {list(SCALE_BAR_LOCATIONS)}, got {scale_bar_loc!r}"
        )

    shape_selector = as_selector(shape_col)
    fill_selector = as_selector(fill_col)

    fill_vals = dict(fill_vals)
    if fill_breaks is None:
        fill_breaks = list(fill_vals)
        logger.debug(f"Legend order defaulted to fill_vals key order: {fill_breaks}")
    if fill_name is None:
        fill_name = fill_selector.label

    config = InsetMapConfig(
        long_range=tuple(float(v) for v in long_range),
        lat_range=tuple(float(v) for v in lat_range),
        shape_col=shape_selector,
        shape_vals=dict(shape_vals),
        fill_col=fill_selector,
        fill_vals=fill_vals,
        fill_breaks=tuple(fill_breaks),
        fill_name=fill_name,
        scale_bar_loc=scale_bar_loc,
        scale_text_cex=scale_text_cex,
        point_size=point_size,
        point_alpha=point_alpha,
        border_linewidth=border_linewidth,
        style=style if style is not None else MapStyle(),
    )
    logger.debug(
        f"Resolved inset map config: window lon={config.long_range} lat={config.lat_range}, "
        f"{len(config.fill_breaks)} legend entries"
    )
    return config


# ============================================================================
# Helper Functions
# ============================================================================

def get_default_style() -> MapStyle:
    """
    Get default map style.

    Examples
    --------
    >>> get_default_style().land_color
    '#D9D9D9'
    """
    return MapStyle()


def load_style_from_file(style_path: Union[str, Path]) -> MapStyle:
    """
    Load a map style from YAML or JSON file.

    Automatically detects file format based on extension.

    Parameters
    ----------
    style_path : Union[str, Path]
        Path to style file (.yaml, .yml, or .json)

    Returns
    -------
    MapStyle
        Loaded style; fields missing from the file keep their defaults

    Raises
    ------
    FileNotFoundError
        If the style file doesn't exist
    ValueError
        If file format is not supported
    ImportError
        If a YAML file is given and PyYAML is not installed
    """
    path = Path(style_path)

    if not path.exists():
        raise FileNotFoundError(f"Style file not found: {path}")

    suffix = path.suffix.lower()

    if suffix in ['.yaml', '.yml']:
        if not YAML_AVAILABLE:
            raise ImportError("PyYAML is required to load YAML style files")
        with open(path, 'r') as f:
            style_dict = yaml.safe_load(f) or {}
    elif suffix == '.json':
        with open(path, 'r') as f:
            style_dict = json.load(f)
    else:
        raise ValueError(f"Unsupported style file format: {suffix}")

    logger.info(f"Loaded map style from {path}")
    return MapStyle(**style_dict)


def save_style(style: MapStyle, output_path: Union[str, Path]) -> None:
    """
    Save a map style to a YAML or JSON file, chosen by extension.

    Raises
    ------
    ValueError
        If file format is not supported
    ImportError
        If a YAML file is requested and PyYAML is not installed
    """
    path = Path(output_path)
    suffix = path.suffix.lower()
    style_dict = style.to_dict()
    style_dict['figsize'] = list(style_dict['figsize'])

    if suffix in ['.yaml', '.yml']:
        if not YAML_AVAILABLE:
            raise ImportError("PyYAML is required to save YAML style files")
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            yaml.dump(style_dict, f, default_flow_style=False, sort_keys=False)
    elif suffix == '.json':
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(style_dict, f, indent=2)
    else:
        raise ValueError(f"Unsupported style file format: {suffix}")

    logger.info(f"Map style saved to {path}")


def load_style_from_env(prefix: str = "INSETMAP_STYLE_") -> Dict[str, Any]:
    """
    Load style overrides from environment variables.

    INSETMAP_STYLE_LAND_COLOR=#eeeeee
    INSETMAP_STYLE_BASE_FONT_SIZE=18

    Variables that don't name a MapStyle field are ignored.

    Returns
    -------
    Dict[str, Any]
        Style overrides, suitable for ``dataclasses.replace`` or
        ``InsetMapConfig.update(style__...)``

    Examples
    --------
    >>> style = replace(get_default_style(), **load_style_from_env())
    """
    known = {f.name for f in fields(MapStyle)}
    overrides = {}

    for key, value in os.environ.items():
        if key.startswith(prefix):
            style_key = key[len(prefix):].lower()
            if style_key not in known:
                logger.debug(f"Ignoring unknown style variable {key}")
                continue
            overrides[style_key] = _parse_env_value(value)

    if overrides:
        logger.debug(f"Loaded {len(overrides)} style overrides from environment")

    return overrides


def _parse_env_value(value: str) -> Any:
    """Parse environment variable value to appropriate type."""
    # Sequence (figsize)
    if ',' in value:
        return tuple(_parse_env_value(part.strip()) for part in value.split(','))

    try:
        return int(value)
    except ValueError:
        pass

    try:
        return float(value)
    except ValueError:
        pass

    return value
