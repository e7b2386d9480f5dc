"""
insetmap: Inset Maps of Study Site Locations

insetmap renders zoomed-in inset maps for study-site figures: a land
polygon, a coastline outline, site markers styled by categorical attributes,
a fill legend and a scale bar, cropped to an exact longitude/latitude window.
All inputs are taken as prepared GeoPandas objects, so the same function
serves any region with shapefiles and any set of site coordinates.

Core functionality includes:
- Inset map rendering with fixed layer order and exact cropping
- Legend ordering with shape/colour-consistent swatches
- Metric scale bars in any panel corner
- Configurable map styles (YAML/JSON files, environment overrides)
- Default colour and shape palettes for categorical attributes

Author: Steph Smith (steph.smith@unc.edu)
Institution: University of North Carolina, Institute of Marine Sciences
"""

__version__ = "0.1.0"
__author__ = "Steph Smith"
__email__ = "steph.smith@unc.edu"

# Import main modules for easy access
from . import config
from . import legend
from . import mapping
from . import markers
from . import palettes
from . import scalebar
from . import selectors
from . import theme
from . import utils

from .config import InsetMapConfig, MapStyle, resolve_config
from .mapping import plot_inset_map, render_inset_map
from .selectors import AttributeSelector, InsetMapError, UnmappedCategoryError

__all__ = [
    "config",
    "legend",
    "mapping",
    "markers",
    "palettes",
    "scalebar",
    "selectors",
    "theme",
    "utils",
    "InsetMapConfig",
    "MapStyle",
    "resolve_config",
    "plot_inset_map",
    "render_inset_map",
    "AttributeSelector",
    "InsetMapError",
    "UnmappedCategoryError",
]
