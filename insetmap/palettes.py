"""
Default categorical styling.

Builds ``fill_vals`` and ``shape_vals`` mappings for callers that don't
hand-pick colours and shapes. Colours come from a colorblind-friendly
seaborn palette.
"""

from typing import Any, Dict, Iterable, List
import logging

import matplotlib.colors as mcolors
import seaborn as sns

logger = logging.getLogger(__name__)

# Filled R point-shape codes cycled for shape categories
DEFAULT_SHAPE_CYCLE = [21, 24, 22, 23, 25]


def get_category_colors(n_categories: int, palette: str = "colorblind") -> List[str]:
    """
    Generate a palette of hex colours for categories.

    Parameters
    ----------
    n_categories : int
        Number of colours
    palette : str, optional
        Seaborn palette name (default: "colorblind")

    Returns
    -------
    List[str]
        Hex colour codes; the palette repeats once exhausted

    Examples
    --------
    >>> len(get_category_colors(3))
    3
    """
    if n_categories <= 0:
        return []
    base = sns.color_palette(palette).as_hex()
    return [mcolors.to_hex(base[i % len(base)]) for i in range(n_categories)]


def make_fill_values(categories: Iterable[Any], palette: str = "colorblind") -> Dict[Any, str]:
    """
    Map each distinct category (first-seen order) to a palette colour.

    Examples
    --------
    >>> make_fill_values(["X", "Y", "X"])
    {'X': '#0173b2', 'Y': '#de8f05'}
    """
    keys = list(dict.fromkeys(categories))
    colors = get_category_colors(len(keys), palette=palette)
    logger.debug(f"Assigned {palette} palette colours to {len(keys)} categories")
    return dict(zip(keys, colors))


def make_shape_values(categories: Iterable[Any], shapes: List[Any] = None) -> Dict[Any, Any]:
    """
    Map each distinct category (first-seen order) to a marker shape.

    Shapes cycle through ``shapes`` (default: filled circle, triangle,
    square, diamond, downward triangle).
    """
    shapes = shapes or DEFAULT_SHAPE_CYCLE
    keys = list(dict.fromkeys(categories))
    return {key: shapes[i % len(shapes)] for i, key in enumerate(keys)}
