"""
Marker shape translation.

Shape mappings may use R/ggplot point-shape codes (0-25), ggplot shape names
("circle filled", "triangle", ...) or matplotlib marker specifications. All
three are converted to matplotlib markers here. Face colour always comes from
the fill mapping, so open and filled variants of a shape translate to the
same matplotlib marker.
"""

from numbers import Integral, Real
from typing import Any, Dict

DEFAULT_MARKER = "o"

# R point-shape codes -> matplotlib markers
SHAPE_CODES: Dict[int, Any] = {
    0: "s",
    1: "o",
    2: "^",
    3: "+",
    4: "x",
    5: "D",
    6: "v",
    7: "X",
    8: (8, 2, 0),
    9: "D",
    10: "o",
    11: "*",
    12: "s",
    13: "o",
    14: "s",
    15: "s",
    16: "o",
    17: "^",
    18: "d",
    19: "o",
    20: ".",
    21: "o",
    22: "s",
    23: "D",
    24: "^",
    25: "v",
}

# ggplot2 shape names -> R point-shape codes
SHAPE_NAMES: Dict[str, int] = {
    "square open": 0,
    "circle open": 1,
    "triangle open": 2,
    "plus": 3,
    "cross": 4,
    "diamond open": 5,
    "triangle down open": 6,
    "square cross": 7,
    "asterisk": 8,
    "diamond plus": 9,
    "circle plus": 10,
    "star": 11,
    "square plus": 12,
    "circle cross": 13,
    "square triangle": 14,
    "triangle square": 14,
    "square": 15,
    "circle small": 16,
    "triangle": 17,
    "diamond": 18,
    "circle": 19,
    "bullet": 20,
    "circle filled": 21,
    "square filled": 22,
    "diamond filled": 23,
    "triangle filled": 24,
    "triangle down filled": 25,
}


def to_marker(shape: Any) -> Any:
    """
    Convert a shape value to a matplotlib marker.

    Parameters
    ----------
    shape : int, float, str or matplotlib marker
        R point-shape code (whole-number floats such as 16.0 are accepted),
        ggplot shape name, or a matplotlib marker

    Returns
    -------
    matplotlib marker specification

    Raises
    ------
    ValueError
        If a numeric code is not a whole number in 0-25

    Examples
    --------
    >>> to_marker(17)
    '^'
    >>> to_marker(16.0)
    'o'
    >>> to_marker("diamond filled")
    'D'
    >>> to_marker("h")
    'h'
    """
    if isinstance(shape, Real) and not isinstance(shape, bool):
        if not isinstance(shape, Integral) and not float(shape).is_integer():
            raise ValueError(f"Unknown point shape code: {shape} (expected 0-25)")
        code = int(shape)
        if code not in SHAPE_CODES:
            raise ValueError(f"Unknown point shape code: {code} (expected 0-25)")
        return SHAPE_CODES[code]
    if isinstance(shape, str) and shape.strip().lower() in SHAPE_NAMES:
        return SHAPE_CODES[SHAPE_NAMES[shape.strip().lower()]]
    return shape
