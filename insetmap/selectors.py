"""
Attribute Selection and Category Lookup

Point attributes that drive marker styling are referenced through an
``AttributeSelector``: either a column name, or a callable that receives the
point frame and returns one value per row. Callers keep the convenience of
passing a column name as data while the renderer never has to resolve names
dynamically.

The module also holds the lookup used to translate category values into
styling values (fill colours, shapes). Lookups are strict: a category with no
entry in its mapping raises ``UnmappedCategoryError``.

Example Usage:
    >>> from insetmap.selectors import AttributeSelector, map_categories
    >>> by_site = AttributeSelector("site_name")
    >>> colors = map_categories(by_site.resolve(points), {"X": "red"}, "fill_vals")

Author: Steph Smith (steph.smith@unc.edu)
"""

from typing import Any, Callable, Iterable, List, Mapping, Union
import logging

import pandas as pd

logger = logging.getLogger(__name__)


class InsetMapError(Exception):
    """Base exception for insetmap errors."""
    pass


class UnmappedCategoryError(InsetMapError, KeyError):
    """Raised when category values have no entry in a styling mapping."""

    def __init__(self, mapping_name: str, missing: List[Any]):
        self.mapping_name = mapping_name
        self.missing = list(missing)
        super().__init__(
            f"{len(self.missing)} categor{'y' if len(self.missing) == 1 else 'ies'} "
            f"not found in {mapping_name}: {self.missing}"
        )

    def __str__(self) -> str:
        return self.args[0]


class AttributeSelector:
    """
    Reference to a per-point attribute.

    Parameters
    ----------
    key : str or callable
        Column name in the point frame, or a callable taking the frame and
        returning a sequence with one value per row
    label : str, optional
        Display label; defaults to the column name, or the callable's
        ``__name__``
    """

    def __init__(self, key: Union[str, Callable[[pd.DataFrame], Any]], label: str = None):
        if not isinstance(key, str) and not callable(key):
            raise TypeError(
                f"Attribute selector must be a column name or a callable, got {type(key).__name__}"
            )
        self.key = key
        if label is None:
            label = key if isinstance(key, str) else getattr(key, "__name__", "value")
        self.label = label

    def resolve(self, frame: pd.DataFrame) -> pd.Series:
        """Return the selected attribute as a Series aligned with ``frame``."""
        if isinstance(self.key, str):
            return frame[self.key]
        values = self.key(frame)
        if isinstance(values, pd.Series):
            return values
        return pd.Series(list(values), index=frame.index, name=self.label)

    def __eq__(self, other):
        if not isinstance(other, AttributeSelector):
            return NotImplemented
        return self.key == other.key and self.label == other.label

    def __hash__(self):
        return hash((self.key, self.label))

    def __repr__(self):
        return f"AttributeSelector({self.key!r}, label={self.label!r})"


def as_selector(value: Union[str, Callable, AttributeSelector]) -> AttributeSelector:
    """Wrap a column name or callable in an ``AttributeSelector``."""
    if isinstance(value, AttributeSelector):
        return value
    return AttributeSelector(value)


def find_unmapped(values: Iterable[Any], mapping: Mapping[Any, Any]) -> List[Any]:
    """Return distinct values (first-seen order) that have no key in ``mapping``."""
    missing = []
    for value in values:
        if value not in mapping and value not in missing:
            missing.append(value)
    return missing


def map_categories(values: pd.Series, mapping: Mapping[Any, Any], mapping_name: str) -> pd.Series:
    """
    Translate category values through a styling mapping.

    Parameters
    ----------
    values : pd.Series
        Category value per point
    mapping : Mapping
        Category value -> styling value
    mapping_name : str
        Name used in the error message (e.g. "fill_vals")

    Returns
    -------
    pd.Series
        Styling value per point, same index as ``values``

    Raises
    ------
    UnmappedCategoryError
        If any value is missing from ``mapping``
    """
    missing = find_unmapped(values, mapping)
    if missing:
        raise UnmappedCategoryError(mapping_name, missing)
    return pd.Series([mapping[v] for v in values], index=values.index, dtype=object)
