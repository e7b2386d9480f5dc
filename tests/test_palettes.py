"""
Unit tests for palettes.py module.
"""

import unittest

import matplotlib.colors as mcolors

from insetmap.markers import to_marker
from insetmap.palettes import (
    DEFAULT_SHAPE_CYCLE,
    get_category_colors,
    make_fill_values,
    make_shape_values,
)


class TestCategoryColors(unittest.TestCase):
    """Test palette generation."""

    def test_requested_count(self):
        for n in (1, 3, 10, 25):
            colors = get_category_colors(n)
            self.assertEqual(len(colors), n)
            self.assertTrue(all(mcolors.is_color_like(c) for c in colors))

    def test_zero_or_negative(self):
        self.assertEqual(get_category_colors(0), [])
        self.assertEqual(get_category_colors(-2), [])

    def test_palette_repeats_when_exhausted(self):
        colors = get_category_colors(20)
        self.assertEqual(colors[0], colors[10])

    def test_distinct_within_palette(self):
        colors = get_category_colors(8)
        self.assertEqual(len(set(colors)), 8)


class TestMakeMappings(unittest.TestCase):
    """Test building fill and shape mappings from categories."""

    def test_fill_values_first_seen_order(self):
        fill_vals = make_fill_values(["Z", "X", "Z", "Y"])
        self.assertEqual(list(fill_vals), ["Z", "X", "Y"])
        self.assertEqual(list(fill_vals.values()), get_category_colors(3))

    def test_shape_values_cycle(self):
        categories = [f"type_{i}" for i in range(len(DEFAULT_SHAPE_CYCLE) + 1)]
        shape_vals = make_shape_values(categories)
        self.assertEqual(shape_vals["type_0"], DEFAULT_SHAPE_CYCLE[0])
        self.assertEqual(shape_vals[categories[-1]], DEFAULT_SHAPE_CYCLE[0])
        for shape in shape_vals.values():
            to_marker(shape)

    def test_custom_shapes(self):
        self.assertEqual(make_shape_values(["A", "B"], shapes=["h", "p"]), {"A": "h", "B": "p"})


if __name__ == "__main__":
    unittest.main()
