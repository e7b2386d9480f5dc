"""
Unit tests for legend.py module.

Tests fill legend entry construction: ordering, colour lookup, marker
synchronisation with the shape mapping, and drawing.
"""

import unittest
import logging

import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pandas as pd
import pytest

from insetmap.config import MapStyle, resolve_config
from insetmap.legend import LegendEntry, add_fill_legend, build_legend_entries
from insetmap.selectors import UnmappedCategoryError


def make_points():
    """Site attributes only; legend construction never touches geometry."""
    return pd.DataFrame({
        "site_type": ["A", "B", "A"],
        "site_name": ["X", "Y", "Z"],
    })


def make_config(**overrides):
    kwargs = dict(
        long_range=(-10, 10),
        lat_range=(30, 50),
        shape_col="site_type",
        shape_vals={"A": 16, "B": 17},
        fill_col="site_name",
        fill_vals={"X": "red", "Y": "blue", "Z": "green"},
        fill_breaks=["Z", "X", "Y"],
        fill_name="Site",
    )
    kwargs.update(overrides)
    return resolve_config(**kwargs)


class TestBuildLegendEntries(unittest.TestCase):
    """Test legend entry order, colours and markers."""

    def test_entries_follow_legend_order(self):
        entries = build_legend_entries(make_config(), make_points())
        self.assertEqual([e.key for e in entries], ["Z", "X", "Y"])
        self.assertEqual([e.color for e in entries], ["green", "red", "blue"])

    def test_markers_follow_point_shape_category(self):
        entries = build_legend_entries(make_config(), make_points())
        self.assertEqual([e.marker for e in entries], ["o", "o", "^"])

    def test_shape_keyed_by_fill_category(self):
        """Shape mappings keyed by the fill categories themselves are used directly."""
        config = make_config(
            shape_col="site_name",
            shape_vals={"X": 21, "Y": 22, "Z": 24},
        )
        entries = build_legend_entries(config, make_points())
        self.assertEqual([e.marker for e in entries], ["^", "o", "s"])

    def test_omitted_category_has_no_entry(self):
        entries = build_legend_entries(make_config(fill_breaks=["Y"]), make_points())
        self.assertEqual(entries, [LegendEntry(key="Y", label="Y", color="blue", marker="^")])

    def test_category_without_points_uses_default_marker(self):
        config = make_config(
            fill_vals={"X": "red", "Y": "blue", "Z": "green", "W": "black"},
            fill_breaks=["W", "X"],
        )
        entries = build_legend_entries(config, make_points())
        self.assertEqual(entries[0].marker, "o")
        self.assertEqual(entries[0].color, "black")

    def test_break_missing_from_fill_vals(self):
        with self.assertRaises(UnmappedCategoryError) as ctx:
            build_legend_entries(make_config(fill_breaks=["Z", "Q"]), make_points())
        self.assertEqual(ctx.exception.missing, ["Q"])

    def test_shape_category_missing_from_shape_vals(self):
        with pytest.raises(UnmappedCategoryError):
            build_legend_entries(make_config(shape_vals={"A": 16}), make_points())

    def test_labels_are_strings(self):
        points = pd.DataFrame({"site_type": ["A", "A"], "site_name": [1, 2]})
        config = make_config(fill_vals={1: "red", 2: "blue"}, fill_breaks=None)
        entries = build_legend_entries(config, points)
        self.assertEqual([e.label for e in entries], ["1", "2"])

    def test_mixed_shapes_logs_warning(self):
        points = pd.DataFrame({"site_type": ["A", "B"], "site_name": ["X", "X"]})
        config = make_config(fill_vals={"X": "red"}, fill_breaks=None)
        with self.assertLogs("insetmap.legend", level=logging.WARNING):
            entries = build_legend_entries(config, points)
        self.assertEqual(entries[0].marker, "o")


class TestAddFillLegend(unittest.TestCase):
    """Test legend drawing."""

    def setUp(self):
        self.fig, self.ax = plt.subplots()

    def tearDown(self):
        plt.close(self.fig)

    def test_draws_entries_with_title(self):
        entries = [
            LegendEntry(key="Z", label="Z", color="green", marker="o"),
            LegendEntry(key="Y", label="Y", color="blue", marker="^"),
        ]
        legend = add_fill_legend(self.ax, entries, "Site", MapStyle(), alpha=0.6)
        self.assertIs(self.ax.get_legend(), legend)
        self.assertEqual([t.get_text() for t in legend.get_texts()], ["Z", "Y"])
        self.assertEqual(legend.get_title().get_text(), "Site")
        self.assertEqual(legend.get_title().get_fontsize(), 24.0)

    def test_empty_entries_draw_nothing(self):
        self.assertIsNone(add_fill_legend(self.ax, [], "Site", MapStyle()))
        self.assertIsNone(self.ax.get_legend())


if __name__ == "__main__":
    unittest.main()
