"""
Tests for 2-d tree plotting (skipped when matplotlib is not installed).
"""

import numpy as np
import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pointindex.geometry.kd_tree import KdTree
from pointindex.geometry.point import Point
from pointindex.geometry.rectangle import PLANE, Rectangle, UNIT_SQUARE
from pointindex.geometry.visualize import plot_extent, plot_kdtree


@pytest.fixture
def plt():
    matplotlib = pytest.importorskip("matplotlib")
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    yield plt
    plt.close("all")


def test_plot_draws_one_segment_per_node(plt, tmp_path):
    tree = KdTree([Point(0.5, 0.5), Point(0.25, 0.75), Point(0.75, 0.2)])
    save_path = tmp_path / "tree.png"

    ax = plot_kdtree(tree, save_path=str(save_path))

    assert len(ax.lines) == 3
    assert save_path.exists()


def test_plot_empty_tree(plt):
    ax = plot_kdtree(KdTree())
    assert len(ax.lines) == 0


def test_plot_unbounded_tree_covers_points(plt):
    tree = KdTree([Point(0.5, 0.5), Point(4.0, -2.0), Point(-1.0, 3.0)])

    ax = plot_kdtree(tree)

    assert len(ax.lines) == 3
    xmin, xmax = ax.get_xlim()
    ymin, ymax = ax.get_ylim()
    assert xmin < -1.0 and xmax > 4.0
    assert ymin < -2.0 and ymax > 3.0
    for line in ax.lines:
        assert np.all(np.isfinite(line.get_xdata()))
        assert np.all(np.isfinite(line.get_ydata()))


def test_extent_of_points_in_unit_square_is_unit_square():
    tree = KdTree([Point(0.1, 0.9), Point(0.8, 0.3)])
    assert tree.bounds == PLANE
    assert plot_extent(tree) == UNIT_SQUARE


def test_extent_of_finite_bounds_is_bounds():
    bounds = Rectangle(-2.0, -2.0, 2.0, 2.0)
    assert plot_extent(KdTree([Point(1.0, 1.0)], bounds=bounds)) == bounds
