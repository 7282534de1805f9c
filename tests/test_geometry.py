"""
Tests for Point and Rectangle

Run with: pytest tests/test_geometry.py -v
"""

import dataclasses
import math

import pytest
import numpy as np

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pointindex.geometry.point import Point
from pointindex.geometry.rectangle import PLANE, UNIT_SQUARE, Rectangle


class TestPoint:
    """Tests for the Point value type."""

    def test_coordinates_coerced_to_float(self):
        p = Point(1, 0)
        assert isinstance(p.x, float)
        assert isinstance(p.y, float)
        assert p == Point(1.0, 0.0)

    def test_numpy_scalars_accepted(self):
        p = Point(np.float32(0.5), np.int64(1))
        assert p == Point(0.5, 1.0)
        assert type(p.x) is float

    @pytest.mark.parametrize("x,y", [(math.nan, 0.0), (0.0, math.inf), (-math.inf, 1.0)])
    def test_non_finite_rejected(self, x, y):
        with pytest.raises(ValueError):
            Point(x, y)

    def test_immutable(self):
        p = Point(0.1, 0.2)
        with pytest.raises(dataclasses.FrozenInstanceError):
            p.x = 0.3

    def test_order_by_x_then_y(self):
        a = Point(0.2, 0.9)
        b = Point(0.3, 0.1)
        c = Point(0.3, 0.4)
        assert a < b < c
        assert sorted([c, a, b]) == [a, b, c]

    def test_equality_and_hash(self):
        assert Point(0.25, 0.75) == Point(0.25, 0.75)
        assert len({Point(0.25, 0.75), Point(0.25, 0.75), Point(0.75, 0.25)}) == 2

    def test_distance(self):
        a = Point(0.0, 0.0)
        b = Point(3.0, 4.0)
        assert a.distance_squared_to(b) == 25.0
        assert a.distance_to(b) == 5.0
        assert b.distance_to(a) == 5.0
        assert a.distance_to(a) == 0.0

    def test_coord(self):
        p = Point(0.1, 0.9)
        assert p.coord(0) == 0.1
        assert p.coord(1) == 0.9

    def test_array_conversion(self):
        p = Point(0.25, 0.5)
        arr = p.as_array()
        assert arr.dtype == np.float64
        assert np.array_equal(arr, [0.25, 0.5])
        assert Point.from_array(arr) == p
        assert Point.from_array([0.1, 0.2]) == Point(0.1, 0.2)

    def test_from_array_wrong_shape(self):
        with pytest.raises(ValueError):
            Point.from_array([0.1, 0.2, 0.3])

    def test_str(self):
        assert str(Point(0.5, 0.25)) == "(0.5, 0.25)"


class TestRectangle:
    """Tests for the Rectangle predicates used by the tree."""

    def test_inverted_bounds_rejected(self):
        with pytest.raises(ValueError):
            Rectangle(1.0, 0.0, 0.0, 1.0)
        with pytest.raises(ValueError):
            Rectangle(0.0, 1.0, 1.0, 0.0)

    def test_nan_rejected(self):
        with pytest.raises(ValueError):
            Rectangle(0.0, math.nan, 1.0, 1.0)

    def test_degenerate_allowed(self):
        r = Rectangle(0.5, 0.5, 0.5, 0.5)
        assert r.width == 0.0
        assert r.height == 0.0
        assert r.contains(Point(0.5, 0.5))

    def test_dimensions(self):
        r = Rectangle(0.25, 0.0, 0.75, 0.5)
        assert r.width == 0.5
        assert r.height == 0.5
        assert r.is_finite
        assert not PLANE.is_finite

    def test_contains_inclusive(self):
        assert UNIT_SQUARE.contains(Point(0.0, 0.0))
        assert UNIT_SQUARE.contains(Point(1.0, 1.0))
        assert UNIT_SQUARE.contains(Point(0.5, 1.0))
        assert not UNIT_SQUARE.contains(Point(1.0000001, 0.5))
        assert not UNIT_SQUARE.contains(Point(0.5, -0.1))

    def test_contains_none_raises(self):
        with pytest.raises(TypeError):
            UNIT_SQUARE.contains(None)

    def test_intersects(self):
        a = Rectangle(0.0, 0.0, 0.5, 0.5)
        assert a.intersects(Rectangle(0.25, 0.25, 0.75, 0.75))
        assert a.intersects(Rectangle(0.1, 0.1, 0.2, 0.2))
        assert Rectangle(0.1, 0.1, 0.2, 0.2).intersects(a)
        assert not a.intersects(Rectangle(0.6, 0.0, 1.0, 0.5))
        assert not a.intersects(Rectangle(0.0, 0.6, 0.5, 1.0))

    def test_touching_rectangles_intersect(self):
        a = Rectangle(0.0, 0.0, 0.5, 0.5)
        assert a.intersects(Rectangle(0.5, 0.0, 1.0, 0.5))
        assert a.intersects(Rectangle(0.5, 0.5, 1.0, 1.0))
        assert a.intersects(Rectangle(0.5, 0.2, 0.5, 0.3))

    def test_intersects_none_raises(self):
        with pytest.raises(TypeError):
            UNIT_SQUARE.intersects(None)

    def test_distance_inside_is_zero(self):
        assert UNIT_SQUARE.distance_squared_to(Point(0.3, 0.7)) == 0.0
        assert UNIT_SQUARE.distance_squared_to(Point(1.0, 0.0)) == 0.0

    def test_distance_outside(self):
        assert UNIT_SQUARE.distance_squared_to(Point(2.0, 2.0)) == 2.0
        assert UNIT_SQUARE.distance_squared_to(Point(0.5, 3.0)) == 4.0
        assert UNIT_SQUARE.distance_squared_to(Point(-3.0, 0.5)) == 9.0
        assert UNIT_SQUARE.distance_to(Point(4.0, 5.0)) == 5.0

    def test_distance_to_plane_is_zero(self):
        assert PLANE.distance_squared_to(Point(1e6, -1e6)) == 0.0

    def test_split_vertical(self):
        low, high = UNIT_SQUARE.split(0, 0.25)
        assert low == Rectangle(0.0, 0.0, 0.25, 1.0)
        assert high == Rectangle(0.25, 0.0, 1.0, 1.0)

    def test_split_horizontal(self):
        low, high = Rectangle(0.5, 0.0, 1.0, 1.0).split(1, 0.75)
        assert low == Rectangle(0.5, 0.0, 1.0, 0.75)
        assert high == Rectangle(0.5, 0.75, 1.0, 1.0)

    def test_split_unbounded(self):
        low, high = PLANE.split(0, 3.0)
        assert low.xmax == 3.0 and low.xmin == -math.inf
        assert high.xmin == 3.0 and high.xmax == math.inf
