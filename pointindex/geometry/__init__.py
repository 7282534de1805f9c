"""
Geometry Module for 2D Point Search

This module provides the point index structures and their geometry:
- Point and Rectangle value types
- PointSet: brute-force oracle with linear-scan queries
- KdTree: 2-d tree with pruned range and nearest-neighbor search

Both structures share one contract (insert, contains, size, is_empty,
nearest, range) so results can be compared directly.
"""

from .errors import EmptyStructureError
from .point import Point
from .rectangle import PLANE, UNIT_SQUARE, Rectangle
from .point_set import PointSet
from .kd_tree import KdNode, KdTree, validate_kdtree

__all__ = [
    'EmptyStructureError',
    'Point',
    'Rectangle',
    'UNIT_SQUARE',
    'PLANE',
    'PointSet',
    'KdNode',
    'KdTree',
    'validate_kdtree'
]
