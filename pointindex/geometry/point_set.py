"""
Brute-Force Point Set (Correctness Oracle)

PointSet keeps its points in a sorted list (x first, then y) and answers
every query by scanning all of them. It is deliberately simple: the
KD-tree is checked against it in tests, in the CLI harness and in the
benchmarks.

Complexity Analysis:
- insert: O(n) (list insertion keeps the order)
- contains: O(log n) binary search
- nearest: O(n) vectorized scan
- range: O(n) scan
"""

from bisect import bisect_left
from typing import Iterable, Iterator, List, Optional
import numpy as np

from .errors import EmptyStructureError
from .point import Point, require_point
from .rectangle import Rectangle, require_rectangle


class PointSet:
    """
    Ordered set of unique points with linear-scan queries.

    Example:
        >>> s = PointSet([Point(0.2, 0.3), Point(0.9, 0.1)])
        >>> s.nearest(Point(1.0, 0.0))
        Point(x=0.9, y=0.1)
    """

    def __init__(self, points: Optional[Iterable[Point]] = None):
        self._points: List[Point] = []
        # Coordinate array mirror of _points, rebuilt lazily after inserts
        self._array: Optional[np.ndarray] = None
        if points is not None:
            for p in points:
                self.insert(p)

    def insert(self, p: Point) -> bool:
        """
        Add p unless a coordinate-equal point is already present.

        Returns:
            True if the point was added
        """
        require_point(p)
        i = bisect_left(self._points, p)
        if i < len(self._points) and self._points[i] == p:
            return False
        self._points.insert(i, p)
        self._array = None
        return True

    def contains(self, p: Point) -> bool:
        require_point(p)
        i = bisect_left(self._points, p)
        return i < len(self._points) and self._points[i] == p

    def size(self) -> int:
        return len(self._points)

    def is_empty(self) -> bool:
        return not self._points

    def nearest(self, q: Point) -> Point:
        """
        Find the stored point closest to q.

        All squared distances are computed at once; among equidistant
        points the first in sorted order wins (np.argmin returns the
        first minimum).

        Raises:
            TypeError: If q is not a Point
            EmptyStructureError: If the set is empty
        """
        require_point(q)
        if not self._points:
            raise EmptyStructureError("Cannot query empty point set")

        coords = self.to_array()
        distances = np.sum((coords - q.as_array()) ** 2, axis=1)
        return self._points[int(np.argmin(distances))]

    def range(self, rect: Rectangle) -> List[Point]:
        """All points inside rect (edges included), in sorted order."""
        require_rectangle(rect)
        return [p for p in self._points if rect.contains(p)]

    def to_array(self) -> np.ndarray:
        """Return stored points as an (n, 2) float64 array in sorted order."""
        if self._array is None:
            self._array = np.array(
                [[p.x, p.y] for p in self._points], dtype=np.float64
            ).reshape(-1, 2)
        return self._array

    def __len__(self) -> int:
        return len(self._points)

    def __contains__(self, p: object) -> bool:
        return isinstance(p, Point) and self.contains(p)

    def __iter__(self) -> Iterator[Point]:
        return iter(list(self._points))

    def __repr__(self) -> str:
        return f"PointSet(size={len(self._points)})"
