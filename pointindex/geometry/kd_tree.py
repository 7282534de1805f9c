"""
2-d Tree for Nearest-Neighbor and Range Search

This module provides a 2-d tree built by successive insertion. Each node
stores one point and the rectangle of the plane it is responsible for;
the node splits that rectangle vertically (on x) at even depths and
horizontally (on y) at odd depths.

Key Features:
- Incremental insert with de-duplication by exact coordinates
- Membership test
- Range search with rectangle pruning
- Nearest neighbor and k-nearest neighbors with rectangle pruning
- Validation against the brute-force PointSet

Splitting rule:
    A point whose coordinate on the node's axis is strictly smaller than
    the node's goes to the left/bottom child; everything else, including
    ties on the splitting line, goes to the right/top child. Insert,
    contains and the near/far choice in nearest-neighbor search all use
    this same rule.

Complexity Analysis:
- Insert / contains: O(log n) average, O(n) worst case (sorted input)
- Nearest Neighbor Query: O(log n) average, O(n) worst case
- Range Search: O(√n + k) average where k is result size
- Space: O(n)

All traversals use an explicit stack, so trees degraded by sorted input
(e.g. a grid inserted row by row) do not hit the interpreter's
recursion limit.

Reference:
    Bentley, J. L. (1975). Multidimensional binary search trees used for
    associative searching. Communications of the ACM, 18(9), 509-517.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple, Any
from heapq import heappush, heapreplace
import numpy as np

from .errors import EmptyStructureError
from .point import Point, require_point
from .point_set import PointSet
from .rectangle import PLANE, UNIT_SQUARE, Rectangle, require_rectangle


@dataclass
class KdNode:
    """
    A node in the 2-d tree.

    Attributes:
        point: The point stored at this node
        rect: Region of the plane owned by this subtree
        axis: Splitting axis (0 splits on x, 1 splits on y)
        left: Left/bottom subtree (coordinate smaller than the split value)
        right: Right/top subtree (coordinate equal or larger)
    """
    point: Point
    rect: Rectangle
    axis: int
    left: Optional['KdNode'] = None
    right: Optional['KdNode'] = None

    @property
    def split_value(self) -> float:
        return self.point.coord(self.axis)

    def child_for(self, p: Point) -> Tuple[Optional['KdNode'], Optional['KdNode']]:
        """Return (near, far) children for p under the splitting rule."""
        if p.coord(self.axis) < self.split_value:
            return self.left, self.right
        return self.right, self.left


class KdTree:
    """
    2-d tree over a bounded (or unbounded) region of the plane.

    The tree is never rebalanced: its shape is fixed by insertion order.

    Example:
        >>> tree = KdTree()
        >>> for p in [Point(0.2, 0.3), Point(0.5, 0.5), Point(0.9, 0.1)]:
        ...     tree.insert(p)
        >>> tree.nearest(Point(0.5, 0.49))
        Point(x=0.5, y=0.5)

    Attributes:
        bounds: Rectangle owned by the root (PLANE unless given)
        root: Root node, or None for an empty tree
        n_points: Number of distinct points stored
    """

    def __init__(
        self,
        points: Optional[Iterable[Any]] = None,
        bounds: Optional[Rectangle] = None
    ):
        """
        Create a tree, optionally filled from an iterable of points.

        Args:
            points: Points to insert in order. An (n, 2) array is accepted.
            bounds: Domain of the tree. None (the default) means the whole
                plane, so any finite point is accepted. A Rectangle such as
                UNIT_SQUARE restricts inserts to that region.
        """
        self.bounds = PLANE if bounds is None else require_rectangle(bounds, "bounds")
        self.root: Optional[KdNode] = None
        self.n_points = 0

        if points is not None:
            self.insert_many(points)

    # ---- Mutation ----

    def insert(self, p: Point) -> bool:
        """
        Insert a point.

        Descends from the root comparing x at even depths and y at odd
        depths. The new leaf's rectangle is the parent's rectangle cut
        at the parent's split value, keeping the half that contains p.

        Args:
            p: Point to insert

        Returns:
            True if p was added, False if an equal point was already stored

        Raises:
            TypeError: If p is not a Point
            ValueError: If the tree was built with explicit bounds and p
                lies outside them
        """
        require_point(p)
        if not self.bounds.contains(p):
            raise ValueError(f"Point {p} is outside tree bounds {self.bounds}")

        if self.root is None:
            self.root = KdNode(point=p, rect=self.bounds, axis=0)
            self.n_points = 1
            return True

        node = self.root
        while True:
            if node.point == p:
                return False

            if p.coord(node.axis) < node.split_value:
                if node.left is None:
                    low, _ = node.rect.split(node.axis, node.split_value)
                    node.left = KdNode(point=p, rect=low, axis=1 - node.axis)
                    break
                node = node.left
            else:
                if node.right is None:
                    _, high = node.rect.split(node.axis, node.split_value)
                    node.right = KdNode(point=p, rect=high, axis=1 - node.axis)
                    break
                node = node.right

        self.n_points += 1
        return True

    def insert_many(self, points: Iterable[Any]) -> int:
        """
        Insert points in iteration order.

        Args:
            points: Points, or an (n, 2) numpy array of coordinates

        Returns:
            Number of points actually added (duplicates are skipped)
        """
        if isinstance(points, np.ndarray):
            points = [Point.from_array(row) for row in points.reshape(-1, 2)]
        added = 0
        for p in points:
            if self.insert(p):
                added += 1
        return added

    # ---- Queries ----

    def contains(self, p: Point) -> bool:
        """Check whether a coordinate-equal point is stored."""
        require_point(p)
        node = self.root
        while node is not None:
            if node.point == p:
                return True
            node, _ = node.child_for(p)
        return False

    def size(self) -> int:
        return self.n_points

    def is_empty(self) -> bool:
        return self.n_points == 0

    def range(self, rect: Rectangle) -> List[Point]:
        """
        Find all points inside a rectangle (edges included).

        A subtree is only entered when its rectangle intersects the
        query; every point of a skipped subtree lies outside the query.

        Args:
            rect: Query rectangle

        Returns:
            Matching points in pre-order; empty list for an empty tree

        Complexity:
            Time: O(√n + k) average where k is the number of results
        """
        require_rectangle(rect)
        results: List[Point] = []
        stack = [self.root] if self.root is not None else []

        while stack:
            node = stack.pop()
            if rect.contains(node.point):
                results.append(node.point)
            # Right pushed first so the left subtree is visited first
            for child in (node.right, node.left):
                if child is not None and child.rect.intersects(rect):
                    stack.append(child)

        return results

    def nearest(self, q: Point) -> Point:
        """
        Find the stored point closest to q.

        The algorithm:
        1. If the current node is closer than the best so far, update best
        2. Visit the near child (the side q falls on) first
        3. Visit the far child only if its rectangle is strictly closer
           to q than the best distance found after the near side

        Ties: when several stored points are equally close, the first one
        reached in this near-first order is returned. This order is an
        implementation detail and may differ from PointSet's.

        Args:
            q: Query point (may lie outside the tree bounds)

        Returns:
            The nearest stored point

        Raises:
            TypeError: If q is not a Point
            EmptyStructureError: If the tree is empty

        Complexity:
            Time: O(log n) average, O(n) worst case
        """
        require_point(q)
        if self.root is None:
            raise EmptyStructureError("Cannot query empty tree")

        best = self.root.point
        best_dist = best.distance_squared_to(q)

        # (node, is_far): far children are re-checked when popped, after
        # the near subtree has had the chance to shrink best_dist
        stack: List[Tuple[KdNode, bool]] = [(self.root, False)]
        while stack:
            node, is_far = stack.pop()
            if is_far and node.rect.distance_squared_to(q) >= best_dist:
                continue

            dist = node.point.distance_squared_to(q)
            if dist < best_dist:
                best = node.point
                best_dist = dist

            near_child, far_child = node.child_for(q)
            if far_child is not None:
                stack.append((far_child, True))
            if near_child is not None:
                stack.append((near_child, False))

        return best

    def k_nearest(self, q: Point, k: int) -> List[Point]:
        """
        Find the k stored points closest to q.

        Uses a max-heap to track the k closest points found so far,
        keyed by negative squared distance. A far subtree is skipped once
        the heap is full and the subtree's rectangle is no closer than
        the current k-th best.

        Args:
            q: Query point
            k: Number of neighbors to find

        Returns:
            Up to k points sorted by distance (empty for an empty tree)

        Raises:
            TypeError: If q is not a Point
            ValueError: If k is negative
        """
        require_point(q)
        if k < 0:
            raise ValueError(f"k must be non-negative, got {k}")
        if self.root is None or k == 0:
            return []

        k = min(k, self.n_points)
        # (negative_distance, negative_visit_order, point)
        heap: List[Tuple[float, int, Point]] = []
        visited = 0

        stack: List[Tuple[KdNode, bool]] = [(self.root, False)]
        while stack:
            node, is_far = stack.pop()
            if (is_far and len(heap) == k and
                    node.rect.distance_squared_to(q) >= -heap[0][0]):
                continue

            dist = node.point.distance_squared_to(q)
            if len(heap) < k:
                heappush(heap, (-dist, -visited, node.point))
            elif dist < -heap[0][0]:
                heapreplace(heap, (-dist, -visited, node.point))
            visited += 1

            near_child, far_child = node.child_for(q)
            if far_child is not None:
                stack.append((far_child, True))
            if near_child is not None:
                stack.append((near_child, False))

        heap.sort(key=lambda item: (-item[0], -item[1]))
        return [p for _, _, p in heap]

    # ---- Structure ----

    def height(self) -> int:
        """Number of nodes on the longest root-to-leaf path (0 when empty)."""
        if self.root is None:
            return 0
        deepest = 0
        stack = [(self.root, 1)]
        while stack:
            node, depth = stack.pop()
            deepest = max(deepest, depth)
            for child in (node.left, node.right):
                if child is not None:
                    stack.append((child, depth + 1))
        return deepest

    def nodes(self) -> Iterator[KdNode]:
        """Yield nodes in pre-order (node, left subtree, right subtree)."""
        stack = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            yield node
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

    def points(self) -> List[Point]:
        return [node.point for node in self.nodes()]

    def to_array(self) -> np.ndarray:
        """Stored points as an (n, 2) float64 array in pre-order."""
        return np.array(
            [[p.x, p.y] for p in self.points()], dtype=np.float64
        ).reshape(-1, 2)

    def __len__(self) -> int:
        return self.n_points

    def __contains__(self, p: object) -> bool:
        return isinstance(p, Point) and self.contains(p)

    def __iter__(self) -> Iterator[Point]:
        return (node.point for node in self.nodes())

    def __repr__(self) -> str:
        return f"KdTree(size={self.n_points}, bounds={self.bounds})"


def _random_rectangle() -> Rectangle:
    xs = np.sort(np.random.uniform(0.0, 1.0, 2))
    ys = np.sort(np.random.uniform(0.0, 1.0, 2))
    return Rectangle(xs[0], ys[0], xs[1], ys[1])


def validate_kdtree(
    n_points: int = 1000,
    n_queries: int = 100,
    seed: int = 42
) -> bool:
    """
    Validate the 2-d tree against the brute-force PointSet.

    Generates uniform points in the unit square, inserts them into both
    structures, then checks nearest-neighbor distances and range results
    for random queries.

    Args:
        n_points: Number of random data points
        n_queries: Number of random queries of each kind
        seed: Random seed for reproducibility

    Returns:
        True if all queries match, False otherwise

    Example:
        >>> assert validate_kdtree(1000, 100, seed=42)
    """
    np.random.seed(seed)
    points = [Point(x, y) for x, y in np.random.uniform(0.0, 1.0, (n_points, 2))]

    tree = KdTree(points, bounds=UNIT_SQUARE)
    brute = PointSet(points)

    all_match = True
    if tree.size() != brute.size():
        print(f"Size mismatch: KdTree={tree.size()}, PointSet={brute.size()}")
        all_match = False

    for x, y in np.random.uniform(0.0, 1.0, (n_queries, 2)):
        query = Point(x, y)
        kd_dist = tree.nearest(query).distance_to(query)
        bf_dist = brute.nearest(query).distance_to(query)

        # Points might differ for equidistant candidates, distances must not
        if not np.isclose(kd_dist, bf_dist, rtol=1e-10):
            print(f"Mismatch at {query}: KdTree dist={kd_dist}, PointSet dist={bf_dist}")
            all_match = False

    for _ in range(n_queries):
        rect = _random_rectangle()
        if sorted(tree.range(rect)) != brute.range(rect):
            print(f"Range mismatch for {rect}")
            all_match = False

    return all_match


if __name__ == "__main__":
    print("Validating 2-d tree implementation...")
    if validate_kdtree():
        print("✓ 2-d tree validation passed!")
    else:
        print("✗ 2-d tree validation failed!")

    print("\nDemo:")
    tree = KdTree([Point(0.2, 0.3), Point(0.5, 0.5), Point(0.9, 0.1)])
    query = Point(0.5, 0.49)
    print(f"Query: {query}")
    print(f"Nearest neighbor: {tree.nearest(query)}")
    print(f"Points in [0, 0.6] x [0, 0.6]: {tree.range(Rectangle(0, 0, 0.6, 0.6))}")
    print(f"2-nearest neighbors: {tree.k_nearest(query, k=2)}")
