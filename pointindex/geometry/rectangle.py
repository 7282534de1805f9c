"""
Axis-Aligned Rectangles

A Rectangle is the closed region [xmin, xmax] x [ymin, ymax]. In the
2-d tree every node owns one, and the pruning tests in range and
nearest-neighbor search are expressed entirely through the three
predicates defined here:

- contains(p): is the point inside (edges included)?
- intersects(other): do the two closed regions share any point?
- distance_squared_to(p): smallest squared distance from p to the region

Infinite bounds are allowed so that a tree can own the whole plane.
"""

from dataclasses import dataclass
from typing import Any, Tuple
import math

from .point import Point, require_point


@dataclass(frozen=True)
class Rectangle:
    """
    Closed axis-aligned rectangle.

    Attributes:
        xmin: Left edge
        ymin: Bottom edge
        xmax: Right edge
        ymax: Top edge

    Raises:
        ValueError: If a bound is NaN or min > max on either axis
    """
    xmin: float
    ymin: float
    xmax: float
    ymax: float

    def __post_init__(self):
        bounds = tuple(float(v) for v in (self.xmin, self.ymin, self.xmax, self.ymax))
        if any(math.isnan(v) for v in bounds):
            raise ValueError(f"Rectangle bounds must not be NaN, got {bounds}")
        xmin, ymin, xmax, ymax = bounds
        if xmin > xmax or ymin > ymax:
            raise ValueError(
                f"Invalid rectangle: ({xmin}, {ymin}, {xmax}, {ymax}) "
                "requires xmin <= xmax and ymin <= ymax"
            )
        for name, value in zip(("xmin", "ymin", "xmax", "ymax"), bounds):
            object.__setattr__(self, name, value)

    @property
    def width(self) -> float:
        return self.xmax - self.xmin

    @property
    def height(self) -> float:
        return self.ymax - self.ymin

    @property
    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (self.xmin, self.ymin, self.xmax, self.ymax))

    def contains(self, p: Point) -> bool:
        """Check whether p lies inside or on the boundary."""
        require_point(p)
        return (self.xmin <= p.x <= self.xmax and
                self.ymin <= p.y <= self.ymax)

    def intersects(self, other: "Rectangle") -> bool:
        """
        Check whether two closed rectangles overlap.

        Rectangles that only touch along an edge or at a corner count
        as intersecting, so a query whose edge lies on a splitting line
        still reaches the points sitting on that line.
        """
        require_rectangle(other, "other")
        return (self.xmax >= other.xmin and other.xmax >= self.xmin and
                self.ymax >= other.ymin and other.ymax >= self.ymin)

    def distance_squared_to(self, p: Point) -> float:
        """
        Squared distance from p to the closest point of the rectangle.

        Returns 0 when p is inside. Used as the lower bound for every
        point stored in a subtree during nearest-neighbor pruning.
        """
        require_point(p)
        dx = 0.0
        dy = 0.0
        if p.x < self.xmin:
            dx = p.x - self.xmin
        elif p.x > self.xmax:
            dx = p.x - self.xmax
        if p.y < self.ymin:
            dy = p.y - self.ymin
        elif p.y > self.ymax:
            dy = p.y - self.ymax
        return dx * dx + dy * dy

    def distance_to(self, p: Point) -> float:
        """Euclidean distance from p to the rectangle."""
        return math.sqrt(self.distance_squared_to(p))

    def split(self, axis: int, value: float) -> Tuple["Rectangle", "Rectangle"]:
        """
        Cut the rectangle with a line perpendicular to axis at value.

        Args:
            axis: 0 for a vertical line (x = value), 1 for horizontal (y = value)
            value: Split coordinate, clamped into the rectangle

        Returns:
            (low, high) halves: left/bottom and right/top. Both include
            the splitting line.
        """
        if axis == 0:
            value = min(max(value, self.xmin), self.xmax)
            return (Rectangle(self.xmin, self.ymin, value, self.ymax),
                    Rectangle(value, self.ymin, self.xmax, self.ymax))
        value = min(max(value, self.ymin), self.ymax)
        return (Rectangle(self.xmin, self.ymin, self.xmax, value),
                Rectangle(self.xmin, value, self.xmax, self.ymax))

    def __str__(self) -> str:
        return f"[{self.xmin}, {self.xmax}] x [{self.ymin}, {self.ymax}]"


def require_rectangle(value: Any, name: str = "rect") -> Rectangle:
    """Raise TypeError unless value is a Rectangle."""
    if not isinstance(value, Rectangle):
        raise TypeError(f"{name} must be a Rectangle, got {type(value).__name__}")
    return value


UNIT_SQUARE = Rectangle(0.0, 0.0, 1.0, 1.0)

# Whole plane, for trees whose domain is unconstrained
PLANE = Rectangle(-math.inf, -math.inf, math.inf, math.inf)
