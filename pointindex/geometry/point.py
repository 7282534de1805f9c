"""
Immutable 2D Point

Points are compared by x first, then by y, which gives the total order
used by the brute-force PointSet. Equality and hashing use the exact
coordinates, so two points are "the same" only when both coordinates
are bit-for-bit equal floats.
"""

from dataclasses import dataclass
from typing import Any
import math
import numpy as np


@dataclass(frozen=True, order=True)
class Point:
    """
    A point in the plane.

    Attributes:
        x: Horizontal coordinate (intended domain [0, 1])
        y: Vertical coordinate (intended domain [0, 1])

    Example:
        >>> p = Point(0.2, 0.3)
        >>> p.distance_to(Point(0.5, 0.7))
        0.5
    """
    x: float
    y: float

    def __post_init__(self):
        x = float(self.x)
        y = float(self.y)
        if not (math.isfinite(x) and math.isfinite(y)):
            raise ValueError(f"Coordinates must be finite, got ({x}, {y})")
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)

    def distance_squared_to(self, other: "Point") -> float:
        """Squared Euclidean distance to another point."""
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.sqrt(self.distance_squared_to(other))

    def coord(self, axis: int) -> float:
        """Coordinate along axis 0 (x) or 1 (y)."""
        return self.y if axis else self.x

    def as_array(self) -> np.ndarray:
        """Return coordinates as numpy array for vectorized operations."""
        return np.array([self.x, self.y], dtype=np.float64)

    @classmethod
    def from_array(cls, values: Any) -> "Point":
        """Create from any length-2 sequence or array."""
        values = np.asarray(values, dtype=np.float64).ravel()
        if values.shape != (2,):
            raise ValueError(f"Expected 2 coordinates, got shape {values.shape}")
        return cls(values[0], values[1])

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


def require_point(value: Any, name: str = "point") -> Point:
    """Raise TypeError unless value is a Point."""
    if not isinstance(value, Point):
        raise TypeError(f"{name} must be a Point, got {type(value).__name__}")
    return value
