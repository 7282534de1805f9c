"""
Point Data Generation and Point Files

This module produces the inputs used by the CLI harness and the
benchmarks:

- Uniformly distributed random points in the unit square
- Random query rectangles inside the unit square
- Regular N x N grids (worst case for an unbalanced 2-d tree when
  inserted in order)
- Plain-text point files: one point per line, x and y separated by
  whitespace

Reproducible results via random seed control.
"""

from pathlib import Path
from typing import Iterable, List, Optional
import numpy as np

from .geometry.point import Point
from .geometry.rectangle import Rectangle


def generate_uniform_points(n_points: int, seed: Optional[int] = None) -> List[Point]:
    """
    Generate points uniformly distributed in [0, 1) x [0, 1).

    Args:
        n_points: Number of points
        seed: Random seed for reproducibility

    Returns:
        List of points (duplicates are possible but vanishingly rare)
    """
    if n_points < 0:
        raise ValueError(f"n_points must be non-negative, got {n_points}")
    if seed is not None:
        np.random.seed(seed)

    coords = np.random.uniform(0.0, 1.0, (n_points, 2))
    return [Point(x, y) for x, y in coords]


def generate_grid_points(size: int) -> List[Point]:
    """
    Generate a size x size grid with spacing 1/size, starting at (0, 0).

    Points are produced column by column (x outer, y inner), the same
    order in which grid files are written.
    """
    if size < 0:
        raise ValueError(f"size must be non-negative, got {size}")
    gap = 1.0 / size if size else 0.0
    return [Point(i * gap, j * gap) for i in range(size) for j in range(size)]


def generate_query_rectangles(
    n_rects: int,
    max_side: float = 1.0,
    seed: Optional[int] = None
) -> List[Rectangle]:
    """
    Generate random query rectangles inside the unit square.

    Each side is the span between two uniform draws, scaled by max_side
    and anchored at the lower draw, so max_side=1.0 gives rectangles
    whose corners are uniform and smaller values give small windows.

    Args:
        n_rects: Number of rectangles
        max_side: Upper bound on each side length, in (0, 1]
        seed: Random seed for reproducibility
    """
    if n_rects < 0:
        raise ValueError(f"n_rects must be non-negative, got {n_rects}")
    if not 0.0 < max_side <= 1.0:
        raise ValueError(f"max_side must be in (0, 1], got {max_side}")
    if seed is not None:
        np.random.seed(seed)

    rects = []
    for x0, x1, y0, y1 in np.random.uniform(0.0, 1.0, (n_rects, 4)):
        xlo, xhi = min(x0, x1), max(x0, x1)
        ylo, yhi = min(y0, y1), max(y0, y1)
        rects.append(Rectangle(xlo, ylo,
                               xlo + (xhi - xlo) * max_side,
                               ylo + (yhi - ylo) * max_side))
    return rects


def write_points(points: Iterable[Point], filepath: str) -> Path:
    """
    Write points to a text file, one "x y" pair per line.

    Coordinates are written with six decimals, so reading the file back
    rounds them.

    Returns:
        Path of the written file
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        for p in points:
            f.write(f"{p.x:f} {p.y:f}\n")
    return path


def write_grid_file(size: int, output_dir: str = "data") -> Path:
    """
    Write a size x size grid to output_dir/grid-{size}x{size}.txt.

    Returns:
        Path of the written file
    """
    filepath = Path(output_dir) / f"grid-{size}x{size}.txt"
    return write_points(generate_grid_points(size), str(filepath))


def read_points(filepath: str) -> List[Point]:
    """
    Read points from a text file.

    Lines with fewer than two whitespace-separated fields (blank lines,
    stray single values) are skipped; fields beyond the second are
    ignored.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If a line's first two fields are not finite numbers
    """
    points = []
    with open(filepath, 'r') as f:
        for line_no, line in enumerate(f, start=1):
            fields = line.split()
            if len(fields) < 2:
                continue
            try:
                points.append(Point(float(fields[0]), float(fields[1])))
            except ValueError as e:
                raise ValueError(f"{filepath}:{line_no}: {e}") from e
    return points

