"""
2-d Tree Point Index

This package maintains sets of 2D points over the unit square and answers
nearest-neighbor and axis-aligned range queries with two interchangeable
structures: a brute-force PointSet and a 2-d tree (KdTree).

Main modules:
- geometry: Point, Rectangle, PointSet and KdTree
- synthetic_data: random and grid point generation, point files
- hpc: timing utilities
- main: command-line comparison harness
"""

__version__ = "1.0.0"
