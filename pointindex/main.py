"""
Main Entry Point for the 2-d Tree / Brute-Force Comparison

This script fills a brute-force PointSet and a KdTree with the same
points, runs identical random queries against both, and reports
discrepancies and timing.

Usage:
    # Random uniform points
    python -m pointindex.main --random 100000 --trials 1000

    # Points from a file ("x y" per line)
    python -m pointindex.main --input data/grid-100x100.txt --trials 500

    # Write a grid data file
    python -m pointindex.main --grid 100 --output-dir data

Exit status is 0 when both structures agree on every query, 1 otherwise.
"""

import argparse
import sys
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .geometry.kd_tree import KdTree
from .geometry.point import Point
from .geometry.point_set import PointSet
from .geometry.rectangle import Rectangle
from .hpc.timing import QueryTimings, Timer, timed
from .synthetic_data import (
    generate_query_rectangles,
    generate_uniform_points,
    read_points,
    write_grid_file,
)


def print_header():
    """Print application header."""
    print("=" * 70)
    print("  2-D TREE vs BRUTE FORCE")
    print("  Nearest-Neighbor and Range Search Comparison")
    print("=" * 70)
    print()


def load_points(args) -> List[Point]:
    """
    Generate or read the data points.

    Args:
        args: Command line arguments

    Returns:
        Points in insertion order
    """
    if args.input:
        if not args.quiet:
            print(f"Reading data points in file {args.input}...")
        with Timer() as t:
            points = read_points(args.input)
    else:
        if not args.quiet:
            print(f"Generating {args.random} uniformly distributed data points...")
        with Timer() as t:
            points = generate_uniform_points(args.random)

    if not args.quiet:
        print(f"  done in {t.elapsed_ms:.2f} ms ({len(points)} points)")
        print()
    return points


def build_structures(points: List[Point], quiet: bool = False) -> Tuple[PointSet, KdTree]:
    """Insert the same points, in the same order, into both structures."""
    with Timer() as t_brute:
        brute = PointSet(points)
    with Timer() as t_tree:
        tree = KdTree(points)

    if not quiet:
        print("Number of points in data:")
        print("-" * 40)
        print(f"  Brute size: {brute.size()}")
        print(f"  KdTree size: {tree.size()}")
        print(f"  KdTree height: {tree.height()}")
        print(f"  Build time: brute {t_brute.elapsed_ms:.2f} ms, "
              f"kdtree {t_tree.elapsed_ms:.2f} ms")
        print()

    return brute, tree


def compare_nearest(
    brute: PointSet,
    tree: KdTree,
    queries: Iterable[Point],
    verbose: bool = False
) -> QueryTimings:
    """
    Ask both structures for the nearest point to each query.

    Answers count as equal when they are at the same distance from the
    query, since equidistant candidates may be broken differently.
    """
    timings = QueryTimings("nearest")

    for query in queries:
        bf_point, brute_ms = timed(brute.nearest, query)
        kd_point, tree_ms = timed(tree.nearest, query)

        agree = bf_point.distance_squared_to(query) == kd_point.distance_squared_to(query)
        timings.record(brute_ms, tree_ms, agree)
        if not agree and verbose:
            print("-" * 35)
            print(f"Query point: {query}")
            print(f"Brute point: {bf_point}\t{query.distance_to(bf_point):f}")
            print(f"KdTree point: {kd_point}\t{query.distance_to(kd_point):f}")

    return timings


def compare_range(
    brute: PointSet,
    tree: KdTree,
    rects: Iterable[Rectangle],
    verbose: bool = False
) -> QueryTimings:
    """Run each rectangle query on both structures and compare result sets."""
    timings = QueryTimings("range")

    for rect in rects:
        bf_points, brute_ms = timed(brute.range, rect)
        kd_points, tree_ms = timed(tree.range, rect)

        agree = set(bf_points) == set(kd_points)
        timings.record(brute_ms, tree_ms, agree)
        if not agree and verbose:
            print("-" * 35)
            print(f"Query rectangle: {rect}")
            print(f"Brute count: {len(bf_points)}  KdTree count: {len(kd_points)}")

    return timings


def print_comparison(title: str, timings: QueryTimings) -> None:
    """Print trial counts and per-query timing for one query kind."""
    print(title)
    print("-" * 40)
    print(f"  Trials: {timings.trials}")
    print(f"  Success: {timings.trials - timings.missed}")
    print(f"  Missed: {timings.missed}")
    print(f"  Timing Brute method: {timings.brute_mean_ms:.4f} (ms/query)")
    print(f"  Timing KdTree method: {timings.tree_mean_ms:.4f} (ms/query)")
    print(f"  Speedup: {timings.speedup:.2f}x")
    print()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='Compare a 2-d tree against a brute-force point set',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 10,000 random points, 500 nearest queries
  python -m pointindex.main --random 10000 --trials 500

  # Load points from a file
  python -m pointindex.main --input data/grid-50x50.txt

  # Write data/grid-50x50.txt
  python -m pointindex.main --grid 50
        """
    )

    # Data source options
    data_group = parser.add_mutually_exclusive_group()
    data_group.add_argument('--random', '-r', type=int, default=1000,
                            help='Number of uniform random points (default: 1000)')
    data_group.add_argument('--input', '-i', type=str,
                            help='Path to a point file ("x y" per line)')
    data_group.add_argument('--grid', '-g', type=int,
                            help='Write an N x N grid file to --output-dir and exit')

    # Query options
    query_group = parser.add_argument_group('Queries')
    query_group.add_argument('--trials', '-t', type=int, default=100,
                             help='Number of random nearest queries (default: 100)')
    query_group.add_argument('--range-trials', type=int, default=100,
                             help='Number of random range queries (default: 100)')
    query_group.add_argument('--seed', type=int, default=42,
                             help='Random seed (default: 42)')

    # Output options
    out_group = parser.add_argument_group('Output')
    out_group.add_argument('--output-dir', type=str, default='data',
                           help='Output directory for grid files (default: data)')
    out_group.add_argument('--visualize', action='store_true',
                           help='Plot the tree partition (requires matplotlib)')
    out_group.add_argument('--save-plot', type=str,
                           help='Save the tree plot to this path')
    out_group.add_argument('--verbose', '-v', action='store_true',
                           help='Print every mismatching query')
    out_group.add_argument('--quiet', '-q', action='store_true',
                           help='Minimal output')

    args = parser.parse_args(argv)

    if args.random is not None and args.random < 0:
        parser.error("--random must be non-negative")
    if args.trials < 0 or args.range_trials < 0:
        parser.error("--trials and --range-trials must be non-negative")
    if args.grid is not None and args.grid <= 0:
        parser.error("--grid must be positive")

    np.random.seed(args.seed)

    if not args.quiet:
        print_header()

    if args.grid is not None:
        path = write_grid_file(args.grid, args.output_dir)
        if not args.quiet:
            print(f"Grid written to: {path}")
        return 0

    if args.input and not Path(args.input).exists():
        print(f"Input file not found: {args.input}", file=sys.stderr)
        return 2

    points = load_points(args)
    brute, tree = build_structures(points, quiet=args.quiet)

    if brute.is_empty():
        print("No data points, nothing to query.")
        return 0

    queries = generate_uniform_points(args.trials)
    rects = generate_query_rectangles(args.range_trials)

    with Timer() as total:
        nearest = compare_nearest(brute, tree, queries, verbose=args.verbose)
        ranges = compare_range(brute, tree, rects, verbose=args.verbose)

    if not args.quiet:
        print_comparison("Nearest neighbor", nearest)
        print_comparison("Range search", ranges)
        print(f"Total testing time: {total.elapsed_ms:.2f} ms")

    if args.visualize or args.save_plot:
        from .geometry.visualize import plot_kdtree
        plot_kdtree(tree, save_path=args.save_plot, show=args.visualize)

    mismatches = nearest.missed + ranges.missed
    if not args.quiet:
        print("=" * 70)
        status = "agree" if mismatches == 0 else f"disagree on {mismatches} queries"
        print(f"Comparison complete. Structures {status}.")
        print("=" * 70)

    return 0 if mismatches == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
