#!/usr/bin/env python3
"""
Benchmark Script: Brute Force vs 2-d Tree

This script measures and compares build and query time of the two point
structures across problem sizes:

1. PointSet: sorted list, linear-scan nearest and range queries
2. KdTree: 2-d tree with rectangle pruning

Two inputs are measured per size: uniform random points (the tree stays
roughly balanced) and a grid inserted in sorted order (the tree
degenerates, so pruning helps much less).

Usage:
    python benchmarks/benchmark_brute_vs_kdtree.py
    python benchmarks/benchmark_brute_vs_kdtree.py --sizes 1000,10000 --queries 200

Output:
    - Console table with timing results
    - CSV file with detailed results
"""

import argparse
import csv
import sys
from pathlib import Path
from typing import List, Dict, Any

import numpy as np

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pointindex.geometry.kd_tree import KdTree
from pointindex.geometry.point import Point
from pointindex.geometry.point_set import PointSet
from pointindex.hpc.timing import Timer
from pointindex.main import compare_nearest, compare_range
from pointindex.synthetic_data import (
    generate_grid_points,
    generate_query_rectangles,
    generate_uniform_points,
)


def run_benchmark_case(
    label: str,
    points: List[Point],
    n_queries: int,
    verbose: bool = True
) -> Dict[str, Any]:
    """Build both structures from points and time their queries."""
    with Timer() as t_brute:
        brute = PointSet(points)
    with Timer() as t_tree:
        tree = KdTree(points)

    queries = generate_uniform_points(n_queries)
    rects = generate_query_rectangles(n_queries, max_side=0.1)

    nearest = compare_nearest(brute, tree, queries)
    ranges = compare_range(brute, tree, rects)

    entry = {
        'input': label,
        'num_points': tree.size(),
        'tree_height': tree.height(),
        'build_brute_ms': t_brute.elapsed_ms,
        'build_kdtree_ms': t_tree.elapsed_ms,
        'nearest_brute_ms': nearest.brute_mean_ms,
        'nearest_kdtree_ms': nearest.tree_mean_ms,
        'nearest_speedup': nearest.speedup,
        'nearest_missed': nearest.missed,
        'range_brute_ms': ranges.brute_mean_ms,
        'range_kdtree_ms': ranges.tree_mean_ms,
        'range_speedup': ranges.speedup,
        'range_missed': ranges.missed,
    }

    if verbose:
        print(f"  {label}: {entry['num_points']} points, height {entry['tree_height']}")
        print(f"    {nearest.summary()}")
        print(f"    {ranges.summary()}")

    return entry


def run_benchmark_suite(
    sizes: List[int],
    n_queries: int = 100,
    seed: int = 42,
    verbose: bool = True
) -> List[Dict[str, Any]]:
    """
    Run benchmarks across problem sizes.

    Args:
        sizes: Approximate numbers of points
        n_queries: Number of nearest and range queries per case
        seed: Random seed
        verbose: Print progress

    Returns:
        One result dictionary per (size, input) case
    """
    np.random.seed(seed)
    results = []

    for size in sizes:
        if verbose:
            print(f"\n{'='*60}")
            print(f"Benchmarking size: {size}")
            print('='*60)

        results.append(run_benchmark_case(
            "uniform", generate_uniform_points(size), n_queries, verbose
        ))

        side = max(1, int(round(np.sqrt(size))))
        results.append(run_benchmark_case(
            f"grid {side}x{side}", generate_grid_points(side), n_queries, verbose
        ))

    return results


def save_results_csv(results: List[Dict[str, Any]], filepath: str):
    """Save benchmark results to CSV file."""
    if not results:
        return

    with open(filepath, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=list(results[0].keys()))
        writer.writeheader()
        writer.writerows(results)

    print(f"\nResults saved to: {filepath}")


def print_results_table(results: List[Dict[str, Any]]):
    """Print formatted results table."""
    print("\n" + "=" * 90)
    print("BENCHMARK RESULTS SUMMARY (mean ms per query)")
    print("=" * 90)

    print(f"{'Input':<14} {'Size':>8} {'Height':>7} {'NN brute':>10} {'NN kd':>10} "
          f"{'NN x':>7} {'Rng brute':>10} {'Rng kd':>10} {'Rng x':>7}")
    print("-" * 90)

    for r in results:
        print(f"{r['input']:<14} {r['num_points']:>8} {r['tree_height']:>7} "
              f"{r['nearest_brute_ms']:>10.4f} {r['nearest_kdtree_ms']:>10.4f} "
              f"{r['nearest_speedup']:>6.1f}× "
              f"{r['range_brute_ms']:>10.4f} {r['range_kdtree_ms']:>10.4f} "
              f"{r['range_speedup']:>6.1f}×")

    print("=" * 90)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='Benchmark brute-force point set vs 2-d tree'
    )
    parser.add_argument(
        '--sizes', type=str, default='100,1000,10000',
        help='Comma-separated problem sizes (default: 100,1000,10000)'
    )
    parser.add_argument(
        '--queries', type=int, default=100,
        help='Number of queries of each kind per case (default: 100)'
    )
    parser.add_argument(
        '--seed', type=int, default=42,
        help='Random seed (default: 42)'
    )
    parser.add_argument(
        '--output', type=str, default='benchmarks/benchmark_results.csv',
        help='Output CSV file path'
    )
    parser.add_argument(
        '--quiet', '-q', action='store_true',
        help='Minimal output'
    )

    args = parser.parse_args()
    sizes = [int(s.strip()) for s in args.sizes.split(',')]

    if not args.quiet:
        print("=" * 60)
        print("  POINT SEARCH BENCHMARK")
        print("  Brute Force vs 2-d Tree")
        print("=" * 60)
        print(f"\nProblem sizes: {sizes}")
        print(f"Queries per case: {args.queries}")

    results = run_benchmark_suite(sizes, args.queries, args.seed, verbose=not args.quiet)

    print_results_table(results)

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    save_results_csv(results, str(output_path))

    return 0


if __name__ == "__main__":
    sys.exit(main())
