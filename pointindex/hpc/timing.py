"""
Query Timing

Measures how long the brute-force point set and the 2-d tree take to
answer the same queries, so the CLI harness and the benchmark script
can report per-query cost, speedup and disagreements side by side.

Example:
    >>> timings = QueryTimings("nearest")
    >>> for q in queries:
    ...     bf, brute_ms = timed(brute.nearest, q)
    ...     kd, tree_ms = timed(tree.nearest, q)
    ...     timings.record(brute_ms, tree_ms, agree=bf == kd)
    >>> print(timings.summary())
"""

import statistics
import time
from dataclasses import dataclass, field
from typing import Any, Callable, List, Tuple


class Timer:
    """Context manager measuring wall-clock time with time.perf_counter()."""

    def __init__(self):
        self._start = 0.0
        self.elapsed = 0.0

    def __enter__(self) -> 'Timer':
        self._start = time.perf_counter()
        return self

    def __exit__(self, *args) -> None:
        self.elapsed = time.perf_counter() - self._start

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed * 1000


def timed(func: Callable[..., Any], *args: Any) -> Tuple[Any, float]:
    """Call func(*args) and return (result, elapsed milliseconds)."""
    with Timer() as t:
        result = func(*args)
    return result, t.elapsed_ms


def compute_speedup(brute_ms: float, tree_ms: float) -> float:
    """
    How many times faster the tree answered than the brute-force scan.

    Returns inf when the tree time is zero (too fast for the clock).
    """
    if tree_ms <= 0:
        return float('inf')
    return brute_ms / tree_ms


@dataclass
class QueryTimings:
    """
    Paired timings of one kind of query run on both structures.

    Entry i of brute_ms and tree_ms belongs to the same query.

    Attributes:
        query: Kind of query timed, e.g. "nearest" or "range"
        brute_ms: Per-query PointSet times in milliseconds
        tree_ms: Per-query KdTree times in milliseconds
        missed: Number of queries the two structures answered differently
    """
    query: str
    brute_ms: List[float] = field(default_factory=list)
    tree_ms: List[float] = field(default_factory=list)
    missed: int = 0

    def record(self, brute_ms: float, tree_ms: float, agree: bool = True) -> None:
        self.brute_ms.append(brute_ms)
        self.tree_ms.append(tree_ms)
        if not agree:
            self.missed += 1

    @property
    def trials(self) -> int:
        return len(self.brute_ms)

    @property
    def brute_mean_ms(self) -> float:
        return statistics.mean(self.brute_ms) if self.brute_ms else 0.0

    @property
    def tree_mean_ms(self) -> float:
        return statistics.mean(self.tree_ms) if self.tree_ms else 0.0

    @property
    def speedup(self) -> float:
        return compute_speedup(sum(self.brute_ms), sum(self.tree_ms))

    def summary(self) -> str:
        return (f"{self.query}: brute {self.brute_mean_ms:.4f} ms/query, "
                f"kdtree {self.tree_mean_ms:.4f} ms/query, "
                f"speedup {self.speedup:.2f}x "
                f"({self.trials} queries, {self.missed} missed)")
