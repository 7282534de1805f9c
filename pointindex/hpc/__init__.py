"""
Performance Measurement Module

Timing utilities used by the CLI harness and the benchmark scripts to
compare the 2-d tree against the brute-force point set.
"""

from .timing import (
    Timer,
    timed,
    compute_speedup,
    QueryTimings
)

__all__ = [
    'Timer',
    'timed',
    'compute_speedup',
    'QueryTimings'
]
