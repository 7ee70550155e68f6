"""
Equal-width discretization of continuous attribute values.
"""

from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

DEFAULT_INTERVAL_COUNT = 10


@dataclass(frozen=True)
class Interval:
    """
    One bucket of a discretized attribute.

    Intervals are half-open ``[lower, upper)`` unless ``includes_upper`` is
    set, which is the case only for the last bucket of a discretization.
    """
    lower: float
    upper: float
    includes_upper: bool = False

    @property
    def size(self) -> float:
        return self.upper - self.lower

    def contains(self, value: float) -> bool:
        if value < self.lower:
            return False
        if self.includes_upper:
            return value <= self.upper
        return value < self.upper


def discretize(values: Sequence[float],
               n_intervals: int = DEFAULT_INTERVAL_COUNT) -> List[Interval]:
    """
    Partition the observed range of ``values`` into equal-width intervals.

    The intervals cover ``[min, max]`` with no gaps and no overlaps: the
    upper bound of each bucket is the lower bound of the next one, and only
    the final bucket includes its upper bound. A constant sample produces
    zero-width intervals; every value then falls into the last one.

    Args:
        values: Observed attribute values.
        n_intervals: Number of intervals to create (default: 10).

    Returns:
        Ordered list of ``n_intervals`` Interval objects.

    Raises:
        ValueError: If ``n_intervals`` is not positive.
    """
    if n_intervals <= 0:
        raise ValueError(f"n_intervals must be positive, got {n_intervals}")

    data = np.asarray(values, dtype=np.float64)
    if data.size == 0:
        low = high = 0.0
    else:
        low, high = float(np.min(data)), float(np.max(data))

    # linspace pins both endpoints exactly to low and high
    edges = np.linspace(low, high, n_intervals + 1)

    return [
        Interval(
            lower=float(edges[i]),
            upper=float(edges[i + 1]),
            includes_upper=(i == n_intervals - 1),
        )
        for i in range(n_intervals)
    ]


def interval_for_value(intervals: Sequence[Interval], value: float) -> int:
    """
    Return the index of the interval containing ``value``.

    Values outside the discretized range are clamped to the first or last
    interval, so records unseen during training still map to a bucket.
    """
    if not intervals:
        raise ValueError("Cannot locate a value in an empty list of intervals")

    for idx, interval in enumerate(intervals):
        if interval.contains(value):
            return idx

    if value < intervals[0].lower:
        return 0
    return len(intervals) - 1
