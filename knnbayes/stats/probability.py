"""
Discrete probability helpers.
"""

from collections import Counter
from typing import Callable, Iterable


ProbabilityMassFunction = Callable[[int], float]


def mass_discrete(values: Iterable[int]) -> ProbabilityMassFunction:
    """
    Build an empirical probability mass function over integer categories.

    The categories do not need to be declared up front: any category that
    never appears in ``values`` simply has mass 0.

    Args:
        values: Sample of integer category codes (classes, interval indices).

    Returns:
        Function mapping a category to ``count(category) / len(values)``.
        For an empty sample the function is identically 0.
    """
    counts = Counter(values)
    total = sum(counts.values())

    if total == 0:
        return lambda category: 0.0

    def pmf(category: int) -> float:
        return counts.get(category, 0) / total

    return pmf
