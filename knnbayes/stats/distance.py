import logging
from typing import Callable, Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)

DISTANCE_EUCLIDEAN = "euclidean"
DISTANCE_MANHATTAN = "manhattan"

DistanceFunction = Callable[[Sequence[float], Sequence[float]], float]


def _as_vectors(a, b):
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape:
        raise ValueError(
            f"Cannot compute distance between vectors of length {a.size} and {b.size}"
        )
    return a, b


def euclidean_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """L2 norm of the component-wise difference."""
    a, b = _as_vectors(a, b)
    return float(np.sqrt(np.sum((a - b) ** 2)))


def manhattan_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Sum of absolute component-wise differences."""
    a, b = _as_vectors(a, b)
    return float(np.sum(np.abs(a - b)))


_DISTANCE_FUNCTIONS = {
    DISTANCE_EUCLIDEAN: euclidean_distance,
    DISTANCE_MANHATTAN: manhattan_distance,
}


def get_distance_function(method: str) -> Tuple[str, DistanceFunction]:
    """
    Resolve a distance method name.

    Unknown names fall back to Euclidean distance rather than failing.

    Args:
        method: Distance method name, case-insensitive.

    Returns:
        Tuple of (canonical method name, distance function).
    """
    name = str(method).strip().lower() if method is not None else ""
    if name not in _DISTANCE_FUNCTIONS:
        logger.info("Unknown distance method %r, using %s", method, DISTANCE_EUCLIDEAN)
        name = DISTANCE_EUCLIDEAN
    return name, _DISTANCE_FUNCTIONS[name]
