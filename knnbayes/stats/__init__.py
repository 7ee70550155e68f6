"""
Probability, distance and discretization functions used by the classifiers
"""

from knnbayes.stats.probability import mass_discrete
from knnbayes.stats.distance import euclidean_distance, manhattan_distance, get_distance_function
from knnbayes.stats.discretize import Interval, discretize, interval_for_value

__all__ = [
    'mass_discrete',
    'euclidean_distance', 'manhattan_distance', 'get_distance_function',
    'Interval', 'discretize', 'interval_for_value',
]
