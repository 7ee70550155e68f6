"""
Tests for the probability, distance and discretization functions.
"""

import pytest

from knnbayes.stats.discretize import Interval, discretize, interval_for_value
from knnbayes.stats.distance import (
    euclidean_distance,
    get_distance_function,
    manhattan_distance,
)
from knnbayes.stats.probability import mass_discrete


class TestMassDiscrete:
    """Tests for the empirical probability mass function."""

    def test_mass_over_sample_space(self):
        pmf = mass_discrete([3, 3, 1, 2, 3, 1, 1, 2, 3, 1])

        assert pmf(1) == pytest.approx(0.4)
        assert pmf(2) == pytest.approx(0.2)
        assert pmf(3) == pytest.approx(0.4)
        assert sum(pmf(v) for v in [1, 2, 3]) == pytest.approx(1.0)

    def test_absent_category_has_zero_mass(self):
        pmf = mass_discrete([0, 0, 1])
        assert pmf(7) == 0.0

    def test_empty_sample_is_identically_zero(self):
        pmf = mass_discrete([])
        assert pmf(0) == 0.0
        assert pmf(1) == 0.0

    def test_accepts_generators(self):
        pmf = mass_discrete(label for label in [2, 2, 2, 5])
        assert pmf(2) == pytest.approx(0.75)
        assert pmf(5) == pytest.approx(0.25)


class TestDistance:
    """Tests for distance functions."""

    def test_euclidean(self):
        assert euclidean_distance([0.0, 0.0], [3.0, 4.0]) == pytest.approx(5.0)

    def test_manhattan(self):
        assert manhattan_distance([0.0, 0.0], [3.0, -4.0]) == pytest.approx(7.0)

    def test_identical_vectors_are_zero_apart(self):
        assert euclidean_distance([1.5, 2.5], [1.5, 2.5]) == 0.0
        assert manhattan_distance([1.5, 2.5], [1.5, 2.5]) == 0.0

    def test_dimension_mismatch_raises(self):
        with pytest.raises(ValueError):
            euclidean_distance([1.0, 2.0], [1.0, 2.0, 3.0])

    def test_lookup_is_case_insensitive(self):
        name, fn = get_distance_function("Manhattan")
        assert name == "manhattan"
        assert fn is manhattan_distance

    def test_unknown_method_falls_back_to_euclidean(self):
        name, fn = get_distance_function("bogus")
        assert name == "euclidean"
        assert fn is euclidean_distance


class TestDiscretize:
    """Tests for equal-width discretization."""

    values = [1.0, 5.0, 13.0, 20.0, 9.8]

    def test_default_interval_count(self):
        intervals = discretize(self.values)
        assert len(intervals) == 10

    def test_bounds_and_upper_inclusion(self):
        intervals = discretize(self.values)

        assert intervals[0].lower == 1.0
        assert intervals[-1].upper == 20.0
        assert intervals[-1].includes_upper
        assert not any(interval.includes_upper for interval in intervals[:-1])

    def test_covers_range_without_gaps(self):
        intervals = discretize(self.values)

        assert sum(interval.size for interval in intervals) == pytest.approx(20.0 - 1.0)
        for current, following in zip(intervals, intervals[1:]):
            assert current.upper == following.lower

    def test_every_value_in_exactly_one_interval(self):
        intervals = discretize(self.values)
        for value in self.values:
            assert sum(interval.contains(value) for interval in intervals) == 1

    def test_constant_values_fall_in_last_interval(self):
        intervals = discretize([3.0, 3.0, 3.0])

        assert all(interval.size == 0.0 for interval in intervals)
        assert interval_for_value(intervals, 3.0) == 9

    def test_custom_interval_count(self):
        intervals = discretize([0.0, 4.0], n_intervals=4)
        assert [interval.lower for interval in intervals] == [0.0, 1.0, 2.0, 3.0]

    def test_invalid_interval_count(self):
        with pytest.raises(ValueError):
            discretize([1.0, 2.0], n_intervals=0)

    def test_interval_for_value(self):
        intervals = discretize([0.0, 10.0])

        assert interval_for_value(intervals, 0.0) == 0
        assert interval_for_value(intervals, 1.0) == 1
        assert interval_for_value(intervals, 9.99) == 9
        assert interval_for_value(intervals, 10.0) == 9

    def test_out_of_range_values_are_clamped(self):
        intervals = discretize([0.0, 10.0])

        assert interval_for_value(intervals, -5.0) == 0
        assert interval_for_value(intervals, 50.0) == 9

    def test_half_open_interval(self):
        interval = Interval(lower=1.0, upper=2.0)
        assert interval.contains(1.0)
        assert not interval.contains(2.0)
        assert Interval(lower=1.0, upper=2.0, includes_upper=True).contains(2.0)
