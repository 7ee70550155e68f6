"""
Naive Bayes classifier over discretized attributes.

Every attribute is cut into equal-width intervals, so a record maps to one
combination of intervals (one interval per attribute). Training computes,
for every possible combination, the probability of each class given that
combination. Classification is then a table lookup.

The table holds ``n_intervals ** n_attributes`` rows, which limits the model
to a handful of attributes.
"""

import logging
from dataclasses import dataclass
from itertools import product
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from knnbayes.data.dataset import Record, SplitConfig
from knnbayes.errors import ConfigError, DataError, UntrainedModelError
from knnbayes.models.classifier import (
    NO_PREDICTION,
    Classifier,
    TestResult,
    TestResults,
    select_prediction,
)
from knnbayes.stats.discretize import (
    DEFAULT_INTERVAL_COUNT,
    Interval,
    discretize,
    interval_for_value,
)
from knnbayes.stats.probability import mass_discrete

logger = logging.getLogger(__name__)


@dataclass
class ClassConditionedPosteriors:
    """
    Joint class-conditioned probabilities for every interval combination.

    Attributes:
        probabilities: Array (n_classes, n_combinations) of P(X == x | C == c).
        attribute_vectors: Array (n_combinations, n_attributes) holding the
            lower bound of each attribute's interval in the combination.
    """
    probabilities: np.ndarray
    attribute_vectors: np.ndarray


def _require_values(records: Sequence[Record], attribute_count: int) -> None:
    for idx, record in enumerate(records):
        if len(record.values) < attribute_count:
            raise DataError(
                f"Record {idx} has {len(record.values)} values, "
                f"{attribute_count} attributes are required"
            )


def compute_class_priors(class_names: Sequence[str], records: Sequence[Record]) -> List[float]:
    """
    Compute the prior probability of each class over ``records``.

    Returns:
        One prior per declared class, in class index order.
    """
    pmf = mass_discrete(record.label for record in records)
    return [pmf(class_idx) for class_idx in range(len(class_names))]


def discretize_attributes(attribute_names: Sequence[str], records: Sequence[Record],
                          n_intervals: int = DEFAULT_INTERVAL_COUNT) -> List[List[Interval]]:
    """
    Compute the intervals for every attribute from the values in ``records``.

    Args:
        attribute_names: Names of the attributes to discretize.
        records: Records supplying the observed values.
        n_intervals: Intervals per attribute (default: 10).

    Returns:
        List indexed by attribute of ordered interval lists.

    Raises:
        DataError: If a record lacks a value for one of the attributes.
    """
    _require_values(records, len(attribute_names))

    return [
        discretize([record.values[attr_idx] for record in records], n_intervals)
        for attr_idx in range(len(attribute_names))
    ]


def generate_class_attribute_posteriors(class_names: Sequence[str],
                                        attribute_names: Sequence[str],
                                        intervals: Sequence[Sequence[Interval]],
                                        records: Sequence[Record]) -> np.ndarray:
    """
    Compute P(attribute in interval | class) for every class, attribute and interval.

    Returns:
        Array indexed ``[class][attribute][interval]``. A class without any
        records gets all-zero rows.
    """
    class_count = len(class_names)
    attribute_count = len(attribute_names)
    interval_count = max((len(ivs) for ivs in intervals), default=0)

    # Interval index of every value, grouped by class and attribute
    class_attr_intervals: List[List[List[int]]] = [
        [[] for _ in range(attribute_count)] for _ in range(class_count)
    ]
    for record in records:
        for attr_idx in range(attribute_count):
            class_attr_intervals[record.label][attr_idx].append(
                interval_for_value(intervals[attr_idx], record.values[attr_idx])
            )

    caps = np.zeros((class_count, attribute_count, interval_count))
    for class_idx in range(class_count):
        for attr_idx in range(attribute_count):
            pmf = mass_discrete(class_attr_intervals[class_idx][attr_idx])
            for interval_idx in range(len(intervals[attr_idx])):
                caps[class_idx, attr_idx, interval_idx] = pmf(interval_idx)

    return caps


def generate_class_conditioned_posteriors(class_names: Sequence[str],
                                          attribute_names: Sequence[str],
                                          intervals: Sequence[Sequence[Interval]],
                                          caps: np.ndarray) -> ClassConditionedPosteriors:
    """
    Combine per-attribute posteriors into P(X == x | C == c) for every combination.

    Attributes are assumed independent given the class, so the probability
    of a combination is the product of its per-attribute probabilities.
    Attribute 0 is the most significant position of the combination index.
    """
    class_count = len(class_names)
    attribute_count = len(attribute_names)
    vector_count = int(np.prod([len(ivs) for ivs in intervals], dtype=np.int64))

    probabilities = np.ones((class_count, vector_count))
    for class_idx in range(class_count):
        joint = np.ones(())
        for attr_idx in range(attribute_count):
            joint = np.multiply.outer(joint, caps[class_idx, attr_idx, :len(intervals[attr_idx])])
        probabilities[class_idx] = joint.ravel()

    lowers = [[interval.lower for interval in ivs] for ivs in intervals]
    attribute_vectors = np.array(list(product(*lowers)), dtype=np.float64)
    attribute_vectors = attribute_vectors.reshape(vector_count, attribute_count)

    return ClassConditionedPosteriors(
        probabilities=probabilities,
        attribute_vectors=attribute_vectors,
    )


def compute_vector_conditioned_class_probabilities(class_priors: Sequence[float],
                                                   ccps: ClassConditionedPosteriors) -> np.ndarray:
    """
    Apply Bayes' rule to get P(C == c | X == x) for every combination.

    Returns:
        Array indexed ``[combination][class]``. Combinations with zero total
        probability get zero for every class.
    """
    priors = np.asarray(class_priors, dtype=np.float64)
    weighted = ccps.probabilities * priors[:, np.newaxis]
    totals = weighted.sum(axis=0)

    posteriors = np.divide(
        weighted, totals,
        out=np.zeros_like(weighted),
        where=totals > 0,
    )
    return posteriors.T


class NaiveBayesClassifier(Classifier):
    """Naive Bayes classifier over equal-width discretized attributes."""

    classifier_type = "Naive Bayes Classifier"

    def __init__(self, n_intervals: int = DEFAULT_INTERVAL_COUNT, cfg: Optional[Any] = None):
        """
        Initialize the classifier.

        Args:
            n_intervals: Intervals per attribute (default: 10)
            cfg: Optional config object (e.g., cfg.model.naive_bayes)

        Raises:
            ConfigError: If ``n_intervals`` is not positive.
        """
        super().__init__()
        if cfg is not None:
            n_intervals = getattr(cfg, 'n_intervals', n_intervals)

        if not isinstance(n_intervals, int) or isinstance(n_intervals, bool) or n_intervals <= 0:
            raise ConfigError(f"n_intervals must be greater than 0 (got {n_intervals!r})")

        self.n_intervals = n_intervals
        self._reset()

    def _reset(self) -> None:
        self.class_priors: Optional[List[float]] = None
        self.attribute_intervals: Optional[List[List[Interval]]] = None
        self.class_attribute_posteriors: Optional[np.ndarray] = None
        self.class_conditioned_posteriors: Optional[ClassConditionedPosteriors] = None
        self.vector_conditioned_class_probabilities: Optional[np.ndarray] = None

    def config(self) -> Dict[str, Any]:
        return {"n_intervals": self.n_intervals}

    def _require_trained(self) -> None:
        super()._require_trained()
        if self.vector_conditioned_class_probabilities is None:
            raise UntrainedModelError(
                f"{self.classifier_type} has no fitted posteriors",
                hint="the last training attempt failed, train again"
            )

    def _train(self, config: Optional[SplitConfig]) -> None:
        self._reset()
        self._split(config)

        class_names = self.training_data.class_names
        attribute_names = self.training_data.attribute_names
        records = self.training_data.records

        self.class_priors = compute_class_priors(class_names, records)
        for class_idx, prior in enumerate(self.class_priors):
            logger.debug("Class: %d\tPrior: %f", class_idx, prior)

        self.attribute_intervals = discretize_attributes(attribute_names, records, self.n_intervals)
        for attr_idx, intervals in enumerate(self.attribute_intervals):
            logger.debug("Attribute: %s", attribute_names[attr_idx])
            for interval_idx, interval in enumerate(intervals):
                logger.debug("\tInterval: %d\tLower Limit: %f\tUpper Limit: %f",
                             interval_idx, interval.lower, interval.upper)

        self.class_attribute_posteriors = generate_class_attribute_posteriors(
            class_names, attribute_names, self.attribute_intervals, records
        )

        self.class_conditioned_posteriors = generate_class_conditioned_posteriors(
            class_names, attribute_names, self.attribute_intervals,
            self.class_attribute_posteriors
        )

        self.vector_conditioned_class_probabilities = compute_vector_conditioned_class_probabilities(
            self.class_priors, self.class_conditioned_posteriors
        )

        logger.info(
            "[NaiveBayes] Fitted %d classes over %d interval combinations from %d records.",
            len(class_names), len(self.vector_conditioned_class_probabilities), len(records)
        )

    def combination_index(self, record: Record) -> int:
        """
        Map a record to the row of the posterior table it falls into.

        Values outside the training range use the nearest edge interval.
        """
        _require_values([record], len(self.attribute_intervals))

        index = 0
        for attr_idx, intervals in enumerate(self.attribute_intervals):
            index = index * len(intervals) + interval_for_value(intervals, record.values[attr_idx])
        return index

    def predict(self, record: Record) -> TestResult:
        """Classify a single record from the fitted posterior table."""
        self._require_trained()

        class_probabilities = self.vector_conditioned_class_probabilities[self.combination_index(record)]
        predicted, probability = select_prediction(
            lambda class_idx: float(class_probabilities[class_idx]),
            len(class_probabilities)
        )

        return TestResult(record=record, predicted=predicted, probability=probability)

    def test(self) -> TestResults:
        self._require_trained()

        results = TestResults(self.predict(record) for record in self.testing_data.records)
        unpredicted = sum(1 for result in results if result.predicted == NO_PREDICTION)
        if unpredicted:
            logger.info("%d of %d test records fell into zero-probability combinations",
                        unpredicted, len(results))

        self.results = results
        return results
