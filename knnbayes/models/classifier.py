"""
Classifier base class and test result types.
"""

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from knnbayes.data.dataset import DataSet, Record, SplitConfig
from knnbayes.errors import DataError, KnnBayesError, UntrainedModelError

NO_PREDICTION = -1


@dataclass
class TestResult:
    """The prediction made for one test record."""
    __test__ = False

    record: Record
    predicted: int
    probability: float

    @property
    def correct(self) -> bool:
        return self.record.label == self.predicted

    def to_dict(self) -> Dict[str, Any]:
        return {
            "class": self.record.label,
            "values": list(self.record.values),
            "predicted": self.predicted,
            "probability": self.probability,
        }


@dataclass
class TestResultsAnalysis:
    """Aggregate accuracy over a set of test results."""
    __test__ = False

    result_count: int = 0
    correct_count: int = 0
    incorrect_count: int = 0
    accuracy: float = math.nan

    def to_dict(self) -> Dict[str, Any]:
        return {
            "results": self.result_count,
            "correct": self.correct_count,
            "incorrect": self.incorrect_count,
            "accuracy": self.accuracy,
        }


class TestResults(list):
    """Ordered test results, one per test record."""
    __test__ = False

    def analyze(self) -> TestResultsAnalysis:
        """
        Compute accuracy over the results.

        An empty result set has no defined accuracy, so ``accuracy`` is NaN.
        """
        analysis = TestResultsAnalysis(result_count=len(self))

        for result in self:
            if result.correct:
                analysis.correct_count += 1
            else:
                analysis.incorrect_count += 1

        if analysis.result_count:
            analysis.accuracy = analysis.correct_count / analysis.result_count

        return analysis


class Classifier:
    """
    Base class for classifiers trained from a DataSet.

    A classifier owns its raw data, the training/testing subsets produced by
    splitting it, and whatever parameters the algorithm fits. Training again
    replaces all of that state.

    Instances do no internal locking. Concurrent train/test calls on the same
    instance must be serialized by the caller, e.g. one instance per session
    or access under an external lock.
    """

    classifier_type = "Classifier"

    def __init__(self):
        self.raw_data: Optional[DataSet] = None
        self.training_data: Optional[DataSet] = None
        self.testing_data: Optional[DataSet] = None
        self.results: Optional[TestResults] = None

    def train_from_dataset(self, dataset: DataSet, config: Optional[SplitConfig] = None) -> None:
        """
        Train from an in-memory dataset.

        Args:
            dataset: Full labeled dataset, split according to ``config``.
            config: Split configuration (default: random 75/25).
        """
        self.raw_data = dataset
        self._train(config)

    def train_from_csv(self, text: Union[str, bytes], config: Optional[SplitConfig] = None) -> None:
        self.raw_data = DataSet.from_csv(text)
        self._train(config)

    def train_from_csv_file(self, path: Union[str, Path], config: Optional[SplitConfig] = None) -> None:
        self.raw_data = DataSet.from_csv_file(path)
        self._train(config)

    def train_from_json(self, text: Union[str, bytes], config: Optional[SplitConfig] = None) -> None:
        self.raw_data = DataSet.from_json(text)
        self._train(config)

    def train_from_json_file(self, path: Union[str, Path], config: Optional[SplitConfig] = None) -> None:
        self.raw_data = DataSet.from_json_file(path)
        self._train(config)

    def retrain(self, config: Optional[SplitConfig] = None) -> None:
        """Re-split the current raw data and fit again."""
        self._train(config)

    def _split(self, config: Optional[SplitConfig]) -> None:
        if self.raw_data is None:
            raise DataError(f"{self.classifier_type} has no raw data to train from")

        try:
            training, testing = self.raw_data.split(config)
        except KnnBayesError as err:
            raise DataError(f"Unable to split data: {err.message}") from err

        self.training_data = training
        self.testing_data = testing
        self.results = None

    def _train(self, config: Optional[SplitConfig]) -> None:
        raise NotImplementedError("Training not implemented")

    def _require_trained(self) -> None:
        if self.training_data is None or self.testing_data is None:
            raise UntrainedModelError(
                f"{self.classifier_type} has not been trained",
                hint="call train_from_dataset() before test()"
            )

    def test(self) -> TestResults:
        """
        Classify every record of the testing data.

        Returns:
            TestResults, also cached on ``self.results``.
        """
        raise NotImplementedError("Testing not implemented")

    def data(self) -> Tuple[Optional[DataSet], Optional[DataSet]]:
        """Return (training_data, testing_data)."""
        return self.training_data, self.testing_data

    def config(self) -> Dict[str, Any]:
        return {}

    def __repr__(self) -> str:
        trained = self.training_data is not None
        return f"{type(self).__name__}(config={self.config()}, trained={trained})"


def select_prediction(pmf, class_count: int) -> Tuple[int, float]:
    """
    Pick the class with the strictly greatest probability.

    Ties go to the lowest class index. If every class has probability 0 the
    result is (NO_PREDICTION, 0.0).
    """
    predicted = NO_PREDICTION
    predicted_probability = 0.0

    for class_idx in range(class_count):
        probability = pmf(class_idx)
        if probability > predicted_probability:
            predicted = class_idx
            predicted_probability = probability

    return predicted, predicted_probability
