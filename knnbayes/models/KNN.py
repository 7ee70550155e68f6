import logging
from typing import Any, Dict, List, NamedTuple, Optional, Sequence

from knnbayes.data.dataset import Record, SplitConfig
from knnbayes.errors import ConfigError
from knnbayes.models.classifier import Classifier, TestResult, TestResults, select_prediction
from knnbayes.stats.distance import DISTANCE_EUCLIDEAN, DistanceFunction, get_distance_function
from knnbayes.stats.probability import mass_discrete

logger = logging.getLogger(__name__)


class Neighbor(NamedTuple):
    label: int
    distance: float


class KNNClassifier(Classifier):
    """
    K-Nearest Neighbors classifier (from scratch).

    Ranks every training record by distance to the query and lets the ``k``
    nearest vote on the class.
    """

    classifier_type = "KNearestNeighbors Classifier"

    def __init__(self, k: int = 5, distance_method: str = DISTANCE_EUCLIDEAN,
                 cfg: Optional[Any] = None):
        """
        Initialize KNN classifier.

        Args:
            k: Number of neighbors (default: 5)
            distance_method: "euclidean" or "manhattan"; anything else
                falls back to "euclidean".
            cfg: Optional config object (e.g., cfg.model.knn) overriding
                ``k`` and ``distance_method``.

        Raises:
            ConfigError: If ``k`` is not a positive integer.
        """
        super().__init__()
        if cfg is not None:
            k = getattr(cfg, 'k', k)
            distance_method = getattr(cfg, 'distance_method', distance_method)

        if not isinstance(k, int) or isinstance(k, bool) or k <= 0:
            raise ConfigError(
                f"Unable to create classifier, k must be greater than 0 (got {k!r})"
            )

        self.k = k
        self.distance_method, self.distance_function = get_distance_function(distance_method)

    def config(self) -> Dict[str, Any]:
        return {"k": self.k, "distance_method": self.distance_method}

    def _train(self, config: Optional[SplitConfig]) -> None:
        # Lazy learning: the split is the whole model
        self._split(config)
        logger.info(
            "[KNN] Stored %d training records (%d held out).",
            len(self.training_data), len(self.testing_data)
        )

    def test(self) -> TestResults:
        self._require_trained()

        class_count = len(self.training_data.class_names)
        training_records = self.training_data.records

        k = self.k
        if k > len(training_records):
            logger.warning(
                "k=%d exceeds the %d training records, voting with all of them",
                k, len(training_records)
            )
            k = len(training_records)

        results = TestResults()
        for record in self.testing_data.records:
            neighbors = compute_neighbors(record, training_records, self.distance_function)
            results.append(classify(record, neighbors, k, class_count))

        self.results = results
        return results


def compute_neighbors(query: Record, candidates: Sequence[Record],
                      distance_function: DistanceFunction) -> List[Neighbor]:
    """
    Rank candidate records by distance to ``query``.

    The sort is stable, so records at equal distance keep their order in
    ``candidates``.
    """
    neighbors = [
        Neighbor(label=candidate.label,
                 distance=distance_function(query.values, candidate.values))
        for candidate in candidates
    ]
    return sorted(neighbors, key=lambda neighbor: neighbor.distance)


def classify(record: Record, neighbors: Sequence[Neighbor], k: int,
             class_count: int) -> TestResult:
    """
    Vote on the class of ``record`` using the first ``k`` neighbors.

    ``neighbors`` must already be sorted by distance and hold at least
    ``k`` entries.
    """
    if k > len(neighbors):
        raise ValueError(f"Cannot vote with k={k}, only {len(neighbors)} neighbors")

    pmf = mass_discrete(neighbor.label for neighbor in neighbors[:k])
    predicted, probability = select_prediction(pmf, class_count)

    return TestResult(record=record, predicted=predicted, probability=probability)
