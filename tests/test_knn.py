"""
Tests for the K-Nearest Neighbors classifier.
"""

from types import SimpleNamespace

import pytest

from knnbayes.data.dataset import DataSet, Record, SplitConfig, SplitMethod
from knnbayes.errors import ConfigError, DataError, UntrainedModelError
from knnbayes.models.classifier import NO_PREDICTION
from knnbayes.models.KNN import KNNClassifier, Neighbor, classify, compute_neighbors
from knnbayes.stats.distance import euclidean_distance, manhattan_distance


class TestConstruction:

    @pytest.mark.parametrize("k", [0, -3])
    def test_rejects_non_positive_k(self, k):
        with pytest.raises(ConfigError):
            KNNClassifier(k, "euclidean")

    def test_unknown_distance_falls_back_to_euclidean(self):
        knn = KNNClassifier(3, "bogus")
        assert knn.distance_method == "euclidean"
        assert knn.distance_function is euclidean_distance

    def test_manhattan(self):
        knn = KNNClassifier(3, "manhattan")
        assert knn.distance_function is manhattan_distance
        assert knn.config() == {"k": 3, "distance_method": "manhattan"}

    def test_from_cfg(self):
        knn = KNNClassifier(cfg=SimpleNamespace(k=7, distance_method="manhattan"))
        assert knn.k == 7
        assert knn.distance_method == "manhattan"

    def test_type(self):
        assert KNNClassifier(1).classifier_type == "KNearestNeighbors Classifier"


class TestNeighbors:

    def test_sorted_by_distance(self):
        query = Record(label=0, values=[0.0, 0.0])
        candidates = [
            Record(label=1, values=[5.0, 0.0]),
            Record(label=0, values=[1.0, 0.0]),
            Record(label=2, values=[3.0, 0.0]),
        ]

        neighbors = compute_neighbors(query, candidates, euclidean_distance)
        assert [n.label for n in neighbors] == [0, 2, 1]
        assert [n.distance for n in neighbors] == pytest.approx([1.0, 3.0, 5.0])

    def test_ties_keep_candidate_order(self):
        query = Record(label=0, values=[0.0, 0.0])
        candidates = [
            Record(label=1, values=[1.0, 0.0]),
            Record(label=0, values=[0.0, 1.0]),
            Record(label=0, values=[2.0, 0.0]),
        ]

        neighbors = compute_neighbors(query, candidates, euclidean_distance)
        assert [n.label for n in neighbors] == [1, 0, 0]

    def test_majority_vote(self):
        record = Record(label=2, values=[0.0])
        neighbors = [Neighbor(2, 0.1), Neighbor(2, 0.2), Neighbor(1, 0.3), Neighbor(1, 0.4)]

        result = classify(record, neighbors, 3, 3)
        assert result.predicted == 2
        assert result.probability == pytest.approx(2 / 3)

    def test_vote_tie_goes_to_lowest_class(self):
        record = Record(label=1, values=[0.0])
        neighbors = [Neighbor(1, 0.1), Neighbor(0, 0.2)]

        result = classify(record, neighbors, 2, 2)
        assert result.predicted == 0
        assert result.probability == pytest.approx(0.5)

    def test_k_larger_than_neighbors_raises(self):
        with pytest.raises(ValueError):
            classify(Record(label=0, values=[0.0]), [Neighbor(0, 0.0)], 2, 1)


class TestTrainAndTest:

    def test_untrained_model(self):
        with pytest.raises(UntrainedModelError):
            KNNClassifier(1).test()

    def test_retrain_without_data(self):
        with pytest.raises(DataError):
            KNNClassifier(1).retrain()

    def test_perfect_accuracy_with_duplicates(self, duplicated_dataset, sequential_split):
        knn = KNNClassifier(1, "euclidean")
        knn.train_from_dataset(duplicated_dataset, sequential_split)

        results = knn.test()
        analysis = results.analyze()

        assert len(results) == 10
        assert analysis.accuracy == 1.0
        assert all(result.probability == 1.0 for result in results)

    def test_bogus_distance_behaves_as_euclidean(self, large_dataset):
        config = SplitConfig(method=SplitMethod.RANDOM, seed=3)

        bogus = KNNClassifier(3, "bogus")
        bogus.train_from_dataset(large_dataset, config)
        euclidean = KNNClassifier(3, "euclidean")
        euclidean.train_from_dataset(large_dataset, config)

        assert [r.predicted for r in bogus.test()] == [r.predicted for r in euclidean.test()]

    def test_results_are_cached(self, duplicated_dataset, sequential_split):
        knn = KNNClassifier(3)
        knn.train_from_dataset(duplicated_dataset, sequential_split)

        results = knn.test()
        assert knn.results is results

    def test_data_returns_split(self, duplicated_dataset, sequential_split):
        knn = KNNClassifier(3)
        knn.train_from_dataset(duplicated_dataset, sequential_split)

        training, testing = knn.data()
        assert len(training) == 30
        assert len(testing) == 10
        assert knn.raw_data is duplicated_dataset

    def test_retrain_replaces_split(self, duplicated_dataset, sequential_split):
        knn = KNNClassifier(1)
        knn.train_from_dataset(duplicated_dataset, sequential_split)
        knn.test()

        knn.retrain(SplitConfig(training_share=0.5, method=SplitMethod.SEQUENTIAL))

        training, testing = knn.data()
        assert len(training) == 20
        assert len(testing) == 20
        assert knn.results is None

    def test_k_is_clamped_to_training_size(self):
        ds = DataSet(["a", "b"], ["x"], [
            Record(label=0, values=[0.0]),
            Record(label=0, values=[1.0]),
            Record(label=1, values=[2.0]),
            Record(label=1, values=[3.0]),
        ])
        knn = KNNClassifier(5)
        knn.train_from_dataset(ds, SplitConfig(training_share=0.5, method=SplitMethod.SEQUENTIAL))

        results = knn.test()
        assert len(results) == 2
        # Both training records are class 0
        assert all(result.predicted == 0 for result in results)
        assert knn.k == 5

    def test_empty_training_data_gives_no_prediction(self):
        ds = DataSet(["a"], ["x"], [Record(label=0, values=[1.0])])
        knn = KNNClassifier(3)
        knn.train_from_dataset(ds, SplitConfig(training_share=0.5, method=SplitMethod.SEQUENTIAL))

        results = knn.test()
        assert results[0].predicted == NO_PREDICTION
        assert results[0].probability == 0.0

    def test_train_from_csv_file(self, tmp_path, duplicated_dataset, sequential_split):
        path = tmp_path / "points.csv"
        path.write_text(duplicated_dataset.to_csv())

        knn = KNNClassifier(1)
        knn.train_from_csv_file(path, sequential_split)
        assert knn.test().analyze().accuracy == 1.0

    def test_train_from_missing_file(self, tmp_path):
        with pytest.raises(DataError):
            KNNClassifier(1).train_from_json_file(tmp_path / "missing.json")
