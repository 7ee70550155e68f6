"""
Training pipeline for the classifiers.
"""

import logging
from typing import Any, Optional, Tuple

from knnbayes.data.dataset import DataSet, SplitConfig
from knnbayes.models.classifier import Classifier, TestResults, TestResultsAnalysis

logger = logging.getLogger(__name__)


class Trainer:
    """Trainer class for model training and evaluation."""

    def __init__(self, model: Classifier, config: Optional[Any] = None):
        """
        Initialize the trainer.

        Args:
            model: The classifier model to train.
            config: Split configuration, either a SplitConfig or a config
                object with ``training_share``/``method``/``seed`` (e.g., cfg.data).
        """
        self.model = model
        if isinstance(config, SplitConfig):
            self.split_config = config
        else:
            self.split_config = SplitConfig.from_cfg(config)

    def train(self, dataset: DataSet) -> None:
        """
        Train the model.

        Args:
            dataset: Full dataset, split into training and test data by the model.
        """
        logger.info("Training %s on %d records", self.model.classifier_type, len(dataset))
        self.model.train_from_dataset(dataset, self.split_config)

    def evaluate(self) -> Tuple[TestResults, TestResultsAnalysis]:
        """
        Evaluate the model on its held-out test data.

        Returns:
            Tuple of (test results, accuracy analysis).
        """
        results = self.model.test()
        analysis = results.analyze()
        logger.info(
            "%s: %d/%d correct (accuracy %.4f)",
            self.model.classifier_type, analysis.correct_count,
            analysis.result_count, analysis.accuracy
        )
        return results, analysis
