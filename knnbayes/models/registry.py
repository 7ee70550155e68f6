"""
In-memory registry of classifiers.
"""

from typing import Any, Dict, List

from knnbayes.errors import ValidationError
from knnbayes.models.classifier import Classifier


class ModelRegistry:
    """
    Indexed storage for classifiers, addressed by sequential integer ids.

    Callers create one registry and pass it to whatever needs it. Like the
    classifiers themselves, the registry does no locking.
    """

    def __init__(self):
        self._classifiers: List[Classifier] = []

    def add(self, classifier: Classifier) -> int:
        """
        Register a classifier.

        Args:
            classifier: Any Classifier instance.

        Returns:
            The id assigned to the classifier.
        """
        if classifier is None:
            raise ValidationError("Cannot add a nil classifier")
        self._classifiers.append(classifier)
        return len(self._classifiers) - 1

    def get(self, model_id: int) -> Classifier:
        if model_id < 0 or model_id >= len(self._classifiers):
            raise KeyError(f"No model with id {model_id}")
        return self._classifiers[model_id]

    def list(self) -> List[Dict[str, Any]]:
        """Describe every registered model."""
        return [
            {"id": model_id, "type": classifier.classifier_type, "config": classifier.config()}
            for model_id, classifier in enumerate(self._classifiers)
        ]

    def __len__(self) -> int:
        return len(self._classifiers)
