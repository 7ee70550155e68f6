"""
Classifiers and the model registry
"""

from knnbayes.models.classifier import Classifier, TestResults, NO_PREDICTION
from knnbayes.models.KNN import KNNClassifier
from knnbayes.models.naive_bayes import NaiveBayesClassifier
from knnbayes.models.registry import ModelRegistry

__all__ = ['Classifier', 'TestResults', 'NO_PREDICTION',
           'KNNClassifier', 'NaiveBayesClassifier', 'ModelRegistry']
