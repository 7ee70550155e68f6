"""
knnbayes - labeled numeric records, train/test splitting, and two classifiers
(k-Nearest-Neighbors and discretized Naive Bayes).
"""

__version__ = '0.1.0'

from knnbayes.data.dataset import DataSet, Record, SplitConfig, SplitMethod
from knnbayes.models.classifier import Classifier, TestResult, TestResults, TestResultsAnalysis
from knnbayes.models.KNN import KNNClassifier
from knnbayes.models.naive_bayes import NaiveBayesClassifier
from knnbayes.models.registry import ModelRegistry

__all__ = [
    'DataSet', 'Record', 'SplitConfig', 'SplitMethod',
    'Classifier', 'TestResult', 'TestResults', 'TestResultsAnalysis',
    'KNNClassifier', 'NaiveBayesClassifier', 'ModelRegistry',
]
