"""
Datasets of labeled records, the train/test split engine and synthetic data
"""

from knnbayes.data.dataset import DataSet, Record, SplitConfig, SplitMethod
from knnbayes.data.generator import AttributeSpec, GeneratorConfig, generate_dataset

__all__ = [
    'DataSet', 'Record', 'SplitConfig', 'SplitMethod',
    'AttributeSpec', 'GeneratorConfig', 'generate_dataset',
]
