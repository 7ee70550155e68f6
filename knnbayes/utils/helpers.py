"""
Helper utility functions.
"""

import json
import math
import os
from pathlib import Path
from typing import Iterable, Union

from knnbayes.data.dataset import DataSet
from knnbayes.errors import DataError


def ensure_dir(path: str):
    """
    Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
    """
    os.makedirs(path, exist_ok=True)


def load_dataset(path: Union[str, Path]) -> DataSet:
    """
    Load a dataset, choosing the decoder from the file extension.

    Args:
        path: Path to a ``.csv`` or ``.json`` file.

    Returns:
        The decoded DataSet.
    """
    suffix = Path(path).suffix.lower()
    if suffix == '.csv':
        return DataSet.from_csv_file(path)
    if suffix == '.json':
        return DataSet.from_json_file(path)
    raise DataError(f"Unsupported dataset format: {path}", hint="use a .csv or .json file")


def save_results(results: Iterable, analysis, path: Union[str, Path]) -> Path:
    """
    Write test results and their analysis as JSON.

    Args:
        results: TestResult objects.
        analysis: TestResultsAnalysis for ``results``.
        path: Output file path; parent directories are created.

    Returns:
        The path written.
    """
    path = Path(path)
    ensure_dir(str(path.parent))
    payload = {
        "analysis": analysis.to_dict(),
        "results": [result.to_dict() for result in results],
    }
    # NaN accuracy (no results) is written as null
    if math.isnan(payload["analysis"]["accuracy"]):
        payload["analysis"]["accuracy"] = None
    path.write_text(json.dumps(payload, indent=2))
    return path
