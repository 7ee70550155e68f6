"""
Labeled numeric records and the training/test split engine.
"""

import csv
import io
import json
import logging
import math
import numbers
import random
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from knnbayes.errors import DataError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_TRAINING_SHARE = 0.75
CSV_CLASS_COLUMN = "class"


@dataclass
class Record:
    """A single labeled sample: a class index plus its attribute values."""
    label: int
    values: List[float] = field(default_factory=list)

    def copy(self) -> "Record":
        return Record(label=self.label, values=list(self.values))

    def to_dict(self) -> Dict[str, Any]:
        return {"class": self.label, "values": list(self.values)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Record":
        try:
            return cls(
                label=int(data["class"]),
                values=[float(v) for v in data.get("values") or []],
            )
        except (KeyError, TypeError, ValueError) as err:
            raise DataError(f"Malformed record {data!r}") from err


class SplitMethod(Enum):
    RANDOM = "random"
    SEQUENTIAL = "sequential"


@dataclass
class SplitConfig:
    """
    How a DataSet is partitioned into training and test subsets.

    A ``training_share`` of 0 or None is treated as "use the defaults": a
    random split with the default share, whatever ``method`` says.
    Setting ``seed`` makes random splits reproducible.
    """
    training_share: Optional[float] = DEFAULT_TRAINING_SHARE
    method: SplitMethod = SplitMethod.RANDOM
    seed: Optional[int] = None

    @classmethod
    def from_cfg(cls, cfg: Optional[Any] = None) -> "SplitConfig":
        """
        Build a split config from a config object (e.g., cfg.data).

        Args:
            cfg: Optional object exposing ``training_share``, ``method`` and ``seed``.

        Returns:
            SplitConfig populated from ``cfg``, or the defaults.
        """
        if cfg is None:
            return cls()

        method = getattr(cfg, 'method', SplitMethod.RANDOM)
        if not isinstance(method, SplitMethod):
            try:
                method = SplitMethod(str(method).lower())
            except ValueError as err:
                raise DataError(f"Unknown split method: {method!r}") from err

        return cls(
            training_share=getattr(cfg, 'training_share', DEFAULT_TRAINING_SHARE),
            method=method,
            seed=getattr(cfg, 'seed', None),
        )


class DataSet:
    """
    A collection of labeled records plus the names of classes and attributes.

    Record labels index into ``class_names``; record values are ordered the
    same way as ``attribute_names``. Operations that produce different
    records (``split``) return new DataSets and leave this one untouched.
    """

    def __init__(
        self,
        class_names: Sequence[str],
        attribute_names: Sequence[str],
        records: Optional[Sequence[Record]] = None
    ):
        """
        Initialize and validate the dataset.

        Args:
            class_names: Class names, the position of each name is its class code.
            attribute_names: Attribute names, in record value order.
            records: Labeled records. None or empty skips validation.

        Raises:
            ValidationError: If a record has an out-of-range class or more
                values than there are attributes.
        """
        self.class_names: List[str] = list(class_names or [])
        self.attribute_names: List[str] = list(attribute_names or [])
        self.records: List[Record] = list(records or [])

        if self.records:
            self._validate()

    def _validate(self) -> None:
        class_count = len(self.class_names)
        attribute_count = len(self.attribute_names)

        for idx, record in enumerate(self.records):
            if (not isinstance(record.label, numbers.Integral)
                    or isinstance(record.label, bool)
                    or record.label < 0 or record.label >= class_count):
                raise ValidationError(
                    f"At least one record has an invalid class "
                    f"(record {idx} has class {record.label}, "
                    f"{class_count} classes declared)"
                )

        for idx, record in enumerate(self.records):
            if len(record.values) > attribute_count:
                raise ValidationError(
                    f"At least one record has too many attributes "
                    f"(record {idx} has {len(record.values)} values, "
                    f"{attribute_count} attributes declared)"
                )

    def __len__(self) -> int:
        """Return the number of records in the dataset."""
        return len(self.records)

    def get_records_by_class(self, class_idx: int) -> List[Record]:
        """
        Get all records belonging to a specific class.

        Args:
            class_idx: Index of the class.

        Returns:
            List of records labeled ``class_idx``.
        """
        return [record for record in self.records if record.label == class_idx]

    def _create_subset(self, records: List[Record]) -> "DataSet":
        """
        Create a new dataset sharing this dataset's class and attribute names.

        Args:
            records: Records for the new dataset (already copies).

        Returns:
            New DataSet instance with the subset.
        """
        return DataSet(self.class_names, self.attribute_names, records)

    def split(self, config: Optional[SplitConfig] = None) -> Tuple["DataSet", "DataSet"]:
        """
        Split the dataset into training and test sets.

        The first ``floor(len(records) * training_share)`` records of the
        chosen ordering become the training set, the rest the test set.
        Sequential splits keep the original order. Random splits use a fresh
        uniform permutation on every call (Fisher-Yates via ``random.shuffle``)
        unless ``config.seed`` is set. Records are copied, so mutating either
        subset never affects this dataset.

        Args:
            config: Split configuration. None, or a zero share, means a
                random 75/25 split.

        Returns:
            Tuple of (training_dataset, test_dataset).

        Raises:
            DataError: If the training share is outside (0, 1].
        """
        config = config or SplitConfig()

        training_share = config.training_share
        method = config.method
        if not training_share:
            training_share = DEFAULT_TRAINING_SHARE
            method = SplitMethod.RANDOM
        if not (0.0 < training_share <= 1.0):
            raise DataError(
                f"Training share must be in (0, 1], got {training_share}"
            )

        ordered = [record.copy() for record in self.records]
        if method == SplitMethod.RANDOM:
            rng = random.Random(config.seed) if config.seed is not None else random
            rng.shuffle(ordered)
        elif method != SplitMethod.SEQUENTIAL:
            raise DataError(f"Unknown split method: {method!r}")

        split_point = math.floor(len(ordered) * training_share)
        logger.debug(
            "Splitting %d records (%s) at %d",
            len(ordered), method.value, split_point
        )

        return (
            self._create_subset(ordered[:split_point]),
            self._create_subset(ordered[split_point:]),
        )

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "classes": list(self.class_names),
            "attributes": list(self.attribute_names),
            "data": [record.to_dict() for record in self.records],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DataSet":
        """
        Build a dataset from its decoded JSON shape.

        Args:
            data: ``{"classes": [...], "attributes": [...], "data": [...]}``

        Returns:
            Validated DataSet.
        """
        if not isinstance(data, dict):
            raise DataError(f"Expected a JSON object, got {type(data).__name__}")

        records = data.get("data")
        return cls(
            data.get("classes") or [],
            data.get("attributes") or [],
            [Record.from_dict(r) for r in records] if records is not None else None,
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> "DataSet":
        try:
            data = json.loads(text)
        except ValueError as err:
            raise DataError("While creating DataSet from JSON") from err
        return cls.from_dict(data)

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "DataSet":
        try:
            text = Path(path).read_text()
        except OSError as err:
            raise DataError(f"Unable to read JSON file: {path}") from err
        return cls.from_json(text)

    def to_csv(self) -> str:
        """
        Render the dataset as CSV.

        The header lists the attribute names followed by a ``class`` column;
        values are written with 6 decimal digits and the class by name.
        Names containing commas or quotes are quoted.
        """
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(self.attribute_names + [CSV_CLASS_COLUMN])
        for record in self.records:
            fields = ["%f" % value for value in record.values]
            fields.append(self.class_names[record.label])
            writer.writerow(fields)
        return buffer.getvalue()

    @classmethod
    def from_csv(cls, text: Union[str, bytes]) -> "DataSet":
        """
        Build a dataset from CSV text.

        The last column holds class names; class codes are assigned in
        order of first appearance. Blank lines are skipped.

        Args:
            text: CSV content including the header row.

        Returns:
            Validated DataSet.

        Raises:
            DataError: If a row has the wrong number of columns or a value
                cannot be parsed as a float.
        """
        if isinstance(text, bytes):
            text = text.decode("utf-8")

        rows = csv.reader(io.StringIO(text))
        header = next(rows, None)
        if not header:
            raise DataError("CSV data has no header row")

        attribute_names = header[:-1]
        attribute_count = len(attribute_names)

        class_to_idx: Dict[str, int] = {}
        records: List[Record] = []

        # Header is line 1
        for line_no, row in enumerate(rows, start=2):
            if not row or all(not cell.strip() for cell in row):
                continue

            if len(row) - 1 != attribute_count:
                raise DataError(f"Invalid data at line {line_no}")

            values = []
            for attr_idx, raw in enumerate(row[:-1]):
                try:
                    values.append(float(raw))
                except ValueError as err:
                    raise DataError(
                        f"Unable to parse attribute value {raw!r}, index {attr_idx}, "
                        f"at line {line_no} into float"
                    ) from err

            class_name = row[-1]
            if class_name not in class_to_idx:
                class_to_idx[class_name] = len(class_to_idx)

            records.append(Record(label=class_to_idx[class_name], values=values))

        return cls(list(class_to_idx), attribute_names, records)

    @classmethod
    def from_csv_file(cls, path: Union[str, Path]) -> "DataSet":
        try:
            text = Path(path).read_text()
        except OSError as err:
            raise DataError(f"Unable to read CSV file: {path}") from err
        return cls.from_csv(text)

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def summary(self) -> Dict[str, Any]:
        """
        Get a summary of the dataset.

        Returns:
            Dictionary with dataset statistics.
        """
        class_distribution = {
            class_name: len(self.get_records_by_class(class_idx))
            for class_idx, class_name in enumerate(self.class_names)
        }

        return {
            "total_records": len(self.records),
            "num_classes": len(self.class_names),
            "num_attributes": len(self.attribute_names),
            "class_names": list(self.class_names),
            "attribute_names": list(self.attribute_names),
            "class_distribution": class_distribution,
        }

    def print_summary(self, title: str = "Dataset Summary") -> None:
        """
        Print a formatted summary of the dataset.

        Args:
            title: Title to display at the top of the summary.
        """
        stats = self.summary()

        print(f"\n   {title}")
        print(f"   {'=' * 50}")
        print(f"   Total Records: {stats['total_records']}")
        print(f"   Attributes: {', '.join(stats['attribute_names'])}")
        print(f"   Number of Classes: {stats['num_classes']}")
        print(f"\n   Class Distribution:")
        print(f"   {'-' * 30}")

        for class_name, count in stats['class_distribution'].items():
            if stats['total_records']:
                percentage = (count / stats['total_records']) * 100
            else:
                percentage = 0.0
            bar = '█' * int(percentage / 5)
            print(f"   {class_name:12} | {count:4} records | {percentage:5.1f}% | {bar}")

        print(f"   {'-' * 30}")

    def __repr__(self) -> str:
        """Return string representation of the dataset."""
        return (
            f"DataSet(records={len(self.records)}, "
            f"classes={len(self.class_names)}, "
            f"attributes={len(self.attribute_names)})"
        )
