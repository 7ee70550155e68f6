"""
Synthetic dataset generation.

Each class defines, per attribute, a value range and how its records are
allocated (as percentages) across the five quintiles of that range. Records
are assigned to classes at random, then each class's records are spread over
the quintiles and given a random value inside their quintile. The result is
a fixture with a known, controllable class structure.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from knnbayes.data.dataset import DataSet, Record
from knnbayes.errors import ConfigError

logger = logging.getLogger(__name__)

QUINTILE_COUNT = 5


@dataclass
class AttributeSpec:
    """Value range of one attribute and its per-quintile allocation (percent)."""
    name: str
    lower: float
    upper: float
    allocations: List[float] = field(default_factory=list)


@dataclass
class GeneratorConfig:
    """
    What to generate: the classes, their attributes and the record count.

    Every class must describe the same attributes in the same order; the
    class order here is the class code order of the generated DataSet.
    """
    classes: Dict[str, List[AttributeSpec]] = field(default_factory=dict)
    record_count: int = 100
    seed: Optional[int] = None

    def class_names(self) -> List[str]:
        return list(self.classes)

    @classmethod
    def from_cfg(cls, cfg: Any) -> "GeneratorConfig":
        """
        Build a generator config from a config object (e.g., a Hydra cfg).

        Args:
            cfg: Object exposing ``classes`` (class name -> list of attribute
                entries with ``name``, ``lower``, ``upper``, ``allocations``),
                ``record_count`` and ``seed``.

        Returns:
            GeneratorConfig populated from ``cfg``.
        """
        classes = {}
        for class_name, attributes in (getattr(cfg, 'classes', None) or {}).items():
            classes[str(class_name)] = [
                AttributeSpec(
                    name=str(getattr(attr, 'name')),
                    lower=float(getattr(attr, 'lower', 0.0)),
                    upper=float(getattr(attr, 'upper', 1.0)),
                    allocations=[float(a) for a in getattr(attr, 'allocations', None) or []],
                )
                for attr in attributes or []
            ]

        return cls(
            classes=classes,
            record_count=int(getattr(cfg, 'record_count', 100)),
            seed=getattr(cfg, 'seed', None),
        )


def compute_quintile_distribution(record_count: int, allocations: Sequence[float]) -> List[int]:
    """
    Turn percentage allocations into record counts per quintile.

    Each quintile gets ``int(allocation% * record_count)`` records; whatever
    rounding (or an allocation total under 100) leaves over is handed out
    one record at a time, starting with the first quintile.

    Args:
        record_count: Number of records to distribute, at least 1.
        allocations: Up to five percentages totalling at most 100.

    Returns:
        Five counts summing to ``record_count``.

    Raises:
        ConfigError: On a non-positive count, more than five allocations or
            allocations totalling more than 100.
    """
    if record_count < 1:
        raise ConfigError(f"Record count must be > 0 (got {record_count})")
    if len(allocations) > QUINTILE_COUNT:
        raise ConfigError(f"Only {QUINTILE_COUNT} allocations can be specified (got {len(allocations)})")
    if sum(allocations) > 100.0:
        raise ConfigError(f"Allocations cannot total more than 100 (got {sum(allocations)})")

    counts = [0] * QUINTILE_COUNT
    for idx, allocation in enumerate(allocations):
        counts[idx] = int((allocation / 100) * record_count)

    for i in range(record_count - sum(counts)):
        counts[i % QUINTILE_COUNT] += 1

    return counts


def assign_quintiles(indices: Sequence[int], quintile_counts: Sequence[int]) -> List[List[int]]:
    """
    Fill the quintiles with record indices, in order, up to their counts.

    Args:
        indices: Record indices to place.
        quintile_counts: Capacity of each quintile (at most five).

    Returns:
        Five lists of record indices.

    Raises:
        ConfigError: If more than five counts are given or the counts cannot
            hold every index.
    """
    if len(quintile_counts) > QUINTILE_COUNT:
        raise ConfigError(f"Too many quintiles (only {QUINTILE_COUNT} permitted): {len(quintile_counts)}")
    if sum(quintile_counts) < len(indices):
        raise ConfigError(
            f"Quintile counts hold {sum(quintile_counts)} records, {len(indices)} given"
        )

    capacities = list(quintile_counts) + [0] * (QUINTILE_COUNT - len(quintile_counts))
    quintiles = []
    start = 0
    for capacity in capacities:
        quintiles.append(list(indices[start:start + capacity]))
        start += capacity
    return quintiles


def compute_attribute_value(lower: float, upper: float, quintile: int,
                            rng: np.random.Generator) -> float:
    """
    Draw a value inside one quintile of ``[lower, upper]``.

    Values are whole percentages of the range: quintile 0 covers 0-20%,
    quintile ``q > 0`` covers ``20q + 1`` to ``20q + 20`` percent.
    """
    if not 0 <= quintile < QUINTILE_COUNT:
        raise ValueError(f"Quintile must be in [0, {QUINTILE_COUNT}), got {quintile}")

    if quintile == 0:
        percent = int(rng.integers(0, 21))
    else:
        percent = quintile * 20 + int(rng.integers(1, 21))

    return lower + (upper - lower) * percent / 100.0


def assign_classes(record_count: int, class_count: int,
                   rng: np.random.Generator) -> List[List[int]]:
    """Assign every record index a uniformly random class (counts are not balanced)."""
    indices_by_class: List[List[int]] = [[] for _ in range(class_count)]
    for record_idx, class_idx in enumerate(rng.integers(0, class_count, size=record_count)):
        indices_by_class[int(class_idx)].append(record_idx)
    return indices_by_class


def _attribute_names(config: GeneratorConfig) -> List[str]:
    if not config.classes:
        raise ConfigError("At least one class must be defined")

    class_names = config.class_names()
    names = [attr.name for attr in config.classes[class_names[0]]]
    for class_name in class_names[1:]:
        if [attr.name for attr in config.classes[class_name]] != names:
            raise ConfigError(
                f"Class {class_name!r} does not define the same attributes as {class_names[0]!r}",
                hint=f"every class needs the attributes {names}",
            )
    return names


def generate_dataset(config: GeneratorConfig) -> DataSet:
    """
    Generate a random DataSet from the configuration.

    Args:
        config: Classes, attribute ranges, allocations and record count.

    Returns:
        A validated DataSet with ``config.record_count`` records.

    Raises:
        ConfigError: If the configuration is inconsistent.
    """
    if config.record_count < 0:
        raise ConfigError(f"Record count must not be negative (got {config.record_count})")

    attribute_names = _attribute_names(config)
    class_names = config.class_names()
    rng = np.random.default_rng(config.seed)

    records = [
        Record(label=0, values=[0.0] * len(attribute_names))
        for _ in range(config.record_count)
    ]

    indices_by_class = assign_classes(config.record_count, len(class_names), rng)
    for class_idx, indices in enumerate(indices_by_class):
        logger.debug("Class %s: %d records", class_names[class_idx], len(indices))
        for record_idx in indices:
            records[record_idx].label = class_idx

        # A class drawn for no record has nothing to distribute
        if not indices:
            continue

        for attr_idx, attr in enumerate(config.classes[class_names[class_idx]]):
            counts = compute_quintile_distribution(len(indices), attr.allocations)
            for quintile, members in enumerate(assign_quintiles(indices, counts)):
                for record_idx in members:
                    records[record_idx].values[attr_idx] = compute_attribute_value(
                        attr.lower, attr.upper, quintile, rng
                    )

    logger.info("Generated %d records over %d classes", len(records), len(class_names))
    return DataSet(class_names, attribute_names, records)
