# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared datasets for the classifier tests.
# ==============================================

import pytest

from knnbayes.data.dataset import DataSet, Record, SplitConfig, SplitMethod
from knnbayes.data.generator import AttributeSpec, GeneratorConfig, generate_dataset


# Two well separated clusters: class 0 near the origin, class 1 near (9, 9).
SEPARATED_POINTS = [
    (0, [0.0, 0.0]),
    (0, [1.0, 1.0]),
    (0, [2.0, 2.0]),
    (0, [0.5, 1.5]),
    (0, [1.5, 0.5]),
    (1, [8.0, 8.0]),
    (1, [9.0, 9.0]),
    (1, [10.0, 10.0]),
    (1, [8.5, 9.5]),
    (1, [9.5, 8.5]),
]


@pytest.fixture
def five_records():
    """The five-record sample with three class-0 and two class-1 records."""
    return [
        Record(label=0, values=[1.0, 1.0]),
        Record(label=0, values=[5.0, 5.0]),
        Record(label=1, values=[13.0, 1.0]),
        Record(label=1, values=[20.0, 7.5]),
        Record(label=0, values=[9.8, 10.0]),
    ]


@pytest.fixture
def small_dataset(five_records):
    return DataSet(["foo", "bar"], ["a", "b"], five_records)


@pytest.fixture
def large_dataset():
    """40 distinct records over two classes."""
    records = [
        Record(label=i % 2, values=[float(i), float(i * 3 % 7)])
        for i in range(40)
    ]
    return DataSet(["even", "odd"], ["x", "y"], records)


@pytest.fixture
def duplicated_dataset():
    """
    The separated points repeated four times.

    A sequential 75% split puts three full copies in the training data and
    the last copy in the test data, so every test record has an exact
    duplicate of the same class in the training data.
    """
    records = [
        Record(label=label, values=list(values))
        for _ in range(4)
        for label, values in SEPARATED_POINTS
    ]
    return DataSet(["near", "far"], ["width", "length"], records)


@pytest.fixture
def sequential_split():
    return SplitConfig(training_share=0.75, method=SplitMethod.SEQUENTIAL)


@pytest.fixture
def separated_generator_config():
    """Two classes whose records sit in opposite quintiles of [0, 100]."""
    def attributes(allocations):
        return [
            AttributeSpec(name="x", lower=0.0, upper=100.0, allocations=allocations),
            AttributeSpec(name="y", lower=0.0, upper=100.0, allocations=allocations),
        ]

    return GeneratorConfig(
        classes={
            "low": attributes([100.0]),
            "high": attributes([0.0, 0.0, 0.0, 0.0, 100.0]),
        },
        record_count=200,
        seed=7,
    )


@pytest.fixture
def generated_dataset(separated_generator_config):
    """200 generated records in two well separated classes."""
    return generate_dataset(separated_generator_config)
