"""
The shadow model benchmark (datasets).
Implementation of the benchmark dataset registry and of the classes describing classified datasets
"""

from shadowbench.utils.datasets.datasets import AttributeKind, AttributeConfigRow, DataType, AttributeType, \
    Hierarchy, MicroAggregationFunction, AttributeDefinition, DataDefinition, Data, SUPPRESSED_VALUE
from shadowbench.utils.datasets.registry import BenchmarkDataset, DatasetResources, DatasetRegistry, resolve
