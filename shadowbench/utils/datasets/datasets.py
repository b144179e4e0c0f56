# !/usr/bin/env python
"""
The shadow model benchmark (datasets).
Implementation of the classes describing a benchmark dataset and how each of its attributes is anonymized
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Collection, Iterator, List, Optional

import numpy as np
import pandas as pd

SUPPRESSED_VALUE = '*'


class AttributeKind(Enum):
    """Kinds of attributes that may appear in an attribute configuration file"""
    CATEGORICAL = 'categorical'
    CONTINUOUS = 'continuous'
    ORDINAL = 'ordinal'


@dataclass(frozen=True)
class AttributeConfigRow:
    """
    One row of an attribute configuration file.

    :param name: the attribute (column) name
    :param kind: the attribute kind as written in the file (categorical, continuous or ordinal)
    :param included: whether the attribute takes part in the anonymization
    :param is_quasi_identifier: whether the attribute is a quasi-identifier
    """
    name: str
    kind: str
    included: bool
    is_quasi_identifier: bool


@dataclass(frozen=True)
class DataType:
    """
    Semantic data type of an attribute.

    :param name: 'string' or 'decimal'
    :param format: display format of decimals, e.g. '#.#' for at most one fractional digit
    :param locale: locale of the display format
    """
    name: str
    format: Optional[str] = None
    locale: Optional[str] = None

    @staticmethod
    def decimal(fmt: str = '#.#', locale: str = 'en_US') -> 'DataType':
        return DataType('decimal', fmt, locale)

    @property
    def is_decimal(self) -> bool:
        return self.name == 'decimal'

    def format_value(self, value) -> str:
        """
        Render a value for output.

        :param value: the value to render
        :return: the value as string. Decimals are rounded to the precision of the format, without trailing zeros.
        """
        if not self.is_decimal:
            return str(value)
        digits = len(self.format.split('.')[1]) if self.format and '.' in self.format else 0
        return np.format_float_positional(np.round(float(value), digits), precision=digits, trim='-')


DataType.STRING = DataType('string')


class AttributeType(Enum):
    QUASI_IDENTIFYING = 'quasi-identifying'
    INSENSITIVE = 'insensitive'


class Hierarchy:
    """
    Generalization hierarchy of an attribute.

    Every row maps one original value (first column) to increasingly coarse generalizations (following columns).

    :param frame: the hierarchy table
    :type frame: pandas DataFrame
    """

    def __init__(self, frame: pd.DataFrame):
        if frame.shape[0] == 0 or frame.shape[1] == 0:
            raise ValueError("Hierarchy must contain at least one value")
        self.frame = frame.astype(str).reset_index(drop=True)
        self.frame.columns = range(self.frame.shape[1])
        self._levels = [dict(zip(self.frame[0], self.frame[level])) for level in range(self.frame.shape[1])]

    @property
    def height(self) -> int:
        """Number of generalization levels, including the original values (level 0)"""
        return len(self._levels)

    def values(self) -> List[str]:
        return list(self._levels[0].keys())

    def generalize(self, value: str, level: int) -> str:
        """
        Generalize a value.

        :param value: the original value
        :type value: string
        :param level: the generalization level, between 0 and height - 1
        :type level: int
        :return: the generalized value
        :raises KeyError: if the value is not covered by the hierarchy
        """
        return self._levels[level][value]

    def level_mapping(self, level: int) -> dict:
        """Mapping of every original value to its generalization on the given level"""
        return dict(self._levels[level])

    def __eq__(self, other):
        if not isinstance(other, Hierarchy):
            return NotImplemented
        return self.frame.equals(other.frame)

    def __repr__(self):
        return f"Hierarchy(values={len(self._levels[0])}, height={self.height})"


class MicroAggregationFunction:
    """
    Aggregation producing the representative value of a group of numeric values.

    :param name: name of the function
    :param function: callable reducing an array of floats to a single float
    """

    def __init__(self, name: str, function: Callable[[np.ndarray], float]):
        self.name = name
        self._function = function

    @staticmethod
    def arithmetic_mean() -> 'MicroAggregationFunction':
        return MicroAggregationFunction('arithmetic mean', np.mean)

    def aggregate(self, values: Collection) -> float:
        return float(self._function(np.asarray(values, dtype=float)))

    def __eq__(self, other):
        if not isinstance(other, MicroAggregationFunction):
            return NotImplemented
        return self.name == other.name

    def __repr__(self):
        return f"MicroAggregationFunction({self.name!r})"


@dataclass
class AttributeDefinition:
    """
    How a single attribute is treated by the anonymization.

    :param data_type: semantic data type
    :param attribute_type: quasi-identifying or insensitive
    :param hierarchy: generalization hierarchy, only for quasi-identifiers
    :param aggregation_function: aggregation of generalized numeric values, only for continuous quasi-identifiers
    """
    data_type: DataType
    attribute_type: AttributeType
    hierarchy: Optional[Hierarchy] = None
    aggregation_function: Optional[MicroAggregationFunction] = None

    @property
    def is_quasi_identifier(self) -> bool:
        return self.attribute_type == AttributeType.QUASI_IDENTIFYING


class DataDefinition:
    """Ordered mapping of attribute names to their `AttributeDefinition`"""

    def __init__(self):
        self._attributes = {}

    def set_attribute(self, name: str, definition: AttributeDefinition):
        if definition.is_quasi_identifier and definition.hierarchy is None:
            raise ValueError(f"Quasi-identifier {name} requires a generalization hierarchy")
        self._attributes[name] = definition

    def get(self, name: str) -> Optional[AttributeDefinition]:
        return self._attributes.get(name)

    @property
    def names(self) -> List[str]:
        return list(self._attributes.keys())

    @property
    def quasi_identifiers(self) -> List[str]:
        return [name for name, definition in self._attributes.items() if definition.is_quasi_identifier]

    @property
    def insensitive_attributes(self) -> List[str]:
        return [name for name, definition in self._attributes.items() if not definition.is_quasi_identifier]

    def __contains__(self, name):
        return name in self._attributes

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)

    def __len__(self):
        return len(self._attributes)

    def __eq__(self, other):
        if not isinstance(other, DataDefinition):
            return NotImplemented
        return list(self._attributes.items()) == list(other._attributes.items())


class Data:
    """
    A benchmark dataset together with the definition of its attributes.

    Columns without a definition are kept in the records but are not touched by the anonymization.

    :param frame: the records, all cells as strings
    :type frame: pandas DataFrame
    :param definition: the attribute definitions
    :type definition: `DataDefinition`, optional
    :param name: a name to identify the dataset, optional
    :type name: string, optional
    """

    def __init__(self, frame: pd.DataFrame, definition: Optional[DataDefinition] = None, name: Optional[str] = None):
        self.frame = frame
        self.definition = definition if definition is not None else DataDefinition()
        self.name = name

        missing = [attribute for attribute in self.definition if attribute not in frame.columns]
        if missing:
            raise ValueError(f"Defined attributes are missing from the data: {missing}")

    def get_samples(self) -> pd.DataFrame:
        """
        Get the records

        :return: the records as pandas DataFrame
        """
        return self.frame

    @property
    def features_names(self) -> List[str]:
        return self.frame.columns.to_list()

    def copy(self) -> 'Data':
        return Data(self.frame.copy(), self.definition, self.name)

    def __len__(self):
        return len(self.frame)

    def __eq__(self, other):
        if not isinstance(other, Data):
            return NotImplemented
        return self.name == other.name and self.frame.equals(other.frame) and self.definition == other.definition

    def __repr__(self):
        return f"Data(name={self.name!r}, records={len(self.frame)}, attributes={self.definition.names})"
