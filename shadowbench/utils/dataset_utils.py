"""
Loading and classification of the benchmark datasets.

``classify`` (also available as ``get_data``) is the main entry point: it reads the attribute configuration of a
dataset and returns the dataset records together with the definition of every included attribute, ready to be
anonymized.
"""
from typing import List, Optional, Union

import logging
import pandas as pd

from shadowbench.errors import AttributeConfigError, InvalidAttributeTypeError, ResourceLoadError, \
    UnsupportedAttributeKindError
from shadowbench.utils.datasets import AttributeConfigRow, AttributeDefinition, AttributeKind, AttributeType, \
    BenchmarkDataset, Data, DataDefinition, DataType, DatasetRegistry, DatasetResources, Hierarchy, \
    MicroAggregationFunction

logger = logging.getLogger(__name__)

DATASET_TYPE = Union[BenchmarkDataset, str]

CONFIG_COLUMNS = 4
TRUE_LITERAL = 'TRUE'

_default_registry = DatasetRegistry()


def _resources(dataset: DATASET_TYPE, registry: Optional[DatasetRegistry]) -> DatasetResources:
    return (registry or _default_registry).resolve(dataset)


def _read_csv(path: str, delimiter: str, charset: str, header: Optional[int],
              allow_empty: bool = False) -> pd.DataFrame:
    try:
        return pd.read_csv(path, sep=delimiter, encoding=charset, header=header, dtype=str,
                           keep_default_na=False)
    except pd.errors.EmptyDataError as e:
        if allow_empty:
            return pd.DataFrame()
        raise ResourceLoadError(path, f"Resource {path} is empty") from e
    except (OSError, LookupError, UnicodeDecodeError, pd.errors.ParserError) as e:
        logger.error("Failed to read %s: %s", path, e)
        raise ResourceLoadError(path, f"Could not load resource {path}: {e}") from e


def load_data(dataset: DATASET_TYPE, registry: Optional[DatasetRegistry] = None) -> pd.DataFrame:
    """
    Loads the raw records of a benchmark dataset.

    :param dataset: the dataset to load
    :type dataset: `BenchmarkDataset` or string
    :param registry: registry used to locate the dataset files. Default is paths relative to the working directory.
    :type registry: `DatasetRegistry`, optional
    :return: the records as pandas DataFrame with string cells, columns named after the header row
    :raises ResourceLoadError: if the file cannot be read
    """
    resources = _resources(dataset, registry)
    return _load_data(resources)


def _load_data(resources: DatasetResources) -> pd.DataFrame:
    path = resources.data_source_path
    frame = _read_csv(path, resources.delimiter, resources.charset, header=0)
    logger.info("Loaded %d records with %d attributes from %s", frame.shape[0], frame.shape[1], path)
    return frame


def load_data_config(dataset: DATASET_TYPE, registry: Optional[DatasetRegistry] = None) -> List[AttributeConfigRow]:
    """
    Loads the attribute configuration of a benchmark dataset.

    Every row holds the attribute name, its kind, whether it is included and whether it is a quasi-identifier. The
    two flags are true only for the literal ``TRUE``. The file has no header row.

    :param dataset: the dataset
    :type dataset: `BenchmarkDataset` or string
    :param registry: registry used to locate the dataset files, optional
    :type registry: `DatasetRegistry`, optional
    :return: the configuration rows, in file order
    :raises ResourceLoadError: if the file cannot be read
    :raises AttributeConfigError: if a row does not have exactly four fields
    """
    resources = _resources(dataset, registry)
    return _load_data_config(resources)


def _load_data_config(resources: DatasetResources) -> List[AttributeConfigRow]:
    path = resources.attribute_config_path
    try:
        frame = _read_csv(path, resources.delimiter, resources.charset, header=None, allow_empty=True)
    except ResourceLoadError as e:
        # pandas rejects rows longer than the first one
        if isinstance(e.__cause__, pd.errors.ParserError):
            raise AttributeConfigError(f"Attribute configuration {path} must have {CONFIG_COLUMNS} columns: "
                                       f"{e.__cause__}") from e.__cause__
        raise
    if frame.empty:
        logger.warning("Attribute configuration %s is empty", path)
        return []

    if frame.shape[1] != CONFIG_COLUMNS:
        raise AttributeConfigError(f"Attribute configuration {path} must have {CONFIG_COLUMNS} columns, "
                                   f"found {frame.shape[1]}")

    rows = []
    for index, (name, kind, included, is_qi) in enumerate(frame.itertuples(index=False, name=None)):
        if any(pd.isna(field) for field in (name, kind, included, is_qi)):
            raise AttributeConfigError(f"Row {index} of {path} does not have {CONFIG_COLUMNS} fields")
        rows.append(AttributeConfigRow(name=name.strip(),
                                       kind=kind.strip(),
                                       included=included.strip() == TRUE_LITERAL,
                                       is_quasi_identifier=is_qi.strip() == TRUE_LITERAL))
    return rows


def load_hierarchy(dataset: DATASET_TYPE, attribute: str, registry: Optional[DatasetRegistry] = None) -> Hierarchy:
    """
    Loads the generalization hierarchy of an attribute of a benchmark dataset.

    :param dataset: the dataset
    :type dataset: `BenchmarkDataset` or string
    :param attribute: the attribute name
    :type attribute: string
    :param registry: registry used to locate the dataset files, optional
    :type registry: `DatasetRegistry`, optional
    :return: the `Hierarchy`
    :raises ResourceLoadError: if the file cannot be read or holds no values
    """
    resources = _resources(dataset, registry)
    return _load_hierarchy(resources, attribute)


def _load_hierarchy(resources: DatasetResources, attribute: str) -> Hierarchy:
    path = resources.hierarchy_path(attribute)
    frame = _read_csv(path, resources.hierarchy_delimiter, resources.charset, header=None)
    try:
        return Hierarchy(frame)
    except ValueError as e:
        raise ResourceLoadError(path, f"Hierarchy {path} holds no values") from e


def _define_attribute(resources: DatasetResources, row: AttributeConfigRow) -> AttributeDefinition:
    if row.kind == AttributeKind.CATEGORICAL.value:
        if row.is_quasi_identifier:
            return AttributeDefinition(DataType.STRING, AttributeType.QUASI_IDENTIFYING,
                                       hierarchy=_load_hierarchy(resources, row.name))
        return AttributeDefinition(DataType.STRING, AttributeType.INSENSITIVE)

    if row.kind == AttributeKind.CONTINUOUS.value:
        data_type = DataType.decimal('#.#', 'en_US')
        if row.is_quasi_identifier:
            return AttributeDefinition(data_type, AttributeType.QUASI_IDENTIFYING,
                                       hierarchy=_load_hierarchy(resources, row.name),
                                       aggregation_function=MicroAggregationFunction.arithmetic_mean())
        return AttributeDefinition(data_type, AttributeType.INSENSITIVE)

    if row.kind == AttributeKind.ORDINAL.value:
        raise UnsupportedAttributeKindError(f"Ordinal attribute {row.name} is not supported", row.name)

    raise InvalidAttributeTypeError(f"Invalid kind {row.kind!r} for attribute {row.name}", row.name)


def classify(dataset: DATASET_TYPE, registry: Optional[DatasetRegistry] = None) -> Data:
    """
    Loads a benchmark dataset and defines how each of its included attributes is anonymized.

    Categorical attributes are strings, continuous attributes are decimals with one fractional digit (US locale).
    Quasi-identifiers get their generalization hierarchy, continuous quasi-identifiers additionally get the
    arithmetic mean as aggregation function. All other included attributes are insensitive. Excluded attributes
    get no definition. Nothing is cached, every call loads the dataset anew.

    :param dataset: the dataset to load
    :type dataset: `BenchmarkDataset` or string
    :param registry: registry used to locate the dataset files, optional
    :type registry: `DatasetRegistry`, optional
    :return: the classified dataset as `Data`
    :raises UnknownDatasetError: if the dataset is not a benchmark dataset
    :raises ResourceLoadError: if a file of the dataset cannot be read
    :raises UnsupportedAttributeKindError: if an included attribute is ordinal
    :raises InvalidAttributeTypeError: if an included attribute has an unknown kind
    """
    resources = _resources(dataset, registry)
    config = _load_data_config(resources)
    frame = _load_data(resources)

    # the definition is only attached once every row is classified
    definition = DataDefinition()
    for row in config:
        if not row.included:
            continue
        attribute = _define_attribute(resources, row)
        if row.name not in frame.columns:
            raise AttributeConfigError(f"Attribute {row.name} is not a column of "
                                       f"{resources.data_source_path}", row.name)
        definition.set_attribute(row.name, attribute)

    name = DatasetRegistry.parse(dataset).name
    logger.info("Classified %s: %d quasi-identifiers, %d insensitive attributes", name,
                len(definition.quasi_identifiers), len(definition.insensitive_attributes))
    return Data(frame, definition, name=name)


get_data = classify
