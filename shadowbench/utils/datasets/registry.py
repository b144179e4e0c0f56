"""
Registry of the benchmark datasets.

Maps every ``BenchmarkDataset`` to the files it is built from: the raw records, the attribute configuration
and one generalization hierarchy per quasi-identifier. Dataset variants (e.g. the crafted ones) share the
attribute configuration and hierarchies of their base dataset, so these are declared once as layouts and
referenced from every variant.
"""
import os
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union

from shadowbench.errors import UnknownDatasetError

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = ';'
DEFAULT_CHARSET = 'utf-8'


class BenchmarkDataset(Enum):
    """The datasets used by the shadow model benchmark"""
    TEXAS_10 = 'texas_10'
    TEXAS = 'texas'
    TEXAS_CRAFTED = 'texas_crafted'
    ADULT = 'adult'
    ADULT_FULL = 'adult_full'
    ADULT_FULL_CRAFTED = 'adult_full_crafted'


@dataclass(frozen=True)
class DatasetResources:
    """
    Files and parsing parameters of one benchmark dataset.

    :param data_source_path: path of the raw records (delimited, with header row)
    :param attribute_config_path: path of the attribute configuration (delimited, no header row)
    :param delimiter: field delimiter of the raw records and the attribute configuration
    :param charset: encoding of all files of the dataset
    :param hierarchy_path_template: path of a generalization hierarchy, with an ``{attribute}`` placeholder
    :param hierarchy_delimiter: field delimiter of the hierarchy files
    """
    data_source_path: str
    attribute_config_path: str
    delimiter: str
    charset: str
    hierarchy_path_template: str
    hierarchy_delimiter: str

    def hierarchy_path(self, attribute: str) -> str:
        """
        Path of the generalization hierarchy of an attribute

        :param attribute: the attribute name
        :type attribute: string
        :return: the hierarchy file path
        """
        return self.hierarchy_path_template.format(attribute=attribute)


@dataclass(frozen=True)
class _AttributeLayout:
    config_path: str
    hierarchy_path_template: str
    hierarchy_delimiter: str = DEFAULT_DELIMITER


_ADULT = _AttributeLayout('data/adult.cfg', 'data/adult_hierarchy_{attribute}.csv')
_ADULT_FULL = _AttributeLayout('data_new/adult_full.cfg', 'data_new/adult_full_hierarchy_{attribute}.csv', ',')
_TEXAS_10 = _AttributeLayout('data/texas_10.cfg', 'data/texas_hierarchy_{attribute}.csv')
_TEXAS = _AttributeLayout('data_new/texas_NHS.cfg', 'data_new/texas_hierarchy_{attribute}.csv')

# dataset -> (raw records, attribute layout)
_DATASETS = {
    BenchmarkDataset.ADULT: ('data/adult.csv', _ADULT),
    BenchmarkDataset.ADULT_FULL: ('data_new/adult_full.csv', _ADULT_FULL),
    BenchmarkDataset.ADULT_FULL_CRAFTED: ('data_new/adult_full_crafted.csv', _ADULT_FULL),
    BenchmarkDataset.TEXAS_10: ('data/texas_10.csv', _TEXAS_10),
    BenchmarkDataset.TEXAS: ('data_new/texas.csv', _TEXAS),
    BenchmarkDataset.TEXAS_CRAFTED: ('data_new/texas_crafted.csv', _TEXAS),
}


def _build_table(charset: str) -> dict:
    return {
        dataset: DatasetResources(data_source_path=data_path,
                                  attribute_config_path=layout.config_path,
                                  delimiter=DEFAULT_DELIMITER,
                                  charset=charset,
                                  hierarchy_path_template=layout.hierarchy_path_template,
                                  hierarchy_delimiter=layout.hierarchy_delimiter)
        for dataset, (data_path, layout) in _DATASETS.items()
    }


class DatasetRegistry:
    """
    Resolves benchmark datasets to their resources. No files are touched here.

    :param root: directory the dataset paths are relative to. If not given, paths are returned as is (relative to
                 the working directory).
    :type root: string, optional
    :param charset: encoding of the dataset files. Default is utf-8.
    :type charset: string, optional
    """

    def __init__(self, root: Optional[str] = None, charset: Optional[str] = DEFAULT_CHARSET):
        self.root = root
        self.charset = charset
        self._table = _build_table(charset)

    def datasets(self) -> list:
        """
        Get the datasets known to this registry

        :return: list of `BenchmarkDataset`
        """
        return list(self._table.keys())

    def resolve(self, dataset: Union[BenchmarkDataset, str]) -> DatasetResources:
        """
        Resolve a dataset to its resources.

        :param dataset: the dataset, or its name (e.g. ``'ADULT'`` or ``'adult'``)
        :type dataset: `BenchmarkDataset` or string
        :return: the `DatasetResources` of the dataset
        :raises UnknownDatasetError: if the dataset is not a benchmark dataset
        """
        resources = self._table.get(self.parse(dataset))
        if resources is None:
            raise UnknownDatasetError(dataset)
        if self.root is None:
            return resources
        # braces in the root must survive formatting of the hierarchy template
        template_root = self.root.replace('{', '{{').replace('}', '}}')
        return replace(resources,
                       data_source_path=os.path.join(self.root, resources.data_source_path),
                       attribute_config_path=os.path.join(self.root, resources.attribute_config_path),
                       hierarchy_path_template=os.path.join(template_root, resources.hierarchy_path_template))

    @staticmethod
    def parse(dataset: Union[BenchmarkDataset, str]) -> BenchmarkDataset:
        """
        Convert a dataset name to a `BenchmarkDataset`.

        :param dataset: the dataset, its enum name or its value
        :type dataset: `BenchmarkDataset` or string
        :return: the `BenchmarkDataset`
        :raises UnknownDatasetError: if the name is not a benchmark dataset
        """
        if isinstance(dataset, BenchmarkDataset):
            return dataset
        if isinstance(dataset, str):
            name = dataset.strip()
            if name.upper() in BenchmarkDataset.__members__:
                return BenchmarkDataset[name.upper()]
            try:
                return BenchmarkDataset(name.lower())
            except ValueError:
                pass
        logger.error("Dataset %r is not a benchmark dataset", dataset)
        raise UnknownDatasetError(dataset)


_default_registry = DatasetRegistry()


def resolve(dataset: Union[BenchmarkDataset, str]) -> DatasetResources:
    """
    Resolve a dataset with the default registry (paths relative to the working directory).

    :param dataset: the dataset or its name
    :return: the `DatasetResources` of the dataset
    """
    return _default_registry.resolve(dataset)
