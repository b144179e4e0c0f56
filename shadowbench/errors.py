"""
Exceptions raised while resolving, classifying and anonymizing benchmark datasets.
"""
from typing import Optional


class BenchmarkError(Exception):
    """Base class for all errors raised by the benchmark anonymization layer"""
    pass


class UnknownDatasetError(BenchmarkError, ValueError):
    """The requested dataset is not one of the benchmark datasets"""

    def __init__(self, dataset):
        super().__init__(f"Unknown benchmark dataset: {dataset!r}")
        self.dataset = dataset


class AttributeConfigError(BenchmarkError, ValueError):
    """The attribute configuration of a dataset is malformed"""

    def __init__(self, message: str, attribute: Optional[str] = None):
        super().__init__(message)
        self.attribute = attribute


class UnsupportedAttributeKindError(AttributeConfigError):
    """The attribute kind is known but not supported (ordinal attributes)"""
    pass


class InvalidAttributeTypeError(AttributeConfigError):
    """The attribute kind is not one of categorical, continuous or ordinal"""
    pass


class ResourceLoadError(BenchmarkError):
    """
    A raw data, attribute configuration or hierarchy file could not be read.

    :param path: the file that failed to load
    :type path: string
    """

    def __init__(self, path: str, message: Optional[str] = None):
        super().__init__(message or f"Could not load resource {path}")
        self.path = path


class AnonymizationExecutionError(BenchmarkError, RuntimeError):
    """
    The anonymization engine failed while running an anonymization method.

    :param method: display name of the anonymization method that failed
    :type method: string
    """

    def __init__(self, method: str, message: Optional[str] = None):
        super().__init__(message or f"Anonymization method {method} failed")
        self.method = method
