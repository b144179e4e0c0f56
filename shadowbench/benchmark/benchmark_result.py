from dataclasses import dataclass
from typing import Optional


@dataclass
class AnonymizationRunResult:
    """
    Outcome of running one anonymization method on one benchmark dataset.

    :param dataset_name: The name of the dataset that was anonymized.
    :param method_name: The display name of the anonymization method.
    :param suppression_limit: The suppression limit the method was run with.
    :param succeeded: Whether an anonymized output was produced.
    :param num_records: Number of records of the output, None if the run failed.
    :param num_suppressed: Number of suppressed records, if reported by the engine.
    :param elapsed_seconds: Wall-clock duration of classification and anonymization.
    :param error: Description of the failure, None if the run succeeded.
    """
    dataset_name: str
    method_name: str
    suppression_limit: float
    succeeded: bool
    num_records: Optional[int] = None
    num_suppressed: Optional[int] = None
    elapsed_seconds: float = 0.0
    error: Optional[str] = None
