from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from typing import Iterable, Optional

import pandas as pd

from shadowbench.anonymization import AnonymizationEngine, AnonymizationMethod
from shadowbench.benchmark.benchmark_result import AnonymizationRunResult
from shadowbench.errors import BenchmarkError
from shadowbench.utils import dataset_utils
from shadowbench.utils.datasets import BenchmarkDataset, DatasetRegistry

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkManagerConfig:
    """
    Configuration for BenchmarkManager.
    :param suppression_limit: suppression limit every method is run with.
    :param skip_failures: record failing dataset/method pairs and continue, or re-raise the error.
    :param persist_reports: save run results to filesystem, or not.
    :param timestamp_reports: if persist_reports is True, then define if create a separate report for each timestamp,
                              or overwrite the same report
    :param report_dir: directory the reports are written to.
    """
    suppression_limit: float = 0.0
    skip_failures: bool = True
    persist_reports: bool = False
    timestamp_reports: bool = False
    report_dir: str = '.'


class BenchmarkManager:
    """
    The main class for running anonymization methods over benchmark datasets.

    :param config: Configuration parameters to guide the benchmark run
    :param registry: Registry used to locate the dataset files, optional
    :param engine: Anonymization engine passed to every method, optional
    """

    def __init__(self, config: Optional[BenchmarkManagerConfig] = None, registry: Optional[DatasetRegistry] = None,
                 engine: Optional[AnonymizationEngine] = None) -> None:
        self.config = config if config is not None else BenchmarkManagerConfig()
        self.registry = registry if registry is not None else DatasetRegistry()
        self.engine = engine
        self.results: list[AnonymizationRunResult] = []

    def run(self, datasets: Iterable[BenchmarkDataset | str],
            methods: Iterable[AnonymizationMethod] = tuple(AnonymizationMethod)) -> list[AnonymizationRunResult]:
        """
        Run every method on every dataset and return one result per pair. The dataset is classified anew for every
        method.

        :param datasets: the datasets to anonymize
        :param methods: the anonymization methods to run. Default is all methods.

        :return:
            the results of this run, in dataset then method order
        """
        methods = list(methods)
        run_results = []
        for dataset in datasets:
            for method in methods:
                result = self._run_one(dataset, method)
                run_results.append(result)
                self.results.append(result)
        return run_results

    def _run_one(self, dataset: BenchmarkDataset | str, method: AnonymizationMethod) -> AnonymizationRunResult:
        dataset_name = dataset.name if isinstance(dataset, BenchmarkDataset) else str(dataset)
        suppression_limit = self.config.suppression_limit
        start_time = time.time()
        try:
            dataset_name = DatasetRegistry.parse(dataset).name
            data = dataset_utils.classify(dataset, self.registry)
            output = method.anonymize(data, suppression_limit, engine=self.engine)
        except BenchmarkError as e:
            if not self.config.skip_failures:
                raise
            logger.warning("Skipping %s on %s: %s", method, dataset_name, e)
            return AnonymizationRunResult(dataset_name, str(method), suppression_limit, succeeded=False,
                                          elapsed_seconds=time.time() - start_time, error=str(e))

        elapsed = time.time() - start_time
        logger.info("%s on %s finished in %.2f seconds", method, dataset_name, elapsed)
        return AnonymizationRunResult(dataset_name, str(method), suppression_limit, succeeded=True,
                                      num_records=len(output), num_suppressed=output.attrs.get('suppressed'),
                                      elapsed_seconds=elapsed)

    def dump_results_to_file(self) -> Optional[str]:
        """
        Save run results to filesystem.

        :return: the report path, or None if reports are not persisted
        """
        if not self.config.persist_reports:
            return None
        if self.config.timestamp_reports:
            results_log_file = f"{time.strftime('%Y%m%d-%H%M%S')}_anonymization_results.log.csv"
        else:
            results_log_file = "anonymization_results.log.csv"
        path = os.path.join(self.config.report_dir, results_log_file)
        pd.DataFrame(self.results).to_csv(path, header=True, encoding='utf-8', index=False, mode='w')
        logger.info("Wrote %d results to %s", len(self.results), path)
        return path
