"""
Module running the anonymization methods over the benchmark datasets.

The main class, ``BenchmarkManager``, with the ``run()`` main method classifies each requested dataset, applies each
requested anonymization method and records one ``AnonymizationRunResult`` per dataset and method. Failing pairs can
be skipped so that a sweep over all datasets continues, and the results can be persisted as a CSV report.
"""
from shadowbench.benchmark.benchmark_manager import BenchmarkManager, BenchmarkManagerConfig
from shadowbench.benchmark.benchmark_result import AnonymizationRunResult
