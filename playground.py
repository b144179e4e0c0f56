import logging

from shadowbench.anonymization import AnonymizationMethod
from shadowbench.benchmark import BenchmarkManager, BenchmarkManagerConfig
from shadowbench.utils.datasets import BenchmarkDataset, DatasetRegistry

if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)

    # dataset files are expected in ./data and ./data_new
    registry = DatasetRegistry(root='.')
    config = BenchmarkManagerConfig(suppression_limit=0.0, skip_failures=True, persist_reports=True,
                                    timestamp_reports=True)
    mgr = BenchmarkManager(config, registry=registry)

    datasets = [BenchmarkDataset.ADULT, BenchmarkDataset.TEXAS_10]
    methods = [AnonymizationMethod.IDENTITY, AnonymizationMethod.K2_ANONYMIZATION,
               AnonymizationMethod.K5_ANONYMIZATION, AnonymizationMethod.K10_ANONYMIZATION]
    # methods = list(AnonymizationMethod)

    for result in mgr.run(datasets, methods):
        status = 'ok' if result.succeeded else f'failed ({result.error})'
        print(f"{result.dataset_name:<20} {result.method_name:<14} {status}")

    mgr.dump_results_to_file()
