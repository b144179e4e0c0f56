import pandas as pd
import pytest

from shadowbench.anonymization import AnonymizationMethod
from shadowbench.benchmark import BenchmarkManager, BenchmarkManagerConfig
from shadowbench.errors import AnonymizationExecutionError, ResourceLoadError, UnknownDatasetError
from shadowbench.utils.datasets import BenchmarkDataset


def test_run_all_methods(adult_registry):
    mgr = BenchmarkManager(BenchmarkManagerConfig(), registry=adult_registry)
    results = mgr.run([BenchmarkDataset.ADULT])

    assert [result.method_name for result in results] == [str(method) for method in AnonymizationMethod]
    by_method = {result.method_name: result for result in results}
    assert by_method['Identity'].succeeded
    assert by_method['Identity'].num_records == 8
    assert by_method['Identity'].num_suppressed == 0
    assert by_method['5-Anonymity'].succeeded
    # 8 records cannot be 10-anonymous without suppression
    assert not by_method['10-Anonymity'].succeeded
    assert by_method['10-Anonymity'].error
    assert not by_method['Pitman01'].succeeded


def test_missing_dataset_is_skipped(adult_registry):
    mgr = BenchmarkManager(BenchmarkManagerConfig(), registry=adult_registry)
    results = mgr.run(['TEXAS', 'ADULT'], [AnonymizationMethod.IDENTITY])

    assert [(result.dataset_name, result.succeeded) for result in results] == [('TEXAS', False), ('ADULT', True)]
    assert mgr.results == results


def test_failures_raise_when_not_skipped(adult_registry):
    mgr = BenchmarkManager(BenchmarkManagerConfig(skip_failures=False), registry=adult_registry)

    with pytest.raises(ResourceLoadError):
        mgr.run([BenchmarkDataset.TEXAS], [AnonymizationMethod.IDENTITY])
    with pytest.raises(AnonymizationExecutionError):
        mgr.run([BenchmarkDataset.ADULT], [AnonymizationMethod.K10_ANONYMIZATION])


def test_suppression_limit_is_applied(adult_registry):
    mgr = BenchmarkManager(BenchmarkManagerConfig(suppression_limit=1.0), registry=adult_registry)
    result, = mgr.run([BenchmarkDataset.ADULT], [AnonymizationMethod.K10_ANONYMIZATION])

    assert result.succeeded
    assert result.suppression_limit == 1.0
    assert result.num_suppressed == 8


def test_dump_results(adult_registry, tmp_path):
    mgr = BenchmarkManager(BenchmarkManagerConfig(persist_reports=True, report_dir=str(tmp_path)),
                           registry=adult_registry)
    mgr.run([BenchmarkDataset.ADULT], [AnonymizationMethod.IDENTITY, AnonymizationMethod.K2_ANONYMIZATION])
    path = mgr.dump_results_to_file()

    report = pd.read_csv(path)
    assert report['method_name'].to_list() == ['Identity', '2-Anonymity']
    assert report['succeeded'].all()


def test_no_dump_without_persist(adult_registry):
    mgr = BenchmarkManager(registry=adult_registry)
    mgr.run([BenchmarkDataset.ADULT], [AnonymizationMethod.IDENTITY])

    assert mgr.dump_results_to_file() is None


def test_unknown_dataset_is_skipped(adult_registry):
    mgr = BenchmarkManager(BenchmarkManagerConfig(), registry=adult_registry)
    results = mgr.run(['CENSUS', 'ADULT'], [AnonymizationMethod.IDENTITY])

    assert [(result.dataset_name, result.succeeded) for result in results] == [('CENSUS', False), ('ADULT', True)]
    assert 'CENSUS' in results[0].error


def test_unknown_dataset_raises_when_not_skipped(adult_registry):
    mgr = BenchmarkManager(BenchmarkManagerConfig(skip_failures=False), registry=adult_registry)

    with pytest.raises(UnknownDatasetError):
        mgr.run(['CENSUS'], [AnonymizationMethod.IDENTITY])
