"""
Privacy models and the configuration handed to the anonymization engine.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class PrivacyModelKind(Enum):
    K_ANONYMITY = 'k-anonymity'
    POPULATION_UNIQUENESS = 'population-uniqueness'


class PopulationUniquenessModel(Enum):
    """Estimators for the fraction of population-unique records"""
    PITMAN = 'pitman'
    ZAYATZ = 'zayatz'
    SNB = 'snb'
    DANKAR = 'dankar'


class Region(Enum):
    """Regions whose population size is used by population-uniqueness estimators"""
    USA = 'usa'
    UK = 'uk'
    FRANCE = 'france'
    GERMANY = 'germany'
    CANADA = 'canada'


class SearchAlgorithm(Enum):
    """Direction of a heuristic, step-limited search of the generalization lattice"""
    BEST_EFFORT_BOTTOM_UP = 'best-effort-bottom-up'
    BEST_EFFORT_TOP_DOWN = 'best-effort-top-down'


@dataclass(frozen=True)
class PrivacyModelSpec:
    """
    A privacy model and its parameters. Use the ``k_anonymity`` and ``population_uniqueness`` constructors.

    :param kind: the privacy model
    :param k: minimal size of every equivalence class (k-anonymity)
    :param threshold: maximal fraction of population-unique records (population uniqueness)
    :param estimator: estimator of population uniqueness
    :param region: region of the population
    """
    kind: PrivacyModelKind
    k: Optional[int] = None
    threshold: Optional[float] = None
    estimator: Optional[PopulationUniquenessModel] = None
    region: Optional[Region] = None

    @staticmethod
    def k_anonymity(k: int) -> 'PrivacyModelSpec':
        if k < 1:
            raise ValueError("k should be a positive integer")
        return PrivacyModelSpec(PrivacyModelKind.K_ANONYMITY, k=k)

    @staticmethod
    def population_uniqueness(threshold: float, estimator: PopulationUniquenessModel,
                              region: Region) -> 'PrivacyModelSpec':
        if not 0 < threshold <= 1:
            raise ValueError("threshold should be a fraction in (0, 1]")
        return PrivacyModelSpec(PrivacyModelKind.POPULATION_UNIQUENESS, threshold=threshold, estimator=estimator,
                                region=region)

    def __str__(self):
        if self.kind == PrivacyModelKind.K_ANONYMITY:
            return f"{self.k}-anonymity"
        return f"population-uniqueness({self.threshold}, {self.estimator.name}, {self.region.name})"


@dataclass(frozen=True)
class StrategyConfig:
    """
    Configuration of a single anonymization run.

    :param privacy_model: the privacy model the output must satisfy
    :param suppression_limit: maximal fraction of records that may be suppressed, between 0 and 1
    :param algorithm: search algorithm. Default is None (engine default).
    :param heuristic_step_limit: maximal number of lattice nodes the heuristic search may check. Default is None
                                 (engine default).
    """
    privacy_model: PrivacyModelSpec
    suppression_limit: float = 0.0
    algorithm: Optional[SearchAlgorithm] = None
    heuristic_step_limit: Optional[int] = None

    def __post_init__(self):
        if not 0.0 <= self.suppression_limit <= 1.0:
            raise ValueError(f"suppression_limit should be between 0 and 1, got {self.suppression_limit}")
        if self.heuristic_step_limit is not None and self.heuristic_step_limit < 1:
            raise ValueError("heuristic_step_limit should be a positive integer")
