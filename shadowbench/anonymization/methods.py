"""
The anonymization methods of the shadow model benchmark.

Every method is an entry of the ``AnonymizationMethod`` catalog, which binds a privacy model and, optionally, a
search algorithm and heuristic step limit. Running a method builds a ``StrategyConfig`` for the requested suppression
limit and hands it, together with the classified dataset, to an anonymization engine.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import pandas as pd

from shadowbench.anonymization.config import PopulationUniquenessModel, PrivacyModelSpec, Region, SearchAlgorithm, \
    StrategyConfig
from shadowbench.anonymization.engine import AnonymizationEngine, EngineError, LatticeEngine
from shadowbench.errors import AnonymizationExecutionError
from shadowbench.utils.datasets import Data

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MethodDefinition:
    """
    Parameters of an anonymization method.

    :param name: display name
    :param privacy_model: privacy model the output must satisfy
    :param algorithm: search algorithm, None for the engine default
    :param heuristic_step_limit: heuristic step limit, None for the engine default
    """
    name: str
    privacy_model: PrivacyModelSpec
    algorithm: Optional[SearchAlgorithm] = None
    heuristic_step_limit: Optional[int] = None


class AnonymizationMethod(Enum):
    """Catalog of the anonymization methods used in the benchmark"""

    IDENTITY = MethodDefinition('Identity', PrivacyModelSpec.k_anonymity(1),
                                SearchAlgorithm.BEST_EFFORT_BOTTOM_UP, 1)
    K2_ANONYMIZATION = MethodDefinition('2-Anonymity', PrivacyModelSpec.k_anonymity(2),
                                        SearchAlgorithm.BEST_EFFORT_TOP_DOWN, 1000)
    K5_ANONYMIZATION = MethodDefinition('5-Anonymity', PrivacyModelSpec.k_anonymity(5))
    K10_ANONYMIZATION = MethodDefinition('10-Anonymity', PrivacyModelSpec.k_anonymity(10))
    PITMAN_ANONYMIZATION = MethodDefinition('Pitman01',
                                            PrivacyModelSpec.population_uniqueness(0.01,
                                                                                   PopulationUniquenessModel.PITMAN,
                                                                                   Region.USA),
                                            SearchAlgorithm.BEST_EFFORT_TOP_DOWN, 1000)

    @property
    def display_name(self) -> str:
        return self.value.name

    def build_config(self, suppression_limit: float = 0.0) -> StrategyConfig:
        """
        Build the engine configuration of this method.

        :param suppression_limit: maximal fraction of records that may be suppressed. Default is 0.
        :type suppression_limit: float
        :return: a new `StrategyConfig`
        """
        return StrategyConfig(privacy_model=self.value.privacy_model,
                              suppression_limit=suppression_limit,
                              algorithm=self.value.algorithm,
                              heuristic_step_limit=self.value.heuristic_step_limit)

    def anonymize(self, data: Data, suppression_limit: float = 0.0,
                  engine: Optional[AnonymizationEngine] = None) -> pd.DataFrame:
        """
        Anonymize a classified dataset with this method.

        The input data is not modified and the engine output is returned as is.

        :param data: the classified dataset
        :type data: `Data`
        :param suppression_limit: maximal fraction of records that may be suppressed. Default is 0.
        :type suppression_limit: float, optional
        :param engine: the engine to run. Default is a new `LatticeEngine`.
        :type engine: `AnonymizationEngine`, optional
        :return: the anonymized records
        :raises AnonymizationExecutionError: if the engine fails
        """
        config = self.build_config(suppression_limit)
        engine = engine if engine is not None else LatticeEngine()
        logger.info("Running %s on %s with suppression limit %s", self, data.name, suppression_limit)
        try:
            return engine.run(data, config)
        except (EngineError, OSError) as e:
            logger.error("%s failed on %s: %s", self, data.name, e)
            raise AnonymizationExecutionError(str(self), f"Anonymization method {self} failed on {data.name}: "
                                                         f"{e}") from e

    @classmethod
    def from_name(cls, name: str) -> 'AnonymizationMethod':
        """
        Get a method by its display name (e.g. ``'5-Anonymity'``) or enum name (e.g. ``'K5_ANONYMIZATION'``).

        :param name: the method name
        :type name: string
        :return: the `AnonymizationMethod`
        :raises ValueError: if no method has this name
        """
        for method in cls:
            if name in (method.name, method.display_name):
                return method
        raise ValueError(f"Unknown anonymization method: {name}")

    def __str__(self):
        return self.value.name
