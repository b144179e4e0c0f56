"""
Module providing the anonymization methods of the shadow model benchmark.

This module contains the catalog of anonymization methods applied to the benchmark datasets before shadow models
are trained on them: the identity transformation, k-anonymity for k of 2, 5 and 10, and a population-uniqueness
model based on the Pitman estimator. Each method builds a privacy model configuration and delegates the search
for a suitable generalization and suppression of the data to an anonymization engine.

The engine is pluggable through the ``AnonymizationEngine`` interface. ``LatticeEngine`` is a reference
implementation performing full-domain generalization with record suppression for k-anonymity.
"""
from shadowbench.anonymization.config import PrivacyModelKind, PrivacyModelSpec, PopulationUniquenessModel, Region, \
    SearchAlgorithm, StrategyConfig
from shadowbench.anonymization.engine import AnonymizationEngine, EngineError, LatticeEngine
from shadowbench.anonymization.methods import AnonymizationMethod, MethodDefinition
