"""
The anonymization engine interface and a reference full-domain generalization engine.

An engine receives a classified dataset and a ``StrategyConfig`` and returns the anonymized records, or fails with
``EngineError``. The benchmark treats the engine as a black box; ``LatticeEngine`` is a small reference
implementation that searches the generalization lattice for k-anonymity.
"""
import abc
import itertools
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from shadowbench.anonymization.config import PrivacyModelKind, SearchAlgorithm, StrategyConfig
from shadowbench.utils.datasets import Data, SUPPRESSED_VALUE

logger = logging.getLogger(__name__)

Node = Tuple[int, ...]


class EngineError(Exception):
    """The engine could not produce an anonymized output"""
    pass


class AnonymizationEngine(abc.ABC):
    """
    Interface of an anonymization engine.
    """

    @abc.abstractmethod
    def run(self, data: Data, config: StrategyConfig) -> pd.DataFrame:
        """
        Anonymize the data.

        :param data: the classified dataset. Must not be modified.
        :type data: `Data`
        :param config: the privacy model, suppression limit and search parameters
        :type config: `StrategyConfig`
        :return: the anonymized records
        :raises EngineError: if no output satisfying the privacy model can be produced
        """
        pass


@dataclass
class _Evaluation:
    node: Node
    accepted: bool
    outliers: pd.Series
    classes: pd.Series
    loss: float


class _Lattice:
    """Generalization lattice of one dataset, evaluated for k-anonymity. Lives for a single run."""

    def __init__(self, data: Data, k: int, suppression_limit: float):
        self.frame = data.get_samples()
        self.qis = data.definition.quasi_identifiers
        self.hierarchies = [data.definition.get(qi).hierarchy for qi in self.qis]
        self.heights = [hierarchy.height for hierarchy in self.hierarchies]
        self.k = k
        self.max_outliers = suppression_limit * len(self.frame)
        self._columns: Dict[Tuple[int, int], pd.Series] = {}
        self.steps = 0

    @property
    def top(self) -> Node:
        return tuple(height - 1 for height in self.heights)

    def nodes(self) -> List[Node]:
        """All nodes, bottom-up (by sum of levels)"""
        return sorted(itertools.product(*[range(height) for height in self.heights]), key=lambda n: (sum(n), n))

    def predecessors(self, node: Node) -> List[Node]:
        return [node[:i] + (level - 1,) + node[i + 1:] for i, level in enumerate(node) if level > 0]

    def loss(self, node: Node) -> float:
        if not node:
            return 0.0
        return float(np.mean([level / (height - 1) if height > 1 else 0.0
                              for level, height in zip(node, self.heights)]))

    def generalized(self, index: int, level: int) -> pd.Series:
        key = (index, level)
        if key not in self._columns:
            qi = self.qis[index]
            column = self.frame[qi].map(self.hierarchies[index].level_mapping(level))
            if column.isna().any():
                missing = self.frame[qi][column.isna()].unique()[:5]
                raise EngineError(f"Values of {qi} are not covered by its hierarchy: {list(missing)}")
            self._columns[key] = column
        return self._columns[key]

    def evaluate(self, node: Node) -> _Evaluation:
        self.steps += 1
        if not self.qis or self.frame.empty:
            classes = pd.Series(0, index=self.frame.index)
            sizes = pd.Series(len(self.frame), index=self.frame.index)
        else:
            keys = pd.concat([self.generalized(i, level) for i, level in enumerate(node)], axis=1,
                             keys=range(len(node)))
            classes = keys.groupby(list(keys.columns), sort=False).ngroup()
            sizes = classes.map(classes.value_counts())
        outliers = sizes < self.k
        accepted = outliers.sum() <= self.max_outliers
        return _Evaluation(node, bool(accepted), outliers, classes, self.loss(node))


class LatticeEngine(AnonymizationEngine):
    """
    Reference engine applying full-domain generalization and record suppression.

    Every quasi-identifier is generalized to one level of its hierarchy; records in equivalence classes smaller than
    k are suppressed, as long as their share does not exceed the suppression limit. Without a search algorithm all
    minimal accepted transformations are checked and the one with the lowest loss is used. With a best-effort
    algorithm the search stops after the heuristic step limit. Only k-anonymity is supported.
    """

    def run(self, data: Data, config: StrategyConfig) -> pd.DataFrame:
        model = config.privacy_model
        if model.kind != PrivacyModelKind.K_ANONYMITY:
            raise EngineError(f"Privacy model {model} is not supported by {type(self).__name__}")

        lattice = _Lattice(data, model.k, config.suppression_limit)
        if config.algorithm == SearchAlgorithm.BEST_EFFORT_BOTTOM_UP:
            result = self._bottom_up(lattice, config.heuristic_step_limit)
        elif config.algorithm == SearchAlgorithm.BEST_EFFORT_TOP_DOWN:
            result = self._top_down(lattice, config.heuristic_step_limit)
        else:
            result = self._optimal(lattice)

        if result is None:
            raise EngineError(f"No transformation of {data.name} satisfies {model} with suppression limit "
                              f"{config.suppression_limit} after {lattice.steps} steps")

        logger.debug("Transformation %s selected for %s after %d steps",
                     dict(zip(lattice.qis, result.node)), data.name, lattice.steps)
        return self._apply(data, lattice, result)

    @staticmethod
    def _limit_reached(lattice: _Lattice, step_limit: Optional[int]) -> bool:
        return step_limit is not None and lattice.steps >= step_limit

    def _optimal(self, lattice: _Lattice) -> Optional[_Evaluation]:
        best = None
        accepted_nodes = []
        for node in lattice.nodes():
            # generalizing an accepted node never lowers the loss
            if any(all(a <= b for a, b in zip(accepted, node)) for accepted in accepted_nodes):
                continue
            evaluation = lattice.evaluate(node)
            if evaluation.accepted:
                accepted_nodes.append(node)
                if best is None or evaluation.loss < best.loss:
                    best = evaluation
        return best

    def _bottom_up(self, lattice: _Lattice, step_limit: Optional[int]) -> Optional[_Evaluation]:
        for node in lattice.nodes():
            evaluation = lattice.evaluate(node)
            if evaluation.accepted:
                return evaluation
            if self._limit_reached(lattice, step_limit):
                break
        return None

    def _top_down(self, lattice: _Lattice, step_limit: Optional[int]) -> Optional[_Evaluation]:
        current = lattice.evaluate(lattice.top)
        if not current.accepted:
            return None
        while not self._limit_reached(lattice, step_limit):
            best = None
            for node in lattice.predecessors(current.node):
                evaluation = lattice.evaluate(node)
                if evaluation.accepted and (best is None or evaluation.loss < best.loss):
                    best = evaluation
                if self._limit_reached(lattice, step_limit):
                    break
            if best is None:
                break
            current = best
        return current

    @staticmethod
    def _apply(data: Data, lattice: _Lattice, result: _Evaluation) -> pd.DataFrame:
        frame = data.get_samples()
        output = frame.copy()
        for index, (qi, level) in enumerate(zip(lattice.qis, result.node)):
            definition = data.definition.get(qi)
            if level > 0 and definition.aggregation_function is not None:
                try:
                    values = pd.to_numeric(frame[qi])
                except (ValueError, TypeError) as e:
                    raise EngineError(f"Values of {qi} cannot be aggregated: {e}") from e
                aggregated = values.groupby(result.classes).transform(definition.aggregation_function.aggregate)
                output[qi] = aggregated.map(definition.data_type.format_value)
            else:
                output[qi] = lattice.generalized(index, level)

        if lattice.qis:
            output.loc[result.outliers, lattice.qis] = SUPPRESSED_VALUE
        output.attrs['transformation'] = dict(zip(lattice.qis, result.node))
        output.attrs['suppressed'] = int(result.outliers.sum())
        return output
