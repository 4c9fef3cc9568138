"""Binary decision trees (CART) over datasets with mixed variable types."""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import NamedTuple, Union

from cartree.data import Dataset, Individual, VarType

MIN_SPLIT_SIZE = 10
"""Nodes holding fewer individuals than this are never split."""


@dataclass
class LeafNode:
    """Terminal node: the majority class or the mean of the target."""

    indices: list[int]
    prediction: str = ""


@dataclass
class QuantitativeNode:
    """Split on a numeric variable: values up to the threshold go left."""

    indices: list[int]
    var: int
    threshold: float
    left: Node | None = None
    right: Node | None = None

    def goes_left(self, individual: Individual) -> bool:
        return individual.quant(self.var) <= self.threshold


@dataclass
class QualitativeNode:
    """Split on a categorical variable: values in the group go left."""

    indices: list[int]
    var: int
    group: frozenset[str]
    left: Node | None = None
    right: Node | None = None

    def goes_left(self, individual: Individual) -> bool:
        return individual.qual(self.var) in self.group


Node = Union[LeafNode, QuantitativeNode, QualitativeNode]
SplitNode = Union[QuantitativeNode, QualitativeNode]


class _Split(NamedTuple):
    var: int
    rule: Union[float, frozenset]
    left: list[int]
    right: list[int]


def gini(indices: Sequence[int], data: Dataset) -> float:
    """Gini impurity of the target over the given rows (1.0 when empty)."""
    counts = Counter(data.individuals[i].qual(data.target) for i in indices)
    total = len(indices)
    return 1.0 - sum((count / total) ** 2 for count in counts.values())


def variance(indices: Sequence[int], data: Dataset) -> float:
    """Population variance of the target over the given rows (NaN when empty)."""
    if not indices:
        return math.nan
    values = [data.individuals[i].quant(data.target) for i in indices]
    mean = sum(values) / len(values)
    return sum((v - mean) ** 2 for v in values) / len(values)


def split_gain(
    left: Sequence[int], right: Sequence[int], data: Dataset, parent_size: int
) -> float:
    """Weighted impurity of a split; lower is better."""
    impurity = gini if data.target_type() is VarType.QUAL else variance
    return (
        len(right) * impurity(right, data) / parent_size
        + len(left) * impurity(left, data) / parent_size
    )


def _impurity(indices: Sequence[int], data: Dataset) -> float:
    if data.target_type() is VarType.QUAL:
        return gini(indices, data)
    return variance(indices, data)


def _leaf(indices: list[int], data: Dataset) -> LeafNode:
    rows = data.individuals
    if data.target_type() is VarType.QUAL:
        counts = Counter(rows[i].qual(data.target) for i in indices)
        prediction, best = "", 0
        for label in sorted(counts):
            if counts[label] > best:
                prediction, best = label, counts[label]
        return LeafNode(indices, prediction)
    mean = sum(rows[i].quant(data.target) for i in indices) / len(indices)
    return LeafNode(indices, f"{mean:.6f}")


def _candidate_splits(data: Dataset, indices: list[int]):
    rows = data.individuals
    for var, var_type in enumerate(data.var_types):
        if var == data.target:
            continue
        if var_type is VarType.QUANT:
            for threshold_row in indices:
                threshold = rows[threshold_row].quant(var)
                left = [i for i in indices if rows[i].quant(var) <= threshold]
                right = [i for i in indices if rows[i].quant(var) > threshold]
                yield _Split(var, threshold, left, right)
        else:
            categories = data.categories(var)
            n = len(categories)
            if n < 1:
                continue
            for mask in range(1, 1 << (n - 1)):
                group = frozenset(c for j, c in enumerate(categories) if mask >> j & 1)
                if not group or len(group) == n:
                    continue
                left = [i for i in indices if rows[i].qual(var) in group]
                right = [i for i in indices if rows[i].qual(var) not in group]
                yield _Split(var, group, left, right)


def _best_split(data: Dataset, indices: list[int]) -> _Split | None:
    best, best_gain = None, math.inf
    for split in _candidate_splits(data, indices):
        gain = split_gain(split.left, split.right, data, len(indices))
        if gain < best_gain:
            best, best_gain = split, gain
    return best


def score_predictions(predictions: Sequence[str], test_set: Dataset) -> float:
    """Accuracy for a qualitative target, R² for a quantitative one."""
    rows = test_set.individuals
    if len(predictions) != len(rows):
        raise ValueError(f"{len(predictions)} predictions for {len(rows)} individuals")
    if not rows:
        return math.nan
    target = test_set.target
    if test_set.target_type() is VarType.QUAL:
        correct = sum(p == ind.qual(target) for p, ind in zip(predictions, rows))
        return correct / len(rows)
    y_true = [ind.quant(target) for ind in rows]
    y_pred = [float(p) for p in predictions]
    mean = sum(y_true) / len(y_true)
    ss_tot = sum((y - mean) ** 2 for y in y_true)
    ss_res = sum((y - p) ** 2 for y, p in zip(y_true, y_pred))
    if ss_tot == 0:
        return math.nan if ss_res == 0 else -math.inf
    return 1 - ss_res / ss_tot


class DecisionTree:
    """A CART decision tree for classification or regression."""

    def __init__(self) -> None:
        self.root: Node | None = None

    def _make(
        self, data: Dataset, indices: list[int]
    ) -> tuple[Node, tuple[list[int], list[int]] | None]:
        if len(indices) < MIN_SPLIT_SIZE or _impurity(indices, data) == 0:
            return _leaf(indices, data), None
        split = _best_split(data, indices)
        if split is None or not split.left or not split.right:
            return _leaf(indices, data), None
        node: SplitNode
        if data.var_types[split.var] is VarType.QUANT:
            node = QuantitativeNode(indices, split.var, split.rule)
        else:
            node = QualitativeNode(indices, split.var, split.rule)
        return node, (split.left, split.right)

    def fit(self, data: Dataset, indices: Sequence[int] | None = None) -> DecisionTree:
        """Grow the tree on the given rows of ``data`` (all rows by default)."""
        indices = list(range(len(data.individuals)) if indices is None else indices)
        if not indices:
            raise ValueError("cannot grow a tree on no individuals")
        root, children = self._make(data, indices)
        stack = [(root, children)] if children else []
        while stack:
            node, (left, right) = stack.pop()
            node.left, left_children = self._make(data, left)
            node.right, right_children = self._make(data, right)
            if left_children:
                stack.append((node.left, left_children))
            if right_children:
                stack.append((node.right, right_children))
        self.root = root
        return self

    def predict(self, individual: Individual) -> str:
        """Prediction for one individual, as the leaf stores it."""
        if self.root is None:
            raise RuntimeError("the tree has not been built")
        node = self.root
        while not isinstance(node, LeafNode):
            node = node.left if node.goes_left(individual) else node.right
        return node.prediction

    def evaluate(self, test_set: Dataset) -> tuple[list[str], float]:
        """Predictions for every test individual and the resulting score."""
        predictions = [self.predict(ind) for ind in test_set.individuals]
        return predictions, score_predictions(predictions, test_set)

    def to_dot(self, data: Dataset) -> str:
        """Graphviz description of the tree."""
        if self.root is None:
            raise RuntimeError("the tree has not been built")
        lines = ["digraph Arbre {", "  node [shape=box];"]
        counter = [0]

        def emit(node: Node) -> None:
            node_id = counter[0]
            counter[0] += 1
            if isinstance(node, LeafNode):
                label = f"Feuille\\n Pred: {node.prediction}\\n"
            elif isinstance(node, QuantitativeNode):
                label = (
                    f"Var {data.names[node.var]}\\n"
                    f"Seuil: {format(node.threshold, 'g')}\\n"
                )
            else:
                members = "".join(
                    f"{g.replace(chr(34), '')} " for g in sorted(node.group)
                )
                label = f"Var {data.names[node.var]}\\nGroupes: {{{members}}}\\n"
            lines.append(
                f'  {node_id} [label="{label}Individus: {len(node.indices)}"];'
            )
            if isinstance(node, LeafNode):
                return
            for child, side in ((node.left, "left"), (node.right, "right")):
                child_id = counter[0]
                emit(child)
                if isinstance(node, QuantitativeNode):
                    op = "<=" if side == "left" else ">"
                    edge = f"{op} {format(node.threshold, 'g')}"
                else:
                    edge = "dans groupe" if side == "left" else "hors groupe"
                lines.append(f'  {node_id} -> {child_id} [label="{edge}"];')

        emit(self.root)
        lines.append("}")
        return "\n".join(lines) + "\n"

    def export_graphviz(self, data: Dataset, path: str | PathLike[str]) -> Path:
        """Write the Graphviz description to ``path`` and return that path."""
        target = Path(path)
        target.write_text(self.to_dot(data), encoding="utf-8")
        return target