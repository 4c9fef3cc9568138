"""Bootstrap aggregation of decision trees."""

from __future__ import annotations

import random
from collections import Counter
from os import PathLike
from pathlib import Path

from cartree.data import Dataset, Individual, VarType
from cartree.tree import DecisionTree, score_predictions


class BaggingTrees:
    """An ensemble of decision trees, each grown on a bootstrap sample."""

    def __init__(
        self, n_trees: int, data: Dataset, rng: random.Random | None = None
    ) -> None:
        if n_trees < 1:
            raise ValueError("the ensemble needs at least one tree")
        self.n_trees = n_trees
        self.data = data
        self.rng = rng or random.Random()
        self.trees: list[DecisionTree] = []
        self.dot_paths: list[Path] = []

    def bootstrap_sample(self) -> list[int]:
        """Row indices drawn with replacement, as many as the dataset has rows."""
        n = len(self.data.individuals)
        if n == 0:
            raise ValueError("cannot sample from an empty dataset")
        return [self.rng.randrange(n) for _ in range(n)]

    def fit(self, output_dir: str | PathLike[str] | None = None) -> BaggingTrees:
        """Grow every tree; with ``output_dir``, write each one as a .dot file."""
        self.trees = []
        self.dot_paths = []
        for number in range(self.n_trees):
            tree = DecisionTree().fit(self.data, self.bootstrap_sample())
            if output_dir is not None:
                path = Path(output_dir) / f"ArbreNum{number}Bagging.dot"
                self.dot_paths.append(tree.export_graphviz(self.data, path))
            self.trees.append(tree)
        return self

    def predict(self, individual: Individual) -> str:
        """Majority vote for a qualitative target, mean for a quantitative one."""
        if not self.trees:
            raise RuntimeError("no tree has been trained")
        predictions = [tree.predict(individual) for tree in self.trees]
        if self.data.target_type() is VarType.QUAL:
            votes = Counter(predictions)
            winner, best = "", 0
            for label in sorted(votes):
                if votes[label] > best:
                    winner, best = label, votes[label]
            return winner
        mean = sum(float(p) for p in predictions) / len(self.trees)
        return f"{mean:.6f}"

    def evaluate(self, test_set: Dataset) -> tuple[list[str], float]:
        """Predictions for every test individual and the resulting score."""
        predictions = [self.predict(ind) for ind in test_set.individuals]
        return predictions, score_predictions(predictions, test_set)