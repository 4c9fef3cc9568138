import math
import random

import pytest

from cartree.bagging import BaggingTrees
from cartree.data import Dataset, Individual


def _classification_data(n=20):
    lines = ["x,y"]
    lines += [f"{x},{'a' if x < n // 2 else 'b'}" for x in range(n)]
    return Dataset.from_lines(lines, ["quanti", "quali"], 1)


def _constant_regression_data(n=20):
    lines = ["x,y"] + [f"{x},5" for x in range(n)]
    return Dataset.from_lines(lines, ["quanti", "quanti"], 1)


def test_bootstrap_sample_size_and_range():
    data = _classification_data()
    bagging = BaggingTrees(3, data, random.Random(1))
    sample = bagging.bootstrap_sample()
    assert len(sample) == len(data.individuals)
    assert all(0 <= i < len(data.individuals) for i in sample)


def test_bootstrap_sample_is_reproducible_with_seed():
    data = _classification_data()
    first = BaggingTrees(3, data, random.Random(7)).bootstrap_sample()
    second = BaggingTrees(3, data, random.Random(7)).bootstrap_sample()
    assert first == second


def test_bootstrap_on_empty_dataset_raises():
    data = Dataset.from_lines(["x,y"], ["quanti", "quali"], 1)
    with pytest.raises(ValueError):
        BaggingTrees(2, data).bootstrap_sample()


def test_zero_trees_rejected():
    with pytest.raises(ValueError):
        BaggingTrees(0, _classification_data())


def test_predict_before_fit_raises():
    bagging = BaggingTrees(2, _classification_data())
    with pytest.raises(RuntimeError):
        bagging.predict(Individual((1.0, "a")))


def test_fit_grows_requested_number_of_trees():
    bagging = BaggingTrees(4, _classification_data(), random.Random(3)).fit()
    assert len(bagging.trees) == 4
    assert bagging.dot_paths == []


def test_majority_vote_on_separable_data():
    bagging = BaggingTrees(10, _classification_data(), random.Random(0)).fit()
    assert bagging.predict(Individual((1.0, "a"))) == "a"
    assert bagging.predict(Individual((18.0, "b"))) == "b"


def test_fit_writes_one_dot_file_per_tree(tmp_path):
    bagging = BaggingTrees(3, _classification_data(), random.Random(2))
    bagging.fit(tmp_path)
    names = sorted(p.name for p in tmp_path.glob("*.dot"))
    assert names == [f"ArbreNum{i}Bagging.dot" for i in range(3)]
    for path in bagging.dot_paths:
        assert path.read_text(encoding="utf-8").startswith("digraph Arbre {")


def test_regression_mean_of_constant_target():
    bagging = BaggingTrees(5, _constant_regression_data(), random.Random(4)).fit()
    assert bagging.predict(Individual((3.0, 0.0))) == "5.000000"


def test_evaluate_regression_constant_target_gives_nan_score():
    data = _constant_regression_data()
    bagging = BaggingTrees(3, data, random.Random(5)).fit()
    predictions, score = bagging.evaluate(data)
    assert predictions == ["5.000000"] * len(data.individuals)
    assert math.isnan(score)


def test_evaluate_classification_returns_accuracy():
    data = _classification_data()
    bagging = BaggingTrees(5, data, random.Random(6)).fit()
    predictions, score = bagging.evaluate(data)
    assert len(predictions) == len(data.individuals)
    assert set(predictions) <= {"a", "b"}
    expected = sum(
        p == ind.qual(1) for p, ind in zip(predictions, data.individuals)
    ) / len(predictions)
    assert score == pytest.approx(expected)
    assert 0.0 <= score <= 1.0