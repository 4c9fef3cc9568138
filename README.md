# cartree

Decision trees (CART) and bagged tree ensembles for small tabular data sets
whose columns mix quantitative (numeric) and qualitative (categorical)
variables. Pure Python, no third-party dependencies.

## What it does

- Loads a comma-separated file whose first line holds the column names.
  You say which columns are quantitative (`quanti`) and which are qualitative
  (`quali`), and which column is the target.
- Grows a binary tree by exhaustive search:
  - quantitative columns are split on every observed value as a threshold
    (`<=` goes left);
  - qualitative columns are split on every way of dividing their categories
    into two non-empty groups (values in the group go left).
- Chooses the split with the lowest weighted Gini impurity (qualitative
  target) or weighted variance (quantitative target).
- Stops splitting a node when it holds fewer than 10 individuals
  (`cartree.tree.MIN_SPLIT_SIZE`) or is already pure.
- Leaves predict the majority class (ties go to the alphabetically first
  class) or the mean of the target, written with six decimals.
- Scores a test set with accuracy (qualitative target) or R² (quantitative
  target).
- Trains bagging ensembles of trees on bootstrap samples; they predict by
  majority vote or by averaging.
- Writes trees as Graphviz `.dot` files.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

Installation adds a `cartree` command:

```
cartree DATA.csv [--types T1,T2,...] [--target N] [--train-fraction F]
                 [--trees N] [--seed N] [--output-dir DIR]
```

It loads the file, shuffles and splits it into a training set and a test
set, grows a single tree and a bagging ensemble on the training set, and
prints the test-set predictions and score of each.

| Option             | Default                                                               |
|--------------------|-----------------------------------------------------------------------|
| `--types`          | `quanti,quali,quanti,quanti,quanti,quanti,quanti,quali,quanti,quanti` |
| `--target`         | `1` (column index of the target)                                      |
| `--train-fraction` | `0.8`                                                                 |
| `--trees`          | `10` (trees in the ensemble)                                          |
| `--seed`           | none (a fixed seed makes the split and the samples repeatable)        |
| `--output-dir`     | `.`                                                                   |

In the output directory it writes `PremierArbre.dot` for the single tree and
`ArbreNum0Bagging.dot`, `ArbreNum1Bagging.dot`, … for the ensemble. It exits
with status 1 and a message on standard error when the file cannot be opened
or read, or when training fails.

## Library use

```python
import random

from cartree.data import Dataset
from cartree.tree import DecisionTree
from cartree.bagging import BaggingTrees

var_types = ["quanti", "quali", "quanti", "quanti", "quanti",
             "quanti", "quanti", "quali", "quanti", "quanti"]
data = Dataset.from_csv("ozone.csv", var_types, 1)   # column 1 is the target

print(data.describe_types())
print(data.format_preview(10))

train, test = data.train_test_split(0.8, random.Random(0))

tree = DecisionTree().fit(train)          # all rows; or fit(train, indices)
predictions, score = tree.evaluate(test)
print(score)
tree.export_graphviz(train, "first_tree.dot")

bagging = BaggingTrees(10, train, random.Random(0)).fit("dot_files")
predictions, score = bagging.evaluate(test)
```

### `cartree.data`

- `VarType` — `QUANT` (`"quanti"`) or `QUAL` (`"quali"`).
- `Individual` — one row. `quant(i)` gives a numeric cell (0.0 for a
  qualitative cell); `qual(i)` gives a text cell (`""` for a quantitative
  cell).
- `Dataset` — `from_csv(path, var_types, target)` and
  `from_lines(lines, var_types, target)` build one; blank lines are skipped
  and surrounding double quotes are stripped from column names. A
  `ValueError` is raised when fewer types than columns are given, the target
  index is out of range, a row has too few cells, or a quantitative cell is
  not a number. Also: `target_type()`, `categories(index)` (sorted distinct
  values of a qualitative column), `describe_types()`,
  `format_preview(limit=10)` and `train_test_split(train_fraction=0.8, rng=None)`.

### `cartree.tree`

- `DecisionTree` — `fit(data, indices=None)` returns the tree and raises
  `ValueError` on an empty index list; `predict(individual)` returns the
  leaf's prediction as a string and raises `RuntimeError` before fitting;
  `evaluate(test_set)` returns `(predictions, score)`; `to_dot(data)` returns
  the Graphviz source; `export_graphviz(data, path)` writes it to exactly
  `path` and returns that path.
- Node types: `LeafNode`, `QuantitativeNode`, `QualitativeNode`.
- Helpers: `gini(indices, data)`, `variance(indices, data)`,
  `split_gain(left, right, data, parent_size)` and
  `score_predictions(predictions, test_set)`.

### `cartree.bagging`

- `BaggingTrees(n_trees, data, rng=None)` — `ValueError` if `n_trees < 1`.
  `bootstrap_sample()` draws as many row indices as the data has rows, with
  replacement. `fit(output_dir=None)` grows one tree per sample and, when
  `output_dir` is given, writes `ArbreNum<k>Bagging.dot` files there (listed
  in `dot_paths`). `predict` and `evaluate` work like those of
  `DecisionTree`, combining the trees by vote or mean; `predict` raises
  `RuntimeError` before fitting.

## Limitations

- The CSV reader splits on every comma: quoted fields containing commas are
  not supported, and there is no handling of missing values.
- Trees are not pruned, and fitted models cannot be saved or loaded.
- `.dot` files are only written; rendering them needs Graphviz.
- Search cost grows quickly: each quantitative column tries every value as a
  threshold, and each qualitative column tries 2^(k-1) − 1 groupings of its k
  categories.
- With an empty test set the score is NaN. When every test target value is
  the same, R² is NaN for perfect predictions and −∞ otherwise.