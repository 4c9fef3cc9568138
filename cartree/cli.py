"""Command line: grow a tree and a bagged ensemble, then score them."""

from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path

from cartree.bagging import BaggingTrees
from cartree.data import Dataset, VarType
from cartree.tree import DecisionTree

DEFAULT_TYPES = (
    "quanti,quali,quanti,quanti,quanti,quanti,quanti,quali,quanti,quanti"
)


def _parse_types(text: str) -> list[VarType]:
    try:
        return [VarType(part.strip()) for part in text.split(",")]
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"types must be 'quanti' or 'quali', got {text!r}"
        ) from None


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cartree",
        description="Grow a decision tree and a bagged ensemble on a CSV file.",
    )
    parser.add_argument("path", help="comma-separated file, names on the first line")
    parser.add_argument(
        "--types",
        type=_parse_types,
        default=_parse_types(DEFAULT_TYPES),
        help="comma-separated variable types (quanti or quali)",
    )
    parser.add_argument("--target", type=int, default=1, help="target column index")
    parser.add_argument("--train-fraction", type=float, default=0.8)
    parser.add_argument("--trees", type=int, default=10, help="trees in the ensemble")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--output-dir", default=".", help="where .dot files go")
    return parser


def _report(predictions: list[str], score: float) -> None:
    print("".join(f"{p} " for p in predictions))
    print(f" \n score : {format(score, 'g')}\n")


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        data = Dataset.from_csv(args.path, args.types, args.target)
    except OSError as exc:
        print(f"cannot open {args.path}: {exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"cannot read {args.path}: {exc}", file=sys.stderr)
        return 1

    rng = random.Random(args.seed)
    output_dir = Path(args.output_dir)
    try:
        train_set, test_set = data.train_test_split(args.train_fraction, rng)
        print()

        tree = DecisionTree().fit(train_set)
        dot_path = tree.export_graphviz(train_set, output_dir / "PremierArbre.dot")
        print(f" Fichier GRAPHVIZ genere : {dot_path}")
        _report(*tree.evaluate(test_set))

        bagging = BaggingTrees(args.trees, train_set, rng).fit(output_dir)
        for path in bagging.dot_paths:
            print(f" Fichier GRAPHVIZ genere : {path}")
        _report(*bagging.evaluate(test_set))
    except (ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())