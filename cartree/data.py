"""Tabular data with mixed quantitative and qualitative variables."""

from __future__ import annotations

import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from os import PathLike
from typing import Union

Value = Union[float, str]


class VarType(str, Enum):
    """Kind of a variable: numeric or categorical."""

    QUANT = "quanti"
    QUAL = "quali"


def _format_value(value: Value) -> str:
    return format(value, "g") if isinstance(value, float) else value


@dataclass(frozen=True)
class Individual:
    """One row of a dataset: numbers for quantitative cells, text otherwise."""

    values: tuple[Value, ...]

    def quant(self, index: int) -> float:
        """Numeric value of a cell, 0.0 for a qualitative cell."""
        value = self.values[index]
        return value if isinstance(value, float) else 0.0

    def qual(self, index: int) -> str:
        """Text value of a cell, the empty string for a quantitative cell."""
        value = self.values[index]
        return value if isinstance(value, str) else ""

    def __len__(self) -> int:
        return len(self.values)

    def __str__(self) -> str:
        return ",".join(_format_value(v) for v in self.values)


def _split_cells(line: str) -> list[str]:
    """Split a line on commas; a trailing empty field is not a cell."""
    cells = line.split(",")
    if cells and cells[-1] == "":
        cells.pop()
    return cells


def _unquote(name: str) -> str:
    if len(name) >= 2 and name[0] == '"' and name[-1] == '"':
        return name[1:-1]
    if name == '"':
        return ""
    return name


@dataclass
class Dataset:
    """Variable names, variable types, the target column and the rows."""

    names: list[str]
    var_types: list[VarType]
    target: int
    individuals: list[Individual] = field(default_factory=list)
    category_map: dict[str, list[str]] = field(default_factory=dict)

    @property
    def n_vars(self) -> int:
        return len(self.names)

    @classmethod
    def from_csv(
        cls,
        path: str | PathLike[str],
        var_types: Sequence[VarType | str],
        target: int,
    ) -> Dataset:
        """Load a comma-separated file whose first line holds the variable names."""
        with open(path, encoding="utf-8") as handle:
            return cls.from_lines(handle, var_types, target)

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        var_types: Sequence[VarType | str],
        target: int,
    ) -> Dataset:
        """Build a dataset from text lines, the first one holding the names."""
        iterator = (line.rstrip("\r\n") for line in lines)
        header = next(iterator, "")
        names = [_unquote(name) for name in _split_cells(header)]
        if len(var_types) < len(names):
            raise ValueError(
                f"{len(names)} variables but only {len(var_types)} types given"
            )
        types = [VarType(t) for t in var_types[: len(names)]]
        if not 0 <= target < len(names):
            raise ValueError(f"target index {target} out of range")

        individuals = []
        for line_no, line in enumerate(iterator, start=2):
            if not line.strip():
                continue
            cells = _split_cells(line)
            if len(cells) < len(names):
                raise ValueError(
                    f"line {line_no}: expected {len(names)} cells, got {len(cells)}"
                )
            values: list[Value] = []
            for name, var_type, cell in zip(names, types, cells):
                if var_type is VarType.QUANT:
                    try:
                        values.append(float(cell))
                    except ValueError:
                        raise ValueError(
                            f"line {line_no}: {name!r} is not a number: {cell!r}"
                        ) from None
                else:
                    values.append(cell)
            individuals.append(Individual(tuple(values)))

        category_map = {
            name: sorted({ind.qual(i) for ind in individuals})
            for i, (name, var_type) in enumerate(zip(names, types))
            if var_type is VarType.QUAL
        }
        return cls(names, types, target, individuals, category_map)

    def target_type(self) -> VarType:
        """Type of the target variable."""
        return self.var_types[self.target]

    def categories(self, index: int) -> list[str]:
        """Sorted distinct values of a qualitative variable."""
        return self.category_map.get(self.names[index], [])

    def describe_types(self) -> str:
        """One 'name : type' line per variable."""
        return "\n".join(
            f"{name} : {var_type.value}"
            for name, var_type in zip(self.names, self.var_types)
        )

    def format_preview(self, limit: int = 10) -> str:
        """The variable names followed by at most ``limit`` rows."""
        lines = ["".join(f"{name} " for name in self.names)]
        lines.extend(f"({ind})" for ind in self.individuals[:limit])
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.format_preview()

    def _with_rows(self, rows: list[Individual]) -> Dataset:
        return Dataset(
            list(self.names),
            list(self.var_types),
            self.target,
            rows,
            {name: list(cats) for name, cats in self.category_map.items()},
        )

    def train_test_split(
        self, train_fraction: float = 0.8, rng: random.Random | None = None
    ) -> tuple[Dataset, Dataset]:
        """Shuffle the rows and cut them into a training and a test set."""
        rng = rng or random.Random()
        n_train = int(len(self.individuals) * train_fraction)
        shuffled = list(self.individuals)
        rng.shuffle(shuffled)
        return self._with_rows(shuffled[:n_train]), self._with_rows(shuffled[n_train:])