import random

import pytest

from cartree.data import Dataset, Individual, VarType

TYPES = ["quanti", "quali", "quanti"]
LINES = [
    '"height","colour","weight"\n',
    "1.5,red,10\n",
    "2,blue,20\n",
    "3.25,red,30\n",
    "4,green,40\n",
]


@pytest.fixture
def dataset():
    return Dataset.from_lines(LINES, TYPES, 1)


def test_names_are_unquoted(dataset):
    assert dataset.names == ["height", "colour", "weight"]
    assert dataset.n_vars == 3


def test_types_converted(dataset):
    assert dataset.var_types == [VarType.QUANT, VarType.QUAL, VarType.QUANT]
    assert dataset.target_type() is VarType.QUAL


def test_values_read(dataset):
    first = dataset.individuals[0]
    assert first.quant(0) == 1.5
    assert first.qual(1) == "red"
    assert first.quant(2) == 10.0
    assert len(dataset.individuals) == 4


def test_cross_type_access_defaults(dataset):
    first = dataset.individuals[0]
    assert first.quant(1) == 0.0
    assert first.qual(0) == ""


def test_categories_sorted_unique(dataset):
    assert dataset.categories(1) == sorted({"red", "blue", "green"})
    assert dataset.categories(0) == []


def test_describe_types(dataset):
    lines = dataset.describe_types().splitlines()
    assert lines[1] == "colour : quali"
    assert len(lines) == 3


def test_preview_limit(dataset):
    text = dataset.format_preview(2)
    lines = text.splitlines()
    assert lines[0] == "height colour weight "
    assert lines[1] == "(1.5,red,10)"
    assert len(lines) == 3


def test_str_is_preview(dataset):
    assert str(dataset) == dataset.format_preview(10)


def test_individual_str():
    assert str(Individual((2.0, "x"))) == "2,x"


def test_blank_lines_skipped():
    data = Dataset.from_lines(LINES + ["\n", "   \n"], TYPES, 0)
    assert len(data.individuals) == 4


def test_crlf_lines():
    data = Dataset.from_lines(["a,b\r\n", "1,x\r\n"], ["quanti", "quali"], 0)
    assert data.individuals[0].qual(1) == "x"
    assert data.names == ["a", "b"]


def test_bad_number_raises():
    with pytest.raises(ValueError):
        Dataset.from_lines(["a,b\n", "oops,x\n"], ["quanti", "quali"], 0)


def test_short_row_raises():
    with pytest.raises(ValueError):
        Dataset.from_lines(["a,b\n", "1\n"], ["quanti", "quali"], 0)


def test_too_few_types_raises():
    with pytest.raises(ValueError):
        Dataset.from_lines(LINES, ["quanti"], 0)


def test_unknown_type_raises():
    with pytest.raises(ValueError):
        Dataset.from_lines(LINES, ["quanti", "other", "quanti"], 0)


def test_target_out_of_range_raises():
    with pytest.raises(ValueError):
        Dataset.from_lines(LINES, TYPES, 5)


def test_from_csv_matches_from_lines(tmp_path, dataset):
    path = tmp_path / "data.csv"
    path.write_text("".join(LINES), encoding="utf-8")
    loaded = Dataset.from_csv(path, TYPES, 1)
    assert loaded == dataset


def test_from_csv_missing_file(tmp_path):
    with pytest.raises(OSError):
        Dataset.from_csv(tmp_path / "missing.csv", TYPES, 1)


def test_split_partitions_rows(dataset):
    train, test = dataset.train_test_split(0.5, random.Random(1))
    assert len(train.individuals) == 2
    assert len(test.individuals) == 2
    combined = sorted(train.individuals + test.individuals, key=str)
    assert combined == sorted(dataset.individuals, key=str)


def test_split_keeps_metadata(dataset):
    train, test = dataset.train_test_split(0.75, random.Random(3))
    for part in (train, test):
        assert part.names == dataset.names
        assert part.var_types == dataset.var_types
        assert part.target == dataset.target
        assert part.category_map == dataset.category_map


def test_split_truncates_train_size(dataset):
    train, test = dataset.train_test_split(0.8, random.Random(0))
    assert len(train.individuals) == int(4 * 0.8)
    assert len(train.individuals) + len(test.individuals) == 4


def test_split_reproducible_with_seed(dataset):
    a = dataset.train_test_split(0.5, random.Random(7))
    b = dataset.train_test_split(0.5, random.Random(7))
    assert a[0].individuals == b[0].individuals
    assert a[1].individuals == b[1].individuals