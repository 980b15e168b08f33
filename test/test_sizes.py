# test/test_sizes.py

import pytest

from ssam.errors import CapacityError, ConfigError
from ssam.splitter.sizes import Absolute, Relative, Remainder, SetPlan, parse_size


def test_parse_size_variants():
    assert parse_size("*") == Remainder()
    assert parse_size("1000") == Absolute(1000)
    assert parse_size(" 0.25 ") == Relative(0.25)
    assert parse_size("1.0") == Relative(1.0)


@pytest.mark.parametrize("token", ["abc", "-1", "-0.5", "", "nan"])
def test_parse_size_rejects_invalid(token):
    with pytest.raises(ConfigError):
        parse_size(token)


@pytest.mark.parametrize("fraction,datasize,expected", [
    (0.0, 10, 0),
    (0.999, 10, 9),
    (0.5, 10, 5),
    (1.0, 10, 10),
    (0.25, 7, 1),
])
def test_relative_sizes_round_down(fraction, datasize, expected):
    assert Relative(fraction).resolve(datasize) == expected


def test_remainder_counts_as_zero():
    plan = SetPlan.from_options(["*", "3", "0.5"])
    assert plan.resolve(10) == [0, 3, 5]
    assert plan.remainder_index == 0


def test_two_remainders_are_rejected():
    with pytest.raises(ConfigError):
        SetPlan.from_options(["*", "*"])


def test_missing_names_are_generated():
    plan = SetPlan.from_options(["1", "2", "3"], ["train"])
    assert plan.names == ["train", "set2", "set3"]


def test_extra_names_are_ignored_with_warning(capsys):
    plan = SetPlan.from_options(["1"], ["train", "test"])
    assert plan.names == ["train"]
    assert "Warning" in capsys.readouterr().err


def test_duplicate_names_are_rejected():
    with pytest.raises(ConfigError):
        SetPlan.from_options(["1", "2"], ["train", "train"])


def test_capacity_without_replacement():
    plan = SetPlan.from_options(["6", "0.5"])
    with pytest.raises(CapacityError):
        plan.check_capacity(10)


def test_capacity_ignored_with_replacement():
    plan = SetPlan.from_options(["6", "0.5"])
    assert plan.check_capacity(10, replace=True) == [6, 5]
