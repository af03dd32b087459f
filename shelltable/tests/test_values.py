"""
Tests for cell values: conversion, total order within a kind, and
cross-kind comparison failures.
"""

import datetime
import decimal
import math

import pytest

from shelltable.core.errors import IncomparableValues, UnsupportedValue
from shelltable.core.values import CellKind, CellValue


def test_of_picks_variant():
    """Raw scalars map to the matching variant; bool is not an integer."""
    assert CellValue.of(True).kind is CellKind.BOOLEAN
    assert CellValue.of(7).kind is CellKind.INTEGER
    assert CellValue.of(1.5).kind is CellKind.FLOAT
    assert CellValue.of("x").kind is CellKind.TEXT
    assert CellValue.of(datetime.datetime(2024, 1, 2)).kind is CellKind.TIMESTAMP


def test_of_widens_decimal_and_date():
    assert CellValue.of(decimal.Decimal("2.5")) == CellValue(CellKind.FLOAT, 2.5)
    assert CellValue.of(datetime.date(2024, 1, 2)) == CellValue.of(datetime.datetime(2024, 1, 2, 0, 0))


def test_of_passes_cell_values_through():
    v = CellValue.of("abc")
    assert CellValue.of(v) is v


def test_of_rejects_unsupported():
    with pytest.raises(UnsupportedValue):
        CellValue.of(None)
    with pytest.raises(UnsupportedValue):
        CellValue.of(object())


def test_same_kind_ordering():
    assert CellValue.of(1) < CellValue.of(2)
    assert CellValue.of("b") > CellValue.of("a")
    assert CellValue.of(False) < CellValue.of(True)
    assert CellValue.of(3).compare(CellValue.of(3)) == 0
    assert sorted([CellValue.of(3), CellValue.of(1), CellValue.of(2)]) == [
        CellValue.of(1),
        CellValue.of(2),
        CellValue.of(3),
    ]


def test_cross_kind_comparison_fails():
    """Comparing different kinds is an error, never a coercion."""
    with pytest.raises(IncomparableValues):
        CellValue.of(1) < CellValue.of("1")
    with pytest.raises(IncomparableValues):
        CellValue.of(1).compare(CellValue.of(1.0))
    with pytest.raises(TypeError):
        sorted([CellValue.of(1), CellValue.of("a")])


def test_cross_kind_equality_is_false():
    assert CellValue.of(1) != CellValue.of(1.0)
    assert CellValue.of(1) != CellValue.of(True)
    assert CellValue.of("1") == CellValue.of("1")


def test_nan_is_ordered_last_and_equal_to_itself():
    nan = CellValue.of(math.nan)
    assert nan == CellValue.of(float("nan"))
    assert nan > CellValue.of(1e308)
    ordered = sorted([nan, CellValue.of(1.0), CellValue.of(-1.0)])
    assert ordered[:2] == [CellValue.of(-1.0), CellValue.of(1.0)]
    assert ordered[2] == nan


def test_naive_and_aware_timestamps_are_incomparable():
    naive = CellValue.of(datetime.datetime(2024, 1, 1))
    aware = CellValue.of(datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc))
    with pytest.raises(IncomparableValues):
        naive.compare(aware)


def test_to_text():
    assert CellValue.of(True).to_text() == "true"
    assert CellValue.of(False).to_text() == "false"
    assert CellValue.of(12).to_text() == "12"
    assert CellValue.of(2.5).to_text() == "2.5"
    assert CellValue.of(datetime.datetime(2024, 1, 2, 3, 4, 5)).to_text() == "2024-01-02T03:04:05"
    assert str(CellValue.of("abc")) == "abc"


def test_hash_consistent_with_equality():
    assert len({CellValue.of(1), CellValue.of(1), CellValue.of(1.0)}) == 2
