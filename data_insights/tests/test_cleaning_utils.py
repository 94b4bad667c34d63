import math

import numpy as np
import pandas as pd
import pytest

from data_insights.cleaning_utils import (
    coerce_numeric,
    dedupe_headers,
    drop_fully_blank_rows,
    is_blank,
    normalize_cell,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("42", 42.0),
        (" 42 ", 42.0),
        ("-3.5", -3.5),
        ("+.5", 0.5),
        ("1e3", 1000.0),
        (7, 7.0),
        (2.25, 2.25),
        (True, 1.0),
        (False, 0.0),
        (np.int64(3), 3.0),
        (np.float64(1.5), 1.5),
        (np.bool_(True), 1.0),
    ],
)
def test_coerce_numeric_accepts_numbers(value, expected):
    assert coerce_numeric(value) == expected


@pytest.mark.parametrize(
    "value",
    [None, "", "   ", "abc", "1,000", "0x10", "inf", "nan", "12abc", float("nan"), math.inf, [1], {"a": 1}],
)
def test_coerce_numeric_rejects_non_numbers(value):
    assert coerce_numeric(value) is None


def test_is_blank():
    assert is_blank(None)
    assert is_blank("")
    assert is_blank("  ")
    assert is_blank(float("nan"))
    assert is_blank(pd.NaT)
    assert not is_blank(0)
    assert not is_blank(False)
    assert not is_blank("x")


def test_normalize_cell():
    assert normalize_cell(np.nan) is None
    assert normalize_cell(np.int64(4)) == 4
    assert type(normalize_cell(np.int64(4))) is int
    assert normalize_cell(pd.Timestamp("2024-01-02")) == "2024-01-02T00:00:00"
    assert normalize_cell("") == ""


def test_dedupe_headers():
    assert dedupe_headers(["a", "b", "a", "a"]) == ["a", "b", "a_1", "a_2"]
    assert dedupe_headers(["a", "a", "a_1"]) == ["a", "a_2", "a_1"]
    assert dedupe_headers(["a_1", "a", "a"]) == ["a_1", "a", "a_2"]
    assert dedupe_headers(["a", "a_1", "a", "a_1"]) == ["a", "a_1", "a_2", "a_1_1"]


def test_drop_fully_blank_rows():
    df = pd.DataFrame([["x", 1], [None, " "], [np.nan, np.nan], [None, 0]])
    out = drop_fully_blank_rows(df)
    assert len(out) == 2
    assert out.iloc[1, 1] == 0
