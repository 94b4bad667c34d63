"""Serialize a dataset back to delimited text or JSON text."""

from __future__ import annotations

import csv
import json

import pandas as pd

from .dataset import Dataset


def to_frame(dataset: Dataset) -> pd.DataFrame:
    """Object-dtype frame so cell values keep their original Python types."""
    return pd.DataFrame(list(dataset.rows), columns=list(dataset.columns), dtype=object)


def to_csv_text(dataset: Dataset, delimiter: str = ",") -> str:
    """Header line plus one line per row.

    Fields holding the delimiter, a quote or a newline are quoted with
    inner quotes doubled; blank cells are written as empty fields.
    """
    if not dataset.columns:
        return ""
    return to_frame(dataset).to_csv(
        index=False,
        sep=delimiter,
        na_rep="",
        quoting=csv.QUOTE_MINIMAL,
        quotechar='"',
        doublequote=True,
        lineterminator="\n",
    )


def to_json_text(dataset: Dataset, indent: int = 2) -> str:
    return json.dumps(list(dataset.rows), indent=indent, default=str)


__all__ = ["to_csv_text", "to_frame", "to_json_text"]
