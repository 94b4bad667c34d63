"""Cell-level cleaning helpers shared by every parser and consumer.

Pieces:
  - Numeric coercion (coerce_numeric) used by the classifier, the profiler
    and the chart aggregator so they all agree on what counts as a number
  - Blank detection (is_blank, drop_fully_blank_rows)
  - Header normalization (clean_header, dedupe_headers)
  - Cell normalization from pandas/numpy scalars to plain Python values
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, Dict, List, Optional
import math
import numbers
import re

import numpy as np
import pandas as pd

# Plain decimal literal: sign, digits with optional fraction, optional exponent
DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def _is_nan(value: Any) -> bool:
    if value is pd.NaT or value is pd.NA:
        return True
    return isinstance(value, float) and math.isnan(value)


def is_blank(value: Any) -> bool:
    """None, NaN/NaT and empty (or whitespace-only) strings are blank."""
    if value is None or _is_nan(value):
        return True
    if isinstance(value, np.floating) and np.isnan(value):
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def coerce_numeric(value: Any) -> Optional[float]:
    """Convert a cell to a float, or None when it is not numeric.

    Booleans count as 0/1, strings must be a plain decimal literal once
    trimmed, and non-finite numbers are rejected. Never raises.
    """
    if value is None:
        return None
    if isinstance(value, (bool, np.bool_)):
        return 1.0 if value else 0.0
    if isinstance(value, numbers.Real):
        number = float(value)
        return number if math.isfinite(number) else None
    if isinstance(value, str):
        text = value.strip()
        if not text or not DECIMAL_PATTERN.fullmatch(text):
            return None
        number = float(text)
        return number if math.isfinite(number) else None
    return None


def normalize_cell(value: Any) -> Any:
    """Turn pandas/numpy cell values into plain Python scalars.

    Missing cells become None and dates become ISO-8601 strings.
    """
    if is_blank(value) and not isinstance(value, str):
        return None
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, (pd.Timestamp, datetime, date, time)):
        return value.isoformat()
    return value


def clean_header(value: Any) -> str:
    if is_blank(value):
        return ""
    return str(normalize_cell(value)).strip()


def dedupe_headers(headers: List[str]) -> List[str]:
    # Suffixes skip any name already present, generated or original
    taken = set(headers)
    seen: Dict[str, int] = {}
    out: List[str] = []
    for h in headers:
        if h not in seen:
            seen[h] = 0
            out.append(h)
            continue
        n = seen[h]
        candidate = h
        while candidate in taken:
            n += 1
            candidate = f"{h}_{n}"
        seen[h] = n
        taken.add(candidate)
        out.append(candidate)
    return out


def drop_fully_blank_rows(df: pd.DataFrame) -> pd.DataFrame:
    if df.empty:
        return df
    keep_mask = [
        not all(is_blank(v) for v in row) for row in df.itertuples(index=False)
    ]
    return df.loc[keep_mask].reset_index(drop=True)


__all__ = [
    "coerce_numeric",
    "is_blank",
    "normalize_cell",
    "clean_header",
    "dedupe_headers",
    "drop_fully_blank_rows",
]
