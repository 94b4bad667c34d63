"""Numeric vs categorical column classification.

The same classification feeds the statistics engine and the chart axis
defaults, so both always agree on which columns are numeric.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional
import logging

from .cleaning_utils import coerce_numeric, is_blank
from .config import resolve_config
from .dataset import ColumnClassification, Dataset

logger = logging.getLogger(__name__)


def numeric_ratio(values: List[Any]) -> float:
    """Share of non-blank values that coerce to a number."""
    present = [v for v in values if not is_blank(v)]
    if not present:
        return 0.0
    coercible = sum(1 for v in present if coerce_numeric(v) is not None)
    return coercible / len(present)


def is_numeric_column(values: List[Any], min_numeric_ratio: float = 0.0) -> bool:
    """A column is numeric once any value coerces and the ratio threshold holds.

    With the default threshold of 0.0 a single number among blanks or text
    is enough.
    """
    if not any(coerce_numeric(v) is not None for v in values):
        return False
    return numeric_ratio(values) >= min_numeric_ratio


def classify(
    dataset: Dataset,
    config: Optional[Dict[str, Any]] = None,
    *,
    min_numeric_ratio: Optional[float] = None,
) -> ColumnClassification:
    cfg = resolve_config(config)
    threshold = cfg["min_numeric_ratio"] if min_numeric_ratio is None else min_numeric_ratio

    numeric: List[str] = []
    categorical: List[str] = []
    for column in dataset.columns:
        if is_numeric_column(dataset.column_values(column), threshold):
            numeric.append(column)
        else:
            categorical.append(column)

    logger.debug(
        f"Classified {len(dataset.columns)} columns (threshold={threshold}): "
        f"numeric={numeric} categorical={categorical}"
    )
    return ColumnClassification(numeric=tuple(numeric), categorical=tuple(categorical))


__all__ = ["classify", "is_numeric_column", "numeric_ratio"]
