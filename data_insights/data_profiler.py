from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import numpy as np

from .classifier import classify
from .cleaning_utils import coerce_numeric
from .config import resolve_config
from .dataset import ColumnClassification, ColumnSummary, Dataset, DatasetOverview

logger = logging.getLogger(__name__)


class DataProfiler:
    """Descriptive statistics over the numeric columns of a dataset."""

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        self.config = resolve_config(config)

    def summarize(
        self,
        dataset: Dataset,
        classification: Optional[ColumnClassification] = None,
    ) -> List[ColumnSummary]:
        """Exact statistics for every numeric column, in column order.

        Columns without a single coercible value are left out.
        """
        if classification is None:
            classification = classify(dataset, self.config)

        summaries: List[ColumnSummary] = []
        for column in dataset.columns:
            if not classification.is_numeric(column):
                continue
            values = self._numeric_values(dataset, column)
            if values.size == 0:
                logger.debug(f"Skipping column '{column}': no coercible values")
                continue
            summaries.append(self._get_numeric_statistics(column, values))
        return summaries

    def describe(
        self,
        dataset: Dataset,
        classification: Optional[ColumnClassification] = None,
    ) -> DatasetOverview:
        """Headline counts plus column statistics."""
        if classification is None:
            classification = classify(dataset, self.config)
        return DatasetOverview(
            total_rows=len(dataset.rows),
            total_columns=len(dataset.columns),
            numeric_columns=len(classification.numeric),
            categorical_columns=len(classification.categorical),
            column_stats=tuple(self.summarize(dataset, classification)),
        )

    def _numeric_values(self, dataset: Dataset, column: str) -> np.ndarray:
        coerced = (coerce_numeric(v) for v in dataset.column_values(column))
        return np.array([v for v in coerced if v is not None], dtype=float)

    def _get_numeric_statistics(self, column: str, values: np.ndarray) -> ColumnSummary:
        lo = float(values.min())
        hi = float(values.max())
        # Summation error can push the mean of identical values past min/max
        mean = min(max(float(values.mean()), lo), hi)
        std = 0.0 if lo == hi else float(values.std(ddof=0))
        return ColumnSummary(
            column=column,
            count=int(values.size),
            mean=mean,
            median=float(np.median(values)),
            min=lo,
            max=hi,
            std_dev=std,
        )


def summarize(
    dataset: Dataset,
    classification: Optional[ColumnClassification] = None,
    config: Optional[Dict[str, Any]] = None,
) -> List[ColumnSummary]:
    return DataProfiler(config).summarize(dataset, classification)


def describe(
    dataset: Dataset,
    classification: Optional[ColumnClassification] = None,
    config: Optional[Dict[str, Any]] = None,
) -> DatasetOverview:
    return DataProfiler(config).describe(dataset, classification)


__all__ = ["DataProfiler", "describe", "summarize"]
