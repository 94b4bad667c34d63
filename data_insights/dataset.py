"""Core value types shared by parsers, classifier, profiler and charts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

Row = Dict[str, Any]

CHART_KINDS = ("bar", "line", "pie", "scatter")


@dataclass(frozen=True)
class Dataset:
    """Normalized table produced by any format parser.

    ``columns`` keeps source order (header order, or key order of the first
    JSON object). Rows are plain dicts and are never edited after parsing;
    a column missing from a row reads as ``None``.
    """

    rows: Tuple[Row, ...] = ()
    columns: Tuple[str, ...] = ()
    errors: Tuple[str, ...] = ()

    @classmethod
    def build(
        cls,
        rows: List[Row],
        columns: List[str],
        errors: Optional[List[str]] = None,
    ) -> "Dataset":
        return cls(rows=tuple(rows), columns=tuple(columns), errors=tuple(errors or ()))

    @classmethod
    def failed(cls, *messages: str) -> "Dataset":
        """Empty dataset carrying structural error messages."""
        return cls(errors=tuple(messages))

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def is_usable(self) -> bool:
        # Row-level errors are advisory; only a dataset without rows blocks
        return bool(self.rows) and bool(self.columns)

    def column_values(self, column: str) -> List[Any]:
        return [row.get(column) for row in self.rows]


@dataclass(frozen=True)
class ColumnClassification:
    """Partition of a dataset's columns, both tuples in column order."""

    numeric: Tuple[str, ...] = ()
    categorical: Tuple[str, ...] = ()

    @property
    def numeric_set(self) -> FrozenSet[str]:
        return frozenset(self.numeric)

    @property
    def categorical_set(self) -> FrozenSet[str]:
        return frozenset(self.categorical)

    def is_numeric(self, column: str) -> bool:
        return column in self.numeric_set

    def to_dict(self) -> Dict[str, List[str]]:
        return {"numeric": list(self.numeric), "categorical": list(self.categorical)}


@dataclass(frozen=True)
class ColumnSummary:
    """Exact descriptive statistics for one numeric column."""

    column: str
    count: int
    mean: float
    median: float
    min: float
    max: float
    std_dev: float

    @property
    def range(self) -> float:
        return self.max - self.min

    def rounded(self, places: int = 2) -> "ColumnSummary":
        return ColumnSummary(
            column=self.column,
            count=self.count,
            mean=round(self.mean, places),
            median=round(self.median, places),
            min=round(self.min, places),
            max=round(self.max, places),
            std_dev=round(self.std_dev, places),
        )

    def to_dict(self, places: Optional[int] = 2) -> Dict[str, Any]:
        summary = self.rounded(places) if places is not None else self
        value_range = summary.max - summary.min
        return {
            "column": summary.column,
            "count": summary.count,
            "mean": summary.mean,
            "median": summary.median,
            "min": summary.min,
            "max": summary.max,
            "std_dev": summary.std_dev,
            "range": round(value_range, places) if places is not None else value_range,
        }


@dataclass(frozen=True)
class DatasetOverview:
    """Headline counts plus per-column statistics for a stats panel."""

    total_rows: int
    total_columns: int
    numeric_columns: int
    categorical_columns: int
    column_stats: Tuple[ColumnSummary, ...] = field(default_factory=tuple)

    def to_dict(self, places: Optional[int] = 2) -> Dict[str, Any]:
        return {
            "total_rows": self.total_rows,
            "total_columns": self.total_columns,
            "numeric_columns": self.numeric_columns,
            "categorical_columns": self.categorical_columns,
            "column_stats": [s.to_dict(places) for s in self.column_stats],
        }


@dataclass(frozen=True)
class ChartConfig:
    """Chart selection handed to the aggregator for each render."""

    kind: str
    x_axis: str
    y_axis: str
    title: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind not in CHART_KINDS:
            raise ValueError(
                f"Unsupported chart kind: {self.kind!r}. Expected one of {', '.join(CHART_KINDS)}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "x_axis": self.x_axis,
            "y_axis": self.y_axis,
            "title": self.title,
        }


__all__ = [
    "CHART_KINDS",
    "ChartConfig",
    "ColumnClassification",
    "ColumnSummary",
    "Dataset",
    "DatasetOverview",
    "Row",
]
