"""Reshape a dataset into records a chart renderer can plot directly."""

from __future__ import annotations

from collections.abc import Hashable
from typing import Any, Dict, List, Optional, Tuple
import logging

from .classifier import classify
from .cleaning_utils import coerce_numeric
from .dataset import ChartConfig, ColumnClassification, Dataset

logger = logging.getLogger(__name__)

DEFAULT_CHART_KIND = "bar"


def _y_value(value: Any) -> float:
    number = coerce_numeric(value)
    return 0.0 if number is None else number


def _category_key(value: Any) -> Hashable:
    # Nested JSON values (lists, dicts) group by their text form
    return value if isinstance(value, Hashable) else str(value)


def _series_records(dataset: Dataset, config: ChartConfig) -> List[Dict[str, Any]]:
    records = []
    for row in dataset.rows:
        record = dict(row)
        record[config.x_axis] = row.get(config.x_axis)
        record[config.y_axis] = _y_value(row.get(config.y_axis))
        records.append(record)
    return records


def _pie_records(dataset: Dataset, config: ChartConfig) -> List[Dict[str, Any]]:
    # Booleans are their own categories, apart from 1 and 0
    totals: Dict[Tuple[bool, Hashable], float] = {}
    for row in dataset.rows:
        x = row.get(config.x_axis)
        key = (isinstance(x, bool), _category_key(x))
        totals[key] = totals.get(key, 0.0) + _y_value(row.get(config.y_axis))
    return [{"name": name, "value": value} for (_, name), value in totals.items()]


def aggregate(dataset: Dataset, config: ChartConfig) -> List[Dict[str, Any]]:
    """Chart-ready records for ``config.kind``.

    bar/line/scatter: one record per row, y coerced with missing values as 0.
    pie: y summed per distinct x value, in first-seen order, as
    ``{"name", "value"}`` records.
    """
    if not dataset.rows:
        return []
    if config.kind == "pie":
        records = _pie_records(dataset, config)
    else:
        records = _series_records(dataset, config)
    logger.debug(f"Aggregated {len(dataset.rows)} rows into {len(records)} {config.kind} records")
    return records


def axis_options(
    dataset: Dataset, classification: Optional[ColumnClassification] = None
) -> Dict[str, List[str]]:
    """Columns selectable for each axis: any column on x, numeric ones on y."""
    if classification is None:
        classification = classify(dataset)
    return {"x": list(dataset.columns), "y": list(classification.numeric)}


def default_chart_config(
    dataset: Dataset,
    classification: Optional[ColumnClassification] = None,
    kind: str = DEFAULT_CHART_KIND,
) -> Optional[ChartConfig]:
    """Initial chart selection: first categorical column against first numeric one."""
    columns = dataset.columns
    if not columns:
        return None
    if classification is None:
        classification = classify(dataset)

    x_axis = classification.categorical[0] if classification.categorical else columns[0]
    if classification.numeric:
        y_axis = classification.numeric[0]
    elif len(columns) > 1:
        y_axis = columns[1]
    else:
        y_axis = columns[0]
    return ChartConfig(kind=kind, x_axis=x_axis, y_axis=y_axis)


__all__ = ["aggregate", "axis_options", "default_chart_config"]
