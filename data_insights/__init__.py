"""Tabular data ingestion with column type inference, statistics and chart aggregation.

Public entry points:
    dispatch(filename, contents, config=None) -> Dataset
    await load_file(path, config=None) -> Dataset
    classify(dataset) -> ColumnClassification
    summarize(dataset) -> list[ColumnSummary]
    aggregate(dataset, ChartConfig(...)) -> list[dict]
    await analyze_file(path, *, mode="full", config=None)

Modes:
    full         -> classification + statistics + chart defaults + sample rows
    schema_only  -> only dataset shape + column classification
"""

import logging

from .charts import aggregate, axis_options, default_chart_config  # noqa: F401
from .classifier import classify  # noqa: F401
from .cleaning_utils import coerce_numeric  # noqa: F401
from .config import DEFAULT_CONFIG, resolve_config  # noqa: F401
from .data_profiler import DataProfiler, describe, summarize  # noqa: F401
from .dataset import (  # noqa: F401
    CHART_KINDS,
    ChartConfig,
    ColumnClassification,
    ColumnSummary,
    Dataset,
    DatasetOverview,
)
from .export import to_csv_text, to_json_text  # noqa: F401
from .parsers import parse_csv, parse_json, parse_spreadsheet  # noqa: F401
from .pipeline import (  # noqa: F401
    SUPPORTED_EXTENSIONS,
    FileReadError,
    analyze_dataset,
    analyze_file,
    analyze_file_sync,
    dispatch,
    load_file,
    load_file_sync,
    read_file,
    validate_upload,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "CHART_KINDS",
    "DEFAULT_CONFIG",
    "SUPPORTED_EXTENSIONS",
    "ChartConfig",
    "ColumnClassification",
    "ColumnSummary",
    "DataProfiler",
    "Dataset",
    "DatasetOverview",
    "FileReadError",
    "aggregate",
    "analyze_dataset",
    "analyze_file",
    "analyze_file_sync",
    "axis_options",
    "classify",
    "coerce_numeric",
    "default_chart_config",
    "describe",
    "dispatch",
    "load_file",
    "load_file_sync",
    "parse_csv",
    "parse_json",
    "parse_spreadsheet",
    "read_file",
    "resolve_config",
    "summarize",
    "to_csv_text",
    "to_json_text",
    "validate_upload",
]
