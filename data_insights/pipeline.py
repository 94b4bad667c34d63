from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from .charts import axis_options, default_chart_config
from .classifier import classify
from .config import resolve_config
from .data_profiler import DataProfiler
from .dataset import Dataset
from .parsers import Contents, parse_csv, parse_json, parse_spreadsheet

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
Parser = Callable[[Contents, Optional[Dict[str, Any]]], Dataset]

PARSERS: Dict[str, Parser] = {
    ".csv": parse_csv,
    ".json": parse_json,
    ".xlsx": parse_spreadsheet,
    ".xls": parse_spreadsheet,
}
SUPPORTED_EXTENSIONS = tuple(PARSERS)
MODES = ("full", "schema_only")


class FileReadError(Exception):
    """Raised when a file cannot be read from disk."""


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


def _extension(filename: str) -> str:
    return Path(filename).suffix.lower()


def validate_upload(
    filename: str, size: int, config: Optional[Dict[str, Any]] = None
) -> Optional[str]:
    """Return an error message when a file should not be parsed at all."""
    cfg = resolve_config(config)
    ext = _extension(filename)
    if ext not in PARSERS:
        shown = ext or "(none)"
        return f"Unsupported file type: {shown}. Supported types: {', '.join(SUPPORTED_EXTENSIONS)}"
    limit = cfg["max_file_size_bytes"]
    if size > limit:
        return f"File size must be less than {limit / (1024 * 1024):g}MB (got {size} bytes)"
    return None


def dispatch(
    filename: str, contents: Contents, config: Optional[Dict[str, Any]] = None
) -> Dataset:
    """Route ``contents`` to the parser matching the filename extension.

    The extension alone decides; content that does not match it surfaces as
    an error from the chosen parser.
    """
    size = len(contents.encode("utf-8")) if isinstance(contents, str) else len(contents)
    problem = validate_upload(filename, size, config)
    if problem:
        logger.warning(f"Rejected {filename}: {problem}")
        return Dataset.failed(problem)
    parser = PARSERS[_extension(filename)]
    logger.debug(f"Dispatching {filename} to {parser.__name__}")
    return parser(contents, config)


# ---------------------------------------------------------------------------
# File reading (the only asynchronous step)
# ---------------------------------------------------------------------------


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise FileReadError(f"Failed to read file {path}: {e}") from e


async def read_file(file_path: PathLike) -> bytes:
    """Read the whole file in a worker thread; resolves to all bytes or raises."""
    return await asyncio.to_thread(_read_bytes, Path(file_path))


def _precheck(path: Path, cfg: Dict[str, Any]) -> Optional[Dataset]:
    # Reject by extension/size before reading anything
    try:
        size = path.stat().st_size
    except OSError:
        size = 0
    problem = validate_upload(path.name, size, cfg)
    return Dataset.failed(problem) if problem else None


async def load_file(
    file_path: PathLike, config: Optional[Dict[str, Any]] = None
) -> Dataset:
    cfg = resolve_config(config)
    path = Path(file_path)
    rejected = _precheck(path, cfg)
    if rejected is not None:
        return rejected
    try:
        contents = await read_file(path)
    except FileReadError as e:
        logger.warning(str(e))
        return Dataset.failed(str(e))
    return dispatch(path.name, contents, cfg)


def load_file_sync(
    file_path: PathLike, config: Optional[Dict[str, Any]] = None
) -> Dataset:
    cfg = resolve_config(config)
    path = Path(file_path)
    rejected = _precheck(path, cfg)
    if rejected is not None:
        return rejected
    try:
        contents = _read_bytes(path)
    except FileReadError as e:
        logger.warning(str(e))
        return Dataset.failed(str(e))
    return dispatch(path.name, contents, cfg)


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------


def _build_payload(
    dataset: Dataset, mode: str, cfg: Dict[str, Any]
) -> Dict[str, Any]:
    classification = classify(dataset, cfg)
    payload: Dict[str, Any] = {
        "dataset": {
            "rows": len(dataset.rows),
            "columns": len(dataset.columns),
            "column_names": list(dataset.columns),
        },
        "errors": list(dataset.errors),
        "usable": dataset.is_usable,
        "classification": classification.to_dict(),
        "mode": mode,
    }
    if mode == "schema_only":
        return payload

    places = cfg["display_precision"]
    overview = DataProfiler(cfg).describe(dataset, classification)
    chart = default_chart_config(dataset, classification)
    sample_size = int(cfg["sample_size"])
    payload.update(
        {
            "overview": overview.to_dict(places),
            "statistics": [s.to_dict(places) for s in overview.column_stats],
            "axis_options": axis_options(dataset, classification),
            "chart_defaults": chart.to_dict() if chart is not None else None,
            "sample_rows": [dict(row) for row in dataset.rows[:sample_size]],
        }
    )
    return payload


def analyze_dataset(
    dataset: Dataset, *, mode: str = "full", config: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """classify -> summarize -> chart defaults for an already parsed dataset.

    Parameters
    ----------
    dataset : Dataset
        Output of any parser.
    mode : str
        'full' or 'schema_only'.
    config : dict, optional
        Overrides for ``DEFAULT_CONFIG``.
    """
    if mode not in MODES:
        raise ValueError("mode must be 'full' or 'schema_only'")
    cfg = resolve_config(config)
    return _build_payload(dataset, mode, cfg)


async def analyze_file(
    file_path: PathLike, *, mode: str = "full", config: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Primary orchestrator: read -> parse -> classify -> summarize -> payload.

    Returns
    -------
    dict with keys: dataset (the parsed ``Dataset``) and payload
    """
    if mode not in MODES:
        raise ValueError("mode must be 'full' or 'schema_only'")
    dataset = await load_file(file_path, config)
    return {"dataset": dataset, "payload": analyze_dataset(dataset, mode=mode, config=config)}


def analyze_file_sync(
    file_path: PathLike, *, mode: str = "full", config: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    if mode not in MODES:
        raise ValueError("mode must be 'full' or 'schema_only'")
    dataset = load_file_sync(file_path, config)
    return {"dataset": dataset, "payload": analyze_dataset(dataset, mode=mode, config=config)}


__all__ = [
    "FileReadError",
    "PARSERS",
    "SUPPORTED_EXTENSIONS",
    "analyze_dataset",
    "analyze_file",
    "analyze_file_sync",
    "dispatch",
    "load_file",
    "load_file_sync",
    "read_file",
    "validate_upload",
]
