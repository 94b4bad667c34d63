"""Format parsers turning raw file payloads into a ``Dataset``.

Every parser returns a ``Dataset`` and never raises for bad input:
  - structural problems (wrong JSON shape, empty sheet, unreadable payload)
    produce an empty dataset carrying the error message
  - row-level problems in delimited text are recorded in ``errors`` while
    the remaining rows are still returned
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple, Union
import io
import json
import logging
import warnings

import pandas as pd

from .cleaning_utils import (
    clean_header,
    dedupe_headers,
    drop_fully_blank_rows,
    normalize_cell,
)
from .config import resolve_config
from .dataset import Dataset, Row

logger = logging.getLogger(__name__)

Contents = Union[bytes, str]

# Only the first worksheet is read; later sheets are ignored.
FIRST_SHEET = 0
# Top-level JSON object key holding the rows when the payload is wrapped.
JSON_DATA_KEY = "data"


def _decode(contents: Contents, encoding: str) -> str:
    if isinstance(contents, bytes):
        return contents.decode(encoding)
    return contents


def _structural(kind: str, message: str) -> Dataset:
    logger.warning(f"{kind} parse failed: {message}")
    return Dataset.failed(message)


# ---------------------------------------------------------------------------
# Delimited text
# ---------------------------------------------------------------------------


def _read_csv(text: str, delimiter: str, **kwargs: Any) -> pd.DataFrame:
    # Everything stays text; only fields absent from a short line become NaN
    return pd.read_csv(
        io.StringIO(text),
        sep=delimiter,
        header=None,
        dtype=str,
        keep_default_na=False,
        na_values=[],
        skip_blank_lines=True,
        quotechar='"',
        doublequote=True,
        engine="python",
        **kwargs,
    )


def _unclosed_quote(text: str, delimiter: str, quotechar: str = '"') -> Optional[Tuple[int, int]]:
    """Line span of the first record whose quoted field is never closed.

    Returns (first line of the record, line where the quote opens), both
    0-based, or None. A quote only opens a field at its start and a doubled
    quote inside a quoted field is literal, as in the csv tokenizer.
    """
    pos = record_pos = 0
    while True:
        opening = text.find(quotechar, pos)
        if opening < 0:
            return None
        newline = text.rfind("\n", pos, opening)
        if newline >= 0:
            record_pos = newline + 1
        if opening and text[opening - 1] not in (delimiter, "\n", "\r"):
            pos = opening + 1
            continue
        closing = text.find(quotechar, opening + 1)
        while closing >= 0 and text.startswith(quotechar, closing + 1):
            closing = text.find(quotechar, closing + 2)
        if closing < 0:
            return text.count("\n", 0, record_pos), text.count("\n", 0, opening)
        pos = closing + 1


def _drop_unclosed_records(text: str, delimiter: str) -> Tuple[str, List[int]]:
    """Remove records whose quoted field would swallow the rest of the input.

    Returns the remaining text and the 1-based line number each dropped
    record started on. A header with an unclosed quote raises ParserError.
    """
    span = _unclosed_quote(text, delimiter)
    if span is None:
        return text, []
    lines = list(enumerate(text.split("\n"), start=1))
    dropped: List[int] = []
    while span is not None:
        first, last = span
        if not any(line.strip() for _, line in lines[:first]):
            raise pd.errors.ParserError(
                f"quoted field in the header on line {lines[first][0]} is never closed"
            )
        dropped.append(lines[first][0])
        del lines[first:last + 1]
        text = "\n".join(line for _, line in lines)
        span = _unclosed_quote(text, delimiter)
    return text, dropped


def parse_csv(contents: Contents, config: Optional[Dict[str, Any]] = None) -> Dataset:
    """Parse delimited text whose first non-empty line is the header.

    Quoted fields may hold delimiters, newlines and doubled quotes. Short
    lines are padded with "" and long lines truncated to the header width;
    both are reported as row-level errors. A record whose quoted field is
    never closed is dropped and reported by line number, and parsing
    carries on with the following line.
    """
    cfg = resolve_config(config)
    delimiter = cfg["delimiter"]
    try:
        text = _decode(contents, cfg["encoding"])
    except UnicodeDecodeError as e:
        return _structural("CSV", f"Could not decode file as {cfg['encoding']}: {e}")

    if not text.strip():
        return Dataset()

    long_lines: List[int] = []

    def _note_long_line(bad_line: List[str]) -> None:
        long_lines.append(len(bad_line))

    try:
        text, dropped = _drop_unclosed_records(text, delimiter)
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", category=pd.errors.ParserWarning)
            raw = _read_csv(text, delimiter, on_bad_lines=_note_long_line)
            if long_lines:
                # Re-read wide enough for every line so extra fields keep their row
                raw = _read_csv(text, delimiter, names=list(range(max(long_lines))))
    except pd.errors.EmptyDataError:
        return Dataset()
    except pd.errors.ParserError as e:
        return _structural("CSV", f"Malformed delimited text: {e}")

    errors = [
        f"Line {line}: quoted field is never closed; record dropped" for line in dropped
    ]

    # Missing trailing fields are the only NaN cells; empty fields stay ""
    header_values = raw.iloc[0].tolist()
    width = sum(1 for v in header_values if not pd.isna(v))
    headers = dedupe_headers([clean_header(v) for v in header_values[:width]])

    rows: List[Row] = []
    for number, values in enumerate(raw.iloc[1:].itertuples(index=False), start=1):
        values = list(values)
        parsed = sum(1 for v in values if not pd.isna(v))
        if parsed < width:
            errors.append(
                f"Row {number}: too few fields, expected {width} but parsed {parsed}"
            )
        elif parsed > width:
            errors.append(
                f"Row {number}: too many fields, expected {width} but parsed {parsed}; "
                "extra fields dropped"
            )
        rows.append(
            {h: ("" if pd.isna(v) else str(v)) for h, v in zip(headers, values)}
        )

    for message in errors:
        logger.debug(f"CSV row-level error: {message}")
    logger.info(f"Parsed CSV: {len(rows)} rows, {len(headers)} columns, {len(errors)} errors")
    return Dataset.build(rows, headers, errors)


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------


def _json_records(payload: Any) -> Optional[List[Any]]:
    """Pick the row list out of the accepted top-level shapes."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        wrapped = payload.get(JSON_DATA_KEY)
        if isinstance(wrapped, list):
            return wrapped
        return [payload]
    return None


def parse_json(contents: Contents, config: Optional[Dict[str, Any]] = None) -> Dataset:
    """Parse a JSON array of objects, a ``{"data": [...]}`` wrapper or one object.

    Columns are the keys of the first object; later objects may add or omit
    keys without being rejected.
    """
    cfg = resolve_config(config)
    try:
        payload = json.loads(_decode(contents, cfg["encoding"]))
    except UnicodeDecodeError as e:
        return _structural("JSON", f"Could not decode file as {cfg['encoding']}: {e}")
    except json.JSONDecodeError as e:
        return _structural("JSON", f"Invalid JSON: {e}")

    records = _json_records(payload)
    if records is None:
        return _structural(
            "JSON",
            f"Invalid JSON structure: expected an object or an array of objects, got {type(payload).__name__}",
        )

    bad = [i for i, record in enumerate(records) if not isinstance(record, dict)]
    if bad:
        return _structural(
            "JSON",
            f"Invalid JSON structure: element {bad[0]} is not an object "
            f"({len(bad)} non-object element(s) in total)",
        )

    columns = list(records[0].keys()) if records else []
    rows = [dict(record) for record in records]
    logger.info(f"Parsed JSON: {len(rows)} rows, {len(columns)} columns")
    return Dataset.build(rows, columns)


# ---------------------------------------------------------------------------
# Spreadsheet
# ---------------------------------------------------------------------------


def parse_spreadsheet(
    contents: Contents, config: Optional[Dict[str, Any]] = None
) -> Dataset:
    """Parse the first worksheet of an .xlsx/.xls workbook.

    The first non-blank row holds the headers. Columns with a blank header
    are dropped together with their cells, and fully blank rows are skipped.
    """
    resolve_config(config)  # validates keys only; workbooks take no options
    if isinstance(contents, str):
        return _structural("Spreadsheet", "Spreadsheet content must be binary, got text")

    try:
        df_raw = pd.read_excel(
            io.BytesIO(contents), sheet_name=FIRST_SHEET, header=None, dtype=object
        )
    except Exception as e:  # readers raise zipfile, xlrd, openpyxl and ValueError errors
        return _structural("Spreadsheet", f"Failed to read workbook: {e}")

    df_work = drop_fully_blank_rows(df_raw)
    if df_work.empty:
        return _structural("Spreadsheet", "The first sheet of the workbook is empty")

    header_cells = [clean_header(v) for v in df_work.iloc[0].tolist()]
    kept = [(idx, name) for idx, name in enumerate(header_cells) if name]
    if not kept:
        return _structural("Spreadsheet", "The header row of the first sheet has no named columns")
    names = dedupe_headers([name for _, name in kept])
    positions = [idx for idx, _ in kept]

    rows: List[Row] = []
    for values in df_work.iloc[1:].itertuples(index=False):
        rows.append({name: normalize_cell(values[idx]) for idx, name in zip(positions, names)})

    logger.info(f"Parsed spreadsheet: {len(rows)} rows, {len(names)} columns")
    return Dataset.build(rows, names)


__all__ = [
    "FIRST_SHEET",
    "JSON_DATA_KEY",
    "parse_csv",
    "parse_json",
    "parse_spreadsheet",
]
