"""Default settings for parsing, classification and display.

Configuration is passed around as a plain dict; callers override only the
keys they care about and ``resolve_config`` fills in the rest.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024

DEFAULT_CONFIG: Dict[str, Any] = {
    # Field separator for delimited text
    "delimiter": ",",
    # Text encoding for CSV/JSON payloads (utf-8-sig tolerates a BOM)
    "encoding": "utf-8-sig",
    # Uploads above this size are rejected before parsing
    "max_file_size_bytes": MAX_FILE_SIZE_BYTES,
    # 0.0 -> a single coercible value makes a column numeric
    "min_numeric_ratio": 0.0,
    # Decimal places used for displayed statistics
    "display_precision": 2,
    # Preview rows included in the full payload
    "sample_size": 10,
}


def resolve_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Merge user overrides onto ``DEFAULT_CONFIG``."""
    cfg = config or {}
    unknown = sorted(set(cfg) - set(DEFAULT_CONFIG))
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
    merged = dict(DEFAULT_CONFIG)
    merged.update(cfg)
    if not isinstance(merged["delimiter"], str) or len(merged["delimiter"]) != 1:
        raise ValueError("delimiter must be a single character")
    ratio = float(merged["min_numeric_ratio"])
    if not 0.0 <= ratio <= 1.0:
        raise ValueError("min_numeric_ratio must be between 0 and 1")
    merged["min_numeric_ratio"] = ratio
    return merged


__all__ = ["DEFAULT_CONFIG", "MAX_FILE_SIZE_BYTES", "resolve_config"]
