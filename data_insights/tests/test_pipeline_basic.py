import asyncio
from pathlib import Path

import pandas as pd
import pytest

from data_insights import (
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


def test_pipeline_full_mode(tmp_path: Path):
    # Create a small mixed CSV
    df = pd.DataFrame(
        {
            "Name": ["Alice", "Bob", "Charlie", "Dana"],
            "Age": [30, 25, 35, 40],
            "Team": ["red", "blue", "red", "green"],
        }
    )
    csv_path = tmp_path / "people.csv"
    df.to_csv(csv_path, index=False)

    result = analyze_file_sync(str(csv_path), mode="full")
    payload = result["payload"]

    assert payload["dataset"]["rows"] == 4
    assert payload["dataset"]["column_names"] == ["Name", "Age", "Team"]
    assert payload["errors"] == []
    assert payload["usable"] is True
    assert payload["classification"] == {"numeric": ["Age"], "categorical": ["Name", "Team"]}

    stats = payload["statistics"]
    assert [s["column"] for s in stats] == ["Age"]
    assert stats[0]["mean"] == 32.5
    assert stats[0]["median"] == 32.5
    assert stats[0]["range"] == 15.0

    assert payload["overview"]["numeric_columns"] == 1
    assert payload["overview"]["categorical_columns"] == 2
    assert payload["chart_defaults"] == {
        "kind": "bar",
        "x_axis": "Name",
        "y_axis": "Age",
        "title": None,
    }
    assert payload["axis_options"]["y"] == ["Age"]
    assert len(payload["sample_rows"]) == 4


def test_pipeline_schema_only(tmp_path: Path):
    df = pd.DataFrame({"A": [1, 2, 3], "B": ["x", "y", "z"]})
    csv_path = tmp_path / "simple.csv"
    df.to_csv(csv_path, index=False)

    result = analyze_file_sync(str(csv_path), mode="schema_only")
    payload = result["payload"]
    assert payload["mode"] == "schema_only"
    assert payload["classification"]["numeric"] == ["A"]
    # schema_only mode intentionally excludes statistics and sample rows
    assert "statistics" not in payload
    assert "sample_rows" not in payload


def test_sample_size_limits_preview(tmp_path: Path):
    df = pd.DataFrame({"v": range(25)})
    csv_path = tmp_path / "many.csv"
    df.to_csv(csv_path, index=False)

    payload = analyze_file_sync(csv_path, config={"sample_size": 3})["payload"]
    assert payload["dataset"]["rows"] == 25
    assert [r["v"] for r in payload["sample_rows"]] == ["0", "1", "2"]


def test_invalid_mode_rejected():
    with pytest.raises(ValueError):
        analyze_dataset(dispatch("a.csv", b"a\n1"), mode="everything")


def test_unknown_config_key_rejected():
    with pytest.raises(ValueError):
        dispatch("a.csv", b"a\n1", {"sheet": 2})


def test_dispatch_routes_by_extension_case_insensitively():
    ds = dispatch("REPORT.CSV", b"a,b\n1,2\n")
    assert list(ds.columns) == ["a", "b"]

    ds = dispatch("rows.Json", b'[{"x": 1}]')
    assert list(ds.columns) == ["x"]


def test_dispatch_rejects_unsupported_extension():
    ds = dispatch("notes.txt", b"a,b\n1,2\n")
    assert ds.is_empty
    assert list(ds.columns) == []
    assert len(ds.errors) == 1
    assert ".txt" in ds.errors[0]

    ds = dispatch("no_extension", b"a,b\n1,2\n")
    assert len(ds.errors) == 1


def test_dispatch_does_not_sniff_content():
    # CSV text under a .json name is a JSON error, not a CSV parse
    ds = dispatch("data.json", b"a,b\n1,2\n")
    assert ds.is_empty
    assert ds.errors and "Invalid JSON" in ds.errors[0]


def test_oversized_upload_is_rejected():
    assert validate_upload("big.csv", 11 * 1024 * 1024) is not None
    assert validate_upload("ok.csv", 1024) is None

    ds = dispatch("small.csv", b"a,b\n1,2\n", {"max_file_size_bytes": 4})
    assert ds.is_empty
    assert "File size" in ds.errors[0]


def test_async_load_file(tmp_path: Path):
    path = tmp_path / "values.json"
    path.write_text('{"data": [{"x": 1}, {"x": 2}]}', encoding="utf-8")

    ds = asyncio.run(load_file(path))
    assert list(ds.columns) == ["x"]
    assert len(ds.rows) == 2

    result = asyncio.run(analyze_file(path))
    assert result["payload"]["statistics"][0]["mean"] == 1.5


def test_two_loads_in_flight_do_not_interfere(tmp_path: Path):
    first = tmp_path / "first.csv"
    second = tmp_path / "second.csv"
    first.write_text("a\n1\n2\n", encoding="utf-8")
    second.write_text("b,c\nx,y\n", encoding="utf-8")

    async def _both():
        return await asyncio.gather(load_file(first), load_file(second))

    ds_first, ds_second = asyncio.run(_both())
    assert list(ds_first.columns) == ["a"]
    assert list(ds_second.columns) == ["b", "c"]


def test_missing_file_is_a_read_failure(tmp_path: Path):
    missing = tmp_path / "gone.csv"

    with pytest.raises(FileReadError):
        asyncio.run(read_file(missing))

    ds = asyncio.run(load_file(missing))
    assert ds.is_empty
    assert ds.errors[0].startswith("Failed to read file")

    ds = load_file_sync(missing)
    assert ds.errors[0].startswith("Failed to read file")
