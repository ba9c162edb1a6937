from __future__ import annotations

import json

from sales_insight.models.error_record import ErrorRecord


def test_create_stamps_utc_timestamp():
    rec = ErrorRecord.create(file="a.csv", row=3, error_type="INVALID_NUMERIC_VALUE", message="m", column="Profit")
    assert rec.timestamp.endswith("Z")
    assert "T" in rec.timestamp
    assert rec.column == "Profit"


def test_to_json_line_has_fixed_keys():
    rec = ErrorRecord(
        timestamp="2025-01-01T00:00:00Z",
        file="a.csv",
        row=-1,
        column=None,
        error_type="UNSUPPORTED_FORMAT",
        message="Unsupported file format. Please upload CSV or Excel files.",
    )
    data = json.loads(rec.to_json_line())
    assert list(data) == ["timestamp", "file", "row", "column", "error_type", "message"]
    assert data["row"] == -1
    assert data["column"] is None


def test_to_json_line_keeps_non_ascii():
    rec = ErrorRecord.create(file="売上.csv", row=1, error_type="EMPTY_FILE", message="空")
    line = rec.to_json_line()
    assert "売上.csv" in line
    assert "\n" not in line
