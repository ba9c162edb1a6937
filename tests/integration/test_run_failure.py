from __future__ import annotations

import json
from pathlib import Path

from sales_insight.cli import main as cli_main
from sales_insight.logging.error_log import ErrorLogBuffer
from sales_insight.models import UploadStatus
from sales_insight.services.upload import UploadSession
from sales_insight.store import DatasetStore

"""Rejected uploads: nothing reaches the store, the error log gets one record."""

HEADER = ["Product Name", "Sales", "Profit", "TE", "Credit", "Amazon Fee", "Profit Percentage"]


def test_bad_value_in_later_row_rejects_whole_file(temp_workdir: Path, make_csv):
    rows = [[f"P{i}", "1", "1", "1", "1", "1", "1"] for i in range(5)]
    rows.append(["P5", "1", "1", "one", "1", "1", "1"])
    f = make_csv(temp_workdir / "late.csv", HEADER, rows)
    store = DatasetStore()
    result = UploadSession(store).ingest(f)
    assert result.status is UploadStatus.ERROR
    assert result.error == "Invalid numeric value in row 6, column 'TE': one"
    assert store.is_loaded() is False


def test_failure_then_success_with_reset(temp_workdir: Path, make_csv, sales_csv: Path):
    store = DatasetStore()
    log_dir = temp_workdir / "logs"
    session = UploadSession(store, error_log=ErrorLogBuffer(log_dir))

    bad = make_csv(temp_workdir / "bad.csv", ["Product Name", "Sales"], [["x", "1"]])
    assert session.ingest(bad).status is UploadStatus.ERROR
    session.reset()
    assert session.ingest(sales_csv).status is UploadStatus.SUCCESS
    assert len(store.get_dataset()) == 3

    records = [json.loads(line) for p in log_dir.glob("*.log") for line in p.read_text(encoding="utf-8").splitlines()]
    assert [r["error_type"] for r in records] == ["MISSING_COLUMNS"]


def test_xlsx_header_only_via_cli(temp_workdir: Path, make_xlsx, capsys):
    f = make_xlsx(temp_workdir / "data" / "header.xlsx", HEADER, [])
    code = cli_main([str(f)])
    out = capsys.readouterr().out
    assert code == 2
    assert "Excel file must have at least a header row and one data row" in out
    rec = json.loads(next((temp_workdir / "logs").glob("*.log")).read_text(encoding="utf-8").splitlines()[0])
    assert rec["error_type"] == "INSUFFICIENT_DATA"
    assert rec["row"] == -1
    assert rec["column"] is None
