# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pandas as pd
import pytest

from sales_insight.logging.init import reset_logging

SALES_HEADER = ["Product Name", "Sales", "Profit", "TE", "Credit", "Amazon Fee", "Profit Percentage"]

SAMPLE_ROWS = [
    ["Widget", "100", "20", "10", "5", "3", "20"],
    ["Gadget", "250", "60", "40", "0", "12", "24"],
    ["Doohickey", "80", "20", "15", "2", "4", "25"],
]


def write_csv(path: Path, header: list[str], rows: list[list[str]]) -> Path:
    lines = [",".join(header)] + [",".join(r) for r in rows]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def write_xlsx(path: Path, header: list[str], rows: list[list[object]], extra_sheet: bool = False) -> Path:
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame([header] + rows).to_excel(writer, sheet_name="Sales", header=False, index=False)
        if extra_sheet:
            pd.DataFrame([["ignored"], ["sheet"]]).to_excel(writer, sheet_name="Other", header=False, index=False)
    return path


@pytest.fixture(autouse=True)
def _fresh_logging():
    # 各テストで stdout ハンドラを capsys の差し替え後に作り直す
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("SALES_INSIGHT_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """required_columns:
  - Product Name
  - Sales
  - Profit
  - TE
  - Credit
  - Amazon Fee
  - Profit Percentage
numeric_columns: [Sales, Profit, TE, Credit, Amazon Fee, Profit Percentage]
identifier_column: Product Name
top_n:
  dashboard: 10
  profit: 8
  comparison: 5
log_dir: ./logs
error_log: true
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "insight.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def sales_csv(temp_workdir: Path) -> Path:
    return write_csv(temp_workdir / "data" / "sales.csv", SALES_HEADER, SAMPLE_ROWS)


@pytest.fixture()
def sales_xlsx(temp_workdir: Path) -> Path:
    rows = [[r[0], *[float(v) for v in r[1:]]] for r in SAMPLE_ROWS]
    return write_xlsx(temp_workdir / "data" / "sales.xlsx", SALES_HEADER, rows)


@pytest.fixture()
def make_csv():
    return write_csv


@pytest.fixture()
def make_xlsx():
    return write_xlsx
