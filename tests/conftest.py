# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path

import pandas as pd
import pytest

from sheet_series.models.workbook import SheetGrid, WorkbookData


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """columns:
  value: 1
  time: 2
limits:
  max_file_size_mb: 5
  max_sheets_warn: 3
  max_points_warn: 100
accepted_extensions: [".xlsx", ".xls"]
na_strings: ["n/a"]
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "series.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


def make_grid(name: str, pairs: list[tuple[object, object]], *, header: bool = True) -> SheetGrid:
    """Build a sheet with column A = row label, B = value, C = time."""
    rows: list[list[object]] = []
    if header:
        rows.append(["#", "Value", "Time"])
    for i, (value, time) in enumerate(pairs, start=1):
        rows.append([i, value, time])
    return SheetGrid.from_rows(name, rows)


@pytest.fixture()
def grid_factory() -> Callable[..., SheetGrid]:
    return make_grid


@pytest.fixture()
def workbook_factory() -> Callable[..., WorkbookData]:
    def _make(sheets: dict[str, list[tuple[object, object]]]) -> WorkbookData:
        return WorkbookData(sheets=tuple(make_grid(n, p) for n, p in sheets.items()))

    return _make


def write_excel(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
    """Write a real .xlsx file; each sheet is a list of raw rows (row 0 = header)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for sheet, rows in sheets.items():
            df = pd.DataFrame(rows)
            df.to_excel(writer, sheet_name=sheet, header=False, index=False)
    return path


@pytest.fixture()
def excel_factory(temp_workdir: Path) -> Callable[..., Path]:
    def _make(name: str, sheets: dict[str, list[list[object]]]) -> Path:
        return write_excel(temp_workdir / "data" / name, sheets)

    return _make


@pytest.fixture()
def sample_workbook(excel_factory) -> Path:
    """Two good sheets and one sheet without any valid pair."""
    return excel_factory(
        "readings.xlsx",
        {
            "Morning": [
                ["#", "Value", "Time"],
                [1, 10, "09:00"],
                [2, "20", "09:00"],
                [3, "30,5", "08:30"],
            ],
            "Evening": [
                ["#", "Value", "Time"],
                [1, "(12,5%)", "7:15 PM"],
                [2, "1.234,56", "19.45"],
            ],
            "Broken": [
                ["#", "Value", "Time"],
                [1, "abc", "later"],
                [2, None, "25:00"],
            ],
        },
    )
