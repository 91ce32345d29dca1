from __future__ import annotations

import io
from collections.abc import Iterable
from typing import Any

import pandas as pd

from ..errors import PipelineError
from ..models.workbook import SheetGrid, WorkbookData

"""Workbook decoding.

Reads workbook bytes with pandas (openpyxl engine for .xlsx, xlrd for .xls)
into the WorkbookData structure used by the scanner. Every sheet is read raw
(header=None) with leading blank rows kept, so grid rows match spreadsheet rows
and the first used row is the header. No pandas default NA strings are
applied: text such as "NA" or "null" reaches the parsers as text.
Only blank cells and the configured na_strings become None.
"""

__all__ = [
    "WorkbookReadError",
    "read_workbook",
]


class WorkbookReadError(PipelineError):
    """Raised when the bytes cannot be decoded as a workbook."""


def read_workbook(content: bytes, *, na_strings: Iterable[str] | None = None) -> WorkbookData:
    """Decode workbook bytes into ordered sheets.

    Parameters
    ----------
    content: Raw .xlsx/.xls bytes
    na_strings: Extra cell strings read as empty cells (exact match)

    Raises
    ------
    WorkbookReadError: damaged, protected or unsupported content
    """
    na_values = sorted(set(na_strings)) if na_strings else None
    try:
        xls = pd.ExcelFile(io.BytesIO(content))
        sheets: list[SheetGrid] = []
        for name in xls.sheet_names:
            df = xls.parse(name, header=None, keep_default_na=False, na_values=na_values)
            sheets.append(_to_grid(str(name), df))
    except Exception as e:
        raise WorkbookReadError(f"cannot read workbook: {e}") from e
    return WorkbookData(sheets=tuple(sheets))


def _to_grid(name: str, df: pd.DataFrame) -> SheetGrid:
    if df.empty:
        return SheetGrid(name=name)
    rows = [tuple(_normalize_cell(v) for v in raw) for raw in df.itertuples(index=False, name=None)]
    return SheetGrid(name=name, rows=tuple(rows))


def _normalize_cell(value: Any) -> Any:
    if isinstance(value, str):
        return value if value != "" else None
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        return value
    return value
