from __future__ import annotations

from ..models.series import Series
from ..models.workbook import SheetGrid
from .scanner import DEFAULT_TIME_COLUMN, DEFAULT_VALUE_COLUMN, iter_row_outcomes

__all__ = [
    "extract_series",
]


def extract_series(
    sheet: SheetGrid,
    *,
    value_column: int = DEFAULT_VALUE_COLUMN,
    time_column: int = DEFAULT_TIME_COLUMN,
) -> Series:
    """Build the time-ordered series of a sheet.

    Only valid rows are kept. Rows are sorted by time key, and rows sharing a
    key stay in original row order (duplicates are kept, never merged).
    Returns an empty Series when no row is valid.
    """
    points = [
        (o.time.key, o.row_index, o.time.label, o.number)
        for o in iter_row_outcomes(sheet, value_column=value_column, time_column=time_column)
        if o.valid and o.time is not None and o.number is not None
    ]
    points.sort(key=lambda p: (p[0], p[1]))
    return Series(
        sheet_name=sheet.name,
        labels=tuple(p[2] for p in points),
        values=tuple(p[3] for p in points),
        keys=tuple(p[0] for p in points),
    )
