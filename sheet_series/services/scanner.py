from __future__ import annotations

from collections import Counter
from collections.abc import Iterator

from ..models.cells import RowClassification, RowOutcome
from ..models.report import SheetReport
from ..models.workbook import SheetGrid
from ..parsing import parse_number, parse_time_of_day

"""Sheet scanning service.

Walks the data rows of one sheet (header row skipped), pairs the value and time
cells, classifies each row and accumulates the SheetReport counters. Scanning
never raises for bad data; every problem ends up in the counters or notes.
"""

__all__ = [
    "DEFAULT_TIME_COLUMN",
    "DEFAULT_VALUE_COLUMN",
    "NOTE_DUPLICATES",
    "NOTE_EMPTY_SHEET",
    "NOTE_NO_VALID_ROWS",
    "iter_row_outcomes",
    "scan_sheet",
]

DEFAULT_VALUE_COLUMN = 1  # Column B
DEFAULT_TIME_COLUMN = 2  # Column C

NOTE_EMPTY_SHEET = "Sheet is empty or has no declared range."
NOTE_NO_VALID_ROWS = "No valid value/time pairs."
NOTE_DUPLICATES = "Found {count} duplicate time(s); original row order is kept."


def iter_row_outcomes(
    sheet: SheetGrid,
    *,
    value_column: int = DEFAULT_VALUE_COLUMN,
    time_column: int = DEFAULT_TIME_COLUMN,
) -> Iterator[RowOutcome]:
    """Yield the parsed/classified outcome of every data row in declared order.

    Args:
        sheet: Decoded sheet
        value_column: 0-based column holding the numeric value
        time_column: 0-based column holding the time of day

    Yields:
        RowOutcome per row after the header row; nothing for a sheet without cells
    """
    bounds = sheet.declared_range
    if bounds is None:
        return
    for row in range(bounds.first_row + 1, bounds.last_row + 1):
        raw_value = sheet.cell(row, value_column)
        raw_time = sheet.cell(row, time_column)
        number = parse_number(raw_value)
        time = parse_time_of_day(raw_time)
        present = raw_value is not None or raw_time is not None
        yield RowOutcome(
            row_index=row,
            raw_value=raw_value,
            raw_time=raw_time,
            number=number,
            time=time,
            classification=RowClassification.classify(number, time, present),
        )


def scan_sheet(
    sheet: SheetGrid,
    *,
    value_column: int = DEFAULT_VALUE_COLUMN,
    time_column: int = DEFAULT_TIME_COLUMN,
) -> SheetReport:
    """Scan one sheet and build its validation report."""
    if sheet.declared_range is None:
        return SheetReport(sheet_name=sheet.name, has_range=False, notes=(NOTE_EMPTY_SHEET,))

    counts: Counter[RowClassification] = Counter()
    seen_keys: Counter[int] = Counter()
    duplicates = 0
    for outcome in iter_row_outcomes(sheet, value_column=value_column, time_column=time_column):
        counts[outcome.classification] += 1
        if outcome.valid and outcome.time is not None:
            seen_keys[outcome.time.key] += 1
            if seen_keys[outcome.time.key] > 1:
                duplicates += 1

    notes: list[str] = []
    valid = counts[RowClassification.VALID]
    if valid == 0:
        notes.append(NOTE_NO_VALID_ROWS)
    if duplicates > 0:
        notes.append(NOTE_DUPLICATES.format(count=duplicates))

    return SheetReport(
        sheet_name=sheet.name,
        has_range=True,
        total_rows=sum(n for c, n in counts.items() if c is not RowClassification.ABSENT),
        valid_rows=valid,
        value_only=counts[RowClassification.VALUE_ONLY],
        time_only=counts[RowClassification.TIME_ONLY],
        neither=counts[RowClassification.NEITHER],
        time_duplicates=duplicates,
        notes=tuple(notes),
    )
