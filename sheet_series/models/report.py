from __future__ import annotations

from dataclasses import dataclass

"""Validation report models.

SheetReport is produced once per sheet by the scanner; WorkbookReport aggregates
them in workbook order together with the advisory warnings and the verdict.
Field names are part of the reporting contract and must stay stable.
"""

__all__ = [
    "SheetReport",
    "WorkbookReport",
]


@dataclass(frozen=True)
class SheetReport:
    """Per-sheet validation counters and notes."""
    sheet_name: str
    has_range: bool = True  # False when the sheet has no cells at all
    total_rows: int = 0  # Rows with a value or time cell present (header excluded)
    valid_rows: int = 0  # Both cells normalized
    value_only: int = 0  # Number parsed, time invalid/missing
    time_only: int = 0  # Time parsed, number invalid/missing
    neither: int = 0  # Present but neither cell normalized
    time_duplicates: int = 0  # Repeat occurrences of an already-seen time key
    notes: tuple[str, ...] = ()

    @property
    def passed(self) -> bool:
        return self.valid_rows > 0


@dataclass(frozen=True)
class WorkbookReport:
    """Aggregated validation result for a whole workbook.

    ``passed`` is True when at least one sheet has a valid row; warnings are
    advisory and never affect the verdict.
    """
    sheets: tuple[SheetReport, ...]
    warnings: tuple[str, ...] = ()
    passed: bool = False

    @property
    def passing_sheets(self) -> list[str]:
        return [s.sheet_name for s in self.sheets if s.passed]

    @property
    def failing_sheets(self) -> list[str]:
        return [s.sheet_name for s in self.sheets if not s.passed]

    @property
    def total_valid_points(self) -> int:
        return sum(s.valid_rows for s in self.sheets)

    @property
    def total_rows(self) -> int:
        return sum(s.total_rows for s in self.sheets)

    @property
    def total_time_duplicates(self) -> int:
        return sum(s.time_duplicates for s in self.sheets)

    def sheet(self, name: str) -> SheetReport | None:
        for s in self.sheets:
            if s.sheet_name == name:
                return s
        return None
