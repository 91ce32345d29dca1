from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""Decoded workbook structures consumed by the scanning pipeline.

The excel reader produces these from raw bytes; tests build them directly from
nested lists. Grid rows and columns are 0-based spreadsheet positions (grid row 0
is spreadsheet row 1); the first used row of the declared range is the header.
"""

__all__ = [
    "CellRange",
    "SheetGrid",
    "WorkbookData",
]


@dataclass(frozen=True)
class CellRange:
    """Inclusive row/column bounds of the cells stored in a sheet."""
    first_row: int
    last_row: int
    first_col: int
    last_col: int


@dataclass(frozen=True)
class SheetGrid:
    """Random-access view over one decoded sheet.

    ``rows`` holds the decoded cell values; ragged rows are allowed and
    missing positions read as absent (``None``).
    """
    name: str
    rows: tuple[tuple[Any, ...], ...] = ()

    @classmethod
    def from_rows(cls, name: str, rows: list[list[Any]] | list[tuple[Any, ...]]) -> SheetGrid:
        return cls(name=name, rows=tuple(tuple(r) for r in rows))

    @property
    def declared_range(self) -> CellRange | None:
        """Bounds of the used cells, or None when the sheet has no cells.

        Rows are trimmed to the first and last row holding a non-absent cell,
        so row ``first_row`` is the header even when leading rows are blank.
        Columns always start at 0 so value/time indices stay absolute.
        """
        used = [i for i, r in enumerate(self.rows) if any(v is not None for v in r)]
        if not used:
            return None
        width = max(len(r) for r in self.rows)
        return CellRange(first_row=used[0], last_row=used[-1], first_col=0, last_col=width - 1)

    def cell(self, row: int, col: int) -> Any:
        if row < 0 or col < 0 or row >= len(self.rows):
            return None
        values = self.rows[row]
        if col >= len(values):
            return None
        return values[col]


@dataclass(frozen=True)
class WorkbookData:
    """Ordered collection of sheets as they appear in the workbook."""
    sheets: tuple[SheetGrid, ...] = field(default_factory=tuple)

    @property
    def sheet_names(self) -> list[str]:
        return [s.name for s in self.sheets]

    def get(self, name: str) -> SheetGrid | None:
        for sheet in self.sheets:
            if sheet.name == name:
                return sheet
        return None

    def __len__(self) -> int:
        return len(self.sheets)
