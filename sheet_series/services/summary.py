from __future__ import annotations

from ..models.report import SheetReport, WorkbookReport

"""Report rendering for the CLI and other text consumers.

render_summary_line() produces the single SUMMARY line; render_report_table()
produces a fixed-width table with one row per sheet.
"""

__all__ = [
    "TABLE_COLUMNS",
    "render_report_table",
    "render_summary_line",
]

TABLE_COLUMNS = ("Sheet", "Rows", "Valid", "Value only", "Time only", "Neither", "Dup. time", "Notes")


def render_summary_line(report: WorkbookReport) -> str:
    """Render a SUMMARY line from a WorkbookReport.

    Format:
    SUMMARY sheets={n} passed={p} failed={f} rows={rows} valid={valid}
    duplicates={dup} verdict={pass|fail}

    Examples:
        >>> from sheet_series.models.report import SheetReport, WorkbookReport
        >>> r = WorkbookReport(sheets=(SheetReport("A", total_rows=3, valid_rows=3),), passed=True)
        >>> render_summary_line(r)
        'SUMMARY sheets=1 passed=1 failed=0 rows=3 valid=3 duplicates=0 verdict=pass'
    """
    passed = len(report.passing_sheets)
    return (
        f"SUMMARY sheets={len(report.sheets)} "
        f"passed={passed} "
        f"failed={len(report.sheets) - passed} "
        f"rows={report.total_rows} "
        f"valid={report.total_valid_points} "
        f"duplicates={report.total_time_duplicates} "
        f"verdict={'pass' if report.passed else 'fail'}"
    )


def _row_cells(sheet: SheetReport) -> tuple[str, ...]:
    return (
        sheet.sheet_name,
        str(sheet.total_rows),
        str(sheet.valid_rows),
        str(sheet.value_only),
        str(sheet.time_only),
        str(sheet.neither),
        str(sheet.time_duplicates),
        " · ".join(sheet.notes),
    )


def render_report_table(report: WorkbookReport, *, include_warnings: bool = True) -> str:
    """Render the per-sheet report as a plain-text table.

    Warnings, if any, are listed above the table unless include_warnings is
    False (callers that already logged them). Numeric columns are
    right-aligned; sheet name and notes are left-aligned.
    """
    rows = [TABLE_COLUMNS] + [_row_cells(s) for s in report.sheets]
    widths = [max(len(r[i]) for r in rows) for i in range(len(TABLE_COLUMNS))]

    def fmt(cells: tuple[str, ...]) -> str:
        parts = []
        for i, cell in enumerate(cells):
            if i in (0, len(cells) - 1):
                parts.append(cell.ljust(widths[i]))
            else:
                parts.append(cell.rjust(widths[i]))
        return " | ".join(parts).rstrip()

    lines = [f"WARNING: {w}" for w in report.warnings] if include_warnings else []
    lines.append(fmt(TABLE_COLUMNS))
    lines.append("-+-".join("-" * w for w in widths))
    lines.extend(fmt(r) for r in rows[1:])
    return "\n".join(lines)
