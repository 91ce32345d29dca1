from __future__ import annotations

import logging

from ..errors import PipelineError
from ..models.config_models import PipelineConfig
from ..models.report import SheetReport, WorkbookReport
from ..models.workbook import WorkbookData
from .progress import ProgressTracker
from .scanner import scan_sheet

logger = logging.getLogger(__name__)

"""Workbook validation service.

Runs the scanner over every sheet in workbook order and decides the verdict:
the workbook passes when at least one sheet has a valid row. Sheets without
valid rows do not fail the workbook; they only carry their own notes.

Two advisory warnings are computed independently and never block the pipeline:
- sheet count above limits.max_sheets_warn
- total valid points above limits.max_points_warn
"""

__all__ = [
    "EmptyWorkbookError",
    "validate_workbook",
]


class EmptyWorkbookError(PipelineError):
    """Raised when the workbook declares no sheets at all."""


def validate_workbook(
    workbook: WorkbookData,
    config: PipelineConfig | None = None,
    progress: ProgressTracker | None = None,
) -> WorkbookReport:
    """Validate every sheet of a decoded workbook.

    Args:
        workbook: Decoded workbook
        config: Column indices and warning thresholds (defaults when None)
        progress: Optional progress display, advanced once per sheet

    Returns:
        WorkbookReport with one SheetReport per sheet, warnings and verdict

    Raises:
        EmptyWorkbookError: If the workbook has zero sheets
    """
    if len(workbook) == 0:
        raise EmptyWorkbookError("workbook contains no sheets")
    cfg = config or PipelineConfig()

    sheets: list[SheetReport] = []
    for sheet in workbook.sheets:
        if progress is not None:
            progress.start_sheet(sheet.name)
        report = scan_sheet(sheet, value_column=cfg.columns.value, time_column=cfg.columns.time)
        sheets.append(report)
        logger.debug(
            "sheet=%s rows=%d valid=%d value_only=%d time_only=%d neither=%d duplicates=%d",
            report.sheet_name,
            report.total_rows,
            report.valid_rows,
            report.value_only,
            report.time_only,
            report.neither,
            report.time_duplicates,
        )
        if progress is not None:
            progress.finish_sheet(valid_rows=report.valid_rows)

    warnings: list[str] = []
    if len(sheets) > cfg.limits.max_sheets_warn:
        warnings.append(f"Workbook has {len(sheets)} sheets (may be slow).")
    total_valid = sum(s.valid_rows for s in sheets)
    if total_valid > cfg.limits.max_points_warn:
        warnings.append(f"Detected {total_valid} valid points in total (may affect performance).")
    for w in warnings:
        logger.warning(w)

    return WorkbookReport(
        sheets=tuple(sheets),
        warnings=tuple(warnings),
        passed=any(s.passed for s in sheets),
    )
