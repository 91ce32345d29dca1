"""Pipeline services: scanning, extraction, validation and coordination."""

from .coordinator import CandidateRejectedError, NoActiveDatasetError, PipelineCoordinator
from .extractor import extract_series
from .scanner import iter_row_outcomes, scan_sheet
from .validator import EmptyWorkbookError, validate_workbook

__all__ = [
    "CandidateRejectedError",
    "EmptyWorkbookError",
    "NoActiveDatasetError",
    "PipelineCoordinator",
    "extract_series",
    "iter_row_outcomes",
    "scan_sheet",
    "validate_workbook",
]
