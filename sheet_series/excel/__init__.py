"""Workbook decoding backed by pandas."""

from .reader import WorkbookReadError, read_workbook

__all__ = [
    "WorkbookReadError",
    "read_workbook",
]
