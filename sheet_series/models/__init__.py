"""Domain models for the sheet-series pipeline.

This package contains the data classes shared by parsing, scanning, validation
and the coordinator.
"""

from .cells import RowClassification, RowOutcome, TimeOfDay
from .config_models import ColumnConfig, LimitsConfig, PipelineConfig
from .dataset import ActiveDataset, DatasetState, PipelineStatus
from .report import SheetReport, WorkbookReport
from .series import ChartSeries, ProcessResult, Series
from .workbook import CellRange, SheetGrid, WorkbookData

__all__ = [
    # Configuration models
    "ColumnConfig",
    "LimitsConfig",
    "PipelineConfig",
    # Input structures
    "CellRange",
    "SheetGrid",
    "WorkbookData",
    # Cell / row models
    "RowClassification",
    "RowOutcome",
    "TimeOfDay",
    # Reports and output
    "SheetReport",
    "WorkbookReport",
    "Series",
    "ChartSeries",
    "ProcessResult",
    # Dataset state
    "ActiveDataset",
    "DatasetState",
    "PipelineStatus",
]
