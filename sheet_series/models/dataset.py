from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .report import WorkbookReport

"""Committed dataset model and its state holder.

The coordinator receives a DatasetState by reference instead of keeping a
module-level global, so submit/process/reset can be exercised in isolation.

State transitions: EMPTY → COMMITTED (successful submit) → EMPTY (reset).
A later successful submit replaces the committed dataset wholesale.
"""

__all__ = [
    "ActiveDataset",
    "DatasetState",
    "PipelineStatus",
]


class PipelineStatus(Enum):
    """Lifecycle of the dataset held by the coordinator.

    - EMPTY: nothing committed yet, or reset was called
    - COMMITTED: a workbook passed validation and is held for processing
    """
    EMPTY = "empty"
    COMMITTED = "committed"


@dataclass(frozen=True)
class ActiveDataset:
    """Workbook bytes admitted by a passing validation."""
    content: bytes  # Raw workbook bytes as submitted
    name: str  # Display name (usually the file name)
    passing_sheets: tuple[str, ...]  # Sheets with at least one valid row, workbook order
    report: WorkbookReport  # Report that admitted this dataset
    committed_at: datetime | None = None  # UTC commit time


class DatasetState:
    """Holder for the currently committed dataset.

    ``commit`` and ``clear`` swap a single reference, so readers never observe
    a partially updated dataset.
    """

    def __init__(self) -> None:
        self._active: ActiveDataset | None = None

    @property
    def active(self) -> ActiveDataset | None:
        return self._active

    @property
    def status(self) -> PipelineStatus:
        return PipelineStatus.EMPTY if self._active is None else PipelineStatus.COMMITTED

    def commit(self, dataset: ActiveDataset) -> None:
        self._active = dataset

    def clear(self) -> None:
        self._active = None
