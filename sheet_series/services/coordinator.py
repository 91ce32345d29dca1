from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from ..errors import PipelineError
from ..excel.reader import read_workbook
from ..models.config_models import PipelineConfig
from ..models.dataset import ActiveDataset, DatasetState, PipelineStatus
from ..models.report import WorkbookReport
from ..models.series import ChartSeries, ProcessResult
from ..models.workbook import WorkbookData
from .extractor import extract_series
from .notifications import (
    TOPIC_VALIDATED,
    TOPIC_VALIDATION_FAILED,
    Notifier,
    ValidatedEvent,
    ValidationFailedEvent,
)
from .progress import ProgressTracker
from .validator import validate_workbook

logger = logging.getLogger(__name__)

"""Two-phase pipeline coordination.

submit() validates a candidate workbook and, when it passes, commits it as the
active dataset. process() extracts the series of every committed passing sheet.
reset() drops the committed dataset.

The committed dataset lives in an injected DatasetState; a failed submit never
touches it, so a previously committed dataset survives a bad candidate.
"""

__all__ = [
    "CandidateRejectedError",
    "NoActiveDatasetError",
    "PipelineCoordinator",
]

WorkbookDecoder = Callable[..., WorkbookData]


class NoActiveDatasetError(PipelineError):
    """Raised when processing is requested before any successful commit."""


class CandidateRejectedError(PipelineError):
    """Raised when a candidate file fails the extension or size checks."""


class PipelineCoordinator:
    """Owns the validate → commit → process lifecycle.

    Args:
        config: Pipeline configuration (defaults when None)
        state: Shared dataset holder (a fresh one when None)
        notifier: Notification hub for "validated"/"validation-failed"
        decoder: Bytes -> WorkbookData function (read_workbook by default)
        show_progress: Display a tqdm bar while validating (TTY only)
    """

    def __init__(
        self,
        config: PipelineConfig | None = None,
        state: DatasetState | None = None,
        notifier: Notifier | None = None,
        decoder: WorkbookDecoder | None = None,
        show_progress: bool = False,
    ) -> None:
        self.config = config or PipelineConfig()
        self.state = state if state is not None else DatasetState()
        self.notifier = notifier if notifier is not None else Notifier()
        self._decode = decoder or read_workbook
        self._show_progress = show_progress
        self.last_candidate: WorkbookData | None = None  # Decoded workbook of the latest submit

    @property
    def status(self) -> PipelineStatus:
        return self.state.status

    def submit_file(self, path: Path) -> WorkbookReport:
        """Check, read and submit a candidate file.

        Raises:
            CandidateRejectedError: Extension not accepted, file missing or too large
            WorkbookReadError: Content cannot be decoded
            EmptyWorkbookError: Workbook has no sheets
        """
        if not self.config.accepts_extension(path.name):
            allowed = ", ".join(self.config.accepted_extensions)
            raise CandidateRejectedError(f"file type not allowed: {path.name} (accepted: {allowed})")
        try:
            size = path.stat().st_size
        except OSError as e:
            raise CandidateRejectedError(f"cannot access file {path}: {e}") from e
        size_mb = size / (1024 * 1024)
        if size_mb > self.config.limits.max_file_size_mb:
            raise CandidateRejectedError(
                f"file exceeds maximum size ({size_mb:.1f} MB > {self.config.limits.max_file_size_mb} MB)"
            )
        try:
            content = path.read_bytes()
        except OSError as e:
            raise CandidateRejectedError(f"cannot read file {path}: {e}") from e
        return self.submit(content, path.name)

    def submit(self, content: bytes, name: str = "workbook") -> WorkbookReport:
        """Validate candidate bytes and commit them when the workbook passes.

        Args:
            content: Raw workbook bytes
            name: Display name carried by the dataset and notifications

        Returns:
            WorkbookReport of the candidate (passed or not); the decoded
            workbook stays available as ``last_candidate``
        """
        self.last_candidate = None
        workbook = self._decode(content, na_strings=self.config.na_strings)
        self.last_candidate = workbook
        if self._show_progress:
            with ProgressTracker(len(workbook)) as progress:
                report = validate_workbook(workbook, self.config, progress=progress)
        else:
            report = validate_workbook(workbook, self.config)

        if not report.passed:
            logger.error("validation failed file=%s sheets=%d: no sheet has valid rows", name, len(report.sheets))
            self.notifier.publish(TOPIC_VALIDATION_FAILED, ValidationFailedEvent(file_name=name, report=report))
            return report

        dataset = ActiveDataset(
            content=content,
            name=name,
            passing_sheets=tuple(report.passing_sheets),
            report=report,
            committed_at=datetime.now(UTC),
        )
        self.state.commit(dataset)
        logger.info(
            "validated file=%s passing_sheets=%d/%d valid_points=%d",
            name,
            len(dataset.passing_sheets),
            len(report.sheets),
            report.total_valid_points,
        )
        self.notifier.publish(TOPIC_VALIDATED, ValidatedEvent(file_name=name, sheet_names=dataset.passing_sheets))
        return report

    def process(self) -> ProcessResult:
        """Extract the series of every committed passing sheet.

        Sheets are not re-validated. A sheet whose series turns out empty, or
        that is missing from the decoded workbook, is skipped with a warning.

        Raises:
            NoActiveDatasetError: If nothing is committed
        """
        dataset = self.state.active
        if dataset is None:
            raise NoActiveDatasetError("no validated workbook; submit a valid file first")

        workbook = self._decode(dataset.content, na_strings=self.config.na_strings)
        series: list[ChartSeries] = []
        warnings: list[str] = []
        for sheet_name in dataset.passing_sheets:
            sheet = workbook.get(sheet_name)
            if sheet is None:
                warnings.append(f"Sheet '{sheet_name}' not found in committed workbook; skipped.")
                continue
            extracted = extract_series(
                sheet,
                value_column=self.config.columns.value,
                time_column=self.config.columns.time,
            )
            if extracted.empty:
                warnings.append(f"Sheet '{sheet_name}' produced no points; skipped.")
                continue
            series.append(ChartSeries.from_series(extracted))
        for w in warnings:
            logger.warning(w)
        logger.info("processed file=%s charts=%d skipped=%d", dataset.name, len(series), len(warnings))
        return ProcessResult(series=tuple(series), warnings=tuple(warnings))

    def reset(self) -> None:
        """Discard any committed dataset."""
        if self.state.active is not None:
            logger.info("reset: discarded committed file=%s", self.state.active.name)
        self.state.clear()
