from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.cells import RowClassification
from ..models.skip_record import SkipRecord
from ..models.workbook import WorkbookData
from ..services.scanner import iter_row_outcomes

"""Skipped-row log buffering.

- JSON Lines, fixed key set (see SkipRecord)
- One file per run: logs/skipped-YYYYMMDD-HHMMSS.log (UTC), created on first flush
- Records are buffered in memory and appended on flush(); no thread safety needed
"""

__all__ = [
    "SkipLogBuffer",
    "collect_skipped_rows",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class SkipLogBuffer:
    """In-memory buffer for skip records. Flush writes JSON Lines."""

    def __init__(self, logs_dir: Path | None = None) -> None:
        self._records: list[SkipRecord] = []
        self._logs_dir = logs_dir or LOGS_DIR
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"skipped-{stamp}.log"
        return self._file_path

    def append(self, record: SkipRecord) -> None:
        self._records.append(record)

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path | None:
        """Append buffered records to the log file.

        Returns:
            Path written to, or None when there was nothing to write
        """
        if not self._records:
            return None
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp


def collect_skipped_rows(
    buffer: SkipLogBuffer,
    file_name: str,
    workbook: WorkbookData,
    *,
    value_column: int = 1,
    time_column: int = 2,
) -> int:
    """Append one record per present, non-valid row of every sheet.

    Returns:
        Number of records appended
    """
    added = 0
    for sheet in workbook.sheets:
        for outcome in iter_row_outcomes(sheet, value_column=value_column, time_column=time_column):
            if outcome.classification in (RowClassification.VALID, RowClassification.ABSENT):
                continue
            buffer.append(SkipRecord.from_outcome(file_name, sheet.name, outcome))
            added += 1
    return added
