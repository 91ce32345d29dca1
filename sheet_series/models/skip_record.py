from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from typing import Any

from .cells import RowOutcome

"""SkipRecord model for the skipped-row log.

One record per present row that did not normalize into a (time, value) pair.
Serialized as JSON Lines with a fixed key set.
"""

__all__ = [
    "SkipRecord",
]


def _jsonable(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


@dataclass(frozen=True)
class SkipRecord:
    """Structured record of a row excluded from the series.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Workbook display name
        sheet: Sheet name
        row: 1-based spreadsheet row number
        classification: value_only | time_only | neither
        value: Raw value cell (JSON-safe)
        time: Raw time cell (JSON-safe)
    """
    timestamp: str
    file: str
    sheet: str
    row: int
    classification: str
    value: Any
    time: Any

    @staticmethod
    def from_outcome(file: str, sheet: str, outcome: RowOutcome) -> SkipRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return SkipRecord(
            timestamp=ts,
            file=file,
            sheet=sheet,
            row=outcome.row_index + 1,
            classification=outcome.classification.value,
            value=_jsonable(outcome.raw_value),
            time=_jsonable(outcome.raw_time),
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
