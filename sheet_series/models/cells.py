from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

"""Cell-level domain models: canonical time of day and row classification.

TimeOfDay is the normalized output of the time parser; RowOutcome carries one
row through scanning and extraction so both phases see identical parsing.
"""

__all__ = [
    "MINUTES_PER_DAY",
    "RowClassification",
    "RowOutcome",
    "TimeOfDay",
]

MINUTES_PER_DAY = 24 * 60


@dataclass(frozen=True)
class TimeOfDay:
    """Canonical intra-day time.

    Attributes:
        label: Zero-padded 24-hour ``HH:MM`` string (always 5 characters)
        key: Minutes since midnight, 0..1439; used for sorting and duplicate detection
    """
    label: str
    key: int

    @classmethod
    def from_components(cls, hour: int, minute: int) -> TimeOfDay:
        """Build a TimeOfDay from hour/minute, rejecting out-of-range parts.

        Raises:
            ValueError: If hour is not in 0..23 or minute not in 0..59
        """
        if not 0 <= hour <= 23 or not 0 <= minute <= 59:
            raise ValueError(f"time out of range: hour={hour} minute={minute}")
        return cls(label=f"{hour:02d}:{minute:02d}", key=hour * 60 + minute)

    @property
    def hour(self) -> int:
        return self.key // 60

    @property
    def minute(self) -> int:
        return self.key % 60


class RowClassification(Enum):
    """Outcome of pairing the value and time cells of one row.

    - VALID: both cells normalized
    - VALUE_ONLY: number parsed, time did not
    - TIME_ONLY: time parsed, number did not
    - NEITHER: at least one cell present but neither normalized
    - ABSENT: both cells empty
    """
    VALID = "valid"
    VALUE_ONLY = "value_only"
    TIME_ONLY = "time_only"
    NEITHER = "neither"
    ABSENT = "absent"

    @classmethod
    def classify(cls, number: float | None, time: TimeOfDay | None, present: bool) -> RowClassification:
        if number is not None and time is not None:
            return cls.VALID
        if number is not None:
            return cls.VALUE_ONLY
        if time is not None:
            return cls.TIME_ONLY
        return cls.NEITHER if present else cls.ABSENT


@dataclass(frozen=True)
class RowOutcome:
    """Parsed and classified view of one data row."""
    row_index: int  # 0-based row within the declared range (header is row 0)
    raw_value: Any
    raw_time: Any
    number: float | None
    time: TimeOfDay | None
    classification: RowClassification

    @property
    def present(self) -> bool:
        return self.classification is not RowClassification.ABSENT

    @property
    def valid(self) -> bool:
        return self.classification is RowClassification.VALID
