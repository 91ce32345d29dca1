from __future__ import annotations

import datetime as dt
import math
import numbers
import re
from typing import Any

from openpyxl.utils.datetime import from_excel

from ..models.cells import TimeOfDay

"""Time-of-day cell normalization.

Accepted inputs:
- Decoded date/time objects (datetime, pandas Timestamp, time, timedelta)
- Spreadsheet date-time serial numbers (fraction of a day = time of day)
- Text containing H:MM or H:MM:SS anywhere, optionally with AM/PM
- Text that is exactly H.MM ("7.45" -> 07:45)

Anything else is "not a time" (None). There is no default or fallback time.
"""

__all__ = [
    "MAX_EXCEL_SERIAL",
    "parse_time_of_day",
]

# 9999-12-31 in the 1900 date system
MAX_EXCEL_SERIAL = 2958465

# First H:MM[:SS] anywhere in the text
_CLOCK = re.compile(r"(\d{1,2}):(\d{2})(?::\d{2})?", re.ASCII)
_MERIDIEM = re.compile(r"\b([AP]\.?M\.?|AM|PM)\b", re.ASCII | re.IGNORECASE)
# Whole-string match only, so plain decimals such as "12.345" are not times
_DOTTED = re.compile(r"(\d{1,2})\.(\d{2})", re.ASCII)


def parse_time_of_day(raw: Any) -> TimeOfDay | None:
    """Normalize one raw cell into a canonical TimeOfDay.

    Args:
        raw: Decoded cell value

    Returns:
        TimeOfDay, or None when the cell is absent or not recognizable as a time
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (dt.datetime, dt.time)):
        return _build(raw.hour, raw.minute)
    if isinstance(raw, dt.timedelta):
        return _from_serial(raw.total_seconds() / 86400)
    if isinstance(raw, numbers.Real):
        decoded = _from_serial(float(raw))
        if decoded is not None:
            return decoded
        raw = str(raw)
    if isinstance(raw, str):
        return _parse_text(raw)
    return None


def _from_serial(value: float) -> TimeOfDay | None:
    """Decode a spreadsheet serial; None when it cannot be decoded."""
    if not math.isfinite(value) or value < 0 or value > MAX_EXCEL_SERIAL:
        return None
    try:
        decoded = from_excel(value)
    except (OverflowError, ValueError):
        return None
    if decoded is None:
        return None
    return _build(decoded.hour, decoded.minute)


def _parse_text(text: str) -> TimeOfDay | None:
    t = text.strip()
    match = _CLOCK.search(t)
    if match:
        hour, minute = int(match.group(1)), int(match.group(2))
        meridiem = _MERIDIEM.search(t)
        if meridiem:
            is_am = meridiem.group(1)[0] in "aA"
            if is_am and hour == 12:
                hour = 0
            elif not is_am and hour < 12:
                hour += 12
        return _build(hour, minute)
    dotted = _DOTTED.fullmatch(t)
    if dotted:
        return _build(int(dotted.group(1)), int(dotted.group(2)))
    return None


def _build(hour: int, minute: int) -> TimeOfDay | None:
    if not 0 <= hour <= 23 or not 0 <= minute <= 59:
        return None
    return TimeOfDay.from_components(hour, minute)
