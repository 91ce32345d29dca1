from __future__ import annotations

import math
import numbers
import re
from typing import Any

"""Numeric cell normalization.

Turns a decoded cell value into a finite float or None. Text may use either
decimal convention ("1.234,56" / "1,234.56"), a trailing percent sign, or
accounting parentheses for negatives: "(12,5%)" -> -0.125.
"""

__all__ = [
    "parse_number",
]

_WHITESPACE = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^0-9eE.,\-+]")


def parse_number(raw: Any) -> float | None:
    """Normalize one raw cell into a finite number.

    Args:
        raw: Decoded cell value (None, number, or text)

    Returns:
        Finite float, or None when the cell is absent or not a number
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, numbers.Real):
        value = float(raw)
        return value if math.isfinite(value) else None
    if isinstance(raw, str):
        return _parse_text(raw)
    return None


def _parse_text(text: str) -> float | None:
    s = _WHITESPACE.sub("", text.strip())
    percent = s.endswith("%")
    if percent:
        s = s[:-1]
    negative = len(s) >= 2 and s.startswith("(") and s.endswith(")")
    if negative:
        s = s[1:-1]
        # "(12,5%)": percent sign inside the parentheses
        if s.endswith("%"):
            percent = True
            s = s[:-1]
    s = _DISALLOWED.sub("", s)
    s = _normalize_separators(s)
    if not s:
        return None
    try:
        value = float(s)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    if negative:
        value = -abs(value)
    if percent:
        value /= 100
    return value


def _normalize_separators(s: str) -> str:
    comma = s.rfind(",")
    dot = s.rfind(".")
    if comma != -1 and dot != -1:
        if comma > dot:
            # 1.234,56 -> dots are thousands separators
            return s.replace(".", "").replace(",", ".", 1)
        return s.replace(",", "")
    if comma != -1:
        return s.replace(",", ".", 1)
    return s
