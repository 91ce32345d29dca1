"""Cell normalization shared by validation and extraction."""

from .numeric import parse_number
from .time_of_day import parse_time_of_day

__all__ = [
    "parse_number",
    "parse_time_of_day",
]
