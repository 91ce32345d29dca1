from __future__ import annotations

"""Base exception for structural pipeline failures.

Malformed cell data is never raised; it is reported through the validation
counters. Only conditions that make a call meaningless derive from this class.
"""

__all__ = [
    "PipelineError",
]


class PipelineError(Exception):
    """Base exception for pipeline errors."""
    pass
