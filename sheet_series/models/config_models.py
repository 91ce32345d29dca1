from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the sheet-series pipeline.

These are the typed domain view of the configuration; the YAML loading and
schema validation live in sheet_series/config/loader.py.
"""

__all__ = [
    "ColumnConfig",
    "LimitsConfig",
    "PipelineConfig",
]

DEFAULT_EXTENSIONS = (".xlsx", ".xls")


@dataclass(frozen=True)
class ColumnConfig:
    """0-based column indices of the value and time cells (B and C)."""
    value: int = 1
    time: int = 2


@dataclass(frozen=True)
class LimitsConfig:
    """Candidate size limit and advisory thresholds.

    Only max_file_size_mb rejects input; the other two produce warnings.
    """
    max_file_size_mb: float = 50
    max_sheets_warn: int = 50  # Warn when the workbook has more sheets than this
    max_points_warn: int = 10000  # Warn when total valid points exceed this


@dataclass(frozen=True)
class PipelineConfig:
    """Root configuration object for validation and extraction."""
    columns: ColumnConfig = field(default_factory=ColumnConfig)
    limits: LimitsConfig = field(default_factory=LimitsConfig)
    accepted_extensions: tuple[str, ...] = DEFAULT_EXTENSIONS  # Lower-cased, with leading dot
    na_strings: frozenset[str] = frozenset()  # Cell strings read as empty cells

    def accepts_extension(self, file_name: str) -> bool:
        lowered = file_name.lower()
        return any(lowered.endswith(ext) for ext in self.accepted_extensions)
