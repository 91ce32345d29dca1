from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "ChartSeries",
    "ProcessResult",
    "Series",
]


@dataclass(frozen=True)
class Series:
    """Sorted (label, value) pairs extracted from one sheet.

    ``labels``, ``values`` and ``keys`` are parallel and sorted ascending by
    time key, ties kept in original row order.
    """
    sheet_name: str
    labels: tuple[str, ...] = ()
    values: tuple[float, ...] = ()
    keys: tuple[int, ...] = ()

    def __len__(self) -> int:
        return len(self.labels)

    @property
    def empty(self) -> bool:
        return not self.labels


@dataclass(frozen=True)
class ChartSeries:
    """Renderer hand-off: chart title plus ordered labels and values."""
    sheet_name: str
    title: str
    labels: tuple[str, ...]
    values: tuple[float, ...]

    @classmethod
    def from_series(cls, series: Series) -> ChartSeries:
        return cls(
            sheet_name=series.sheet_name,
            title=series.sheet_name.upper(),
            labels=series.labels,
            values=series.values,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "sheet": self.sheet_name,
            "title": self.title,
            "labels": list(self.labels),
            "values": list(self.values),
        }


@dataclass(frozen=True)
class ProcessResult:
    """Output of a processing run over the committed dataset."""
    series: tuple[ChartSeries, ...] = ()
    warnings: tuple[str, ...] = ()  # Sheets skipped at extraction time
