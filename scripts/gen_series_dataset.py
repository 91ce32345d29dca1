#!/usr/bin/env python3
"""Dataset generation script for manual and performance testing.

Generates workbooks in the layout sheet-series expects:
- Row 1: Header row (ignored by the scanner)
- Column A: Row label
- Column B: Value, written in a mix of numeric and text styles
- Column C: Time of day, written as text, AM/PM text, dotted text or serial

A configurable share of rows is deliberately broken so the per-sheet report
shows value-only / time-only / neither counts.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd


def _format_value(rng: np.random.Generator, value: float) -> Any:
    style = rng.integers(0, 5)
    if style == 0:
        return round(value, 2)
    if style == 1:
        # European decimal comma with thousands dot
        whole, frac = divmod(abs(round(value, 2)), 1)
        text = f"{int(whole):,}".replace(",", ".") + f",{int(round(frac * 100)):02d}"
        return f"-{text}" if value < 0 else text
    if style == 2:
        return f"{value:,.2f}"
    if style == 3:
        return f"({abs(value):.1f})" if value < 0 else f"{value:.1f}%"
    return f"{value:.3f}"


def _format_time(rng: np.random.Generator, minutes: int) -> Any:
    hour, minute = divmod(int(minutes), 60)
    style = rng.integers(0, 4)
    if style == 0:
        return f"{hour:02d}:{minute:02d}"
    if style == 1:
        return f"{hour % 12 or 12}:{minute:02d} {'PM' if hour >= 12 else 'AM'}"
    if style == 2:
        return f"{hour}.{minute:02d}"
    return minutes / 1440


def generate_sheet_rows(rows: int, broken_ratio: float = 0.05, seed: int = 42) -> list[list[Any]]:
    """Generate raw sheet rows (header included).

    Args:
        rows: Number of data rows
        broken_ratio: Share of rows whose value and/or time is unparseable
        seed: Random seed for reproducible data

    Returns:
        List of [label, value, time] rows
    """
    rng = np.random.default_rng(seed)
    values = rng.normal(loc=50.0, scale=40.0, size=rows)
    minutes = rng.integers(0, 24 * 60, size=rows)
    broken = rng.random(rows) < broken_ratio
    which = rng.integers(0, 3, size=rows)  # 0: value, 1: time, 2: both

    sheet: list[list[Any]] = [["#", "Value", "Time"]]
    for i in range(rows):
        value = _format_value(rng, float(values[i]))
        when = _format_time(rng, int(minutes[i]))
        if broken[i]:
            if which[i] in (0, 2):
                value = "n/a"
            if which[i] in (1, 2):
                when = "later"
        sheet.append([i + 1, value, when])
    return sheet


def create_excel_file(
    output_path: Path,
    rows: int,
    sheets: list[str] | None = None,
    broken_ratio: float = 0.05,
    seed: int = 42,
) -> None:
    """Create an .xlsx file with one generated sheet per name."""
    if sheets is None:
        sheets = ["Sheet1"]

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with pd.ExcelWriter(output_path, engine='openpyxl') as writer:
        for offset, sheet_name in enumerate(sheets):
            data = generate_sheet_rows(rows, broken_ratio, seed + offset)
            pd.DataFrame(data).to_excel(writer, sheet_name=sheet_name, header=False, index=False)

    print(f"Created Excel file: {output_path}")
    print(f"  Sheets: {len(sheets)} ({', '.join(sheets)})")
    print(f"  Rows per sheet: {rows} (+ 1 header row)")
    print(f"  Broken row ratio: {broken_ratio:.0%}")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate value/time workbooks for sheet-series",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 10k rows on one sheet
  %(prog)s data/readings.xlsx --rows 10000

  # several sheets with more broken rows
  %(prog)s data/multi.xlsx --rows 2000 --sheets Morning Evening Night --broken 0.2
        """
    )
    parser.add_argument("output", type=Path, help="Output Excel file path")
    parser.add_argument("--rows", type=int, default=10_000, help="Data rows per sheet (default: 10,000)")
    parser.add_argument("--sheets", nargs="+", default=["Sheet1"], help="Sheet names (default: Sheet1)")
    parser.add_argument("--broken", type=float, default=0.05, help="Share of broken rows, 0..1 (default: 0.05)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--dry-run", action="store_true", help="Show the plan without creating files")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    if not 0 <= args.broken <= 1:
        print("Error: --broken must be between 0 and 1", file=sys.stderr)
        return 1

    print("Dataset generation plan:")
    print(f"  Output file: {args.output}")
    print(f"  Sheets: {len(args.sheets)} ({', '.join(args.sheets)})")
    print(f"  Rows per sheet: {args.rows:,}")
    print(f"  Random seed: {args.seed}")

    if args.dry_run:
        print("\n[DRY RUN] Would generate files but not creating them.")
        return 0

    try:
        create_excel_file(args.output, args.rows, args.sheets, args.broken, args.seed)
    except OSError as e:
        print(f"\nError generating dataset: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
