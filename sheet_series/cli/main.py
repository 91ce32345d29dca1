from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from sheet_series.config.loader import ConfigError, apply_env_overrides, default_config, load_config
from sheet_series.errors import PipelineError
from sheet_series.logging.init import log_summary, setup_logging
from sheet_series.logging.skip_log import SkipLogBuffer, collect_skipped_rows
from sheet_series.models.config_models import PipelineConfig
from sheet_series.services.coordinator import PipelineCoordinator
from sheet_series.services.progress import is_tty_enabled
from sheet_series.services.summary import render_report_table, render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, then config (explicit --config, else config/series.yml if present, else defaults)
- Submit the workbook: extension/size checks, decode, validate
- Print the per-sheet report table and the SUMMARY line
- With --process: extract series for every passing sheet (optionally write JSON)
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

DEFAULT_CONFIG_PATH = Path("config/series.yml")


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv (existing environment wins by default)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="sheet-series",
        description="Validate a workbook and extract time-of-day series (column B values, column C times)",
    )
    p.add_argument("workbook", type=Path, help="Path to the .xlsx/.xls workbook")
    p.add_argument("--config", type=Path, default=None, help="YAML config file")
    p.add_argument("--process", action="store_true", help="Extract series after a passing validation")
    p.add_argument("--output", type=Path, default=None, help="Write extracted series as JSON (implies --process)")
    p.add_argument("--skip-log", action="store_true", help="Write skipped rows to logs/skipped-*.log")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _resolve_config(path: Path | None) -> PipelineConfig:
    if path is not None:
        cfg = load_config(path)
    elif DEFAULT_CONFIG_PATH.exists():
        cfg = load_config(DEFAULT_CONFIG_PATH)
    else:
        cfg = default_config()
    return apply_env_overrides(cfg)


def _write_skip_log(coordinator: PipelineCoordinator, workbook_path: Path, logger: logging.Logger) -> None:
    # Reuses the workbook decoded by submit; the file is not read again
    cfg = coordinator.config
    workbook = coordinator.last_candidate
    if workbook is None:
        return
    buffer = SkipLogBuffer()
    count = collect_skipped_rows(
        buffer,
        workbook_path.name,
        workbook,
        value_column=cfg.columns.value,
        time_column=cfg.columns.time,
    )
    written = buffer.flush()
    if written is not None:
        logger.info(f"skip-log: {count} row(s) written to {written}")
    else:
        logger.info("skip-log: no skipped rows")


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only: an explicit [] must not fall back to sys.argv (pytest args)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        for h in logger.handlers:
            h.setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
        logger.debug("debug mode enabled")

    try:
        cfg = _resolve_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    coordinator = PipelineCoordinator(config=cfg, show_progress=is_tty_enabled())
    logger.info(f"Validating: {args.workbook}")
    try:
        report = coordinator.submit_file(args.workbook)
    except PipelineError as e:
        logger.error(f"validation: {e}")
        return EXIT_FATAL

    # advisory warnings were already logged by the validator
    print(render_report_table(report, include_warnings=False))

    if args.skip_log:
        _write_skip_log(coordinator, args.workbook, logger)

    log_summary(render_summary_line(report)[len("SUMMARY "):])

    if not report.passed:
        logger.error("no sheet has valid value/time pairs; check numeric values in B and times in C")
        return EXIT_FATAL

    if args.process or args.output is not None:
        result = coordinator.process()
        for chart in result.series:
            logger.info(f"series sheet={chart.sheet_name} points={len(chart.labels)}")
        if args.output is not None:
            payload = {
                "file": args.workbook.name,
                "series": [c.to_dict() for c in result.series],
                "warnings": list(result.warnings),
            }
            args.output.parent.mkdir(parents=True, exist_ok=True)
            args.output.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
            logger.info(f"series written to {args.output}")

    if report.failing_sheets:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
