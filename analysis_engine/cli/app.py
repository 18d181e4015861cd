from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..logging.init import log_summary, set_debug, setup_logging
from ..models.config_models import DEFAULT_POLICY, AnalysisPolicy
from ..models.session_state import PipelineStage
from ..services.orchestrator import AnalysisSession, InvalidSelectionError
from ..services.summary import (
    render_preview_lines,
    render_schema_lines,
    render_stats_lines,
    render_summary_body,
)

"""CLI entrypoint.

One invocation = one pipeline pass:
- Load policy config (--config / ANALYSIS_ENGINE_CONFIG / config/analysis.yml / defaults)
- Load workbook
- Select sheet + header row -> validation -> schema
- Optionally select a numeric column and compute stats
- Print a SUMMARY line
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_HEADER_INVALID = 2

CONFIG_ENV_VAR = "ANALYSIS_ENGINE_CONFIG"


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv (values override the process environment)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="analysis-engine",
        description="Validate a workbook header row, classify columns and compute basic stats",
    )
    p.add_argument("workbook", help="Path to an .xlsx / .xls file")
    p.add_argument("--sheet", help="Sheet name (default: first sheet)")
    p.add_argument("--header-row", type=int, default=1, help="1-based header row index (default: 1)")
    p.add_argument("--column", help="Numeric column to compute basic stats for")
    p.add_argument("--list-sheets", action="store_true", help="Print sheet names then exit")
    p.add_argument("--config", type=Path, help="Policy config YAML")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _resolve_policy(config_arg: Path | None) -> AnalysisPolicy:
    """Pick the policy source; an explicitly named config must exist."""
    if config_arg is not None:
        return load_config(config_arg)
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return load_config(Path(env_path))
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return DEFAULT_POLICY


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # [] が渡された場合に sys.argv (pytest の引数) を読まないよう None のときのみ参照
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    try:
        policy = _resolve_policy(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    session = AnalysisSession(policy)
    state = session.load(Path(args.workbook))
    if state.stage is PipelineStage.NO_FILE:
        logger.error(f"load: {state.error}")
        log_summary(render_summary_body(state))
        return EXIT_FATAL

    logger.info(f"File: {Path(args.workbook).name}")

    if args.list_sheets:
        for name in state.sheet_names:
            logger.info(f"sheet: {name}")
        return EXIT_SUCCESS

    sheet_name = args.sheet or state.sheet_names[0]
    try:
        session.change_header_row(args.header_row)
        state = session.select_sheet(sheet_name)
    except InvalidSelectionError as e:
        logger.error(f"selection: {e}")
        return EXIT_FATAL

    logger.info(f"Sheet: {sheet_name} (header row {state.header_row})")
    logger.info("Preview:")
    for line in render_preview_lines(state.preview):
        logger.info(f"  {line}")

    if state.stage is PipelineStage.SCHEMA_INVALID:
        logger.warning("Header Validation Warning")
        for issue in state.validation.issues:
            logger.warning(f"  {issue}")
        logger.warning("Please select the correct header row before proceeding with analysis.")
        log_summary(render_summary_body(state))
        return EXIT_HEADER_INVALID

    logger.info("Column Classification:")
    for line in render_schema_lines(state.schema):
        logger.info(f"  {line}")

    if args.column:
        if not state.numeric_columns:
            logger.warning("no numeric columns available for basic analysis")
        else:
            state = session.select_numeric_column(args.column)
            if state.selected_column is None:
                logger.warning(f"column {args.column!r} is not a numeric column; choose one of {state.numeric_columns}")
            else:
                state = session.run_stats()
                if state.stats is not None:
                    logger.info(f"Basic Analysis: {state.selected_column}")
                    for line in render_stats_lines(state.stats):
                        logger.info(f"  {line}")

    log_summary(render_summary_body(state))
    return EXIT_SUCCESS
