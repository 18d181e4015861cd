from __future__ import annotations

import logging
from collections.abc import Collection
from dataclasses import replace
from pathlib import Path

from ..excel.reader import WorkbookLoadError, read_workbook
from ..models.config_models import DEFAULT_POLICY, AnalysisPolicy
from ..models.session_state import PipelineStage, SessionState
from .header_validator import validate_header
from .schema_inferencer import infer_schema
from .stats_engine import compute_stats

"""Pipeline orchestration for the analysis engine.

Sequences header validation -> schema inference -> statistics over one
immutable SessionState. Every transition returns a new SessionState; the
previous generation is never modified.

Transition legality:
    load_workbook          any stage
    select_sheet           sheets_loaded | schema_ready | schema_invalid
    change_header_row      sheets_loaded | schema_ready | schema_invalid
    select_numeric_column  schema_ready
    run_stats              schema_ready (with a selected column)
"""

__all__ = [
    "PipelineStateError",
    "InvalidSelectionError",
    "load_workbook",
    "select_sheet",
    "change_header_row",
    "select_numeric_column",
    "run_stats",
    "AnalysisSession",
]

logger = logging.getLogger(__name__)

_SELECTABLE_STAGES = frozenset(
    {PipelineStage.SHEETS_LOADED, PipelineStage.SCHEMA_READY, PipelineStage.SCHEMA_INVALID}
)


class PipelineStateError(Exception):
    """Raised when a transition is called from a stage where it is not legal."""


class InvalidSelectionError(PipelineStateError):
    """Raised for an unknown sheet name or a header row index below 1."""


def _require_stage(state: SessionState, allowed: Collection[PipelineStage], action: str) -> None:
    if state.stage not in allowed:
        raise PipelineStateError(f"cannot {action} in stage '{state.stage.value}'")


def load_workbook(
    state: SessionState, source: Path | bytes, name: str | None = None
) -> SessionState:
    """Load a workbook, replacing the whole current generation.

    Load failures are not raised: the result is a NO_FILE state carrying
    the user visible error message.
    """
    try:
        workbook = read_workbook(source, name)
    except WorkbookLoadError as e:
        logger.warning(f"load failed: {e}")
        return SessionState(stage=PipelineStage.NO_FILE, header_row=state.header_row, error=str(e))
    logger.debug(f"sheets loaded: {list(workbook.sheet_names)}")
    return SessionState(
        stage=PipelineStage.SHEETS_LOADED,
        workbook=workbook,
        header_row=state.header_row,
    )


def _evaluate(
    state: SessionState, sheet_name: str, header_row: int, policy: AnalysisPolicy
) -> SessionState:
    """Build a fresh generation for (sheet, header row) and validate it."""
    if state.workbook is None:
        raise PipelineStateError(f"cannot evaluate sheet '{sheet_name}' without a loaded workbook")
    grid = state.workbook.grid(sheet_name)
    header_index = header_row - 1
    # ヘッダ行がシート範囲外 -> 空行扱い
    header = grid[header_index] if header_index < len(grid) else ()
    pending = SessionState(
        stage=PipelineStage.SCHEMA_PENDING,
        workbook=state.workbook,
        sheet_name=sheet_name,
        header_row=header_row,
        grid=grid,
        preview=grid[header_index:header_index + 1 + policy.preview_rows],
    )

    validation = validate_header(header, policy)
    if not validation.is_valid:
        logger.info(f"header row {header_row} of '{sheet_name}' rejected: {list(validation.issues)}")
        return replace(pending, stage=PipelineStage.SCHEMA_INVALID, validation=validation)

    schema = infer_schema(header, grid[header_index + 1:], policy)
    logger.debug(
        f"schema ready sheet='{sheet_name}' header_row={header_row} "
        f"columns={len(schema)} numeric={sum(1 for c in schema if c.is_numeric)}"
    )
    return replace(pending, stage=PipelineStage.SCHEMA_READY, validation=validation, schema=schema)


def select_sheet(
    state: SessionState, sheet_name: str, policy: AnalysisPolicy = DEFAULT_POLICY
) -> SessionState:
    _require_stage(state, _SELECTABLE_STAGES, "select sheet")
    if sheet_name not in state.sheet_names:
        raise InvalidSelectionError(f"unknown sheet: {sheet_name!r}")
    return _evaluate(state, sheet_name, state.header_row, policy)


def change_header_row(
    state: SessionState, header_row: int, policy: AnalysisPolicy = DEFAULT_POLICY
) -> SessionState:
    """Change the 1-based header row index and re-evaluate the sheet.

    Before any sheet is selected only the index is recorded.
    """
    _require_stage(state, _SELECTABLE_STAGES, "change header row")
    if isinstance(header_row, bool) or not isinstance(header_row, int) or header_row < 1:
        raise InvalidSelectionError(f"header row must be an integer >= 1, got {header_row!r}")
    if state.sheet_name is None:
        return replace(state, header_row=header_row)
    return _evaluate(state, state.sheet_name, header_row, policy)


def select_numeric_column(state: SessionState, column_name: str) -> SessionState:
    """Select the column to compute stats for; always clears prior stats.

    A name that is not a numeric column of the current schema is a no-op.
    """
    _require_stage(state, {PipelineStage.SCHEMA_READY}, "select numeric column")
    if column_name not in state.numeric_columns:
        logger.info(f"ignored column selection: {column_name!r} is not a numeric column")
        return state
    return replace(state, selected_column=column_name, stats=None)


def run_stats(state: SessionState) -> SessionState:
    """Compute stats for the selected column.

    No numeric values (or a column missing from the schema) leaves the
    state in SCHEMA_READY without stats.
    """
    _require_stage(state, {PipelineStage.SCHEMA_READY}, "run stats")
    if state.selected_column is None:
        raise PipelineStateError("cannot run stats without a selected numeric column")

    column_index = state.column_index(state.selected_column)
    stats = compute_stats(state.grid, column_index, data_start_row_index=state.header_row)
    if stats is None:
        logger.info(f"no numeric values in column {state.selected_column!r}")
    return replace(state, stats=stats)


class AnalysisSession:
    """Holder of the single current SessionState.

    Each method applies one transition and swaps `state` in one assignment.
    """

    def __init__(self, policy: AnalysisPolicy = DEFAULT_POLICY) -> None:
        self.policy = policy
        self.state = SessionState()

    def load(self, source: Path | bytes, name: str | None = None) -> SessionState:
        self.state = load_workbook(self.state, source, name)
        return self.state

    def select_sheet(self, sheet_name: str) -> SessionState:
        self.state = select_sheet(self.state, sheet_name, self.policy)
        return self.state

    def change_header_row(self, header_row: int) -> SessionState:
        self.state = change_header_row(self.state, header_row, self.policy)
        return self.state

    def select_numeric_column(self, column_name: str) -> SessionState:
        self.state = select_numeric_column(self.state, column_name)
        return self.state

    def run_stats(self) -> SessionState:
        self.state = run_stats(self.state)
        return self.state
