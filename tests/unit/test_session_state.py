from __future__ import annotations

import pytest

from analysis_engine.models.analysis_result import ColumnSchema, ColumnStats, HeaderValidationResult
from analysis_engine.models.grid import Workbook, cell_at, make_grid
from analysis_engine.models.cell import EMPTY, Text
from analysis_engine.models.session_state import PipelineStage, SessionState


def test_session_state_defaults():
    """Fresh state is NO_FILE with header row 1 and nothing derived."""
    state = SessionState()
    assert state.stage is PipelineStage.NO_FILE
    assert state.header_row == 1
    assert state.workbook is None
    assert state.sheet_names == ()
    assert state.grid == ()
    assert state.preview == ()
    assert state.validation is None
    assert state.schema == ()
    assert state.selected_column is None
    assert state.stats is None
    assert state.error is None


def test_session_state_immutable():
    state = SessionState()
    with pytest.raises(AttributeError):
        state.header_row = 2  # type: ignore
    with pytest.raises(AttributeError):
        state.stats = ColumnStats(count=1, min=1.0, max=1.0, mean=1.0)  # type: ignore


def test_column_helpers():
    state = SessionState(
        stage=PipelineStage.SCHEMA_READY,
        schema=(ColumnSchema("Name", False), ColumnSchema("Score", True), ColumnSchema("Qty", True)),
        validation=HeaderValidationResult(is_valid=True),
    )
    assert state.column_names == ["Name", "Score", "Qty"]
    assert state.numeric_columns == ["Score", "Qty"]
    assert state.column_index("Qty") == 2
    assert state.column_index("Missing") == -1


def test_workbook_sheet_names_keep_order():
    wb = Workbook(name="w.xlsx", sheets={"Z": (), "A": ()})
    state = SessionState(stage=PipelineStage.SHEETS_LOADED, workbook=wb)
    assert state.sheet_names == ("Z", "A")


def test_cell_at_pads_ragged_rows():
    grid = make_grid([["a", "b"], ["c"]])
    assert cell_at(grid[1], 0) == Text("c")
    assert cell_at(grid[1], 1) == EMPTY
    assert cell_at(grid[1], -1) == EMPTY


def test_stage_values():
    assert {s.value for s in PipelineStage} == {
        "no_file",
        "sheets_loaded",
        "schema_pending",
        "schema_ready",
        "schema_invalid",
    }
