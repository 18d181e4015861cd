from __future__ import annotations

from pathlib import Path

from analysis_engine.models.analysis_result import ColumnSchema, ColumnStats
from analysis_engine.models.session_state import PipelineStage
from analysis_engine.services.header_validator import DUPLICATE_NAMES_ISSUE
from analysis_engine.services.orchestrator import AnalysisSession

"""End-to-end pipeline runs over real .xlsx files (openpyxl via pandas)."""


def test_valid_header_schema_and_stats(make_workbook):
    excel = make_workbook(
        "scores.xlsx",
        {"Sheet1": [["Name", "Score"], ["x", "10"], ["y", "20"], ["z", "30"]]},
    )
    session = AnalysisSession()
    session.load(excel)
    state = session.select_sheet("Sheet1")

    assert state.stage is PipelineStage.SCHEMA_READY
    assert state.schema == (ColumnSchema("Name", False), ColumnSchema("Score", True))

    session.select_numeric_column("Score")
    state = session.run_stats()
    assert state.stats == ColumnStats(count=3, min=10.0, max=30.0, mean=20.0)


def test_duplicate_header_blocks_schema_and_stats(make_workbook):
    excel = make_workbook(
        "dup.xlsx",
        {"Sheet1": [["Name", "Score", "Score"], ["x", "10"], ["y", "20"], ["z", "abc"]]},
    )
    session = AnalysisSession()
    session.load(excel)
    state = session.select_sheet("Sheet1")

    assert state.stage is PipelineStage.SCHEMA_INVALID
    assert state.validation.issues == (DUPLICATE_NAMES_ISSUE,)
    assert state.schema == ()
    assert state.stats is None


def test_title_row_then_real_header(make_workbook):
    excel = make_workbook(
        "report.xlsx",
        {
            "Data": [
                ["Monthly figures", None, None],
                ["Month", "Revenue", "Notes"],
                ["Jan", 100.5, "ok"],
                ["Feb", 200, None],
                ["Mar", "n/a", "late"],
                ["Apr", 300, None],
                ["May", 400, None],
            ]
        },
    )
    session = AnalysisSession()
    session.load(excel)
    assert session.select_sheet("Data").stage is PipelineStage.SCHEMA_INVALID

    state = session.change_header_row(2)
    assert state.stage is PipelineStage.SCHEMA_READY
    # Revenue: 4/5 = 80% -> numeric (inclusive)
    assert state.schema == (
        ColumnSchema("Month", False),
        ColumnSchema("Revenue", True),
        ColumnSchema("Notes", False),
    )
    assert len(state.preview) == 5

    session.select_numeric_column("Revenue")
    stats = session.run_stats().stats
    assert stats is not None
    assert stats.count == 4
    assert stats.min == 100.5
    assert stats.max == 400.0
    assert stats.mean == (100.5 + 200 + 300 + 400) / 4


def test_reload_after_failure_exposes_no_grid(make_workbook, temp_workdir: Path):
    excel = make_workbook("ok.xlsx", {"S": [["A"], [1]]})
    bad = temp_workdir / "data" / "bad.xlsx"
    bad.write_bytes(b"nope")

    session = AnalysisSession()
    session.load(excel)
    session.select_sheet("S")
    state = session.load(bad)

    assert state.stage is PipelineStage.NO_FILE
    assert state.error
    assert state.grid == ()
    assert state.sheet_names == ()
