from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .analysis_result import ColumnSchema, ColumnStats, HeaderValidationResult
from .grid import Grid, Workbook

"""SessionState domain model and PipelineStage enum.

SessionState is one immutable "generation" of the current selection:
workbook, sheet, header row, grid, validation, schema and stats always
belong together. Every operator action produces a new SessionState, so a
schema or stats value can never outlive the grid that produced it.
"""

__all__ = [
    "PipelineStage",
    "SessionState",
]


class PipelineStage(Enum):
    """Stage of the current selection.

    State transitions:
        no_file -> sheets_loaded -> schema_pending -> (schema_ready | schema_invalid)

    - NO_FILE: nothing loaded, or the last load failed
    - SHEETS_LOADED: workbook decoded, no sheet evaluated yet
    - SCHEMA_PENDING: sheet/header row chosen, validation not finished
    - SCHEMA_READY: header valid and schema inferred (stats may be present)
    - SCHEMA_INVALID: header rejected; schema and stats are empty
    """
    NO_FILE = "no_file"
    SHEETS_LOADED = "sheets_loaded"
    SCHEMA_PENDING = "schema_pending"
    SCHEMA_READY = "schema_ready"
    SCHEMA_INVALID = "schema_invalid"


@dataclass(frozen=True)
class SessionState:
    stage: PipelineStage = PipelineStage.NO_FILE
    workbook: Workbook | None = None
    sheet_name: str | None = None
    header_row: int = 1  # 1-based
    grid: Grid = ()
    preview: Grid = ()  # header row + following rows, display only
    validation: HeaderValidationResult | None = None
    schema: tuple[ColumnSchema, ...] = ()
    selected_column: str | None = None
    stats: ColumnStats | None = None
    error: str | None = None  # user visible load error

    @property
    def sheet_names(self) -> tuple[str, ...]:
        if self.workbook is None:
            return ()
        return self.workbook.sheet_names

    @property
    def column_names(self) -> list[str]:
        return [c.name for c in self.schema]

    @property
    def numeric_columns(self) -> list[str]:
        return [c.name for c in self.schema if c.is_numeric]

    def column_index(self, column_name: str) -> int:
        """0-based index of a schema column, -1 when not present."""
        try:
            return self.column_names.index(column_name)
        except ValueError:
            return -1
