from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .cell import EMPTY, Cell, to_cell

"""Grid and Workbook domain models.

A Grid is the immutable, possibly ragged, cell matrix of one worksheet.
Rows shorter than others are NOT padded; lookups past the end of a row
return EMPTY instead.
"""

__all__ = [
    "Row",
    "Grid",
    "Workbook",
    "make_grid",
    "cell_at",
]

Row = tuple[Cell, ...]
Grid = tuple[Row, ...]


def make_grid(rows: Iterable[Iterable[Any]]) -> Grid:
    """Build a Grid from raw row values (each value converted via to_cell)."""
    return tuple(tuple(to_cell(v) for v in row) for row in rows)


def cell_at(row: Row, index: int) -> Cell:
    """Cell at column `index`, EMPTY when the row is too short."""
    if 0 <= index < len(row):
        return row[index]
    return EMPTY


@dataclass(frozen=True)
class Workbook:
    """Decoded workbook: sheet name -> Grid, in workbook order."""
    name: str  # source file name (表示用)
    sheets: Mapping[str, Grid] = field(default_factory=dict)

    @property
    def sheet_names(self) -> tuple[str, ...]:
        return tuple(self.sheets.keys())

    def grid(self, sheet_name: str) -> Grid:
        return self.sheets[sheet_name]
