from __future__ import annotations

from ..models.analysis_result import ColumnStats
from ..models.cell import parse_number
from ..models.grid import Grid, cell_at

"""Basic descriptive statistics for a single column."""

__all__ = [
    "compute_stats",
]


def compute_stats(grid: Grid, column_index: int, data_start_row_index: int) -> ColumnStats | None:
    """Compute count/min/max/mean over the numeric cells of one column.

    Args:
        grid: Full sheet grid
        column_index: 0-based column index (negative -> no stats)
        data_start_row_index: 0-based index of the first data row (header index + 1)

    Returns:
        ColumnStats, or None when the column has no parseable numeric value.
        A count=0 stats object is never produced.
    """
    if column_index < 0:
        return None

    values: list[float] = []
    for row in grid[max(data_start_row_index, 0):]:
        value = parse_number(cell_at(row, column_index))
        if value is not None:
            values.append(value)

    if not values:
        return None

    count = len(values)
    return ColumnStats(
        count=count,
        min=min(values),
        max=max(values),
        mean=sum(values) / count,
    )
