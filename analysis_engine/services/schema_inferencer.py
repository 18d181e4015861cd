from __future__ import annotations

from collections.abc import Sequence

from ..models.analysis_result import ColumnSchema
from ..models.cell import Cell, cell_text, is_empty, parse_number
from ..models.config_models import DEFAULT_POLICY, AnalysisPolicy
from ..models.grid import Row, cell_at

"""Column schema inference.

Derives cleaned column names from a (validated) header row and classifies
each column as numeric or not from the data rows beneath it.
"""

__all__ = [
    "column_name",
    "infer_schema",
]


def column_name(header_cell: Cell, index: int) -> str:
    """Trimmed header text, or Column_<n> (1-based) for an empty header cell."""
    if is_empty(header_cell):
        return f"Column_{index + 1}"
    return cell_text(header_cell).strip()


def _is_numeric_column(values: list[Cell], ratio: float) -> bool:
    # 非空セル 0 件は非数値扱い (0/0 回避)
    if not values:
        return False
    numeric = sum(1 for v in values if parse_number(v) is not None)
    return numeric / len(values) >= ratio


def infer_schema(
    header_row: Sequence[Cell],
    data_rows: Sequence[Row],
    policy: AnalysisPolicy = DEFAULT_POLICY,
) -> tuple[ColumnSchema, ...]:
    """Infer one ColumnSchema per header column, in header order.

    Must only be called for a header row that passed validate_header.
    Data rows shorter than the header are treated as having empty
    trailing cells.
    """
    schema: list[ColumnSchema] = []
    for i, header_cell in enumerate(header_row):
        values = [c for c in (cell_at(row, i) for row in data_rows) if not is_empty(c)]
        schema.append(
            ColumnSchema(
                name=column_name(header_cell, i),
                is_numeric=_is_numeric_column(values, policy.numeric_column_ratio),
            )
        )
    return tuple(schema)
