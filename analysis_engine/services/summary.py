from __future__ import annotations

from ..models.analysis_result import ColumnSchema, ColumnStats
from ..models.cell import cell_text
from ..models.grid import Grid
from ..models.session_state import SessionState

"""Text rendering of pipeline results for the command line front end.

Rendering is the only place where numbers are rounded: the mean is shown
with 3 fractional digits while ColumnStats keeps the full value.

SUMMARY line format:
SUMMARY sheet={name} header_row={n} stage={stage} columns={n} numeric={n} stats={none|count=..,min=..,max=..,mean=..}
"""

__all__ = [
    "format_number",
    "render_preview_lines",
    "render_schema_lines",
    "render_stats_lines",
    "render_summary_body",
    "render_summary_line",
]


def format_number(value: float) -> str:
    """Integral values without a fraction, others as Python renders them."""
    if value == int(value):
        return str(int(value))
    return str(value)


def render_preview_lines(preview: Grid) -> list[str]:
    return [" | ".join(cell_text(c) for c in row) for row in preview]


def render_schema_lines(schema: tuple[ColumnSchema, ...]) -> list[str]:
    return [f"{c.name}: {'Numeric' if c.is_numeric else 'Non-numeric'}" for c in schema]


def render_stats_lines(stats: ColumnStats) -> list[str]:
    return [
        f"Count: {stats.count}",
        f"Min: {format_number(stats.min)}",
        f"Max: {format_number(stats.max)}",
        f"Mean: {stats.mean:.3f}",
    ]


def render_summary_body(state: SessionState) -> str:
    """Render the SUMMARY fields for the current state, without the label.

    Examples:
        >>> from analysis_engine.models.session_state import SessionState
        >>> render_summary_body(SessionState())
        'sheet=- header_row=1 stage=no_file columns=0 numeric=0 stats=none'
    """
    if state.stats is None:
        stats_str = "none"
    else:
        s = state.stats
        stats_str = (
            f"count={s.count},min={format_number(s.min)},"
            f"max={format_number(s.max)},mean={s.mean:.3f}"
        )
    return (
        f"sheet={state.sheet_name or '-'} "
        f"header_row={state.header_row} "
        f"stage={state.stage.value} "
        f"columns={len(state.schema)} "
        f"numeric={len(state.numeric_columns)} "
        f"stats={stats_str}"
    )


def render_summary_line(state: SessionState) -> str:
    """Full SUMMARY line as printed by the CLI (label + body)."""
    return f"SUMMARY {render_summary_body(state)}"
