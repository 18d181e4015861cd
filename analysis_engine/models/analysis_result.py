from __future__ import annotations

from dataclasses import dataclass

"""Result models produced by the analysis pipeline.

- HeaderValidationResult: header row plausibility check outcome
- ColumnSchema: cleaned column name + numeric classification
- ColumnStats: count / min / max / mean of one numeric column

All results are created fresh on every evaluation and never mutated.
"""

__all__ = [
    "HeaderValidationResult",
    "ColumnSchema",
    "ColumnStats",
]


@dataclass(frozen=True)
class HeaderValidationResult:
    """Outcome of validating one header row."""
    is_valid: bool
    issues: tuple[str, ...] = ()  # 検出順 (numeric -> empty -> duplicate)


@dataclass(frozen=True)
class ColumnSchema:
    name: str  # trimmed header text or Column_<n>
    is_numeric: bool


@dataclass(frozen=True)
class ColumnStats:
    """Descriptive statistics of one column.

    `mean` keeps full float precision; rounding to 3 digits is done when
    rendering (see services.summary).
    """
    count: int
    min: float
    max: float
    mean: float
