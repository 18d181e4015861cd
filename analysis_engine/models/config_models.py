from __future__ import annotations

from dataclasses import dataclass

"""Config dataclasses for the analysis engine.

The thresholds used by header validation and schema inference are heuristic
tuning values, so they are carried as a policy object instead of constants.
"""

__all__ = [
    "AnalysisPolicy",
    "DEFAULT_POLICY",
]


@dataclass(frozen=True)
class AnalysisPolicy:
    """Tunable thresholds for the ingestion pipeline.

    Ratios are compared as follows:
    - numeric_header_ratio: issue when numeric cells / total > ratio (strict)
    - empty_header_ratio: issue when empty cells / total > ratio (strict)
    - numeric_column_ratio: numeric when numeric / non-empty >= ratio (inclusive)
    """
    numeric_header_ratio: float = 0.5
    empty_header_ratio: float = 0.3
    numeric_column_ratio: float = 0.8
    preview_rows: int = 4  # ヘッダ行の後に表示するデータ行数


DEFAULT_POLICY = AnalysisPolicy()
