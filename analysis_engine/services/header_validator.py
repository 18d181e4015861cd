from __future__ import annotations

from collections.abc import Sequence

from ..models.analysis_result import HeaderValidationResult
from ..models.cell import Cell, cell_text, is_empty, parse_number
from ..models.config_models import DEFAULT_POLICY, AnalysisPolicy

"""Header row plausibility check.

Three independent rules, each contributing one issue message:
1. mostly numeric values (ratio > policy.numeric_header_ratio)
2. too many empty cells (ratio > policy.empty_header_ratio)
3. duplicate trimmed names
"""

__all__ = [
    "MOSTLY_NUMERIC_ISSUE",
    "TOO_MANY_EMPTY_ISSUE",
    "DUPLICATE_NAMES_ISSUE",
    "validate_header",
]

MOSTLY_NUMERIC_ISSUE = "Header row appears to contain mostly numeric values."
TOO_MANY_EMPTY_ISSUE = "Header row contains too many empty cells."
DUPLICATE_NAMES_ISSUE = "Duplicate column names detected."


def validate_header(
    header_row: Sequence[Cell], policy: AnalysisPolicy = DEFAULT_POLICY
) -> HeaderValidationResult:
    total = len(header_row)
    # 0 列: どのルールも発火しない
    if total == 0:
        return HeaderValidationResult(is_valid=True, issues=())

    issues: list[str] = []

    numeric_count = sum(1 for c in header_row if parse_number(c) is not None)
    if numeric_count / total > policy.numeric_header_ratio:
        issues.append(MOSTLY_NUMERIC_ISSUE)

    empty_count = sum(1 for c in header_row if is_empty(c))
    if empty_count / total > policy.empty_header_ratio:
        issues.append(TOO_MANY_EMPTY_ISSUE)

    unique_names = {cell_text(c).strip() for c in header_row}
    if len(unique_names) < total:
        issues.append(DUPLICATE_NAMES_ISSUE)

    return HeaderValidationResult(is_valid=not issues, issues=tuple(issues))
