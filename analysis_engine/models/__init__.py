"""Domain models for the analysis engine.

Cells and grids (input side), validation/schema/stats results (output side)
and the immutable SessionState that ties one generation together.
"""

from .analysis_result import ColumnSchema, ColumnStats, HeaderValidationResult
from .cell import EMPTY, Cell, Empty, Number, Text
from .config_models import DEFAULT_POLICY, AnalysisPolicy
from .grid import Grid, Row, Workbook
from .session_state import PipelineStage, SessionState

__all__ = [
    # Cell / grid models
    "Cell",
    "Empty",
    "Text",
    "Number",
    "EMPTY",
    "Grid",
    "Row",
    "Workbook",
    # Result models
    "HeaderValidationResult",
    "ColumnSchema",
    "ColumnStats",
    # Pipeline state
    "PipelineStage",
    "SessionState",
    # Configuration models
    "AnalysisPolicy",
    "DEFAULT_POLICY",
]
