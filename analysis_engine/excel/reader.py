from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.grid import Grid, Workbook, make_grid

"""Workbook reader (grid loader).

Decodes an .xlsx / .xls workbook into a Workbook of raw cell grids.
No header handling happens here: every worksheet row is kept as-is
(header=None) and the header row is chosen later by the operator.

pandas の既定 NA 変換 ('NA', 'N/A' 等 -> NaN) は無効化し、表示どおりの文字列を保持する。
"""

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "WorkbookLoadError",
    "EmptyWorkbookError",
    "read_workbook",
    "dataframe_to_grid",
]

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".xlsx", ".xls")


class WorkbookLoadError(Exception):
    """Raised when a file is not a readable Excel workbook."""


class EmptyWorkbookError(WorkbookLoadError):
    """Raised when a workbook contains no sheets."""


def dataframe_to_grid(df: pd.DataFrame) -> Grid:
    """Convert a header-less DataFrame into a Grid of Cells."""
    return make_grid(df.itertuples(index=False, name=None))


def read_workbook(source: Path | bytes, name: str | None = None) -> Workbook:
    """Read a workbook from a path or raw bytes.

    Parameters
    ----------
    source: Excel ファイルパス、またはアップロードされた生バイト列
    name: 表示用ファイル名 (bytes の場合は必須。拡張子チェックに使用)

    Raises
    ------
    WorkbookLoadError: unsupported extension or decode failure
    EmptyWorkbookError: the workbook has no sheets
    """
    if name is None:
        if isinstance(source, (bytes, bytearray)):
            raise WorkbookLoadError("A file name is required when reading raw bytes.")
        name = Path(source).name

    if not name.lower().endswith(SUPPORTED_EXTENSIONS):
        raise WorkbookLoadError("Please upload an Excel file (.xlsx or .xls).")

    target: Any = io.BytesIO(source) if isinstance(source, (bytes, bytearray)) else source
    sheets: dict[str, Grid] = {}
    try:
        with pd.ExcelFile(target) as xls:
            for sheet_name in xls.sheet_names:
                df = xls.parse(sheet_name, header=None, dtype=object, keep_default_na=False)
                sheets[str(sheet_name)] = dataframe_to_grid(df)
    except Exception as e:
        logger.debug(f"decode failed for {name}: {e!r}")
        raise WorkbookLoadError(str(e) or "Failed to read Excel file.") from e

    if not sheets:
        raise EmptyWorkbookError("No sheets found in this Excel file.")

    logger.debug(f"loaded workbook {name} sheets={list(sheets)}")
    return Workbook(name=name, sheets=sheets)
