from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Union

import pandas as pd

"""Cell variant model for the analysis engine.

Raw spreadsheet values (str / int / float / NaN / None / datetime ...) are
converted into one of three explicit variants at the grid boundary:

- Empty: 空セル (None, NaN, "")
- Text: 表示文字列
- Number: 数値セル

Numeric parsing and classification operate on these variants only.
"""

__all__ = [
    "Empty",
    "Text",
    "Number",
    "Cell",
    "EMPTY",
    "to_cell",
    "is_empty",
    "parse_number",
    "cell_text",
]


@dataclass(frozen=True)
class Empty:
    """An empty or absent cell."""


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Number:
    value: float


Cell = Union[Empty, Text, Number]

EMPTY = Empty()

# 10進表記のみ (float() が受け付ける "1_000" や "inf" は除外)
_DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def to_cell(raw: Any) -> Cell:
    """Convert a raw value as produced by the workbook decoder into a Cell."""
    if isinstance(raw, (Empty, Text, Number)):
        return raw
    if raw is None:
        return EMPTY
    # bool は int のサブクラスなので先に判定 (Excel 表示と同じ TRUE/FALSE)
    if isinstance(raw, bool):
        return Text("TRUE" if raw else "FALSE")
    if isinstance(raw, (int, float)):
        if isinstance(raw, float) and math.isnan(raw):
            return EMPTY
        return Number(float(raw))
    if isinstance(raw, str):
        return Text(raw) if raw != "" else EMPTY
    # pandas.NaT / numpy NaN (NaT は datetime 扱いされるため先に判定)
    if pd.isna(raw):
        return EMPTY
    if isinstance(raw, (datetime, date, time)):
        return Text(raw.isoformat())
    if hasattr(raw, "item"):
        return to_cell(raw.item())
    return Text(str(raw))


def is_empty(cell: Cell) -> bool:
    return isinstance(cell, Empty)


def parse_number(cell: Cell) -> float | None:
    """Return the finite numeric value of a cell, or None when it has none.

    Text is parsed after stripping surrounding whitespace and must be a plain
    decimal literal with an optional exponent. Digit separators ("1_000"),
    "inf" and "nan" are rejected, as are non-finite Number cells.
    """
    if isinstance(cell, Number):
        value = cell.value
    elif isinstance(cell, Text):
        stripped = cell.value.strip()
        if not _DECIMAL_PATTERN.fullmatch(stripped):
            return None
        value = float(stripped)
    else:
        return None
    if not math.isfinite(value):
        return None
    return value


def cell_text(cell: Cell) -> str:
    """Display string of a cell (integral numbers are rendered without '.0')."""
    if isinstance(cell, Text):
        return cell.value
    if isinstance(cell, Number):
        value = cell.value
        if math.isfinite(value) and value == int(value):
            return str(int(value))
        return repr(value)
    return ""
