# Shared pytest fixtures
from __future__ import annotations
import tempfile
from collections.abc import Callable
from pathlib import Path

import pandas as pd
import pytest

from analysis_engine.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("ANALYSIS_ENGINE_CONFIG", raising=False)
        yield p


@pytest.fixture(autouse=True)
def _fresh_logging():
    # CLI テストごとに capsys の stdout へハンドラを付け直す
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """numeric_header_ratio: 0.5
empty_header_ratio: 0.3
numeric_column_ratio: 0.8
preview_rows: 4
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "analysis.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


def _write_workbook(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
    with pd.ExcelWriter(path) as writer:
        for sheet, rows in sheets.items():
            df = pd.DataFrame(rows)
            df.to_excel(writer, sheet_name=sheet, header=False, index=False)
    return path


@pytest.fixture()
def make_workbook(temp_workdir: Path) -> Callable[..., Path]:
    """Factory writing a real .xlsx file under data/ (rows written as-is, no header)."""
    def _make(name: str, sheets: dict[str, list[list[object]]]) -> Path:
        return _write_workbook(temp_workdir / "data" / name, sheets)
    return _make


@pytest.fixture()
def scores_workbook(make_workbook) -> Path:
    return make_workbook(
        "scores.xlsx",
        {
            "Scores": [
                ["Name", "Score"],
                ["x", "10"],
                ["y", "20"],
                ["z", "30"],
            ],
            "Report": [
                ["Quarterly report", None],
                ["Region", "Sales"],
                ["North", 120],
                ["South", 80],
            ],
        },
    )
