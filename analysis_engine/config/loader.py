from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import DEFAULT_POLICY, AnalysisPolicy

"""Config loader for the analysis policy file.

Responsibilities:
- Load YAML (config/analysis.yml by default)
- Validate against the bundled JSON schema (config_schema.json)
- Apply defaults for keys that are not set
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/analysis.yml")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: Any) -> None:
    """Validate config data against JSON schema.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or the
            config data fails schema validation (wrong types, out of range
            ratios, unknown keys).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path) -> AnalysisPolicy:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    # 空ファイル -> 既定値
    if data is None:
        data = {}

    _validate_config_schema(data)

    return AnalysisPolicy(
        numeric_header_ratio=float(data.get("numeric_header_ratio", DEFAULT_POLICY.numeric_header_ratio)),
        empty_header_ratio=float(data.get("empty_header_ratio", DEFAULT_POLICY.empty_header_ratio)),
        numeric_column_ratio=float(data.get("numeric_column_ratio", DEFAULT_POLICY.numeric_column_ratio)),
        preview_rows=int(data.get("preview_rows", DEFAULT_POLICY.preview_rows)),
    )
