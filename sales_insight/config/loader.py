from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..ingest.schema import IDENTIFIER_COLUMN, NUMERIC_COLUMNS, REQUIRED_COLUMNS

"""Config loader.

Responsibilities:
- Load YAML config (default config/insight.yml)
- Validate against the bundled JSON schema (unknown keys rejected)
- Apply defaults for every key left out
- Cross-check: numeric and identifier columns must be required columns
"""

__all__ = [
    "ConfigError",
    "TopNConfig",
    "InsightConfig",
    "DEFAULT_CONFIG_PATH",
    "CONFIG_ENV_VAR",
    "SCHEMA_PATH",
    "default_config",
    "load_config",
    "resolve_config_path",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/insight.yml")
CONFIG_ENV_VAR = "SALES_INSIGHT_CONFIG"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class TopNConfig:
    dashboard: int = 10   # ranked table under the dashboard charts
    profit: int = 8       # profit view
    comparison: int = 5   # product detail comparison chart


@dataclass(frozen=True)
class InsightConfig:
    required_columns: tuple[str, ...] = REQUIRED_COLUMNS
    numeric_columns: tuple[str, ...] = NUMERIC_COLUMNS
    identifier_column: str = IDENTIFIER_COLUMN
    top_n: TopNConfig = field(default_factory=TopNConfig)
    log_dir: str = "logs"
    error_log: bool = True


def default_config() -> InsightConfig:
    return InsightConfig()


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: schema file missing/unreadable or data fails validation
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


def load_config(path: Path) -> InsightConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    defaults = default_config()
    required = tuple(data.get("required_columns", defaults.required_columns))
    numeric = tuple(data.get("numeric_columns", defaults.numeric_columns))
    identifier = data.get("identifier_column", defaults.identifier_column)

    unknown = [c for c in (*numeric, identifier) if c not in required]
    if unknown:
        raise ConfigError(f"columns not listed in required_columns: {unknown}")

    top_raw = data.get("top_n", {})
    top_n = TopNConfig(
        dashboard=top_raw.get("dashboard", defaults.top_n.dashboard),
        profit=top_raw.get("profit", defaults.top_n.profit),
        comparison=top_raw.get("comparison", defaults.top_n.comparison),
    )
    return InsightConfig(
        required_columns=required,
        numeric_columns=numeric,
        identifier_column=identifier,
        top_n=top_n,
        log_dir=data.get("log_dir", defaults.log_dir),
        error_log=data.get("error_log", defaults.error_log),
    )


def resolve_config_path(explicit: str | None) -> Path | None:
    """Pick the config file: --config, then $SALES_INSIGHT_CONFIG, then the default.

    Returns None when nothing was requested and the default file is absent,
    meaning built-in defaults apply.
    """
    if explicit:
        return Path(explicit)
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    if DEFAULT_CONFIG_PATH.exists():
        return DEFAULT_CONFIG_PATH
    return None
