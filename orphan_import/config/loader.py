from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import ColumnSpec, ImportConfig, OptionEntry

"""Config loader for the orphan spreadsheet importer.

Responsibilities:
- Load YAML config (default config/import.yml)
- Validate against the packaged JSON schema (import_schema.json)
- Apply defaults (first_row=2, sheet=0, dayfirst=False)
- Build ImportConfig / ColumnSpec / OptionEntry dataclasses
"""

SCHEMA_PATH = Path(__file__).parent / "import_schema.json"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against JSON schema.

    Raises:
        ConfigError: If the schema file is missing or unreadable, or the
            config data fails schema validation (missing required keys,
            wrong types, unknown keys).
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


def parse_config(data: dict[str, Any]) -> ImportConfig:
    """Build an ImportConfig from an already loaded mapping."""
    if not isinstance(data, dict):
        raise ConfigError(f"config validation failed: expected a mapping, got {type(data).__name__}")
    _validate_config_schema(data)

    columns = tuple(
        ColumnSpec(
            column=c["column"].upper(),
            field=c["field"],
            type_name=c["type"],
            mandatory=c.get("mandatory", False),
            option=c.get("option"),
        )
        for c in data["columns"]
    )
    options = {
        key: tuple(OptionEntry(cell=e["cell"], db=e["db"]) for e in entries)
        for key, entries in (data.get("options") or {}).items()
    }
    return ImportConfig(
        columns=columns,
        options=options,
        first_row=data.get("first_row", 2),
        sheet=data.get("sheet", 0),
        dayfirst=data.get("dayfirst", False),
        source_directory=data.get("source_directory", "."),
    )


def load_config(path: Path) -> ImportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    return parse_config(data)
