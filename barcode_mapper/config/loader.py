from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import ColumnSelection, MapperConfig, RangeSpec
from ..models.mapping_range import MatchMode

"""Mapping config loader.

Responsibilities:
- Load the YAML mapping config (default config/mapping.yml), keeping
  unquoted numbers as text
- Validate it against the packaged mapping_schema.json
- Apply defaults (mode=tube_number, output_directory=".")
- Turn range entries into RangeSpec values; overlap checks happen later in
  the range store, rule by rule
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
    "parse_config",
    "TextScalarLoader",
]

DEFAULT_CONFIG_PATH = Path("config/mapping.yml")
SCHEMA_PATH = Path(__file__).with_name("mapping_schema.json")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: the schema file is missing or invalid, or the config
            data violates it (unknown keys, wrong types, missing rule fields)
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


_NUMBER_TAGS = frozenset({"tag:yaml.org,2002:int", "tag:yaml.org,2002:float"})


class TextScalarLoader(yaml.SafeLoader):
    """SafeLoader that keeps unquoted numbers as the text that was typed.

    Range bounds are compared as raw strings, so YAML 1.1 number resolution
    (``0100`` as octal 64, ``12:30`` as 750, ``1001.50`` as 1001.5) would
    silently move them.
    """


TextScalarLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _NUMBER_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _stringify(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def parse_config(data: dict[str, Any]) -> MapperConfig:
    """Build a MapperConfig from already loaded YAML data."""
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")
    _validate_config_schema(data)

    mode = MatchMode(data.get("mode", MatchMode.BY_TUBE_NUMBER.value))
    cols_raw = data.get("columns") or {}
    columns = ColumnSelection(
        tube=cols_raw.get("tube"),
        column=cols_raw.get("column"),
        row=cols_raw.get("row"),
    )
    ranges = [
        RangeSpec(
            start=_stringify(entry["start"]),
            end=_stringify(entry["end"]),
            patient_id=_stringify(entry["patient_id"]),
            mode=MatchMode(entry["mode"]) if "mode" in entry else None,
        )
        for entry in data.get("ranges") or []
    ]
    return MapperConfig(
        mode=mode,
        columns=columns,
        output_directory=data.get("output_directory", "."),
        ranges=ranges,
    )


def load_config(path: Path) -> MapperConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.load(path.read_text(encoding="utf-8"), Loader=TextScalarLoader) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    return parse_config(data)
