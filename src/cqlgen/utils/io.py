"""Utilities for loading schemas and configuration, and serializing workloads."""

import json
from pathlib import Path
from typing import Any, Dict
import yaml
from pydantic import TypeAdapter
from cqlgen.config.exporter import ExporterConfig
from cqlgen.errors import ConfigurationError
from cqlgen.ir.schema import SchemaModel


def load_schema_from_json(schema_path: Path) -> SchemaModel:
    """
    Load a SchemaModel from a JSON file.

    Args:
        schema_path: Path to the JSON file

    Returns:
        Loaded SchemaModel instance

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty, is not valid JSON or does not
            describe a valid schema
    """
    schema_path = Path(schema_path)
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema file not found: {schema_path}")

    file_content = schema_path.read_text(encoding="utf-8").strip()
    if not file_content:
        raise ValueError(
            f"Schema file is empty: {schema_path}. "
            f"The file exists but contains no JSON data."
        )

    try:
        return TypeAdapter(SchemaModel).validate_json(file_content)
    except Exception as e:
        raise ValueError(f"Failed to load schema from {schema_path}: {e}") from e


def save_schema_to_json(model: SchemaModel, schema_path: Path) -> None:
    """
    Save a SchemaModel to a JSON file.

    Note:
        Creates parent directories if they don't exist.
    """
    schema_path = Path(schema_path)
    schema_path.parent.mkdir(parents=True, exist_ok=True)
    schema_path.write_text(model.model_dump_json(indent=2), encoding="utf-8")


def load_exporter_config(config_path: Path) -> ExporterConfig:
    """
    Load the exporter configuration from a YAML file.

    Raises:
        ConfigurationError: If the file is missing, is not valid YAML, or does
            not hold a valid configuration mapping
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigurationError(f"Exporter configuration not found: {config_path}")

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse exporter configuration {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Exporter configuration {config_path} must be a mapping, got {type(data).__name__}"
        )
    return ExporterConfig.from_mapping(data)


class _WorkloadDumper(yaml.SafeDumper):
    """Safe dumper writing multi-line strings as literal blocks."""


def _represent_str(dumper: yaml.SafeDumper, data: str):
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


_WorkloadDumper.add_representer(str, _represent_str)


def dump_workload_yaml(workload: Dict[str, Any]) -> str:
    """Render a workload document as block-style YAML, keeping key order."""
    return yaml.dump(
        workload,
        Dumper=_WorkloadDumper,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=120,
    )


def dump_workload_json(workload: Dict[str, Any]) -> str:
    """Render a workload document as indented JSON, keeping key order."""
    return json.dumps(workload, indent=2) + "\n"
