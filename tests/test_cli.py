"""Tests for the command-line interface."""

import json
import logging
import pytest
import yaml
from typer.testing import CliRunner
from cqlgen.cli.app import app
from cqlgen.utils.io import save_schema_to_json

runner = CliRunner()

CONFIG = "blockplan:\n  main: schema-tables, insert, select\n"


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop the handlers setup_logging attaches to the runner's streams."""
    yield
    logging.getLogger("cqlgen").handlers.clear()


@pytest.fixture
def inputs(tmp_path, simple_model):
    schema = tmp_path / "schema.json"
    save_schema_to_json(simple_model, schema)
    config = tmp_path / "exporter.yaml"
    config.write_text(CONFIG, encoding="utf-8")
    return schema, config


def test_export_defaults_to_schema_name(inputs):
    """Without a target, the workload is written next to the schema."""
    schema, config = inputs
    result = runner.invoke(app, ["export", str(schema), "--config", str(config)])
    assert result.exit_code == 0, result.output
    workload = yaml.safe_load(schema.with_suffix(".yaml").read_text(encoding="utf-8"))
    assert list(workload["blocks"]["main"]["ops"]) == [
        "main--create-table--ks__t",
        "main--insert--ks__t",
        "main--select--ks__t",
    ]


def test_export_json(inputs, tmp_path):
    """The json format writes a JSON workload."""
    schema, config = inputs
    target = tmp_path / "out.json"
    result = runner.invoke(
        app, ["export", str(schema), str(target), "--config", str(config), "--format", "json"]
    )
    assert result.exit_code == 0, result.output
    assert json.loads(target.read_text(encoding="utf-8"))["bindings"] == {"ks__t__id": "Hash(); ToInt()"}


def test_export_refuses_wrong_suffix(inputs, tmp_path):
    """The target must carry the output format's suffix."""
    schema, config = inputs
    result = runner.invoke(app, ["export", str(schema), str(tmp_path / "out.txt"), "--config", str(config)])
    assert result.exit_code != 0
    assert not (tmp_path / "out.txt").exists()


def test_export_refuses_to_overwrite(inputs, tmp_path):
    """Existing targets are only overwritten when their name starts with '_'."""
    schema, config = inputs
    existing = tmp_path / "out.yaml"
    existing.write_text("keep me\n", encoding="utf-8")
    result = runner.invoke(app, ["export", str(schema), str(existing), "--config", str(config)])
    assert result.exit_code != 0
    assert existing.read_text(encoding="utf-8") == "keep me\n"

    scratch = tmp_path / "_out.yaml"
    scratch.write_text("replace me\n", encoding="utf-8")
    result = runner.invoke(app, ["export", str(schema), str(scratch), "--config", str(config)])
    assert result.exit_code == 0, result.output
    assert "blocks" in yaml.safe_load(scratch.read_text(encoding="utf-8"))


def test_export_compile_error_writes_nothing(inputs, tmp_path):
    """A compile error exits with status 1 and leaves no output file."""
    schema, _ = inputs
    config = tmp_path / "bad.yaml"
    config.write_text("blockplan:\n  main: insert, merge\n", encoding="utf-8")
    target = tmp_path / "out.yaml"
    result = runner.invoke(app, ["export", str(schema), str(target), "--config", str(config)])
    assert result.exit_code == 1
    assert "merge" in result.output
    assert not target.exists()


def test_show_model(inputs):
    """show-model prints the validated schema model."""
    schema, _ = inputs
    result = runner.invoke(app, ["show-model", str(schema)])
    assert result.exit_code == 0, result.output
    assert '"partition_keys": [\n' in result.output
    assert '"role": "partition_key"' in result.output
