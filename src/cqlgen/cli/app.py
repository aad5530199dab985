"""Typer CLI application."""

import typer
from enum import Enum
from pathlib import Path
from typing import Optional

from cqlgen.config.settings import get_settings
from cqlgen.config.logging import setup_logging
from cqlgen.errors import WorkloadCompileError
from cqlgen.generation.exporter import compile_workload
from cqlgen.utils.io import (
    dump_workload_json,
    dump_workload_yaml,
    load_exporter_config,
    load_schema_from_json,
)

app = typer.Typer(help="cqlgen: CQL schema to nosqlbench workload generator")


class OutputFormat(str, Enum):
    yaml = "yaml"
    json = "json"


def resolve_target(schema_json: Path, target: Optional[Path], fmt: OutputFormat) -> Path:
    """
    Work out where the workload is written.

    The target defaults to the schema path with the format's suffix. It must
    carry that suffix, and must not already exist unless its file name starts
    with an underscore.

    Raises:
        typer.BadParameter: If the target is unusable
    """
    suffix = f".{fmt.value}"
    if target is None:
        target = schema_json.with_suffix(suffix)
    if target.suffix != suffix:
        raise typer.BadParameter(f"Target file must end in {suffix}: {target}")
    if target.exists() and not target.name.startswith("_"):
        raise typer.BadParameter(
            f"Target file already exists: {target}. "
            f"Remove it, or use a file name starting with '_' to allow overwriting."
        )
    return target


@app.command()
def export(
    schema_json: Path,
    target: Optional[Path] = typer.Argument(None, help="Output workload file"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Exporter configuration YAML"),
    fmt: OutputFormat = typer.Option(OutputFormat.yaml, "--format", "-f", help="Output format"),
):
    """
    Generate a workload from a schema model.

    Args:
        schema_json: Path to the schema model JSON file
        target: Output path for the workload
        config: Exporter configuration YAML (defaults to the configured config_file)
    """
    setup_logging()
    settings = get_settings()

    target = resolve_target(schema_json, target, fmt)
    config_path = config or settings.config_file

    try:
        typer.echo(f"Loading schema from {schema_json}", err=True)
        model = load_schema_from_json(schema_json)

        typer.echo(f"Loading exporter configuration from {config_path}", err=True)
        exporter_config = load_exporter_config(config_path)

        typer.echo("Generating workload...", err=True)
        workload = compile_workload(model, exporter_config)
    except (WorkloadCompileError, FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    text = dump_workload_json(workload) if fmt == OutputFormat.json else dump_workload_yaml(workload)

    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(text, encoding="utf-8")

    typer.echo(f"✓ Complete! Workload written to {target}", err=True)


@app.command("show-model")
def show_model(schema_json: Path):
    """
    Print a schema model as validated JSON.

    Args:
        schema_json: Path to the schema model JSON file
    """
    setup_logging()

    try:
        model = load_schema_from_json(schema_json)
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(model.model_dump_json(indent=2))


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
