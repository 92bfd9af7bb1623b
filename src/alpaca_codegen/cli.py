"""CLI entry point for alpaca-codegen."""

import json
import shlex
from pathlib import Path

import click
import yaml

from alpaca_codegen.config import load_config
from alpaca_codegen.errors import CodegenError
from alpaca_codegen.generator.context import dump_payload
from alpaca_codegen.generator.formatter import format_file
from alpaca_codegen.logger import setup_logging
from alpaca_codegen.normalizer.pipeline import normalize_api
from alpaca_codegen.parser.document import load_document
from alpaca_codegen.parser.names import load_canonical_names
from alpaca_codegen.parser.operations import iter_operations


def _dump(payload: dict, fmt: str) -> str:
    if fmt == "yaml":
        return yaml.safe_dump(payload, sort_keys=False, allow_unicode=True)
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


@click.group()
def main():
    """Alpaca codegen: normalize the Alpaca Device API description for code generation."""
    pass


@main.command()
@click.argument("doc_path", required=False, type=click.Path(exists=True, path_type=Path))
@click.option("--names", "names_path", default=None, type=click.Path(exists=True, path_type=Path), help="ASCOM simulators XML docs for canonical method names.")
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output file for the normalized document.")
@click.option("--output-format", default=None, type=click.Choice(["json", "yaml"]), help="Output serialization.")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, path_type=Path), help="YAML configuration file.")
@click.option("--merge-duplicates", is_flag=True, help="Fold repeated schema shapes into their first occurrence.")
@click.option("-v", "--verbose", is_flag=True, help="Log every pipeline stage.")
def normalize(doc_path: Path | None, names_path: Path | None, output: Path | None, output_format: str | None, config_path: Path | None, merge_duplicates: bool, verbose: bool):
    """Classify, strip, canonicalize and deduplicate an API description."""
    try:
        config = load_config(config_path)
        doc_path = doc_path or config.api_path
        names_path = names_path or config.names_path
        output = output or config.output_path
        output_format = output_format or config.output_format
        setup_logging(verbose or config.verbose)

        click.echo(f"Parsing {doc_path}...")
        document = load_document(doc_path)
        names = None
        if names_path:
            click.echo(f"Reading canonical names from {names_path}...")
            names = load_canonical_names(names_path)

        result = normalize_api(document, names, merge_duplicates=merge_duplicates or config.merge_duplicates)
    except (CodegenError, OSError) as e:
        raise click.ClickException(str(e)) from e

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(_dump(dump_payload(result), output_format), encoding="utf-8")
    click.echo(f"Normalized {len(result.schemas)} schemas ({len(result.ref_replacements)} replaced), saved to {output}")
    if result.duplicates:
        click.echo(f"Warning: {len(result.duplicates)} schema shapes are declared more than once.")


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.option("--names", "names_path", required=True, type=click.Path(exists=True, path_type=Path), help="ASCOM simulators XML docs.")
def names(doc_path: Path, names_path: Path):
    """Print the canonical method name of every operation."""
    try:
        document = load_document(doc_path)
        canonical = load_canonical_names(names_path)
        for op in iter_operations(document):
            click.echo(f"{op.method.value.upper()} {op.path} -> {canonical.resolve_path(op.path)}")
    except CodegenError as e:
        raise click.ClickException(str(e)) from e


@main.command(name="format")
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--cmd", "command", default=None, help="Formatter command line (default from config).")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, path_type=Path), help="YAML configuration file.")
def format_(file_path: Path, command: str | None, config_path: Path | None):
    """Run the external source formatter on a generated file in place."""
    try:
        argv = shlex.split(command) if command else load_config(config_path).formatter
        format_file(file_path, argv)
    except CodegenError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"Formatted {file_path}")
