#!/usr/bin/env python
"""
Main CLI entry point for er2code.
"""

import sys
from pathlib import Path

import click
from loguru import logger
from pydantic import ValidationError
from rich import print as rprint
from rich.console import Console
from rich.table import Table

from er2code import __version__
from er2code.config import (ENVIRONMENTS, AppConfig, CodegenConfig,
                            ConfigurationError, load_config)
from er2code.pipeline import convert
from er2code.schema import (GenerationError, build_entity_name_map,
                            classify_entity, parse_mermaid,
                            serialize_schema_to_json)
from er2code.schema.exporters import RENDERERS
from er2code.utils.logging import er2code_logger, setup_logging

console = Console()


def _codegen_settings(ctx, **overrides) -> CodegenConfig:
    """Configured codegen settings with command-line overrides applied"""
    app_config: AppConfig = ctx.obj["app_config"]
    data = app_config.codegen.model_dump()
    data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return CodegenConfig(**data)
    except ValidationError as e:
        raise click.UsageError(str(e))


@click.group(context_settings={"show_default": True})
@click.version_option(version=__version__, prog_name="er2code")
@click.option(
    "--config", "-c", type=click.Path(exists=True, path_type=Path), help="Configuration file path"
)
@click.option(
    "--env",
    "-e",
    type=click.Choice(list(ENVIRONMENTS)),
    default="development",
    envvar="ER2CODE_ENVIRONMENT",
    help="Environment (dev/prod/test)",
)
@click.option(
    "--verbose", "-v", is_flag=True, help="Enable verbose output and debug logging"
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    help="Custom log file path",
)
@click.pass_context
def cli(ctx, config, env, verbose, log_file):
    """er2code - Mermaid ER diagram to entity code generator"""
    ctx.ensure_object(dict)
    environment = ENVIRONMENTS[env]

    try:
        app_config = load_config(config_path=config, environment=environment, verbose=verbose)
        setup_logging(
            verbose=verbose, log_file=log_file, environment=environment, config_path=config
        )
    except ConfigurationError as e:
        rprint(f"[red]Configuration error: {e}[/red]", file=sys.stderr)
        sys.exit(1)

    ctx.obj["app_config"] = app_config
    ctx.obj["environment"] = environment
    ctx.obj["verbose"] = verbose

    logger.debug(f"er2code CLI started (environment: {environment}, config={config})")


@cli.command()
@click.argument("input_file", type=click.File("r", encoding="utf-8"))
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    help="Write the generated files to this directory (default: codegen.output_dir)",
)
@click.option(
    "--stdout",
    "to_stdout",
    is_flag=True,
    help="Print to stdout even when an output directory is configured",
)
@click.option("--context-name", help="Name of the generated DbContext class")
@click.option("--namespace", help="Namespace declared in the generated files")
@click.option("--target", type=click.Choice(sorted(RENDERERS)), help="Output language")
@click.pass_context
def generate(ctx, input_file, output_dir, to_stdout, context_name, namespace, target):
    """Generate entity classes and mapping configuration from a diagram.

    INPUT_FILE is a Mermaid ER diagram file, or - to read from stdin.
    Without -o the files go to codegen.output_dir when it is configured,
    otherwise both sources are printed to stdout.

    Examples:

        er2code generate schema.mmd

        er2code generate schema.mmd -o src/Data --namespace Shop.Data
    """
    settings = _codegen_settings(
        ctx, context_name=context_name, namespace=namespace, target=target
    )

    try:
        result = convert(input_file.read(), settings)
    except GenerationError as e:
        rprint(f"[red]Generation failed: {e}[/red]", file=sys.stderr)
        sys.exit(1)

    if to_stdout:
        output_dir = None
    elif output_dir is None:
        output_dir = settings.output_dir

    if output_dir is None:
        click.echo(f"// {settings.entities_filename}")
        click.echo(result.entities)
        click.echo(f"// {settings.context_filename}")
        click.echo(result.mapping)
        return

    output_dir.mkdir(parents=True, exist_ok=True)
    entities_path = output_dir / settings.entities_filename
    context_path = output_dir / settings.context_filename
    entities_path.write_text(result.entities, encoding="utf-8")
    context_path.write_text(result.mapping, encoding="utf-8")

    logger.success(
        f"Generated {len(result.schema.entities)} entities: {entities_path}, {context_path}"
    )


@cli.command()
@click.argument("input_file", type=click.File("r", encoding="utf-8"))
@click.option("--json", "as_json", is_flag=True, help="Print the parsed schema as JSON")
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the JSON to a file (implies --json)",
)
def inspect(input_file, as_json, output):
    """Show what the parser extracted from a diagram."""
    schema = parse_mermaid(input_file.read())

    if as_json or output:
        text = serialize_schema_to_json(schema)
        if output:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(text, encoding="utf-8")
            logger.success(f"Schema written to {output}")
        else:
            click.echo(text)
        return

    names = build_entity_name_map(schema)

    entities_table = Table(title=f"Entities ({len(schema.entities)})")
    entities_table.add_column("Entity", style="cyan")
    entities_table.add_column("Class")
    entities_table.add_column("Kind", style="magenta")
    entities_table.add_column("Attributes", justify="right")
    entities_table.add_column("PK")
    entities_table.add_column("FK")
    for entity, class_name in zip(schema.entities, names.class_names):
        entities_table.add_row(
            entity.name,
            class_name,
            classify_entity(schema, entity).value,
            str(len(entity.attributes)),
            ", ".join(a.name for a in entity.primary_keys),
            ", ".join(a.name for a in entity.foreign_keys),
        )
    console.print(entities_table)

    relationships_table = Table(title=f"Relationships ({len(schema.relationships)})")
    relationships_table.add_column("From", style="cyan")
    relationships_table.add_column("Cardinality", justify="center")
    relationships_table.add_column("To", style="cyan")
    relationships_table.add_column("Label")
    for rel in schema.relationships:
        # Undeclared endpoints make `generate` fail
        resolved = rel.from_entity in names and rel.to_entity in names
        relationships_table.add_row(
            rel.from_entity,
            f"{rel.from_cardinality}--{rel.to_cardinality}",
            rel.to_entity,
            rel.label,
            style=None if resolved else "red",
        )
    console.print(relationships_table)

    if not schema.entities:
        rprint("[yellow]No entities found in diagram[/yellow]")
    if not schema.relationships:
        rprint("[yellow]No relationships found in diagram[/yellow]")


@cli.command()
def info() -> None:
    """Display information about the er2code installation."""
    click.echo(f"er2code version: {__version__}")
    click.echo(f"Python version: {sys.version.split()[0]}")
    click.echo(f"Targets: {', '.join(sorted(RENDERERS))}")


@cli.group()
def logs():
    """Logging and diagnostics commands."""
    pass


@logs.command("show")
def show_logs():
    """Show current logging configuration."""
    er2code_logger.show_log_info()


def main() -> None:
    """Point d'entrée principal."""
    try:
        cli()
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
