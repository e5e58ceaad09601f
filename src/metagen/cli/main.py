"""CLI entry point for metagen.

Invoked as::

    metagen [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m metagen.cli.main

Commands
--------
generate    Translate a meta-model under a config and dump the items
checksum    Print fingerprints of meta-model entities
version     Show version information
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

if TYPE_CHECKING:
    from metagen.config.model import Config
    from metagen.schema.nodes import MetaModel

console = Console()
err_console = Console(stderr=True)

# Exit code for a successful pass that still left config gaps under --strict.
EXIT_DIAGNOSTICS = 2


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_meta_model_or_exit(path: str) -> "MetaModel":
    """Load a meta-model, printing errors and exiting on failure."""
    from metagen.schema import SchemaError, load_meta_model

    try:
        return load_meta_model(Path(path))
    except FileNotFoundError:
        err_console.print(f"[red]Error:[/red] File not found: {path}")
        sys.exit(1)
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {path}: {exc}")
        sys.exit(1)
    except SchemaError as exc:
        err_console.print(f"[red]Invalid meta-model[/red] {path}: {escape(str(exc))}")
        sys.exit(1)


def _load_config_or_exit(path: str) -> "Config":
    """Load a generation config, printing errors and exiting on failure."""
    from metagen.config import ConfigError, load_config

    try:
        return load_config(Path(path))
    except FileNotFoundError:
        err_console.print(f"[red]Error:[/red] File not found: {path}")
        sys.exit(1)
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {path}: {exc}")
        sys.exit(1)
    except ConfigError as exc:
        err_console.print(f"[red]Invalid config[/red] {path}: {escape(str(exc))}")
        sys.exit(1)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="metagen")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Translate a protocol meta-model into type declarations."""
    _configure_logging(verbose)


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from metagen import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]metagen[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# generate command
# ---------------------------------------------------------------------------


@cli.command(name="generate")
@click.argument("meta_model", type=click.Path(exists=False))
@click.option("--config", "config_path", required=True, help="Path to the TOML generation config")
@click.option(
    "--bless",
    is_flag=True,
    default=False,
    help="Print current fingerprints for stale checksum entries",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help=f"Exit with status {EXIT_DIAGNOSTICS} if any config gap is reported",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default="json",
    help="Item dump format",
)
@click.option("--output", "-o", default=None, help="Output file path (defaults to stdout)")
def generate_command(
    meta_model: str,
    config_path: str,
    bless: bool,
    strict: bool,
    output_format: str,
    output: str | None,
) -> None:
    """Translate a meta-model and dump the resulting items.

    META_MODEL is the path to the metaModel.json file.

    Examples:

    \b
        metagen generate metaModel.json --config metagen.toml
        metagen generate metaModel.json --config metagen.toml --format yaml -o items.yaml
    """
    from metagen.target import ItemSerializer
    from metagen.translator import TranslationError, translate_schema

    model = _load_meta_model_or_exit(meta_model)
    config = _load_config_or_exit(config_path)

    try:
        result = translate_schema(model, config)
    except TranslationError as exc:
        err_console.print(f"[red]Translation error:[/red] {escape(str(exc))}", highlight=False)
        sys.exit(1)

    serializer = ItemSerializer()
    if output_format.lower() == "json":
        text = serializer.to_json(result.items, indent=2)
        lang = "json"
    else:
        text = serializer.to_yaml(result.items)
        lang = "yaml"

    if output:
        Path(output).write_text(text, encoding="utf-8")
        console.print(f"[green]Items written to[/green] {output}")
    elif console.is_terminal:
        console.print(Syntax(text, lang))
    else:
        click.echo(text)

    for hint in result.report.toml_hints(bless=bless):
        err_console.print(hint, markup=False, highlight=False)

    err_console.print(f"\n[bold]{result.summary()}[/bold] [dim]({result.report.summary()})[/dim]")

    if strict and result.report.has_diagnostics:
        sys.exit(EXIT_DIAGNOSTICS)


# ---------------------------------------------------------------------------
# checksum command
# ---------------------------------------------------------------------------


@cli.command(name="checksum")
@click.argument("meta_model", type=click.Path(exists=False))
@click.argument("names", nargs=-1)
def checksum_command(meta_model: str, names: tuple[str, ...]) -> None:
    """Print fingerprints of structures and enumerations.

    META_MODEL is the path to the metaModel.json file.  NAMES restricts
    the output to the given entities; by default every structure and
    enumeration is listed.
    """
    from metagen.translator import fingerprint

    model = _load_meta_model_or_exit(meta_model)
    # A structure and an enumeration may share a name; both are listed.
    entities = [
        *(("struct", s) for s in model.structures),
        *(("enum", e) for e in model.enumerations),
    ]

    known = {entity.name for _, entity in entities}
    unknown = [name for name in names if name not in known]
    if unknown:
        err_console.print(f"[red]Error:[/red] Not in the meta-model: {escape(', '.join(unknown))}")
        sys.exit(1)

    table = Table(title=f"Fingerprints: {meta_model}")
    table.add_column("Kind", min_width=6)
    table.add_column("Name")
    table.add_column("Checksum", min_width=8)
    for kind, entity in entities:
        if names and entity.name not in names:
            continue
        table.add_row(kind, entity.name, fingerprint(entity))
    console.print(table)


if __name__ == "__main__":
    cli()
