"""
Command-line interface for OpenAPI Autodoc.

This module provides the CLI using Click framework for argument parsing
and drives route loading and document generation.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from openapi_autodoc import __version__
from openapi_autodoc.config import Config, find_config_file, load_config

console = Console(stderr=True)


def _setup_logging(verbose: bool) -> None:
    """Route library logs through rich."""
    handler = RichHandler(console=console, show_path=False, markup=False)
    package_logger = logging.getLogger("openapi_autodoc")
    package_logger.handlers = [handler]
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _write_output(text: str, output: Optional[Path]) -> None:
    if output:
        output.write_text(text, encoding="utf-8")
        console.print(f"[green]Documentation written to:[/green] {output}")
    else:
        sys.stdout.write(text)
        if not text.endswith("\n"):
            sys.stdout.write("\n")
        sys.stdout.flush()


@click.group()
@click.version_option(version=__version__, prog_name="openapi-autodoc")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file.",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path]) -> None:
    """OpenAPI Autodoc - Generate OpenAPI documents from route handlers."""
    ctx.ensure_object(dict)
    config_path = config or find_config_file(Path.cwd())
    try:
        ctx.obj["config"] = load_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise click.Abort()


@cli.command()
@click.option(
    "--app",
    "-a",
    "target",
    type=str,
    required=True,
    help="Routes to document, as module:attribute.",
)
@click.option(
    "--app-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Directory to import the application from (default: current directory).",
)
@click.option("--title", "-t", type=str, required=True, help="Document title.")
@click.option("--api-version", type=str, required=True, help="Document version.")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["json", "yaml", "html"]),
    default=None,
    help="Output format (default: from configuration, json).",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Output file path. If not specified, prints to stdout.",
)
@click.option(
    "--workers",
    "-w",
    type=click.IntRange(min=1),
    default=None,
    help="Worker threads used to inspect handlers.",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Fail on malformed annotations and missing handler sources.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
@click.pass_context
def generate(
    ctx: click.Context,
    target: str,
    app_dir: Optional[Path],
    title: str,
    api_version: str,
    output_format: Optional[str],
    output: Optional[Path],
    workers: Optional[int],
    strict: bool,
    verbose: bool,
) -> None:
    """Generate the OpenAPI document of an application's routes."""
    from openapi_autodoc.generator.assembler import SpecificationAssembler
    from openapi_autodoc.loader import RouteLoader

    config: Config = ctx.obj["config"]
    _setup_logging(verbose)

    generator_updates: dict[str, object] = {}
    if workers is not None:
        generator_updates["workers"] = workers
    if strict:
        generator_updates["strict_annotations"] = True
        generator_updates["require_source"] = True
    if generator_updates:
        config = config.model_copy(
            update={"generator": config.generator.model_copy(update=generator_updates)}
        )

    if verbose:
        console.print(f"[blue]Loading routes from:[/blue] {target}")

    try:
        with RouteLoader(target, app_dir) as loader:
            routes = loader.load()
            if verbose:
                console.print(f"[blue]Documenting {len(routes)} routes[/blue]")
            text = SpecificationAssembler(config).generate(title, api_version, routes, output_format)
        _write_output(text, output)
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        if verbose:
            import traceback
            console.print(traceback.format_exc())
        raise click.Abort()


@cli.command("list")
@click.option(
    "--app",
    "-a",
    "target",
    type=str,
    required=True,
    help="Routes to list, as module:attribute.",
)
@click.option(
    "--app-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Directory to import the application from (default: current directory).",
)
@click.pass_context
def list_routes(ctx: click.Context, target: str, app_dir: Optional[Path]) -> None:
    """List the routes of an application with their resolved operations."""
    from openapi_autodoc.generator.assembler import SpecificationAssembler, effective_status
    from openapi_autodoc.loader import RouteLoader

    config: Config = ctx.obj["config"]
    _setup_logging(False)

    try:
        with RouteLoader(target, app_dir) as loader:
            routes = loader.load()
            infos = SpecificationAssembler(config).inspect_routes(routes)
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        raise click.Abort()

    table = Table(title=f"Routes ({len(routes)})")
    table.add_column("Method", style="cyan", no_wrap=True)
    table.add_column("Path", style="green")
    table.add_column("Operation ID")
    table.add_column("Summary")
    table.add_column("Status", justify="right")
    table.add_column("Auth", justify="center")

    for route, info in zip(routes, infos):
        table.add_row(
            route.method.value,
            route.path,
            info.identifier,
            info.summary,
            str(effective_status(route, info)),
            "yes" if route.is_authenticated else "",
        )

    Console().print(table)


def main() -> None:
    """Main entry point for the CLI."""
    cli(obj={})
