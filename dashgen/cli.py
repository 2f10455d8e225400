"""Command line interface: dashgen [SCHEMA] [OUTPUT]."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape

from .codegen import OUTPUT_DIR, TemplateRenderer, generate
from .context_builder import build_context
from .exceptions import DashgenError
from .loader import DEFAULT_SCHEMA, load_spec, validate_spec

logger = logging.getLogger(__name__)

console = Console()
app = typer.Typer(
    name="dashgen",
    help="Generate React API clients, hooks and CRUD pages from an OpenAPI schema",
    add_completion=False,
)


@app.command()
def main(
    schema: Annotated[
        Path,
        typer.Argument(envvar="DASHGEN_SCHEMA", help="OpenAPI document (YAML or JSON)"),
    ] = DEFAULT_SCHEMA,
    output: Annotated[
        Path,
        typer.Argument(envvar="DASHGEN_OUTPUT", help="Directory to write the front-end sources into"),
    ] = OUTPUT_DIR,
    templates: Annotated[
        Optional[Path],
        typer.Option("--templates", "-t", help="Alternate template set directory"),
    ] = None,
    dashboard: Annotated[
        bool,
        typer.Option("--dashboard", help="Also emit a single-page modal CRUD dashboard per resource"),
    ] = False,
    toasts: Annotated[
        bool,
        typer.Option("--toasts", help="Emit hooks that raise react-toastify notifications"),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Generate front-end scaffolding from an OpenAPI schema.

    Examples:
        dashgen
        dashgen openapi.yaml ./frontend/src
        dashgen api.json ./src --dashboard --toasts
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        spec = validate_spec(load_spec(schema), str(schema))
        context = build_context(spec)
        renderer = TemplateRenderer(templates)
        written = generate(context, output, renderer, dashboard=dashboard, toasts=toasts)
    except DashgenError as e:
        logger.error("%s", e)
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Unexpected error while generating files")
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print(
        f"[green]Generated {len(written)} files for {context['resource_count']} "
        f"resources in {escape(str(output))}[/green]"
    )
    if context["mapping_gaps"]:
        console.print(f"[yellow]No pages for:[/yellow] {escape(', '.join(context['mapping_gaps']))}")
