"""Render templates and write generated output.

Takes the context from context_builder and writes the API client, type
records, hooks and dashboard pages under the output directory.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import jinja2

from .exceptions import FilesystemError, TemplateError
from .naming import capitalize

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates" / "react"
OUTPUT_DIR = Path("./src")

SUBDIRECTORIES = ("api", "utils", "types", "hooks", "pages")


class TemplateRenderer:
    """Render named templates from one template set.

    A template set is a directory holding the templates listed below.
    Pointing the renderer at another directory with the same names swaps
    the front-end framework without touching classification.

        utils/api.ts.j2           shared HTTP client instance
        api/resource.ts.j2        client callables for one resource
        types/resource.ts.j2      parameter/payload records for one resource
        hooks/resource.ts.j2      query/mutation bindings for one resource
        pages/List.tsx.j2         list view
        pages/Create.tsx.j2       create form
        pages/Edit.tsx.j2         edit form
        pages/Dashboard.tsx.j2    single-page modal CRUD dashboard
        pages/LayoutWithSidebar.tsx.j2  navigation shell
    """

    def __init__(self, template_dir: Path | str | None = None):
        self.template_dir = Path(template_dir or TEMPLATE_DIR)
        self.env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(self.template_dir)),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=jinja2.StrictUndefined,
        )
        self.env.filters["capitalize_first"] = capitalize

    def render(self, name: str, **context: Any) -> str:
        try:
            return self.env.get_template(name).render(**context)
        except jinja2.TemplateError as e:
            raise TemplateError(name, cause=e) from e


def _write(path: Path, content: str, written: list[Path]) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
    except OSError as e:
        raise FilesystemError(str(path), cause=e) from e
    logger.debug("Wrote %s", path)
    written.append(path)


def generate(
    context: dict[str, Any],
    output_dir: Path | str | None = None,
    renderer: TemplateRenderer | None = None,
    dashboard: bool = False,
    toasts: bool = False,
) -> list[Path]:
    """Render every artifact for the context and write it to disk.

    Returns the written paths in emission order.
    """
    out = Path(output_dir or OUTPUT_DIR)
    renderer = renderer or TemplateRenderer()
    written: list[Path] = []

    for sub in SUBDIRECTORIES:
        try:
            (out / sub).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(str(out / sub), cause=e) from e

    _write(out / "utils" / "api.ts", renderer.render("utils/api.ts.j2", **context), written)

    for resource in context["resources"]:
        name = resource["name"]
        _write(
            out / "types" / f"{name}.ts",
            renderer.render("types/resource.ts.j2", resource=resource),
            written,
        )
        _write(
            out / "api" / f"{name}.ts",
            renderer.render("api/resource.ts.j2", resource=resource),
            written,
        )

    for resource in context["resources"]:
        _write(
            out / "hooks" / f"use{resource['capitalized']}.ts",
            renderer.render("hooks/resource.ts.j2", resource=resource, toasts=toasts),
            written,
        )

    pages = out / "pages"
    _write(
        pages / "LayoutWithSidebar.tsx",
        renderer.render("pages/LayoutWithSidebar.tsx.j2", **context),
        written,
    )
    for resource in context["resources"]:
        if not resource["has_pages"]:
            continue
        for page in ("List", "Create", "Edit"):
            _write(
                pages / resource["name"] / f"{page}.tsx",
                renderer.render(f"pages/{page}.tsx.j2", resource=resource),
                written,
            )
        if dashboard:
            _write(
                pages / f"{resource['capitalized']}Dashboard.tsx",
                renderer.render("pages/Dashboard.tsx.j2", resource=resource),
                written,
            )

    return written
