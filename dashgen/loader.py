"""Load, parse and validate the OpenAPI schema.

Reads a YAML or JSON document, checks it against the OpenAPI 3.0/3.1
object model and exposes small accessors for paths, schemas and $refs.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from openapi_pydantic import parse_obj
from pydantic import ValidationError

from .exceptions import SchemaLoadError, SchemaReferenceError, SchemaValidationError

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA = Path("./schema.yaml")


def _stringify_keys(node: Any) -> Any:
    """Turn every mapping key into a string, recursively.

    YAML reads unquoted response codes (``200:``) as int keys, while the
    OpenAPI model and JSON pointers only know string keys.
    """
    if isinstance(node, dict):
        return {str(key): _stringify_keys(value) for key, value in node.items()}
    if isinstance(node, list):
        return [_stringify_keys(item) for item in node]
    return node


def load_spec(path: Path | str | None = None) -> dict[str, Any]:
    """Load the OpenAPI document from disk.

    ``.json`` files are parsed as JSON, everything else as YAML (which
    also accepts JSON).
    """
    spec_file = Path(path or DEFAULT_SCHEMA)
    try:
        with open(spec_file, encoding="utf-8") as f:
            if spec_file.suffix.lower() == ".json":
                spec = json.load(f)
            else:
                spec = yaml.safe_load(f)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise SchemaLoadError(str(spec_file), cause=e) from e

    if not isinstance(spec, dict):
        raise SchemaLoadError(
            str(spec_file),
            cause=ValueError(f"expected a mapping at the top level, got {type(spec).__name__}"),
        )
    spec = _stringify_keys(spec)
    logger.debug("Loaded %s (%d paths)", spec_file, len(spec.get("paths") or {}))
    return spec


def validate_spec(spec: dict[str, Any], source: str = "<memory>") -> dict[str, Any]:
    """Validate the document against the OpenAPI object model.

    Returns the raw mapping unchanged so later stages keep working on
    plain dicts in source order.
    """
    try:
        parse_obj(spec)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise SchemaValidationError(source, errors=errors) from e
    except ValueError as e:
        # unsupported or missing "openapi" version
        raise SchemaValidationError(source, errors=[str(e)]) from e
    return spec


def get_paths(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract paths from the spec."""
    return spec.get("paths") or {}


def get_schemas(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract component schemas from the spec."""
    return (spec.get("components") or {}).get("schemas") or {}


def resolve_ref(spec: dict[str, Any], ref: str) -> dict[str, Any]:
    """Resolve a local $ref pointer in the spec."""
    if not ref.startswith("#/"):
        raise SchemaReferenceError(ref)
    node: Any = spec
    for part in ref[2:].split("/"):
        part = part.replace("~1", "/").replace("~0", "~")
        if not isinstance(node, dict) or part not in node:
            raise SchemaReferenceError(ref)
        node = node[part]
    return node
