"""Extract TypeScript field lists from OpenAPI schemas.

Handles:
- Path, query and header parameters (parameters[].schema.type)
- Parameter $ref into components/parameters
- Request body records via one $ref hop into components/schemas
- Inline object request bodies
- Model lookup for dashboard pages (plural and singular schema names)
"""

from __future__ import annotations

import logging
from typing import Any

from .exceptions import SchemaReferenceError
from .loader import get_schemas, resolve_ref
from .naming import capitalize

logger = logging.getLogger(__name__)

_TS_TYPES: dict[str, str] = {
    "integer": "number",
    "boolean": "boolean",
    "string": "string",
    "array": "any[]",
}


def map_type(schema_type: str | None) -> str:
    """Map an OpenAPI primitive type name to a TypeScript type."""
    return _TS_TYPES.get(schema_type or "", "any")


def _singularize(word: str) -> str:
    """Return the singular form of a resource name."""
    if word.endswith("ies"):
        return word[:-3] + "y"
    if word.endswith("ses"):
        return word[:-2]
    if word.endswith("s") and not word.endswith("ss"):
        return word[:-1]
    return word


def _properties_to_fields(schema: dict[str, Any]) -> list[dict[str, Any]]:
    required = set(schema.get("required") or [])
    return [
        {
            "name": name,
            "type": map_type((prop or {}).get("type")),
            "location": "body",
            "required": name in required,
        }
        for name, prop in (schema.get("properties") or {}).items()
    ]


def parse_parameters(
    spec: dict[str, Any],
    parameters: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Parse declared parameters into field dicts."""
    fields: list[dict[str, Any]] = []
    for param in parameters:
        if "$ref" in param:
            try:
                param = resolve_ref(spec, param["$ref"])
            except SchemaReferenceError:
                logger.warning("Unresolved parameter reference %s, skipping", param["$ref"])
                continue
        schema = param.get("schema") or {}
        location = param.get("in", "query")
        fields.append({
            "name": param["name"],
            "type": map_type(schema.get("type")),
            "location": location,
            "required": location == "path" or bool(param.get("required", False)),
        })
    return fields


def parse_payload(
    spec: dict[str, Any],
    request_body: dict[str, Any] | None,
) -> list[dict[str, Any]] | None:
    """Parse the request body of an operation into field dicts.

    Uses the first declared media type. A ``$ref`` is followed exactly
    once; a schema that is itself another ``$ref`` is not chased further.
    Returns None when there is no usable record (payload typed ``any``).
    """
    if not request_body:
        return None
    if "$ref" in request_body:
        try:
            request_body = resolve_ref(spec, request_body["$ref"])
        except SchemaReferenceError:
            logger.warning("Unresolved request body reference %s", request_body["$ref"])
            return None

    content = request_body.get("content") or {}
    if not content:
        return None
    media = next(iter(content.values())) or {}
    schema = media.get("schema") or {}

    if "$ref" in schema:
        ref = schema["$ref"]
        ref_name = ref.split("/")[-1]
        target = get_schemas(spec).get(ref_name)
        if target is None:
            logger.warning("Request body reference %s not found in components.schemas", ref)
            return None
        if "$ref" in target:
            logger.warning(
                "Request body reference %s points to another $ref (%s); typing payload as any",
                ref, target["$ref"],
            )
            return None
        schema = target

    if "properties" not in schema:
        return None
    return _properties_to_fields(schema)


def find_model_schema(
    spec: dict[str, Any], resource: str,
) -> tuple[str, list[dict[str, Any]]] | None:
    """Find the component schema describing a resource's model.

    Tries ``Widgets`` then ``Widget`` for resource ``widgets``. Returns
    ``(schema_name, fields)`` or None when no usable model exists.
    """
    schemas = get_schemas(spec)
    candidates = [capitalize(resource)]
    singular = capitalize(_singularize(resource))
    if singular not in candidates:
        candidates.append(singular)

    for name in candidates:
        schema = schemas.get(name)
        if schema and "properties" in schema:
            return name, _properties_to_fields(schema)
    return None
