"""Build Jinja2 template context from a parsed OpenAPI spec.

Groups every operation under the resource named by its ``/api/<resource>``
path prefix, names and classifies it, derives its parameter and payload
records, and assembles the full context dict for the templates.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from .loader import get_paths
from .naming import Bucket, build_function_name, capitalize, classify, sanitize_identifier
from .schema_parser import find_model_schema, parse_parameters, parse_payload

logger = logging.getLogger(__name__)

_RESOURCE_PATTERN = re.compile(r"^/api/([^/]+)")

_PATH_PARAM_PATTERN = re.compile(r"{([^}]+)}")

# Keys of a path item that are operations, everything else is metadata
_HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

# Methods whose axios call carries a request body
_BODY_METHODS = {"post", "put", "patch"}

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

# Resource names become file and directory names under the output root
_SAFE_FILENAME = re.compile(r'^(?!\.{1,2}$)[^\\:*?"<>|\x00-\x1f]+$')


def resource_for_path(path: str) -> str | None:
    """Return the resource name for an API path, or None if it has none."""
    match = _RESOURCE_PATTERN.match(path)
    return match.group(1) if match else None


def ts_key(name: str) -> str:
    """Render a property name as a TypeScript object key."""
    return name if _IDENTIFIER.match(name) else json.dumps(name)


def ts_access(obj: str, name: str) -> str:
    """Render property access on ``obj`` for a possibly non-identifier name."""
    return f"{obj}.{name}" if _IDENTIFIER.match(name) else f"{obj}[{json.dumps(name)}]"


def url_template(path: str) -> str:
    """Rewrite ``/api/x/{id}`` as the JS template body ``/api/x/${params.id}``."""
    return _PATH_PARAM_PATTERN.sub(
        lambda m: "${" + ts_access("params", m.group(1)) + "}", path,
    )


def _merge_parameters(
    path_level: list[dict[str, Any]], operation_level: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Combine path-item and operation parameters; operation entries win."""
    def key(param: dict[str, Any]) -> tuple[str, str]:
        if "$ref" in param:
            return (param["$ref"], "$ref")
        return (param.get("name", ""), param.get("in", "query"))

    overridden = {key(p) for p in operation_level}
    merged = [p for p in path_level if key(p) not in overridden]
    merged.extend(operation_level)
    return merged


def _deduplicate_function_names(operations: list[dict[str, Any]]) -> None:
    """Ensure all function names are unique by appending the verb if needed.

    The record type prefix is the capitalized name, so ``listFoo`` and
    ``ListFoo`` clash on their types even though the functions differ.
    """
    seen: set[str] = set()
    seen_types: set[str] = set()

    def taken(candidate: str) -> bool:
        return candidate in seen or capitalize(candidate) in seen_types

    for op in operations:
        name = op["name"]
        if taken(name):
            name = f"{name}{capitalize(op['method'])}"
        suffix = 2
        base = name
        while taken(name):
            name = f"{base}{suffix}"
            suffix += 1
        if name != op["name"]:
            logger.warning("Function name %s already used, renamed to %s", op["name"], name)
            op["name"] = name
            op["type_prefix"] = capitalize(name)
        seen.add(name)
        seen_types.add(op["type_prefix"])


def build_operation(
    spec: dict[str, Any],
    resource: str,
    method: str,
    path: str,
    operation: dict[str, Any],
    path_parameters: list[dict[str, Any]],
) -> dict[str, Any]:
    """Build the context entry for one verb on one path."""
    name = build_function_name(method, path, resource, operation.get("operationId"))
    bucket = classify(name)

    parameters = _merge_parameters(path_parameters, operation.get("parameters") or [])
    params = parse_parameters(spec, parameters)
    payload = parse_payload(spec, operation.get("requestBody"))

    path_params = _PATH_PARAM_PATTERN.findall(path)
    declared = {p["name"] for p in params if p["location"] == "path"}
    for missing in path_params:
        if missing not in declared:
            logger.warning("%s %s uses undeclared path parameter %s", method.upper(), path, missing)
            params.append({"name": missing, "type": "string", "location": "path", "required": True})

    for field in params + (payload or []):
        field["key"] = ts_key(field["name"])
        if field["location"] != "body":
            field["access"] = ts_access("params", field["name"])

    id_param = path_params[-1] if path_params else "id"
    type_prefix = capitalize(name)

    return {
        "name": name,
        "operation_id": operation.get("operationId"),
        "summary": " ".join((operation.get("summary") or "").split()),
        "method": method,
        "path": path,
        "url": url_template(path),
        "bucket": bucket.value,
        "params": params,
        "payload": payload,
        "query_params": [p for p in params if p["location"] == "query"],
        "path_params": path_params,
        "id_param": id_param,
        "id_key": ts_key(id_param),
        "has_body": method in _BODY_METHODS,
        "type_prefix": type_prefix,
    }


def _bind_buckets(resource: dict[str, Any]) -> None:
    """Pick the operation each hook binding wraps: first per bucket wins."""
    bindings: dict[str, dict[str, Any]] = {}
    for op in resource["operations"]:
        bucket = op["bucket"]
        if bucket == Bucket.UNCLASSIFIED.value:
            logger.info(
                "%s %s (%s) matches no CRUD prefix; client function only",
                op["method"].upper(), op["path"], op["name"],
            )
            continue
        if bucket in bindings:
            logger.warning(
                "Resource %s has more than one %s operation; hooks use %s, ignoring %s",
                resource["name"], bucket, bindings[bucket]["name"], op["name"],
            )
            continue
        bindings[bucket] = op

    resource["bindings"] = {
        bucket.value: bindings[bucket.value]
        for bucket in Bucket
        if bucket.value in bindings
    }


def build_context(spec: dict[str, Any]) -> dict[str, Any]:
    """Build the full template context from the OpenAPI spec."""
    resources: dict[str, dict[str, Any]] = {}
    operations: list[dict[str, Any]] = []
    skipped_paths: list[str] = []

    for path, path_item in get_paths(spec).items():
        resource_name = resource_for_path(path)
        if resource_name is None:
            logger.warning("Path %s does not match /api/<resource>; skipping", path)
            skipped_paths.append(path)
            continue
        if not _SAFE_FILENAME.match(resource_name):
            logger.warning(
                "Path %s names resource %r, which is not a usable file name; skipping",
                path, resource_name,
            )
            skipped_paths.append(path)
            continue

        if resource_name not in resources:
            resources[resource_name] = {
                "name": resource_name,
                "capitalized": capitalize(sanitize_identifier(resource_name)),
                "var": sanitize_identifier(resource_name),
                "operations": [],
            }

        path_item = path_item or {}
        path_parameters = path_item.get("parameters") or []
        for method, operation in path_item.items():
            if method not in _HTTP_METHODS:
                continue
            op = build_operation(
                spec, resource_name, method, path, operation or {}, path_parameters,
            )
            resources[resource_name]["operations"].append(op)
            operations.append(op)

    _deduplicate_function_names(operations)

    mapping_gaps: list[str] = []
    for resource in resources.values():
        _bind_buckets(resource)
        resource["type_imports"] = [
            f"{op['type_prefix']}{suffix}"
            for op in resource["operations"]
            for suffix, fields in (("Params", op["params"]), ("Payload", op["payload"]))
            if fields
        ]
        model = find_model_schema(spec, resource["name"])
        if model is None:
            logger.warning(
                "No model schema found for resource %s; skipping its pages",
                resource["name"],
            )
            mapping_gaps.append(resource["name"])
            resource["model_name"] = None
            resource["model_fields"] = []
            resource["has_pages"] = False
        else:
            resource["model_name"], resource["model_fields"] = model
            resource["has_pages"] = True

    info = spec.get("info") or {}
    return {
        "resources": list(resources.values()),
        "resource_count": len(resources),
        "operation_count": len(operations),
        "skipped_paths": skipped_paths,
        "mapping_gaps": mapping_gaps,
        "api_title": info.get("title", ""),
        "api_version": info.get("version", "unknown"),
    }
