"""Derive client function names and CRUD buckets from operations.

Pattern: {operationId}{Resource}
  - operationId present -> operationId + capitalized resource
  - operationId missing -> {verb}{LastSegment} + capitalized resource

Bucket is decided by the leading word of the function name:

Examples:
  GET    /api/widgets       listWidgets     -> listWidgetsWidgets       (list)
  GET    /api/widgets/{id}  retrieveWidget  -> retrieveWidgetWidgets    (retrieve)
  POST   /api/widgets       createWidgets   -> createWidgetsWidgets     (create)
  DELETE /api/widgets/{id}  destroyWidget   -> destroyWidgetWidgets     (delete)
  GET    /api/widgets/stats (no id)         -> getStatsWidgets          (unclassified)
"""

from __future__ import annotations

import re
from enum import Enum


class Bucket(str, Enum):
    """Semantic kind of an operation, inferred from its name."""

    LIST = "list"
    RETRIEVE = "retrieve"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    UNCLASSIFIED = "unclassified"


# Evaluated in order; first matching prefix wins
_BUCKET_PREFIXES: tuple[tuple[str, Bucket], ...] = (
    ("list", Bucket.LIST),
    ("retrieve", Bucket.RETRIEVE),
    ("create", Bucket.CREATE),
    ("update", Bucket.UPDATE),
    ("delete", Bucket.DELETE),
    ("destroy", Bucket.DELETE),
)


def capitalize(word: str) -> str:
    """Upper-case the first character, leaving the rest untouched."""
    return word[:1].upper() + word[1:]


def sanitize_identifier(text: str) -> str:
    """Turn an arbitrary string into a camelCase JS identifier.

    Runs of characters that cannot appear in an identifier split words;
    every word after the first is capitalized.
    """
    words = [w for w in re.split(r"[^A-Za-z0-9_$]+", text) if w]
    if not words:
        return "_"
    name = words[0] + "".join(capitalize(w) for w in words[1:])
    if name[0].isdigit():
        name = f"_{name}"
    return name


def build_function_name(
    method: str, path: str, resource: str, operation_id: str | None = None,
) -> str:
    """Build the exported client function name for an operation."""
    if operation_id:
        base = sanitize_identifier(operation_id)
    else:
        last_segment = path.rstrip("/").split("/")[-1]
        base = method.lower() + capitalize(sanitize_identifier(last_segment).lstrip("_"))
    return base + capitalize(sanitize_identifier(resource))


def classify(function_name: str) -> Bucket:
    """Assign a bucket by case-sensitive prefix match."""
    for prefix, bucket in _BUCKET_PREFIXES:
        if function_name.startswith(prefix):
            return bucket
    return Bucket.UNCLASSIFIED
