"""Shared fixtures for dashgen tests.

The shop document covers every code path the generator has: CRUD
operations over two paths, path-level parameters, a $ref request body,
an unclassified operation, a path outside /api and a resource without a
model schema.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import pytest
import yaml


_OK = {"200": {"description": "OK"}}


def _json_body(ref: str) -> dict[str, Any]:
    return {"content": {"application/json": {"schema": {"$ref": ref}}}}


SHOP_SPEC: dict[str, Any] = {
    "openapi": "3.0.3",
    "info": {"title": "Shop", "version": "1.2.0"},
    "paths": {
        "/api/widgets": {
            "get": {
                "operationId": "listWidgets",
                "summary": "List all widgets",
                "parameters": [
                    {"name": "page", "in": "query", "schema": {"type": "integer"}},
                ],
                "responses": _OK,
            },
            "post": {
                "operationId": "createWidgets",
                "requestBody": _json_body("#/components/schemas/Widget"),
                "responses": _OK,
            },
        },
        "/api/widgets/{id}": {
            "parameters": [
                {"name": "id", "in": "path", "required": True, "schema": {"type": "integer"}},
            ],
            "get": {"operationId": "retrieveWidget", "responses": _OK},
            "put": {
                "operationId": "updateWidget",
                "requestBody": _json_body("#/components/schemas/Widget"),
                "responses": _OK,
            },
            "delete": {"operationId": "destroyWidget", "responses": _OK},
        },
        "/api/widgets/stats": {
            "get": {"responses": _OK},
        },
        "/health": {
            "get": {"operationId": "health", "responses": _OK},
        },
        "/api/orders": {
            "get": {"operationId": "listOrders", "responses": _OK},
        },
    },
    "components": {
        "schemas": {
            "Widget": {
                "type": "object",
                "required": ["name"],
                "properties": {
                    "id": {"type": "integer"},
                    "name": {"type": "string"},
                    "active": {"type": "boolean"},
                    "tags": {"type": "array", "items": {"type": "string"}},
                    "price": {"type": "number"},
                },
            },
        },
    },
}


@pytest.fixture
def shop_spec() -> dict[str, Any]:
    """A fresh copy of the shop document for each test."""
    return copy.deepcopy(SHOP_SPEC)


@pytest.fixture
def shop_schema_file(tmp_path: Path, shop_spec: dict[str, Any]) -> Path:
    """The shop document written to disk as YAML."""
    path = tmp_path / "schema.yaml"
    path.write_text(yaml.safe_dump(shop_spec, sort_keys=False))
    return path
