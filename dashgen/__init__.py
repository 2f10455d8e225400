"""Generate React/TypeScript API clients, hooks and CRUD pages from OpenAPI."""

__version__ = "0.1.0"
