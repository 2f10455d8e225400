"""Exceptions raised by dashgen.

Every fatal failure derives from DashgenError so the CLI can map it to a
non-zero exit with a single except clause.
"""

from __future__ import annotations


class DashgenError(Exception):
    """Base exception for all dashgen errors."""

    def __init__(self, message: str, *args):
        self.message = message
        super().__init__(message, *args)


class SchemaError(DashgenError):
    """Base exception for schema-related errors."""


class SchemaLoadError(SchemaError):
    """The schema file could not be read or parsed.

    Attributes:
        source: The file path that failed to load.
        cause: The underlying exception, if any.
    """

    def __init__(self, source: str, cause: Exception | None = None):
        self.source = source
        self.cause = cause
        message = f"Failed to load schema from '{source}'"
        if cause:
            message += f": {cause}"
        super().__init__(message)


class SchemaValidationError(SchemaError):
    """The document does not conform to the OpenAPI specification.

    Attributes:
        source: The file path of the invalid schema.
        errors: Individual validation error messages.
    """

    def __init__(self, source: str, errors: list[str] | None = None):
        self.source = source
        self.errors = errors or []
        message = f"Schema validation failed for '{source}'"
        if self.errors:
            message += f": {'; '.join(self.errors)}"
        super().__init__(message)


class SchemaReferenceError(SchemaError):
    """A local $ref pointer does not resolve inside the document."""

    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(f"Cannot resolve reference '{reference}'")


class FilesystemError(DashgenError):
    """Writing generated output failed.

    Attributes:
        path: The file or directory being written.
        cause: The underlying OSError.
    """

    def __init__(self, path: str, cause: Exception | None = None):
        self.path = path
        self.cause = cause
        message = f"Failed to write '{path}'"
        if cause:
            message += f": {cause}"
        super().__init__(message)


class TemplateError(DashgenError):
    """A template is missing from the template set or failed to render."""

    def __init__(self, template: str, cause: Exception | None = None):
        self.template = template
        self.cause = cause
        message = f"Failed to render template '{template}'"
        if cause:
            message += f": {cause}"
        super().__init__(message)
