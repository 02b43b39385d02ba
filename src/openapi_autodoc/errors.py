"""
Exception types raised while building an OpenAPI document.

Route-level and build-level errors propagate to the caller, which must not
emit a partial document. Field-level heuristic failures never surface here.
"""

from pathlib import Path
from typing import Optional


class OpenAPIAutodocError(Exception):
    """Base class for all errors raised by openapi-autodoc."""
    pass


class ResolutionError(OpenAPIAutodocError):
    """A handler reference could not be mapped to a qualified name."""
    pass


class ParseError(OpenAPIAutodocError):
    """A source unit could not be parsed."""

    def __init__(self, unit_path: Path, reason: str) -> None:
        self.unit_path = unit_path
        self.reason = reason
        super().__init__(f"Failed to parse source unit {unit_path}: {reason}")


class SourceNotFoundError(OpenAPIAutodocError):
    """No source unit declares the handler and source lookup is mandatory."""
    pass


class MalformedAnnotationError(OpenAPIAutodocError):
    """A recognised annotation tag carried a value that could not be parsed."""

    def __init__(self, tag: str, value: str) -> None:
        self.tag = tag
        self.value = value
        super().__init__(f"Malformed value for {tag}: {value!r}")


class SchemaConstraintError(OpenAPIAutodocError):
    """A validation clause value could not be parsed."""

    def __init__(self, field: str, clause: str, route: Optional[str] = None) -> None:
        self.field = field
        self.clause = clause
        self.route = route
        location = f" on route {route}" if route else ""
        super().__init__(
            f"Malformed validation clause {clause!r} for field {field!r}{location}"
        )


class RouteBuildError(OpenAPIAutodocError):
    """A build-fatal error tied to one route."""

    def __init__(self, route: str, cause: Exception) -> None:
        self.route = route
        self.cause = cause
        super().__init__(f"Failed to generate documentation for route {route}: {cause}")
