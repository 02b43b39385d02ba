"""
OpenAPI Autodoc

Builds an OpenAPI document from the handlers registered with a router. It
reads each handler's docstring annotations from the source tree, falls back
to naming heuristics and an AST scan of the handler body, and maps field
validation clauses onto schema constraints.
"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("openapi-autodoc")
except PackageNotFoundError:
    __version__ = "0.1.0"

from openapi_autodoc.analyzer.route_registry import RouteRegistry
from openapi_autodoc.generator.assembler import (
    SpecificationAssembler,
    generate_documentation,
)
from openapi_autodoc.models.route import HttpMethod, NoBody, RouteInfo
from openapi_autodoc.models.schema import FieldDescriptor, FieldKind, SchemaDescriptor
from openapi_autodoc.models.security import (
    APIKeyAuthScheme,
    AuthHandler,
    BasicAuthScheme,
    BearerAuthScheme,
    SessionCookieAuthScheme,
)

# Public API exports
__all__ = [
    "__version__",
    "APIKeyAuthScheme",
    "AuthHandler",
    "BasicAuthScheme",
    "BearerAuthScheme",
    "FieldDescriptor",
    "FieldKind",
    "HttpMethod",
    "NoBody",
    "RouteInfo",
    "RouteRegistry",
    "SchemaDescriptor",
    "SessionCookieAuthScheme",
    "SpecificationAssembler",
    "generate_documentation",
]
