"""
Data models for OpenAPI Autodoc.

This package contains Pydantic models for representing routes, handler
information, schema descriptors and security schemes.
"""

from openapi_autodoc.models.handler import CustomError, HandlerInfo
from openapi_autodoc.models.route import HttpMethod, NoBody, RouteInfo
from openapi_autodoc.models.schema import (
    FieldDescriptor,
    FieldKind,
    FieldLocation,
    SchemaConstraint,
    SchemaDescriptor,
)
from openapi_autodoc.models.security import (
    APIKeyAuthScheme,
    APIKeyLocation,
    AuthHandler,
    AuthType,
    BasicAuthScheme,
    BearerAuthScheme,
    SecurityScheme,
    SessionCookieAuthScheme,
)

__all__ = [
    # Route models
    "HttpMethod",
    "NoBody",
    "RouteInfo",
    # Handler models
    "CustomError",
    "HandlerInfo",
    # Schema models
    "FieldDescriptor",
    "FieldKind",
    "FieldLocation",
    "SchemaConstraint",
    "SchemaDescriptor",
    # Security models
    "APIKeyAuthScheme",
    "APIKeyLocation",
    "AuthHandler",
    "AuthType",
    "BasicAuthScheme",
    "BearerAuthScheme",
    "SecurityScheme",
    "SessionCookieAuthScheme",
]
