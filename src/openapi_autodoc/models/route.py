"""
Route data models.

Models representing the routes the router layer hands to the generator.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from openapi_autodoc.models.schema import SchemaDescriptor


class HttpMethod(str, Enum):
    """HTTP methods an operation can be bound to."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    OPTIONS = "OPTIONS"
    HEAD = "HEAD"
    TRACE = "TRACE"


class NoBody(BaseModel):
    """Marker type for a route without a request or response body."""
    pass


def _as_descriptor(value: Any) -> Optional[SchemaDescriptor]:
    if value is None or value is NoBody or isinstance(value, NoBody):
        return None
    if isinstance(value, SchemaDescriptor):
        return value
    if isinstance(value, type) and issubclass(value, BaseModel):
        return SchemaDescriptor.from_model(value)
    raise ValueError(
        f"Expected a SchemaDescriptor or a pydantic model class, got {value!r}"
    )


class RouteInfo(BaseModel):
    """One registered route and the type information needed to document it."""

    method: HttpMethod = Field(description="HTTP method of the route")
    path: str = Field(description="Path template, e.g. /users/{id}")
    handler: Any = Field(description="Handler callable or 'module:qualname' identity")
    request_body: Optional[SchemaDescriptor] = Field(
        default=None,
        description="Request body type, None when the route takes no body",
    )
    params: Optional[SchemaDescriptor] = Field(
        default=None,
        description="Path, query, header and cookie parameters",
    )
    response_body: Optional[SchemaDescriptor] = Field(
        default=None,
        description="Response body type, None when the route returns no body",
    )
    accepts: str = Field(default="application/json", description="Accepted media type")
    produces: str = Field(default="application/json", description="Produced media type")
    auth_handler: Any = Field(default=None, description="Optional authentication handler")

    class Config:
        frozen = True
        arbitrary_types_allowed = True

    @field_validator("method", mode="before")
    @classmethod
    def _normalize_method(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.upper()
        return value

    @field_validator("request_body", "params", "response_body", mode="before")
    @classmethod
    def _normalize_descriptor(cls, value: Any) -> Optional[SchemaDescriptor]:
        return _as_descriptor(value)

    @property
    def identifier(self) -> str:
        """Unique identifier for this route."""
        return f"{self.method.value} {self.path}"

    @property
    def is_authenticated(self) -> bool:
        """Whether the route carries an authentication handler."""
        return self.auth_handler is not None
