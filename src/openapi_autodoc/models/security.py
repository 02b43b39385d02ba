"""
Security scheme models.

A security scheme is a named, reusable description of an authentication
mechanism. Routes reference schemes through their auth handler.
"""

from collections.abc import Callable
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field


class AuthType(str, Enum):
    """Supported authentication mechanisms."""

    BASIC = "basic"
    API_KEY = "apiKey"
    BEARER = "bearer"
    SESSION_COOKIE = "sessionCookie"


class APIKeyLocation(str, Enum):
    """Where an API key is sent."""

    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"


class BasicAuthScheme(BaseModel):
    """HTTP basic authentication."""

    type: Literal[AuthType.BASIC] = AuthType.BASIC
    name: str = Field(description="Scheme name used in security requirements")
    description: str = Field(default="")

    class Config:
        frozen = True


class APIKeyAuthScheme(BaseModel):
    """API key sent in a header, query parameter or cookie."""

    type: Literal[AuthType.API_KEY] = AuthType.API_KEY
    name: str = Field(description="Scheme name used in security requirements")
    field_name: str = Field(description="Header, query or cookie name carrying the key")
    location: APIKeyLocation = Field(default=APIKeyLocation.HEADER)
    description: str = Field(default="")

    class Config:
        frozen = True


class BearerAuthScheme(BaseModel):
    """HTTP bearer token authentication."""

    type: Literal[AuthType.BEARER] = AuthType.BEARER
    name: str = Field(description="Scheme name used in security requirements")
    format: str = Field(default="", description="Token format hint, e.g. JWT")
    description: str = Field(default="")

    class Config:
        frozen = True


class SessionCookieAuthScheme(BaseModel):
    """Session identifier sent in a cookie."""

    type: Literal[AuthType.SESSION_COOKIE] = AuthType.SESSION_COOKIE
    name: str = Field(description="Scheme name used in security requirements")
    cookie_name: Optional[str] = Field(default=None, description="Cookie name, defaults to name")
    description: str = Field(default="")

    class Config:
        frozen = True

    @property
    def effective_cookie_name(self) -> str:
        return self.cookie_name or self.name


SecurityScheme = Annotated[
    Union[BasicAuthScheme, APIKeyAuthScheme, BearerAuthScheme, SessionCookieAuthScheme],
    Field(discriminator="type"),
]

SECURITY_SCHEME_TYPES = (
    BasicAuthScheme,
    APIKeyAuthScheme,
    BearerAuthScheme,
    SessionCookieAuthScheme,
)


class AuthHandler(BaseModel):
    """Binds a security scheme to the callable that authenticates requests."""

    scheme: SecurityScheme
    handler: Optional[Callable[..., Any]] = Field(
        default=None,
        description="Authentication callable, opaque to the generator",
    )

    class Config:
        frozen = True
        arbitrary_types_allowed = True

    @property
    def security_scheme(self) -> SecurityScheme:
        return self.scheme

    @property
    def name(self) -> str:
        return self.scheme.name
