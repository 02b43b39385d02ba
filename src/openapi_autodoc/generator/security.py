"""
Security scheme generation.

Resolves the security scheme behind a route's auth handler and collects
the schemes of a document under `components.securitySchemes`, one entry
per scheme name.
"""

import logging
from typing import Any, Optional

from openapi_autodoc.models.security import (
    SECURITY_SCHEME_TYPES,
    APIKeyAuthScheme,
    BasicAuthScheme,
    BearerAuthScheme,
    SecurityScheme,
    SessionCookieAuthScheme,
)

logger = logging.getLogger(__name__)


def resolve_security_scheme(auth_handler: Any) -> Optional[SecurityScheme]:
    """
    Get the security scheme of an auth handler.

    Args:
        auth_handler: A scheme, an AuthHandler, or any object exposing a
            `security_scheme` attribute.

    Returns:
        The scheme, or None if the handler does not describe one.
    """
    if isinstance(auth_handler, SECURITY_SCHEME_TYPES):
        return auth_handler
    scheme = getattr(auth_handler, "security_scheme", None)
    if isinstance(scheme, SECURITY_SCHEME_TYPES):
        return scheme
    return None


def security_scheme_to_dict(scheme: SecurityScheme) -> dict[str, Any]:
    """Convert a scheme to its OpenAPI security scheme object."""
    data: dict[str, Any]

    if isinstance(scheme, BasicAuthScheme):
        data = {"type": "http", "scheme": "basic"}
    elif isinstance(scheme, APIKeyAuthScheme):
        data = {"type": "apiKey", "name": scheme.field_name, "in": scheme.location.value}
    elif isinstance(scheme, BearerAuthScheme):
        data = {"type": "http", "scheme": "bearer"}
        if scheme.format:
            data["bearerFormat"] = scheme.format
    elif isinstance(scheme, SessionCookieAuthScheme):
        data = {"type": "apiKey", "name": scheme.effective_cookie_name, "in": "cookie"}
    else:
        raise TypeError(f"Unsupported security scheme: {scheme!r}")

    if scheme.description:
        data["description"] = scheme.description
    return data


class SecuritySchemeRegistry:
    """Security schemes of one document, keyed by scheme name."""

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._schemes: dict[str, SecurityScheme] = {}

    def register(self, scheme: SecurityScheme) -> str:
        """
        Register a scheme, reusing an existing one with the same name.

        Args:
            scheme: The scheme to register.

        Returns:
            The scheme name to reference from security requirements.
        """
        existing = self._schemes.get(scheme.name)
        if existing is None:
            self._schemes[scheme.name] = scheme
        elif existing != scheme:
            logger.warning(
                "Security scheme %s redefined with different settings, keeping the first",
                scheme.name,
            )
        return scheme.name

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Get the `components.securitySchemes` mapping."""
        return {name: security_scheme_to_dict(scheme) for name, scheme in self._schemes.items()}

    def __len__(self) -> int:
        return len(self._schemes)

    def __contains__(self, name: str) -> bool:
        return name in self._schemes
