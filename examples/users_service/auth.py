"""
Authentication for the users service.
"""

from typing import Optional

from openapi_autodoc import AuthHandler, BearerAuthScheme, SessionCookieAuthScheme

from users_service.web import Request


def check_token(request: Request) -> Optional[str]:
    return request.user


bearer_auth = AuthHandler(
    scheme=BearerAuthScheme(name="BearerAuth", format="JWT", description="Access token"),
    handler=check_token,
)

session_auth = AuthHandler(
    scheme=SessionCookieAuthScheme(name="Session", cookie_name="sid"),
    handler=check_token,
)
