"""
Route handlers of the users service.
"""

from datetime import datetime, timezone
from uuid import UUID, uuid4

from users_service.models import NewUser, User, UserList, UserPatch
from users_service.web import Request, Response

_USERS: dict[UUID, User] = {}


def list_users(request: Request) -> Response[UserList]:
    """
    @Summary List users
    @Description Returns users ordered by creation time.
    Use limit and offset to page through the results.
    """
    users = sorted(_USERS.values(), key=lambda u: u.created_at)
    limit = int(request.query.get("limit", 20))
    offset = int(request.query.get("offset", 0))
    return Response(body=UserList(items=users[offset:offset + limit], total=len(users)))


def create_user(request: Request) -> Response[User]:
    """
    create_user registers a new account.

    @Tag Users
    @Tag Admin
    @Error 409 A user with this email already exists
    """
    payload: NewUser = request.body
    user = User(
        id=uuid4(),
        email=payload.email,
        name=payload.name,
        role=payload.role,
        createdAt=datetime.now(timezone.utc),
    )
    _USERS[user.id] = user
    return Response(body=user, status=201)


def get_user(request: Request) -> Response[User]:
    """
    @ID fetch-user
    @Error 404
    """
    user = _USERS.get(UUID(request.path_params["userId"]))
    if user is None:
        raise LookupError(request.path_params["userId"])
    return Response(body=user)


def update_user(request: Request) -> Response[User]:
    """
    @Summary Update a user
    @StatusCode 200
    @Error 404 User not found
    """
    user = _USERS[UUID(request.path_params["userId"])]
    patch: UserPatch = request.body
    user = user.model_copy(update=patch.model_dump(exclude_none=True))
    _USERS[user.id] = user
    return Response(body=user)


def delete_user(request: Request) -> Response[None]:
    """
    @Summary Remove a user
    @Deprecated
    """
    _USERS.pop(UUID(request.path_params["userId"]), None)
    return Response()


class UserAdmin:
    """Administrative operations."""

    def reset_password(self, request: Request) -> Response[None]:
        """Sends a password reset link to the user."""
        return Response(status=202)


admin = UserAdmin()
