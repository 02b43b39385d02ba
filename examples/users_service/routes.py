"""
Route table of the users service.

    openapi-autodoc generate --app-dir examples --app users_service.routes:registry \
        --title "Users API" --api-version 1.0.0
"""

from openapi_autodoc import RouteRegistry

from users_service import handlers
from users_service.auth import bearer_auth, session_auth
from users_service.models import ListUsersQuery, NewUser, User, UserList, UserPath, UserPatch

registry = RouteRegistry()

registry.add("GET", "/users", handlers.list_users, params=ListUsersQuery, response_body=UserList)
registry.add(
    "POST",
    "/users",
    handlers.create_user,
    request_body=NewUser,
    response_body=User,
    auth_handler=bearer_auth,
)
registry.add("GET", "/users/{userId}", handlers.get_user, params=UserPath, response_body=User)
registry.add(
    "PATCH",
    "/users/{userId}",
    "users_service.handlers:update_user",
    params=UserPath,
    request_body=UserPatch,
    response_body=User,
    auth_handler=bearer_auth,
)
registry.add("DELETE", "/users/{userId}", handlers.delete_user, params=UserPath, auth_handler=bearer_auth)
registry.add(
    "POST",
    "/users/{userId}/password-reset",
    handlers.admin.reset_password,
    params=UserPath,
    auth_handler=session_auth,
)
