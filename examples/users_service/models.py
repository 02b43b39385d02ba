"""
Request and response types of the users service.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class Role(str, Enum):
    ADMIN = "admin"
    MEMBER = "member"
    GUEST = "guest"


class User(BaseModel):
    """A registered user."""

    id: UUID = Field(description="User identifier", json_schema_extra={"validate": "required"})
    email: str = Field(
        description="Primary email address",
        json_schema_extra={"validate": "required,max=254", "format": "email", "example": "ada@example.com"},
    )
    name: str = Field(
        description="Display name",
        json_schema_extra={"validate": "required,min=1,max=100", "example": "Ada Lovelace"},
    )
    role: Role = Field(default=Role.MEMBER, description="Access role")
    created_at: datetime = Field(alias="createdAt", description="Creation time")


class NewUser(BaseModel):
    """Payload for creating a user."""

    email: str = Field(json_schema_extra={"validate": "required,max=254", "format": "email"})
    name: str = Field(json_schema_extra={"validate": "required,min=1,max=100"})
    role: Role = Role.MEMBER
    groups: list[str] = Field(
        default_factory=list,
        description="Groups the user joins",
        json_schema_extra={"validate": "max=10"},
    )


class UserPatch(BaseModel):
    """Partial update of a user."""

    name: Optional[str] = Field(default=None, json_schema_extra={"validate": "min=1,max=100"})
    role: Optional[Role] = None


class UserList(BaseModel):
    """One page of users."""

    items: list[User] = Field(json_schema_extra={"validate": "required"})
    total: int = Field(json_schema_extra={"validate": "required,min=0"})


class UserPath(BaseModel):
    user_id: UUID = Field(
        alias="userId",
        description="User identifier",
        json_schema_extra={"in": "path"},
    )


class ListUsersQuery(BaseModel):
    limit: int = Field(
        default=20,
        description="Page size",
        json_schema_extra={"in": "query", "validate": "min=1,max=100", "example": 50},
    )
    offset: int = Field(default=0, json_schema_extra={"in": "query", "validate": "min=0"})
    role: Optional[Role] = Field(default=None, json_schema_extra={"in": "query"})
    request_id: Optional[str] = Field(
        default=None,
        alias="X-Request-ID",
        description="Correlation id echoed in error responses",
        json_schema_extra={"in": "header"},
    )
