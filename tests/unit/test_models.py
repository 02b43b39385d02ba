"""
Unit tests for data models.
"""

from datetime import datetime
from enum import Enum
from typing import Literal, Optional
from uuid import UUID

import pytest
from pydantic import BaseModel, Field, ValidationError

from openapi_autodoc.models.handler import HandlerInfo
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
    SessionCookieAuthScheme,
)


class Color(str, Enum):
    RED = "red"
    BLUE = "blue"


class Address(BaseModel):
    street: str


class Person(BaseModel):
    """A person.

    With a longer description.
    """

    id: UUID
    name: str = Field(
        description="Full name",
        json_schema_extra={"validate": "required,min=1", "example": "Ada"},
    )
    born: Optional[datetime] = Field(default=None, alias="bornAt")
    color: Color = Color.RED
    mode: Literal["a", "b"] = "a"
    scores: list[int] = Field(default_factory=list)
    address: Address
    labels: dict[str, str] = Field(default_factory=dict)
    page: int = Field(default=1, json_schema_extra={"in": "query"})
    friends: list["Person"] = Field(default_factory=list)


class TestHandlerInfo:
    """Tests for the HandlerInfo model."""

    def test_defaults_are_unset(self) -> None:
        """Test that a fresh record has every field unset."""
        info = HandlerInfo()
        assert (info.identifier, info.tags, info.status_code, info.deprecated) == ("", [], 0, False)

    def test_records_are_independent(self) -> None:
        """Test that records do not share mutable state."""
        first, second = HandlerInfo(), HandlerInfo()
        first.add_tag("a")
        first.add_error(404, "Missing")

        assert second.tags == []
        assert second.errors == []

    def test_add_tag_ignores_empty(self) -> None:
        """Test that empty tags are dropped."""
        info = HandlerInfo()
        info.add_tag("")
        assert info.tags == []


class TestRouteInfo:
    """Tests for the RouteInfo model."""

    def test_method_is_normalised(self) -> None:
        """Test that lower-case methods are accepted."""
        route = RouteInfo(method="get", path="/users", handler="app:index")

        assert route.method is HttpMethod.GET
        assert route.identifier == "GET /users"

    def test_invalid_method(self) -> None:
        """Test that unknown methods are rejected."""
        with pytest.raises(ValidationError):
            RouteInfo(method="FETCH", path="/", handler="app:index")

    def test_model_classes_become_descriptors(self) -> None:
        """Test that pydantic model classes are converted."""
        route = RouteInfo(method="POST", path="/", handler="app:index", request_body=Address)

        assert isinstance(route.request_body, SchemaDescriptor)
        assert route.request_body.name == "Address"

    def test_no_body(self) -> None:
        """Test that NoBody means no body."""
        route = RouteInfo(method="DELETE", path="/", handler="app:index", response_body=NoBody)
        assert route.response_body is None

    def test_invalid_body_type(self) -> None:
        """Test that arbitrary objects are rejected as body types."""
        with pytest.raises(ValidationError):
            RouteInfo(method="POST", path="/", handler="app:index", request_body=dict)

    def test_route_is_frozen(self) -> None:
        """Test that routes are immutable."""
        route = RouteInfo(method="GET", path="/", handler="app:index")
        with pytest.raises(ValidationError):
            route.path = "/other"

    def test_is_authenticated(self) -> None:
        """Test the authentication flag."""
        auth = AuthHandler(scheme=BasicAuthScheme(name="Basic"))
        assert RouteInfo(method="GET", path="/", handler="a:b", auth_handler=auth).is_authenticated
        assert not RouteInfo(method="GET", path="/", handler="a:b").is_authenticated


class TestSchemaDescriptorFromModel:
    """Tests for SchemaDescriptor.from_model."""

    @pytest.fixture
    def descriptor(self) -> SchemaDescriptor:
        """Describe the Person model."""
        return SchemaDescriptor.from_model(Person)

    def test_name_and_description(self, descriptor: SchemaDescriptor) -> None:
        """Test the descriptor name and cleaned docstring."""
        assert descriptor.name == "Person"
        assert descriptor.description == "A person.\n\nWith a longer description."

    def test_field_order(self, descriptor: SchemaDescriptor) -> None:
        """Test that fields keep declaration order and use aliases."""
        assert [f.name for f in descriptor.fields] == [
            "id", "name", "bornAt", "color", "mode", "scores", "address", "labels", "page", "friends",
        ]

    def test_scalar_kinds(self, descriptor: SchemaDescriptor) -> None:
        """Test kinds and formats of scalar annotations."""
        assert descriptor.field("id").kind is FieldKind.STRING
        assert descriptor.field("id").format == "uuid"
        assert descriptor.field("bornAt").format == "date-time"
        assert descriptor.field("page").kind is FieldKind.INTEGER

    def test_extra_metadata(self, descriptor: SchemaDescriptor) -> None:
        """Test validation, example, description and location metadata."""
        name = descriptor.field("name")
        assert name.validation == "required,min=1"
        assert name.example == "Ada"
        assert name.description == "Full name"
        assert descriptor.field("page").location is FieldLocation.QUERY
        assert descriptor.field("page").default == 1

    def test_enums(self, descriptor: SchemaDescriptor) -> None:
        """Test Enum and Literal annotations."""
        assert descriptor.field("color").enum == ["red", "blue"]
        assert descriptor.field("color").default == "red"
        assert descriptor.field("mode").enum == ["a", "b"]

    def test_containers(self, descriptor: SchemaDescriptor) -> None:
        """Test list and dict annotations."""
        scores = descriptor.field("scores")
        assert scores.kind is FieldKind.ARRAY
        assert scores.items.kind is FieldKind.INTEGER
        assert descriptor.field("labels").kind is FieldKind.OBJECT

    def test_nested_and_recursive_models(self, descriptor: SchemaDescriptor) -> None:
        """Test nested models and self references."""
        address = descriptor.field("address")
        assert address.kind is FieldKind.OBJECT
        assert address.nested.name == "Address"

        friends = descriptor.field("friends")
        assert friends.items.nested.name == "Person"
        assert friends.items.nested.fields == []


class TestSchemaConstraint:
    """Tests for the SchemaConstraint model."""

    def test_apply_writes_only_set_values(self) -> None:
        """Test that unset bounds are not written."""
        schema = SchemaConstraint(min_length=1).apply({"type": "string"})
        assert schema == {"type": "string", "minLength": 1}


class TestSecurityModels:
    """Tests for security scheme models."""

    def test_auth_handler_exposes_scheme(self) -> None:
        """Test that an auth handler exposes its scheme and name."""
        scheme = APIKeyAuthScheme(name="ApiKey", field_name="X-API-Key", location=APIKeyLocation.QUERY)
        handler = AuthHandler(scheme=scheme, handler=lambda request: True)

        assert handler.security_scheme is scheme
        assert handler.name == "ApiKey"
        assert scheme.type is AuthType.API_KEY

    def test_scheme_from_dict_uses_discriminator(self) -> None:
        """Test that dict input selects the scheme class by type."""
        handler = AuthHandler.model_validate(
            {"scheme": {"type": AuthType.SESSION_COOKIE, "name": "Session"}}
        )

        assert isinstance(handler.scheme, SessionCookieAuthScheme)
        assert handler.scheme.effective_cookie_name == "Session"

    def test_field_descriptor_is_frozen(self) -> None:
        """Test that descriptors are immutable."""
        with pytest.raises(ValidationError):
            FieldDescriptor(name="x").name = "y"
