"""
Component schema generation.

Turns schema descriptors into JSON Schema nodes registered under
`components.schemas`, applying each field's validation clauses through
the constraint mapper.
"""

import logging
from typing import Any, Optional

from openapi_autodoc.analyzer.constraints import SchemaConstraintMapper
from openapi_autodoc.models.schema import (
    FieldDescriptor,
    FieldKind,
    SchemaDescriptor,
)

logger = logging.getLogger(__name__)

SCHEMA_REF_PREFIX = "#/components/schemas/"

VALIDATION_ERROR_SCHEMA = SchemaDescriptor(
    name="ValidationError",
    description="A single request validation failure",
    fields=[
        FieldDescriptor(
            name="parameter",
            validation="required",
            description="Parameter or field that failed validation",
            example="name",
        ),
        FieldDescriptor(
            name="type",
            validation="required",
            description="Where the parameter was located",
            enum=["header", "path", "query", "body", "cookie"],
            example="query",
        ),
        FieldDescriptor(
            name="message",
            validation="required",
            description="Error message describing the validation error",
            example="name is required",
        ),
    ],
)

ERROR_RESPONSE_SCHEMA = SchemaDescriptor(
    name="ErrorResponse",
    description="Error returned for every failed request",
    fields=[
        FieldDescriptor(
            name="timestamp",
            format="date-time",
            validation="required",
            description="Timestamp of the error",
            example="2021-01-01T12:00:00Z",
        ),
        FieldDescriptor(
            name="status",
            kind=FieldKind.INTEGER,
            validation="required",
            description="HTTP status code",
            example=400,
        ),
        FieldDescriptor(
            name="error",
            validation="required",
            description="HTTP error type",
            example="Bad Request",
        ),
        FieldDescriptor(
            name="path",
            validation="required",
            description="Path of the request",
            example="/api/v1/users",
        ),
        FieldDescriptor(
            name="method",
            validation="required",
            description="Method of the request",
            example="GET",
        ),
        FieldDescriptor(
            name="requestId",
            description="Request ID",
            example="123e4567-e89b-12d3-a456-426614174000",
        ),
        FieldDescriptor(
            name="message",
            validation="required",
            description="Error message",
            example="Validation failed",
        ),
        FieldDescriptor(
            name="validationErrors",
            kind=FieldKind.ARRAY,
            description="Validation errors",
            items=FieldDescriptor(
                name="items",
                kind=FieldKind.OBJECT,
                nested=VALIDATION_ERROR_SCHEMA,
            ),
        ),
    ],
)


def schema_ref(name: str) -> dict[str, str]:
    """Reference to a component schema."""
    return {"$ref": f"{SCHEMA_REF_PREFIX}{name}"}


class ComponentSchemas:
    """
    Registry of component schemas for one document.

    Descriptors are keyed by name; the first registration of a name wins.
    """

    def __init__(self, mapper: Optional[SchemaConstraintMapper] = None) -> None:
        """
        Initialize an empty registry.

        Args:
            mapper: Mapper applying validation clauses.
        """
        self.mapper = mapper or SchemaConstraintMapper()
        self.schemas: dict[str, dict[str, Any]] = {}
        self._descriptors: dict[str, SchemaDescriptor] = {}

    def register(self, descriptor: SchemaDescriptor, route: Optional[str] = None) -> dict[str, str]:
        """
        Register a descriptor and return a reference to it.

        Args:
            descriptor: The type to register.
            route: Route identifier used in error messages.

        Returns:
            A `$ref` node.

        Raises:
            SchemaConstraintError: If a field carries a malformed clause.
        """
        existing = self._descriptors.get(descriptor.name)
        if existing is not None:
            if existing != descriptor and existing.fields and descriptor.fields:
                logger.warning(
                    "Schema %s registered twice with different fields, keeping the first",
                    descriptor.name,
                )
            return schema_ref(descriptor.name)

        self._descriptors[descriptor.name] = descriptor
        # Placeholder so self-references resolve to a $ref
        self.schemas[descriptor.name] = {}
        self.schemas[descriptor.name] = self.object_schema(descriptor, route)
        return schema_ref(descriptor.name)

    def register_error_schemas(self) -> None:
        """Register the shared error response schemas."""
        self.register(ERROR_RESPONSE_SCHEMA)

    def object_schema(self, descriptor: SchemaDescriptor, route: Optional[str] = None) -> dict[str, Any]:
        """Build the object schema of a descriptor."""
        schema: dict[str, Any] = {"type": "object"}
        if descriptor.description:
            schema["description"] = descriptor.description

        properties: dict[str, Any] = {}
        schema["properties"] = properties
        for field in descriptor.fields:
            property_schema = self.field_schema(field, route)
            self.mapper.apply(field, property_schema, schema, route)
            properties[field.name] = property_schema

        return schema

    def field_schema(
        self,
        field: FieldDescriptor,
        route: Optional[str] = None,
        annotate: bool = True,
    ) -> dict[str, Any]:
        """
        Build the schema node of one field, without its constraints.

        Args:
            field: The field descriptor.
            route: Route identifier used in error messages.
            annotate: Include description and example in the node.

        Returns:
            The field's schema node.
        """
        if field.kind is FieldKind.OBJECT and field.nested is not None:
            schema: dict[str, Any] = dict(self.register(field.nested, route))
        else:
            schema = {"type": field.kind.value}
            if field.format:
                schema["format"] = field.format
            if field.enum:
                schema["enum"] = list(field.enum)
            if field.kind is FieldKind.ARRAY:
                schema["items"] = self.field_schema(field.items, route) if field.items else {}

        if annotate:
            if field.description:
                schema["description"] = field.description
            if field.example is not None:
                schema["examples"] = [field.example]
        if field.default is not None:
            schema["default"] = field.default

        return schema
