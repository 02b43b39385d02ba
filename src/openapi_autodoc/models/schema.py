"""
Schema descriptor models.

Routes describe their parameter and body types with explicit descriptors: a
named, ordered list of fields, each carrying its kind, location and
validation clause. Pydantic model classes can be adapted with
`SchemaDescriptor.from_model`.
"""

import datetime
import decimal
import enum
import inspect
import types
import typing
import uuid
from collections.abc import Sequence as AbcSequence
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field
from pydantic_core import PydanticUndefined


class FieldKind(str, Enum):
    """Declared kind of a field, mirroring JSON Schema types."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"

    @property
    def is_sequence(self) -> bool:
        return self is FieldKind.ARRAY


class FieldLocation(str, Enum):
    """Where a field travels in the request."""

    BODY = "body"
    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"


class FieldDescriptor(BaseModel):
    """One field of a parameter or body type."""

    name: str = Field(description="Serialized field name")
    kind: FieldKind = Field(default=FieldKind.STRING, description="Declared kind")
    location: Optional[FieldLocation] = Field(
        default=None,
        description="Request location, None for body fields",
    )
    validation: str = Field(
        default="",
        description="Comma-separated validation clauses, e.g. 'required,min=1'",
    )
    description: str = Field(default="", description="Field description")
    example: Any = Field(default=None, description="Example value")
    default: Any = Field(default=None, description="Default value")
    format: Optional[str] = Field(default=None, description="JSON Schema format")
    enum: Optional[list[Any]] = Field(default=None, description="Allowed values")
    items: Optional["FieldDescriptor"] = Field(
        default=None,
        description="Item descriptor for array fields",
    )
    nested: Optional["SchemaDescriptor"] = Field(
        default=None,
        description="Descriptor of a nested object type",
    )

    class Config:
        frozen = True


class SchemaDescriptor(BaseModel):
    """A named type made of ordered fields."""

    name: str = Field(description="Component name of the type")
    description: str = Field(default="", description="Type description")
    fields: list[FieldDescriptor] = Field(default_factory=list)

    class Config:
        frozen = True

    def field(self, name: str) -> Optional[FieldDescriptor]:
        """Get a field by its serialized name."""
        for field in self.fields:
            if field.name == name:
                return field
        return None

    @classmethod
    def from_model(cls, model: type[BaseModel]) -> "SchemaDescriptor":
        """
        Build a descriptor from a pydantic model class.

        Field metadata is read from the field's alias, description and
        default, plus the `validate`, `in`, `example` and `format` keys of
        `json_schema_extra`.

        Args:
            model: The pydantic model class.

        Returns:
            The equivalent descriptor.
        """
        return _describe_model(model, set())


class SchemaConstraint(BaseModel):
    """
    Schema refinements derived from one field's validation clauses.

    At most one length-style and one bound-style value is set per direction.
    """

    required: bool = False
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    min_items: Optional[int] = None
    max_items: Optional[int] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None

    def apply(self, schema: dict[str, Any]) -> dict[str, Any]:
        """Write the constraint keywords onto a property schema."""
        keywords = {
            "minLength": self.min_length,
            "maxLength": self.max_length,
            "minItems": self.min_items,
            "maxItems": self.max_items,
            "minimum": self.minimum,
            "maximum": self.maximum,
        }
        for key, value in keywords.items():
            if value is not None:
                schema[key] = value
        return schema


_SCALAR_KINDS: dict[type, tuple[FieldKind, Optional[str]]] = {
    bool: (FieldKind.BOOLEAN, None),
    int: (FieldKind.INTEGER, None),
    float: (FieldKind.NUMBER, None),
    decimal.Decimal: (FieldKind.NUMBER, None),
    str: (FieldKind.STRING, None),
    bytes: (FieldKind.STRING, "binary"),
    uuid.UUID: (FieldKind.STRING, "uuid"),
    datetime.datetime: (FieldKind.STRING, "date-time"),
    datetime.date: (FieldKind.STRING, "date"),
    datetime.time: (FieldKind.STRING, "time"),
}

_SEQUENCE_ORIGINS = (list, tuple, set, frozenset, AbcSequence)


def _unwrap_optional(annotation: Any) -> Any:
    origin = typing.get_origin(annotation)
    if origin is typing.Annotated:
        return _unwrap_optional(typing.get_args(annotation)[0])
    if origin is typing.Union or origin is types.UnionType:
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return _unwrap_optional(args[0])
    return annotation


def _describe_annotation(
    name: str,
    annotation: Any,
    building: set[type],
) -> FieldDescriptor:
    annotation = _unwrap_optional(annotation)
    origin = typing.get_origin(annotation)

    if origin is typing.Literal:
        values = list(typing.get_args(annotation))
        kind = _SCALAR_KINDS.get(type(values[0]), (FieldKind.STRING, None))[0]
        return FieldDescriptor(name=name, kind=kind, enum=values)

    if origin in _SEQUENCE_ORIGINS or annotation in _SEQUENCE_ORIGINS:
        args = typing.get_args(annotation)
        items = _describe_annotation("items", args[0], building) if args else None
        return FieldDescriptor(name=name, kind=FieldKind.ARRAY, items=items)

    if origin is dict or annotation is dict:
        return FieldDescriptor(name=name, kind=FieldKind.OBJECT)

    if isinstance(annotation, type):
        if issubclass(annotation, enum.Enum):
            values = [member.value for member in annotation]
            kind = _SCALAR_KINDS.get(type(values[0]), (FieldKind.STRING, None))[0] if values else FieldKind.STRING
            return FieldDescriptor(name=name, kind=kind, enum=values)
        if issubclass(annotation, BaseModel):
            return FieldDescriptor(
                name=name,
                kind=FieldKind.OBJECT,
                nested=_describe_model(annotation, building),
            )
        for scalar, (kind, fmt) in _SCALAR_KINDS.items():
            if issubclass(annotation, scalar):
                return FieldDescriptor(name=name, kind=kind, format=fmt)

    return FieldDescriptor(name=name, kind=FieldKind.OBJECT)


def _describe_model(model: type[BaseModel], building: set[type]) -> SchemaDescriptor:
    if model in building:
        # Self-referencing model, the outer descriptor carries the fields
        return SchemaDescriptor(name=model.__name__)

    building = building | {model}
    fields: list[FieldDescriptor] = []

    for field_name, info in model.model_fields.items():
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        base = _describe_annotation(info.alias or field_name, info.annotation, building)

        example = extra.get("example")
        if example is None and info.examples:
            example = info.examples[0]

        default = None
        if info.default is not PydanticUndefined and info.default is not None:
            default = info.default.value if isinstance(info.default, Enum) else info.default

        location = extra.get("in")
        fields.append(
            base.model_copy(
                update={
                    "location": FieldLocation(location) if location else None,
                    "validation": str(extra.get("validate", "")),
                    "description": info.description or "",
                    "example": example,
                    "default": default,
                    "format": extra.get("format", base.format),
                }
            )
        )

    return SchemaDescriptor(
        name=model.__name__,
        description=inspect.cleandoc(model.__doc__) if model.__doc__ else "",
        fields=fields,
    )


FieldDescriptor.model_rebuild()
SchemaDescriptor.model_rebuild()
