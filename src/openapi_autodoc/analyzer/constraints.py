"""
Validation clause to schema constraint mapping.

A field's validation expression is a comma-separated list of clauses such
as "required,min=2,max=10". `min` and `max` constrain the length of
strings, the item count of arrays and the numeric bounds of everything else.
"""

import logging
import math
from typing import Any, Optional

from openapi_autodoc.errors import SchemaConstraintError
from openapi_autodoc.models.schema import FieldDescriptor, FieldKind, SchemaConstraint

logger = logging.getLogger(__name__)

REQUIRED_CLAUSE = "required"
MIN_CLAUSE = "min"
MAX_CLAUSE = "max"


class SchemaConstraintMapper:
    """Translate validation clauses into schema constraints."""

    def map(
        self,
        field: FieldDescriptor,
        route: Optional[str] = None,
    ) -> SchemaConstraint:
        """
        Compute the constraint for one field.

        Args:
            field: The field descriptor.
            route: Route identifier used in error messages.

        Returns:
            The field's schema constraint.

        Raises:
            SchemaConstraintError: If a min/max value cannot be parsed.
        """
        constraint = SchemaConstraint()

        for clause in field.validation.split(","):
            clause = clause.strip()
            if not clause:
                continue

            key, sep, value = clause.partition("=")
            key = key.strip()

            if key == REQUIRED_CLAUSE and not sep:
                constraint.required = True
            elif key in (MIN_CLAUSE, MAX_CLAUSE) and sep:
                self._apply_bound(constraint, field, key, value.strip(), clause, route)
            else:
                logger.debug("Ignoring validation clause %r on field %s", clause, field.name)

        return constraint

    def _apply_bound(
        self,
        constraint: SchemaConstraint,
        field: FieldDescriptor,
        key: str,
        value: str,
        clause: str,
        route: Optional[str],
    ) -> None:
        is_min = key == MIN_CLAUSE

        if field.kind is FieldKind.STRING:
            count = self._parse_int(value, field, clause, route)
            if is_min:
                constraint.min_length = count
            else:
                constraint.max_length = count
        elif field.kind.is_sequence:
            count = self._parse_int(value, field, clause, route)
            if is_min:
                constraint.min_items = count
            else:
                constraint.max_items = count
        else:
            bound = self._parse_float(value, field, clause, route)
            if is_min:
                constraint.minimum = bound
            else:
                constraint.maximum = bound

    def _parse_int(self, value: str, field: FieldDescriptor, clause: str, route: Optional[str]) -> int:
        try:
            return int(value)
        except ValueError as e:
            raise SchemaConstraintError(field.name, clause, route) from e

    def _parse_float(self, value: str, field: FieldDescriptor, clause: str, route: Optional[str]) -> float:
        try:
            bound = float(value)
        except ValueError as e:
            raise SchemaConstraintError(field.name, clause, route) from e
        if not math.isfinite(bound):
            raise SchemaConstraintError(field.name, clause, route)
        return bound

    def apply(
        self,
        field: FieldDescriptor,
        property_schema: dict[str, Any],
        parent_schema: Optional[dict[str, Any]] = None,
        route: Optional[str] = None,
    ) -> SchemaConstraint:
        """
        Apply a field's constraint to its schema nodes.

        `required` appends the field name to the parent's required list;
        bounds are written onto the property schema.

        Args:
            field: The field descriptor.
            property_schema: The field's own schema node.
            parent_schema: The enclosing object schema, if any.
            route: Route identifier used in error messages.

        Returns:
            The computed constraint.
        """
        constraint = self.map(field, route)
        constraint.apply(property_schema)

        if constraint.required and parent_schema is not None:
            required = parent_schema.setdefault("required", [])
            if field.name not in required:
                required.append(field.name)

        return constraint
