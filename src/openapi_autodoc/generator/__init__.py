"""
Generator package for OpenAPI Autodoc.

This package assembles OpenAPI documents from routes and the handler
information resolved for them.
"""

from openapi_autodoc.generator.assembler import (
    SpecificationAssembler,
    effective_status,
    generate_documentation,
)
from openapi_autodoc.generator.schemas import ComponentSchemas, schema_ref
from openapi_autodoc.generator.security import (
    SecuritySchemeRegistry,
    resolve_security_scheme,
    security_scheme_to_dict,
)

__all__ = [
    "ComponentSchemas",
    "SecuritySchemeRegistry",
    "SpecificationAssembler",
    "effective_status",
    "generate_documentation",
    "resolve_security_scheme",
    "schema_ref",
    "security_scheme_to_dict",
]
