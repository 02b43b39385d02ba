"""
Parser package for OpenAPI Autodoc.

This package contains modules for:
- Source unit parsing and caching
- Docstring annotation parsing
- Status code inference from handler bodies
"""

from openapi_autodoc.parser.annotations import parse_annotation_block, strip_annotations
from openapi_autodoc.parser.source_cache import (
    SourceCache,
    iter_package_units,
    locate_function,
    parse_source_file,
)
from openapi_autodoc.parser.status_finder import StatusCodeFinder

__all__ = [
    "SourceCache",
    "StatusCodeFinder",
    "iter_package_units",
    "locate_function",
    "parse_annotation_block",
    "parse_source_file",
    "strip_annotations",
]
