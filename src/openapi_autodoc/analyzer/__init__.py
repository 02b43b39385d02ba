"""
Analyzer package for OpenAPI Autodoc.

This package contains modules for:
- Handler identity resolution
- Handler inspection and heuristic fallbacks
- Validation clause to schema constraint mapping
- Route registry management
"""

from openapi_autodoc.analyzer.constraints import SchemaConstraintMapper
from openapi_autodoc.analyzer.handler_inspector import HandlerInspector
from openapi_autodoc.analyzer.heuristics import HeuristicResolver
from openapi_autodoc.analyzer.identity import HandlerIdentity, IdentityResolver
from openapi_autodoc.analyzer.route_registry import RouteRegistry

__all__ = [
    "HandlerIdentity",
    "HandlerInspector",
    "HeuristicResolver",
    "IdentityResolver",
    "RouteRegistry",
    "SchemaConstraintMapper",
]
