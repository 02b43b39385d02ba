"""
Output package for OpenAPI Autodoc.

This package contains formatters serializing generated documents
(JSON, YAML, HTML).
"""

from openapi_autodoc.output.formatters import (
    BaseFormatter,
    available_formatters,
    get_formatter,
    register_formatter,
)
from openapi_autodoc.output.html_output import HtmlFormatter
from openapi_autodoc.output.json_output import JsonFormatter
from openapi_autodoc.output.yaml_output import YamlFormatter

__all__ = [
    "BaseFormatter",
    "HtmlFormatter",
    "JsonFormatter",
    "YamlFormatter",
    "available_formatters",
    "get_formatter",
    "register_formatter",
]
