"""
YAML output formatter.
"""

from typing import Any

import yaml

from openapi_autodoc.output.formatters import BaseFormatter, register_formatter


@register_formatter("yaml")
class YamlFormatter(BaseFormatter):
    """
    Format the document as YAML, keeping the document's key order.
    """

    def format(self, document: dict[str, Any]) -> str:
        """Format a document as YAML."""
        return yaml.safe_dump(
            _plain(document),
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )


def _plain(value: Any) -> Any:
    """Copy a document, replacing values YAML cannot represent with strings."""
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)
