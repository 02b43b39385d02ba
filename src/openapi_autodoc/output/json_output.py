"""
JSON output formatter.
"""

import json
from typing import Any

from openapi_autodoc.output.formatters import BaseFormatter, register_formatter


@register_formatter("json")
class JsonFormatter(BaseFormatter):
    """
    Format the document as JSON.
    """

    def format(self, document: dict[str, Any]) -> str:
        """Format a document as JSON."""
        return json.dumps(
            document,
            indent=self.indent,
            default=str,
            ensure_ascii=False,
            allow_nan=False,
        )
