"""
HTML output formatter.

Renders a standalone API reference page that loads the Scalar viewer and
embeds the document as JSON.
"""

import html
import json
from typing import Any

from openapi_autodoc.output.formatters import BaseFormatter, register_formatter

SCALAR_SCRIPT_URL = "https://cdn.jsdelivr.net/npm/@scalar/api-reference"

_PAGE = """<!doctype html>
<html>
  <head>
    <title>{title}</title>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
  </head>
  <body>
    <script id="api-reference" type="application/json">
{document}
    </script>
    <script src="{script_url}"></script>
  </body>
</html>
"""


@register_formatter("html")
class HtmlFormatter(BaseFormatter):
    """
    Format the document as an interactive HTML reference page.
    """

    def __init__(self, indent: int = 2, script_url: str = SCALAR_SCRIPT_URL) -> None:
        """
        Initialize the HTML formatter.

        Args:
            indent: Indentation of the embedded JSON.
            script_url: URL of the viewer script.
        """
        super().__init__(indent)
        self.script_url = script_url

    def format(self, document: dict[str, Any]) -> str:
        """Format a document as an HTML page."""
        title = document.get("info", {}).get("title", "API Reference")
        payload = json.dumps(
            document,
            indent=self.indent,
            default=str,
            ensure_ascii=False,
            allow_nan=False,
        )
        # A literal "</" would end the script element early
        payload = payload.replace("</", "<\\/")

        return _PAGE.format(
            title=html.escape(str(title)),
            document=payload,
            script_url=html.escape(self.script_url, quote=True),
        )
