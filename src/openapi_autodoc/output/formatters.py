"""
Base formatter and formatter registry.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any


class BaseFormatter(ABC):
    """
    Abstract base class for document formatters.

    Subclasses must implement format().
    """

    def __init__(self, indent: int = 2) -> None:
        """
        Initialize the formatter.

        Args:
            indent: Indentation level, where the format has one.
        """
        self.indent = indent

    @abstractmethod
    def format(self, document: dict[str, Any]) -> str:
        """
        Serialize an OpenAPI document.

        Args:
            document: The document as plain data.

        Returns:
            Formatted string representation.
        """
        pass


# Formatter registry
_FORMATTERS: dict[str, type[BaseFormatter]] = {}


def register_formatter(name: str) -> Callable[[type[BaseFormatter]], type[BaseFormatter]]:
    """
    Decorator to register a formatter.

    Args:
        name: The name to register the formatter under.

    Returns:
        Decorator function.
    """
    def decorator(cls: type[BaseFormatter]) -> type[BaseFormatter]:
        _FORMATTERS[name] = cls
        return cls
    return decorator


def available_formatters() -> list[str]:
    """Names of all registered formatters."""
    _load_builtin_formatters()
    return list(_FORMATTERS)


def get_formatter(name: str, **options: Any) -> BaseFormatter:
    """
    Get a formatter instance by name.

    Args:
        name: The formatter name (e.g., "json", "yaml", "html").
        **options: Formatter options such as indent.

    Returns:
        An instance of the requested formatter.

    Raises:
        ValueError: If the formatter name is not recognized.
    """
    _load_builtin_formatters()

    if name not in _FORMATTERS:
        available = ", ".join(_FORMATTERS.keys())
        raise ValueError(f"Unknown formatter: {name}. Available: {available}")

    return _FORMATTERS[name](**options)


def _load_builtin_formatters() -> None:
    # Import formatters to ensure they're registered
    from openapi_autodoc.output import (  # noqa: F401
        html_output,
        json_output,
        yaml_output,
    )
