"""
Route loading for the command-line interface.

Imports a `module:attribute` reference and turns whatever it names into
an ordered list of routes.
"""

import importlib
import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Optional

from openapi_autodoc.analyzer.route_registry import RouteRegistry
from openapi_autodoc.errors import OpenAPIAutodocError
from openapi_autodoc.models.route import RouteInfo

logger = logging.getLogger(__name__)


class RouteLoaderError(OpenAPIAutodocError):
    """Exception raised when routes cannot be loaded."""
    pass


class RouteLoader:
    """
    Load the routes of an application.

    The target is a `module:attribute` reference. The attribute may be a
    RouteRegistry, an iterable of RouteInfo, an object with a `routes`
    attribute holding one of those, or a zero-argument callable returning
    one of those.

    Used as a context manager, the application directory stays on sys.path
    until the block exits, so handler modules referenced by name can still
    be located after loading.
    """

    def __init__(self, target: str, app_dir: Optional[Path] = None) -> None:
        """
        Initialize the loader.

        Args:
            target: Reference in the form "package.module:attribute".
            app_dir: Directory prepended to sys.path while importing.
        """
        self.target = target
        self.app_dir = app_dir.resolve() if app_dir is not None else Path.cwd()
        self._original_path: list[str] = []
        self._active = False

    def _setup_import_path(self) -> None:
        """Add the application directory to sys.path."""
        self._original_path = sys.path.copy()
        app_dir = str(self.app_dir)
        if app_dir not in sys.path:
            sys.path.insert(0, app_dir)
        importlib.invalidate_caches()

    def _restore_import_path(self) -> None:
        """Restore the original sys.path."""
        sys.path[:] = self._original_path

    def __enter__(self) -> "RouteLoader":
        self._setup_import_path()
        self._active = True
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._active = False
        self._restore_import_path()

    def load(self) -> list[RouteInfo]:
        """
        Import the target and collect its routes.

        Returns:
            Routes in registration order.

        Raises:
            RouteLoaderError: If the target cannot be imported or holds no routes.
        """
        module_name, sep, attribute = self.target.partition(":")
        if not sep or not module_name or not attribute:
            raise RouteLoaderError(
                f"Invalid application reference {self.target!r}, expected 'module:attribute'"
            )

        if not self._active:
            self._setup_import_path()
        try:
            module = importlib.import_module(module_name)
        except Exception as e:
            raise RouteLoaderError(f"Failed to import {module_name}: {e}") from e
        finally:
            if not self._active:
                self._restore_import_path()

        obj: Any = module
        for part in attribute.split("."):
            if not hasattr(obj, part):
                raise RouteLoaderError(f"{module_name} has no attribute {attribute!r}")
            obj = getattr(obj, part)

        routes = _collect_routes(obj)
        if routes is None:
            raise RouteLoaderError(f"{self.target} does not provide routes")

        logger.debug("Loaded %d routes from %s", len(routes), self.target)
        return routes


def _collect_routes(obj: Any, allow_call: bool = True) -> Optional[list[RouteInfo]]:
    if isinstance(obj, RouteRegistry):
        return obj.get_all()
    if isinstance(obj, RouteInfo):
        return [obj]

    routes_attr = getattr(obj, "routes", None)
    if routes_attr is not None and not isinstance(obj, (str, bytes)):
        if callable(routes_attr):
            routes_attr = routes_attr()
        return _collect_routes(routes_attr, allow_call=False)

    if isinstance(obj, Iterable) and not isinstance(obj, (str, bytes, dict)):
        items = list(obj)
        if all(isinstance(item, RouteInfo) for item in items):
            return items
        return None

    if allow_call and callable(obj):
        return _collect_routes(obj(), allow_call=False)

    return None
