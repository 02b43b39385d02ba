"""
Route registry for collecting the routes to document.
"""

from collections.abc import Callable
from typing import Any, Iterator, Optional

from openapi_autodoc.models.route import HttpMethod, RouteInfo


class RouteRegistry:
    """
    Ordered collection of routes, filled by the router layer.

    Provides lookups by path, method and authentication.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._routes: list[RouteInfo] = []
        self._by_key: dict[tuple[HttpMethod, str], RouteInfo] = {}
        self._by_path: dict[str, list[RouteInfo]] = {}

    def register(self, route: RouteInfo) -> None:
        """
        Register a route.

        Args:
            route: The route to register.

        Raises:
            ValueError: If the method and path are already registered.
        """
        key = (route.method, route.path)
        if key in self._by_key:
            raise ValueError(f"Route already registered: {route.identifier}")

        self._routes.append(route)
        self._by_key[key] = route

        if route.path not in self._by_path:
            self._by_path[route.path] = []
        self._by_path[route.path].append(route)

    def register_many(self, routes: list[RouteInfo]) -> None:
        """
        Register multiple routes.

        Args:
            routes: List of routes to register.
        """
        for route in routes:
            self.register(route)

    def add(
        self,
        method: str,
        path: str,
        handler: Callable[..., Any] | str,
        **options: Any,
    ) -> RouteInfo:
        """
        Build and register a route.

        Args:
            method: HTTP method.
            path: Path template.
            handler: Handler callable or "module:qualname" identity.
            **options: Remaining RouteInfo fields.

        Returns:
            The registered route.
        """
        route = RouteInfo(method=method, path=path, handler=handler, **options)
        self.register(route)
        return route

    def get_all(self) -> list[RouteInfo]:
        """Get all registered routes in registration order."""
        return list(self._routes)

    def get(self, method: HttpMethod | str, path: str) -> Optional[RouteInfo]:
        """Get the route bound to a method and path."""
        if not isinstance(method, HttpMethod):
            method = HttpMethod(method.upper())
        return self._by_key.get((method, path))

    def get_by_path(self, path: str) -> list[RouteInfo]:
        """
        Get routes by path template.

        Args:
            path: The path template.

        Returns:
            List of routes with the given path.
        """
        return self._by_path.get(path, [])

    def get_by_method(self, method: HttpMethod) -> list[RouteInfo]:
        """
        Get routes by HTTP method.

        Args:
            method: The HTTP method.

        Returns:
            List of routes bound to that method.
        """
        return [r for r in self._routes if r.method == method]

    def get_authenticated(self) -> list[RouteInfo]:
        """Get routes carrying an authentication handler."""
        return [r for r in self._routes if r.is_authenticated]

    def __len__(self) -> int:
        """Return the number of registered routes."""
        return len(self._routes)

    def __iter__(self) -> Iterator[RouteInfo]:
        """Iterate over all routes."""
        return iter(self._routes)

    def __contains__(self, route: RouteInfo) -> bool:
        """Check if a route is registered."""
        return (route.method, route.path) in self._by_key

    @property
    def paths(self) -> set[str]:
        """Get all unique path templates."""
        return set(self._by_path.keys())
