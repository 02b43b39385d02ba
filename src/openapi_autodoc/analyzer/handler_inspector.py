"""
Handler inspection.

Resolves everything the documentation of a route handler contributes to its
operation: the handler's identity, its docstring annotations located
through the source cache, and heuristic fallbacks for whatever the
annotations leave unset.
"""

import ast
import logging
from pathlib import Path
from typing import Optional

from openapi_autodoc.analyzer.heuristics import HeuristicResolver, to_kebab
from openapi_autodoc.analyzer.identity import HandlerIdentity, IdentityResolver
from openapi_autodoc.config import Config
from openapi_autodoc.errors import ResolutionError, SourceNotFoundError
from openapi_autodoc.models.handler import HandlerInfo
from openapi_autodoc.models.route import RouteInfo
from openapi_autodoc.parser.annotations import parse_annotation_block
from openapi_autodoc.parser.source_cache import (
    FunctionNode,
    SourceCache,
    iter_package_units,
    locate_function,
    parse_source_file,
)
from openapi_autodoc.parser.status_finder import StatusCodeFinder

logger = logging.getLogger(__name__)


class HandlerInspector:
    """
    Build the HandlerInfo of a route.

    Safe to call from several threads sharing one SourceCache.
    """

    def __init__(
        self,
        cache: Optional[SourceCache] = None,
        config: Optional[Config] = None,
    ) -> None:
        """
        Initialize the inspector.

        Args:
            cache: Source cache scoped to the current build.
            config: Configuration, defaults if None.
        """
        self.cache = cache if cache is not None else SourceCache()
        self.config = config or Config()
        self.identity_resolver = IdentityResolver()
        self.heuristics = HeuristicResolver(
            StatusCodeFinder(self.config.parser.status_fields)
        )

    def inspect(self, route: RouteInfo) -> HandlerInfo:
        """
        Resolve the handler information of a route.

        Args:
            route: The route whose handler is inspected.

        Returns:
            A fresh HandlerInfo with every derivable field set.

        Raises:
            ParseError: If a source unit cannot be parsed.
            SourceNotFoundError: If the source is missing and required.
            MalformedAnnotationError: In strict annotation mode.
        """
        try:
            identity = self.identity_resolver.resolve(route.handler)
        except ResolutionError as e:
            logger.warning("Using defaults for %s: %s", route.identifier, e)
            return self.default_info(route)

        function = self.locate(identity)
        if function is None:
            if self.config.generator.require_source:
                raise SourceNotFoundError(
                    f"No source unit declares handler {identity.full_name}"
                )
            logger.warning(
                "Source for %s not found, documentation derived from its name only",
                identity.full_name,
            )

        doc = (ast.get_docstring(function) or "") if function is not None else ""
        info = parse_annotation_block(doc, strict=self.config.generator.strict_annotations)
        return self.heuristics.apply(info, identity, doc, function)

    def default_info(self, route: RouteInfo) -> HandlerInfo:
        """HandlerInfo for a handler whose name could not be resolved."""
        return HandlerInfo(identifier=to_kebab(f"{route.method.value} {route.path}"))

    def locate(self, identity: HandlerIdentity) -> Optional[FunctionNode]:
        """
        Locate the declaration of a handler.

        The declaring unit is checked first. Otherwise the units of the
        handler's package directory are visited in sorted order, parsing
        and caching each one that is not cached yet.

        Args:
            identity: The handler's identity.

        Returns:
            The function node, or None if no unit declares it.
        """
        name = identity.bare_name

        if identity.source_file is not None and identity.source_file.exists():
            tree = self._find_in_unit(identity.source_file, name)
            if tree is not None:
                return locate_function(tree, name, identity.receiver)

        package_dir = identity.package_dir
        if package_dir is None or not package_dir.is_dir():
            return None

        for unit in iter_package_units(package_dir, self.config.parser):
            if unit == identity.source_file:
                continue
            tree = self._find_in_unit(unit, name)
            if tree is not None:
                logger.debug("Found %s in sibling unit %s", name, unit)
                return locate_function(tree, name, identity.receiver)

        return None

    def _find_in_unit(self, unit: Path, name: str) -> Optional[ast.Module]:
        if unit not in self.cache:
            self.cache.add(unit, parse_source_file(unit, self.config.parser.encoding))
        return self.cache.find_function(name, unit_key=unit)
