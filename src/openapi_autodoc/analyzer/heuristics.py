"""
Heuristic fallbacks for handler information.

Fills every field the docstring annotations left unset from naming
conventions and, for the status code, from a scan of the handler body.
"""

import logging
import re
from typing import Optional

from openapi_autodoc.analyzer.identity import HandlerIdentity
from openapi_autodoc.models.handler import HandlerInfo
from openapi_autodoc.parser.annotations import strip_annotations
from openapi_autodoc.parser.source_cache import FunctionNode
from openapi_autodoc.parser.status_finder import StatusCodeFinder

logger = logging.getLogger(__name__)

# One match per word, acronyms stay together
_WORD = re.compile(r"[A-Z]+(?![a-z])\d*|[A-Z]?[a-z]+\d*|\d+")


def split_words(name: str) -> list[str]:
    """Split snake_case, kebab-case, camelCase or PascalCase into words."""
    return _WORD.findall(name)


def to_kebab(name: str) -> str:
    """get_user / getUser / GetUser -> get-user"""
    return "-".join(word.lower() for word in split_words(name))


def to_camel(name: str) -> str:
    """get_user / getUser -> GetUser"""
    return "".join(word[:1].upper() + word[1:] for word in split_words(name))


def camel_to_spaced(name: str) -> str:
    """GetUserByID -> Get user by id"""
    words = " ".join(split_words(name)).lower()
    return words[:1].upper() + words[1:]


class HeuristicResolver:
    """Derive unset handler information from names and source."""

    def __init__(self, status_finder: Optional[StatusCodeFinder] = None) -> None:
        """
        Initialize the resolver.

        Args:
            status_finder: Finder used for the status code fallback.
        """
        self.status_finder = status_finder or StatusCodeFinder()

    def apply(
        self,
        info: HandlerInfo,
        identity: HandlerIdentity,
        doc: str = "",
        function: Optional[FunctionNode] = None,
    ) -> HandlerInfo:
        """
        Fill the unset fields of a HandlerInfo in place.

        Args:
            info: Annotation-derived information.
            identity: The handler's resolved identity.
            doc: The raw documentation block.
            function: The handler's function node, if located.

        Returns:
            The same HandlerInfo.
        """
        if not info.identifier:
            info.identifier = to_kebab(identity.bare_name)

        if not info.tags:
            tag = to_camel(identity.package_name)
            if tag:
                info.tags.append(tag)

        if not info.summary:
            info.summary = camel_to_spaced(to_camel(identity.bare_name))

        if not info.description and doc:
            info.description = strip_annotations(doc, identity.bare_name)

        if info.status_code == 0 and function is not None:
            try:
                status = self.status_finder.find(function)
            except RecursionError:
                logger.debug("Status scan of %s exceeded recursion depth", identity.full_name)
                status = None
            if status:
                info.status_code = status

        return info
