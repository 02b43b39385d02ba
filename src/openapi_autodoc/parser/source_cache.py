"""
Source unit cache.

Parses Python source files on demand and indexes the functions and methods
they declare by bare name. One cache lives for one document build and
is shared by every route resolved during that build.
"""

import ast
import fnmatch
import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Optional, Union

from openapi_autodoc.config import ParserConfig
from openapi_autodoc.errors import ParseError

logger = logging.getLogger(__name__)

FunctionNode = Union[ast.FunctionDef, ast.AsyncFunctionDef]


class _ReadWriteLock:
    """Many concurrent readers or a single writer."""

    def __init__(self) -> None:
        self._condition = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        with self._condition:
            while self._writing:
                self._condition.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._condition:
                self._readers -= 1
                if self._readers == 0:
                    self._condition.notify_all()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        with self._condition:
            while self._writing or self._readers:
                self._condition.wait()
            self._writing = True
        try:
            yield
        finally:
            with self._condition:
                self._writing = False
                self._condition.notify_all()


def _declared_functions(body: list[ast.stmt]) -> Iterator[FunctionNode]:
    """Yield module-level functions and methods of (nested) classes."""
    for node in body:
        if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
            yield node
        elif isinstance(node, ast.ClassDef):
            yield from _declared_functions(node.body)


class SourceCache:
    """
    Thread-safe cache of parsed source units.

    Maps each unit key (the resolved file path) to its syntax tree and to
    the set of bare function names it declares. Reads run concurrently,
    adds are exclusive. There is no eviction.
    """

    def __init__(self) -> None:
        """Initialize an empty cache."""
        self._units: dict[Path, ast.Module] = {}
        self._functions: dict[Path, frozenset[str]] = {}
        self._lock = _ReadWriteLock()

    def add(self, unit_key: Path, tree: ast.Module) -> None:
        """
        Register a parsed unit and index its declared functions.

        Adding a key that is already cached is a no-op.

        Args:
            unit_key: Path identifying the unit.
            tree: The parsed module.
        """
        names = frozenset(node.name for node in _declared_functions(tree.body))

        with self._lock.write_locked():
            if unit_key in self._units:
                return
            self._units[unit_key] = tree
            self._functions[unit_key] = names

        logger.debug("Cached %s (%d functions)", unit_key, len(names))

    def find_function(
        self,
        name: str,
        unit_key: Optional[Path] = None,
    ) -> Optional[ast.Module]:
        """
        Find a cached unit declaring a function.

        Args:
            name: Bare function name.
            unit_key: Restrict the lookup to this unit.

        Returns:
            The first indexed unit declaring the name, or None.
        """
        with self._lock.read_locked():
            if unit_key is not None:
                if name in self._functions.get(unit_key, ()):
                    return self._units[unit_key]
                return None

            for key, names in self._functions.items():
                if name in names:
                    return self._units[key]
        return None

    def has_function(self, name: str) -> bool:
        """Check if any cached unit declares a function."""
        return self.find_function(name) is not None

    def functions_in(self, unit_key: Path) -> frozenset[str]:
        """Get the function names indexed for a unit."""
        with self._lock.read_locked():
            return self._functions.get(unit_key, frozenset())

    def __contains__(self, unit_key: Path) -> bool:
        with self._lock.read_locked():
            return unit_key in self._units

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._units)


def parse_source_file(file_path: Path, encoding: str = "utf-8") -> ast.Module:
    """
    Parse a source file.

    Args:
        file_path: Path to the Python file.
        encoding: Encoding used to read the file.

    Returns:
        The parsed module.

    Raises:
        ParseError: If the file cannot be read or has a syntax error.
    """
    try:
        source = file_path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(file_path, str(e)) from e

    try:
        return ast.parse(source, filename=str(file_path))
    except (SyntaxError, ValueError) as e:
        raise ParseError(file_path, str(e)) from e


def _is_generated(file_path: Path, config: ParserConfig) -> bool:
    try:
        with open(file_path, encoding=config.encoding) as f:
            first_line = f.readline()
    except (OSError, UnicodeDecodeError):
        return False
    return any(marker in first_line for marker in config.generated_markers)


def iter_package_units(package_dir: Path, config: ParserConfig) -> Iterator[Path]:
    """
    Yield the source units of a package directory in sorted order.

    Test and generated units are skipped.

    Args:
        package_dir: Directory to scan (not recursive).
        config: Parser configuration.

    Yields:
        Resolved paths of candidate units.
    """
    for file_path in sorted(package_dir.glob("*.py")):
        if any(fnmatch.fnmatch(file_path.name, pattern) for pattern in config.exclude_patterns):
            logger.debug("Skipping excluded unit %s", file_path)
            continue
        if _is_generated(file_path, config):
            logger.debug("Skipping generated unit %s", file_path)
            continue
        yield file_path.resolve()


def locate_function(
    tree: ast.Module,
    name: str,
    receiver: Optional[str] = None,
) -> Optional[FunctionNode]:
    """
    Find a function declaration inside a parsed unit.

    When a receiver (dotted class path) is given, the method of that class
    is preferred; otherwise module-level functions come first. Falls back
    to the first declaration with the bare name.

    Args:
        tree: The parsed module.
        name: Bare function name.
        receiver: Optional dotted class path, e.g. "Outer.Inner".

    Returns:
        The function node, or None if the unit does not declare it.
    """
    if receiver:
        body: Optional[list[ast.stmt]] = tree.body
        for class_name in receiver.split("."):
            class_node = next(
                (n for n in body or [] if isinstance(n, ast.ClassDef) and n.name == class_name),
                None,
            )
            body = class_node.body if class_node else None
            if body is None:
                break
        for node in body or []:
            if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)) and node.name == name:
                return node

    for node in tree.body:
        if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)) and node.name == name:
            return node

    for node in _declared_functions(tree.body):
        if node.name == name:
            return node

    return None
