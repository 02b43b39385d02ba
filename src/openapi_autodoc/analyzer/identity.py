"""
Handler identity resolution.

Maps a handler reference to a stable qualified name, its module path and
its bare symbol name. A handler reference is either a callable or an
explicit string identity such as "shop.handlers.users:UserHandlers.get_user".
"""

import functools
import importlib.util
import inspect
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from openapi_autodoc.errors import ResolutionError

LOCALS_MARKER = "<locals>"
LAMBDA_NAME = "<lambda>"


@dataclass(frozen=True)
class HandlerIdentity:
    """Resolved identity of a handler."""

    full_name: str
    module: str
    qualname: str
    bare_name: str
    receiver: Optional[str] = None
    source_file: Optional[Path] = None

    @property
    def package_name(self) -> str:
        """Last segment of the package declaring the handler."""
        package = self.module
        if self.source_file is None or self.source_file.name != "__init__.py":
            # Top-level modules stand for their own package
            package = self.module.rpartition(".")[0] or self.module
        return package.rsplit(".", 1)[-1]

    @property
    def package_dir(self) -> Optional[Path]:
        """Directory holding the handler's source unit."""
        return self.source_file.parent if self.source_file else None


def split_full_name(full_name: str) -> tuple[str, str]:
    """
    Split a qualified name into module path and qualname.

    Accepts "module:Qual.name", "module.(Receiver).method" and
    "module.function".

    Args:
        full_name: The qualified name.

    Returns:
        Tuple of (module, qualname).

    Raises:
        ResolutionError: If the name has no module or no symbol part.
    """
    if ":" in full_name:
        module, _, qualname = full_name.partition(":")
    else:
        last_dot = full_name.rfind(".")
        marker = full_name.find("(")
        if marker != -1 and marker < last_dot:
            if marker < 2:
                raise ResolutionError(f"Cannot split qualified name {full_name!r}")
            # Receiver marker: everything before the dot preceding "(" is the module
            module = full_name[:marker - 1]
            close = full_name.find(")", marker)
            receiver = full_name[marker + 1:close].lstrip("*")
            qualname = f"{receiver}.{full_name[last_dot + 1:]}"
        else:
            module, _, qualname = full_name.rpartition(".")

    module = module.strip()
    qualname = qualname.strip()
    if not module or not qualname:
        raise ResolutionError(f"Cannot split qualified name {full_name!r}")
    return module, qualname


def _clean_qualname(qualname: str) -> tuple[str, Optional[str]]:
    """Drop <locals> scopes and return (bare name, receiver)."""
    if LOCALS_MARKER in qualname:
        qualname = qualname.rsplit(f"{LOCALS_MARKER}.", 1)[-1]
    receiver, _, bare_name = qualname.rpartition(".")
    if not bare_name or bare_name == LAMBDA_NAME:
        raise ResolutionError(f"Handler {qualname!r} has no usable name")
    return bare_name, receiver or None


class IdentityResolver:
    """Resolve handler references to qualified names and source locations."""

    def resolve(self, handler: Any) -> HandlerIdentity:
        """
        Resolve a handler reference.

        Args:
            handler: A callable or a "module:qualname" string.

        Returns:
            The handler's identity.

        Raises:
            ResolutionError: If no qualified name can be derived.
        """
        if isinstance(handler, str):
            module, qualname = split_full_name(handler)
            source_file = self._find_module_file(module)
        else:
            target = self._unwrap(handler)
            module = getattr(target, "__module__", None)
            qualname = getattr(target, "__qualname__", None)
            if not module or not qualname:
                raise ResolutionError(f"Cannot resolve a qualified name for {handler!r}")
            source_file = self._find_source_file(target, module)

        bare_name, receiver = _clean_qualname(qualname)
        return HandlerIdentity(
            full_name=f"{module}:{qualname}",
            module=module,
            qualname=qualname,
            bare_name=bare_name,
            receiver=receiver,
            source_file=source_file,
        )

    def _unwrap(self, handler: Any) -> Any:
        while True:
            if isinstance(handler, functools.partial):
                handler = handler.func
            elif inspect.ismethod(handler):
                handler = handler.__func__
            elif hasattr(handler, "__wrapped__"):
                handler = inspect.unwrap(handler)
            else:
                break

        if callable(handler) and not (inspect.isfunction(handler) or inspect.isclass(handler)):
            # Callable instance: document its __call__
            call = getattr(type(handler), "__call__", None)
            if inspect.isfunction(call):
                return call
        return handler

    def _find_source_file(self, target: Any, module: str) -> Optional[Path]:
        try:
            source = inspect.getsourcefile(target)
        except (TypeError, OSError):
            source = None
        if source:
            return Path(source).resolve()

        module_obj = sys.modules.get(module)
        module_file = getattr(module_obj, "__file__", None)
        if module_file and module_file.endswith(".py"):
            return Path(module_file).resolve()
        return self._find_module_file(module)

    def _find_module_file(self, module: str) -> Optional[Path]:
        try:
            spec = importlib.util.find_spec(module)
        except (ImportError, ValueError):
            return None
        if spec is None or not spec.origin or not spec.origin.endswith(".py"):
            return None
        return Path(spec.origin).resolve()
