"""
Status code inference from a handler body.

Finds the first `return` statement that constructs a response and reads the
literal assigned to its status keyword, e.g.

    return Response(body=user, status=201)
    return Response[User](body=user, status_code=HTTPStatus.CREATED)
    return JSONResponse(content, status_code=status.HTTP_202_ACCEPTED)

This is a best-effort heuristic. Computed status expressions are reported
as unresolved rather than guessed.
"""

import ast
import re
from http import HTTPStatus
from typing import Optional, Union

from openapi_autodoc.parser.source_cache import FunctionNode

RESPONSE_MARKER = "Response"

_STARLETTE_CONSTANT = re.compile(r"^HTTP_(\d{3})_[A-Z0-9_]+$")

_STATUS_NAMES = {status.name: status.value for status in HTTPStatus}

_NESTED_SCOPES = (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef, ast.Lambda)


def _callee_name(call: ast.Call) -> str:
    func: ast.expr = call.func
    if isinstance(func, ast.Subscript):
        func = func.value
    if isinstance(func, ast.Name):
        return func.id
    if isinstance(func, ast.Attribute):
        return func.attr
    return ""


def _constant_status(node: ast.expr) -> Optional[int]:
    """Resolve a literal or a recognised named HTTP status constant."""
    if isinstance(node, ast.Constant) and type(node.value) is int:
        return node.value

    if isinstance(node, ast.Attribute):
        owner = node.value
        owner_name = ""
        if isinstance(owner, ast.Name):
            owner_name = owner.id
        elif isinstance(owner, ast.Attribute):
            owner_name = owner.attr

        # HTTPStatus.CREATED, http.HTTPStatus.CREATED
        if owner_name == "HTTPStatus" and node.attr in _STATUS_NAMES:
            return _STATUS_NAMES[node.attr]
        # status.HTTP_201_CREATED
        match = _STARLETTE_CONSTANT.match(node.attr)
        if match:
            return int(match.group(1))

    if isinstance(node, ast.Name):
        match = _STARLETTE_CONSTANT.match(node.id)
        if match:
            return int(match.group(1))

    return None


class StatusCodeFinder:
    """
    Find the status literal of the first response-constructing return.

    Generic over the keyword names treated as the status field.
    """

    def __init__(self, status_fields: Union[list[str], tuple[str, ...]] = ("status", "status_code")) -> None:
        """
        Initialize the finder.

        Args:
            status_fields: Keyword argument names holding the status.
        """
        self.status_fields = tuple(status_fields)

    def find(self, function: Optional[FunctionNode]) -> Optional[int]:
        """
        Scan a function body depth-first.

        Args:
            function: The handler's function node.

        Returns:
            The status code, or None when no qualifying return exists or its
            status is missing or computed.
        """
        if function is None:
            return None

        for statement in function.body:
            found, status = self._visit(statement)
            if found:
                return status
        return None

    def _visit(self, node: ast.AST) -> tuple[bool, Optional[int]]:
        if isinstance(node, _NESTED_SCOPES):
            return False, None

        if isinstance(node, ast.Return) and node.value is not None:
            response = self._response_call(node.value)
            if response is not None:
                return True, self._status_of(response)

        for child in ast.iter_child_nodes(node):
            found, status = self._visit(child)
            if found:
                return found, status
        return False, None

    def _response_call(self, value: ast.expr) -> Optional[ast.Call]:
        candidates = value.elts if isinstance(value, ast.Tuple) else [value]
        for candidate in candidates:
            if isinstance(candidate, ast.Await):
                candidate = candidate.value
            if isinstance(candidate, ast.Call) and RESPONSE_MARKER in _callee_name(candidate):
                return candidate
        return None

    def _status_of(self, call: ast.Call) -> Optional[int]:
        for keyword in call.keywords:
            if keyword.arg in self.status_fields:
                return _constant_status(keyword.value)
        return None
