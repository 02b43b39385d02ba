"""
Minimal request and response containers for the example service.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class Request:
    path_params: dict[str, str] = field(default_factory=dict)
    query: dict[str, str] = field(default_factory=dict)
    body: Any = None
    user: Optional[str] = None


@dataclass
class Response(Generic[T]):
    body: Optional[T] = None
    status: int = 200
    headers: dict[str, str] = field(default_factory=dict)
