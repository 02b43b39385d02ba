"""
Handler information models.

Models describing what the documentation of one handler contributes to its
operation: identifier, tags, summary, description, status and errors.
"""

from pydantic import BaseModel, Field


class CustomError(BaseModel):
    """An additional error response declared with `@Error`."""

    code: int = Field(description="HTTP status code of the error response")
    message: str = Field(default="", description="Description of the error")

    class Config:
        frozen = True


class HandlerInfo(BaseModel):
    """
    Documentation-derived information about one route handler.

    Created fresh for every route. Empty strings, an empty tag list and a
    status code of 0 mean "unset".
    """

    identifier: str = Field(default="", description="Operation identifier")
    tags: list[str] = Field(default_factory=list, description="Ordered set of tags")
    summary: str = Field(default="", description="One-line summary")
    description: str = Field(default="", description="Multi-line description")
    status_code: int = Field(default=0, description="Explicit success status, 0 if unset")
    deprecated: bool = Field(default=False, description="Whether the operation is deprecated")
    errors: list[CustomError] = Field(
        default_factory=list,
        description="Custom (code, message) error responses",
    )

    def add_tag(self, tag: str) -> None:
        """Append a tag unless it is already present."""
        if tag and tag not in self.tags:
            self.tags.append(tag)

    def add_error(self, code: int, message: str) -> None:
        """Append a custom error response."""
        self.errors.append(CustomError(code=code, message=message))
