"""
Docstring annotation parser.

Handler docstrings may carry line-oriented annotations:

    @ID get-user
    @Tag Users
    @Summary Fetch one user
    @Description Returns the user with the given id.
    Deleted users are not returned.
    @StatusCode 200
    @Deprecated
    @Error 404 User not found

Tag keywords are case-sensitive. A description block runs from
`@Description` until the next line starting with `@`.
"""

import logging
from http import HTTPStatus

from openapi_autodoc.errors import MalformedAnnotationError
from openapi_autodoc.models.handler import HandlerInfo

logger = logging.getLogger(__name__)

ID_TAG = "@ID"
TAG_TAG = "@Tag"
SUMMARY_TAG = "@Summary"
DESCRIPTION_TAG = "@Description"
STATUS_CODE_TAG = "@StatusCode"
DEPRECATED_TAG = "@Deprecated"
ERROR_TAG = "@Error"

ANNOTATION_PREFIX = "@"


def _reason_phrase(code: int) -> str:
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return ""


def _split_keyword(text: str) -> tuple[str, str]:
    parts = text.split(None, 1)
    if not parts:
        return "", ""
    return parts[0], parts[1].strip() if len(parts) > 1 else ""


def _parse_int(tag: str, value: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise MalformedAnnotationError(tag, value) from e


def parse_annotation_block(doc: str, strict: bool = False) -> HandlerInfo:
    """
    Parse a documentation block into handler information.

    Malformed `@StatusCode` and `@Error` values leave their field unset.

    Args:
        doc: The docstring text. May be empty.
        strict: Raise on malformed values instead of logging a warning.

    Returns:
        HandlerInfo with only the annotated fields set.

    Raises:
        MalformedAnnotationError: In strict mode, for unparsable values.
    """
    info = HandlerInfo()
    description_lines: list[str] = []
    inside_description = False

    for line in doc.strip().splitlines():
        stripped = line.strip()

        if not stripped.startswith(ANNOTATION_PREFIX):
            if inside_description:
                description_lines.append(line)
            continue

        keyword, rest = _split_keyword(stripped)
        inside_description = False

        try:
            if keyword == ID_TAG:
                if rest and not info.identifier:
                    info.identifier = rest.split()[0]
            elif keyword == TAG_TAG:
                info.add_tag(rest)
            elif keyword == SUMMARY_TAG:
                info.summary = rest
            elif keyword == DESCRIPTION_TAG:
                inside_description = True
                if rest:
                    description_lines.append(rest)
            elif keyword == STATUS_CODE_TAG:
                info.status_code = _parse_int(STATUS_CODE_TAG, rest)
            elif keyword == DEPRECATED_TAG:
                info.deprecated = True
            elif keyword == ERROR_TAG:
                code_text, message = _split_keyword(rest)
                code = _parse_int(ERROR_TAG, code_text)
                info.add_error(code, message.strip() or _reason_phrase(code))
        except MalformedAnnotationError as e:
            if strict:
                raise
            logger.warning("Ignoring annotation: %s", e)

    info.description = "\n".join(description_lines).strip()
    return info


def strip_annotations(doc: str, symbol_name: str) -> str:
    """
    Remove every annotation line from a documentation block.

    A leading occurrence of the symbol name is stripped as well.

    Args:
        doc: The docstring text.
        symbol_name: Bare name of the documented function.

    Returns:
        The remaining prose, trimmed.
    """
    lines = [
        line for line in doc.strip().splitlines()
        if not line.strip().startswith(ANNOTATION_PREFIX)
    ]
    text = "\n".join(lines).strip()
    if symbol_name and text.startswith(symbol_name):
        text = text[len(symbol_name):].strip()
    return text
