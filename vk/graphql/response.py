"""
Classification of GraphQL responses.

A 2xx body is turned into either the typed ``data`` value or one of the
response errors from :mod:`vk.exceptions`. Schema mismatches report the JSON
path of the offending value so nested problems can be diagnosed from the
error alone.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from typing import Any, Optional, Sequence, Union

from pydantic import TypeAdapter, ValidationError

from ..exceptions import EmptyResponseError, GraphQLAPIError, ResponseDecodeError
from ..utils.text import BODY_SNIPPET_LEN, VALUE_SNIPPET_LEN, snippet
from .models import GraphQLEnvelope, HttpResponse

logger = logging.getLogger(__name__)


@lru_cache(maxsize=128)
def _adapter(response_type: Any) -> TypeAdapter:
    return TypeAdapter(response_type)


def format_path(loc: Sequence[Union[str, int]]) -> str:
    """Render a validation location as ``a.b[0].c``; the root is ``.``."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        elif path:
            path += f".{part}"
        else:
            path = str(part)
    return path or "."


def _describe(error: ValidationError) -> tuple:
    """Return the message and path of the first validation error."""
    details = error.errors()
    if not details:
        return str(error), "."
    first = details[0]
    return first.get("msg", str(error)), format_path(first.get("loc", ()))


def parse_envelope(response: HttpResponse) -> GraphQLEnvelope:
    """
    Decode the ``{data, errors}`` envelope.

    Raises:
        ResponseDecodeError: If the body is not JSON or not an envelope
    """
    body_snippet = snippet(response.body, BODY_SNIPPET_LEN)
    try:
        raw = json.loads(response.body)
    except ValueError as e:
        raise ResponseDecodeError(response.status, str(e), body_snippet) from e

    try:
        return GraphQLEnvelope.model_validate(raw)
    except ValidationError as e:
        message, path = _describe(e)
        raise ResponseDecodeError(
            response.status, f"{message} at {path}", body_snippet
        ) from e


def pretty_snippet(value: Any) -> str:
    """Pretty-print a JSON value and trim it for error messages."""
    try:
        text = json.dumps(value, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        logger.warning("Failed to serialise error snippet: %s", e)
        return "<failed to serialise error snippet>"
    return snippet(text, VALUE_SNIPPET_LEN)


def parse_response(
    response: HttpResponse,
    operation: str,
    response_type: Optional[Any] = None,
) -> Any:
    """
    Classify a GraphQL response.

    Args:
        response: Status and body of a 2xx exchange
        operation: Operation label for error messages
        response_type: Type to validate ``data`` against; raw JSON when ``None``

    Returns:
        The validated ``data`` value

    Raises:
        ResponseDecodeError: If the envelope or ``data`` has the wrong shape
        GraphQLAPIError: If the envelope reports errors
        EmptyResponseError: If neither ``data`` nor ``errors`` is present
    """
    envelope = parse_envelope(response)

    if envelope.errors:
        raise GraphQLAPIError(error.message for error in envelope.errors)

    if envelope.data is None:
        raise EmptyResponseError(
            response.status, operation, snippet(response.body, BODY_SNIPPET_LEN)
        )

    if response_type is None:
        return envelope.data

    try:
        return _adapter(response_type).validate_python(envelope.data)
    except ValidationError as e:
        message, path = _describe(e)
        raise ResponseDecodeError(
            response.status,
            f"{message} at {path}",
            pretty_snippet(envelope.data),
            path=path,
        ) from e
