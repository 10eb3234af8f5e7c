"""
GraphQL models and data structures.

This module defines the request and response shapes exchanged with the
GitHub GraphQL endpoint.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticSerializationError, to_jsonable_python

from ..exceptions import InvalidVariablesError, MissingCursorError
from ..utils.text import snippet

DEFAULT_ENDPOINT = "https://api.github.com/graphql"

USER_AGENT = "vk"
ACCEPT = "application/vnd.github+json"

# Operation labels fall back to this many characters of the query text
OPERATION_LABEL_LEN = 64

_OPERATION_PREFIXES = ("query", "mutation", "subscription")
_OPERATION_DELIMITERS = frozenset("{( \n\t\r")


def operation_name(query: str) -> Optional[str]:
    """
    Extract the operation name from a GraphQL document.

    The name must follow ``query``, ``mutation`` or ``subscription`` and the
    keyword must be followed by ``{``, ``(`` or whitespace, so ``queryFoo``
    does not count as a named query.

    Returns:
        The operation name, or ``None`` when the document is anonymous
    """
    trimmed = query.lstrip()
    for prefix in _OPERATION_PREFIXES:
        if not trimmed.startswith(prefix):
            continue

        rest = trimmed[len(prefix):]
        if not rest or rest[0] not in _OPERATION_DELIMITERS:
            continue

        rest = rest.lstrip()
        end = 0
        while end < len(rest) and not (rest[end].isspace() or rest[end] in "({"):
            end += 1
        if end:
            return rest[:end]

    return None


def dump_variables(variables: Any) -> Any:
    """
    Convert query variables to plain JSON values.

    Pydantic models are dumped by alias so camelCase field names reach the
    API unchanged.

    Raises:
        InvalidVariablesError: If the variables cannot be serialized
    """
    try:
        return to_jsonable_python(variables, by_alias=True)
    except PydanticSerializationError as e:
        raise InvalidVariablesError(f"serialising variables: {e}") from e


@dataclass(frozen=True)
class GraphQLQuery:
    """GraphQL request ready to be posted."""

    query: str
    variables: Any = field(default_factory=dict)
    operation_name: Optional[str] = field(init=False, default=None)

    def __post_init__(self) -> None:
        object.__setattr__(self, "operation_name", operation_name(self.query))

    @property
    def operation(self) -> str:
        """Label used in logs, errors and transcripts."""
        return self.operation_name or snippet(self.query, OPERATION_LABEL_LEN)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        variables = {} if self.variables is None else dump_variables(self.variables)
        result = {
            "query": self.query,
            "variables": variables,
        }

        if self.operation_name:
            result["operationName"] = self.operation_name

        return result


@dataclass(frozen=True)
class HttpResponse:
    """Status code and raw body of a single HTTP exchange."""

    status: int
    body: str


class PageInfo(BaseModel):
    """Pagination metadata of a GraphQL connection."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    has_next_page: bool = False
    end_cursor: Optional[str] = None

    def next_cursor(self) -> Optional[str]:
        """
        Return the cursor of the next page, or ``None`` on the last page.

        Raises:
            MissingCursorError: If more pages exist but no cursor was sent
        """
        if not self.has_next_page:
            return None
        if self.end_cursor is None:
            raise MissingCursorError()
        return self.end_cursor


class GraphQLErrorEntry(BaseModel):
    """One entry of the ``errors`` array."""

    model_config = ConfigDict(extra="allow")

    message: str


class GraphQLEnvelope(BaseModel):
    """Top-level GraphQL response ``{data, errors}``."""

    model_config = ConfigDict(extra="allow")

    data: Optional[Any] = None
    errors: Optional[List[GraphQLErrorEntry]] = None
