"""
Exception hierarchy for the vk GitHub client.

Every failure raised by the client derives from :class:`VkError`. Each
subclass stores only the structured fields describing the failure (status
code, operation name, body snippet, JSON path); the human readable message is
produced by ``__str__`` so callers can render or inspect errors as they see
fit.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence


class VkError(Exception):
    """
    Base exception for all vk operations.

    Attributes:
        details: Additional structured context as keyword arguments
    """

    def __init__(self, *args: Any, **details: Any) -> None:
        super().__init__(*args)
        self.details = details

    @property
    def message(self) -> str:
        """Human-readable error message."""
        return str(self)


# Request pipeline errors


class TransportError(VkError):
    """
    Raised when a request cannot be sent or its body cannot be read.

    Covers connection failures, DNS errors and timeouts. The ``context``
    holds a redacted snippet of the request payload.
    """

    def __init__(
        self,
        operation: str,
        context: str,
        cause: Optional[BaseException] = None,
        status: Optional[int] = None,
    ) -> None:
        super().__init__(operation, context)
        self.operation = operation
        self.context = context
        self.cause = cause
        self.status = status

    def __str__(self) -> str:
        where = f"operation {self.operation}; {self.context}"
        if self.status is not None:
            where = f"{where}; status {self.status}"
        return f"request failed when running {where}: {self.cause}"


class HTTPStatusError(VkError):
    """Raised when the server answers with a non-2xx status code."""

    def __init__(self, status: int, operation: str, snippet: str) -> None:
        super().__init__(status, operation, snippet)
        self.status = status
        self.operation = operation
        self.snippet = snippet

    def __str__(self) -> str:
        return (
            f"request failed when running operation {self.operation}: "
            f"HTTP status {self.status} | body snippet: {self.snippet}"
        )


class ResponseDecodeError(VkError):
    """
    Raised when a response body does not match the expected shape.

    Attributes:
        status: HTTP status of the response
        message: Parser or validation error, including the JSON path if known
        snippet: Truncated body or pretty-printed ``data`` value
        path: JSON path of the offending value (``None`` for envelope errors)
    """

    def __init__(
        self,
        status: int,
        message: str,
        snippet: str,
        path: Optional[str] = None,
    ) -> None:
        super().__init__(status, message, snippet)
        self.status = status
        self.detail = message
        self.snippet = snippet
        self.path = path

    def __str__(self) -> str:
        return (
            f"malformed response (status {self.status}): {self.detail} "
            f"| snippet: {self.snippet}"
        )


class GraphQLAPIError(VkError):
    """Raised when the GraphQL envelope carries an ``errors`` array."""

    def __init__(self, messages: Iterable[str]) -> None:
        self.messages: List[str] = list(messages)
        super().__init__(*self.messages)

    def __str__(self) -> str:
        return f"API errors: {', '.join(self.messages)}"


class EmptyResponseError(VkError):
    """Raised when a response has neither ``data`` nor ``errors``."""

    def __init__(self, status: int, operation: str, snippet: str) -> None:
        super().__init__(status, operation, snippet)
        self.status = status
        self.operation = operation
        self.snippet = snippet

    def __str__(self) -> str:
        return (
            f"empty GraphQL response (status {self.status}) for operation "
            f"{self.operation} | body snippet: {self.snippet}"
        )


class MissingCursorError(VkError):
    """Raised when a page reports ``hasNextPage`` without an ``endCursor``."""

    def __str__(self) -> str:
        return "malformed response: hasNextPage=true but endCursor missing"


class PaginationLimitError(VkError):
    """Raised when pagination runs past the page ceiling."""

    def __init__(self, max_pages: int) -> None:
        super().__init__(max_pages)
        self.max_pages = max_pages

    def __str__(self) -> str:
        return f"pagination exceeded max pages {self.max_pages}"


class MalformedResponseError(VkError):
    """Raised when a well-formed response lacks a required node."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"malformed response: {self.detail}"


class InvalidVariablesError(VkError):
    """Raised when query variables cannot be used for a paginated request."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"invalid variables: {self.detail}"


class TranscriptError(VkError):
    """Raised when the transcript file cannot be created."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(path, cause)
        self.path = path
        self.cause = cause

    def __str__(self) -> str:
        return f"cannot open transcript {self.path}: {self.cause}"


class ConfigurationError(VkError):
    """Raised for invalid or unreadable configuration."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"configuration error: {self.detail}"


# Reference and lookup errors


class InvalidReferenceError(VkError):
    """Raised when a pull request or issue reference cannot be parsed."""

    def __init__(self, reference: str) -> None:
        super().__init__(reference)
        self.reference = reference

    def __str__(self) -> str:
        return f"invalid reference: {self.reference!r}"


class WrongResourceTypeError(VkError):
    """Raised when a URL points at a different kind of resource."""

    def __init__(self, expected: Sequence[str], found: str) -> None:
        super().__init__(tuple(expected), found)
        self.expected = tuple(expected)
        self.found = found

    def __str__(self) -> str:
        expected = " or ".join(f"'{segment}'" for segment in self.expected)
        return f"expected URL path segment {expected}, found '{self.found}'"


class RepoNotFoundError(VkError):
    """Raised when no repository is available for a bare number."""

    def __str__(self) -> str:
        return "unable to determine repository"


class NoPrForBranchError(VkError):
    """Raised when no pull request exists for a branch."""

    def __init__(self, branch: str) -> None:
        super().__init__(branch)
        self.branch = branch

    def __str__(self) -> str:
        return f"no pull request found for branch '{self.branch}'"


class CommentNotFoundError(VkError):
    """Raised when a review comment id is absent from a pull request."""

    def __init__(self, comment_id: int) -> None:
        super().__init__(comment_id)
        self.comment_id = comment_id

    def __str__(self) -> str:
        return f"comment {self.comment_id} not found"


class InvalidNumberError(VkError):
    """Raised when a number does not fit GraphQL's 32-bit ``Int``."""

    def __init__(self, number: int) -> None:
        super().__init__(number)
        self.number = number

    def __str__(self) -> str:
        return f"number {self.number} exceeds the GraphQL Int range"
