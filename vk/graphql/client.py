"""
GraphQL client for the GitHub API.

This module ties the transport, the response classifier and the retry policy
together into ``run_query`` and builds cursor pagination on top of it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar, Union

import aiohttp

from ..config.models import VkConfig
from ..exceptions import InvalidVariablesError, TranscriptError
from ..utils.error_handler import RetryConfig, RetryPolicy
from .models import DEFAULT_ENDPOINT, GraphQLQuery, PageInfo, dump_variables
from .pagination import MAX_PAGES, paginate
from .response import parse_response
from .transcript import TranscriptWriter
from .transport import GraphQLTransport

logger = logging.getLogger(__name__)

Item = TypeVar("Item")


class GraphQLClient:
    """
    Client for the GitHub GraphQL API.

    Requests that fail for infrastructure reasons (network errors, 5xx and
    429 responses, HTML error pages, empty responses) are retried with
    exponential backoff. GraphQL ``errors`` are raised on the first attempt.

    Examples:
        ```python
        async with GraphQLClient(token="ghp_...") as client:
            data = await client.run_query(
                "query Viewer { viewer { login } }", {}
            )
            print(data["viewer"]["login"])
        ```

        Typed pages and pagination:
        ```python
        threads = await client.paginate_all(
            THREADS_QUERY,
            {"owner": "o", "name": "r", "number": 1},
            None,
            lambda page: (page.nodes, page.page_info),
            response_type=ThreadsPage,
        )
        ```
    """

    def __init__(
        self,
        token: str = "",
        endpoint: Optional[str] = None,
        transcript: Optional[Union[str, Path]] = None,
        retry: Optional[RetryConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize GraphQL client.

        Args:
            token: GitHub token, empty for anonymous access
            endpoint: GraphQL endpoint, defaults to api.github.com
            transcript: File receiving one JSON line per exchange; truncated here
            retry: Retry configuration
            session: Externally managed aiohttp session

        Raises:
            TranscriptError: If the transcript file cannot be created
        """
        self.endpoint = endpoint or DEFAULT_ENDPOINT
        self.retry = retry or RetryConfig()
        self._transcript = TranscriptWriter(transcript) if transcript else None
        self._transport = GraphQLTransport(
            endpoint=self.endpoint,
            token=token,
            request_timeout=self.retry.request_timeout,
            transcript=self._transcript,
            session=session,
        )
        self._retry_policy = RetryPolicy(self.retry)

    @property
    def headers(self) -> Dict[str, str]:
        """Headers sent with every request."""
        return dict(self._transport.headers)

    async def __aenter__(self) -> "GraphQLClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    async def close(self) -> None:
        """Close the HTTP session and the transcript."""
        await self._transport.close()
        if self._transcript is not None:
            self._transcript.close()

    async def run_query(
        self,
        query: str,
        variables: Any = None,
        response_type: Optional[Any] = None,
    ) -> Any:
        """
        Execute a GraphQL document, retrying transient failures.

        Args:
            query: GraphQL document
            variables: Variables mapping or pydantic model
            response_type: Type to validate ``data`` against; raw JSON when ``None``

        Returns:
            The ``data`` value of the response

        Raises:
            VkError: The last error once retrying is exhausted or pointless
        """
        request = GraphQLQuery(query, variables)
        payload = request.to_dict()
        operation = request.operation

        async def attempt() -> Any:
            response = await self._transport.execute(operation, payload)
            return parse_response(response, operation, response_type)

        return await self._retry_policy.run(operation, attempt)

    async def fetch_page(
        self,
        query: str,
        cursor: Optional[str],
        variables: Any,
        response_type: Optional[Any] = None,
    ) -> Any:
        """
        Execute a paginated query with ``cursor`` merged into ``variables``.

        An existing ``cursor`` variable is overwritten when ``cursor`` is set.

        Raises:
            InvalidVariablesError: If ``variables`` do not serialize to an object;
                no request is made in that case
        """
        values = dump_variables(variables)
        if not isinstance(values, dict):
            raise InvalidVariablesError("variables for fetch_page must be a JSON object")

        values = dict(values)
        if cursor is not None:
            values["cursor"] = cursor

        return await self.run_query(query, values, response_type)

    async def paginate_all(
        self,
        query: str,
        variables: Any,
        start_cursor: Optional[str],
        mapper: Callable[[Any], Tuple[List[Item], PageInfo]],
        response_type: Optional[Any] = None,
        max_pages: int = MAX_PAGES,
    ) -> List[Item]:
        """
        Fetch and concatenate all pages of a cursor-based connection.

        ``mapper`` extracts the items and page info from each page. Any error
        from a request or from ``mapper`` is raised and the items collected so
        far are discarded.

        Args:
            query: GraphQL document taking a ``$cursor`` variable
            variables: Base variables, must serialize to an object
            start_cursor: Cursor to resume from
            mapper: Function returning ``(items, page_info)`` for a page
            response_type: Type each page is validated against
            max_pages: Maximum number of pages to request

        Returns:
            Items of every page in order
        """

        async def fetch(cursor: Optional[str]) -> Tuple[List[Item], PageInfo]:
            page = await self.fetch_page(query, cursor, variables, response_type)
            return mapper(page)

        return await paginate(fetch, start_cursor, max_pages=max_pages)


def build_graphql_client(
    config: VkConfig, session: Optional[aiohttp.ClientSession] = None
) -> GraphQLClient:
    """
    Create a client from a resolved :class:`~vk.config.VkConfig`.

    When the transcript cannot be created a warning is logged and the client
    runs without one.
    """
    retry = config.retry.to_retry_config()
    try:
        return GraphQLClient(
            token=config.token,
            endpoint=config.endpoint,
            transcript=config.transcript,
            retry=retry,
            session=session,
        )
    except TranscriptError as e:
        logger.warning("%s; continuing without transcript", e)
        return GraphQLClient(
            token=config.token,
            endpoint=config.endpoint,
            retry=retry,
            session=session,
        )
