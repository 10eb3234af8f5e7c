"""
Shared test fixtures and configuration for the vk test suite.
"""

import tempfile
from pathlib import Path
from typing import Any, AsyncGenerator, Dict, Generator, List, Optional

import pytest
from aioresponses import CallbackResult, aioresponses
from yarl import URL

from vk.github.models import RepoInfo
from vk.graphql.client import GraphQLClient
from vk.utils.error_handler import RetryConfig

ENDPOINT = "https://api.test/graphql"


def sent_requests(mock: aioresponses) -> List[Any]:
    """Return the POST calls recorded against the test endpoint."""
    return mock.requests.get(("POST", URL(ENDPOINT)), [])


def sent_json(mock: aioresponses) -> List[Dict[str, Any]]:
    """Return the JSON bodies posted to the test endpoint, in order."""
    return [call.kwargs["json"] for call in sent_requests(mock)]


def page_info(has_next: bool = False, cursor: Optional[str] = None) -> Dict[str, Any]:
    return {"hasNextPage": has_next, "endCursor": cursor}


def comment_node(
    body: str = "Looks good",
    path: str = "src/lib.rs",
    comment_id: int = 1,
    login: Optional[str] = "alice",
) -> Dict[str, Any]:
    """Review comment as returned by the API."""
    return {
        "body": body,
        "diffHunk": "@@ -1,2 +1,2 @@\n-old\n+new",
        "originalPosition": 2,
        "position": 2,
        "path": path,
        "url": f"https://github.com/octo/repo/pull/7#discussion_r{comment_id}",
        "author": {"login": login} if login else None,
    }


def thread_node(
    thread_id: str,
    comments: List[Dict[str, Any]],
    resolved: bool = False,
    has_next: bool = False,
    cursor: Optional[str] = None,
    outdated: bool = False,
) -> Dict[str, Any]:
    """Review thread as returned by the API."""
    return {
        "id": thread_id,
        "isResolved": resolved,
        "isOutdated": outdated,
        "comments": {"nodes": comments, "pageInfo": page_info(has_next, cursor)},
    }


def threads_payload(
    threads: List[Dict[str, Any]], has_next: bool = False, cursor: Optional[str] = None
) -> Dict[str, Any]:
    """Body of a ReviewThreads response."""
    return {
        "data": {
            "repository": {
                "pullRequest": {
                    "reviewThreads": {
                        "nodes": threads,
                        "pageInfo": page_info(has_next, cursor),
                    }
                }
            }
        }
    }


def reviews_payload(
    reviews: List[Dict[str, Any]], has_next: bool = False, cursor: Optional[str] = None
) -> Dict[str, Any]:
    """Body of a Reviews response."""
    return {
        "data": {
            "repository": {
                "pullRequest": {
                    "reviews": {"nodes": reviews, "pageInfo": page_info(has_next, cursor)}
                }
            }
        }
    }


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def endpoint() -> str:
    return ENDPOINT


@pytest.fixture
def retry_config() -> RetryConfig:
    """Retry configuration without backoff delays."""
    return RetryConfig(attempts=3, base_delay=0.0, request_timeout=5.0, jitter=False)


@pytest.fixture
def repo() -> RepoInfo:
    return RepoInfo(owner="octo", name="repo")


@pytest.fixture
def mock_api() -> Generator[aioresponses, None, None]:
    """Intercept aiohttp requests."""
    with aioresponses() as m:
        yield m


@pytest.fixture
async def client(retry_config: RetryConfig) -> AsyncGenerator[GraphQLClient, None]:
    """GraphQL client pointed at the test endpoint."""
    async with GraphQLClient(
        token="test-token", endpoint=ENDPOINT, retry=retry_config
    ) as graphql_client:
        yield graphql_client


def route_operations(mock: aioresponses, responses: Dict[str, Any]) -> None:
    """Answer each request with the payload registered for its operation name."""

    def callback(url, **kwargs):
        operation = kwargs["json"].get("operationName")
        return CallbackResult(payload=responses[operation])

    mock.post(ENDPOINT, callback=callback, repeat=True)
