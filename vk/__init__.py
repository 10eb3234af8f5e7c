"""
vk - view GitHub pull request review comments from the terminal.

The package is built around an asynchronous GitHub GraphQL client that retries
transient failures, validates responses into typed models and walks cursor
pagination.

Basic usage:

    import asyncio
    from vk import GraphQLClient, RepoInfo, fetch_review_threads

    async def main():
        async with GraphQLClient(token="ghp_...") as client:
            threads = await fetch_review_threads(
                client, RepoInfo(owner="octocat", name="hello"), 42
            )
            for thread in threads:
                print(thread.comments.nodes[0].path)

    asyncio.run(main())
"""

__version__ = "0.1.0"

from .config import ConfigLoader, LoggingConfig, RetrySettings, VkConfig, load_config
from .exceptions import (
    CommentNotFoundError,
    ConfigurationError,
    EmptyResponseError,
    GraphQLAPIError,
    HTTPStatusError,
    InvalidNumberError,
    InvalidReferenceError,
    InvalidVariablesError,
    MalformedResponseError,
    MissingCursorError,
    NoPrForBranchError,
    PaginationLimitError,
    RepoNotFoundError,
    ResponseDecodeError,
    TranscriptError,
    TransportError,
    VkError,
    WrongResourceTypeError,
)
from .github import (
    Issue,
    PullRequestReview,
    RepoInfo,
    ReviewComment,
    ReviewThread,
    User,
    fetch_issue,
    fetch_pr_for_branch,
    fetch_review_threads,
    fetch_reviews,
    filter_threads_by_files,
    get_thread_id,
    latest_reviews,
    resolve_comment,
    resolve_thread,
    thread_for_comment,
)
from .graphql import (
    DEFAULT_ENDPOINT,
    MAX_PAGES,
    GraphQLClient,
    PageInfo,
    build_graphql_client,
    paginate,
)
from .references import (
    parse_issue_reference,
    parse_pr_reference,
    parse_pr_thread_reference,
    parse_repo_str,
)
from .utils import RetryConfig, RetryPolicy, should_retry

__all__ = [
    "__version__",
    # Client
    "GraphQLClient",
    "build_graphql_client",
    "paginate",
    "PageInfo",
    "DEFAULT_ENDPOINT",
    "MAX_PAGES",
    "RetryConfig",
    "RetryPolicy",
    "should_retry",
    # Configuration
    "ConfigLoader",
    "load_config",
    "LoggingConfig",
    "RetrySettings",
    "VkConfig",
    # GitHub
    "Issue",
    "PullRequestReview",
    "RepoInfo",
    "ReviewComment",
    "ReviewThread",
    "User",
    "fetch_issue",
    "fetch_pr_for_branch",
    "fetch_review_threads",
    "fetch_reviews",
    "filter_threads_by_files",
    "get_thread_id",
    "latest_reviews",
    "resolve_comment",
    "resolve_thread",
    "thread_for_comment",
    # References
    "parse_issue_reference",
    "parse_pr_reference",
    "parse_pr_thread_reference",
    "parse_repo_str",
    # Exceptions
    "VkError",
    "TransportError",
    "HTTPStatusError",
    "ResponseDecodeError",
    "GraphQLAPIError",
    "EmptyResponseError",
    "MissingCursorError",
    "PaginationLimitError",
    "MalformedResponseError",
    "InvalidVariablesError",
    "TranscriptError",
    "ConfigurationError",
    "InvalidReferenceError",
    "WrongResourceTypeError",
    "RepoNotFoundError",
    "NoPrForBranchError",
    "CommentNotFoundError",
    "InvalidNumberError",
]
