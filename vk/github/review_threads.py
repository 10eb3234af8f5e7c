"""
Fetching and filtering pull request review threads.

GitHub cannot filter threads by resolution state, so resolved and outdated
threads are dropped client-side. Threads with more than one page of comments are
completed with a second, thread-scoped pagination.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from ..exceptions import MalformedResponseError
from ..graphql.client import GraphQLClient
from ..graphql.models import PageInfo
from ..graphql.pagination import paginate
from .models import (
    CommentConnection,
    GitHubModel,
    RepoInfo,
    ReviewComment,
    ReviewThread,
    ReviewThreadConnection,
    graphql_int,
)
from .queries import COMMENT_QUERY, THREADS_QUERY

logger = logging.getLogger(__name__)


class _PullRequestThreads(GitHubModel):
    review_threads: ReviewThreadConnection


class _RepositoryThreads(GitHubModel):
    pull_request: _PullRequestThreads


class ThreadsPage(GitHubModel):
    repository: _RepositoryThreads


class _CommentNode(GitHubModel):
    comments: CommentConnection


class CommentsPage(GitHubModel):
    node: Optional[_CommentNode] = None


async def fetch_comment_page(
    client: GraphQLClient, thread_id: str, cursor: Optional[str]
) -> Tuple[List[ReviewComment], PageInfo]:
    """
    Fetch one page of comments for a review thread.

    Raises:
        MalformedResponseError: If the thread node is missing from the response
    """
    page = await client.run_query(
        COMMENT_QUERY,
        {"id": thread_id, "cursor": cursor},
        response_type=CommentsPage,
    )
    if page.node is None:
        raise MalformedResponseError(
            f"Missing comment node in response (id: {thread_id}, cursor: {cursor or 'None'})"
        )
    conn = page.node.comments
    return conn.nodes, conn.page_info


async def _complete_comments(client: GraphQLClient, thread: ReviewThread) -> None:
    """Fetch the remaining comment pages of ``thread`` in place."""
    initial = thread.comments
    start = initial.page_info.next_cursor()
    if start is None:
        return

    logger.debug("Fetching more comments for thread %s", thread.id)
    more = await paginate(
        lambda cursor: fetch_comment_page(client, thread.id, cursor),
        start_cursor=start,
    )
    thread.comments = CommentConnection(
        nodes=initial.nodes + more,
        page_info=PageInfo(has_next_page=False),
    )


async def fetch_review_threads(
    client: GraphQLClient,
    repo: RepoInfo,
    number: int,
    include_resolved: bool = False,
    include_outdated: bool = False,
) -> List[ReviewThread]:
    """
    Fetch the review threads of a pull request with all their comments.

    Args:
        client: GraphQL client
        repo: Repository of the pull request
        number: Pull request number
        include_resolved: Keep resolved threads as well
        include_outdated: Keep threads whose diff position is outdated

    Returns:
        Threads in API order, without resolved or outdated threads unless
        asked for
    """
    variables = {"owner": repo.owner, "name": repo.name, "number": graphql_int(number)}

    def threads_of(page: ThreadsPage) -> Tuple[List[ReviewThread], PageInfo]:
        conn = page.repository.pull_request.review_threads
        return conn.nodes, conn.page_info

    threads = await client.paginate_all(
        THREADS_QUERY, variables, None, threads_of, response_type=ThreadsPage
    )
    if not include_resolved:
        threads = [t for t in threads if not t.is_resolved]
    if not include_outdated:
        threads = [t for t in threads if not t.is_outdated]

    for thread in threads:
        await _complete_comments(client, thread)

    return threads


def filter_threads_by_files(
    threads: Iterable[ReviewThread], files: Sequence[str]
) -> List[ReviewThread]:
    """Keep threads whose first comment is on one of ``files``; empty keeps all."""
    threads = list(threads)
    if not files:
        return threads

    wanted = set(files)
    return [
        t for t in threads if t.comments.nodes and t.comments.nodes[0].path in wanted
    ]


def thread_for_comment(
    threads: Iterable[ReviewThread], comment_id: int
) -> Optional[ReviewThread]:
    """Return the thread holding the comment ``#discussion_r<comment_id>``."""
    suffix = f"#discussion_r{comment_id}"
    for thread in threads:
        if any(c.url.endswith(suffix) for c in thread.comments.nodes):
            return thread
    return None
