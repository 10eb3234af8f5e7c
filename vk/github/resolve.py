"""
Resolving review threads.

A review comment id (the number in ``#discussion_r<id>``) is mapped to its
thread by walking the pull request's review comments, then the thread is
resolved with a mutation.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ..exceptions import CommentNotFoundError, MalformedResponseError
from ..graphql.client import GraphQLClient
from ..graphql.models import PageInfo
from .models import GitHubModel, RepoInfo, graphql_int
from .queries import RESOLVE_THREAD_MUTATION, REVIEW_COMMENTS_PAGE_QUERY

logger = logging.getLogger(__name__)


class _ThreadRef(GitHubModel):
    id: str


class _CommentRef(GitHubModel):
    database_id: int
    pull_request_review_thread: _ThreadRef


class _ReviewComments(GitHubModel):
    page_info: PageInfo
    nodes: List[_CommentRef]


class _PullRequestComments(GitHubModel):
    review_comments: Optional[_ReviewComments] = None


class _RepositoryComments(GitHubModel):
    pull_request: Optional[_PullRequestComments] = None


class ReviewCommentsPage(GitHubModel):
    repository: Optional[_RepositoryComments] = None


class _ResolveResult(GitHubModel):
    client_mutation_id: Optional[str] = None


class ResolveThreadResponse(GitHubModel):
    resolve_review_thread: Optional[_ResolveResult] = None


async def get_thread_id(
    client: GraphQLClient, repo: RepoInfo, number: int, comment_id: int
) -> str:
    """
    Find the id of the thread containing review comment ``comment_id``.

    Raises:
        MalformedResponseError: If the response lacks review comments or the
            pagination does not advance
        CommentNotFoundError: If no comment has that id
    """
    cursor: Optional[str] = None
    number = graphql_int(number)

    while True:
        page = await client.run_query(
            REVIEW_COMMENTS_PAGE_QUERY,
            {"owner": repo.owner, "name": repo.name, "number": number, "after": cursor},
            response_type=ReviewCommentsPage,
        )
        comments = None
        if page.repository is not None and page.repository.pull_request is not None:
            comments = page.repository.pull_request.review_comments
        if comments is None:
            raise MalformedResponseError("missing review comments")

        for node in comments.nodes:
            if node.database_id == comment_id:
                return node.pull_request_review_thread.id

        if not comments.page_info.has_next_page:
            break

        next_cursor = comments.page_info.end_cursor
        if next_cursor is None:
            raise MalformedResponseError("missing endCursor with hasNextPage")
        if next_cursor == cursor:
            raise MalformedResponseError("non-progressing pagination (repeated endCursor)")
        cursor = next_cursor

    raise CommentNotFoundError(comment_id)


async def resolve_thread(client: GraphQLClient, thread_id: str) -> None:
    """Mark a review thread as resolved."""
    await client.run_query(
        RESOLVE_THREAD_MUTATION, {"id": thread_id}, response_type=ResolveThreadResponse
    )
    logger.info("Resolved review thread %s", thread_id)


async def resolve_comment(
    client: GraphQLClient, repo: RepoInfo, number: int, comment_id: int
) -> str:
    """
    Resolve the thread containing ``comment_id``.

    Returns:
        The id of the resolved thread
    """
    thread_id = await get_thread_id(client, repo, number, comment_id)
    await resolve_thread(client, thread_id)
    return thread_id
