"""
GitHub operations built on the GraphQL client.
"""

from .branch_pr import fetch_pr_for_branch, select_pull_request
from .issues import fetch_issue
from .models import (
    GRAPHQL_INT_MAX,
    CommentConnection,
    Issue,
    PullRequestReview,
    RepoInfo,
    ReviewComment,
    ReviewThread,
    User,
    graphql_int,
)
from .resolve import get_thread_id, resolve_comment, resolve_thread
from .review_threads import (
    fetch_comment_page,
    fetch_review_threads,
    filter_threads_by_files,
    thread_for_comment,
)
from .reviews import fetch_reviews, latest_reviews

__all__ = [
    "GRAPHQL_INT_MAX",
    "CommentConnection",
    "Issue",
    "PullRequestReview",
    "RepoInfo",
    "ReviewComment",
    "ReviewThread",
    "User",
    "graphql_int",
    "fetch_comment_page",
    "fetch_review_threads",
    "filter_threads_by_files",
    "thread_for_comment",
    "fetch_reviews",
    "latest_reviews",
    "fetch_issue",
    "fetch_pr_for_branch",
    "select_pull_request",
    "get_thread_id",
    "resolve_comment",
    "resolve_thread",
]
