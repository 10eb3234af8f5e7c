"""
Pull request reviews.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from ..graphql.client import GraphQLClient
from ..graphql.models import PageInfo
from .models import GitHubModel, PullRequestReview, RepoInfo, graphql_int
from .queries import REVIEWS_QUERY


class _ReviewConnection(GitHubModel):
    nodes: List[PullRequestReview]
    page_info: PageInfo


class _PullRequestReviews(GitHubModel):
    reviews: _ReviewConnection


class _RepositoryReviews(GitHubModel):
    pull_request: _PullRequestReviews


class ReviewsPage(GitHubModel):
    repository: _RepositoryReviews


async def fetch_reviews(
    client: GraphQLClient, repo: RepoInfo, number: int
) -> List[PullRequestReview]:
    """Fetch every review of a pull request."""
    variables = {"owner": repo.owner, "name": repo.name, "number": graphql_int(number)}

    def reviews_of(page: ReviewsPage) -> Tuple[List[PullRequestReview], PageInfo]:
        conn = page.repository.pull_request.reviews
        return conn.nodes, conn.page_info

    return await client.paginate_all(
        REVIEWS_QUERY, variables, None, reviews_of, response_type=ReviewsPage
    )


def _supersedes(new: PullRequestReview, existing: PullRequestReview) -> bool:
    # A timestamp beats none; ties go to the later review.
    if new.submitted_at is None:
        return existing.submitted_at is None
    if existing.submitted_at is None:
        return True
    return new.submitted_at >= existing.submitted_at


def latest_reviews(reviews: Iterable[PullRequestReview]) -> List[PullRequestReview]:
    """
    Keep the most recent review of each author.

    Reviews without an author cannot be grouped and are all kept, after the
    per-author reviews.
    """
    latest: Dict[str, PullRequestReview] = {}
    anonymous: List[PullRequestReview] = []

    for review in reviews:
        if review.author is None:
            anonymous.append(review)
            continue

        login = review.author.login
        current = latest.get(login)
        if current is None or _supersedes(review, current):
            latest[login] = review

    return list(latest.values()) + anonymous
