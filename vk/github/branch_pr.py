"""
Pull request lookup by head branch.

Several forks may open pull requests from branches with the same name, so the
candidates can be narrowed down by the owner of the head repository.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ..exceptions import NoPrForBranchError
from ..graphql.client import GraphQLClient
from .models import GitHubModel, RepoInfo, User
from .queries import PR_FOR_BRANCH_QUERY

logger = logging.getLogger(__name__)


class HeadRepository(GitHubModel):
    owner: User


class PullRequestNode(GitHubModel):
    number: int
    head_repository: Optional[HeadRepository] = None


class _PullRequestConnection(GitHubModel):
    nodes: List[PullRequestNode]


class _BranchRepository(GitHubModel):
    pull_requests: _PullRequestConnection


class BranchPullRequestsPage(GitHubModel):
    repository: _BranchRepository


def select_pull_request(
    candidates: List[PullRequestNode], head_owner: Optional[str] = None
) -> Optional[PullRequestNode]:
    """Pick the first candidate, or the first owned by ``head_owner`` (case-insensitive)."""
    if head_owner is None:
        return candidates[0] if candidates else None

    wanted = head_owner.lower()
    for pr in candidates:
        if pr.head_repository is not None and pr.head_repository.owner.login.lower() == wanted:
            return pr
    return None


async def fetch_pr_for_branch(
    client: GraphQLClient,
    repo: RepoInfo,
    branch: str,
    head_owner: Optional[str] = None,
) -> int:
    """
    Find the pull request opened from ``branch``.

    Args:
        client: GraphQL client
        repo: Base repository
        branch: Head branch name
        head_owner: Owner of the head repository, for forks

    Returns:
        Pull request number

    Raises:
        NoPrForBranchError: If no matching pull request exists
    """
    page = await client.run_query(
        PR_FOR_BRANCH_QUERY,
        {"owner": repo.owner, "name": repo.name, "headRef": branch},
        response_type=BranchPullRequestsPage,
    )
    candidates = page.repository.pull_requests.nodes
    logger.debug("Found %d pull request(s) for branch %s", len(candidates), branch)

    pr = select_pull_request(candidates, head_owner)
    if pr is None:
        raise NoPrForBranchError(branch)
    return pr.number
