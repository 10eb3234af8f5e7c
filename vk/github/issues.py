"""
Issue lookup.
"""

from __future__ import annotations

from ..graphql.client import GraphQLClient
from .models import GitHubModel, Issue, RepoInfo, graphql_int
from .queries import ISSUE_QUERY


class _IssueRepository(GitHubModel):
    issue: Issue


class IssuePage(GitHubModel):
    repository: _IssueRepository


async def fetch_issue(client: GraphQLClient, repo: RepoInfo, number: int) -> Issue:
    """Fetch the title and body of an issue."""
    variables = {"owner": repo.owner, "name": repo.name, "number": graphql_int(number)}
    page = await client.fetch_page(ISSUE_QUERY, None, variables, response_type=IssuePage)
    return page.repository.issue
