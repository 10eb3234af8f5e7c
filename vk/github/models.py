"""
GitHub data models.

Field names follow Python conventions; the camelCase names used by the API
are generated as aliases.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..exceptions import InvalidNumberError
from ..graphql.models import PageInfo

# GraphQL ``Int`` is a signed 32-bit integer
GRAPHQL_INT_MAX = 2**31 - 1


def graphql_int(number: int) -> int:
    """
    Check that a pull request or issue number fits GraphQL's ``Int``.

    Raises:
        InvalidNumberError: If the number is out of range
    """
    if number < 0 or number > GRAPHQL_INT_MAX:
        raise InvalidNumberError(number)
    return number


class GitHubModel(BaseModel):
    """Base for models decoded from GraphQL responses."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RepoInfo(BaseModel):
    """Repository owner and name."""

    model_config = ConfigDict(frozen=True)

    owner: str
    name: str

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"


class User(GitHubModel):
    login: str


class ReviewComment(GitHubModel):
    """Comment attached to a review thread."""

    body: str
    diff_hunk: str = ""
    original_position: Optional[int] = None
    position: Optional[int] = None
    path: str = ""
    url: str = ""
    author: Optional[User] = None


class CommentConnection(GitHubModel):
    nodes: List[ReviewComment] = Field(default_factory=list)
    page_info: PageInfo = Field(default_factory=PageInfo)


class ReviewThread(GitHubModel):
    """Pull request review thread with its comments."""

    id: str
    is_resolved: bool = False
    is_outdated: bool = False
    comments: CommentConnection = Field(default_factory=CommentConnection)


class ReviewThreadConnection(GitHubModel):
    nodes: List[ReviewThread] = Field(default_factory=list)
    page_info: PageInfo = Field(default_factory=PageInfo)


class Issue(GitHubModel):
    title: str
    body: str = ""


class PullRequestReview(GitHubModel):
    """Top-level review of a pull request."""

    body: str = ""
    submitted_at: Optional[datetime] = None
    state: str
    author: Optional[User] = None
