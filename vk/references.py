"""
Parsing of pull request and issue references.

A reference is either a GitHub URL such as
``https://github.com/owner/repo/pull/42`` or a bare number combined with a
default repository. Pull request references may carry a
``#discussion_r<id>`` fragment naming a review comment.
"""

from __future__ import annotations

import re
from typing import Optional, Sequence, Tuple
from urllib.parse import urlsplit

from .exceptions import InvalidReferenceError, RepoNotFoundError, WrongResourceTypeError
from .github.models import RepoInfo

DISCUSSION_FRAGMENT = "#discussion_r"

PULL_REQUEST_SEGMENTS = ("pull", "pulls")
ISSUE_SEGMENTS = ("issues", "issue")

GITHUB_RE = re.compile(r"github\.com[/:](?P<owner>[^/]+)/(?P<repo>[^/]+)")
_NUMBER_RE = re.compile(r"\d+", re.ASCII)


def _strip_git_suffix(name: str) -> str:
    return name[: -len(".git")] if name.endswith(".git") else name


def _parse_number(text: str, reference: str) -> int:
    if not _NUMBER_RE.fullmatch(text):
        raise InvalidReferenceError(reference)
    return int(text)


def parse_repo_str(repo: str) -> Optional[RepoInfo]:
    """
    Parse ``owner/repo`` or a GitHub remote URL.

    Returns:
        RepoInfo, or ``None`` when the text names no repository

    Raises:
        InvalidReferenceError: If ``owner/repo`` has an empty or nested part
    """
    match = GITHUB_RE.search(repo)
    if match:
        return RepoInfo(owner=match.group("owner"), name=_strip_git_suffix(match.group("repo")))

    if "/" in repo:
        owner, name = repo.split("/", 1)
        if not owner or not name or "/" in name:
            raise InvalidReferenceError(repo)
        return RepoInfo(owner=owner, name=_strip_git_suffix(name))

    return None


def _parse_github_url(reference: str, segments: Sequence[str]) -> Optional[Tuple[RepoInfo, int]]:
    """Parse a github.com URL; ``None`` when ``reference`` is not one."""
    parts = urlsplit(reference)
    if parts.scheme not in ("http", "https") or parts.hostname != "github.com":
        return None

    path = parts.path.split("/")[1:]
    if len(path) < 4:
        raise InvalidReferenceError(reference)

    owner, repo, segment, number = path[:4]
    if segment not in segments:
        raise WrongResourceTypeError(segments, segment)

    return RepoInfo(owner=owner, name=_strip_git_suffix(repo)), _parse_number(number, reference)


def _parse_reference(
    reference: str, default_repo: Optional[str], segments: Sequence[str]
) -> Tuple[RepoInfo, int]:
    parsed = _parse_github_url(reference, segments)
    if parsed is not None:
        return parsed

    if _NUMBER_RE.fullmatch(reference):
        repo = parse_repo_str(default_repo) if default_repo else None
        if repo is None:
            raise RepoNotFoundError()
        return repo, int(reference)

    raise InvalidReferenceError(reference)


def parse_pr_reference(
    reference: str, default_repo: Optional[str] = None
) -> Tuple[RepoInfo, int]:
    """
    Parse a pull request URL or number.

    Raises:
        WrongResourceTypeError: If the URL points at something other than a pull request
        RepoNotFoundError: If a bare number is given without a default repository
        InvalidReferenceError: If the reference cannot be parsed
    """
    return _parse_reference(reference, default_repo, PULL_REQUEST_SEGMENTS)


def parse_issue_reference(
    reference: str, default_repo: Optional[str] = None
) -> Tuple[RepoInfo, int]:
    """Parse an issue URL or number; see :func:`parse_pr_reference`."""
    return _parse_reference(reference, default_repo, ISSUE_SEGMENTS)


def parse_pr_thread_reference(
    reference: str, default_repo: Optional[str] = None
) -> Tuple[RepoInfo, int, Optional[int]]:
    """
    Parse a pull request reference with an optional discussion fragment.

    Returns:
        Repository, pull request number and review comment id (or ``None``)
    """
    comment_id: Optional[int] = None
    base = reference
    if DISCUSSION_FRAGMENT in reference:
        base, _, fragment = reference.partition(DISCUSSION_FRAGMENT)
        if not fragment:
            raise InvalidReferenceError(reference)
        comment_id = _parse_number(fragment, reference)

    repo, number = parse_pr_reference(base, default_repo)
    return repo, number, comment_id
