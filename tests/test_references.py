"""
Tests for pull request and issue reference parsing.
"""

import pytest

from vk.exceptions import InvalidReferenceError, RepoNotFoundError, WrongResourceTypeError
from vk.github.models import RepoInfo
from vk.references import (
    parse_issue_reference,
    parse_pr_reference,
    parse_pr_thread_reference,
    parse_repo_str,
)


class TestParseRepoStr:
    """Test repository string parsing."""

    @pytest.mark.parametrize(
        "text,owner,name",
        [
            ("octo/repo", "octo", "repo"),
            ("octo/repo.git", "octo", "repo"),
            ("git@github.com:octo/repo.git", "octo", "repo"),
            ("https://github.com/octo/repo", "octo", "repo"),
        ],
    )
    def test_valid(self, text, owner, name):
        assert parse_repo_str(text) == RepoInfo(owner=owner, name=name)

    def test_no_repository(self):
        assert parse_repo_str("repo") is None

    @pytest.mark.parametrize("text", ["octo/repo/extra", "/repo", "octo/"])
    def test_malformed(self, text):
        with pytest.raises(InvalidReferenceError):
            parse_repo_str(text)

    def test_malformed_default_repo(self):
        with pytest.raises(InvalidReferenceError):
            parse_pr_reference("42", "octo/repo/extra")


class TestParsePrReference:
    """Test pull request references."""

    def test_url(self):
        repo, number = parse_pr_reference("https://github.com/octo/repo/pull/42")
        assert repo == RepoInfo(owner="octo", name="repo")
        assert number == 42

    def test_url_with_trailing_path(self):
        _, number = parse_pr_reference("https://github.com/octo/repo/pull/42/files")
        assert number == 42

    def test_bare_number_with_default(self):
        assert parse_pr_reference("7", "octo/repo") == (RepoInfo(owner="octo", name="repo"), 7)

    def test_bare_number_without_default(self):
        with pytest.raises(RepoNotFoundError):
            parse_pr_reference("7")

    def test_issue_url_rejected(self):
        """Test that an issue URL is reported as the wrong resource type."""
        with pytest.raises(WrongResourceTypeError) as exc_info:
            parse_pr_reference("https://github.com/octo/repo/issues/3")
        assert exc_info.value.found == "issues"

    @pytest.mark.parametrize(
        "reference",
        [
            "not-a-number",
            "https://github.com/octo/repo",
            "https://github.com/octo/repo/pull/abc",
            "-3",
        ],
    )
    def test_invalid(self, reference):
        with pytest.raises(InvalidReferenceError):
            parse_pr_reference(reference, "octo/repo")


class TestParseIssueReference:
    """Test issue references."""

    def test_url(self):
        repo, number = parse_issue_reference("https://github.com/octo/repo/issues/3")
        assert repo.owner == "octo"
        assert number == 3

    def test_pull_url_rejected(self):
        with pytest.raises(WrongResourceTypeError):
            parse_issue_reference("https://github.com/octo/repo/pull/3")


class TestParsePrThreadReference:
    """Test references with a discussion fragment."""

    def test_with_fragment(self):
        repo, number, comment_id = parse_pr_thread_reference(
            "https://github.com/octo/repo/pull/42#discussion_r1234"
        )
        assert (repo.name, number, comment_id) == ("repo", 42, 1234)

    def test_without_fragment(self):
        assert parse_pr_thread_reference("42", "octo/repo")[2] is None

    def test_bare_number_with_fragment(self):
        _, number, comment_id = parse_pr_thread_reference("42#discussion_r9", "octo/repo")
        assert (number, comment_id) == (42, 9)

    @pytest.mark.parametrize(
        "reference",
        [
            "https://github.com/octo/repo/pull/42#discussion_r",
            "https://github.com/octo/repo/pull/42#discussion_rabc",
        ],
    )
    def test_invalid_fragment(self, reference):
        with pytest.raises(InvalidReferenceError):
            parse_pr_thread_reference(reference)
