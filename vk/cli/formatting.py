"""
Terminal output for the vk CLI.

Review threads, reviews and issues are rendered with rich: comment bodies as
markdown and diff hunks with diff syntax highlighting.
"""

import re
from collections import Counter
from typing import Iterable, List, Optional, Tuple

from rich.console import Console
from rich.markdown import Markdown
from rich.syntax import Syntax
from rich.text import Text

from ..github.models import Issue, PullRequestReview, ReviewComment, ReviewThread

START_BANNER = "========== code review =========="
COMMENTS_BANNER = "======== review comments ========"
END_BANNER = "========== end of code review =========="

_EXCESS_NEWLINES = re.compile(r"\n{3,}")


def collapse_excessive_newlines(text: str) -> str:
    """Limit runs of blank lines to one."""
    return _EXCESS_NEWLINES.sub("\n\n", text)


def summarize_files(threads: Iterable[ReviewThread]) -> List[Tuple[str, int]]:
    """
    Count comments per file.

    Returns:
        ``(path, count)`` pairs, most discussed first, ties by path
    """
    counts: Counter = Counter()
    for thread in threads:
        for comment in thread.comments.nodes:
            counts[comment.path] += 1
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))


class Formatter:
    """Formatting utilities for CLI output."""

    def __init__(
        self,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
        verbose: bool = False,
    ):
        """
        Initialize formatter.

        Args:
            console: Console for regular output, stdout by default
            err_console: Console for errors and warnings, stderr by default
            verbose: Show extra detail
        """
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)
        self.verbose = verbose

    def print_banner(self, text: str) -> None:
        self.console.print(text, style="bold", markup=False, highlight=False)

    def print_error(self, message: str) -> None:
        """Print an error message to stderr."""
        self.err_console.print(
            f"error: {message}", style="bold red", markup=False, highlight=False
        )

    def print_warning(self, message: str) -> None:
        self.err_console.print(f"⚠ {message}", style="bold yellow", markup=False)

    def print_success(self, message: str) -> None:
        self.console.print(f"✓ {message}", style="bold green", markup=False)

    def print_info(self, message: str) -> None:
        self.console.print(message, markup=False, highlight=False)

    def print_summary(self, summary: List[Tuple[str, int]]) -> None:
        """Print per-file comment counts; nothing when empty."""
        if not summary:
            return
        self.console.print("Summary:", style="bold")
        for path, count in summary:
            label = "comment" if count == 1 else "comments"
            self.console.print(f"{path}: {count} {label}", markup=False, highlight=False)
        self.console.print()

    def _print_author(self, icon: str, login: Optional[str], suffix: str) -> None:
        line = Text(f"{icon}  ")
        line.append(login or "(unknown)", style="bold")
        line.append(suffix)
        self.console.print(line)

    def _print_body(self, body: str) -> None:
        self.console.print(Markdown(collapse_excessive_newlines(body)))
        self.console.print()

    def print_diff(self, comment: ReviewComment) -> None:
        """Print the file path and diff hunk of a comment."""
        if comment.path:
            self.console.print(comment.path, style="bold cyan", markup=False, highlight=False)
        if comment.diff_hunk:
            self.console.print(Syntax(comment.diff_hunk, "diff", word_wrap=True))

    def print_comment(self, comment: ReviewComment) -> None:
        login = comment.author.login if comment.author else None
        self._print_author("💬", login, " wrote:")
        self._print_body(comment.body)
        self.console.print(comment.url, markup=False, highlight=False)
        self.console.print("---", markup=False)

    def print_thread(self, thread: ReviewThread) -> None:
        """Print a thread: diff of the first comment, then every comment."""
        comments = thread.comments.nodes
        if not comments:
            return
        self.print_diff(comments[0])
        for comment in comments:
            self.print_comment(comment)

    def print_review(self, review: PullRequestReview) -> None:
        login = review.author.login if review.author else None
        self._print_author("📝", login, f" {review.state}:")
        self._print_body(review.body)

    def print_reviews(self, reviews: Iterable[PullRequestReview]) -> None:
        for review in reviews:
            self.print_review(review)

    def print_issue(self, issue: Issue) -> None:
        self.console.print(issue.title, style="bold", markup=False, highlight=False)
        self._print_body(issue.body)


def create_formatter(verbose: bool = False) -> Formatter:
    """Create a formatter writing to standard output."""
    return Formatter(verbose=verbose)
