#!/usr/bin/env python3
"""
Command-line interface for vk.

This module loads the configuration, builds the GraphQL client and runs the
``pr``, ``issue`` and ``resolve`` commands.
"""

import argparse
import asyncio
import logging
import sys
from typing import Any, Dict, List, Optional, Tuple

from ..config import ConfigLoader, VkConfig
from ..exceptions import (
    ConfigurationError,
    InvalidReferenceError,
    RepoNotFoundError,
    VkError,
)
from ..github import (
    RepoInfo,
    fetch_issue,
    fetch_pr_for_branch,
    fetch_review_threads,
    fetch_reviews,
    filter_threads_by_files,
    latest_reviews,
    resolve_comment,
    thread_for_comment,
)
from ..graphql import build_graphql_client
from ..logging import setup_logging
from ..references import parse_issue_reference, parse_pr_thread_reference, parse_repo_str
from .formatting import (
    COMMENTS_BANNER,
    END_BANNER,
    START_BANNER,
    Formatter,
    create_formatter,
    summarize_files,
)
from .parsers import create_parser

logger = logging.getLogger(__name__)


def build_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Translate command-line options into configuration overrides."""
    overrides: Dict[str, Any] = {
        "repo": args.repo,
        "transcript": args.transcript,
        "retry": {"request_timeout": args.http_timeout},
    }
    if args.verbose:
        overrides["logging"] = {"level": "DEBUG"}
    return overrides


def _pr_target(
    args: argparse.Namespace, config: VkConfig
) -> Tuple[RepoInfo, Optional[int], Optional[int], List[str]]:
    """Return repository, number, comment id and file filter of a pr invocation."""
    if args.branch is None:
        if args.reference is None:
            raise ConfigurationError("pr needs a pull request reference or --branch")
        repo, number, comment_id = parse_pr_thread_reference(args.reference, config.repo)
        return repo, number, comment_id, args.files

    # With --branch every positional argument is a file
    files = args.files if args.reference is None else [args.reference, *args.files]
    repo = parse_repo_str(config.repo) if config.repo else None
    if repo is None:
        raise RepoNotFoundError()
    return repo, None, None, files


async def run_pr(args: argparse.Namespace, config: VkConfig, formatter: Formatter) -> int:
    """Show review threads and the latest reviews of a pull request."""
    repo, number, comment_id, files = _pr_target(args, config)

    formatter.print_banner(START_BANNER)
    async with build_graphql_client(config) as client:
        if number is None:
            number = await fetch_pr_for_branch(client, repo, args.branch, args.head_owner)
            logger.debug("Branch %s maps to pull request #%d", args.branch, number)

        # A discussion link may point at a resolved thread
        threads = await fetch_review_threads(
            client,
            repo,
            number,
            include_resolved=comment_id is not None,
            include_outdated=args.show_outdated,
        )
        if comment_id is not None:
            thread = thread_for_comment(threads, comment_id)
            threads = [thread] if thread is not None else []
        else:
            threads = filter_threads_by_files(threads, files)

        if not threads:
            if comment_id is not None:
                formatter.print_info("No unresolved comments in the requested discussion.")
            elif files:
                formatter.print_info("No unresolved comments for the specified files.")
            else:
                formatter.print_info("No unresolved comments.")
            formatter.print_banner(END_BANNER)
            return 0

        reviews = await fetch_reviews(client, repo, number)

    formatter.print_summary(summarize_files(threads))
    formatter.print_reviews(latest_reviews(reviews))
    formatter.print_banner(COMMENTS_BANNER)
    for thread in threads:
        formatter.print_thread(thread)
    formatter.print_banner(END_BANNER)
    return 0


async def run_issue(args: argparse.Namespace, config: VkConfig, formatter: Formatter) -> int:
    """Show the title and body of an issue."""
    repo, number = parse_issue_reference(args.reference, config.repo)
    async with build_graphql_client(config) as client:
        issue = await fetch_issue(client, repo, number)
    formatter.print_issue(issue)
    return 0


async def run_resolve(args: argparse.Namespace, config: VkConfig, formatter: Formatter) -> int:
    """Resolve the review thread containing a comment."""
    repo, number, comment_id = parse_pr_thread_reference(args.reference, config.repo)
    if comment_id is None:
        raise InvalidReferenceError(args.reference)
    if not config.token:
        raise ConfigurationError("resolving a thread requires a GitHub token")

    async with build_graphql_client(config) as client:
        thread_id = await resolve_comment(client, repo, number, comment_id)
    formatter.print_success(f"Resolved thread {thread_id}")
    return 0


COMMANDS = {
    "pr": run_pr,
    "issue": run_issue,
    "resolve": run_resolve,
}


async def main(
    argv: Optional[List[str]] = None,
    formatter: Optional[Formatter] = None,
    loader: Optional[ConfigLoader] = None,
) -> int:
    """
    Main CLI function.

    Args:
        argv: Command-line arguments, ``sys.argv[1:]`` by default
        formatter: Output formatter
        loader: Configuration loader

    Returns:
        Process exit status
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    formatter = formatter or create_formatter(verbose=args.verbose)
    loader = loader or ConfigLoader()

    try:
        config = loader.load_config(args.config, build_overrides(args))
        setup_logging(config.logging)
        return await COMMANDS[args.command](args, config, formatter)
    except VkError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        formatter.print_error(str(e))
        return 1


def run() -> None:
    """Console script entry point."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    run()
