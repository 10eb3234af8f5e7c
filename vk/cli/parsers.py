"""
Argument parsing for the vk CLI.
"""

import argparse
from pathlib import Path


def add_global_arguments(parser: argparse.ArgumentParser) -> None:
    """Add options shared by all sub-commands."""
    parser.add_argument(
        "--repo", help="Default repository as owner/repo for bare numbers"
    )
    parser.add_argument(
        "--transcript",
        type=Path,
        help="Write every GraphQL request and response to this file",
    )
    parser.add_argument(
        "--http-timeout",
        type=float,
        metavar="SECONDS",
        help="Per-request timeout in seconds (default: 30)",
    )
    parser.add_argument(
        "--config", type=Path, help="Configuration file (YAML or JSON)"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )


def add_command_parsers(parser: argparse.ArgumentParser) -> None:
    """Add the pr, issue and resolve sub-commands."""
    subparsers = parser.add_subparsers(dest="command", required=True)

    pr = subparsers.add_parser(
        "pr", help="Show unresolved review comments of a pull request"
    )
    pr.add_argument(
        "reference",
        nargs="?",
        help="Pull request URL or number, optionally with #discussion_r<id>",
    )
    pr.add_argument(
        "files", nargs="*", metavar="FILE", help="Only show threads on these files"
    )
    pr.add_argument(
        "-o",
        "--show-outdated",
        action="store_true",
        help="Include threads whose code has changed since the comment",
    )
    pr.add_argument(
        "--branch",
        help="Find the pull request opened from this branch instead of a reference",
    )
    pr.add_argument(
        "--head-owner",
        metavar="OWNER",
        help="Owner of the head repository when looking up --branch",
    )

    issue = subparsers.add_parser("issue", help="Show an issue")
    issue.add_argument("reference", help="Issue URL or number")

    resolve = subparsers.add_parser(
        "resolve", help="Resolve the review thread of a comment"
    )
    resolve.add_argument(
        "reference", help="Pull request URL or number with #discussion_r<id>"
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="vk",
        description="View GitHub pull request review comments and issues",
    )
    add_global_arguments(parser)
    add_command_parsers(parser)
    return parser
