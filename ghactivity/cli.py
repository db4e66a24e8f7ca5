"""Command-line interface for collecting GitHub activity."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from ghactivity.activity import get_github_activity
from ghactivity.api import GitHubApiError
from ghactivity.dates import (
    current_username,
    default_end_date,
    default_start_date,
    last_week_dates,
    this_week_dates,
    today_dates,
)
from ghactivity.search import get_issues_data, get_pr_data


def _add_common_options(parser: argparse.ArgumentParser, with_defaults: bool) -> None:
    def default(value: str) -> str:
        return value if with_defaults else argparse.SUPPRESS

    parser.add_argument("-d", "--domain", default=default("github.com"), help="Github domain")
    parser.add_argument(
        "-s", "--start", default=default(default_start_date()),
        help="Collect activities starting on this date",
    )
    parser.add_argument(
        "-e", "--end", default=default(default_end_date()),
        help="Collect activities up to this date",
    )
    parser.add_argument("-u", "--user", default=default(current_username()), help="Username")
    parser.add_argument(
        "-t", "--token", default=default(""),
        help="Github Personal Access Token (default $GITHUB_TOKEN)",
    )


def _add_search_command(subparsers, name: str, help_text: str) -> None:
    sub = subparsers.add_parser(name, help=help_text, description=help_text)
    _add_common_options(sub, with_defaults=False)
    sub.add_argument("-r", "--repo", required=True, help="Github org/repo")
    sub.add_argument(
        "-l", "--label", dest="labels", action="append", default=[],
        help="Issue/PR label",
    )
    sub.add_argument("-o", "--output", default="", help="Output Filename (JSON)")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with its prs and issues commands."""
    parser = argparse.ArgumentParser(
        prog="github-activity",
        description="Get PRs, reviews, and issues created during a specific time interval.",
    )
    _add_common_options(parser, with_defaults=True)
    parser.add_argument(
        "-l", "--last-week", action="store_true",
        help="Collect activities for last week (last week Monday to last week Friday)",
    )
    parser.add_argument(
        "-w", "--this-week", action="store_true",
        help="Collect activities for this week (Monday to Friday)",
    )
    parser.add_argument(
        "-n", "--today", action="store_true", help="Collect activities for today"
    )
    subparsers = parser.add_subparsers(dest="command")
    _add_search_command(subparsers, "prs", "Get PR data for a given repo and labels")
    _add_search_command(
        subparsers, "issues", "Get GitHub Issues data for a given repo and labels"
    )
    return parser


def _run(args: argparse.Namespace) -> None:
    if args.command == "prs":
        get_pr_data(
            args.domain, args.token, args.repo, args.output, args.end, args.start, args.labels
        )
        return
    if args.command == "issues":
        get_issues_data(
            args.domain, args.token, args.repo, args.output, args.end, args.start, args.labels
        )
        return

    start, end = args.start, args.end
    if args.last_week:
        start, end = last_week_dates()
    elif args.this_week:
        start, end = this_week_dates()
    elif args.today:
        start, end = today_dates()
    get_github_activity(args.domain, start, end, args.user, args.token)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line and return the exit status."""
    args = build_parser().parse_args(argv)
    try:
        _run(args)
    except (GitHubApiError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())