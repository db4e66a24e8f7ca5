"""Summary of a user's contributions over a date range."""

from __future__ import annotations

from typing import Any, Iterable

from ghactivity.api import GitHubApiError, call_api, github_url
from ghactivity.dates import format_date

import os

_QUERY_TEMPLATE = """    query {{
        user(login: "{user}") {{
            contributionsCollection(from: "{start}", to: "{end}") {{
              issueContributions (first: 100) {{
                edges {{
                    node {{
                        occurredAt
                        issue {{
                            title
                            url
                            repository {{
                                nameWithOwner
                            }}
                        }}
                    }}
                }}
              }}
              pullRequestContributions (first: 100) {{
                edges {{
                    node {{
                        occurredAt
                        pullRequest {{
                            title
                            url
                            repository {{
                                nameWithOwner
                            }}
                        }}
                    }}
                }}
              }}
              pullRequestReviewContributions (first: 100) {{
                edges {{
                    node {{
                        occurredAt
                        pullRequest {{
                          title
                          url
                          repository {{
                              nameWithOwner
                          }}
                        }}
                    }}
                }}
              }}
          }}
       }}
    }}"""

_SECTIONS = (
    ("Pull Requests", "pullRequestContributions", "pullRequest"),
    ("Reviews", "pullRequestReviewContributions", "pullRequest"),
    ("Issues", "issueContributions", "issue"),
)


def activity_query(username: str, start_date: str, end_date: str) -> str:
    """Build the GraphQL query for a user's contributions."""
    return _QUERY_TEMPLATE.format(user=username, start=start_date, end=end_date)


def _mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def group_by_repository(
    edges: Iterable[dict[str, Any]], key: str
) -> dict[str, list[tuple[str, str]]]:
    """Group contribution edges by repository as (title, url) pairs."""
    grouped: dict[str, list[tuple[str, str]]] = {}
    for edge in edges:
        item = _mapping(_mapping(_mapping(edge).get("node")).get(key))
        repo = _text(_mapping(item.get("repository")).get("nameWithOwner"))
        grouped.setdefault(repo, []).append((_text(item.get("title")), _text(item.get("url"))))
    return grouped


def _edges(collection: dict[str, Any], field: str) -> list[Any]:
    return _mapping(collection.get(field)).get("edges") or []


def render_activity(activity: dict[str, Any]) -> str:
    """Render a contributions response as a text report."""
    user = _mapping(_mapping(activity.get("data")).get("user"))
    collection = _mapping(user.get("contributionsCollection"))

    lines: list[str] = []
    counts: dict[str, int] = {}
    for heading, field, key in _SECTIONS:
        edges = _edges(collection, field)
        counts[field] = len(edges)
        if not edges:
            continue
        lines.append(f"{heading} ({len(edges)})")
        for repo, items in group_by_repository(edges, key).items():
            lines.append(f"* {repo}")
            lines.extend(f"    - {title}: {url}" for title, url in items)

    totals = (
        f"\nTotals: PRs({counts['pullRequestContributions']}) "
        f"Reviews({counts['pullRequestReviewContributions']}) "
        f"Issues({counts['issueContributions']})"
    )
    return "".join(line + "\n" for line in lines) + totals


def get_github_activity(
    domain: str, start_date: str, end_date: str, username: str, token: str
) -> None:
    """Fetch and print a user's activity between two dates."""
    start_date = format_date(start_date)
    end_date = format_date(end_date)

    url = github_url(domain)
    query = activity_query(username, start_date, end_date)

    token = token or os.environ.get("GITHUB_TOKEN", "")
    if not token:
        raise GitHubApiError("No Github token specified")

    activity = call_api(url, query, token)

    print(f"{domain} activity for {username} between {start_date} and {end_date}:\n")
    print(render_activity(activity), end="")