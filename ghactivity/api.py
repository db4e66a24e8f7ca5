"""Access to the GitHub GraphQL endpoint."""

from __future__ import annotations

import os
from typing import Any

import requests

TIMEOUT_SECONDS = 30

_GRAPHQL_URLS = {
    "github.com": "https://api.github.com/graphql",
    "github.ibm.com": "https://github.ibm.com/api/graphql",
}


class GitHubApiError(Exception):
    """Raised when the GitHub API cannot be queried."""


def github_url(domain: str) -> str:
    """Return the GraphQL endpoint for a known domain, or an empty string."""
    return _GRAPHQL_URLS.get(domain, "")


def resolve_token(token: str) -> str:
    """Return the given token, falling back to $GITHUB_TOKEN."""
    token = token or os.environ.get("GITHUB_TOKEN", "")
    if not token:
        raise GitHubApiError("no Github token specified")
    return token


def call_api(url: str, query: str, token: str) -> dict[str, Any]:
    """Post a GraphQL query and return the decoded JSON response."""
    headers = {
        "Authorization": "token " + token,
        "Content-Type": "application/json",
    }
    try:
        response = requests.post(
            url, json={"query": query}, headers=headers, timeout=TIMEOUT_SECONDS
        )
    except requests.RequestException as exc:
        raise GitHubApiError("unable to query github api") from exc

    if response.status_code != 200:
        status = f"{response.status_code} {response.reason or ''}".rstrip()
        raise GitHubApiError("error querying github api: " + status)

    try:
        payload = response.json()
    except ValueError as exc:
        raise GitHubApiError("cannot unmarshal json") from exc
    if not isinstance(payload, dict):
        raise GitHubApiError("cannot unmarshal json")
    return payload


def write_text(text: str, path: str) -> None:
    """Write text to a file, replacing what it held."""
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(text)