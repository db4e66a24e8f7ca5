"""Search for pull requests and issues of a repository."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Iterable

from ghactivity.api import call_api, github_url, resolve_token, write_text
from ghactivity.dates import default_end_date, default_start_date


class SearchKind(Enum):
    """The kind of item a repository search returns."""

    PULL_REQUEST = "pr"
    ISSUE = "issue"

    @property
    def qualifier(self) -> str:
        return f"is:{self.value}"

    @property
    def type_name(self) -> str:
        return "PullRequest" if self is SearchKind.PULL_REQUEST else "Issue"

    @property
    def references_field(self) -> str:
        if self is SearchKind.PULL_REQUEST:
            return "closingIssuesReferences"
        return "closedByPullRequestsReferences"


_SEARCH_TEMPLATE = """
    query {
        search(query: "repo:%s %s %s %s ", type: ISSUE, first: 100 , after: "%s") {
            issueCount
            edges {
                node {
                    ... on %s {
%s
                    }
                }
            }
            pageInfo {
                    hasNextPage
                    endCursor
            }
        }
    }"""

_HEAD_FIELDS = """                        id
                        number
                        url
                        title
                        state
                        labels(first: 10){
                            edges {
                                node {
                                    name
                                }
                            }
                        }
                        comments(first: 25) {
                            totalCount
                            edges {
                                node {
                                    body
                                }
                            }
                        }
                        createdAt
                        updatedAt
                        closedAt"""

_PR_FIELDS = """                        mergedAt
                        baseRefName
                        changedFiles
                        additions
                        deletions
                        isDraft
                        commits(first: 100) {
                            nodes {
                                commit {
                                    committedDate
                                }
                            }
                        }"""

_TAIL_FIELDS = """                        repository{
                            id
                        }
                        author {
                            login
                            url
                        }
                        assignees(first: 5){
                            edges {
                                node {
                                    login
                                    url
                                }
                            }
                        }
                        REFERENCES(first: 5){
                            edges {
                                node {
                                    number
                                    url
                                }
                            }
                        }
                        participants(first: 10){
                            edges {
                                node {
                                    login
                                    url
                                }
                            }
                        }"""


def _fields(kind: SearchKind) -> str:
    parts = [_HEAD_FIELDS]
    if kind is SearchKind.PULL_REQUEST:
        parts.append(_PR_FIELDS)
    parts.append(_TAIL_FIELDS.replace("REFERENCES", kind.references_field))
    return "\n".join(parts)


def search_query(
    kind: SearchKind,
    repo: str,
    labels: Iterable[str],
    end_date: str,
    start_date: str,
    cursor: str,
) -> str:
    """Build the GraphQL search query for one page of results."""
    label_text = "".join(f'label:\\"{label}\\" ' for label in labels if label)
    date_text = ""
    if end_date != default_end_date():
        date_text += f" updated:<{end_date} "
    if start_date != default_start_date():
        date_text += f" created:>{start_date} "
    return _SEARCH_TEMPLATE % (
        repo,
        kind.qualifier,
        label_text,
        date_text,
        cursor,
        kind.type_name,
        _fields(kind),
    )


# Marks a value that is passed through unchanged.
_ANY = object()


def _edges_of(node: dict[str, Any]) -> dict[str, Any]:
    return {"edges": [{"node": node}]}


_PERSON = {"login": "", "url": ""}


def _node_schema(kind: SearchKind) -> dict[str, Any]:
    schema: dict[str, Any] = {
        "id": "",
        "number": 0,
        "url": "",
        "title": "",
        "state": "",
        "labels": _edges_of({"name": ""}),
        "comments": {"totalCount": 0, "edges": [{"node": {"body": ""}}]},
        "createdAt": "",
        "updatedAt": "",
        "closedAt": "",
    }
    if kind is SearchKind.PULL_REQUEST:
        schema.update(
            {
                "mergedAt": "",
                "baseRefName": "",
                "changedFiles": 0,
                "additions": 0,
                "deletions": 0,
                "isDraft": False,
                "commits": {"nodes": [{"commit": {"committedDate": ""}}]},
            }
        )
    schema.update(
        {
            "repository": {"id": ""},
            "author": dict(_PERSON),
            "assignees": {"edges": [_ANY]},
            kind.references_field: {"edges": [_ANY]},
            "participants": _edges_of(dict(_PERSON)),
        }
    )
    return schema


def _result_schema(kind: SearchKind) -> dict[str, Any]:
    return {
        "data": {
            "search": {
                "issueCount": 0,
                "edges": [{"node": _node_schema(kind)}],
                "pageInfo": {"hasNextPage": False, "endCursor": ""},
            }
        }
    }


_SCHEMAS = {kind: _result_schema(kind) for kind in SearchKind}


def _conform(value: Any, schema: Any) -> Any:
    """Shape a decoded response to the schema, filling in empty values."""
    if schema is _ANY:
        return value
    if isinstance(schema, dict):
        source = value if isinstance(value, dict) else {}
        return {key: _conform(source.get(key), sub) for key, sub in schema.items()}
    if isinstance(schema, list):
        if not isinstance(value, list):
            return None
        return [_conform(item, schema[0]) for item in value]
    if isinstance(schema, bool):
        return value if isinstance(value, bool) else schema
    if isinstance(schema, int):
        is_int = isinstance(value, int) and not isinstance(value, bool)
        return value if is_int else schema
    return value if isinstance(value, str) else schema


def fetch_search_results(
    url: str,
    kind: SearchKind,
    repo: str,
    labels: Iterable[str],
    end_date: str,
    start_date: str,
    token: str,
) -> dict[str, Any]:
    """Fetch every page of a search and merge the edges into one result."""
    labels = list(labels)
    schema = _SCHEMAS[kind]

    def fetch(cursor: str) -> dict[str, Any]:
        query = search_query(kind, repo, labels, end_date, start_date, cursor)
        return _conform(call_api(url, query, token), schema)

    result = page = fetch("")
    merged = result["data"]["search"]
    while page["data"]["search"]["pageInfo"]["hasNextPage"]:
        page = fetch(page["data"]["search"]["pageInfo"]["endCursor"])
        current = page["data"]["search"]
        if current["edges"]:
            merged["edges"] = (merged["edges"] or []) + current["edges"]
        merged["pageInfo"] = current["pageInfo"]
    return result


_HTML_ESCAPES = (
    ("&", "\\u0026"),
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


def dump_search_results(data: dict[str, Any], output: str) -> str:
    """Write results as indented JSON to a file, or print them if that fails.

    Returns the JSON text.
    """
    text = json.dumps(data, indent=4, ensure_ascii=False)
    for char, escaped in _HTML_ESCAPES:
        text = text.replace(char, escaped)
    try:
        write_text(text, output)
    except OSError:
        print(text)
    return text


def _get_data(
    kind: SearchKind,
    domain: str,
    token: str,
    repo: str,
    output: str,
    end_date: str,
    start_date: str,
    labels: Iterable[str],
) -> None:
    url = github_url(domain)
    token = resolve_token(token)
    data = fetch_search_results(url, kind, repo, labels, end_date, start_date, token)
    dump_search_results(data, output)


def get_pr_data(
    domain: str,
    token: str,
    repo: str,
    output: str,
    end_date: str,
    start_date: str,
    labels: Iterable[str],
) -> None:
    """Fetch all matching pull requests of a repository and dump them as JSON."""
    _get_data(
        SearchKind.PULL_REQUEST, domain, token, repo, output, end_date, start_date, labels
    )


def get_issues_data(
    domain: str,
    token: str,
    repo: str,
    output: str,
    end_date: str,
    start_date: str,
    labels: Iterable[str],
) -> None:
    """Fetch all matching issues of a repository and dump them as JSON."""
    _get_data(
        SearchKind.ISSUE, domain, token, repo, output, end_date, start_date, labels
    )