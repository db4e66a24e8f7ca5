# ghactivity

A small command-line tool that asks the GitHub GraphQL API what you have done
over a period of time, and exports pull request and issue data for a repository
as JSON.

## Installation

```
pip install .
```

This installs the `github-activity` command.

## Authentication

Every command needs a GitHub personal access token. Pass it with `--token`
(`-t`) or set the `GITHUB_TOKEN` environment variable:

```
export GITHUB_TOKEN=token
```

## Your activity

With no subcommand, `github-activity` lists the pull requests you opened, the
pull requests you reviewed and the issues you created, grouped by repository,
and ends with a line of totals. At most the first 100 items of each kind are
listed.

```
github-activity --user octocat --start 2025-01-06 --end 2025-01-10
```

Dates are given as `YYYY-MM-DD`. By default the period runs from seven days ago
to tomorrow, and the user (`--user`, `-u`) is the account you are logged in as.
There are shortcuts for other periods:

| Flag                | Period                                                    |
|---------------------|-----------------------------------------------------------|
| `-l`, `--last-week` | Monday of last week to the Saturday after it              |
| `-w`, `--this-week` | Monday of this week to the Saturday after it              |
| `-n`, `--today`     | from today to as many months ahead as the current hour    |

On a Sunday, `--last-week` starts at the Monday six days earlier.

`--domain` (`-d`) selects the server. Only `github.com` (the default) and
`github.ibm.com` are known; any other domain fails with
"unable to query github api".

## Pull request and issue data

`prs` and `issues` search a single repository and write every match as
indented JSON. The search follows every page of results and merges them.

```
github-activity prs --repo org/repo --label bug --label "good first issue" --output prs.json
github-activity issues --repo org/repo --start 2025-01-01 --output issues.json
```

- `--repo`, `-r` (required): the repository, in the form `org/repo`
- `--label`, `-l`: filter by label; repeat it to give more than one label
- `--output`, `-o`: the file to write. If it is not given, or cannot be
  written, the JSON goes to standard output
- `--start` and `--end`: if you change them from their defaults, they limit
  the results to items created after the start date and updated before the end
  date

In the JSON, the characters `&`, `<` and `>` are written as `\u0026`, `\u003c`
and `\u003e`.

## Exit status

The command exits with status 1 and prints `Error: ...` to standard error when
no token is available, a date cannot be parsed, or a request to the API fails.

## Using it from Python

The same operations are available as functions:

```python
from ghactivity.activity import get_github_activity, render_activity
from ghactivity.search import SearchKind, get_pr_data, get_issues_data, search_query
from ghactivity.dates import last_week_dates

start, end = last_week_dates()
get_github_activity("github.com", start, end, "octocat", "")
get_pr_data("github.com", "", "org/repo", "prs.json", "", "", ["bug"])
```

- `ghactivity.activity`: `activity_query`, `group_by_repository`,
  `render_activity` and `get_github_activity`, which prints the report
- `ghactivity.search`: `SearchKind`, `search_query`, `fetch_search_results`,
  `dump_search_results`, `get_pr_data` and `get_issues_data`
- `ghactivity.dates`: `default_start_date`, `default_end_date`, `today_dates`,
  `this_week_dates`, `last_week_dates`, `format_date` and `current_username`
- `ghactivity.api`: `github_url`, `resolve_token`, `call_api` and `write_text`

A failed request, or a missing token, raises `ghactivity.api.GitHubApiError`.
A date that is not in `YYYY-MM-DD` form raises `ValueError`.