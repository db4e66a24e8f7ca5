import json

import pytest
import responses

from ghactivity import api

URL = "https://api.github.com/graphql"


@pytest.fixture
def mocked_api():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def test_github_url_known_domains():
    assert api.github_url("github.com") == "https://api.github.com/graphql"
    assert api.github_url("github.ibm.com") == "https://github.ibm.com/api/graphql"


def test_github_url_unknown_domain_is_empty():
    assert api.github_url("example.com") == ""


def test_resolve_token_prefers_argument(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "secret")
    assert api.resolve_token("token") == "token"


def test_resolve_token_falls_back_to_environment(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "secret")
    assert api.resolve_token("") == "secret"


def test_resolve_token_missing(monkeypatch):
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    with pytest.raises(api.GitHubApiError, match="no Github token specified"):
        api.resolve_token("")


def test_call_api_sends_query_and_headers(mocked_api):
    mocked_api.add(responses.POST, URL, json={"data": {"ok": True}}, status=200)
    result = api.call_api(URL, "query { viewer }", "token")
    assert result == {"data": {"ok": True}}
    request = mocked_api.calls[0].request
    assert request.headers["Authorization"] == "token token"
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.body) == {"query": "query { viewer }"}


def test_call_api_non_200_status(mocked_api):
    mocked_api.add(responses.POST, URL, json={}, status=401)
    with pytest.raises(api.GitHubApiError, match="error querying github api: 401"):
        api.call_api(URL, "query", "token")


def test_call_api_connection_failure(mocked_api):
    with pytest.raises(api.GitHubApiError, match="unable to query github api"):
        api.call_api(URL, "query", "token")


def test_call_api_empty_url():
    with pytest.raises(api.GitHubApiError, match="unable to query github api"):
        api.call_api("", "query", "token")


def test_call_api_invalid_json(mocked_api):
    mocked_api.add(responses.POST, URL, body="not json", status=200)
    with pytest.raises(api.GitHubApiError, match="cannot unmarshal json"):
        api.call_api(URL, "query", "token")


def test_call_api_non_object_json(mocked_api):
    mocked_api.add(responses.POST, URL, json=[1, 2], status=200)
    with pytest.raises(api.GitHubApiError, match="cannot unmarshal json"):
        api.call_api(URL, "query", "token")


def test_write_text_round_trip(tmp_path):
    target = tmp_path / "out.json"
    api.write_text('{"a": 1}', str(target))
    assert target.read_text(encoding="utf-8") == '{"a": 1}'


def test_write_text_replaces_content(tmp_path):
    target = tmp_path / "out.txt"
    target.write_text("old content that is longer", encoding="utf-8")
    api.write_text("new", str(target))
    assert target.read_text(encoding="utf-8") == "new"


def test_write_text_bad_path(tmp_path):
    with pytest.raises(OSError):
        api.write_text("x", str(tmp_path / "missing" / "out.txt"))