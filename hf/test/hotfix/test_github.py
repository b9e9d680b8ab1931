from __future__ import annotations

import pytest

from hf.core.result import Err, Ok
from hf.hotfix.errors import HostRequestError, TagNotFound
from hf.hotfix.github import GitHubClient, GitObject, RepoTag
from hf.net.http import MockHttpClient

API = "https://api.github.com"
REPO = "acme/widgets"


def _client(http: MockHttpClient, api_url: str = API) -> GitHubClient:
    return GitHubClient(http=http, token="ghs_secret", api_url=api_url)


def test_requests_are_authenticated() -> None:
    http = MockHttpClient()
    http.set_json(
        "GET",
        f"{API}/repos/{REPO}/git/ref/tags/v1",
        {"ref": "refs/tags/v1", "object": {"sha": "abc123", "type": "commit"}},
    )

    _client(http).get_tag_ref(repo=REPO, tag="v1")

    headers = http.calls[0].headers
    assert headers["Authorization"] == "Bearer ghs_secret"
    assert headers["Accept"] == "application/vnd.github+json"


def test_repr_hides_token() -> None:
    assert "ghs_secret" not in repr(_client(MockHttpClient()))


def test_get_tag_ref() -> None:
    http = MockHttpClient()
    http.set_json(
        "GET",
        f"{API}/repos/{REPO}/git/ref/tags/v2.3.0",
        {"ref": "refs/tags/v2.3.0", "object": {"sha": "abc123", "type": "commit"}},
    )
    result = _client(http).get_tag_ref(repo=REPO, tag="v2.3.0")
    assert result == Ok(GitObject(sha="abc123", type="commit"))


def test_get_tag_ref_404_is_tag_not_found() -> None:
    result = _client(MockHttpClient()).get_tag_ref(repo=REPO, tag="v9.9.9")
    assert result == Err(TagNotFound(tag="v9.9.9", repo=REPO))


def test_get_tag_ref_other_error_is_host_error() -> None:
    http = MockHttpClient()
    http.set_error("GET", f"{API}/repos/{REPO}/git/ref/tags/v1", status=401, message="Unauthorized")
    result = _client(http).get_tag_ref(repo=REPO, tag="v1")
    assert isinstance(result, Err)
    assert isinstance(result.error, HostRequestError)
    assert result.error.status == 401
    assert result.error.operation == "get tag ref"


def test_get_tag_ref_unexpected_payload() -> None:
    http = MockHttpClient()
    http.set_json("GET", f"{API}/repos/{REPO}/git/ref/tags/v1", [{"ref": "refs/tags/v1"}])
    result = _client(http).get_tag_ref(repo=REPO, tag="v1")
    assert isinstance(result, Err)
    assert isinstance(result.error, HostRequestError)


def test_list_tags_follows_pages(monkeypatch: pytest.MonkeyPatch) -> None:
    from hf.hotfix import github as github_mod

    monkeypatch.setattr(github_mod, "TAGS_PER_PAGE", 2)
    http = MockHttpClient()
    http.set_json(
        "GET",
        f"{API}/repos/{REPO}/tags?per_page=2&page=1",
        [
            {"name": "v1", "commit": {"sha": "s1"}},
            {"name": "v2", "commit": {"sha": "s2"}},
        ],
    )
    http.set_json(
        "GET",
        f"{API}/repos/{REPO}/tags?per_page=2&page=2",
        [{"name": "v3", "commit": {"sha": "s3"}}, {"bogus": True}],
    )
    http.set_json("GET", f"{API}/repos/{REPO}/tags?per_page=2&page=3", [])

    result = _client(http).list_tags(repo=REPO)

    assert result == Ok(
        [RepoTag("v1", "s1"), RepoTag("v2", "s2"), RepoTag("v3", "s3")]
    )
    assert len(http.calls) == 3


def test_list_tags_stops_on_short_page() -> None:
    http = MockHttpClient()
    http.set_json(
        "GET",
        f"{API}/repos/{REPO}/tags?per_page=100&page=1",
        [{"name": "v1", "commit": {"sha": "s1"}}],
    )
    result = _client(http).list_tags(repo=REPO)
    assert result == Ok([RepoTag("v1", "s1")])
    assert len(http.calls) == 1


def test_create_branch_payload() -> None:
    http = MockHttpClient()
    http.set_json(
        "POST",
        f"{API}/repos/{REPO}/git/refs",
        {"ref": "refs/heads/hotfix/v1", "object": {"sha": "abc123"}},
        status=201,
    )
    result = _client(http).create_branch(repo=REPO, ref="refs/heads/hotfix/v1", sha="abc123")
    assert result == Ok(None)
    assert http.calls[0].payload == {"ref": "refs/heads/hotfix/v1", "sha": "abc123"}


def test_create_branch_conflict_is_host_error() -> None:
    http = MockHttpClient()
    http.set_error(
        "POST",
        f"{API}/repos/{REPO}/git/refs",
        status=422,
        message="Unprocessable Entity",
        detail="Reference already exists",
    )
    result = _client(http).create_branch(repo=REPO, ref="refs/heads/hotfix/v1", sha="abc123")
    assert isinstance(result, Err)
    assert isinstance(result.error, HostRequestError)
    assert result.error.status == 422
    assert "Reference already exists" in result.error.message


def test_create_issue_requires_html_url() -> None:
    http = MockHttpClient()
    http.set_json("POST", f"{API}/repos/{REPO}/issues", {"number": 1}, status=201)
    result = _client(http).create_issue(repo=REPO, title="t", labels=["RC"], body="b")
    assert isinstance(result, Err)
    assert isinstance(result.error, HostRequestError)


def test_enterprise_api_url() -> None:
    http = MockHttpClient()
    client = _client(http, api_url="https://ghe.example/api/v3/")
    client.get_tag_ref(repo=REPO, tag="v1")
    assert http.calls[0].url == f"https://ghe.example/api/v3/repos/{REPO}/git/ref/tags/v1"


def test_get_tag_ref_quotes_tag_name() -> None:
    http = MockHttpClient()
    http.set_json(
        "GET",
        f"{API}/repos/{REPO}/git/ref/tags/v1",
        {"ref": "refs/tags/v1", "object": {"sha": "wrong", "type": "commit"}},
    )
    http.set_json(
        "GET",
        f"{API}/repos/{REPO}/git/ref/tags/release/v1%23rc%2550",
        {"ref": "refs/tags/release/v1#rc%50", "object": {"sha": "right", "type": "commit"}},
    )

    result = _client(http).get_tag_ref(repo=REPO, tag="release/v1#rc%50")

    assert result == Ok(GitObject(sha="right", type="commit"))
    assert [c.url for c in http.calls] == [
        f"{API}/repos/{REPO}/git/ref/tags/release/v1%23rc%2550"
    ]


def test_get_tag_ref_quoted_tag_not_found_keeps_raw_name() -> None:
    result = _client(MockHttpClient()).get_tag_ref(repo=REPO, tag="v1#rc")
    assert result == Err(TagNotFound(tag="v1#rc", repo=REPO))


def test_list_tags_has_no_page_cap(monkeypatch: pytest.MonkeyPatch) -> None:
    from hf.hotfix import github as github_mod

    monkeypatch.setattr(github_mod, "TAGS_PER_PAGE", 1)
    http = MockHttpClient()
    for page in range(1, 61):
        http.set_json(
            "GET",
            f"{API}/repos/{REPO}/tags?per_page=1&page={page}",
            [{"name": f"v{page}", "commit": {"sha": f"s{page}"}}],
        )
    http.set_json("GET", f"{API}/repos/{REPO}/tags?per_page=1&page=61", [])

    result = _client(http).list_tags(repo=REPO)

    assert isinstance(result, Ok)
    assert len(result.value) == 60
    assert result.value[-1] == RepoTag("v60", "s60")
