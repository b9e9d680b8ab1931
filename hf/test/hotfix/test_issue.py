from __future__ import annotations

from hf.core.result import Ok
from hf.hotfix.github import GitHubClient
from hf.hotfix.issue import ISSUE_LABELS, create_tracking_issue, issue_title, render_issue_body
from hf.hotfix.model import HotfixNames
from hf.net.http import MockHttpClient

API = "https://api.github.com"
REPO = "acme/widgets"

EXPECTED_BODY = """\
**Script generated description. DO NOT MODIFY**

## Metadata
- Release tag: v2.3.0-hotfix
- Branch: hotfix/v2.3.0

## Actions
- To add fixes:
  1. checkout hotfix/v2.3.0
  2. Check in fixes to the release branch.
  3. (If applied) Cherry-pick the fix to the main branch.
- To approve the push: Add "QA Approved" label and close the issue.
- To cancel the push: Close the issue directly.
"""


def test_body_matches_template_exactly() -> None:
    assert render_issue_body(HotfixNames.for_tag("v2.3.0")) == EXPECTED_BODY


def test_body_interpolates_tags_verbatim() -> None:
    names = HotfixNames.for_tag("weird/{tag}")
    body = render_issue_body(names)
    assert "Release tag: weird/{tag}-hotfix" in body
    assert "Branch: hotfix/weird/{tag}" in body


def test_title_and_labels() -> None:
    assert issue_title(HotfixNames.for_tag("v2.3.0")) == "Hotfix v2.3.0"
    assert ISSUE_LABELS == ("RC",)


def test_create_tracking_issue_posts_payload() -> None:
    http = MockHttpClient()
    http.set_json(
        "POST",
        f"{API}/repos/{REPO}/issues",
        {"number": 42, "html_url": "https://github.com/acme/widgets/issues/42"},
        status=201,
    )
    client = GitHubClient(http=http, token="t")

    result = create_tracking_issue(client, repo=REPO, names=HotfixNames.for_tag("v2.3.0"))

    assert isinstance(result, Ok)
    assert result.value.url == "https://github.com/acme/widgets/issues/42"
    assert result.value.number == 42
    (call,) = http.calls
    assert call.payload == {
        "title": "Hotfix v2.3.0",
        "labels": ["RC"],
        "body": EXPECTED_BODY,
    }
