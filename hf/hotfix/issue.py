from __future__ import annotations

from hf.core.result import Result
from hf.hotfix.errors import HotfixError
from hf.hotfix.github import GitHubClient
from hf.hotfix.model import HotfixNames, TrackingIssue

ISSUE_LABELS: tuple[str, ...] = ("RC",)

_BODY_TEMPLATE = """\
**Script generated description. DO NOT MODIFY**

## Metadata
- Release tag: {hotfix_tag}
- Branch: {branch}

## Actions
- To add fixes:
  1. checkout {branch}
  2. Check in fixes to the release branch.
  3. (If applied) Cherry-pick the fix to the main branch.
- To approve the push: Add "QA Approved" label and close the issue.
- To cancel the push: Close the issue directly.
"""


def issue_title(names: HotfixNames) -> str:
    return f"Hotfix {names.tag}"


def render_issue_body(names: HotfixNames) -> str:
    """Render the governance body; tags are interpolated as given."""
    return _BODY_TEMPLATE.format(hotfix_tag=names.hotfix_tag, branch=names.branch)


def create_tracking_issue(
    client: GitHubClient,
    *,
    repo: str,
    names: HotfixNames,
) -> Result[TrackingIssue, HotfixError]:
    """Open the tracking issue. Not idempotent: every call opens a new issue."""
    return client.create_issue(
        repo=repo,
        title=issue_title(names),
        labels=list(ISSUE_LABELS),
        body=render_issue_body(names),
    )
