"""Hotfix pipeline: branch -> tracking issue -> notification.

Steps run strictly in order and the first ``Err`` ends the run. Nothing is
rolled back: a branch created before a failed issue stays, and so does an
issue created before a failed notification.
"""

from __future__ import annotations

from hf.core.config import HotfixInputs
from hf.core.result import Err, Ok, Result
from hf.hotfix.branch import materialize_branch, resolve_tag_commit
from hf.hotfix.errors import HotfixError
from hf.hotfix.github import GitHubClient
from hf.hotfix.issue import ISSUE_LABELS, create_tracking_issue, issue_title
from hf.hotfix.model import HotfixBranch, HotfixNames, HotfixOutcome
from hf.hotfix.notify import notification_header, notify
from hf.hotfix.resolve import TagResolver, resolver_for
from hf.net.http import HttpClient
from hf.output.console import ConsoleProtocol, Style


def _plan(
    *,
    github: GitHubClient,
    repo: str,
    names: HotfixNames,
    resolver: TagResolver,
    console: ConsoleProtocol,
) -> Result[HotfixOutcome, HotfixError]:
    sha = resolve_tag_commit(github, repo=repo, names=names, resolver=resolver)
    if isinstance(sha, Err):
        return sha

    branch = HotfixBranch(name=names.branch, ref=names.branch_ref, sha=sha.value)
    console.print(f"would create {branch.ref} at {branch.short_sha}", Style.DIM)
    console.print(
        f"would open issue '{issue_title(names)}' labels={list(ISSUE_LABELS)}", Style.DIM
    )
    console.print(f"would notify: {notification_header(names)}", Style.DIM)
    return Ok(HotfixOutcome(names=names, branch=branch, issue=None, notified=False, dry_run=True))


def run_hotfix(
    *,
    github: GitHubClient,
    http: HttpClient,
    repo: str,
    tag: str,
    webhook_url: str,
    resolver: TagResolver,
    console: ConsoleProtocol,
    dry_run: bool = False,
) -> Result[HotfixOutcome, HotfixError]:
    """Cut a hotfix for ``tag`` in ``repo``.

    Args:
        github: Authenticated client used for the branch and the issue.
        http: Transport used for the webhook.
        repo: Repository as ``owner/name``.
        tag: Existing release tag.
        webhook_url: Chat incoming-webhook URL.
        resolver: Tag resolution strategy.
        console: Progress output.
        dry_run: Resolve the tag only; create nothing.

    Returns:
        Ok(HotfixOutcome), or Err with the first error met.
    """
    names = HotfixNames.for_tag(tag)
    console.header(f"Hotfix {names.tag} ({repo})")

    if dry_run:
        return _plan(github=github, repo=repo, names=names, resolver=resolver, console=console)

    console.print(f"resolving tag {names.tag} ...", Style.DIM)
    branch = materialize_branch(github, repo=repo, names=names, resolver=resolver)
    if isinstance(branch, Err):
        return branch
    console.success(f"branch {branch.value.name} created at {branch.value.short_sha}")

    issue = create_tracking_issue(github, repo=repo, names=names)
    if isinstance(issue, Err):
        return issue
    console.success(f"issue opened: {issue.value.url}")

    sent = notify(http, webhook_url=webhook_url, names=names, issue_url=issue.value.url)
    if isinstance(sent, Err):
        return sent
    console.success("notification sent")

    return Ok(
        HotfixOutcome(names=names, branch=branch.value, issue=issue.value, notified=True)
    )


def run_with_inputs(
    inputs: HotfixInputs,
    *,
    http: HttpClient,
    console: ConsoleProtocol,
    dry_run: bool = False,
) -> Result[HotfixOutcome, HotfixError]:
    github = GitHubClient(http=http, token=inputs.github_token, api_url=inputs.api_url)
    return run_hotfix(
        github=github,
        http=http,
        repo=inputs.repository,
        tag=inputs.tag,
        webhook_url=inputs.webhook_url,
        resolver=resolver_for(inputs.tag_strategy),
        console=console,
        dry_run=dry_run,
    )
