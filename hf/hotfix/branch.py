from __future__ import annotations

from hf.core.result import Err, Ok, Result
from hf.hotfix.errors import HotfixError
from hf.hotfix.github import GitHubClient
from hf.hotfix.model import HotfixBranch, HotfixNames
from hf.hotfix.resolve import TagResolver


def resolve_tag_commit(
    client: GitHubClient,
    *,
    repo: str,
    names: HotfixNames,
    resolver: TagResolver,
) -> Result[str, HotfixError]:
    return resolver.resolve(client, repo=repo, tag=names.tag)


def materialize_branch(
    client: GitHubClient,
    *,
    repo: str,
    names: HotfixNames,
    resolver: TagResolver,
) -> Result[HotfixBranch, HotfixError]:
    """Create ``hotfix/<tag>`` at the commit the release tag points at.

    No check for an existing branch: the host rejects the ref (HTTP 422) and
    that surfaces as a HostRequestError.
    """
    sha = resolve_tag_commit(client, repo=repo, names=names, resolver=resolver)
    if isinstance(sha, Err):
        return sha

    created = client.create_branch(repo=repo, ref=names.branch_ref, sha=sha.value)
    if isinstance(created, Err):
        return created

    return Ok(HotfixBranch(name=names.branch, ref=names.branch_ref, sha=sha.value))
