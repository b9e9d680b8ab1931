"""Release tag -> commit sha resolution strategies.

``ref`` asks for the tag ref directly (one request, preferred). ``list``
enumerates every tag and matches the name exactly, for hosts whose direct
ref lookup is unreliable. The strategy is picked by configuration and used
for the whole run.
"""

from __future__ import annotations

from typing import Protocol

from hf.core.config import TagStrategy
from hf.core.result import Err, Ok, Result
from hf.hotfix.errors import HostRequestError, HotfixError, TagNotFound
from hf.hotfix.github import GitHubClient

# Annotated tags may point at other tag objects; bound the chain.
_MAX_TAG_DEPTH = 5


class TagResolver(Protocol):
    def resolve(self, client: GitHubClient, *, repo: str, tag: str) -> Result[str, HotfixError]:
        """Return the commit sha ``tag`` points at, or ``TagNotFound``."""
        ...


class RefLookupResolver:
    """Resolve through ``GET /repos/{repo}/git/ref/tags/{tag}``."""

    name = "ref"

    def resolve(self, client: GitHubClient, *, repo: str, tag: str) -> Result[str, HotfixError]:
        ref = client.get_tag_ref(repo=repo, tag=tag)
        if isinstance(ref, Err):
            return ref

        obj = ref.value
        for _ in range(_MAX_TAG_DEPTH):
            if obj.type != "tag":
                break
            peeled = client.get_tag_object(repo=repo, sha=obj.sha)
            if isinstance(peeled, Err):
                return peeled
            obj = peeled.value

        if obj.type != "commit":
            return Err(
                HostRequestError(
                    operation="get tag ref",
                    status=0,
                    message=f"tag {tag} does not point at a commit (got {obj.type})",
                )
            )
        return Ok(obj.sha)


class TagListResolver:
    """Resolve by listing every tag and matching the name exactly."""

    name = "list"

    def resolve(self, client: GitHubClient, *, repo: str, tag: str) -> Result[str, HotfixError]:
        tags = client.list_tags(repo=repo)
        if isinstance(tags, Err):
            return tags

        for candidate in tags.value:
            if candidate.name == tag:
                return Ok(candidate.sha)
        return Err(TagNotFound(tag=tag, repo=repo))


TAG_RESOLVERS: dict[str, TagResolver] = {
    RefLookupResolver.name: RefLookupResolver(),
    TagListResolver.name: TagListResolver(),
}


def resolver_for(strategy: TagStrategy) -> TagResolver:
    return TAG_RESOLVERS[strategy]
