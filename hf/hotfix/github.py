"""GitHub REST client for the calls a hotfix run makes.

Only git data (refs, tags) and issue creation are covered. The repository is
always an explicit ``owner/name`` argument.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

from hf.core.config import DEFAULT_API_URL
from hf.core.result import Err, Ok, Result
from hf.core.structured import as_obj_list, as_str_dict, get_int, get_str, get_table
from hf.hotfix.errors import HostRequestError, HotfixError, TagNotFound
from hf.hotfix.model import TrackingIssue
from hf.net.http import HttpClient, HttpError, decode_json

TAGS_PER_PAGE = 100


@dataclass(frozen=True, slots=True)
class GitObject:
    sha: str
    type: str  # "commit" or "tag" (annotated tag object)


@dataclass(frozen=True, slots=True)
class RepoTag:
    name: str
    sha: str


def _host_error(operation: str, error: HttpError) -> HostRequestError:
    return HostRequestError(operation=operation, status=error.status, message=str(error))


def _parse_git_object(obj: object, *, operation: str, url: str) -> Result[GitObject, HotfixError]:
    data = as_str_dict(obj)
    target = get_table(data, "object") if data is not None else None
    if target is None:
        return Err(HostRequestError(operation, 0, f"unexpected payload from {url}"))

    sha = get_str(target, "sha")
    kind = get_str(target, "type")
    if sha is None or kind is None:
        return Err(HostRequestError(operation, 0, f"missing object sha/type in {url}"))
    return Ok(GitObject(sha=sha, type=kind))


class GitHubClient:
    """Authenticated GitHub API client.

    All methods return ``Err(HostRequestError)`` on any non-2xx answer or
    transport failure. ``get_tag_ref`` additionally maps 404 to ``TagNotFound``.
    """

    def __init__(self, *, http: HttpClient, token: str, api_url: str = DEFAULT_API_URL) -> None:
        self._http = http
        self._token = token
        self.api_url = api_url.rstrip("/")

    def __repr__(self) -> str:
        return f"GitHubClient(api_url={self.api_url!r})"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def url(self, path: str) -> str:
        return f"{self.api_url}/{path}"

    def _get_json(self, path: str) -> Result[object, HttpError]:
        result = self._http.get(self.url(path), headers=self._headers())
        if isinstance(result, Err):
            return result
        return decode_json(result.value)

    def _post_json(self, path: str, payload: object) -> Result[object, HttpError]:
        result = self._http.post_json(self.url(path), payload, headers=self._headers())
        if isinstance(result, Err):
            return result
        return decode_json(result.value)

    def get_tag_ref(self, *, repo: str, tag: str) -> Result[GitObject, HotfixError]:
        """Look up ``refs/tags/<tag>`` directly."""
        operation = "get tag ref"
        # Tag names may contain "#", "%" or "?"; slashes are part of the ref path.
        path = f"repos/{repo}/git/ref/tags/{quote(tag, safe='/')}"
        result = self._get_json(path)
        if isinstance(result, Err):
            if result.error.status == 404:
                return Err(TagNotFound(tag=tag, repo=repo))
            return Err(_host_error(operation, result.error))
        return _parse_git_object(result.value, operation=operation, url=self.url(path))

    def get_tag_object(self, *, repo: str, sha: str) -> Result[GitObject, HotfixError]:
        """Read an annotated tag object; its ``object`` is what the tag points at."""
        operation = "get tag object"
        path = f"repos/{repo}/git/tags/{quote(sha, safe='')}"
        result = self._get_json(path)
        if isinstance(result, Err):
            return Err(_host_error(operation, result.error))
        return _parse_git_object(result.value, operation=operation, url=self.url(path))

    def list_tags(self, *, repo: str) -> Result[list[RepoTag], HotfixError]:
        """List every tag of the repository, following pages until a short one."""
        operation = "list tags"
        out: list[RepoTag] = []
        page = 0
        while True:
            page += 1
            path = f"repos/{repo}/tags?per_page={TAGS_PER_PAGE}&page={page}"
            result = self._get_json(path)
            if isinstance(result, Err):
                return Err(_host_error(operation, result.error))

            items = as_obj_list(result.value)
            if items is None:
                return Err(HostRequestError(operation, 0, f"unexpected tags payload: {repo}"))

            for item in items:
                d = as_str_dict(item)
                if d is None:
                    continue
                name = d.get("name")
                commit = get_table(d, "commit")
                sha = get_str(commit, "sha") if commit is not None else None
                # Tag names are matched exactly later; keep them unstripped.
                if not isinstance(name, str) or sha is None:
                    continue
                out.append(RepoTag(name=name, sha=sha))

            if len(items) < TAGS_PER_PAGE:
                return Ok(out)

    def create_branch(self, *, repo: str, ref: str, sha: str) -> Result[None, HotfixError]:
        """Create ``ref`` (a full ``refs/heads/...`` name) pointing at ``sha``."""
        result = self._post_json(f"repos/{repo}/git/refs", {"ref": ref, "sha": sha})
        if isinstance(result, Err):
            return Err(_host_error("create branch", result.error))
        return Ok(None)

    def create_issue(
        self,
        *,
        repo: str,
        title: str,
        labels: list[str],
        body: str,
    ) -> Result[TrackingIssue, HotfixError]:
        operation = "create issue"
        payload = {"title": title, "labels": labels, "body": body}
        result = self._post_json(f"repos/{repo}/issues", payload)
        if isinstance(result, Err):
            return Err(_host_error(operation, result.error))

        data = as_str_dict(result.value)
        html_url = data.get("html_url") if data is not None else None
        # Propagated downstream untouched, so no stripping here.
        if data is None or not isinstance(html_url, str) or not html_url:
            return Err(HostRequestError(operation, 0, f"missing html_url in issue payload: {repo}"))
        return Ok(TrackingIssue(url=html_url, number=get_int(data, "number")))
