from __future__ import annotations

from dataclasses import dataclass

HOTFIX_SUFFIX = "-hotfix"
BRANCH_PREFIX = "hotfix/"


def get_hotfix_tag(tag: str) -> str:
    return f"{tag}{HOTFIX_SUFFIX}"


@dataclass(frozen=True, slots=True)
class HotfixNames:
    """Every name derived from a release tag, computed once per run."""

    tag: str
    hotfix_tag: str
    branch: str  # hotfix/<tag>

    @classmethod
    def for_tag(cls, tag: str) -> HotfixNames:
        return cls(tag=tag, hotfix_tag=get_hotfix_tag(tag), branch=f"{BRANCH_PREFIX}{tag}")

    @property
    def branch_ref(self) -> str:
        # Used verbatim in the API payload; never URL-encoded.
        return f"refs/heads/{self.branch}"


@dataclass(frozen=True, slots=True)
class HotfixBranch:
    name: str
    ref: str
    sha: str

    @property
    def short_sha(self) -> str:
        return self.sha[:8]


@dataclass(frozen=True, slots=True)
class TrackingIssue:
    url: str
    number: int | None = None


@dataclass(frozen=True, slots=True)
class HotfixOutcome:
    names: HotfixNames
    branch: HotfixBranch
    issue: TrackingIssue | None
    notified: bool
    dry_run: bool = False
