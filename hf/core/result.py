"""Result type used instead of exceptions across module boundaries.

Every call that talks to GitHub or the chat webhook returns either ``Ok``
carrying the value or ``Err`` carrying a typed error. Callers branch with
``isinstance`` (or pattern matching) and stop at the first ``Err``:

    created = client.create_branch(repo=repo, ref=names.branch_ref, sha=sha)
    if isinstance(created, Err):
        return created
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome holding ``value``."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed outcome holding ``error``."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Union[Ok[T], Err[E]]
