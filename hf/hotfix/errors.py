from __future__ import annotations

from dataclasses import dataclass

from hf.core.config import ConfigurationError

__all__ = [
    "ConfigurationError",
    "DeliveryError",
    "HostRequestError",
    "HotfixError",
    "TagNotFound",
]


@dataclass(frozen=True, slots=True)
class TagNotFound:
    tag: str
    repo: str


@dataclass(frozen=True, slots=True)
class HostRequestError:
    """A GitHub API call (git data or issues) failed."""

    operation: str
    status: int  # 0 for network errors
    message: str


@dataclass(frozen=True, slots=True)
class DeliveryError:
    """The chat webhook did not accept the notification."""

    status: int  # 0 for network errors
    message: str


HotfixError = ConfigurationError | TagNotFound | HostRequestError | DeliveryError
