"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from hf.core.errors import ErrorCode
from hf.output.console import Style
from hf.hotfix.errors import (
    ConfigurationError,
    DeliveryError,
    HostRequestError,
    HotfixError,
    TagNotFound,
)

if TYPE_CHECKING:
    from hf.output.console import ConsoleProtocol

__all__ = ["format_hotfix_error", "print_hotfix_error", "hotfix_error_exit_code"]


def format_hotfix_error(error: HotfixError) -> str:
    """Single-line message for the terminal failure of a run."""
    match error:
        case ConfigurationError(message=message):
            return message
        case TagNotFound(tag=tag, repo=repo):
            return f"release tag not found: {tag} ({repo})"
        case HostRequestError(operation=operation, message=message):
            return f"{operation} failed: {message}"
        case DeliveryError(message=message):
            return message


def print_hotfix_error(error: HotfixError, console: ConsoleProtocol) -> None:
    console.error(format_hotfix_error(error))
    match error:
        case ConfigurationError(hint=hint) if hint:
            console.print(f"hint: {hint}", Style.DIM)
        case HostRequestError(operation="create branch", status=422):
            console.print("hint: the hotfix branch probably exists already", Style.DIM)
        case _:
            pass


def hotfix_error_exit_code(error: HotfixError) -> int:
    match error:
        case ConfigurationError():
            return int(ErrorCode.CONFIG_ERROR)
        case TagNotFound():
            return int(ErrorCode.TAG_NOT_FOUND)
        case HostRequestError():
            return int(ErrorCode.HOST_ERROR)
        case DeliveryError():
            return int(ErrorCode.DELIVERY_ERROR)
    # Fallback for exhaustiveness
    return int(ErrorCode.HOST_ERROR)
