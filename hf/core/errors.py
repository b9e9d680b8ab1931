"""Process exit codes.

One code per failure class of a hotfix run, so that a calling workflow can
tell a bad invocation from a failed external service:
- 0: Success
- 1: Configuration error (missing or invalid input, nothing was attempted)
- 2: Release tag not found (nothing was created)
- 3: Source-control / issue tracker request failed
- 4: Notification delivery failed
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands. Values are stable."""

    OK = 0
    CONFIG_ERROR = 1
    TAG_NOT_FOUND = 2
    HOST_ERROR = 3
    DELIVERY_ERROR = 4
