"""Process exit codes.

Every command maps its outcome onto one of these values. Failures of any kind
(usage error, git error, failed sub-tool) exit with the same code so wrapping
scripts only need to test for non-zero.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    FAILURE = 1
