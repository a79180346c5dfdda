"""Error codes for CLI exit status.

These values are used as process exit codes and should remain stable:
- 0: Success
- 1: User error (bad version argument, invalid publish order)
- 2: Environment error (workspace not found, tool missing, bad config)
- 3: Step error (an install/publish/tag step exited non-zero)
- 5: I/O error (manifest or version file could not be updated)

A failing external step propagates its own exit code when it has one;
STEP_ERROR is the fallback.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    STEP_ERROR = 3
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK
