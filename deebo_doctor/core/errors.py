"""Error codes for CLI exit status.

The doctor only distinguishes between a clean run, a user mistake (bad
option, unreadable settings file) and an environment that failed at least
one check.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the doctor CLI.

    These values are used as process exit codes and should remain stable:
    - 0: Every check passed or only warned
    - 1: User error (bad input, invalid settings file)
    - 2: Environment error (at least one check failed)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        """Check if this code indicates success."""
        return self == ErrorCode.OK
