"""Exit codes for CLI commands.

Every error variant raised by configuration is eventually mapped to one of
these values by the CLI layer.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes.

    These values are part of the CLI contract (CI pipelines branch on them)
    and should remain stable:
    - 0: Success
    - 1: User error (conflicting flags, missing version settings)
    - 2: Environment error (no build root, missing credentials)
    - 3: Build error (task graph cannot be wired)
    - 5: I/O error (receipt unreadable, unwritable or incomplete)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    BUILD_ERROR = 3
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK
