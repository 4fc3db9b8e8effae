"""Exit codes for roller CLI commands.

Values are used as process exit codes and should remain stable:
- 0: Success
- 1: User error (bad arguments, unreadable notes file)
- 2: Git error (describe/rev-list/config failed, not a repository)
- 4: Network error (provider rejected or unreachable)
- 6: Configuration error (invalid roller.toml, unknown release client)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    OK = 0
    USER_ERROR = 1
    GIT_ERROR = 2
    NETWORK_ERROR = 4
    CONFIG_ERROR = 6

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
