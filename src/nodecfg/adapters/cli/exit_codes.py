"""POSIX-conventional exit codes for CLI error paths.

Every ``SystemExit`` raised by a command carries one of these values so
scripts can tell a typo'd profile name from an unreadable repository.

Contents:
    * :class:`ExitCode` - IntEnum of all exit codes used by this application.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """POSIX-conventional exit codes for CLI error paths.

    Values follow sysexits.h and errno conventions where applicable:

    * 0, 1, 2: success, generic failure, usage error
    * 13: EACCES (sensitive field access refused)
    * 17: EEXIST (repository already initialized)
    * 22: EINVAL (unknown profile, malformed value)
    * 65: EX_DATAERR (stored document cannot be transformed)
    * 69: EX_UNAVAILABLE (address resolution failed)
    * 74: EX_IOERR (configuration store I/O failure)
    * 78: EX_CONFIG (invalid nodecfg settings)
    * 110: ETIMEDOUT (address resolution timed out)

    Example:
        >>> ExitCode.SUCCESS
        <ExitCode.SUCCESS: 0>
        >>> int(ExitCode.STORE_IO_ERROR)
        74
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    USAGE_ERROR = 2
    PERMISSION_DENIED = 13
    ALREADY_EXISTS = 17
    INVALID_ARGUMENT = 22
    DATA_ERROR = 65
    UNAVAILABLE = 69
    STORE_IO_ERROR = 74
    CONFIG_ERROR = 78
    TIMEOUT = 110


__all__ = ["ExitCode"]
