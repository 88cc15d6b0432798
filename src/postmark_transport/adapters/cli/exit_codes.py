"""POSIX-conventional exit codes for CLI error paths.

Every ``SystemExit`` raised by a command carries one of these values, chosen
from sysexits.h where a matching code exists.

Contents:
    * :class:`ExitCode` - IntEnum of all exit codes used by this application.
    * :func:`exit_code_for` - map a transport error kind to its exit code.
"""

from __future__ import annotations

from enum import IntEnum

from postmark_transport.domain.enums import ErrorKind


class ExitCode(IntEnum):
    """Exit codes for CLI error paths.

    Example:
        >>> int(ExitCode.CONFIG_ERROR)
        78
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    FILE_NOT_FOUND = 2
    INVALID_ARGUMENT = 22
    API_FAILURE = 69  # EX_UNAVAILABLE
    AUTH_FAILURE = 77  # EX_NOPERM
    CONFIG_ERROR = 78  # EX_CONFIG


_EXIT_CODES_BY_KIND: dict[ErrorKind, ExitCode] = {
    ErrorKind.CONFIGURATION: ExitCode.CONFIG_ERROR,
    ErrorKind.VALIDATION: ExitCode.INVALID_ARGUMENT,
    ErrorKind.AUTH: ExitCode.AUTH_FAILURE,
    ErrorKind.SERVER: ExitCode.API_FAILURE,
    ErrorKind.UNAVAILABLE: ExitCode.API_FAILURE,
    ErrorKind.UNKNOWN_API: ExitCode.API_FAILURE,
    ErrorKind.PROTOCOL: ExitCode.API_FAILURE,
    ErrorKind.DELIVERY: ExitCode.API_FAILURE,
}


def exit_code_for(kind: ErrorKind) -> ExitCode:
    """Return the exit code for a transport error kind.

    Example:
        >>> exit_code_for(ErrorKind.AUTH)
        <ExitCode.AUTH_FAILURE: 77>
    """
    return _EXIT_CODES_BY_KIND.get(kind, ExitCode.GENERAL_ERROR)


__all__ = ["ExitCode", "exit_code_for"]
