"""Exception types raised by the syslog bridge."""

from __future__ import annotations

import errno

_CAUSES = {
    errno.ENOENT: "socket path does not exist",
    errno.EACCES: "permission denied",
    errno.EPERM: "operation not permitted",
    errno.EPROTOTYPE: "path is not a datagram socket",
    errno.ECONNREFUSED: "connection refused, is the syslog daemon running?",
    errno.ENOTSOCK: "path is not a socket",
}


class SyslogStreamError(Exception):
    """Base class for every error raised by :mod:`lib_syslog_dgram`."""


class InvalidRecordKind(SyslogStreamError, TypeError):
    """Raised when ``write`` receives something other than a structured record."""

    def __init__(self, record: object) -> None:
        self.kind = type(record).__name__
        super().__init__(
            f"Expected a mapping log record, got {self.kind}; enable text_mode to write plain strings."
        )


class SyslogConnectionError(SyslogStreamError, OSError):
    """Raised when the datagram socket cannot be connected.

    Examples
    --------
    >>> err = SyslogConnectionError("/missing", FileNotFoundError(2, "No such file or directory"))
    >>> str(err)
    'Cannot connect to syslog socket /missing: socket path does not exist'
    """

    def __init__(self, path: str, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        code = getattr(cause, "errno", None)
        fallback = str(cause) or type(cause).__name__
        reason = _CAUSES.get(code, fallback) if code is not None else fallback
        self.reason = reason
        super().__init__(f"Cannot connect to syslog socket {path}: {reason}")
        self.errno = code

    def __str__(self) -> str:
        return self.args[0]


class ChannelClosedError(SyslogStreamError, RuntimeError):
    """Raised when submitting to a delivery channel after ``close``."""


__all__ = [
    "ChannelClosedError",
    "InvalidRecordKind",
    "SyslogConnectionError",
    "SyslogStreamError",
]
