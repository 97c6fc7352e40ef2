"""Severity scales on both sides of the syslog bridge.

Purpose
-------
Translate the six-step numeric scale used by structured loggers (10..60) onto
the standard syslog severities written into every message priority.

Contents
--------
* :class:`SourceLevel` - the structured logger's numeric levels.
* :class:`SyslogSeverity` - the syslog severities this package emits.
* :func:`syslog_severity` - total mapping from any integer to a severity.
* :func:`from_python_level` - lift :mod:`logging` levels onto the source scale.

System Role
-----------
Used by the formatter to compute ``facility * 8 + severity`` and by the
:mod:`logging` bridge to normalise stdlib records.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Any


class SourceLevel(IntEnum):
    """Numeric levels carried in the ``level`` field of a structured record."""

    TRACE = 10
    DEBUG = 20
    INFO = 30
    WARN = 40
    ERROR = 50
    FATAL = 60

    @classmethod
    def from_name(cls, name: str) -> "SourceLevel":
        normalized = name.strip().upper()
        if normalized == "WARNING":
            normalized = "WARN"
        elif normalized == "CRITICAL":
            normalized = "FATAL"
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc


class SyslogSeverity(IntEnum):
    """Syslog severities produced by :func:`syslog_severity`."""

    EMERG = 0
    ERR = 3
    WARNING = 4
    INFO = 6
    DEBUG = 7


_SEVERITY_TABLE = {
    SourceLevel.ERROR: SyslogSeverity.ERR,
    SourceLevel.WARN: SyslogSeverity.WARNING,
    SourceLevel.INFO: SyslogSeverity.INFO,
}
# FATAL and above are handled by the threshold check in syslog_severity.


def syslog_severity(level: Any) -> SyslogSeverity:
    """Return the syslog severity for a source ``level``.

    The mapping is total: anything that is not a recognised integer level
    degrades to :attr:`SyslogSeverity.DEBUG`.

    Examples
    --------
    >>> int(syslog_severity(60)), int(syslog_severity(50)), int(syslog_severity(30))
    (0, 3, 6)
    >>> syslog_severity(25) is SyslogSeverity.DEBUG
    True
    >>> syslog_severity("info") is SyslogSeverity.DEBUG
    True
    """

    if isinstance(level, bool) or not isinstance(level, int):
        return SyslogSeverity.DEBUG
    if level >= SourceLevel.FATAL:
        return SyslogSeverity.EMERG
    return _SEVERITY_TABLE.get(level, SyslogSeverity.DEBUG)  # type: ignore[call-overload]


def from_python_level(level: int) -> SourceLevel:
    """Translate a :mod:`logging` level integer onto :class:`SourceLevel`.

    Values between the stdlib constants round down to the nearest one.
    """

    if level >= logging.CRITICAL:
        return SourceLevel.FATAL
    if level >= logging.ERROR:
        return SourceLevel.ERROR
    if level >= logging.WARNING:
        return SourceLevel.WARN
    if level >= logging.INFO:
        return SourceLevel.INFO
    if level >= logging.DEBUG:
        return SourceLevel.DEBUG
    return SourceLevel.TRACE


__all__ = ["SourceLevel", "SyslogSeverity", "from_python_level", "syslog_severity"]
