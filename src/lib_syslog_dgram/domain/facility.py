"""Syslog facility codes exported as a read-only lookup table.

Purpose
-------
Give callers symbolic names for the facility argument of
:class:`lib_syslog_dgram.SyslogStream` instead of bare integers.

Contents
--------
* :data:`FACILITY` - immutable mapping from facility name to code.
* :func:`resolve_facility` - accept a name or a code and return the code.

System Role
-----------
Pure domain data consumed by :mod:`lib_syslog_dgram.domain.stream_config` and
the CLI ``facilities`` command.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

FACILITY: Mapping[str, int] = MappingProxyType(
    {
        "kern": 0,
        "user": 1,
        "mail": 2,
        "daemon": 3,
        "auth": 4,
        "syslog": 5,
        "lpr": 6,
        "news": 7,
        "uucp": 8,
        "authpriv": 10,
        "ftp": 11,
        "cron": 15,
        "local0": 16,
        "local1": 17,
        "local2": 18,
        "local3": 19,
        "local4": 20,
        "local5": 21,
        "local6": 22,
        "local7": 23,
    }
)
#: Codes 9 and 12-14 are reserved in the classic table and have no name here.

MIN_FACILITY = 0
MAX_FACILITY = 23


def resolve_facility(value: int | str) -> int:
    """Return the numeric facility for ``value``.

    Strings are looked up case-insensitively in :data:`FACILITY`; numeric
    strings and integers are range-checked against ``0..23``.

    Examples
    --------
    >>> resolve_facility("LOCAL3")
    19
    >>> resolve_facility("4")
    4
    >>> resolve_facility(1)
    1
    """

    if isinstance(value, bool):
        raise ValueError(f"Unsupported syslog facility: {value!r}")
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in FACILITY:
            return FACILITY[normalized]
        try:
            code = int(normalized)
        except ValueError as exc:
            raise ValueError(f"Unknown syslog facility: {value!r}") from exc
    elif isinstance(value, int):
        code = value
    else:
        raise ValueError(f"Unsupported syslog facility: {value!r}")
    if not MIN_FACILITY <= code <= MAX_FACILITY:
        raise ValueError(f"Syslog facility must be between {MIN_FACILITY} and {MAX_FACILITY}, got {code}")
    return code


__all__ = ["FACILITY", "MAX_FACILITY", "MIN_FACILITY", "resolve_facility"]
