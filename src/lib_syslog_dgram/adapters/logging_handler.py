"""Bridge from :mod:`logging` to :class:`lib_syslog_dgram.SyslogStream`.

Purpose
-------
Let applications that log through the standard library forward records to
syslog with the same structured body as native stream users.

Contents
--------
* :class:`SyslogHandler` - :class:`logging.Handler` calling ``stream.write``.
* :func:`record_to_mapping` - convert a :class:`logging.LogRecord`.

Records from ``lib_syslog_dgram`` loggers are dropped by the handler.
"""

from __future__ import annotations

import logging
import socket
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from lib_syslog_dgram.domain import from_python_level

if TYPE_CHECKING:
    from lib_syslog_dgram.lib_syslog_dgram import SyslogStream

_PACKAGE_LOGGER = "lib_syslog_dgram"

_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))) | {"message", "asctime"}


def record_to_mapping(record: logging.LogRecord, *, hostname: str | None = None) -> dict[str, Any]:
    """Return the structured form of ``record``.

    Attributes passed through ``extra=`` are copied into the mapping; the
    standard :class:`logging.LogRecord` attributes are not.

    Examples
    --------
    >>> rec = logging.LogRecord("app.db", logging.WARNING, __file__, 1, "slow %s", ("query",), None)
    >>> rec.table = "users"
    >>> payload = record_to_mapping(rec, hostname="h")
    >>> payload["level"], payload["msg"], payload["table"]
    (40, 'slow query', 'users')
    """

    payload: dict[str, Any] = {
        "name": record.name,
        "hostname": hostname or socket.gethostname(),
        "pid": record.process,
        "level": int(from_python_level(record.levelno)),
        "msg": record.getMessage(),
        "time": datetime.fromtimestamp(record.created, tz=timezone.utc),
    }
    for key, value in vars(record).items():
        if key in _RESERVED_ATTRS or key in payload or key.startswith("_"):
            continue
        payload[key] = value
    if record.exc_info:
        payload["err"] = logging.Formatter().formatException(record.exc_info)
    elif record.exc_text:
        payload["err"] = record.exc_text
    if record.stack_info:
        payload["stack"] = record.stack_info
    return payload


class _SkipOwnRecords(logging.Filter):
    """Reject records emitted by ``lib_syslog_dgram`` loggers."""

    def filter(self, record: logging.LogRecord) -> bool:
        return not (record.name == _PACKAGE_LOGGER or record.name.startswith(_PACKAGE_LOGGER + "."))


class SyslogHandler(logging.Handler):
    """Emit :mod:`logging` records through a :class:`SyslogStream`."""

    def __init__(self, stream: "SyslogStream", level: int = logging.NOTSET, *, close_stream: bool = True) -> None:
        super().__init__(level)
        self.addFilter(_SkipOwnRecords())
        self._stream = stream
        self._close_stream = close_stream

    @property
    def stream(self) -> "SyslogStream":
        return self._stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._stream.write(record_to_mapping(record, hostname=self._stream.identity.hostname))
        except Exception:  # noqa: BLE001
            self.handleError(record)

    def close(self) -> None:
        try:
            if self._close_stream:
                self._stream.close()
        finally:
            super().close()


__all__ = ["SyslogHandler", "record_to_mapping"]
