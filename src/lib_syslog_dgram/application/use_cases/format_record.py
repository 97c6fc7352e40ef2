"""Use case turning a log record into a syslog datagram.

Purpose
-------
Produce the exact bytes handed to the transport:
``<priority>timestamp hostname name[pid]:`` followed by the JSON body and a
newline, UTF-8 encoded.

Contents
--------
* :func:`format_record` - structured (mapping) records.
* :func:`format_text` - legacy plain-text lines.
* :func:`create_formatter` - factory freezing config, identity and clock.

System Role
-----------
Pure function over its inputs; the only ambient data (hostname, pid, clock)
arrives through :class:`SystemIdentity` and :class:`ClockPort` so tests stay
deterministic.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from lib_syslog_dgram.application.ports import ClockPort, SystemIdentity
from lib_syslog_dgram.domain import InvalidRecordKind, StreamConfig, SyslogSeverity, safe_dumps, syslog_severity

FormatCallable = Callable[[Any], bytes]


def priority(facility: int, level: Any) -> int:
    """Return ``facility * 8 + severity`` for a source ``level``.

    Examples
    --------
    >>> priority(1, 30)
    14
    >>> priority(16, 60)
    128
    """

    return facility * 8 + int(syslog_severity(level))


def format_header(*, pri: int, timestamp: str, hostname: str, name: str, pid: int) -> str:
    """Render the classic BSD syslog header.

    Examples
    --------
    >>> format_header(pri=14, timestamp="2024-01-01T00:00:00Z", hostname="h", name="app", pid=1234)
    '<14>2024-01-01T00:00:00Z h app[1234]:'
    """

    return f"<{pri}>{timestamp} {hostname} {name}[{pid}]:"


def format_record(
    record: Any,
    config: StreamConfig,
    *,
    identity: SystemIdentity,
    clock: ClockPort,
) -> bytes:
    """Format a structured ``record`` into a syslog datagram.

    Raises
    ------
    InvalidRecordKind
        When ``record`` is not a mapping.
    """

    if not isinstance(record, Mapping):
        raise InvalidRecordKind(record)

    body = safe_dumps(record)
    header = format_header(
        pri=priority(config.facility, record.get("level")),
        timestamp=_render_time(record.get("time"), clock),
        hostname=record.get("hostname") or identity.hostname,
        name=config.name,
        pid=identity.pid,
    )
    return (header + body + "\n").encode("utf-8")


def format_text(
    text: str,
    config: StreamConfig,
    *,
    identity: SystemIdentity,
    clock: ClockPort,
) -> bytes:
    """Format a plain-text line.

    A line holding a JSON object is decoded and formatted like a structured
    record. Anything else is sent verbatim with INFO severity.
    """

    decoded = _decode_json_object(text)
    if decoded is not None:
        return format_record(decoded, config, identity=identity, clock=clock)
    header = format_header(
        pri=config.facility * 8 + SyslogSeverity.INFO,
        timestamp=_render_time(None, clock),
        hostname=identity.hostname,
        name=config.name,
        pid=identity.pid,
    )
    return (header + text.rstrip("\n") + "\n").encode("utf-8")


def create_formatter(
    config: StreamConfig,
    *,
    identity: SystemIdentity,
    clock: ClockPort,
    text_mode: bool = False,
) -> FormatCallable:
    """Return a single-argument formatter bound to the stream's collaborators.

    Examples
    --------
    >>> from datetime import timezone
    >>> class FixedClock:
    ...     def now(self):
    ...         return datetime(2024, 1, 1, tzinfo=timezone.utc)
    >>> fmt = create_formatter(
    ...     StreamConfig(facility=1, name="app"),
    ...     identity=SystemIdentity(hostname="h", pid=7, process_title="app"),
    ...     clock=FixedClock(),
    ...     text_mode=True,
    ... )
    >>> fmt("plain words")
    b'<14>2024-01-01T00:00:00+00:00 h app[7]:plain words\\n'
    """

    def _format(record: Any) -> bytes:
        if text_mode and isinstance(record, str):
            return format_text(record, config, identity=identity, clock=clock)
        return format_record(record, config, identity=identity, clock=clock)

    return _format


def _render_time(value: Any, clock: ClockPort) -> str:
    if value is None:
        return clock.now().isoformat()
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def _decode_json_object(text: str) -> dict[str, Any] | None:
    stripped = text.strip()
    if not stripped.startswith("{"):
        return None
    try:
        decoded = json.loads(stripped)
    except ValueError:
        return None
    return decoded if isinstance(decoded, dict) else None


__all__ = [
    "FormatCallable",
    "create_formatter",
    "format_header",
    "format_record",
    "format_text",
    "priority",
]
