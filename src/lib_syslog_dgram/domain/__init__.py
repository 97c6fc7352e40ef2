"""Domain values and pure helpers used by the syslog bridge."""

from __future__ import annotations

from .errors import ChannelClosedError, InvalidRecordKind, SyslogConnectionError, SyslogStreamError
from .facility import FACILITY, resolve_facility
from .levels import SourceLevel, SyslogSeverity, from_python_level, syslog_severity
from .serialization import CIRCULAR, safe_dumps
from .states import CongestionState, ConnectionState
from .stream_config import DEFAULT_PATH, Profile, StreamConfig

__all__ = [
    "CIRCULAR",
    "ChannelClosedError",
    "CongestionState",
    "ConnectionState",
    "DEFAULT_PATH",
    "FACILITY",
    "InvalidRecordKind",
    "Profile",
    "SourceLevel",
    "StreamConfig",
    "SyslogConnectionError",
    "SyslogSeverity",
    "SyslogStreamError",
    "from_python_level",
    "resolve_facility",
    "safe_dumps",
    "syslog_severity",
]
