"""Public package surface for the syslog datagram bridge.

``SyslogStream`` is the object structured loggers write records into;
``FACILITY`` maps facility names to codes; ``SyslogHandler`` plugs the stream
into the standard :mod:`logging` module.
"""

from __future__ import annotations

from .adapters import SyslogHandler
from .domain import (
    FACILITY,
    ChannelClosedError,
    InvalidRecordKind,
    Profile,
    StreamConfig,
    SyslogConnectionError,
    SyslogStreamError,
)
from .lib_syslog_dgram import SyslogStream, summary_info

__all__ = [
    "FACILITY",
    "ChannelClosedError",
    "InvalidRecordKind",
    "Profile",
    "StreamConfig",
    "SyslogConnectionError",
    "SyslogHandler",
    "SyslogStream",
    "SyslogStreamError",
    "summary_info",
]
