"""Concrete adapters: socket transport, process identity, logging bridge."""

from __future__ import annotations

from .logging_handler import SyslogHandler, record_to_mapping
from .system import ProcessIdentityProvider, SystemClock
from .unix_dgram import UnixDatagramTransport

__all__ = [
    "ProcessIdentityProvider",
    "SyslogHandler",
    "SystemClock",
    "UnixDatagramTransport",
    "record_to_mapping",
]
