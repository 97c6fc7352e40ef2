"""Protocols the application layer depends on."""

from __future__ import annotations

from .identity import SystemIdentity, SystemIdentityPort
from .time import ClockPort
from .transport import DatagramTransportPort, TransportListener

__all__ = [
    "ClockPort",
    "DatagramTransportPort",
    "SystemIdentity",
    "SystemIdentityPort",
    "TransportListener",
]
