"""Connection and congestion states of the delivery channel."""

from __future__ import annotations

from enum import Enum


class ConnectionState(Enum):
    """One-way socket connection lifecycle."""

    CONNECTING = "connecting"
    CONNECTED = "connected"


class CongestionState(Enum):
    """Backpressure flag toggled by the transport."""

    CLEAR = "clear"
    CONGESTED = "congested"


__all__ = ["CongestionState", "ConnectionState"]
