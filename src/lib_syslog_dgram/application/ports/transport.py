"""Ports describing the outbound datagram transport and its event listener.

Purpose
-------
Keep the delivery state machine independent from sockets. The transport
performs I/O; the listener receives lifecycle events as plain method calls.

Contents
--------
* :class:`TransportListener` - receiver for ``connect``, ``congestion``,
  ``writable`` and ``error`` events.
* :class:`DatagramTransportPort` - minimal capability set (``bind``,
  ``connect``, ``send``, ``close``).

System Role
-----------
:class:`lib_syslog_dgram.application.use_cases.delivery.DeliveryChannel`
implements :class:`TransportListener`; adapters such as
:class:`lib_syslog_dgram.adapters.unix_dgram.UnixDatagramTransport` implement
:class:`DatagramTransportPort`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TransportListener(Protocol):
    """Receive transport lifecycle events."""

    def on_connect(self) -> None:
        """The socket is connected and ready to send."""

    def on_congestion(self, buffer: bytes) -> None:
        """``buffer`` was rejected because the peer is congested."""

    def on_writable(self) -> None:
        """The peer can accept datagrams again."""

    def on_error(self, error: BaseException) -> None:
        """The transport failed with ``error``."""


@runtime_checkable
class DatagramTransportPort(Protocol):
    """Send individual datagrams to a local socket path."""

    def bind(self, listener: TransportListener) -> None:
        """Install the listener that receives lifecycle events."""

    def connect(self, path: str) -> None:
        """Connect to ``path``; report the outcome through the listener."""

    def send(self, buffer: bytes) -> None:
        """Send ``buffer`` without blocking; congestion goes to the listener."""

    def close(self) -> None:
        """Release the underlying socket."""


__all__ = ["DatagramTransportPort", "TransportListener"]
