"""UNIX datagram socket adapter implementing :class:`DatagramTransportPort`.

Purpose
-------
Deliver syslog datagrams to a local daemon socket such as ``/dev/log``
without blocking the caller.

Contents
--------
* :class:`UnixDatagramTransport` - non-blocking ``AF_UNIX``/``SOCK_DGRAM``
  socket plus a background watcher that reports when a congested peer
  becomes writable again.

System Role
-----------
Translates socket outcomes into listener events: a successful ``connect``
becomes ``on_connect``, ``EAGAIN``/``ENOBUFS`` on ``send`` becomes
``on_congestion`` followed later by ``on_writable``, everything else becomes
``on_error``.
"""

from __future__ import annotations

import errno
import logging
import selectors
import socket
import threading
from collections.abc import Callable

from lib_syslog_dgram.application.ports import DatagramTransportPort, TransportListener

LOGGER = logging.getLogger(__name__)

SocketFactory = Callable[[], socket.socket]

_CONGESTION_ERRNOS = frozenset({errno.EAGAIN, errno.EWOULDBLOCK, errno.ENOBUFS})


def _default_socket() -> socket.socket:
    return socket.socket(socket.AF_UNIX, socket.SOCK_DGRAM)


class UnixDatagramTransport(DatagramTransportPort):
    """Send datagrams over a connected UNIX domain socket."""

    def __init__(
        self,
        *,
        socket_factory: SocketFactory | None = None,
        poll_interval: float = 0.1,
        stop_timeout: float | None = 1.0,
    ) -> None:
        """Configure the transport.

        Parameters
        ----------
        socket_factory:
            Callable returning an unconnected datagram socket; defaults to
            ``socket.socket(AF_UNIX, SOCK_DGRAM)``.
        poll_interval:
            Seconds between checks of the close flag while waiting for a
            congested socket to become writable.
        stop_timeout:
            Seconds :meth:`close` waits for the watcher thread to exit.
        """
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        self._socket_factory = socket_factory or _default_socket
        self._poll_interval = poll_interval
        self._stop_timeout = stop_timeout
        self._socket: socket.socket | None = None
        self._listener: TransportListener | None = None
        self._watcher: threading.Thread | None = None
        self._watch_lock = threading.Lock()
        self._closing = threading.Event()

    @property
    def connected(self) -> bool:
        return self._socket is not None

    def bind(self, listener: TransportListener) -> None:
        self._listener = listener

    def connect(self, path: str) -> None:
        listener = self._require_listener()
        sock = self._socket_factory()
        try:
            sock.connect(path)
            sock.setblocking(False)
        except OSError as exc:
            sock.close()
            listener.on_error(exc)
            return
        self._closing.clear()
        self._socket = sock
        listener.on_connect()

    def send(self, buffer: bytes) -> None:
        listener = self._require_listener()
        sock = self._socket
        if sock is None:
            listener.on_error(OSError(errno.ENOTCONN, "syslog transport is not connected"))
            return
        try:
            sock.send(buffer)
        except BlockingIOError:
            self._congested(listener, buffer)
        except OSError as exc:
            if exc.errno in _CONGESTION_ERRNOS:
                self._congested(listener, buffer)
            else:
                listener.on_error(exc)

    def close(self) -> None:
        self._closing.set()
        with self._watch_lock:
            watcher = self._watcher
            self._watcher = None
        if watcher is not None and watcher is not threading.current_thread():
            watcher.join(self._stop_timeout)
        sock = self._socket
        self._socket = None
        if sock is not None:
            sock.close()

    def _congested(self, listener: TransportListener, buffer: bytes) -> None:
        listener.on_congestion(buffer)
        self._watch_writable()

    def _watch_writable(self) -> None:
        with self._watch_lock:
            if self._closing.is_set():
                return
            if self._watcher is not None and self._watcher.is_alive():
                return
            self._watcher = threading.Thread(target=self._await_writable, name="syslog-dgram-writable", daemon=True)
            self._watcher.start()

    def _await_writable(self) -> None:
        """Block until the socket is writable, then report it to the listener."""
        sock = self._socket
        listener = self._listener
        if sock is None or listener is None:
            return
        try:
            with selectors.DefaultSelector() as selector:
                selector.register(sock, selectors.EVENT_WRITE)
                while not self._closing.is_set():
                    if selector.select(self._poll_interval):
                        break
        except (OSError, ValueError) as exc:
            LOGGER.debug("Stopped watching syslog socket for writability: %r", exc)
            return
        with self._watch_lock:
            if self._closing.is_set():
                return
            self._watcher = None
        listener.on_writable()

    def _require_listener(self) -> TransportListener:
        if self._listener is None:
            raise RuntimeError("bind() must be called before using the transport")
        return self._listener


__all__ = ["SocketFactory", "UnixDatagramTransport"]
