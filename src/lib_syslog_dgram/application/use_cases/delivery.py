"""Delivery channel owning one outbound datagram connection.

Purpose
-------
Guarantee every submitted buffer reaches the transport exactly once, in
submission order, as soon as the transport can accept it.

Contents
--------
* :class:`DeliveryChannel` - state machine plus FIFO pending queue.

System Role
-----------
Implements :class:`TransportListener`. The transport reports ``connect``,
``congestion``, ``writable`` and ``error`` events by calling into the channel;
callers hand over formatted buffers through :meth:`DeliveryChannel.submit`.

State machine
-------------
``CONNECTING`` moves to ``CONNECTED`` exactly once, flushing the queue. While
connected, congestion toggles between ``CLEAR`` and ``CONGESTED``; a writable
event flushes the queue again. A transport error while connecting is fatal
and raised as :class:`SyslogConnectionError`; after connecting, errors are
only logged.

Alignment Notes
---------------
One re-entrant lock serialises submissions and transport callbacks, so a
transport may report congestion synchronously from inside ``send``. Log
records produced under that lock are queued and emitted once the outermost
holder releases it, so a logging handler that writes back into the channel
never waits on the channel lock while holding its own.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from lib_syslog_dgram.application.ports import DatagramTransportPort, TransportListener
from lib_syslog_dgram.domain import (
    ChannelClosedError,
    CongestionState,
    ConnectionState,
    SyslogConnectionError,
)

LOGGER = logging.getLogger(__name__)


class DeliveryChannel(TransportListener):
    """Queue buffers until the transport is connected and uncongested.

    Examples
    --------
    >>> class Recorder:
    ...     def __init__(self):
    ...         self.sent = []
    ...     def bind(self, listener):
    ...         self.listener = listener
    ...     def connect(self, path):
    ...         pass
    ...     def send(self, buffer):
    ...         self.sent.append(buffer)
    ...     def close(self):
    ...         pass
    >>> transport = Recorder()
    >>> channel = DeliveryChannel(transport, "/dev/log")
    >>> channel.submit(b"first")
    >>> transport.sent, channel.pending
    ([], 1)
    >>> transport.listener.on_connect()
    >>> channel.submit(b"second")
    >>> transport.sent
    [b'first', b'second']
    """

    def __init__(self, transport: DatagramTransportPort, path: str, *, connect: bool = True) -> None:
        """Bind to ``transport`` and, unless ``connect`` is false, start connecting to ``path``."""
        self._transport = transport
        self._path = path
        self._queue: deque[bytes] = deque()
        self._connection = ConnectionState.CONNECTING
        self._congestion = CongestionState.CLEAR
        self._failure: SyslogConnectionError | None = None
        self._closed = False
        self._flushing = False
        self._lock = threading.RLock()
        self._drained = threading.Condition(self._lock)
        self._depth = 0
        self._notes: list[tuple[int, str, tuple[Any, ...], BaseException | None]] = []
        transport.bind(self)
        if connect:
            self.connect()

    def connect(self) -> None:
        """Ask the transport to connect; a synchronous failure raises here."""
        LOGGER.debug("Connecting to syslog socket %s", self._path)
        self._transport.connect(self._path)

    @property
    def path(self) -> str:
        return self._path

    @property
    def connection_state(self) -> ConnectionState:
        with self._lock:
            return self._connection

    @property
    def congestion_state(self) -> CongestionState:
        with self._lock:
            return self._congestion

    @property
    def pending(self) -> int:
        """Number of buffers waiting in the queue."""
        with self._lock:
            return len(self._queue)

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def submit(self, buffer: bytes) -> None:
        """Send ``buffer`` now or append it to the pending queue.

        Raises
        ------
        SyslogConnectionError
            When the connection attempt already failed.
        ChannelClosedError
            After :meth:`close` was called.
        """
        with self._guarded():
            if self._failure is not None:
                cause = self._failure.cause
                raise SyslogConnectionError(self._path, cause) from cause
            if self._closed:
                raise ChannelClosedError(f"Delivery channel for {self._path} is closed")
            self._queue.append(buffer)
            self._flush()

    def on_connect(self) -> None:
        with self._guarded():
            if self._connection is ConnectionState.CONNECTED:
                return
            self._connection = ConnectionState.CONNECTED
            self._note(logging.DEBUG, "Connected to syslog socket %s; flushing %d queued message(s)", self._path, len(self._queue))
            self._flush()

    def on_congestion(self, buffer: bytes) -> None:
        with self._guarded():
            self._congestion = CongestionState.CONGESTED
            if self._flushing:
                self._queue.appendleft(buffer)
            else:
                self._queue.append(buffer)
            self._note(logging.DEBUG, "Syslog socket %s congested; %d message(s) pending", self._path, len(self._queue))

    def on_writable(self) -> None:
        with self._guarded():
            self._congestion = CongestionState.CLEAR
            self._flush()

    def on_error(self, error: BaseException) -> None:
        with self._guarded():
            if self._connection is ConnectionState.CONNECTING:
                self._failure = SyslogConnectionError(self._path, error)
                self._drained.notify_all()
                raise self._failure from error
            self._note(logging.ERROR, "Syslog transport error on %s", self._path, error=error)

    def close(self, timeout: float | None = 5.0) -> bool:
        """Stop accepting buffers, wait for the queue to drain, close the transport.

        Returns ``True`` when every pending buffer was handed to the transport
        before the deadline, ``False`` otherwise. ``None`` waits indefinitely.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._lock:
            if self._closed:
                return not self._queue
            self._closed = True
            while self._queue and self._failure is None:
                remaining = None if deadline is None else deadline - time.monotonic()
                if remaining is not None and remaining <= 0:
                    break
                self._drained.wait(remaining)
            drained = not self._queue
        if not drained:
            LOGGER.warning("Closing syslog channel %s with %d undelivered message(s)", self._path, self.pending)
        self._transport.close()
        LOGGER.debug("Closed syslog channel %s", self._path)
        return drained

    @contextmanager
    def _guarded(self) -> Iterator[None]:
        """Hold the channel lock; emit queued log records after the outermost release."""
        notes: list[tuple[int, str, tuple[Any, ...], BaseException | None]] = []
        try:
            with self._lock:
                self._depth += 1
                try:
                    yield
                finally:
                    self._depth -= 1
                    if self._depth == 0:
                        notes, self._notes = self._notes, []
        finally:
            for level, message, args, error in notes:
                LOGGER.log(level, message, *args, exc_info=error)

    def _note(self, level: int, message: str, *args: Any, error: BaseException | None = None) -> None:
        self._notes.append((level, message, args, error))

    def _flush(self) -> None:
        """Send queued buffers head first until the queue is empty or the peer congests.

        A buffer rejected mid-flush goes back to the head of the queue; buffers
        submitted re-entrantly from inside ``send`` join the tail.
        """
        if self._flushing:
            return
        self._flushing = True
        try:
            while self._queue and self._ready():
                self._transport.send(self._queue.popleft())
        finally:
            self._flushing = False
        if not self._queue:
            self._drained.notify_all()

    def _ready(self) -> bool:
        return self._connection is ConnectionState.CONNECTED and self._congestion is CongestionState.CLEAR


__all__ = ["DeliveryChannel"]
