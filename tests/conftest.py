from __future__ import annotations

import socket
import tempfile
from collections.abc import Iterator
from datetime import datetime, timezone
from pathlib import Path

import pytest

from lib_syslog_dgram.application.ports import SystemIdentity, TransportListener


class FakeTransport:
    """In-memory transport recording sends and replaying lifecycle events."""

    def __init__(self, *, connect_error: BaseException | None = None, auto_connect: bool = True) -> None:
        self.listener: TransportListener | None = None
        self.connect_error = connect_error
        self.auto_connect = auto_connect
        self.connected_to: str | None = None
        self.sent: list[bytes] = []
        self.congest_next = 0
        self.closed = False

    def bind(self, listener: TransportListener) -> None:
        self.listener = listener

    def connect(self, path: str) -> None:
        assert self.listener is not None
        self.connected_to = path
        if self.connect_error is not None:
            self.listener.on_error(self.connect_error)
            return
        if self.auto_connect:
            self.listener.on_connect()

    def send(self, buffer: bytes) -> None:
        assert self.listener is not None
        if self.congest_next:
            self.congest_next -= 1
            self.listener.on_congestion(buffer)
            return
        self.sent.append(buffer)

    def close(self) -> None:
        self.closed = True


class FixedIdentity:
    def __init__(self, identity: SystemIdentity) -> None:
        self.identity = identity

    def resolve_identity(self) -> SystemIdentity:
        return self.identity


class FixedClock:
    def __init__(self, moment: datetime) -> None:
        self.moment = moment

    def now(self) -> datetime:
        return self.moment


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def identity() -> SystemIdentity:
    return SystemIdentity(hostname="h", pid=1234, process_title="app")


@pytest.fixture
def identity_provider(identity: SystemIdentity) -> FixedIdentity:
    return FixedIdentity(identity)


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock(datetime(2025, 9, 23, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def socket_dir() -> Iterator[Path]:
    """Short temporary directory; AF_UNIX paths are limited to ~100 bytes."""

    with tempfile.TemporaryDirectory(prefix="sdg-") as directory:
        yield Path(directory)


@pytest.fixture
def syslog_server(socket_dir: Path) -> Iterator[DatagramServer]:
    server = DatagramServer(socket_dir / "log")
    try:
        yield server
    finally:
        server.close()


class DatagramServer:
    """Bound AF_UNIX datagram socket standing in for the syslog daemon."""

    def __init__(self, path: Path) -> None:
        self.path = str(path)
        self._sock = socket.socket(socket.AF_UNIX, socket.SOCK_DGRAM)
        self._sock.bind(self.path)

    def receive(self, timeout: float = 2.0) -> bytes:
        self._sock.settimeout(timeout)
        return self._sock.recv(65536)

    def drain(self) -> list[bytes]:
        received: list[bytes] = []
        self._sock.setblocking(False)
        while True:
            try:
                received.append(self._sock.recv(65536))
            except BlockingIOError:
                return received

    def close(self) -> None:
        self._sock.close()
