"""Stream façade wiring formatter, delivery channel and transport together.

Purpose
-------
Expose the single ``write(record)`` operation structured loggers call, plus
an explicit :meth:`SyslogStream.close`. This module is the composition point
that turns keyword arguments and environment overrides into a configured
:class:`StreamConfig`, a formatter, and a :class:`DeliveryChannel` bound to a
:class:`UnixDatagramTransport`.

Contents
--------
* :class:`SyslogStream` - the public stream object.
* :func:`summary_info` - metadata banner reused by the CLI.

System Role
-----------
Outer shell of the package: inner layers stay free of environment reads and
sockets, which are resolved here once at construction time.
"""

from __future__ import annotations

from types import TracebackType
from typing import Any, Mapping

from . import __init__conf__
from .adapters import ProcessIdentityProvider, SystemClock, UnixDatagramTransport
from .application.ports import ClockPort, DatagramTransportPort, SystemIdentity, SystemIdentityPort
from .application.use_cases.delivery import DeliveryChannel
from .application.use_cases.format_record import create_formatter
from .config import resolve_stream_settings
from .domain import Profile, StreamConfig


class SyslogStream:
    """Forward log records to the local syslog daemon.

    Parameters
    ----------
    facility:
        Facility code or name (``"local0"``); falls back to ``SYSLOG_FACILITY``
        and then to the profile default.
    name:
        Program name for the header tag; falls back to ``SYSLOG_NAME`` and then
        to the process title.
    path:
        Datagram socket path; falls back to ``SYSLOG_PATH`` and then to
        ``/dev/log``.
    profile:
        Default facility preset: ``Profile.LOCAL0`` (16) or ``Profile.USER`` (1).
    text_mode:
        Accept plain strings in :meth:`write` in addition to mappings.
    transport / identity / clock / environ:
        Injection points for tests and embedding applications.

    Raises
    ------
    SyslogConnectionError
        When the socket at ``path`` cannot be connected.
    """

    def __init__(
        self,
        *,
        facility: int | str | None = None,
        name: str | None = None,
        path: str | None = None,
        profile: Profile | str | None = None,
        text_mode: bool = False,
        transport: DatagramTransportPort | None = None,
        identity: SystemIdentityPort | None = None,
        clock: ClockPort | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._identity = (identity or ProcessIdentityProvider()).resolve_identity()
        settings = resolve_stream_settings(facility=facility, name=name, path=path, profile=profile, environ=environ)
        self._config = StreamConfig.build(
            name=settings.name or self._identity.process_title,
            facility=settings.facility,
            path=settings.path,
            profile=settings.profile,
        )
        self._format = create_formatter(
            self._config,
            identity=self._identity,
            clock=clock or SystemClock(),
            text_mode=text_mode,
        )
        self._channel = DeliveryChannel(transport or UnixDatagramTransport(), self._config.path)

    @property
    def config(self) -> StreamConfig:
        return self._config

    @property
    def identity(self) -> SystemIdentity:
        return self._identity

    @property
    def channel(self) -> DeliveryChannel:
        return self._channel

    def write(self, record: Any) -> None:
        """Format ``record`` and hand it to the delivery channel.

        Raises
        ------
        InvalidRecordKind
            When ``record`` is not a mapping (or a string in text mode).
        """
        buffer = self._format(record)
        self._channel.submit(buffer)

    def close(self, timeout: float | None = 5.0) -> bool:
        """Flush pending messages and release the socket. See :meth:`DeliveryChannel.close`."""
        return self._channel.close(timeout)

    def __enter__(self) -> "SyslogStream":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def summary_info() -> str:
    """Return the metadata banner printed by the CLI ``info`` command.

    Examples
    --------
    >>> summary_info().startswith("Info for lib_syslog_dgram:")
    True
    """

    return __init__conf__.info_text()


__all__ = ["SyslogStream", "summary_info"]
