from __future__ import annotations

import json
from pathlib import Path

import pytest

from lib_syslog_dgram import (
    FACILITY,
    InvalidRecordKind,
    Profile,
    SyslogConnectionError,
    SyslogStream,
)
from lib_syslog_dgram.domain import ConnectionState
from tests.conftest import DatagramServer, FakeTransport, FixedClock, FixedIdentity
from tests.os_markers import OS_AGNOSTIC, POSIX_ONLY

pytestmark = [OS_AGNOSTIC]


def _stream(transport: FakeTransport, identity: FixedIdentity, clock: FixedClock, **kwargs: object) -> SyslogStream:
    kwargs.setdefault("environ", {})
    return SyslogStream(transport=transport, identity=identity, clock=clock, **kwargs)  # type: ignore[arg-type]


def test_write_sends_formatted_datagram(fake_transport: FakeTransport, identity_provider: FixedIdentity, fixed_clock: FixedClock) -> None:
    stream = _stream(fake_transport, identity_provider, fixed_clock, facility=FACILITY["user"], name="app")

    stream.write({"level": 30, "time": "T", "hostname": "h", "msg": "hi"})

    assert fake_transport.sent == [b'<14>T h app[1234]:{"level":30,"time":"T","hostname":"h","msg":"hi"}\n']


def test_defaults_use_local0_process_title_and_dev_log(
    fake_transport: FakeTransport, identity_provider: FixedIdentity, fixed_clock: FixedClock
) -> None:
    stream = _stream(fake_transport, identity_provider, fixed_clock)

    assert stream.config.facility == 16
    assert stream.config.name == "app"
    assert stream.config.path == "/dev/log"
    assert fake_transport.connected_to == "/dev/log"


def test_user_profile_changes_default_facility(fake_transport: FakeTransport, identity_provider: FixedIdentity, fixed_clock: FixedClock) -> None:
    stream = _stream(fake_transport, identity_provider, fixed_clock, profile=Profile.USER)

    assert stream.config.facility == 1


def test_environment_overrides_apply_below_keywords(
    fake_transport: FakeTransport, identity_provider: FixedIdentity, fixed_clock: FixedClock
) -> None:
    environ = {"SYSLOG_FACILITY": "daemon", "SYSLOG_NAME": "env-name", "SYSLOG_PATH": "/run/log"}

    from_env = _stream(fake_transport, identity_provider, fixed_clock, environ=environ)
    explicit = _stream(FakeTransport(), identity_provider, fixed_clock, environ=environ, facility=5, name="kw")

    assert (from_env.config.facility, from_env.config.name, from_env.config.path) == (3, "env-name", "/run/log")
    assert (explicit.config.facility, explicit.config.name) == (5, "kw")


def test_invalid_environment_facility_is_reported(
    fake_transport: FakeTransport, identity_provider: FixedIdentity, fixed_clock: FixedClock
) -> None:
    with pytest.raises(ValueError, match="SYSLOG_FACILITY"):
        _stream(fake_transport, identity_provider, fixed_clock, environ={"SYSLOG_FACILITY": "local9"})


def test_write_rejects_non_mapping_without_sending(
    fake_transport: FakeTransport, identity_provider: FixedIdentity, fixed_clock: FixedClock
) -> None:
    stream = _stream(fake_transport, identity_provider, fixed_clock)

    with pytest.raises(InvalidRecordKind):
        stream.write("plain text")

    assert fake_transport.sent == []
    assert stream.channel.pending == 0


def test_text_mode_accepts_json_lines(fake_transport: FakeTransport, identity_provider: FixedIdentity, fixed_clock: FixedClock) -> None:
    stream = _stream(fake_transport, identity_provider, fixed_clock, text_mode=True, name="app")

    stream.write(json.dumps({"level": 50, "time": "T", "msg": "x"}))

    assert fake_transport.sent[0].startswith(b"<131>T h app[1234]:")


def test_records_queue_until_connected(identity_provider: FixedIdentity, fixed_clock: FixedClock) -> None:
    transport = FakeTransport(auto_connect=False)
    stream = _stream(transport, identity_provider, fixed_clock)

    stream.write({"level": 30, "n": 1})
    stream.write({"level": 30, "n": 2})
    assert stream.channel.connection_state is ConnectionState.CONNECTING

    transport.listener.on_connect()

    assert [json.loads(buffer.split(b"]:", 1)[1])["n"] for buffer in transport.sent] == [1, 2]


def test_context_manager_closes_channel(fake_transport: FakeTransport, identity_provider: FixedIdentity, fixed_clock: FixedClock) -> None:
    with _stream(fake_transport, identity_provider, fixed_clock) as stream:
        stream.write({"level": 30})

    assert fake_transport.closed is True
    assert stream.channel.closed is True


@POSIX_ONLY
def test_nonexistent_socket_path_raises_descriptive_error(socket_dir: Path) -> None:
    missing = str(socket_dir / "no-such-log")

    with pytest.raises(SyslogConnectionError) as excinfo:
        SyslogStream(path=missing, name="app", environ={})

    assert missing in str(excinfo.value)
    assert excinfo.value.path == missing


@POSIX_ONLY
def test_end_to_end_delivery_over_unix_socket(syslog_server: DatagramServer, fixed_clock: FixedClock) -> None:
    stream = SyslogStream(path=syslog_server.path, name="e2e", facility="local3", clock=fixed_clock, environ={})

    stream.write({"level": 40, "time": "T", "msg": "over the wire"})
    assert stream.close() is True

    datagram = syslog_server.receive()
    assert datagram.startswith(b"<156>T ")
    assert b" e2e[" in datagram
    assert datagram.endswith(b'{"level":40,"time":"T","msg":"over the wire"}\n')
