from __future__ import annotations

import os
import socket
import sys

import pytest

from lib_syslog_dgram.adapters.system import ProcessIdentityProvider
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


def test_identity_reads_hostname_and_pid() -> None:
    identity = ProcessIdentityProvider().resolve_identity()

    assert identity.hostname == socket.gethostname()
    assert identity.pid == os.getpid()


def test_process_title_uses_argv0_basename(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "argv", ["/usr/local/bin/billing-worker", "--flag"])

    assert ProcessIdentityProvider().resolve_identity().process_title == "billing-worker"


@pytest.mark.parametrize("argv", [[], [""], ["-c"]])
def test_process_title_falls_back_to_interpreter(monkeypatch: pytest.MonkeyPatch, argv: list[str]) -> None:
    monkeypatch.setattr(sys, "argv", argv)

    title = ProcessIdentityProvider().resolve_identity().process_title

    assert title
    assert title != "-c"
