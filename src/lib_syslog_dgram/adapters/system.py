"""Adapters reading ambient process state: identity and wall clock."""

from __future__ import annotations

import os
import socket
import sys
from datetime import datetime, timezone
from pathlib import Path

from lib_syslog_dgram.application.ports import ClockPort, SystemIdentity, SystemIdentityPort


class SystemClock(ClockPort):
    """Concrete clock port returning timezone-aware UTC timestamps."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class ProcessIdentityProvider(SystemIdentityPort):
    """Resolve hostname, pid and program name from the running interpreter."""

    def resolve_identity(self) -> SystemIdentity:
        """Return the identity of the current process.

        Examples
        --------
        >>> identity = ProcessIdentityProvider().resolve_identity()
        >>> identity.pid == os.getpid()
        True
        """
        return SystemIdentity(
            hostname=socket.gethostname(),
            pid=os.getpid(),
            process_title=_process_title(),
        )


def _process_title() -> str:
    argv0 = sys.argv[0] if sys.argv and sys.argv[0] else ""
    title = Path(argv0).name if argv0 and argv0 != "-c" else ""
    return title or Path(sys.executable or "python").name or "python"


__all__ = ["ProcessIdentityProvider", "SystemClock"]
