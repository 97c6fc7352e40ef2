"""Port resolving process identity used in message headers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(slots=True, frozen=True)
class SystemIdentity:
    """Hostname, process id and program name captured once per stream."""

    hostname: str
    pid: int
    process_title: str


@runtime_checkable
class SystemIdentityPort(Protocol):
    """Provide the ambient process identity."""

    def resolve_identity(self) -> SystemIdentity: ...


__all__ = ["SystemIdentity", "SystemIdentityPort"]
