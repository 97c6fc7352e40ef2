"""Immutable stream configuration.

Purpose
-------
Capture the three knobs of a syslog stream (facility, program name, socket
path) once at construction time.

Contents
--------
* :class:`Profile` - default facility presets.
* :class:`StreamConfig` - frozen dataclass with validation.
* :data:`DEFAULT_PATH` - the conventional local syslog socket.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .facility import FACILITY, resolve_facility

DEFAULT_PATH = "/dev/log"


class Profile(Enum):
    """Facility presets used when no explicit facility is configured."""

    LOCAL0 = FACILITY["local0"]
    USER = FACILITY["user"]

    @classmethod
    def from_name(cls, name: str) -> "Profile":
        normalized = name.strip().upper()
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown stream profile: {name!r}") from exc


@dataclass(slots=True, frozen=True)
class StreamConfig:
    """Configuration shared by the formatter and the delivery channel.

    Attributes
    ----------
    facility:
        Syslog facility code ``0..23``.
    name:
        Program name written into the message tag.
    path:
        Filesystem path of the UNIX datagram socket.
    """

    facility: int
    name: str
    path: str = DEFAULT_PATH

    def __post_init__(self) -> None:
        object.__setattr__(self, "facility", resolve_facility(self.facility))
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("name must be a non-empty string")
        if not isinstance(self.path, str) or not self.path:
            raise ValueError("path must be a non-empty string")

    @classmethod
    def build(
        cls,
        *,
        name: str,
        facility: int | str | None = None,
        path: str | None = None,
        profile: Profile = Profile.LOCAL0,
    ) -> "StreamConfig":
        """Fill unset values from ``profile`` and :data:`DEFAULT_PATH`.

        Examples
        --------
        >>> StreamConfig.build(name="app").facility
        16
        >>> StreamConfig.build(name="app", profile=Profile.USER).facility
        1
        """

        resolved = profile.value if facility is None else resolve_facility(facility)
        return cls(facility=resolved, name=name, path=path or DEFAULT_PATH)


__all__ = ["DEFAULT_PATH", "Profile", "StreamConfig"]
