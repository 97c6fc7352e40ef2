"""Environment-driven configuration and optional ``.env`` loading.

Purpose
-------
Let deployments tune a stream (facility, program name, socket path, profile)
through environment variables without touching code, and optionally pull
those variables from the nearest ``.env`` file.

Contents
--------
* :func:`should_use_dotenv` / :func:`enable_dotenv` - ``.env`` toggles.
* :class:`StreamSettings` - values resolved from keywords and environment.
* :func:`resolve_stream_settings` - precedence: keywords, environment,
  profile defaults.

System Role
-----------
Consumed by :class:`lib_syslog_dgram.SyslogStream` and the CLI. The library
never mutates the environment unless :func:`enable_dotenv` is called.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import load_dotenv

from .domain import Profile, resolve_facility

DOTENV_ENV_VAR = "LIB_SYSLOG_DGRAM_USE_DOTENV"
ENV_FACILITY = "SYSLOG_FACILITY"
ENV_NAME = "SYSLOG_NAME"
ENV_PATH = "SYSLOG_PATH"
ENV_PROFILE = "SYSLOG_PROFILE"

_TRUTHY = {"1", "true", "yes", "on"}

_DOTENV_PATH: Path | None = None


def should_use_dotenv(*, explicit: bool | None, env_value: str | None) -> bool:
    """Decide whether ``.env`` loading is requested.

    An explicit CLI flag wins over the environment toggle.

    Examples
    --------
    >>> should_use_dotenv(explicit=None, env_value="yes")
    True
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(explicit=None, env_value=None)
    False
    """

    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    return env_value.strip().lower() in _TRUTHY


def enable_dotenv(start: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` at or above ``start`` (default: cwd).

    Variables already present in the environment keep precedence. Returns the
    resolved file path, or ``None`` when no file was found. Repeated calls
    return the first loaded path.
    """

    global _DOTENV_PATH
    if _DOTENV_PATH is not None:
        return _DOTENV_PATH
    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            load_dotenv(candidate, override=False)
            _DOTENV_PATH = candidate
            return candidate
    return None


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_PATH
    _DOTENV_PATH = None


@dataclass(slots=True, frozen=True)
class StreamSettings:
    """Stream options after applying keyword and environment precedence."""

    facility: int | None
    name: str | None
    path: str | None
    profile: Profile


def resolve_stream_settings(
    *,
    facility: int | str | None = None,
    name: str | None = None,
    path: str | None = None,
    profile: Profile | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> StreamSettings:
    """Merge keyword arguments with ``SYSLOG_*`` environment variables.

    Raises
    ------
    ValueError
        When an environment variable holds an invalid value.

    Examples
    --------
    >>> resolve_stream_settings(environ={"SYSLOG_FACILITY": "mail"}).facility
    2
    >>> resolve_stream_settings(facility=3, environ={"SYSLOG_FACILITY": "mail"}).facility
    3
    >>> resolve_stream_settings(environ={"SYSLOG_PROFILE": "user"}).profile
    <Profile.USER: 1>
    """

    env = os.environ if environ is None else environ

    resolved_facility: int | None
    if facility is not None:
        resolved_facility = resolve_facility(facility)
    else:
        resolved_facility = _env_facility(env.get(ENV_FACILITY))

    if profile is None:
        raw_profile = env.get(ENV_PROFILE)
        resolved_profile = _env_profile(raw_profile) if raw_profile else Profile.LOCAL0
    elif isinstance(profile, Profile):
        resolved_profile = profile
    else:
        resolved_profile = Profile.from_name(profile)

    return StreamSettings(
        facility=resolved_facility,
        name=name if name is not None else _env_text(env.get(ENV_NAME)),
        path=path if path is not None else _env_text(env.get(ENV_PATH)),
        profile=resolved_profile,
    )


def _env_facility(raw: str | None) -> int | None:
    if raw is None or not raw.strip():
        return None
    try:
        return resolve_facility(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_FACILITY}: {exc}") from exc


def _env_profile(raw: str) -> Profile:
    try:
        return Profile.from_name(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PROFILE}: {exc}") from exc


def _env_text(raw: str | None) -> str | None:
    if raw is None:
        return None
    stripped = raw.strip()
    return stripped or None


__all__ = [
    "DOTENV_ENV_VAR",
    "ENV_FACILITY",
    "ENV_NAME",
    "ENV_PATH",
    "ENV_PROFILE",
    "StreamSettings",
    "enable_dotenv",
    "resolve_stream_settings",
    "should_use_dotenv",
]
