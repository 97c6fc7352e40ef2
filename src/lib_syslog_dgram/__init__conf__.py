"""Static package metadata surfaced by the CLI."""

from __future__ import annotations

name = "lib_syslog_dgram"
title = "Forward structured log records to the local syslog daemon over a UNIX datagram socket"
version = "0.1.0"
shell_command = "lib_syslog_dgram"

LAYOUT = (
    ("name", name),
    ("title", title),
    ("version", version),
    ("shell_command", shell_command),
)


def info_text() -> str:
    """Return the metadata banner, one ``key = value`` line per field."""

    width = max(len(key) for key, _ in LAYOUT)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {key.ljust(width)} = {value}" for key, value in LAYOUT)
    return "\n".join(lines) + "\n"
