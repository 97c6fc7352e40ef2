"""Click command group for ``lib_syslog_dgram``.

Purpose
-------
Provide a small operator tool: print package metadata, list facility codes,
and push a test message into the local syslog daemon.

Contents
--------
* :func:`cli` - command group with ``--traceback`` and ``--use-dotenv``.
* ``info`` / ``facilities`` / ``send`` sub-commands.
* :func:`main` - wrapper around :func:`lib_cli_exit_tools.run_cli` that
  restores traceback preferences afterwards.
"""

from __future__ import annotations

import os
from typing import Sequence

import click
import lib_cli_exit_tools
from rich.console import Console
from rich.table import Table

from . import __init__conf__
from . import config as config_module
from .domain import FACILITY, SourceLevel, syslog_severity
from .lib_syslog_dgram import SyslogStream, summary_info

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(help=__init__conf__.title, context_settings=CLICK_CONTEXT_SETTINGS, invoke_without_command=True)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=False,
    help=f"Load SYSLOG_* variables from the nearest .env (default from {config_module.DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool) -> None:
    """Root command storing global flags."""

    explicit: bool | None = None
    if ctx.get_parameter_source("use_dotenv") is not click.core.ParameterSource.DEFAULT:
        explicit = use_dotenv
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback
    if config_module.should_use_dotenv(explicit=explicit, env_value=os.getenv(config_module.DOTENV_ENV_VAR)):
        config_module.enable_dotenv()
    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print package metadata."""

    click.echo(summary_info(), nl=False)


@cli.command("facilities", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_facilities() -> None:
    """List syslog facility names and codes."""

    table = Table(title="Syslog facilities")
    table.add_column("name")
    table.add_column("code", justify="right")
    for name, code in FACILITY.items():
        table.add_row(name, str(code))
    Console().print(table)


@cli.command("send", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("message")
@click.option(
    "--level",
    type=click.Choice([level.name.lower() for level in SourceLevel], case_sensitive=False),
    default="info",
    show_default=True,
    help="Severity of the message.",
)
@click.option("--facility", default=None, help="Facility name or code (default: SYSLOG_FACILITY or local0).")
@click.option("--name", default=None, help="Program name in the header (default: SYSLOG_NAME or process title).")
@click.option("--path", default=None, help="Datagram socket path (default: SYSLOG_PATH or /dev/log).")
@click.option("--timeout", type=float, default=5.0, show_default=True, help="Seconds to wait for delivery.")
def cli_send(message: str, level: str, facility: str | None, name: str | None, path: str | None, timeout: float) -> None:
    """Send MESSAGE as a structured record to the syslog socket."""

    source_level = SourceLevel.from_name(level)
    stream = SyslogStream(facility=facility, name=name, path=path)
    try:
        stream.write({"level": int(source_level), "msg": message})
    finally:
        delivered = stream.close(timeout)
    if not delivered:
        raise click.ClickException(f"Message not delivered to {stream.config.path} within {timeout}s")
    severity = syslog_severity(int(source_level))
    click.echo(f"sent to {stream.config.path} (facility={stream.config.facility}, severity={severity.name.lower()})")


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Run the command group and return its exit code.

    Parameters
    ----------
    argv:
        Optional argument list (defaults to ``sys.argv[1:]``).
    restore_traceback:
        Reset :mod:`lib_cli_exit_tools` traceback flags after the run so
        embedding processes keep their own preferences.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]
