"""The ``reformcal`` command.

Global flags pick the output mode and the reform policy every subcommand
works under; ``--reform`` beats the config file.
"""

from __future__ import annotations

import click

from reformcal import __version__
from reformcal.commands import register_commands
from reformcal.commands._context import AppContext
from reformcal.config.settings import CalendarSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="reformcal")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with timing spans.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--reform",
    default=None,
    help="Reform policy: italy, england, julian, gregorian, or a cutover JDN.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    reform: str | None,
) -> None:
    """reformcal: read, convert and shift dates across the Julian/Gregorian switch."""
    ctx.ensure_object(dict)
    settings = CalendarSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        reform=reform,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
