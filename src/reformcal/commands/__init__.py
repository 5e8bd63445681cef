"""Subcommand modules for reformcal.

Provides register_commands() which uses deferred imports to keep
``reformcal --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the convert group and the standalone commands on the root group."""
    # --- Groups ---
    from reformcal.commands.convert import convert

    cli.add_command(convert)

    # --- Standalone commands ---
    from reformcal.commands.leap import leap
    from reformcal.commands.parse import fragments, parse
    from reformcal.commands.shift import shift

    cli.add_command(parse)
    cli.add_command(fragments)
    cli.add_command(shift)
    cli.add_command(leap)
