"""CLI subcommand registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all subcommands on the CLI group."""
    from wastemcp.cli_commands.call import call
    from wastemcp.cli_commands.config import config
    from wastemcp.cli_commands.inspect import inspect_cmd

    cli.add_command(call)
    cli.add_command(inspect_cmd)
    cli.add_command(config)
