"""waste-mcp CLI entrypoint."""

from __future__ import annotations

import click

from wastemcp import __version__


@click.group()
@click.version_option(version=__version__, prog_name="wastemcp")
def main() -> None:
    """waste-mcp: MCP server core for waste-management facilities."""


# Register subcommands
from wastemcp.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
