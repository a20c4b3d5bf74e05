"""``wastemcp inspect``: list the server's tools, prompts, or resources."""

from __future__ import annotations

import asyncio
import json
import sys
from typing import Any

import click

from wastemcp.cli_commands._output import (
    console,
    print_prompts_table,
    print_resources_table,
    print_tools_table,
)


@click.command("inspect")
@click.argument("what", type=click.Choice(["tools", "prompts", "resources"]))
@click.option("--data", "-d", type=click.Path(exists=True), default=None, help="Seed fixture (JSON or YAML).")
@click.option("--config", "-c", "config_path", type=click.Path(exists=True), default=None, help="Server config YAML.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def inspect_cmd(what: str, data: str | None, config_path: str | None, as_json: bool) -> None:
    """Show the registered WHAT (tools, prompts, or resources)."""
    from wastemcp.cli_commands._server import make_server

    try:
        server = make_server(config_path, data)
    except Exception as exc:
        console.print(f"[red]Setup error:[/red] {exc}")
        sys.exit(1)

    entries: list[dict[str, Any]]
    if what == "tools":
        entries = server.tools.listing()
    elif what == "prompts":
        entries = server.prompts.listing()
    else:
        descriptors = asyncio.run(server.resources.list_resources())
        entries = [d.to_wire() for d in descriptors]

    if as_json:
        click.echo(json.dumps(entries, indent=2, default=str))
        return

    if what == "tools":
        print_tools_table(entries)
    elif what == "prompts":
        print_prompts_table(entries)
    else:
        print_resources_table(entries)
