"""``wastemcp call``: dispatch one JSON-RPC request."""

from __future__ import annotations

import asyncio
import json
import logging
import sys

import click

from wastemcp.cli_commands._output import console


@click.command()
@click.argument("request")
@click.option("--data", "-d", type=click.Path(exists=True), default=None, help="Seed fixture (JSON or YAML).")
@click.option("--config", "-c", "config_path", type=click.Path(exists=True), default=None, help="Server config YAML.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def call(request: str, data: str | None, config_path: str | None, verbose: bool) -> None:
    """Dispatch REQUEST and print the response envelope.

    REQUEST is a JSON-RPC envelope as a JSON string, or ``-`` to read it
    from stdin.
    """
    from wastemcp.cli_commands._server import make_server

    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    raw = sys.stdin.read() if request == "-" else request
    try:
        envelope = json.loads(raw)
    except json.JSONDecodeError as exc:
        console.print(f"[red]Invalid JSON:[/red] {exc}")
        sys.exit(1)

    try:
        server = make_server(config_path, data)
    except Exception as exc:
        console.print(f"[red]Setup error:[/red] {exc}")
        sys.exit(1)

    response = asyncio.run(server.handle(envelope))
    click.echo(json.dumps(response, indent=2, default=str))
