"""Configuration helpers for ``wastemcp config``."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from wastemcp.cli_commands._output import console


@click.group()
def config() -> None:
    """Validate and show server configuration."""


@config.command("validate")
@click.argument("path", type=click.Path(exists=True))
def validate(path: str) -> None:
    """Validate the server config YAML at PATH."""
    from wastemcp.config import ConfigError, ConfigLoader

    try:
        cfg = ConfigLoader(Path(path)).load()
    except ConfigError as exc:
        console.print(f"[red]Validation error:[/red] {exc}")
        sys.exit(1)

    console.print("[green]Config validated successfully.[/green]")
    console.print(f"  Name: {cfg.name}")
    console.print(f"  Protocol version: {cfg.protocol_version}")
    console.print(f"  Sampling timeout: {cfg.sampling.timeout:g}s")
    console.print(f"  Sampling model: {cfg.sampling.model or '(client)'}")
