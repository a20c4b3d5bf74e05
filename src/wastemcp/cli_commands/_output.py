"""Shared CLI output formatters."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.table import Table

console = Console()


def print_tools_table(tools: list[dict[str, Any]]) -> None:
    """Pretty-print ``tools/list`` entries as a table."""
    table = Table(title="Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Required")

    for tool in tools:
        required = tool.get("inputSchema", {}).get("required", [])
        table.add_row(
            tool.get("name", "?"),
            _truncate(tool.get("description", "")),
            ", ".join(required) or "-",
        )

    console.print(table)


def print_prompts_table(prompts: list[dict[str, Any]]) -> None:
    table = Table(title="Prompts")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Arguments")

    for prompt in prompts:
        args = ", ".join(
            a["name"] + ("" if a.get("required") else "?") for a in prompt.get("arguments", [])
        )
        table.add_row(prompt.get("name", "?"), _truncate(prompt.get("description", "")), args or "-")

    console.print(table)


def print_resources_table(resources: list[dict[str, Any]]) -> None:
    table = Table(title="Resources")
    table.add_column("URI", style="cyan")
    table.add_column("Name")
    table.add_column("MIME type")

    for resource in resources:
        table.add_row(
            resource.get("uri", "?"),
            _truncate(resource.get("name", "")),
            resource.get("mimeType", ""),
        )

    console.print(table)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
