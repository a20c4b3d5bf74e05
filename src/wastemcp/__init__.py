"""waste-mcp: MCP server core for waste-management facilities."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from wastemcp.config import ServerConfig as ServerConfig
    from wastemcp.server import WasteServer as WasteServer
    from wastemcp.server import build_server as build_server

_LAZY_EXPORTS = {
    "ServerConfig": "wastemcp.config",
    "WasteServer": "wastemcp.server",
    "build_server": "wastemcp.server",
}


def __getattr__(name: str) -> object:
    module_path = _LAZY_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'wastemcp' has no attribute {name!r}")
