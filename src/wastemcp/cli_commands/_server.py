"""Build a server for one CLI invocation."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from wastemcp.config import ConfigError, ConfigLoader, ServerConfig
from wastemcp.server import WasteServer, build_server
from wastemcp.store import InMemoryStore


def load_fixture(path: Path) -> dict[str, Any]:
    """Read a ``{kind: [record, ...]}`` fixture from JSON or YAML."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc

    try:
        data: Any = json.loads(raw) if path.suffix == ".json" else yaml.safe_load(raw)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Fixture parse error: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("Fixture must map entity kinds to record lists")
    return data


def make_server(config_path: str | None, data_path: str | None) -> WasteServer:
    config = ConfigLoader(Path(config_path)).load() if config_path else ServerConfig()
    store = InMemoryStore()
    if data_path:
        store.load_fixture(load_fixture(Path(data_path)))
    return build_server(store, config)
