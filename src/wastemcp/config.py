"""Server configuration and its YAML loader."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from wastemcp import __version__
from wastemcp.protocol.models import MCP_PROTOCOL_VERSION
from wastemcp.sampling.bridge import DEFAULT_SAMPLING_TIMEOUT


class ConfigError(Exception):
    """The configuration file could not be read, parsed, or validated."""


class SamplingSettings(BaseModel):
    """Sampling bridge settings.

    When ``model`` is set, sampling requests are answered locally through
    LiteLLM (``provider/model_name``, e.g. ``openai/gpt-4o-mini``).
    """

    timeout: float = Field(default=DEFAULT_SAMPLING_TIMEOUT, gt=0)
    model: str | None = None
    api_key: str | None = None
    api_base: str | None = None


class TelemetrySettings(BaseModel):
    enabled: bool = False
    otlp_endpoint: str | None = None


class ServerConfig(BaseModel):
    name: str = "waste-mcp"
    version: str = __version__
    protocol_version: str = MCP_PROTOCOL_VERSION
    sampling: SamplingSettings = Field(default_factory=SamplingSettings)
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)


class ConfigLoader:
    """Load and validate a server YAML file into a :class:`ServerConfig`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> ServerConfig:
        """Read YAML, interpolate env vars, and validate.

        ``${VAR}`` / ``$VAR`` references are expanded with
        :func:`os.path.expandvars` before parsing, so API keys can stay in
        the environment.

        Raises:
            ConfigError: On read errors, YAML parse errors, or schema
                validation failures.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise ConfigError(f"YAML parse error: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Config YAML must be a mapping")

        try:
            return ServerConfig.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc
