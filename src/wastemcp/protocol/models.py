"""JSON-RPC 2.0 envelope models and MCP handshake payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr

JSONRPC_VERSION = "2.0"
MCP_PROTOCOL_VERSION = "2024-11-05"


class JsonRpcRequest(BaseModel):
    """A validated inbound request. ``id`` is echoed back verbatim."""

    model_config = ConfigDict(frozen=True)

    jsonrpc: StrictStr
    method: StrictStr
    id: Any = None
    params: dict[str, Any] | None = None


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message; exactly one of result/error is set."""

    jsonrpc: str = JSONRPC_VERSION
    id: Any = None
    result: dict[str, Any] | None = None
    error: JsonRpcError | None = None

    def to_wire(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            payload["error"] = self.error.model_dump(exclude_none=True)
        else:
            payload["result"] = self.result if self.result is not None else {}
        return payload


class ServerInfo(BaseModel):
    name: str
    version: str


class ResourceCapability(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    subscribe: bool = False
    list_changed: bool = Field(default=False, alias="listChanged")


class ServerCapabilities(BaseModel):
    """Capabilities advertised on ``initialize``."""

    tools: dict[str, Any] = {}
    prompts: dict[str, Any] = {}
    resources: ResourceCapability = ResourceCapability()
    sampling: dict[str, Any] = {}
