"""JSON-RPC 2.0 / MCP protocol layer."""

from wastemcp.protocol.dispatcher import ProtocolDispatcher, parse_request
from wastemcp.protocol.errors import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    MissingPromptArgumentError,
    PromptNotFoundError,
    ProtocolError,
    ResourceNotFoundError,
    UnknownResourceError,
)
from wastemcp.protocol.models import (
    JSONRPC_VERSION,
    MCP_PROTOCOL_VERSION,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    ServerCapabilities,
    ServerInfo,
)

__all__ = [
    "INTERNAL_ERROR",
    "INVALID_PARAMS",
    "INVALID_REQUEST",
    "JSONRPC_VERSION",
    "MCP_PROTOCOL_VERSION",
    "METHOD_NOT_FOUND",
    "InternalError",
    "InvalidParamsError",
    "InvalidRequestError",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "MethodNotFoundError",
    "MissingPromptArgumentError",
    "PromptNotFoundError",
    "ProtocolDispatcher",
    "ResourceNotFoundError",
    "ServerCapabilities",
    "ServerInfo",
    "UnknownResourceError",
    "parse_request",
]
