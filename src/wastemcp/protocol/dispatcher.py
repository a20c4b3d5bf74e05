"""ProtocolDispatcher: one JSON-RPC envelope in, one envelope out.

Two failure channels are kept strictly apart:

* protocol errors (malformed envelope, unknown method, bad params, internal
  faults) become JSON-RPC ``error`` objects;
* domain errors inside a tool become a *successful* response whose result
  carries ``isError: true``.

:meth:`ProtocolDispatcher.handle` never raises.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import TYPE_CHECKING, Any

from opentelemetry import trace

from wastemcp.protocol.errors import (
    INTERNAL_ERROR,
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    ProtocolError,
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
from wastemcp.utils.telemetry import (
    ATTR_ERROR_CODE,
    ATTR_METHOD,
    ATTR_PROMPT_NAME,
    ATTR_REQUEST_ID,
    ATTR_RESOURCE_URI,
    get_tracer,
)

if TYPE_CHECKING:
    from wastemcp.prompts import PromptRegistry
    from wastemcp.resources import ResourceRegistry
    from wastemcp.tools import ToolRegistry

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

MethodHandler = Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]


def parse_request(envelope: Any) -> JsonRpcRequest:
    """Validate a decoded envelope.

    Raises:
        InvalidRequestError: The envelope is not a JSON-RPC 2.0 request.
    """
    if not isinstance(envelope, Mapping):
        raise InvalidRequestError("envelope must be an object")
    if envelope.get("jsonrpc") != JSONRPC_VERSION:
        raise InvalidRequestError(f'jsonrpc must be "{JSONRPC_VERSION}"')
    method = envelope.get("method")
    if not isinstance(method, str):
        raise InvalidRequestError("method must be a string")
    params = envelope.get("params")
    if params is not None and not isinstance(params, Mapping):
        raise InvalidRequestError("params must be an object")
    return JsonRpcRequest(
        jsonrpc=JSONRPC_VERSION,
        method=method,
        id=envelope.get("id"),
        params=dict(params) if params is not None else None,
    )


class ProtocolDispatcher:
    """Routes MCP methods to the tool, prompt, and resource registries.

    Usage::

        dispatcher = ProtocolDispatcher(
            tools=tool_registry,
            prompts=prompt_registry,
            resources=resource_registry,
            server_info=ServerInfo(name="waste-mcp", version="0.1.0"),
        )
        response = await dispatcher.handle(
            {"jsonrpc": "2.0", "id": 1, "method": "tools/list"}
        )
    """

    def __init__(
        self,
        *,
        tools: ToolRegistry,
        prompts: PromptRegistry,
        resources: ResourceRegistry,
        server_info: ServerInfo,
        protocol_version: str = MCP_PROTOCOL_VERSION,
    ) -> None:
        self.tools = tools
        self.prompts = prompts
        self.resources = resources
        self.server_info = server_info
        self.protocol_version = protocol_version
        self._routes: dict[str, MethodHandler] = {
            "initialize": self._initialize,
            "tools/list": self._tools_list,
            "tools/call": self._tools_call,
            "prompts/list": self._prompts_list,
            "prompts/get": self._prompts_get,
            "resources/list": self._resources_list,
            "resources/read": self._resources_read,
        }

    @property
    def methods(self) -> list[str]:
        return list(self._routes)

    async def handle(self, envelope: Any) -> dict[str, Any]:
        """Process one request envelope and return its response envelope."""
        request_id = envelope.get("id") if isinstance(envelope, Mapping) else None

        with _tracer.start_as_current_span("mcp.dispatch") as span:
            try:
                request = parse_request(envelope)
                span.set_attribute(ATTR_METHOD, request.method)
                if request.id is not None:
                    span.set_attribute(ATTR_REQUEST_ID, str(request.id))

                handler = self._routes.get(request.method)
                if handler is None:
                    raise MethodNotFoundError(request.method)

                logger.debug("Dispatching %s (id=%r)", request.method, request_id)
                result = await handler(request.params or {})
                response = JsonRpcResponse(id=request_id, result=result)
            except ProtocolError as exc:
                logger.info("Protocol error %d: %s", exc.code, exc.message)
                span.set_attribute(ATTR_ERROR_CODE, exc.code)
                response = JsonRpcResponse(
                    id=request_id,
                    error=JsonRpcError(code=exc.code, message=exc.message, data=exc.data),
                )
            except Exception as exc:
                logger.exception("Unhandled error while dispatching request %r", request_id)
                span.set_attribute(ATTR_ERROR_CODE, INTERNAL_ERROR)
                response = JsonRpcResponse(
                    id=request_id,
                    error=JsonRpcError(
                        code=INTERNAL_ERROR, message="Internal server error", data=str(exc)
                    ),
                )

        return response.to_wire()

    # ------------------------------------------------------------------
    # Method handlers
    # ------------------------------------------------------------------

    async def _initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        client = params.get("clientInfo")
        if isinstance(client, Mapping):
            logger.info("Initialize from client %s %s", client.get("name"), client.get("version"))
        return {
            "protocolVersion": self.protocol_version,
            "serverInfo": self.server_info.model_dump(),
            "capabilities": ServerCapabilities().model_dump(by_alias=True),
        }

    async def _tools_list(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"tools": self.tools.listing()}

    async def _tools_call(self, params: dict[str, Any]) -> dict[str, Any]:
        result = await self.tools.invoke(params.get("name"), params.get("arguments"))
        return result.to_wire()

    async def _prompts_list(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"prompts": self.prompts.listing()}

    async def _prompts_get(self, params: dict[str, Any]) -> dict[str, Any]:
        name = params.get("name")
        arguments = params.get("arguments")
        if arguments is not None and not isinstance(arguments, Mapping):
            raise InvalidParamsError("arguments must be an object")
        trace.get_current_span().set_attribute(ATTR_PROMPT_NAME, str(name))

        messages = self.prompts.generate_messages(name, arguments)
        descriptor = self.prompts.get(name)
        return {
            "description": descriptor.description if descriptor is not None else "",
            "messages": [m.model_dump() for m in messages],
        }

    async def _resources_list(self, params: dict[str, Any]) -> dict[str, Any]:
        try:
            descriptors = await self.resources.list_resources()
        except Exception as exc:
            logger.exception("Error listing resources")
            raise InternalError(f"Error listing resources: {exc}") from exc
        return {"resources": [d.to_wire() for d in descriptors]}

    async def _resources_read(self, params: dict[str, Any]) -> dict[str, Any]:
        uri = params.get("uri")
        if uri is None:
            raise InvalidParamsError("Missing required parameter: uri")
        trace.get_current_span().set_attribute(ATTR_RESOURCE_URI, str(uri))
        try:
            contents = await self.resources.read_resource(uri)
        except ProtocolError:
            raise
        except Exception as exc:
            logger.exception("Error reading resource %s", uri)
            raise InvalidParamsError(f"Error reading resource: {exc}") from exc
        return {"contents": [c.to_wire() for c in contents]}
