"""Server assembly: wires the store, registries, bridge, and dispatcher."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from wastemcp.config import ServerConfig
from wastemcp.prompts import DEFAULT_PROMPTS, PromptRegistry
from wastemcp.protocol import ProtocolDispatcher, ServerInfo
from wastemcp.resources import ResourceRegistry, build_resource_registry
from wastemcp.sampling import SamplingBridge, SamplingTransport
from wastemcp.store import EntityStore
from wastemcp.tools import (
    ToolRegistry,
    build_analysis_tools,
    build_contaminant_tools,
    build_contract_tools,
    build_facility_tools,
    build_inspection_tools,
    build_shipment_tools,
)
from wastemcp.utils.telemetry import configure_telemetry

logger = logging.getLogger(__name__)


@dataclass
class WasteServer:
    """Everything a transport needs to serve MCP requests."""

    config: ServerConfig
    store: EntityStore
    bridge: SamplingBridge
    tools: ToolRegistry
    prompts: PromptRegistry
    resources: ResourceRegistry
    dispatcher: ProtocolDispatcher

    async def handle(self, envelope: Any) -> dict[str, Any]:
        return await self.dispatcher.handle(envelope)


def build_tool_registry(store: EntityStore, bridge: SamplingBridge) -> ToolRegistry:
    return ToolRegistry.merge(
        build_facility_tools(store),
        build_contaminant_tools(store),
        build_inspection_tools(store),
        build_shipment_tools(store),
        build_contract_tools(store),
        build_analysis_tools(store, bridge),
    )


def build_server(
    store: EntityStore,
    config: ServerConfig | None = None,
    *,
    sampling_transport: SamplingTransport | None = None,
) -> WasteServer:
    """Assemble a :class:`WasteServer` around *store*.

    An explicit *sampling_transport* wins; otherwise a LiteLLM transport is
    attached when ``config.sampling.model`` is set.
    """
    config = config or ServerConfig()

    if config.telemetry.enabled:
        configure_telemetry(service_name=config.name, otlp_endpoint=config.telemetry.otlp_endpoint)

    bridge = SamplingBridge(timeout=config.sampling.timeout)
    if sampling_transport is not None:
        bridge.attach(sampling_transport)
    elif config.sampling.model:
        from wastemcp.sampling.litellm_transport import LiteLLMSamplingTransport

        bridge.attach(
            LiteLLMSamplingTransport(
                config.sampling.model,
                api_key=config.sampling.api_key,
                api_base=config.sampling.api_base,
            )
        )

    tools = build_tool_registry(store, bridge)
    prompts = PromptRegistry(DEFAULT_PROMPTS)
    resources = build_resource_registry(store)
    dispatcher = ProtocolDispatcher(
        tools=tools,
        prompts=prompts,
        resources=resources,
        server_info=ServerInfo(name=config.name, version=config.version),
        protocol_version=config.protocol_version,
    )
    logger.info(
        "Server %s ready: %d tools, %d prompts, sampling %s",
        config.name,
        len(tools),
        len(prompts),
        "attached" if bridge.available else "unavailable",
    )
    return WasteServer(
        config=config,
        store=store,
        bridge=bridge,
        tools=tools,
        prompts=prompts,
        resources=resources,
        dispatcher=dispatcher,
    )
