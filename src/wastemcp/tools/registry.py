"""ToolRegistry: merges domain tool maps and invokes tools by name."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from wastemcp.tools.errors import DuplicateToolError
from wastemcp.tools.models import ToolDescriptor, ToolResult
from wastemcp.utils.telemetry import ATTR_TOOL_IS_ERROR, ATTR_TOOL_NAME, get_tracer

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class ToolRegistry:
    """Ordered name-to-descriptor map built once at startup.

    Usage::

        registry = ToolRegistry.merge(
            build_facility_tools(store),
            build_shipment_tools(store),
        )
        registry.listing()                               # tools/list payload
        result = await registry.invoke("get_facility", {"id": "..."})

    :meth:`invoke` never raises: unknown names and handler failures come
    back as error results.
    """

    def __init__(self, descriptors: Iterable[ToolDescriptor] = ()) -> None:
        self._tools: dict[str, ToolDescriptor] = {}
        for descriptor in descriptors:
            self._add(descriptor)

    @classmethod
    def merge(cls, *maps: Mapping[str, ToolDescriptor]) -> ToolRegistry:
        """Combine several domain maps; a name appearing twice is rejected."""
        registry = cls()
        for tool_map in maps:
            for name, descriptor in tool_map.items():
                if name != descriptor.name:
                    msg = f"Tool registered as {name!r} is named {descriptor.name!r}"
                    raise ValueError(msg)
                registry._add(descriptor)
        return registry

    def _add(self, descriptor: ToolDescriptor) -> None:
        if descriptor.name in self._tools:
            raise DuplicateToolError(descriptor.name)
        self._tools[descriptor.name] = descriptor

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def names(self) -> list[str]:
        return list(self._tools)

    def get(self, name: str) -> ToolDescriptor | None:
        return self._tools.get(name)

    def listing(self) -> list[dict[str, Any]]:
        """Descriptors in registration order, as sent on ``tools/list``."""
        return [descriptor.listing() for descriptor in self._tools.values()]

    async def invoke(self, name: Any, arguments: Any = None) -> ToolResult:
        """Run the named tool's handler, converting every failure to a result."""
        descriptor = self._tools.get(name) if isinstance(name, str) else None
        if descriptor is None:
            logger.warning("Unknown tool requested: %s", name)
            return ToolResult.error(f"Unknown tool: {name}")

        with _tracer.start_as_current_span("tool.invoke") as span:
            span.set_attribute(ATTR_TOOL_NAME, name)
            try:
                raw = await descriptor.handler(arguments if arguments is not None else {})
                result = raw if isinstance(raw, ToolResult) else ToolResult.model_validate(raw)
            except Exception as exc:
                logger.exception("Error executing tool %s", name)
                result = ToolResult.error(f"Error executing tool {name}: {exc}")
            span.set_attribute(ATTR_TOOL_IS_ERROR, bool(result.is_error))
        return result
