"""Tool descriptors and results."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from wastemcp.models import TextContent, dump_json
from wastemcp.validation import input_schema


class ToolResult(BaseModel):
    """The outcome of a tool call.

    ``is_error`` is only ever ``True`` or absent; domain failures travel here
    rather than as protocol errors.
    """

    model_config = ConfigDict(populate_by_name=True)

    content: list[TextContent]
    is_error: bool | None = Field(default=None, alias="isError")

    @property
    def text(self) -> str:
        return "".join(part.text for part in self.content)

    @classmethod
    def text_result(cls, text: str) -> ToolResult:
        return cls(content=[TextContent(text=text)])

    @classmethod
    def json_result(cls, payload: Any) -> ToolResult:
        return cls(content=[TextContent(text=dump_json(payload))])

    @classmethod
    def error(cls, text: str) -> ToolResult:
        return cls(content=[TextContent(text=text)], is_error=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


ToolHandler = Callable[[dict[str, Any]], Awaitable[ToolResult | dict[str, Any]]]


@dataclass(frozen=True)
class ToolDescriptor:
    """A named, immutable tool registration."""

    name: str
    description: str
    input_shape: type[BaseModel]
    handler: ToolHandler

    @property
    def input_schema(self) -> dict[str, Any]:
        return input_schema(self.input_shape)

    def listing(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }
