"""Resource descriptors and contents."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

JSON_MIME_TYPE = "application/json"


class ResourceDescriptor(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    uri: str
    name: str
    description: str
    mime_type: str = Field(default=JSON_MIME_TYPE, alias="mimeType")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ResourceContent(BaseModel):
    """One entry of a ``resources/read`` result."""

    model_config = ConfigDict(populate_by_name=True)

    uri: str
    mime_type: str = Field(default=JSON_MIME_TYPE, alias="mimeType")
    text: str

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
