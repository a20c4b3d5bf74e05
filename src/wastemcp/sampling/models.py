"""Sampling request/response messages.

Mirrors the ``sampling/createMessage`` shape: the server sends messages and
generation parameters, the client answers with one assistant text part.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from wastemcp.models import Message, TextContent


class ModelHint(BaseModel):
    name: str | None = None


class ModelPreferences(BaseModel):
    """Soft hints the client may use when choosing a model."""

    model_config = ConfigDict(populate_by_name=True)

    hints: list[ModelHint] = []
    cost_priority: float = Field(default=0.3, alias="costPriority")
    speed_priority: float = Field(default=0.5, alias="speedPriority")
    intelligence_priority: float = Field(default=0.8, alias="intelligencePriority")


class SamplingParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    messages: list[Message]
    max_tokens: int = Field(default=1000, alias="maxTokens")
    temperature: float = 0.7
    model_preferences: ModelPreferences = Field(
        default_factory=ModelPreferences, alias="modelPreferences"
    )


class SamplingRequest(BaseModel):
    """An outgoing generation request; ``id`` is the correlation key."""

    id: str
    method: Literal["sampling/createMessage"] = "sampling/createMessage"
    params: SamplingParams

    def to_wire(self) -> dict[str, object]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class SamplingResponse(BaseModel):
    """The client's answer to a :class:`SamplingRequest`."""

    model_config = ConfigDict(populate_by_name=True)

    role: Literal["assistant"] = "assistant"
    content: TextContent
    model: str = "unknown"
    stop_reason: str | None = Field(default=None, alias="stopReason")

    @property
    def text(self) -> str:
        return self.content.text


class RiskScore(BaseModel):
    """A 0-100 risk assessment with free-text justification."""

    score: int = Field(ge=0, le=100)
    reasoning: str
