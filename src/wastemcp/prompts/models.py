"""Prompt template descriptors."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field


class PromptArgument(BaseModel):
    """One named template parameter.

    ``default`` fills an absent optional argument at generation time and is
    never sent on ``prompts/list``.
    """

    name: str
    description: str
    required: bool = False
    default: str | None = Field(default=None, exclude=True)


@dataclass(frozen=True)
class PromptDescriptor:
    """A fixed, parameterised user message."""

    name: str
    description: str
    arguments: tuple[PromptArgument, ...]
    render: Callable[[Mapping[str, str]], str]

    def listing(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "arguments": [arg.model_dump() for arg in self.arguments],
        }
