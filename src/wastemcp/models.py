"""Shared content models used by tools, prompts, and sampling.

Every capability in the server ultimately speaks in text content parts
wrapped in role-tagged messages, so these live at the package root rather
than inside any one subsystem.
"""

from __future__ import annotations

import json
from typing import Any, Literal

from pydantic import BaseModel


class TextContent(BaseModel):
    """Plain text content part."""

    type: Literal["text"] = "text"
    text: str


class Message(BaseModel):
    """A single role-tagged message carrying one text part."""

    role: Literal["user", "assistant"]
    content: TextContent

    @property
    def text(self) -> str:
        return self.content.text

    @classmethod
    def user(cls, text: str) -> Message:
        """Create a user message."""
        return cls(role="user", content=TextContent(text=text))

    @classmethod
    def assistant(cls, text: str) -> Message:
        """Create an assistant message."""
        return cls(role="assistant", content=TextContent(text=text))


def dump_json(payload: Any) -> str:
    """Serialise *payload* as indented JSON; unknown types fall back to ``str``."""
    return json.dumps(payload, indent=2, default=str)
