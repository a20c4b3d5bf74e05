"""PromptRegistry: lists templates and renders them into messages."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from wastemcp.models import Message
from wastemcp.prompts.models import PromptDescriptor
from wastemcp.protocol.errors import MissingPromptArgumentError, PromptNotFoundError

logger = logging.getLogger(__name__)


def _as_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class PromptRegistry:
    """Ordered, immutable set of prompt templates.

    Generation is pure: no store reads, no side effects. Absent optional
    arguments take their declared default.
    """

    def __init__(self, prompts: Iterable[PromptDescriptor]) -> None:
        self._prompts: dict[str, PromptDescriptor] = {}
        for prompt in prompts:
            if prompt.name in self._prompts:
                msg = f"Duplicate prompt name: {prompt.name}"
                raise ValueError(msg)
            self._prompts[prompt.name] = prompt

    def __len__(self) -> int:
        return len(self._prompts)

    def get(self, name: str) -> PromptDescriptor | None:
        return self._prompts.get(name)

    def listing(self) -> list[dict[str, Any]]:
        return [prompt.listing() for prompt in self._prompts.values()]

    def generate_messages(self, name: Any, arguments: Mapping[str, Any] | None = None) -> list[Message]:
        """Render the named template.

        Raises:
            PromptNotFoundError: *name* is not a registered prompt.
            MissingPromptArgumentError: A required argument is absent.
        """
        prompt = self._prompts.get(name) if isinstance(name, str) else None
        if prompt is None:
            raise PromptNotFoundError(name)

        supplied = arguments or {}
        resolved: dict[str, str] = {}
        for arg in prompt.arguments:
            value = supplied.get(arg.name)
            if value is None:
                if arg.required:
                    raise MissingPromptArgumentError(prompt.name, arg.name)
                value = arg.default or ""
            resolved[arg.name] = _as_text(value)

        logger.debug("Rendering prompt %s", prompt.name)
        return [Message.user(prompt.render(resolved))]
