"""Prompt templates: fixed, parameterised user messages."""

from wastemcp.prompts.models import PromptArgument, PromptDescriptor
from wastemcp.prompts.registry import PromptRegistry
from wastemcp.prompts.templates import DEFAULT_PROMPTS

__all__ = [
    "DEFAULT_PROMPTS",
    "PromptArgument",
    "PromptDescriptor",
    "PromptRegistry",
]
