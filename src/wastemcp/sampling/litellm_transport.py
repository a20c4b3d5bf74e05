"""LiteLLM-backed sampling transport.

Answers sampling requests by calling a model directly through LiteLLM
instead of round-tripping to the MCP client. Useful from the CLI, where no
client is driving the server.
"""

from __future__ import annotations

from typing import Any

import litellm

from wastemcp.models import TextContent
from wastemcp.sampling.models import SamplingRequest, SamplingResponse
from wastemcp.utils.telemetry import ATTR_FINISH_REASON, ATTR_MODEL, get_tracer

_tracer = get_tracer(__name__)


class LiteLLMSamplingTransport:
    """Usage::

    transport = LiteLLMSamplingTransport("openai/gpt-4o-mini")
    bridge.attach(transport)
    """

    def __init__(
        self,
        model: str,
        *,
        api_key: str | None = None,
        api_base: str | None = None,
    ) -> None:
        self.model = model
        self.api_key = api_key
        self.api_base = api_base

    async def create_message(self, request: SamplingRequest) -> SamplingResponse:
        with _tracer.start_as_current_span("sampling.litellm") as span:
            span.set_attribute(ATTR_MODEL, self.model)

            call_kwargs: dict[str, Any] = {
                "model": self.model,
                "messages": [
                    {"role": m.role, "content": m.text} for m in request.params.messages
                ],
                "max_tokens": request.params.max_tokens,
                "temperature": request.params.temperature,
            }
            if self.api_key:
                call_kwargs["api_key"] = self.api_key
            if self.api_base:
                call_kwargs["api_base"] = self.api_base

            response = await litellm.acompletion(**call_kwargs)  # pyright: ignore[reportUnknownMemberType]

            choice = response.choices[0]
            finish_reason = getattr(choice, "finish_reason", None)
            if finish_reason is not None:
                span.set_attribute(ATTR_FINISH_REASON, str(finish_reason))

            return SamplingResponse(
                content=TextContent(text=choice.message.content or ""),
                model=getattr(response, "model", None) or self.model,
                stop_reason=finish_reason,
            )
