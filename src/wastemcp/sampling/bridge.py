"""SamplingBridge: lets server logic ask the driving client for text.

The bridge owns the single transport slot for the process. It is built once
at startup and handed by reference to every component that needs sampling,
so there is no hidden module-level callback.

Every call:

1. fails immediately with :class:`SamplingUnavailableError` if no transport
   is attached;
2. gets a fresh, process-unique correlation id;
3. races the transport against the bridge timeout. The loser is discarded:
   a transport that answers after the timeout is cancelled and its late
   result is dropped, never delivered.
"""

from __future__ import annotations

import asyncio
import itertools
import json
import logging
from typing import Any, Protocol, runtime_checkable
from uuid import uuid4

from wastemcp.models import Message
from wastemcp.sampling.errors import (
    SamplingError,
    SamplingTimeoutError,
    SamplingTransportError,
    SamplingUnavailableError,
)
from wastemcp.sampling.models import (
    ModelPreferences,
    RiskScore,
    SamplingParams,
    SamplingRequest,
    SamplingResponse,
)
from wastemcp.sampling.parsing import (
    MAX_CHOICES,
    ReplyTier,
    format_options,
    parse_choice_reply,
    parse_score_reply,
)
from wastemcp.utils.telemetry import (
    ATTR_SAMPLING_OUTCOME,
    ATTR_SAMPLING_REQUEST_ID,
    ATTR_SAMPLING_TIMEOUT,
    get_tracer,
)

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

DEFAULT_SAMPLING_TIMEOUT = 30.0

# Shared by every bridge so ids stay unique even if several are built.
_REQUEST_COUNTER = itertools.count(1)


@runtime_checkable
class SamplingTransport(Protocol):
    """Delivers a sampling request to the client and returns its answer.

    A transport capable of out-of-band delivery must use ``request.id`` as
    the join key between the outgoing prompt and the inbound reply.
    """

    async def create_message(self, request: SamplingRequest) -> SamplingResponse: ...


def _drop_late_result(task: asyncio.Future[Any]) -> None:
    """Done-callback for abandoned transport calls; retrieves and discards."""
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug("Discarded late sampling failure: %s", exc)
    else:
        logger.debug("Discarded late sampling reply")


class SamplingBridge:
    """Process-wide sampling slot plus the three generation primitives.

    Usage::

        bridge = SamplingBridge(timeout=30.0)
        bridge.attach(transport)

        text = await bridge.request_analysis("Summarise", {"facility": ...})
        risk = await bridge.request_risk_score(context)
        pick = await bridge.elicit_choice("Which?", ["A thing", "B thing"])
    """

    def __init__(
        self,
        transport: SamplingTransport | None = None,
        *,
        timeout: float = DEFAULT_SAMPLING_TIMEOUT,
    ) -> None:
        self._transport = transport
        self._timeout = timeout

    @property
    def available(self) -> bool:
        return self._transport is not None

    @property
    def timeout(self) -> float:
        return self._timeout

    def attach(self, transport: SamplingTransport) -> None:
        """Register the transport that answers sampling requests."""
        if self._transport is not None and self._transport is not transport:
            logger.warning(
                "Replacing sampling transport %s with %s",
                type(self._transport).__name__,
                type(transport).__name__,
            )
        self._transport = transport
        logger.info("Sampling transport registered: %s", type(transport).__name__)

    def detach(self) -> None:
        self._transport = None

    @staticmethod
    def next_request_id() -> str:
        return f"sampling-{next(_REQUEST_COUNTER)}-{uuid4().hex[:9]}"

    # ------------------------------------------------------------------
    # Core request
    # ------------------------------------------------------------------

    async def create_message(
        self,
        prompt: str,
        *,
        max_tokens: int = 1000,
        temperature: float = 0.7,
    ) -> str:
        """Send *prompt* to the client and return the generated text.

        Raises:
            SamplingUnavailableError: No transport is attached.
            SamplingTimeoutError: The transport did not answer in time.
            SamplingTransportError: The transport raised.
        """
        transport = self._transport
        if transport is None:
            raise SamplingUnavailableError()

        request = SamplingRequest(
            id=self.next_request_id(),
            params=SamplingParams(
                messages=[Message.user(prompt)],
                max_tokens=max_tokens,
                temperature=temperature,
                model_preferences=ModelPreferences(),
            ),
        )

        with _tracer.start_as_current_span("sampling.create_message") as span:
            span.set_attribute(ATTR_SAMPLING_REQUEST_ID, request.id)
            span.set_attribute(ATTR_SAMPLING_TIMEOUT, self._timeout)
            logger.info("Making sampling request %s", request.id)
            logger.debug("Sampling prompt: %.100s", prompt)
            try:
                response = await self._race(transport, request)
            except SamplingError as exc:
                span.set_attribute(ATTR_SAMPLING_OUTCOME, type(exc).__name__)
                logger.error("Sampling request %s failed: %s", request.id, exc)
                raise
            span.set_attribute(ATTR_SAMPLING_OUTCOME, "ok")

        logger.info("Sampling request %s completed", request.id)
        return response.text

    async def _race(
        self, transport: SamplingTransport, request: SamplingRequest
    ) -> SamplingResponse:
        """Await the transport or the timeout, whichever settles first."""
        task = asyncio.ensure_future(transport.create_message(request))
        try:
            done, _ = await asyncio.wait({task}, timeout=self._timeout)
        except asyncio.CancelledError:
            task.cancel()
            task.add_done_callback(_drop_late_result)
            raise

        if not done:
            task.cancel()
            task.add_done_callback(_drop_late_result)
            raise SamplingTimeoutError(request.id, self._timeout)

        try:
            raw = task.result()
        except SamplingError:
            raise
        except Exception as exc:
            raise SamplingTransportError(request.id, str(exc)) from exc

        if isinstance(raw, SamplingResponse):
            return raw
        try:
            return SamplingResponse.model_validate(raw)
        except ValueError as exc:
            raise SamplingTransportError(request.id, f"malformed reply: {exc}") from exc

    # ------------------------------------------------------------------
    # Generation primitives
    # ------------------------------------------------------------------

    async def request_analysis(self, prompt: str, data: Any) -> str:
        """Free-form analysis of *data*; the reply is returned verbatim."""
        full_prompt = f"{prompt}\n\nData to analyze:\n{json.dumps(data, indent=2, default=str)}"
        return await self.create_message(full_prompt, max_tokens=1500, temperature=0.7)

    async def request_risk_score(self, context: str) -> RiskScore:
        """Ask for a 0-100 risk score.

        Unparseable replies degrade to an integer scan and then to the
        midpoint; only transport-level failures raise.
        """
        prompt = (
            "Assess the risk level based on the following context. Provide your "
            'response in JSON format with "score" (0-100, where 0 is no risk and '
            '100 is critical risk) and "reasoning" (brief explanation).\n\n'
            f"Context:\n{context}\n\n"
            "Response format:\n"
            "{\n"
            '  "score": <number 0-100>,\n'
            '  "reasoning": "<explanation>"\n'
            "}"
        )
        reply = await self.create_message(prompt, max_tokens=500, temperature=0.5)
        parsed = parse_score_reply(reply)
        if parsed.tier is not ReplyTier.STRUCTURED:
            logger.warning("Risk score reply was not structured, used %s tier", parsed.tier.value)
        return parsed.to_risk_score()

    async def elicit_choice(self, question: str, options: list[str]) -> str:
        """Ask the client to pick one of *options*; always returns one of them."""
        if not options:
            msg = "elicit_choice requires at least one option"
            raise ValueError(msg)
        if len(options) > MAX_CHOICES:
            msg = f"elicit_choice supports at most {MAX_CHOICES} options"
            raise ValueError(msg)

        prompt = (
            f"{question}\n\n"
            f"Options:\n{format_options(options)}\n\n"
            "Please select one option by responding with just the letter "
            "(A, B, C, etc.) followed by a brief explanation of why."
        )
        reply = await self.create_message(prompt, max_tokens=300, temperature=0.3)
        choice = parse_choice_reply(reply, len(options))
        if choice.matched:
            logger.info("Choice selected: %s", options[choice.index])
        else:
            logger.warning("Could not determine choice, using first option")
        return options[choice.index]
