"""Sampling bridge: server-initiated generation requests to the client."""

from wastemcp.sampling.bridge import DEFAULT_SAMPLING_TIMEOUT, SamplingBridge, SamplingTransport
from wastemcp.sampling.errors import (
    SamplingError,
    SamplingTimeoutError,
    SamplingTransportError,
    SamplingUnavailableError,
)
from wastemcp.sampling.models import (
    ModelHint,
    ModelPreferences,
    RiskScore,
    SamplingParams,
    SamplingRequest,
    SamplingResponse,
)
from wastemcp.sampling.parsing import ReplyTier, parse_choice_reply, parse_score_reply

__all__ = [
    "DEFAULT_SAMPLING_TIMEOUT",
    "ModelHint",
    "ModelPreferences",
    "ReplyTier",
    "RiskScore",
    "SamplingBridge",
    "SamplingError",
    "SamplingParams",
    "SamplingRequest",
    "SamplingResponse",
    "SamplingTimeoutError",
    "SamplingTransport",
    "SamplingTransportError",
    "SamplingUnavailableError",
    "parse_choice_reply",
    "parse_score_reply",
]
