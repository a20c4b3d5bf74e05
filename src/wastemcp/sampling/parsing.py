"""Tolerant parsers for free-text sampling replies.

Clients answer in whatever prose the model produced, so each parser works
through fallback tiers and reports which tier produced the value. A
fallback tier is a degraded success, never an error.
"""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass
from enum import Enum

from wastemcp.sampling.models import RiskScore

# Greedy on purpose: first "{" through last "}" so nested objects stay whole.
_BRACED_RE = re.compile(r"\{[\s\S]*\}")
_INTEGER_RE = re.compile(r"\b(\d{1,3})\b")
_LETTER_RE = re.compile(r"\b([A-Z])\b")

MIDPOINT_SCORE = 50
MAX_CHOICES = 26


class ReplyTier(str, Enum):
    """Which parsing tier produced a value."""

    STRUCTURED = "structured"
    INTEGER_ONLY = "integer_only"
    UNPARSED = "unparsed"


@dataclass(frozen=True)
class ScoreReply:
    """Result of parsing a risk-score reply."""

    tier: ReplyTier
    score: int
    reasoning: str

    def to_risk_score(self) -> RiskScore:
        return RiskScore(score=self.score, reasoning=self.reasoning)


@dataclass(frozen=True)
class ChoiceReply:
    """Result of parsing a forced-choice reply.

    ``matched`` is ``False`` when no usable letter was found and ``index``
    fell back to the first option.
    """

    index: int
    matched: bool


def clamp_score(value: float) -> int:
    return max(0, min(100, int(round(value))))


def parse_structured_score(text: str) -> ScoreReply | None:
    """Tier 1: a brace-delimited record with a numeric ``score``."""
    match = _BRACED_RE.search(text)
    if match is None:
        return None
    try:
        parsed = json.loads(match.group(0))
    except (ValueError, RecursionError):
        return None
    if not isinstance(parsed, dict):
        return None

    score = parsed.get("score")
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        return None
    if isinstance(score, float) and not math.isfinite(score):
        return None

    reasoning = parsed.get("reasoning")
    if not isinstance(reasoning, str) or not reasoning:
        reasoning = text
    return ScoreReply(ReplyTier.STRUCTURED, clamp_score(score), reasoning)


def parse_integer_score(text: str) -> ScoreReply | None:
    """Tier 2: the first bare integer token, with the whole reply as reasoning."""
    match = _INTEGER_RE.search(text)
    if match is None:
        return None
    return ScoreReply(ReplyTier.INTEGER_ONLY, clamp_score(int(match.group(1))), text)


def parse_score_reply(text: str) -> ScoreReply:
    """Parse a risk-score reply; always returns a score in ``[0, 100]``."""
    return (
        parse_structured_score(text)
        or parse_integer_score(text)
        or ScoreReply(ReplyTier.UNPARSED, MIDPOINT_SCORE, text)
    )


def option_letter(index: int) -> str:
    return chr(ord("A") + index)


def format_options(options: list[str]) -> str:
    """Render options as ``A) first`` lines."""
    return "\n".join(f"{option_letter(i)}) {opt}" for i, opt in enumerate(options))


def parse_choice_reply(text: str, option_count: int) -> ChoiceReply:
    """Find the first standalone uppercase letter that names an option.

    Letters outside the option range (e.g. the pronoun "I") are skipped.
    """
    for match in _LETTER_RE.finditer(text):
        index = ord(match.group(1)) - ord("A")
        if 0 <= index < option_count:
            return ChoiceReply(index=index, matched=True)
    return ChoiceReply(index=0, matched=False)
