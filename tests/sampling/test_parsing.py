"""Tests for the tolerant sampling reply parsers."""

from __future__ import annotations

import pytest

from wastemcp.sampling.parsing import (
    MIDPOINT_SCORE,
    ReplyTier,
    clamp_score,
    format_options,
    parse_choice_reply,
    parse_score_reply,
)


class TestParseScoreReply:
    def test_structured(self) -> None:
        reply = parse_score_reply('Here you go: {"score": 72, "reasoning": "Two high-risk items"}')
        assert reply.tier is ReplyTier.STRUCTURED
        assert reply.score == 72
        assert reply.reasoning == "Two high-risk items"

    def test_structured_float_is_rounded(self) -> None:
        assert parse_score_reply('{"score": 64.6, "reasoning": "x"}').score == 65

    def test_structured_clamped(self) -> None:
        assert parse_score_reply('{"score": 250, "reasoning": "x"}').score == 100
        assert parse_score_reply('{"score": -4, "reasoning": "x"}').score == 0

    def test_structured_missing_reasoning_uses_text(self) -> None:
        text = '{"score": 10}'
        reply = parse_score_reply(text)
        assert reply.tier is ReplyTier.STRUCTURED
        assert reply.reasoning == text

    def test_nested_object_kept_whole(self) -> None:
        reply = parse_score_reply('{"score": 30, "reasoning": "ok", "detail": {"a": 1}}')
        assert reply.tier is ReplyTier.STRUCTURED
        assert reply.score == 30

    @pytest.mark.parametrize(
        "text",
        [
            '{"score": "high", "reasoning": "x"} risk is 40',
            '{"score": true} risk is 40',
            "{not json} risk is 40",
            "[40]",
        ],
    )
    def test_falls_back_to_integer(self, text: str) -> None:
        reply = parse_score_reply(text)
        assert reply.tier is ReplyTier.INTEGER_ONLY
        assert reply.score == 40
        assert reply.reasoning == text

    def test_integer_clamped(self) -> None:
        assert parse_score_reply("I'd say 250 out of 100").score == 100

    def test_no_digits_is_midpoint(self) -> None:
        reply = parse_score_reply("Hard to say, moderately risky.")
        assert reply.tier is ReplyTier.UNPARSED
        assert reply.score == MIDPOINT_SCORE == 50

    def test_empty_reply(self) -> None:
        assert parse_score_reply("").score == 50

    def test_to_risk_score(self) -> None:
        risk = parse_score_reply('{"score": 5, "reasoning": "calm"}').to_risk_score()
        assert risk.score == 5
        assert risk.reasoning == "calm"

    def test_deep_nesting_does_not_raise(self) -> None:
        text = "{" * 5000 + "}" * 5000 + " 12"
        assert 0 <= parse_score_reply(text).score <= 100


class TestClampScore:
    def test_bounds(self) -> None:
        assert clamp_score(-1) == 0
        assert clamp_score(101) == 100
        assert clamp_score(42.4) == 42


class TestChoiceParsing:
    def test_format_options(self) -> None:
        assert format_options(["Keep", "Drop"]) == "A) Keep\nB) Drop"

    def test_pronoun_is_skipped(self) -> None:
        choice = parse_choice_reply("I pick B because X", 2)
        assert choice.matched
        assert choice.index == 1

    def test_first_in_range_letter_wins(self) -> None:
        assert parse_choice_reply("A, though C is close", 3).index == 0

    def test_out_of_range_letters_ignored(self) -> None:
        choice = parse_choice_reply("Z is not an option, D neither", 3)
        assert not choice.matched
        assert choice.index == 0

    def test_lowercase_not_matched(self) -> None:
        assert not parse_choice_reply("b", 2).matched

    def test_embedded_letters_not_matched(self) -> None:
        assert not parse_choice_reply("Bravo", 2).matched
