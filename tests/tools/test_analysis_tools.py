"""Tests for the sampling-backed analysis tools and their fallbacks."""

from __future__ import annotations

import json
from typing import Any

import pytest
from conftest import (
    FACILITY_ID,
    MISSING_ID,
    OTHER_FACILITY_ID,
    SHIPMENT_ID,
    HangingTransport,
    make_bridge,
)

from wastemcp.sampling import SamplingBridge
from wastemcp.store import InMemoryStore
from wastemcp.tools import ToolRegistry, build_analysis_tools
from wastemcp.tools.analysis import (
    FOCUS_AREAS,
    QUESTION_BANK,
    metric_focus,
    parse_numbered_questions,
    shipment_fallback_score,
)


def _registry(store: InMemoryStore, bridge: SamplingBridge) -> ToolRegistry:
    return ToolRegistry.merge(build_analysis_tools(store, bridge))


async def _call(registry: ToolRegistry, name: str, arguments: dict[str, Any]) -> dict[str, Any]:
    result = await registry.invoke(name, arguments)
    assert result.is_error is None, result.text
    return json.loads(result.text)


class TestHelpers:
    def test_fallback_score(self) -> None:
        assert shipment_fallback_score(1, 1, 0) == 35
        assert shipment_fallback_score(0, 0, 3) == 6
        assert shipment_fallback_score(5, 3, 10) == 100

    @pytest.mark.parametrize(
        ("score", "rate", "issues", "expected"),
        [
            (11, 1.0, 0, "Contamination levels"),
            (10, 0.69, 0, "Acceptance rates"),
            (0, 0.7, 4, "Waste type compliance"),
            (0, 0.7, 3, "Processing times"),
        ],
    )
    def test_metric_focus(self, score: int, rate: float, issues: int, expected: str) -> None:
        assert metric_focus(score, rate, issues) == expected

    def test_parse_numbered_questions(self) -> None:
        text = "Here are questions:\n1. First?\n  2) Second?\n3.\nNot numbered\n10. Tenth?"
        assert parse_numbered_questions(text) == ["First?", "Second?", "Tenth?"]

    def test_bank_covers_every_focus_area(self) -> None:
        assert set(QUESTION_BANK) == set(FOCUS_AREAS)


class TestFacilityReport:
    async def test_without_sampling(self, store: InMemoryStore) -> None:
        report = await _call(
            _registry(store, SamplingBridge()),
            "generate_intelligent_facility_report",
            {"facilityId": FACILITY_ID},
        )
        assert report["reportId"].startswith("RPT-")
        assert report["facility"]["shortCode"] == "NP"
        assert report["metrics"]["inspections"] == {
            "total": 1,
            "accepted": 1,
            "acceptanceRate": "100.00%",
        }
        assert report["metrics"]["contamination"] == {
            "total": 1,
            "highRisk": 1,
            "riskPercentage": "100.00%",
        }
        assert report["metrics"]["shipments"] == {"total": 2}
        assert report["aiAnalysis"] == {"note": "Sampling not available - AI analysis skipped"}
        assert len(report["rawData"]["recentShipments"]) == 2

    async def test_empty_facility_rates(self, store: InMemoryStore) -> None:
        report = await _call(
            _registry(store, SamplingBridge()),
            "generate_intelligent_facility_report",
            {"facilityId": OTHER_FACILITY_ID},
        )
        assert report["metrics"]["inspections"]["acceptanceRate"] == "0%"
        assert report["metrics"]["contamination"]["riskPercentage"] == "0%"

    async def test_with_sampling(self, store: InMemoryStore) -> None:
        bridge, transport = make_bridge("Health score: 82")
        report = await _call(
            _registry(store, bridge),
            "generate_intelligent_facility_report",
            {"facilityId": FACILITY_ID, "includeRecommendations": True},
        )
        assert report["aiAnalysis"]["rawAnalysis"] == "Health score: 82"
        assert "timestamp" in report["aiAnalysis"]

        prompt = transport.requests[0].params.messages[0].text
        assert "4. 3 actionable recommendations" in prompt
        assert '"shortCode": "NP"' in prompt

    async def test_recommendations_off_by_default(self, store: InMemoryStore) -> None:
        bridge, transport = make_bridge("ok")
        await _call(
            _registry(store, bridge),
            "generate_intelligent_facility_report",
            {"facilityId": FACILITY_ID},
        )
        assert "actionable" not in transport.requests[0].params.messages[0].text

    async def test_sampling_failure_is_noted(self, store: InMemoryStore) -> None:
        bridge, _ = make_bridge(RuntimeError("client went away"))
        report = await _call(
            _registry(store, bridge),
            "generate_intelligent_facility_report",
            {"facilityId": FACILITY_ID},
        )
        assert "client went away" in report["aiAnalysis"]["note"]

    async def test_missing_facility(self, store: InMemoryStore) -> None:
        result = await _registry(store, SamplingBridge()).invoke(
            "generate_intelligent_facility_report", {"facilityId": MISSING_ID}
        )
        assert result.is_error is True
        assert json.loads(result.text) == {"error": "Facility not found"}

    async def test_invalid_arguments(self, store: InMemoryStore) -> None:
        result = await _registry(store, SamplingBridge()).invoke(
            "generate_intelligent_facility_report", {}
        )
        assert result.is_error is True
        assert json.loads(result.text)["error"].startswith("Error generating report:")


class TestShipmentRisk:
    async def test_fallback_without_sampling(self, store: InMemoryStore) -> None:
        assessment = await _call(
            _registry(store, SamplingBridge()),
            "analyze_shipment_risk",
            {"shipmentId": SHIPMENT_ID},
        )
        assert assessment["shipment"] == {
            "source": "Acme Depot",
            "licensePlate": "AB12345",
            "facility": "North Plant",
            "duration": "45 minutes",
        }
        assert assessment["riskIndicators"] == {
            "currentContaminants": 1,
            "highRiskContaminants": 1,
            "sourceHistoryContaminants": 0,
            "sourceHistoryShipments": 1,
        }
        assert assessment["aiRiskScore"]["fallbackScore"] == 35
        assert assessment["aiRiskScore"]["note"] == (
            "Sampling not available - AI risk scoring skipped"
        )
        assert assessment["riskFactors"] == [
            "Contaminants detected in current shipment",
            "High-risk contaminants present",
            "Limited history from this source",
        ]
        assert assessment["recommendedActions"] == [
            "Immediate inspection required",
            "Enhanced monitoring for future shipments from this source",
            "Document all findings in compliance report",
        ]
        assert len(assessment["detailedContaminants"]) == 1

    async def test_with_sampling(self, store: InMemoryStore) -> None:
        bridge, transport = make_bridge('{"score": 80, "reasoning": "Explosive item"}')
        assessment = await _call(
            _registry(store, bridge), "analyze_shipment_risk", {"shipmentId": SHIPMENT_ID}
        )
        assert assessment["aiRiskScore"] == {"score": 80, "reasoning": "Explosive item"}

        context = transport.requests[0].params.messages[0].text
        assert "- License Plate: AB12345" in context
        assert "Gas cylinder (Steel): explosive=high, HCl=low, SO2=medium" in context

    async def test_timeout_falls_back(self, store: InMemoryStore) -> None:
        bridge = SamplingBridge(HangingTransport(), timeout=0.01)
        assessment = await _call(
            _registry(store, bridge), "analyze_shipment_risk", {"shipmentId": SHIPMENT_ID}
        )
        assert "timed out" in assessment["aiRiskScore"]["note"]
        assert assessment["aiRiskScore"]["fallbackScore"] == 35

    async def test_missing_shipment(self, store: InMemoryStore) -> None:
        result = await _registry(store, SamplingBridge()).invoke(
            "analyze_shipment_risk", {"shipmentId": MISSING_ID}
        )
        assert result.is_error is True
        assert json.loads(result.text) == {"error": "Shipment not found"}


class TestInspectionQuestions:
    async def test_metric_based_without_sampling(self, store: InMemoryStore) -> None:
        checklist = await _call(
            _registry(store, SamplingBridge()),
            "suggest_inspection_questions",
            {"facilityId": FACILITY_ID},
        )
        assert checklist["facilityName"] == "North Plant"
        assert checklist["focusArea"] == "Processing times"
        assert checklist["selectionMethod"] == "metric-based"
        assert checklist["inspectionQuestions"] == QUESTION_BANK["Processing times"]
        assert checklist["facilityMetrics"] == {
            "recentContaminants": 1,
            "acceptanceRate": "100.0%",
            "avgProcessingTime": "52 minutes",
            "complianceIssues": 1,
        }
        assert checklist["additionalNotes"] == []

    async def test_ai_assisted(self, store: InMemoryStore) -> None:
        bridge, transport = make_bridge(
            "I pick B because rejections are frequent",
            "1. Are rejection reasons logged?\n2) Who reviews them?\nThanks",
        )
        checklist = await _call(
            _registry(store, bridge), "suggest_inspection_questions", {"facilityId": FACILITY_ID}
        )
        assert checklist["focusArea"] == "Acceptance rates"
        assert checklist["selectionMethod"] == "AI-assisted"
        assert checklist["inspectionQuestions"] == [
            "Are rejection reasons logged?",
            "Who reviews them?",
        ]
        assert len(transport.requests) == 2
        assert 'focused on "Acceptance rates"' in transport.requests[1].params.messages[0].text

    async def test_unnumbered_reply_uses_bank(self, store: InMemoryStore) -> None:
        bridge, _ = make_bridge("A", "Nothing numbered here")
        checklist = await _call(
            _registry(store, bridge), "suggest_inspection_questions", {"facilityId": FACILITY_ID}
        )
        assert checklist["focusArea"] == "Contamination levels"
        assert checklist["inspectionQuestions"] == QUESTION_BANK["Contamination levels"]

    async def test_elicitation_failure_uses_metrics(self, store: InMemoryStore) -> None:
        bridge, transport = make_bridge(RuntimeError("no client"))
        checklist = await _call(
            _registry(store, bridge), "suggest_inspection_questions", {"facilityId": FACILITY_ID}
        )
        assert checklist["selectionMethod"] == "metric-based"
        assert checklist["focusArea"] == "Processing times"
        assert len(transport.requests) == 1

    async def test_question_failure_keeps_ai_focus(self, store: InMemoryStore) -> None:
        bridge, _ = make_bridge("D", RuntimeError("dropped"))
        checklist = await _call(
            _registry(store, bridge), "suggest_inspection_questions", {"facilityId": FACILITY_ID}
        )
        assert checklist["focusArea"] == "Waste type compliance"
        assert checklist["selectionMethod"] == "AI-assisted"
        assert checklist["inspectionQuestions"] == QUESTION_BANK["Waste type compliance"]

    async def test_empty_facility(self, store: InMemoryStore) -> None:
        checklist = await _call(
            _registry(store, SamplingBridge()),
            "suggest_inspection_questions",
            {"facilityId": OTHER_FACILITY_ID},
        )
        assert checklist["facilityMetrics"]["acceptanceRate"] == "100.0%"
        assert checklist["facilityMetrics"]["avgProcessingTime"] == "0 minutes"

    async def test_missing_facility(self, store: InMemoryStore) -> None:
        result = await _registry(store, SamplingBridge()).invoke(
            "suggest_inspection_questions", {"facilityId": MISSING_ID}
        )
        assert result.is_error is True
        assert json.loads(result.text) == {"error": "Facility not found"}
