"""Sampling-powered analysis tools.

Each tool assembles metrics from the store, asks the sampling bridge for
model-generated insight, and falls back to deterministic output when the
bridge is unavailable or fails. Bridge errors never leave these handlers.
"""

from __future__ import annotations

import asyncio
import logging
import re
import time
from datetime import datetime, timezone
from typing import Any

from pydantic import Field

from wastemcp.models import dump_json
from wastemcp.sampling import SamplingBridge, SamplingError
from wastemcp.store import (
    Contaminant,
    EntityKind,
    EntityStore,
    Facility,
    Inspection,
    Query,
    Shipment,
)
from wastemcp.tools.models import ToolDescriptor, ToolResult
from wastemcp.validation import ArgumentShape, validate_arguments

logger = logging.getLogger(__name__)

FOCUS_AREAS = [
    "Contamination levels",
    "Acceptance rates",
    "Processing times",
    "Waste type compliance",
]

QUESTION_BANK: dict[str, list[str]] = {
    "Contamination levels": [
        "Are contamination detection systems functioning properly?",
        "What protocols are in place for high-risk contamination events?",
        "Review recent contamination logs - are patterns emerging?",
        "Are staff trained on latest contamination identification procedures?",
        "Verify segregation procedures for contaminated waste streams",
    ],
    "Acceptance rates": [
        "Review rejection reasons for the past 30 days",
        "Are acceptance criteria clearly communicated to suppliers?",
        "Check if supplier education programs are effective",
        "Verify pre-arrival notification system is working",
        "Assess if acceptance criteria need adjustment",
    ],
    "Processing times": [
        "Identify bottlenecks in the receiving process",
        "Are processing bays optimally utilized?",
        "Review staffing levels during peak hours",
        "Check equipment maintenance schedules",
        "Evaluate digital workflow systems",
    ],
    "Waste type compliance": [
        "Verify waste classification procedures",
        "Check that heating value calculations are accurate",
        "Review waste type percentage distributions",
        "Ensure contract-specified waste types match deliveries",
        "Validate waste producer documentation",
    ],
}

_NUMBERED_LINE_RE = re.compile(r"^\d+[.)]\s*")


class FacilityReportArguments(ArgumentShape):
    facility_id: str = Field(alias="facilityId", description="Facility ID to generate report for")
    include_recommendations: bool = Field(
        default=False,
        alias="includeRecommendations",
        description="Whether to include AI recommendations",
    )


class ShipmentRiskArguments(ArgumentShape):
    shipment_id: str = Field(alias="shipmentId", description="Shipment ID to analyze")


class InspectionQuestionsArguments(ArgumentShape):
    facility_id: str = Field(
        alias="facilityId", description="Facility ID to generate inspection questions for"
    )


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _error_payload(message: str) -> ToolResult:
    return ToolResult.error(dump_json({"error": message}))


def shipment_fallback_score(contaminants: int, high_risk: int, source_history: int) -> int:
    """Deterministic risk score used when the bridge cannot produce one."""
    return min(100, contaminants * 10 + high_risk * 25 + source_history * 2)


def metric_focus(contamination_score: int, acceptance_rate: float, compliance_issues: int) -> str:
    """Pick an inspection focus area from facility metrics alone."""
    if contamination_score > 10:
        return "Contamination levels"
    if acceptance_rate < 0.7:
        return "Acceptance rates"
    if compliance_issues > 3:
        return "Waste type compliance"
    return "Processing times"


def parse_numbered_questions(text: str) -> list[str]:
    """Extract ``1.`` / ``1)`` prefixed lines with their numbering removed."""
    questions: list[str] = []
    for line in text.splitlines():
        stripped = line.strip()
        if _NUMBERED_LINE_RE.match(stripped):
            question = _NUMBERED_LINE_RE.sub("", stripped, count=1).strip()
            if question:
                questions.append(question)
    return questions


def _recent(field: str, value: Any, order_by: str, limit: int) -> Query:
    return Query(equals={field: value}, order_by=order_by, limit=limit)


def build_analysis_tools(
    store: EntityStore, bridge: SamplingBridge
) -> dict[str, ToolDescriptor]:
    """Return the three sampling-backed tools, keyed by name."""

    async def facility_report(arguments: dict[str, Any]) -> ToolResult:
        try:
            args = validate_arguments(FacilityReportArguments, arguments)
            logger.info("Generating intelligent report for facility: %s", args.facility_id)

            facility = await store.get(EntityKind.FACILITY, args.facility_id)
            if facility is None:
                return _error_payload("Facility not found")

            inspections, contaminants, shipments = await asyncio.gather(
                store.list(EntityKind.INSPECTION, _recent("facility_id", facility.id, "created_at", 20)),
                store.list(EntityKind.CONTAMINANT, _recent("facility_id", facility.id, "detection_time", 50)),
                store.list(EntityKind.SHIPMENT, _recent("facility_id", facility.id, "entry_timestamp", 30)),
            )
            report = await _compile_facility_report(
                bridge, facility, inspections, contaminants, shipments, args.include_recommendations
            )
        except Exception as exc:
            logger.exception("Error generating facility report")
            return _error_payload(f"Error generating report: {exc}")
        return ToolResult.json_result(report)

    async def shipment_risk(arguments: dict[str, Any]) -> ToolResult:
        try:
            args = validate_arguments(ShipmentRiskArguments, arguments)
            logger.info("Analyzing shipment risk: %s", args.shipment_id)

            shipment = await store.get(EntityKind.SHIPMENT, args.shipment_id)
            if shipment is None:
                return _error_payload("Shipment not found")

            facility, contaminants, same_source = await asyncio.gather(
                store.get(EntityKind.FACILITY, shipment.facility_id),
                store.list(EntityKind.CONTAMINANT, Query(equals={"shipment_id": shipment.id})),
                store.list(
                    EntityKind.SHIPMENT,
                    _recent("source", shipment.source, "entry_timestamp", 11),
                ),
            )
            source_shipments = [s for s in same_source if s.id != shipment.id][:10]
            source_history = await store.list(
                EntityKind.CONTAMINANT,
                Query(one_of={"shipment_id": [s.id for s in source_shipments]}),
            )
            assessment = await _compile_risk_assessment(
                bridge,
                shipment,
                facility,
                contaminants,
                source_shipments,
                source_history,
            )
        except Exception as exc:
            logger.exception("Error analyzing shipment risk")
            return _error_payload(f"Error analyzing shipment: {exc}")
        return ToolResult.json_result(assessment)

    async def inspection_questions(arguments: dict[str, Any]) -> ToolResult:
        try:
            args = validate_arguments(InspectionQuestionsArguments, arguments)
            logger.info("Generating inspection questions for facility: %s", args.facility_id)

            facility = await store.get(EntityKind.FACILITY, args.facility_id)
            if facility is None:
                return _error_payload("Facility not found")

            inspections, contaminants, shipments = await asyncio.gather(
                store.list(EntityKind.INSPECTION, _recent("facility_id", facility.id, "created_at", 10)),
                store.list(EntityKind.CONTAMINANT, _recent("facility_id", facility.id, "detection_time", 20)),
                store.list(EntityKind.SHIPMENT, _recent("facility_id", facility.id, "entry_timestamp", 15)),
            )
            checklist = await _compile_checklist(bridge, facility, inspections, contaminants, shipments)
        except Exception as exc:
            logger.exception("Error generating inspection questions")
            return _error_payload(f"Error generating questions: {exc}")
        return ToolResult.json_result(checklist)

    descriptors = [
        ToolDescriptor(
            "generate_intelligent_facility_report",
            "Generate an intelligent facility report with AI-powered analysis including "
            "health score, concerns, and recommendations",
            FacilityReportArguments,
            facility_report,
        ),
        ToolDescriptor(
            "analyze_shipment_risk",
            "Analyze shipment risk using AI to assess contamination patterns and historical data",
            ShipmentRiskArguments,
            shipment_risk,
        ),
        ToolDescriptor(
            "suggest_inspection_questions",
            "Generate customized inspection questions based on facility history using AI elicitation",
            InspectionQuestionsArguments,
            inspection_questions,
        ),
    ]
    return {d.name: d for d in descriptors}


# ---------------------------------------------------------------------------
# Report assembly
# ---------------------------------------------------------------------------


async def _compile_facility_report(
    bridge: SamplingBridge,
    facility: Facility,
    inspections: list[Any],
    contaminants: list[Any],
    shipments: list[Any],
    include_recommendations: bool,
) -> dict[str, Any]:
    total_inspections = len(inspections)
    accepted = sum(1 for i in inspections if i.is_delivery_accepted)
    acceptance_rate = f"{accepted / total_inspections * 100:.2f}" if total_inspections else "0"
    total_contaminants = len(contaminants)
    high_risk = sum(1 for c in contaminants if c.is_high_risk)

    data_for_analysis = {
        "facility": {
            "name": facility.name,
            "location": facility.location,
            "shortCode": facility.short_code,
        },
        "metrics": {
            "totalInspections": total_inspections,
            "acceptanceRate": f"{acceptance_rate}%",
            "totalContaminants": total_contaminants,
            "highRiskContaminants": high_risk,
            "totalShipments": len(shipments),
        },
        "recentContaminants": [_contaminant_summary(c) for c in contaminants[:5]],
        "recentInspections": [_inspection_summary(i) for i in inspections[:5]],
    }

    ai_analysis: dict[str, Any]
    if not bridge.available:
        ai_analysis = {"note": "Sampling not available - AI analysis skipped"}
    else:
        prompt = (
            "Analyze this waste management facility and provide:\n"
            "1. Overall health score (0-100, where 100 is excellent)\n"
            "2. Top 3 concerns (bullet points)\n"
            "3. Compliance risk level (low/medium/high)\n"
            + ("4. 3 actionable recommendations for improvement\n" if include_recommendations else "")
            + "\nProvide a structured analysis based on the facility data."
        )
        try:
            analysis_text = await bridge.request_analysis(prompt, data_for_analysis)
            ai_analysis = {"rawAnalysis": analysis_text, "timestamp": _now_iso()}
        except SamplingError as exc:
            logger.error("AI analysis failed: %s", exc)
            ai_analysis = {"note": str(exc)}

    risk_percentage = (
        f"{high_risk / total_contaminants * 100:.2f}%" if total_contaminants else "0%"
    )
    return {
        "reportId": f"RPT-{int(time.time() * 1000)}",
        "generatedAt": _now_iso(),
        "facility": {
            "id": facility.id,
            "name": facility.name,
            "location": facility.location,
            "shortCode": facility.short_code,
        },
        "metrics": {
            "inspections": {
                "total": total_inspections,
                "accepted": accepted,
                "acceptanceRate": f"{acceptance_rate}%",
            },
            "contamination": {
                "total": total_contaminants,
                "highRisk": high_risk,
                "riskPercentage": risk_percentage,
            },
            "shipments": {"total": len(shipments)},
        },
        "aiAnalysis": ai_analysis,
        "rawData": {
            "recentContaminants": [c.to_wire() for c in contaminants[:10]],
            "recentInspections": [i.to_wire() for i in inspections[:10]],
            "recentShipments": [s.to_wire() for s in shipments[:10]],
        },
    }


def _contaminant_summary(c: Contaminant) -> dict[str, Any]:
    return {
        "type": c.waste_item_detected,
        "material": c.material,
        "explosive_level": c.explosive_level,
        "hcl_level": c.hcl_level,
        "so2_level": c.so2_level,
        "detection_time": c.detection_time.isoformat(),
    }


def _inspection_summary(i: Inspection) -> dict[str, Any]:
    return {
        "accepted": i.is_delivery_accepted,
        "meetsConditions": i.does_delivery_meets_conditions,
        "heatingValue": i.heating_value_calculation,
        "wasteTypes": [w.model_dump() for w in i.selected_wastetypes],
        "date": i.created_at.isoformat(),
    }


async def _compile_risk_assessment(
    bridge: SamplingBridge,
    shipment: Shipment,
    facility: Any,
    contaminants: list[Any],
    source_shipments: list[Any],
    source_history: list[Any],
) -> dict[str, Any]:
    high_risk = sum(1 for c in contaminants if c.is_high_risk)
    history_high_risk = sum(1 for c in source_history if c.is_high_risk)
    facility_name = facility.name if facility is not None else None

    if contaminants:
        contaminant_lines = "\n".join(
            f"  - {c.waste_item_detected} ({c.material}): explosive={c.explosive_level}, "
            f"HCl={c.hcl_level}, SO2={c.so2_level}"
            for c in contaminants
        )
    else:
        contaminant_lines = "  None"

    risk_context = (
        "Shipment Information:\n"
        f"- ID: {shipment.id}\n"
        f"- Source: {shipment.source}\n"
        f"- Facility: {facility_name or 'Unknown'}\n"
        f"- License Plate: {shipment.license_plate}\n"
        f"- Entry: {shipment.entry_timestamp.isoformat()}\n"
        f"- Exit: {shipment.exit_timestamp.isoformat()}\n"
        "\n"
        "Current Shipment Contaminants:\n"
        f"- Total detected: {len(contaminants)}\n"
        f"- High risk: {high_risk}\n"
        f"{contaminant_lines}\n"
        "\n"
        f"Source History ({shipment.source}):\n"
        f"- Previous shipments: {len(source_shipments)}\n"
        f"- Historical contaminants: {len(source_history)}\n"
        f"- Historical high risk: {history_high_risk}\n"
    )

    ai_risk_score: dict[str, Any] | None = None
    sampling_error: str | None = None
    if not bridge.available:
        sampling_error = "Sampling not available - AI risk scoring skipped"
    else:
        try:
            risk = await bridge.request_risk_score(risk_context)
            ai_risk_score = risk.model_dump()
        except SamplingError as exc:
            logger.error("Risk scoring failed: %s", exc)
            sampling_error = str(exc)

    if ai_risk_score is None:
        ai_risk_score = {
            "note": sampling_error,
            "fallbackScore": shipment_fallback_score(
                len(contaminants), high_risk, len(source_history)
            ),
            "fallbackReasoning": "Calculated based on contamination count and severity levels",
        }

    risk_factors = [
        text
        for condition, text in (
            (bool(contaminants), "Contaminants detected in current shipment"),
            (high_risk > 0, "High-risk contaminants present"),
            (len(source_history) > 5, "Source has contamination history"),
            (len(source_shipments) < 3, "Limited history from this source"),
        )
        if condition
    ]
    recommended_actions = [
        text
        for condition, text in (
            (high_risk > 0, "Immediate inspection required"),
            (bool(contaminants), "Enhanced monitoring for future shipments from this source"),
            (len(source_history) > 5, "Consider source evaluation"),
        )
        if condition
    ]
    recommended_actions.append("Document all findings in compliance report")

    return {
        "shipmentId": shipment.id,
        "assessedAt": _now_iso(),
        "shipment": {
            "source": shipment.source,
            "licensePlate": shipment.license_plate,
            "facility": facility_name,
            "duration": f"{round(shipment.duration_minutes)} minutes",
        },
        "riskIndicators": {
            "currentContaminants": len(contaminants),
            "highRiskContaminants": high_risk,
            "sourceHistoryContaminants": len(source_history),
            "sourceHistoryShipments": len(source_shipments),
        },
        "aiRiskScore": ai_risk_score,
        "riskFactors": risk_factors,
        "recommendedActions": recommended_actions,
        "detailedContaminants": [c.to_wire() for c in contaminants],
    }


async def _compile_checklist(
    bridge: SamplingBridge,
    facility: Facility,
    inspections: list[Any],
    contaminants: list[Any],
    shipments: list[Any],
) -> dict[str, Any]:
    contamination_score = len(contaminants)
    acceptance_rate = (
        sum(1 for i in inspections if i.is_delivery_accepted) / len(inspections)
        if inspections
        else 1.0
    )
    avg_processing = (
        sum(s.duration_minutes for s in shipments) / len(shipments) if shipments else 0.0
    )
    compliance_issues = sum(1 for i in inspections if not i.does_delivery_meets_conditions)

    sampling_error: str | None = None
    if not bridge.available:
        sampling_error = "Sampling not available - using metric-based focus selection"
        focus = metric_focus(contamination_score, acceptance_rate, compliance_issues)
    else:
        try:
            focus = await bridge.elicit_choice(
                "Based on this facility's recent history, which area needs most "
                "attention for the next inspection?",
                FOCUS_AREAS,
            )
            logger.info("Selected focus area: %s", focus)
        except SamplingError as exc:
            logger.error("Elicitation failed: %s", exc)
            sampling_error = str(exc)
            focus = metric_focus(contamination_score, acceptance_rate, compliance_issues)

    acceptance_text = f"{acceptance_rate * 100:.1f}%"
    processing_text = f"{avg_processing:.0f} minutes"

    questions: list[str] = []
    if sampling_error is None:
        prompt = (
            f'Generate a checklist of 5-7 specific inspection questions focused on "{focus}" '
            "for a waste management facility with the following characteristics:\n"
            f"- Recent contaminants detected: {contamination_score}\n"
            f"- Acceptance rate: {acceptance_text}\n"
            f"- Compliance issues: {compliance_issues}\n"
            f"- Average processing time: {processing_text}\n"
            "\n"
            "Return only the numbered questions, one per line."
        )
        try:
            questions_text = await bridge.request_analysis(
                prompt,
                {
                    "focusArea": focus,
                    "facilityMetrics": {
                        "contaminants": contamination_score,
                        "acceptanceRate": acceptance_text,
                        "complianceIssues": compliance_issues,
                        "avgProcessingTime": processing_text,
                    },
                },
            )
            questions = parse_numbered_questions(questions_text)
        except SamplingError as exc:
            logger.error("Question generation failed: %s", exc)

    if not questions:
        questions = list(QUESTION_BANK.get(focus, QUESTION_BANK["Contamination levels"]))

    notes = [
        text
        for condition, text in (
            (contamination_score > 15, "High contamination activity - extra vigilance required"),
            (acceptance_rate < 0.5, "Low acceptance rate - investigate root causes"),
            (compliance_issues > 5, "Significant compliance concerns - detailed review needed"),
        )
        if condition
    ]

    return {
        "facilityId": facility.id,
        "facilityName": facility.name,
        "generatedAt": _now_iso(),
        "focusArea": focus,
        "selectionMethod": "metric-based" if sampling_error else "AI-assisted",
        "facilityMetrics": {
            "recentContaminants": contamination_score,
            "acceptanceRate": acceptance_text,
            "avgProcessingTime": processing_text,
            "complianceIssues": compliance_issues,
        },
        "inspectionQuestions": questions,
        "additionalNotes": notes,
    }
