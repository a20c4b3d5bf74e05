"""The built-in waste-management prompt templates."""

from __future__ import annotations

from collections.abc import Mapping

from wastemcp.prompts.models import PromptArgument, PromptDescriptor


def _facility_compliance(args: Mapping[str, str]) -> str:
    return f"""Please analyze the compliance status of facility ID: {args["facilityId"]} over the last {args["timeRange"]}.

Review the following:
1. Recent inspections and their results (acceptance rates, conditions met)
2. Contamination detections and severity levels (explosive, HCL, SO2)
3. Shipment patterns and acceptance rates
4. Overall compliance trends

Use the available tools to gather this information:
- Use list_inspections with facilityId filter
- Use list_contaminants with facilityId filter
- Use list_shipments with facilityId filter
- Use get_facility to get facility details

Provide a comprehensive analysis with:
- Summary of findings
- Key compliance metrics
- Areas of concern
- Recommendations for improvement"""


def _contamination_report(args: Mapping[str, str]) -> str:
    recommendations = ""
    if args["includeRecommendations"] == "true":
        recommendations = """4. **Recommendations**
   - Immediate actions required
   - Process improvements
   - Prevention strategies"""

    return f"""Generate a comprehensive contamination report for facility ID: {args["facilityId"]}.

Include the following sections:

1. **Executive Summary**
   - Total contamination detections
   - Most common contaminant types
   - Overall severity assessment

2. **Detailed Analysis**
   - Contamination by type (material breakdown)
   - Severity levels (explosive, HCL, SO2)
   - Timeline and patterns
   - Associated shipments

3. **Facility Context**
   - Facility information and location
   - Recent operational activity

{recommendations}

Use these tools to gather data:
- get_facility for facility details
- list_contaminants with facilityId filter
- list_shipments with facilityId filter for context

Format the report professionally with clear sections and data visualization where appropriate."""


def _shipment_inspection(args: Mapping[str, str]) -> str:
    return f"""Review shipment ID: {args["shipmentId"]} and its associated inspection.

Perform a comprehensive review covering:

1. **Shipment Details**
   - Entry and exit timestamps
   - Source and destination
   - License plate information
   - Contract reference

2. **Inspection Results**
   - Acceptance status
   - Conditions compliance
   - Waste types detected and percentages
   - Heating value calculation
   - Waste producer information

3. **Compliance Check**
   - Contract alignment
   - Waste code verification
   - Any deviations or concerns

4. **Contamination Analysis**
   - Any contaminants detected in this shipment
   - Severity levels

Use these tools:
- get_shipment to retrieve shipment details
- list_inspections filtered by the shipment's contract or facility
- list_contaminants filtered by shipment_id
- get_contract using the contract reference

Provide a summary with any red flags, concerns, or items requiring follow-up."""


def _facilities_performance(args: Mapping[str, str]) -> str:
    metric = args["metric"]
    plural = "s" if metric == "overall" else ""
    return f"""Compare the performance of facilities with IDs: {args["facilityIds"]}

Focus on the {metric} metric{plural}.

For each facility, analyze:

1. **Inspection Performance**
   - Total inspections conducted
   - Acceptance rate (percentage of accepted deliveries)
   - Conditions compliance rate

2. **Contamination Metrics**
   - Total contamination detections
   - Average severity levels
   - Most common contaminant types

3. **Operational Efficiency**
   - Shipment volume
   - Processing times (entry to exit)
   - Contract compliance

4. **Overall Compliance Score**
   - Combined assessment based on above metrics

Use these tools for each facility:
- get_facility for facility information
- list_inspections with facilityId filter
- list_contaminants with facilityId filter
- list_shipments with facilityId filter

Present the comparison in a clear format:
- Side-by-side comparison table
- Highlight best and worst performers
- Identify trends and patterns
- Provide actionable insights

Rank the facilities and explain the ranking rationale."""


DEFAULT_PROMPTS: tuple[PromptDescriptor, ...] = (
    PromptDescriptor(
        name="analyze-facility-compliance",
        description="Analyze a facility's compliance based on recent inspections and contamination data",
        arguments=(
            PromptArgument(
                name="facilityId", description="The ID of the facility to analyze", required=True
            ),
            PromptArgument(
                name="timeRange",
                description='Time range for analysis (e.g., "30days", "90days")',
                default="30days",
            ),
        ),
        render=_facility_compliance,
    ),
    PromptDescriptor(
        name="generate-contamination-report",
        description="Generate a comprehensive contamination report for a facility",
        arguments=(
            PromptArgument(name="facilityId", description="The ID of the facility", required=True),
            PromptArgument(
                name="includeRecommendations",
                description="Whether to include recommendations (true/false)",
                default="true",
            ),
        ),
        render=_contamination_report,
    ),
    PromptDescriptor(
        name="review-shipment-inspection",
        description="Review a shipment and its inspection results",
        arguments=(
            PromptArgument(
                name="shipmentId", description="The ID of the shipment to review", required=True
            ),
        ),
        render=_shipment_inspection,
    ),
    PromptDescriptor(
        name="compare-facilities-performance",
        description="Compare performance metrics across multiple facilities",
        arguments=(
            PromptArgument(
                name="facilityIds",
                description="Comma-separated list of facility IDs to compare",
                required=True,
            ),
            PromptArgument(
                name="metric",
                description="Metric to compare (compliance, contamination, efficiency)",
                default="overall",
            ),
        ),
        render=_facilities_performance,
    ),
)
