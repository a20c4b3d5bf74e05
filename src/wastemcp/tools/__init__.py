"""Tool registry, descriptors, and the waste-management tool modules."""

from wastemcp.tools.analysis import build_analysis_tools
from wastemcp.tools.contaminants import build_contaminant_tools
from wastemcp.tools.contracts import build_contract_tools
from wastemcp.tools.errors import DuplicateToolError, ToolError
from wastemcp.tools.facilities import build_facility_tools
from wastemcp.tools.inspections import build_inspection_tools
from wastemcp.tools.models import ToolDescriptor, ToolHandler, ToolResult
from wastemcp.tools.registry import ToolRegistry
from wastemcp.tools.shipments import build_shipment_tools

__all__ = [
    "DuplicateToolError",
    "ToolDescriptor",
    "ToolError",
    "ToolHandler",
    "ToolRegistry",
    "ToolResult",
    "build_analysis_tools",
    "build_contaminant_tools",
    "build_contract_tools",
    "build_facility_tools",
    "build_inspection_tools",
    "build_shipment_tools",
]
