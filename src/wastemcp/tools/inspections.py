"""Inspection CRUD tools."""

from __future__ import annotations

from pydantic import BaseModel, Field

from wastemcp.store import EntityKind, EntityStore
from wastemcp.tools.crud import CrudSpec, build_crud_tools
from wastemcp.tools.models import ToolDescriptor
from wastemcp.validation import ArgumentShape


class WasteTypeArgument(BaseModel):
    category: str = Field(description="Waste category")
    percentage: str = Field(description="Percentage")


class CreateInspectionArguments(ArgumentShape):
    facility_id: str = Field(description="Facility ID")
    is_delivery_accepted: bool = Field(description="Is delivery accepted")
    does_delivery_meets_conditions: bool = Field(description="Does delivery meet conditions")
    selected_wastetypes: list[WasteTypeArgument] = Field(description="Selected waste types")
    heating_value_calculation: float = Field(description="Heating value calculation")
    waste_producer: str = Field(description="Waste producer")
    contract_reference_id: str = Field(description="Contract reference ID")


class UpdateInspectionArguments(ArgumentShape):
    id: str = Field(description="Inspection ID")
    is_delivery_accepted: bool | None = Field(default=None, description="Is delivery accepted")
    does_delivery_meets_conditions: bool | None = Field(
        default=None, description="Does delivery meet conditions"
    )
    selected_wastetypes: list[WasteTypeArgument] | None = Field(
        default=None, description="Selected waste types"
    )
    heating_value_calculation: float | None = Field(default=None, description="Heating value calculation")
    waste_producer: str | None = Field(default=None, description="Waste producer")
    contract_reference_id: str | None = Field(default=None, description="Contract reference ID")


class ListInspectionsArguments(ArgumentShape):
    facility_id: str | None = Field(default=None, description="Filter by facility ID")
    is_delivery_accepted: bool | None = Field(default=None, description="Filter by delivery acceptance")
    contract_reference_id: str | None = Field(
        default=None, description="Filter by contract reference ID"
    )


INSPECTION_CRUD = CrudSpec(
    kind=EntityKind.INSPECTION,
    plural="inspections",
    create_shape=CreateInspectionArguments,
    update_shape=UpdateInspectionArguments,
    list_shape=ListInspectionsArguments,
    exact_filters=("facility_id", "is_delivery_accepted", "contract_reference_id"),
    facility_field="facility_id",
)


def build_inspection_tools(store: EntityStore) -> dict[str, ToolDescriptor]:
    return build_crud_tools(INSPECTION_CRUD, store)
