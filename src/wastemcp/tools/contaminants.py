"""Contaminant CRUD tools.

Contaminant reads embed the owning facility record under ``facilityId``.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from wastemcp.store import EntityKind, EntityStore
from wastemcp.store.models import Level
from wastemcp.tools.crud import CrudSpec, build_crud_tools
from wastemcp.tools.models import ToolDescriptor
from wastemcp.validation import ArgumentShape


class CreateContaminantArguments(ArgumentShape):
    waste_item_detected: str = Field(alias="wasteItemDetected", description="Waste item detected")
    material: str = Field(description="Material type")
    facility_id: str = Field(alias="facilityId", description="Facility ID")
    detection_time: datetime = Field(description="Detection time (ISO 8601 format)")
    explosive_level: Level = Field(description="Explosive level")
    hcl_level: Level = Field(description="HCl level")
    so2_level: Level = Field(description="SO2 level")
    estimated_size: float = Field(description="Estimated size")
    shipment_id: str = Field(description="Shipment ID")


class UpdateContaminantArguments(ArgumentShape):
    id: str = Field(description="Contaminant ID")
    waste_item_detected: str | None = Field(
        default=None, alias="wasteItemDetected", description="Waste item detected"
    )
    material: str | None = Field(default=None, description="Material type")
    facility_id: str | None = Field(default=None, alias="facilityId", description="Facility ID")
    detection_time: datetime | None = Field(
        default=None, description="Detection time (ISO 8601 format)"
    )
    explosive_level: Level | None = Field(default=None, description="Explosive level")
    hcl_level: Level | None = Field(default=None, description="HCl level")
    so2_level: Level | None = Field(default=None, description="SO2 level")
    estimated_size: float | None = Field(default=None, description="Estimated size")
    shipment_id: str | None = Field(default=None, description="Shipment ID")


class ListContaminantsArguments(ArgumentShape):
    facility_id: str | None = Field(default=None, alias="facilityId", description="Filter by facility ID")
    shipment_id: str | None = Field(default=None, description="Filter by shipment ID")
    material: str | None = Field(default=None, description="Filter by material")


CONTAMINANT_CRUD = CrudSpec(
    kind=EntityKind.CONTAMINANT,
    plural="contaminants",
    create_shape=CreateContaminantArguments,
    update_shape=UpdateContaminantArguments,
    list_shape=ListContaminantsArguments,
    exact_filters=("facility_id", "shipment_id"),
    substring_filters=("material",),
    label_field="waste_item_detected",
    facility_field="facility_id",
)


def build_contaminant_tools(store: EntityStore) -> dict[str, ToolDescriptor]:
    return build_crud_tools(CONTAMINANT_CRUD, store)
