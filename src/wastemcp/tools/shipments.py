"""Shipment CRUD tools."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from wastemcp.store import EntityKind, EntityStore
from wastemcp.tools.crud import CrudSpec, build_crud_tools
from wastemcp.tools.models import ToolDescriptor
from wastemcp.validation import ArgumentShape


class CreateShipmentArguments(ArgumentShape):
    entry_timestamp: datetime = Field(description="Entry timestamp (ISO 8601 format)")
    exit_timestamp: datetime = Field(description="Exit timestamp (ISO 8601 format)")
    source: str = Field(description="Shipment source")
    facility_id: str = Field(alias="facilityId", description="Facility ID")
    license_plate: str = Field(description="License plate")
    contract_reference_id: str = Field(description="Contract reference ID")
    contract_id: str = Field(alias="contractId", description="Contract ID")


class UpdateShipmentArguments(ArgumentShape):
    id: str = Field(description="Shipment ID")
    entry_timestamp: datetime | None = Field(default=None, description="Entry timestamp (ISO 8601 format)")
    exit_timestamp: datetime | None = Field(default=None, description="Exit timestamp (ISO 8601 format)")
    source: str | None = Field(default=None, description="Shipment source")
    license_plate: str | None = Field(default=None, description="License plate")
    contract_reference_id: str | None = Field(default=None, description="Contract reference ID")
    contract_id: str | None = Field(default=None, alias="contractId", description="Contract ID")


class ListShipmentsArguments(ArgumentShape):
    facility_id: str | None = Field(default=None, alias="facilityId", description="Filter by facility ID")
    contract_id: str | None = Field(default=None, alias="contractId", description="Filter by contract ID")
    license_plate: str | None = Field(default=None, description="Filter by license plate")
    source: str | None = Field(default=None, description="Filter by source")


SHIPMENT_CRUD = CrudSpec(
    kind=EntityKind.SHIPMENT,
    plural="shipments",
    create_shape=CreateShipmentArguments,
    update_shape=UpdateShipmentArguments,
    list_shape=ListShipmentsArguments,
    exact_filters=("facility_id", "contract_id", "license_plate"),
    substring_filters=("source",),
    label_field="license_plate",
    facility_field="facility_id",
)


def build_shipment_tools(store: EntityStore) -> dict[str, ToolDescriptor]:
    return build_crud_tools(SHIPMENT_CRUD, store)
