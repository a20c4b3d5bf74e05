"""Entity records for the waste-management domain.

Records use snake_case attributes internally; fields whose wire name is
camelCase carry an alias, and :meth:`EntityRecord.to_wire` always dumps
by alias so clients see the historical field names.
"""

from __future__ import annotations

import re
import secrets
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

ENTITY_ID_LENGTH = 24
_ENTITY_ID_RE = re.compile(r"[a-f0-9]{24}")

Level = Literal["low", "medium", "high"]


def new_entity_id() -> str:
    """Return a fresh 24-character lowercase hex identifier."""
    return secrets.token_hex(ENTITY_ID_LENGTH // 2)


def is_entity_id(value: object) -> bool:
    return isinstance(value, str) and _ENTITY_ID_RE.fullmatch(value) is not None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# Naive timestamps are read as UTC so every stored datetime is comparable.
UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


def _check_entity_id(value: str) -> str:
    if not is_entity_id(value):
        raise ValueError("id must be a 24-character lowercase hex string")
    return value


# Resource URIs only match this shape, so every stored id must carry it.
EntityId = Annotated[str, AfterValidator(_check_entity_id)]


class EntityKind(str, Enum):
    """The five record collections the server exposes."""

    FACILITY = "facility"
    CONTAMINANT = "contaminant"
    INSPECTION = "inspection"
    SHIPMENT = "shipment"
    CONTRACT = "contract"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class EntityRecord(BaseModel):
    """Common identity and timestamp fields."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    id: EntityId = Field(default_factory=new_entity_id)
    created_at: UtcDatetime = Field(default_factory=_utcnow, alias="createdAt")
    updated_at: UtcDatetime = Field(default_factory=_utcnow, alias="updatedAt")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class Facility(EntityRecord):
    name: str
    short_code: str = Field(alias="shortCode")
    location: str


class Contaminant(EntityRecord):
    waste_item_detected: str = Field(alias="wasteItemDetected")
    material: str
    facility_id: str = Field(alias="facilityId")
    detection_time: UtcDatetime
    explosive_level: Level
    hcl_level: Level
    so2_level: Level
    estimated_size: float
    shipment_id: str

    @property
    def is_high_risk(self) -> bool:
        return "high" in (self.explosive_level, self.hcl_level, self.so2_level)


class WasteType(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    category: str
    percentage: str


class Inspection(EntityRecord):
    facility_id: str
    is_delivery_accepted: bool
    does_delivery_meets_conditions: bool
    selected_wastetypes: list[WasteType] = []
    heating_value_calculation: float
    waste_producer: str
    contract_reference_id: str


class Shipment(EntityRecord):
    entry_timestamp: UtcDatetime
    exit_timestamp: UtcDatetime
    source: str
    facility_id: str = Field(alias="facilityId")
    license_plate: str
    contract_reference_id: str
    contract_id: str = Field(alias="contractId")

    @property
    def duration_minutes(self) -> float:
        return (self.exit_timestamp - self.entry_timestamp).total_seconds() / 60


class Contract(EntityRecord):
    producer_name: str = Field(alias="producerName")
    debitor_name: str = Field(alias="debitorName")
    waste_code: str = Field(alias="wasteCode")


ENTITY_MODELS: dict[EntityKind, type[EntityRecord]] = {
    EntityKind.FACILITY: Facility,
    EntityKind.CONTAMINANT: Contaminant,
    EntityKind.INSPECTION: Inspection,
    EntityKind.SHIPMENT: Shipment,
    EntityKind.CONTRACT: Contract,
}
