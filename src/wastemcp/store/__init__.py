"""Entity store: the persistence layer consumed by tools and resources."""

from wastemcp.store.backend import EntityStore, InMemoryStore, Query
from wastemcp.store.errors import DuplicateRecordError, RecordValidationError, StoreError
from wastemcp.store.models import (
    ENTITY_MODELS,
    Contaminant,
    Contract,
    EntityKind,
    EntityRecord,
    Facility,
    Inspection,
    Shipment,
    WasteType,
    is_entity_id,
    new_entity_id,
)

__all__ = [
    "ENTITY_MODELS",
    "Contaminant",
    "Contract",
    "DuplicateRecordError",
    "EntityKind",
    "EntityRecord",
    "EntityStore",
    "Facility",
    "InMemoryStore",
    "Inspection",
    "Query",
    "RecordValidationError",
    "Shipment",
    "StoreError",
    "WasteType",
    "is_entity_id",
    "new_entity_id",
]
