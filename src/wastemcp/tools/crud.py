"""Generic create/get/list/update/delete tool builder.

Each domain module describes its collection with a :class:`CrudSpec` and
gets five tools back. Handlers validate their own arguments and report
every failure as an error result.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field, create_model

from wastemcp.store import EntityKind, EntityRecord, EntityStore, Query
from wastemcp.tools.models import ToolDescriptor, ToolResult
from wastemcp.validation import ArgumentShape, validate_arguments

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CrudSpec:
    """Describes one collection's CRUD tool set.

    Shape field names must match record attribute names; list-shape fields
    are split into exact and case-insensitive substring filters.
    """

    kind: EntityKind
    plural: str
    create_shape: type[ArgumentShape]
    update_shape: type[ArgumentShape]
    list_shape: type[ArgumentShape]
    exact_filters: Sequence[str] = ()
    substring_filters: Sequence[str] = ()
    label_field: str | None = None
    facility_field: str | None = None


def _id_shape(kind: EntityKind) -> type[ArgumentShape]:
    return create_model(
        f"{kind.label}IdArguments",
        __base__=ArgumentShape,
        id=(str, Field(description=f"{kind.label} ID")),
    )


async def populate_facilities(
    store: EntityStore,
    records: Sequence[EntityRecord],
    field: str,
    select: Sequence[str] | None = None,
) -> list[dict[str, Any]]:
    """Serialise *records*, replacing each facility id with the facility record.

    *select* narrows the embedded facility to ``id`` plus the given wire
    keys. Ids that no longer resolve are left as-is.
    """
    model = type(records[0]) if records else None
    key = (model.model_fields[field].alias or field) if model is not None else field

    facility_ids = list(dict.fromkeys(getattr(r, field) for r in records))
    facilities = await asyncio.gather(
        *(store.get(EntityKind.FACILITY, fid) for fid in facility_ids)
    )
    by_id = {fid: f for fid, f in zip(facility_ids, facilities, strict=True) if f is not None}

    wired: list[dict[str, Any]] = []
    for record in records:
        payload = record.to_wire()
        facility = by_id.get(getattr(record, field))
        if facility is not None:
            embedded = facility.to_wire()
            if select is not None:
                embedded = {k: v for k, v in embedded.items() if k == "id" or k in select}
            payload[key] = embedded
        wired.append(payload)
    return wired


def _filters(args: BaseModel, spec: CrudSpec) -> Query:
    given = {k: v for k, v in args.model_dump(exclude_none=True).items() if v != ""}
    return Query(
        equals={k: v for k, v in given.items() if k in spec.exact_filters},
        contains={k: str(v) for k, v in given.items() if k in spec.substring_filters},
    )


def build_crud_tools(spec: CrudSpec, store: EntityStore) -> dict[str, ToolDescriptor]:
    """Return the five CRUD tools for *spec*'s collection, keyed by name."""
    kind = spec.kind
    noun = kind.value
    id_shape = _id_shape(kind)
    not_found = f"{kind.label} not found"

    async def _render(records: Sequence[EntityRecord]) -> list[dict[str, Any]]:
        if spec.facility_field is None:
            return [r.to_wire() for r in records]
        return await populate_facilities(store, records, spec.facility_field)

    async def create(arguments: dict[str, Any]) -> ToolResult:
        try:
            args = validate_arguments(spec.create_shape, arguments)
            record = await store.create(kind, args.model_dump(exclude_none=True))
        except Exception as exc:
            return ToolResult.error(f"Error creating {noun}: {exc}")
        logger.info("Created %s %s", noun, record.id)
        return ToolResult.json_result(record.to_wire())

    async def get(arguments: dict[str, Any]) -> ToolResult:
        try:
            args = validate_arguments(id_shape, arguments)
            record = await store.get(kind, args.id)
            if record is None:
                return ToolResult.error(not_found)
            (payload,) = await _render([record])
        except Exception as exc:
            return ToolResult.error(f"Error getting {noun}: {exc}")
        return ToolResult.json_result(payload)

    async def list_(arguments: dict[str, Any]) -> ToolResult:
        try:
            args = validate_arguments(spec.list_shape, arguments)
            records = await store.list(kind, _filters(args, spec))
            payload = await _render(records)
        except Exception as exc:
            return ToolResult.error(f"Error listing {spec.plural}: {exc}")
        return ToolResult.json_result(payload)

    async def update(arguments: dict[str, Any]) -> ToolResult:
        try:
            args = validate_arguments(spec.update_shape, arguments)
            changes = args.model_dump(exclude_none=True, exclude={"id"})
            record = await store.update(kind, args.id, changes)
        except Exception as exc:
            return ToolResult.error(f"Error updating {noun}: {exc}")
        if record is None:
            return ToolResult.error(not_found)
        logger.info("Updated %s %s", noun, record.id)
        return ToolResult.json_result(record.to_wire())

    async def delete(arguments: dict[str, Any]) -> ToolResult:
        try:
            args = validate_arguments(id_shape, arguments)
            record = await store.delete(kind, args.id)
        except Exception as exc:
            return ToolResult.error(f"Error deleting {noun}: {exc}")
        if record is None:
            return ToolResult.error(not_found)
        logger.info("Deleted %s %s", noun, record.id)
        if spec.label_field is None:
            return ToolResult.text_result(f"{kind.label} deleted successfully")
        label = getattr(record, spec.label_field)
        return ToolResult.text_result(f"{kind.label} deleted successfully: {label}")

    article = "an" if noun[0] in "aeiou" else "a"
    descriptors = [
        ToolDescriptor(f"create_{noun}", f"Create a new {noun}", spec.create_shape, create),
        ToolDescriptor(f"get_{noun}", f"Get {article} {noun} by ID", id_shape, get),
        ToolDescriptor(
            f"list_{spec.plural}",
            f"List all {spec.plural} with optional filters",
            spec.list_shape,
            list_,
        ),
        ToolDescriptor(f"update_{noun}", f"Update {article} {noun} by ID", spec.update_shape, update),
        ToolDescriptor(f"delete_{noun}", f"Delete {article} {noun} by ID", id_shape, delete),
    ]
    return {d.name: d for d in descriptors}