"""The waste-management resource set.

Four static views computed live from the store, plus ``facility://<id>``
and ``contract://<id>`` for every current facility and contract.
"""

from __future__ import annotations

import asyncio
import re
from datetime import datetime, timedelta, timezone
from typing import Any

from wastemcp.resources.models import ResourceDescriptor
from wastemcp.resources.registry import DynamicResource, ResourceRegistry, StaticResource
from wastemcp.store import EntityKind, EntityStore, Query
from wastemcp.tools.crud import populate_facilities

FACILITY_URI_RE = re.compile(r"facility://([a-f0-9]{24})")
CONTRACT_URI_RE = re.compile(r"contract://([a-f0-9]{24})")

_LEVELS = ("low", "medium", "high")
_RECENT_WINDOW = timedelta(days=30)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _percent(part: int, whole: int) -> str:
    return f"{part / whole * 100:.2f}%" if whole else "0.00%"


def build_resource_registry(store: EntityStore) -> ResourceRegistry:
    """Wire the static and dynamic waste resources to *store*."""

    async def facility_list() -> dict[str, Any]:
        facilities = await store.list(EntityKind.FACILITY)
        keep = ("id", "name", "shortCode", "location", "createdAt")
        rows = [{k: v for k, v in f.to_wire().items() if k in keep} for f in facilities]
        return {"total": len(rows), "facilities": rows}

    async def stats_overview() -> dict[str, Any]:
        counts = await asyncio.gather(*(store.count(kind) for kind in EntityKind))
        by_kind = dict(zip(EntityKind, counts, strict=True))
        recent, accepted = await asyncio.gather(
            store.count(
                EntityKind.INSPECTION, Query(since={"created_at": _now() - _RECENT_WINDOW})
            ),
            store.count(EntityKind.INSPECTION, Query(equals={"is_delivery_accepted": True})),
        )
        total_inspections = by_kind[EntityKind.INSPECTION]
        return {
            "overview": {
                "facilities": by_kind[EntityKind.FACILITY],
                "contaminants": by_kind[EntityKind.CONTAMINANT],
                "inspections": total_inspections,
                "shipments": by_kind[EntityKind.SHIPMENT],
                "contracts": by_kind[EntityKind.CONTRACT],
            },
            "metrics": {
                "inspectionsLast30Days": recent,
                "overallAcceptanceRate": _percent(accepted, total_inspections),
            },
            "timestamp": _now().isoformat(),
        }

    async def recent_activity() -> dict[str, Any]:
        inspections, shipments, contaminants = await asyncio.gather(
            store.list(EntityKind.INSPECTION, Query(order_by="created_at", limit=10)),
            store.list(EntityKind.SHIPMENT, Query(order_by="entry_timestamp", limit=10)),
            store.list(EntityKind.CONTAMINANT, Query(order_by="detection_time", limit=10)),
        )
        select = ("name", "shortCode")
        wired = await asyncio.gather(
            populate_facilities(store, inspections, "facility_id", select),
            populate_facilities(store, shipments, "facility_id", select),
            populate_facilities(store, contaminants, "facility_id", select),
        )
        return {
            "recentInspections": wired[0],
            "recentShipments": wired[1],
            "recentContaminants": wired[2],
            "timestamp": _now().isoformat(),
        }

    async def contaminant_summary() -> dict[str, Any]:
        contaminants = await store.list(EntityKind.CONTAMINANT)
        by_level: dict[str, dict[str, int]] = {}
        for gas, attr in (("explosive", "explosive_level"), ("hcl", "hcl_level"), ("so2", "so2_level")):
            by_level[gas] = {
                level: sum(1 for c in contaminants if getattr(c, attr) == level) for level in _LEVELS
            }
        by_material: dict[str, int] = {}
        for c in contaminants:
            by_material[c.material] = by_material.get(c.material, 0) + 1
        return {
            "total": len(contaminants),
            "byLevel": by_level,
            "byMaterial": by_material,
            "timestamp": _now().isoformat(),
        }

    async def list_facility_resources() -> list[ResourceDescriptor]:
        facilities = await store.list(EntityKind.FACILITY)
        return [
            ResourceDescriptor(
                uri=f"facility://{f.id}",
                name=f"Facility: {f.name} ({f.short_code})",
                description=(
                    f"Complete data for facility {f.name} including metrics and recent activity"
                ),
            )
            for f in facilities
        ]

    async def read_facility(facility_id: str) -> dict[str, Any] | None:
        facility = await store.get(EntityKind.FACILITY, facility_id)
        if facility is None:
            return None
        related = Query(equals={"facility_id": facility_id}, limit=20)
        contaminants, inspections, shipments = await asyncio.gather(
            store.list(EntityKind.CONTAMINANT, related.model_copy(update={"order_by": "detection_time"})),
            store.list(EntityKind.INSPECTION, related.model_copy(update={"order_by": "created_at"})),
            store.list(EntityKind.SHIPMENT, related.model_copy(update={"order_by": "entry_timestamp"})),
        )
        accepted = sum(1 for i in inspections if i.is_delivery_accepted)
        return {
            "facility": facility.to_wire(),
            "metrics": {
                "totalInspections": len(inspections),
                "acceptanceRate": _percent(accepted, len(inspections)),
                "totalContaminants": len(contaminants),
                "totalShipments": len(shipments),
            },
            "recentActivity": {
                "contaminants": [c.to_wire() for c in contaminants[:5]],
                "inspections": [i.to_wire() for i in inspections[:5]],
                "shipments": [s.to_wire() for s in shipments[:5]],
            },
            "timestamp": _now().isoformat(),
        }

    async def list_contract_resources() -> list[ResourceDescriptor]:
        contracts = await store.list(EntityKind.CONTRACT)
        return [
            ResourceDescriptor(
                uri=f"contract://{c.id}",
                name=f"Contract: {c.producer_name} → {c.debitor_name}",
                description="Contract details with related shipments and inspections",
            )
            for c in contracts
        ]

    async def read_contract(contract_id: str) -> dict[str, Any] | None:
        contract = await store.get(EntityKind.CONTRACT, contract_id)
        if contract is None:
            return None
        shipments, inspection_count = await asyncio.gather(
            store.list(
                EntityKind.SHIPMENT,
                Query(equals={"contract_id": contract_id}, order_by="entry_timestamp"),
            ),
            store.count(
                EntityKind.INSPECTION, Query(equals={"contract_reference_id": contract_id})
            ),
        )
        return {
            "contract": contract.to_wire(),
            "metrics": {
                "totalShipments": len(shipments),
                "totalInspections": inspection_count,
            },
            "recentShipments": [s.to_wire() for s in shipments[:10]],
            "timestamp": _now().isoformat(),
        }

    static = [
        StaticResource(
            ResourceDescriptor(
                uri="facility://list",
                name="All Facilities",
                description="List of all waste management facilities",
            ),
            facility_list,
        ),
        StaticResource(
            ResourceDescriptor(
                uri="stats://overview",
                name="System Overview Statistics",
                description=(
                    "Overall statistics for facilities, contaminants, inspections, and shipments"
                ),
            ),
            stats_overview,
        ),
        StaticResource(
            ResourceDescriptor(
                uri="activity://recent",
                name="Recent Activity",
                description=(
                    "Recent inspections, shipments, and contamination detections (last 10 of each)"
                ),
            ),
            recent_activity,
        ),
        StaticResource(
            ResourceDescriptor(
                uri="contaminant://summary",
                name="Contamination Summary",
                description="Summary of contamination levels across all facilities",
            ),
            contaminant_summary,
        ),
    ]
    dynamic = [
        DynamicResource("Facility", FACILITY_URI_RE, list_facility_resources, read_facility),
        DynamicResource("Contract", CONTRACT_URI_RE, list_contract_resources, read_contract),
    ]
    return ResourceRegistry(static, dynamic)
