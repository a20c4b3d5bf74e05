"""Tests for the waste-management resource set."""

from __future__ import annotations

import json
from typing import Any

import pytest
from conftest import CONTRACT_ID, FACILITY_ID, MISSING_ID, OTHER_FACILITY_ID, SHIPMENT_ID

from wastemcp.protocol import ResourceNotFoundError, UnknownResourceError
from wastemcp.resources import ResourceRegistry, build_resource_registry
from wastemcp.resources.waste import CONTRACT_URI_RE, FACILITY_URI_RE
from wastemcp.store import EntityKind, InMemoryStore, RecordValidationError


@pytest.fixture
def resources(store: InMemoryStore) -> ResourceRegistry:
    return build_resource_registry(store)


async def _read(resources: ResourceRegistry, uri: str) -> Any:
    (content,) = await resources.read_resource(uri)
    assert content.uri == uri
    return json.loads(content.text)


class TestListing:
    async def test_static_and_per_entity(self, resources: ResourceRegistry) -> None:
        descriptors = await resources.list_resources()
        uris = [d.uri for d in descriptors]
        assert uris[:4] == [
            "facility://list",
            "stats://overview",
            "activity://recent",
            "contaminant://summary",
        ]
        assert f"facility://{FACILITY_ID}" in uris
        assert f"facility://{OTHER_FACILITY_ID}" in uris
        assert uris[-1] == f"contract://{CONTRACT_ID}"
        names = {d.uri: d.name for d in descriptors}
        assert names[f"facility://{FACILITY_ID}"] == "Facility: North Plant (NP)"
        assert names[f"contract://{CONTRACT_ID}"] == "Contract: Acme Waste → City Council"

    async def test_listing_tracks_store(
        self, resources: ResourceRegistry, store: InMemoryStore
    ) -> None:
        await store.delete(EntityKind.FACILITY, OTHER_FACILITY_ID)
        uris = [d.uri for d in await resources.list_resources()]
        assert f"facility://{OTHER_FACILITY_ID}" not in uris

    async def test_listed_uris_are_readable(self, resources: ResourceRegistry) -> None:
        for descriptor in await resources.list_resources():
            (content,) = await resources.read_resource(descriptor.uri)
            assert json.loads(content.text)

    async def test_created_records_round_trip(self, empty_store: InMemoryStore) -> None:
        resources = build_resource_registry(empty_store)
        with pytest.raises(RecordValidationError):
            empty_store.load_fixture(
                {"facility": [{"id": "F1", "name": "Bad", "shortCode": "B", "location": "X"}]}
            )
        await empty_store.create(
            EntityKind.FACILITY, {"name": "East", "shortCode": "EP", "location": "Trondheim"}
        )
        await empty_store.create(
            EntityKind.CONTRACT, {"producerName": "P", "debitorName": "D", "wasteCode": "W"}
        )
        descriptors = await resources.list_resources()
        assert len(descriptors) == 6
        for descriptor in descriptors:
            assert await _read(resources, descriptor.uri)

    async def test_empty_store(self, empty_store: InMemoryStore) -> None:
        descriptors = await build_resource_registry(empty_store).list_resources()
        assert len(descriptors) == 4


class TestStaticResources:
    async def test_facility_list(self, resources: ResourceRegistry) -> None:
        payload = await _read(resources, "facility://list")
        assert payload["total"] == 2
        assert set(payload["facilities"][0]) == {"id", "name", "shortCode", "location", "createdAt"}

    async def test_stats_overview(self, resources: ResourceRegistry) -> None:
        payload = await _read(resources, "stats://overview")
        assert payload["overview"] == {
            "facilities": 2,
            "contaminants": 1,
            "inspections": 1,
            "shipments": 2,
            "contracts": 1,
        }
        assert payload["metrics"]["inspectionsLast30Days"] == 1
        assert payload["metrics"]["overallAcceptanceRate"] == "100.00%"
        assert "timestamp" in payload

    async def test_stats_empty_rate(self, empty_store: InMemoryStore) -> None:
        payload = await _read(build_resource_registry(empty_store), "stats://overview")
        assert payload["metrics"]["overallAcceptanceRate"] == "0.00%"

    async def test_recent_activity(self, resources: ResourceRegistry) -> None:
        payload = await _read(resources, "activity://recent")
        assert len(payload["recentShipments"]) == 2
        shipment = payload["recentShipments"][0]
        assert shipment["id"] == SHIPMENT_ID
        assert shipment["facilityId"] == {"id": FACILITY_ID, "name": "North Plant", "shortCode": "NP"}
        assert payload["recentInspections"][0]["facility_id"]["name"] == "North Plant"
        assert payload["recentContaminants"][0]["facilityId"]["shortCode"] == "NP"

    async def test_contaminant_summary(self, resources: ResourceRegistry) -> None:
        payload = await _read(resources, "contaminant://summary")
        assert payload["total"] == 1
        assert payload["byLevel"] == {
            "explosive": {"low": 0, "medium": 0, "high": 1},
            "hcl": {"low": 1, "medium": 0, "high": 0},
            "so2": {"low": 0, "medium": 1, "high": 0},
        }
        assert payload["byMaterial"] == {"Steel": 1}


class TestDynamicResources:
    async def test_facility(self, resources: ResourceRegistry) -> None:
        payload = await _read(resources, f"facility://{FACILITY_ID}")
        assert payload["facility"]["name"] == "North Plant"
        assert payload["metrics"] == {
            "totalInspections": 1,
            "acceptanceRate": "100.00%",
            "totalContaminants": 1,
            "totalShipments": 2,
        }
        assert len(payload["recentActivity"]["shipments"]) == 2

    async def test_facility_without_inspections(self, resources: ResourceRegistry) -> None:
        payload = await _read(resources, f"facility://{OTHER_FACILITY_ID}")
        assert payload["metrics"]["acceptanceRate"] == "0.00%"

    async def test_contract(self, resources: ResourceRegistry) -> None:
        payload = await _read(resources, f"contract://{CONTRACT_ID}")
        assert payload["contract"]["debitorName"] == "City Council"
        assert payload["metrics"] == {"totalShipments": 2, "totalInspections": 1}
        assert [s["id"] for s in payload["recentShipments"]][0] == SHIPMENT_ID

    async def test_missing_facility(self, resources: ResourceRegistry) -> None:
        with pytest.raises(ResourceNotFoundError, match=f"Facility not found: facility://{MISSING_ID}"):
            await resources.read_resource(f"facility://{MISSING_ID}")

    async def test_missing_contract(self, resources: ResourceRegistry) -> None:
        with pytest.raises(ResourceNotFoundError, match="Contract not found"):
            await resources.read_resource(f"contract://{MISSING_ID}")

    @pytest.mark.parametrize(
        "uri",
        [
            "facility://NOTHEX",
            f"facility://{FACILITY_ID}0",
            f"facility://{FACILITY_ID}\n",
            f"contract://{CONTRACT_ID}\n",
            "shipment://list",
            "facility://",
        ],
    )
    async def test_unknown(self, resources: ResourceRegistry, uri: str) -> None:
        with pytest.raises(UnknownResourceError):
            await resources.read_resource(uri)

    def test_uri_patterns_are_anchored(self) -> None:
        assert FACILITY_URI_RE.fullmatch(f"facility://{FACILITY_ID}")
        assert not FACILITY_URI_RE.fullmatch(f"xfacility://{FACILITY_ID}")
        assert not CONTRACT_URI_RE.fullmatch(f"contract://{CONTRACT_ID.upper()}")
