"""Shared fixtures: a seeded in-memory store and scripted sampling transports."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from wastemcp.models import TextContent
from wastemcp.sampling import SamplingBridge, SamplingRequest, SamplingResponse
from wastemcp.store import InMemoryStore

FACILITY_ID = "a" * 24
OTHER_FACILITY_ID = "b" * 24
CONTRACT_ID = "c" * 24
SHIPMENT_ID = "d" * 24
OLD_SHIPMENT_ID = "e" * 24
CONTAMINANT_ID = "f" * 24
INSPECTION_ID = "0" * 24
MISSING_ID = "9" * 24

FIXTURE: dict[str, list[dict[str, Any]]] = {
    "facility": [
        {"id": FACILITY_ID, "name": "North Plant", "shortCode": "NP", "location": "Oslo Harbour"},
        {"id": OTHER_FACILITY_ID, "name": "South Plant", "shortCode": "SP", "location": "Bergen"},
    ],
    "contract": [
        {
            "id": CONTRACT_ID,
            "producerName": "Acme Waste",
            "debitorName": "City Council",
            "wasteCode": "20 03 01",
        },
    ],
    "shipment": [
        {
            "id": SHIPMENT_ID,
            "entry_timestamp": "2024-05-01T08:00:00Z",
            "exit_timestamp": "2024-05-01T08:45:00Z",
            "source": "Acme Depot",
            "facilityId": FACILITY_ID,
            "license_plate": "AB12345",
            "contract_reference_id": "REF-1",
            "contractId": CONTRACT_ID,
        },
        {
            "id": OLD_SHIPMENT_ID,
            "entry_timestamp": "2024-04-01T08:00:00Z",
            "exit_timestamp": "2024-04-01T09:00:00Z",
            "source": "Acme Depot",
            "facilityId": FACILITY_ID,
            "license_plate": "CD67890",
            "contract_reference_id": "REF-1",
            "contractId": CONTRACT_ID,
        },
    ],
    "contaminant": [
        {
            "id": CONTAMINANT_ID,
            "wasteItemDetected": "Gas cylinder",
            "material": "Steel",
            "facilityId": FACILITY_ID,
            "detection_time": "2024-05-01T08:10:00Z",
            "explosive_level": "high",
            "hcl_level": "low",
            "so2_level": "medium",
            "estimated_size": 1.5,
            "shipment_id": SHIPMENT_ID,
        },
    ],
    "inspection": [
        {
            "id": INSPECTION_ID,
            "facility_id": FACILITY_ID,
            "is_delivery_accepted": True,
            "does_delivery_meets_conditions": False,
            "selected_wastetypes": [{"category": "Household", "percentage": "80"}],
            "heating_value_calculation": 11.2,
            "waste_producer": "Acme Waste",
            "contract_reference_id": CONTRACT_ID,
        },
    ],
}


@pytest.fixture
def store() -> InMemoryStore:
    s = InMemoryStore()
    s.load_fixture(FIXTURE)
    return s


@pytest.fixture
def empty_store() -> InMemoryStore:
    return InMemoryStore()


class ScriptedTransport:
    """Answers sampling requests from a list of canned replies.

    A reply that is an exception instance is raised instead of returned.
    """

    def __init__(self, *replies: str | BaseException) -> None:
        self.replies = list(replies)
        self.requests: list[SamplingRequest] = []

    async def create_message(self, request: SamplingRequest) -> SamplingResponse:
        self.requests.append(request)
        reply = self.replies.pop(0) if self.replies else "ok"
        if isinstance(reply, BaseException):
            raise reply
        return SamplingResponse(content=TextContent(text=reply), model="scripted")


class HangingTransport:
    """Never answers until released; records whether it was cancelled."""

    def __init__(self) -> None:
        self.release = asyncio.Event()
        self.cancelled = False
        self.requests: list[SamplingRequest] = []

    async def create_message(self, request: SamplingRequest) -> SamplingResponse:
        self.requests.append(request)
        try:
            await self.release.wait()
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return SamplingResponse(content=TextContent(text="late"))


def make_bridge(*replies: str | BaseException, timeout: float = 1.0) -> tuple[SamplingBridge, ScriptedTransport]:
    transport = ScriptedTransport(*replies)
    return SamplingBridge(transport, timeout=timeout), transport
