"""Contract CRUD tools."""

from __future__ import annotations

from pydantic import Field

from wastemcp.store import EntityKind, EntityStore
from wastemcp.tools.crud import CrudSpec, build_crud_tools
from wastemcp.tools.models import ToolDescriptor
from wastemcp.validation import ArgumentShape


class CreateContractArguments(ArgumentShape):
    producer_name: str = Field(alias="producerName", description="Producer name")
    debitor_name: str = Field(alias="debitorName", description="Debitor name")
    waste_code: str = Field(alias="wasteCode", description="Waste code")


class UpdateContractArguments(ArgumentShape):
    id: str = Field(description="Contract ID")
    producer_name: str | None = Field(default=None, alias="producerName", description="Producer name")
    debitor_name: str | None = Field(default=None, alias="debitorName", description="Debitor name")
    waste_code: str | None = Field(default=None, alias="wasteCode", description="Waste code")


class ListContractsArguments(ArgumentShape):
    producer_name: str | None = Field(
        default=None, alias="producerName", description="Filter by producer name"
    )
    debitor_name: str | None = Field(default=None, alias="debitorName", description="Filter by debitor name")
    waste_code: str | None = Field(default=None, alias="wasteCode", description="Filter by waste code")


CONTRACT_CRUD = CrudSpec(
    kind=EntityKind.CONTRACT,
    plural="contracts",
    create_shape=CreateContractArguments,
    update_shape=UpdateContractArguments,
    list_shape=ListContractsArguments,
    exact_filters=("waste_code",),
    substring_filters=("producer_name", "debitor_name"),
    label_field="producer_name",
)


def build_contract_tools(store: EntityStore) -> dict[str, ToolDescriptor]:
    return build_crud_tools(CONTRACT_CRUD, store)
