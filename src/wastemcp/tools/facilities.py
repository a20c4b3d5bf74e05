"""Facility CRUD tools."""

from __future__ import annotations

from pydantic import Field

from wastemcp.store import EntityKind, EntityStore
from wastemcp.tools.crud import CrudSpec, build_crud_tools
from wastemcp.tools.models import ToolDescriptor
from wastemcp.validation import ArgumentShape


class CreateFacilityArguments(ArgumentShape):
    name: str = Field(description="Facility name")
    short_code: str = Field(alias="shortCode", description="Facility short code")
    location: str = Field(description="Facility location")


class UpdateFacilityArguments(ArgumentShape):
    id: str = Field(description="Facility ID")
    name: str | None = Field(default=None, description="Facility name")
    short_code: str | None = Field(default=None, alias="shortCode", description="Facility short code")
    location: str | None = Field(default=None, description="Facility location")


class ListFacilitiesArguments(ArgumentShape):
    short_code: str | None = Field(default=None, alias="shortCode", description="Filter by short code")
    location: str | None = Field(default=None, description="Filter by location")


FACILITY_CRUD = CrudSpec(
    kind=EntityKind.FACILITY,
    plural="facilities",
    create_shape=CreateFacilityArguments,
    update_shape=UpdateFacilityArguments,
    list_shape=ListFacilitiesArguments,
    exact_filters=("short_code",),
    substring_filters=("location",),
    label_field="name",
)


def build_facility_tools(store: EntityStore) -> dict[str, ToolDescriptor]:
    return build_crud_tools(FACILITY_CRUD, store)
