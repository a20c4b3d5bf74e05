"""Entity store backends.

:class:`EntityStore` defines the async persistence protocol the server
consumes. :class:`InMemoryStore` provides a dict-based implementation
suitable for testing, the CLI, and single-process deployments.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ValidationError

from wastemcp.store.errors import DuplicateRecordError, RecordValidationError
from wastemcp.store.models import ENTITY_MODELS, EntityKind, EntityRecord

logger = logging.getLogger(__name__)


class Query(BaseModel):
    """Filter, ordering, and limit for :meth:`EntityStore.list`.

    Field names refer to record attributes (snake_case), not wire aliases.
    """

    equals: dict[str, Any] = {}
    contains: dict[str, str] = {}
    one_of: dict[str, list[Any]] = {}
    since: dict[str, datetime] = {}
    order_by: str | None = None
    descending: bool = True
    limit: int | None = None

    def matches(self, record: EntityRecord) -> bool:
        for field, expected in self.equals.items():
            if getattr(record, field, None) != expected:
                return False
        for field, needle in self.contains.items():
            value = getattr(record, field, None)
            if value is None or needle.lower() not in str(value).lower():
                return False
        for field, options in self.one_of.items():
            if getattr(record, field, None) not in options:
                return False
        for field, lower_bound in self.since.items():
            value = getattr(record, field, None)
            if value is None or value < _as_utc(lower_bound):
                return False
        return True


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


@runtime_checkable
class EntityStore(Protocol):
    """Async CRUD protocol over the five entity collections.

    ``get``, ``update`` and ``delete`` return ``None`` when no record has the
    given id. No transactional guarantee spans multiple calls.
    """

    async def create(self, kind: EntityKind, data: Mapping[str, Any]) -> EntityRecord: ...

    async def get(self, kind: EntityKind, entity_id: str) -> EntityRecord | None: ...

    async def list(self, kind: EntityKind, query: Query | None = None) -> list[EntityRecord]: ...

    async def count(self, kind: EntityKind, query: Query | None = None) -> int: ...

    async def update(
        self, kind: EntityKind, entity_id: str, changes: Mapping[str, Any]
    ) -> EntityRecord | None: ...

    async def delete(self, kind: EntityKind, entity_id: str) -> EntityRecord | None: ...


# Attributes that must be unique within a collection.
_UNIQUE_FIELDS: dict[EntityKind, tuple[str, ...]] = {
    EntityKind.FACILITY: ("short_code",),
}


class InMemoryStore:
    """Dict-backed :class:`EntityStore` implementation.

    Every read returns a deep copy so callers cannot mutate stored records
    in place (mimicking a real persistence layer).
    """

    def __init__(self) -> None:
        self._tables: dict[EntityKind, dict[str, EntityRecord]] = {kind: {} for kind in EntityKind}

    async def create(self, kind: EntityKind, data: Mapping[str, Any]) -> EntityRecord:
        record = self._validate(kind, data)
        self._check_unique(kind, record)
        self._tables[kind][record.id] = record
        logger.debug("Created %s %s", kind.value, record.id)
        return record.model_copy(deep=True)

    async def get(self, kind: EntityKind, entity_id: str) -> EntityRecord | None:
        record = self._tables[kind].get(entity_id)
        return record.model_copy(deep=True) if record is not None else None

    async def list(self, kind: EntityKind, query: Query | None = None) -> list[EntityRecord]:
        query = query or Query()
        records = [r for r in self._tables[kind].values() if query.matches(r)]
        if query.order_by is not None:
            field = query.order_by
            records.sort(key=lambda r: getattr(r, field), reverse=query.descending)
        if query.limit is not None:
            records = records[: query.limit]
        return [r.model_copy(deep=True) for r in records]

    async def count(self, kind: EntityKind, query: Query | None = None) -> int:
        query = query or Query()
        return sum(1 for r in self._tables[kind].values() if query.matches(r))

    async def update(
        self, kind: EntityKind, entity_id: str, changes: Mapping[str, Any]
    ) -> EntityRecord | None:
        current = self._tables[kind].get(entity_id)
        if current is None:
            return None
        merged = {
            **current.model_dump(),
            **changes,
            "id": current.id,
            "created_at": current.created_at,
            "updated_at": datetime.now(timezone.utc),
        }
        record = self._validate(kind, merged)
        self._check_unique(kind, record)
        self._tables[kind][entity_id] = record
        return record.model_copy(deep=True)

    async def delete(self, kind: EntityKind, entity_id: str) -> EntityRecord | None:
        return self._tables[kind].pop(entity_id, None)

    def load_fixture(self, data: Mapping[str, Any]) -> int:
        """Seed the store from ``{kind: [record, ...]}``; returns records loaded.

        Records may carry their own ``id`` so fixtures can cross-reference
        each other.
        """
        loaded = 0
        for kind_name, rows in data.items():
            kind = EntityKind(kind_name)
            for row in rows:
                record = self._validate(kind, row)
                self._check_unique(kind, record)
                self._tables[kind][record.id] = record
                loaded += 1
        logger.info("Loaded %d fixture records", loaded)
        return loaded

    @staticmethod
    def _validate(kind: EntityKind, data: Mapping[str, Any]) -> EntityRecord:
        try:
            return ENTITY_MODELS[kind].model_validate(dict(data))
        except ValidationError as exc:
            raise RecordValidationError(kind.value, str(exc)) from exc

    def _check_unique(self, kind: EntityKind, record: EntityRecord) -> None:
        for field in _UNIQUE_FIELDS.get(kind, ()):
            value = getattr(record, field)
            for other in self._tables[kind].values():
                if other.id != record.id and getattr(other, field) == value:
                    raise DuplicateRecordError(kind.value, field, value)
