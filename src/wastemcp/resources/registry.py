"""ResourceRegistry: static URIs plus per-entity dynamic rules.

Static resources are matched by exact URI first; dynamic rules are tried
in registration order against the full URI. Every read is computed live.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Any

from wastemcp.models import dump_json
from wastemcp.protocol.errors import ResourceNotFoundError, UnknownResourceError
from wastemcp.resources.models import JSON_MIME_TYPE, ResourceContent, ResourceDescriptor

logger = logging.getLogger(__name__)

StaticReader = Callable[[], Awaitable[Any]]
DynamicReader = Callable[[str], Awaitable[Any | None]]
DynamicLister = Callable[[], Awaitable[list[ResourceDescriptor]]]


@dataclass(frozen=True)
class StaticResource:
    descriptor: ResourceDescriptor
    reader: StaticReader


@dataclass(frozen=True)
class DynamicResource:
    """A URI family such as ``facility://<id>``.

    ``reader`` returns ``None`` when the captured id names no entity.
    """

    label: str
    pattern: re.Pattern[str]
    lister: DynamicLister
    reader: DynamicReader

    def match(self, uri: str) -> str | None:
        found = self.pattern.fullmatch(uri)
        return found.group(1) if found else None


class ResourceRegistry:
    def __init__(
        self,
        static: Iterable[StaticResource] = (),
        dynamic: Iterable[DynamicResource] = (),
    ) -> None:
        self._static = {res.descriptor.uri: res for res in static}
        self._dynamic = list(dynamic)

    def static_descriptors(self) -> list[ResourceDescriptor]:
        return [res.descriptor for res in self._static.values()]

    async def list_resources(self) -> list[ResourceDescriptor]:
        """Static descriptors followed by one descriptor per current entity."""
        descriptors = self.static_descriptors()
        for rule in self._dynamic:
            descriptors.extend(await rule.lister())
        return descriptors

    async def read_resource(self, uri: Any) -> list[ResourceContent]:
        """Compute the contents of *uri*.

        Raises:
            UnknownResourceError: No static URI or dynamic rule matches.
            ResourceNotFoundError: A dynamic rule matched but the entity is gone.
        """
        if not isinstance(uri, str):
            raise UnknownResourceError(uri)

        payload: Any
        static = self._static.get(uri)
        if static is not None:
            payload = await static.reader()
        else:
            for rule in self._dynamic:
                entity_id = rule.match(uri)
                if entity_id is None:
                    continue
                payload = await rule.reader(entity_id)
                if payload is None:
                    raise ResourceNotFoundError(uri, rule.label)
                break
            else:
                raise UnknownResourceError(uri)

        logger.debug("Read resource %s", uri)
        return [ResourceContent(uri=uri, mime_type=JSON_MIME_TYPE, text=dump_json(payload))]
