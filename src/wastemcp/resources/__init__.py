"""Resources: addressable, read-only JSON views over the store."""

from wastemcp.resources.models import JSON_MIME_TYPE, ResourceContent, ResourceDescriptor
from wastemcp.resources.registry import DynamicResource, ResourceRegistry, StaticResource
from wastemcp.resources.waste import build_resource_registry

__all__ = [
    "JSON_MIME_TYPE",
    "DynamicResource",
    "ResourceContent",
    "ResourceDescriptor",
    "ResourceRegistry",
    "StaticResource",
    "build_resource_registry",
]
