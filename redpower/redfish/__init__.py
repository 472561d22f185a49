"""Redfish resource shapes, discovery and errors."""

from redpower.redfish.errors import (
    ActionError,
    CollectionCardinalityError,
    ConflictError,
    ProtocolError,
    RedfishError,
    UnexpectedStatusError,
)
from redpower.redfish.models import Collection, SystemResource
from redpower.redfish.resolver import SystemResolver, build_url, resolve_system_url

__all__ = [
    # Wire records
    "Collection",
    "SystemResource",
    # Discovery
    "SystemResolver",
    "build_url",
    "resolve_system_url",
    # Errors
    "RedfishError",
    "ProtocolError",
    "CollectionCardinalityError",
    "ActionError",
    "ConflictError",
    "UnexpectedStatusError",
]
