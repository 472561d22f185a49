#!/usr/bin/env python3
"""Computer system discovery.

Resolves the single ComputerSystem resource exposed by a BMC through the
Redfish Systems collection.
"""

import logging
from urllib.parse import urlsplit

from redpower.redfish.errors import CollectionCardinalityError, ProtocolError
from redpower.redfish.models import Collection
from redpower.remote.base import Transport


logger = logging.getLogger(__name__)

# Constants
SYSTEMS_PATH = "/redfish/v1/Systems"
HTTP_OK = 200


def build_url(host: str, path: str) -> str:
    """Combine a BMC host with a resource path into an absolute HTTPS URL.

    Links handed out by the BMC are always resolved against host. A link
    carrying its own scheme or network location is refused so credentials
    never leave the configured BMC.

    Args:
        host: BMC address and optional port
        path: Resource path as found in Redfish links

    Returns:
        Absolute URL

    Raises:
        ProtocolError: If path names a scheme or another host
    """
    parts = urlsplit(path)
    if parts.scheme or parts.netloc:
        raise ProtocolError(f"refusing resource link {path!r} pointing outside {host}")
    if not path.startswith("/"):
        path = f"/{path}"
    return f"https://{host}{path}"


class SystemResolver:
    """Finds the URL of the only computer system of a BMC.

    Attributes:
        transport: Transport used for requests
        host: BMC address and optional port
    """

    def __init__(self, transport: Transport, host: str) -> None:
        self.transport = transport
        self.host = host

    @property
    def collection_url(self) -> str:
        return build_url(self.host, SYSTEMS_PATH)

    def fetch_collection(self) -> Collection:
        """Fetch and parse the Systems collection.

        Raises:
            TransportError: If the request fails
            ProtocolError: If the status is not 200 or the body is malformed
        """
        url = self.collection_url
        response = self.transport.get(url)
        if response.status_code != HTTP_OK:
            raise ProtocolError(
                f"wrong response status code for {url} - expected: 200, "
                f"got: {response.status_code}",
                status_code=response.status_code,
                body=response.body,
            )
        return Collection.from_json(response.body)

    def resolve(self) -> str:
        """Resolve the absolute URL of the computer system.

        Returns:
            Absolute URL of the single collection member

        Raises:
            TransportError: If the request fails
            ProtocolError: If the collection cannot be fetched or parsed
            CollectionCardinalityError: If the collection has zero or several members
        """
        collection = self.fetch_collection()

        if collection.count_mismatch:
            logger.debug(
                f"Systems collection on {self.host} declares "
                f"{collection.declared_count} members but lists {len(collection.members)}"
            )

        count = len(collection.members)
        if count == 0:
            raise CollectionCardinalityError(
                "no systems found in the redfish systems collection", count=count
            )
        if count > 1:
            raise CollectionCardinalityError(
                f"multiple systems ({count}) found in the redfish systems collection"
                " - not supported",
                count=count,
            )

        url = build_url(self.host, collection.members[0])
        logger.debug(f"Resolved computer system of {self.host}: {url}")
        return url


def resolve_system_url(transport: Transport, host: str) -> str:
    """Resolve the absolute URL of the only computer system on host."""
    return SystemResolver(transport, host).resolve()
