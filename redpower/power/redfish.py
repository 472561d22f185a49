#!/usr/bin/env python3
"""Redfish Controller - Power management via the Redfish API.

Handles power state queries and ComputerSystem.Reset actions on BMCs that
expose exactly one computer system.
"""

import logging
from typing import List

from redpower.config.config import Target
from redpower.power.base import ActionOutcome, ActionStatus, PowerController
from redpower.redfish.errors import ConflictError, ProtocolError, UnexpectedStatusError
from redpower.redfish.models import SystemResource, reset_request
from redpower.redfish.resolver import SystemResolver, build_url
from redpower.remote.base import Transport


logger = logging.getLogger(__name__)

# Constants
HTTP_OK = 200
HTTP_NO_CONTENT = 204
HTTP_CONFLICT = 409
SUCCESS_CODES = (HTTP_OK, HTTP_NO_CONTENT)


class RedfishController(PowerController):
    """Redfish controller for remote power management.

    Discovers the computer system and its reset action target on every call.

    Attributes:
        target: BMC connection parameters
        transport: Transport used for requests
        resolver: Computer system resolver bound to the transport
    """

    def __init__(self, target: Target, transport: Transport) -> None:
        """Initialize Redfish controller.

        Args:
            target: BMC connection parameters
            transport: Transport used for requests
        """
        self.target = target
        self.transport = transport
        self.resolver = SystemResolver(transport, target.host)

    def get_system(self) -> SystemResource:
        """Fetch the computer system resource.

        Returns:
            Freshly fetched SystemResource

        Raises:
            TransportError: If a request fails
            ProtocolError: If a response is unexpected or malformed
            CollectionCardinalityError: If the BMC does not expose exactly one system
        """
        url = self.resolver.resolve()
        response = self.transport.get(url)
        if response.status_code != HTTP_OK:
            raise ProtocolError(
                f"wrong response status code for {url} - expected: 200, "
                f"got: {response.status_code}",
                status_code=response.status_code,
                body=response.body,
            )
        return SystemResource.from_json(response.body)

    def get_power_state(self) -> str:
        return self.get_system().power_state

    def list_actions(self) -> List[str]:
        return self.get_system().allowed_actions

    def perform_action(self, action: str, ignore_conflict: bool = False) -> ActionOutcome:
        """Discover the computer system and submit a ComputerSystem.Reset action.

        The value is submitted as given; the server decides whether it is
        acceptable.

        Args:
            action: ResetType value, e.g. "On", "ForceOff", "GracefulRestart"
            ignore_conflict: Report a 409 response as APPLIED_IGNORED_CONFLICT

        Returns:
            ActionOutcome for the server's answer

        Raises:
            TransportError: If a request fails
            ProtocolError: If discovery responses are unexpected or malformed
            CollectionCardinalityError: If the BMC does not expose exactly one system
        """
        return self.submit_action(self.get_system(), action, ignore_conflict)

    def submit_action(
        self, system: SystemResource, action: str, ignore_conflict: bool = False
    ) -> ActionOutcome:
        """Submit a ComputerSystem.Reset action to an already fetched system.

        Args:
            system: SystemResource returned by get_system()
            action: ResetType value
            ignore_conflict: Report a 409 response as APPLIED_IGNORED_CONFLICT

        Returns:
            ActionOutcome for the server's answer

        Raises:
            TransportError: If the request fails
            ProtocolError: If the action target points outside the BMC
        """
        url = build_url(self.target.host, system.action_target)

        logger.debug(f"Performing {action} action on {self.target.host}...")
        response = self.transport.post(url, reset_request(action))
        status_code = response.status_code

        if status_code in SUCCESS_CODES:
            logger.debug(f"{action} action accepted by {self.target.host}")
            return ActionOutcome(ActionStatus.APPLIED, status_code)

        if status_code == HTTP_CONFLICT:
            if ignore_conflict:
                logger.debug(f"{action} action conflicts with current state, ignored")
                return ActionOutcome(ActionStatus.APPLIED_IGNORED_CONFLICT, status_code)
            error = ConflictError(
                f"{action} action conflicts with the current state of the system"
                " (409 Conflict)",
                status_code=status_code,
                body=response.body,
            )
            return ActionOutcome(ActionStatus.FAILED, status_code, error)

        error = UnexpectedStatusError(
            f"wrong response status code - expected: 200 or 204, got: {status_code}",
            status_code=status_code,
            body=response.body,
        )
        return ActionOutcome(ActionStatus.FAILED, status_code, error)

    def close(self) -> None:
        self.transport.close()
