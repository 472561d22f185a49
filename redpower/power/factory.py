#!/usr/bin/env python3
"""Factory for creating power controller instances.

Provides centralized power controller instantiation from a BMC target.
"""

from typing import Optional

from redpower.config.config import Target
from redpower.power.base import PowerController
from redpower.remote.base import Transport


def create_power_controller(
    target: Target,
    transport: Optional[Transport] = None,
) -> PowerController:
    """Create power controller instance for a BMC.

    Args:
        target: BMC connection parameters
        transport: Transport to use instead of a new HTTPS transport

    Returns:
        PowerController instance
    """
    from redpower.power.redfish import RedfishController
    from redpower.remote.https import HTTPSTransport

    if transport is None:
        transport = HTTPSTransport(target)

    return RedfishController(target, transport)
