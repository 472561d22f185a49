"""Power control implementations for managing target machine power states."""

from redpower.power.base import (
    ActionOutcome,
    ActionStatus,
    PowerController,
)
from redpower.power.factory import create_power_controller
from redpower.power.redfish import RedfishController

__all__ = [
    # Base classes and enums
    "PowerController",
    "ActionStatus",
    "ActionOutcome",
    # Redfish implementation
    "RedfishController",
    "create_power_controller",
]
