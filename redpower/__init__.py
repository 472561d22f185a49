"""redpower - Redfish power control for BMCs."""

from redpower.config import RunConfig, Target, TrustMode
from redpower.power import ActionOutcome, ActionStatus, RedfishController, create_power_controller
from redpower.version import BuildInfo, get_build_info


__version__ = get_build_info().version

__all__ = [
    "ActionOutcome",
    "ActionStatus",
    "BuildInfo",
    "RedfishController",
    "RunConfig",
    "Target",
    "TrustMode",
    "create_power_controller",
    "get_build_info",
    "__version__",
]
