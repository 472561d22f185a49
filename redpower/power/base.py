#!/usr/bin/env python3
"""Abstract base class for power controllers.

Provides interface for reading and changing the power state of a remote system.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from redpower.redfish.errors import ActionError


class ActionStatus(Enum):
    """Outcome of a power action request."""

    APPLIED = "applied"
    APPLIED_IGNORED_CONFLICT = "applied-ignored-conflict"
    FAILED = "failed"


@dataclass(frozen=True)
class ActionOutcome:
    """Result of a submitted power action.

    Attributes:
        status: Outcome category
        status_code: HTTP status returned by the BMC
        error: Reason of the failure, set only for FAILED
    """

    status: ActionStatus
    status_code: int
    error: Optional[ActionError] = None

    @property
    def ok(self) -> bool:
        return self.status is not ActionStatus.FAILED


class PowerController(ABC):
    """Abstract base class for power controllers.

    Every call fetches fresh state from the controller; nothing is cached
    between calls.
    """

    @abstractmethod
    def get_power_state(self) -> str:
        """Get current power state of the system.

        Returns:
            Server-defined power state token, unmodified
        """

    @abstractmethod
    def list_actions(self) -> List[str]:
        """List power actions accepted by the system.

        Returns:
            Action values in the order the server supplied them
        """

    @abstractmethod
    def perform_action(self, action: str, ignore_conflict: bool = False) -> ActionOutcome:
        """Request a power action.

        Args:
            action: Action value, submitted as given
            ignore_conflict: Treat a conflict response as success

        Returns:
            ActionOutcome describing how the server answered
        """

    def close(self) -> None:
        """Release resources held by the controller."""
