"""Exceptions raised while talking Redfish to a BMC."""

from typing import Optional


class RedfishError(Exception):
    """Base exception for Redfish protocol errors.

    Attributes:
        status_code: HTTP status of the offending response, if any
        body: Raw body of the offending response, if any
    """

    def __init__(
        self, message: str, status_code: Optional[int] = None, body: Optional[bytes] = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ProtocolError(RedfishError):
    """Response had an unexpected status or an unexpected JSON shape."""


class CollectionCardinalityError(RedfishError):
    """Systems collection did not contain exactly one member."""

    def __init__(self, message: str, count: int, body: Optional[bytes] = None) -> None:
        super().__init__(message, body=body)
        self.count = count


class ActionError(RedfishError):
    """Base exception for rejected power action requests."""


class ConflictError(ActionError):
    """BMC answered 409; the requested state may already be in effect."""


class UnexpectedStatusError(ActionError):
    """BMC answered a power action with a status other than 200, 204 or 409."""
