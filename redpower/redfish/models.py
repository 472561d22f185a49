#!/usr/bin/env python3
"""Redfish wire records.

Named record types for the parts of Redfish responses redpower relies on.
Unknown fields are ignored; required fields that are missing or of the wrong
type raise ProtocolError.

Field mapping:

    Collection.members          <- Members[*]."@odata.id"
    Collection.declared_count   <- "Members@odata.count" (optional)
    SystemResource.power_state  <- PowerState
    SystemResource.allowed_actions
        <- Actions."#ComputerSystem.Reset"."ResetType@Redfish.AllowableValues"
    SystemResource.action_target
        <- Actions."#ComputerSystem.Reset".target
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from redpower.redfish.errors import ProtocolError


# Redfish field names
MEMBERS = "Members"
MEMBERS_COUNT = "Members@odata.count"
ODATA_ID = "@odata.id"
POWER_STATE = "PowerState"
ACTIONS = "Actions"
RESET_ACTION = "#ComputerSystem.Reset"
RESET_ALLOWABLE_VALUES = "ResetType@Redfish.AllowableValues"
RESET_TARGET = "target"
RESET_TYPE = "ResetType"


def decode_json(raw: Union[bytes, str], what: str) -> Any:
    """Decode a JSON response body.

    Args:
        raw: Response body
        what: Human readable name of the resource, used in error messages

    Returns:
        Decoded JSON value

    Raises:
        ProtocolError: If the body is not valid JSON
    """
    body = raw.encode("utf-8") if isinstance(raw, str) else raw
    try:
        return json.loads(body)
    except (UnicodeDecodeError, ValueError) as exc:
        raise ProtocolError(f"{what} response is not valid JSON: {exc}", body=body) from exc


def _require(data: Dict[str, Any], key: str, expected: type, what: str) -> Any:
    if key not in data:
        raise ProtocolError(f"{what} is missing required field '{key}'")
    value = data[key]
    # bool is an int subclass; never accept it where a number is expected
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise ProtocolError(
            f"{what} field '{key}' must be {expected.__name__}, got {type(value).__name__}"
        )
    return value


def _require_object(value: Any, what: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ProtocolError(f"{what} must be a JSON object, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Collection:
    """Redfish resource collection.

    Attributes:
        members: Member resource paths in server order
        declared_count: Value of Members@odata.count, if the server sent one
    """

    members: List[str]
    declared_count: Optional[int] = None

    @property
    def count_mismatch(self) -> bool:
        return self.declared_count is not None and self.declared_count != len(self.members)

    @classmethod
    def from_dict(cls, data: Any) -> "Collection":
        data = _require_object(data, "collection")
        raw_members = _require(data, MEMBERS, list, "collection")

        members = []
        for i, member in enumerate(raw_members):
            member = _require_object(member, f"collection member {i}")
            members.append(_require(member, ODATA_ID, str, f"collection member {i}"))

        declared_count = None
        if data.get(MEMBERS_COUNT) is not None:
            declared_count = _require(data, MEMBERS_COUNT, int, "collection")

        return cls(members=members, declared_count=declared_count)

    @classmethod
    def from_json(cls, raw: Union[bytes, str]) -> "Collection":
        data = decode_json(raw, "collection")
        try:
            return cls.from_dict(data)
        except ProtocolError as exc:
            exc.body = raw.encode("utf-8") if isinstance(raw, str) else raw
            raise


@dataclass(frozen=True)
class SystemResource:
    """Redfish ComputerSystem resource (power related subset).

    Attributes:
        power_state: Server-defined power state token ("On", "Off", ...)
        allowed_actions: Accepted ResetType values in server order
        action_target: Path the reset action is POSTed to
    """

    power_state: str
    allowed_actions: List[str]
    action_target: str

    @classmethod
    def from_dict(cls, data: Any) -> "SystemResource":
        data = _require_object(data, "system")
        power_state = _require(data, POWER_STATE, str, "system")

        actions = _require(data, ACTIONS, dict, "system")
        reset = _require(actions, RESET_ACTION, dict, f"system {ACTIONS}")
        what = f"system {ACTIONS}.{RESET_ACTION}"

        allowed = _require(reset, RESET_ALLOWABLE_VALUES, list, what)
        for value in allowed:
            if not isinstance(value, str):
                raise ProtocolError(
                    f"{what} field '{RESET_ALLOWABLE_VALUES}' must contain only strings"
                )

        target = _require(reset, RESET_TARGET, str, what)
        return cls(power_state=power_state, allowed_actions=list(allowed), action_target=target)

    @classmethod
    def from_json(cls, raw: Union[bytes, str]) -> "SystemResource":
        data = decode_json(raw, "system")
        try:
            return cls.from_dict(data)
        except ProtocolError as exc:
            exc.body = raw.encode("utf-8") if isinstance(raw, str) else raw
            raise


def reset_request(action: str) -> Dict[str, str]:
    """Build the JSON payload of a ComputerSystem.Reset request."""
    return {RESET_TYPE: action}
