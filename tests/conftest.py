"""Shared fixtures for redpower tests."""

import json
from typing import Any, List, Optional, Tuple

import pytest

from redpower.config import Target
from redpower.remote.base import Transport, TransportResponse


HOST = "bmc.example.com"
SYSTEM_PATH = "/redfish/v1/Systems/1"
RESET_PATH = "/redfish/v1/Systems/1/Actions/ComputerSystem.Reset"

COLLECTION = {
    "@odata.id": "/redfish/v1/Systems",
    "Members": [{"@odata.id": SYSTEM_PATH}],
    "Members@odata.count": 1,
}

SYSTEM = {
    "@odata.id": SYSTEM_PATH,
    "PowerState": "On",
    "Actions": {
        "#ComputerSystem.Reset": {
            "ResetType@Redfish.AllowableValues": ["On", "ForceOff", "GracefulRestart"],
            "target": RESET_PATH,
        }
    },
}


def json_response(data: Any, status_code: int = 200) -> TransportResponse:
    return TransportResponse(status_code, json.dumps(data).encode("utf-8"))


class FakeTransport(Transport):
    """Transport answering from a queue of scripted responses."""

    def __init__(self, *responses: TransportResponse) -> None:
        self.responses = list(responses)
        self.requests: List[Tuple[str, str, Optional[Any]]] = []
        self.closed = False

    def send(self, method: str, url: str, body: Optional[Any] = None) -> TransportResponse:
        self.requests.append((method, url, body))
        if not self.responses:
            raise AssertionError(f"unexpected request: {method} {url}")
        return self.responses.pop(0)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def target():
    return Target(host=HOST, user="root", password="calvin")


@pytest.fixture
def make_transport():
    return FakeTransport
