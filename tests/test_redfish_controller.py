"""Tests for RedfishController."""

import json

import pytest

from redpower.power import ActionStatus, RedfishController, create_power_controller
from redpower.redfish.errors import (
    CollectionCardinalityError,
    ConflictError,
    ProtocolError,
    UnexpectedStatusError,
)
from redpower.remote.base import TransportResponse
from redpower.remote.https import HTTPSTransport

from conftest import COLLECTION, HOST, RESET_PATH, SYSTEM, FakeTransport, json_response


def discovery():
    return [json_response(COLLECTION), json_response(SYSTEM)]


def controller_for(target, *responses):
    transport = FakeTransport(*responses)
    return RedfishController(target, transport), transport


def test_get_power_state(target):
    controller, transport = controller_for(target, *discovery())

    assert controller.get_power_state() == "On"
    assert [r[:2] for r in transport.requests] == [
        ("GET", f"https://{HOST}/redfish/v1/Systems"),
        ("GET", f"https://{HOST}/redfish/v1/Systems/1"),
    ]


def test_get_power_state_is_not_normalized(target):
    controller, _ = controller_for(
        target, json_response(COLLECTION), json_response(dict(SYSTEM, PowerState="PoweringOn"))
    )

    assert controller.get_power_state() == "PoweringOn"


def test_list_actions_in_server_order(target):
    controller, _ = controller_for(target, *discovery())

    assert controller.list_actions() == ["On", "ForceOff", "GracefulRestart"]


def test_list_actions_keeps_order_and_duplicates(target):
    values = ["PushPowerButton", "On", "ForceOff", "On", "Nmi"]
    system = json.loads(json.dumps(SYSTEM))
    system["Actions"]["#ComputerSystem.Reset"]["ResetType@Redfish.AllowableValues"] = values
    controller, _ = controller_for(target, json_response(COLLECTION), json_response(system))

    assert controller.list_actions() == values


def test_every_call_fetches_fresh_state(target):
    off = dict(SYSTEM, PowerState="Off")
    controller, transport = controller_for(
        target, *discovery(), json_response(COLLECTION), json_response(off)
    )

    assert controller.get_power_state() == "On"
    assert controller.get_power_state() == "Off"
    assert len(transport.requests) == 4


def test_perform_action_posts_reset_type(target):
    controller, transport = controller_for(target, *discovery(), TransportResponse(204, b""))

    outcome = controller.perform_action("ForceOff")

    assert outcome.status is ActionStatus.APPLIED
    assert outcome.ok
    assert outcome.error is None
    assert transport.requests[-1] == (
        "POST",
        f"https://{HOST}{RESET_PATH}",
        {"ResetType": "ForceOff"},
    )


@pytest.mark.parametrize("status_code", [200, 204])
def test_success_codes_are_applied(target, status_code):
    controller, _ = controller_for(target, *discovery(), TransportResponse(status_code, b""))

    outcome = controller.perform_action("On")

    assert outcome.status is ActionStatus.APPLIED
    assert outcome.status_code == status_code


def test_conflict_ignored(target):
    controller, _ = controller_for(target, *discovery(), TransportResponse(409, b"{}"))

    outcome = controller.perform_action("On", ignore_conflict=True)

    assert outcome.status is ActionStatus.APPLIED_IGNORED_CONFLICT
    assert outcome.ok
    assert outcome.error is None


def test_conflict_not_ignored(target):
    body = b'{"error": {"code": "Base.1.8.PropertyValueConflict"}}'
    controller, _ = controller_for(target, *discovery(), TransportResponse(409, body))

    outcome = controller.perform_action("On", ignore_conflict=False)

    assert outcome.status is ActionStatus.FAILED
    assert not outcome.ok
    assert isinstance(outcome.error, ConflictError)
    assert outcome.error.status_code == 409
    assert outcome.error.body == body


@pytest.mark.parametrize("status_code", [201, 202, 400, 401, 404, 500, 503])
@pytest.mark.parametrize("ignore_conflict", [False, True])
def test_other_statuses_fail_with_unexpected_status(target, status_code, ignore_conflict):
    controller, _ = controller_for(target, *discovery(), TransportResponse(status_code, b"oops"))

    outcome = controller.perform_action("GracefulRestart", ignore_conflict=ignore_conflict)

    assert outcome.status is ActionStatus.FAILED
    assert isinstance(outcome.error, UnexpectedStatusError)
    assert outcome.error.status_code == status_code
    assert outcome.error.body == b"oops"


def test_action_value_is_not_validated_locally(target):
    controller, transport = controller_for(target, *discovery(), TransportResponse(400, b""))

    outcome = controller.perform_action("Hibernate")

    assert transport.requests[-1][2] == {"ResetType": "Hibernate"}
    assert isinstance(outcome.error, UnexpectedStatusError)


def test_action_target_is_discovered(target):
    system = json.loads(json.dumps(SYSTEM))
    system["Actions"]["#ComputerSystem.Reset"]["target"] = "/redfish/v1/Systems/1/Actions/Oem.Reset"
    controller, transport = controller_for(
        target, json_response(COLLECTION), json_response(system), TransportResponse(204, b"")
    )

    controller.perform_action("On")

    assert transport.requests[-1][1] == f"https://{HOST}/redfish/v1/Systems/1/Actions/Oem.Reset"


@pytest.mark.parametrize(
    "reset_target", ["http://other/x", "//other/x", "https://attacker.example/reset"]
)
def test_reset_target_on_other_host_is_refused(target, reset_target):
    system = json.loads(json.dumps(SYSTEM))
    system["Actions"]["#ComputerSystem.Reset"]["target"] = reset_target
    controller, transport = controller_for(
        target, json_response(COLLECTION), json_response(system)
    )

    with pytest.raises(ProtocolError, match="pointing outside"):
        controller.perform_action("ForceOff")

    assert [r[0] for r in transport.requests] == ["GET", "GET"]


def test_submit_action_uses_fetched_system(target):
    controller, transport = controller_for(target, *discovery(), TransportResponse(204, b""))
    system = controller.get_system()

    outcome = controller.submit_action(system, "ForceOff")

    assert outcome.status is ActionStatus.APPLIED
    assert [r[0] for r in transport.requests] == ["GET", "GET", "POST"]


def test_system_non_200_is_protocol_error(target):
    controller, _ = controller_for(
        target, json_response(COLLECTION), TransportResponse(503, b"busy")
    )

    with pytest.raises(ProtocolError) as excinfo:
        controller.get_power_state()

    assert excinfo.value.status_code == 503
    assert excinfo.value.body == b"busy"


def test_malformed_system_is_protocol_error(target):
    controller, _ = controller_for(
        target, json_response(COLLECTION), json_response({"PowerState": "On"})
    )

    with pytest.raises(ProtocolError):
        controller.list_actions()


def test_action_not_posted_when_discovery_fails(target):
    controller, transport = controller_for(
        target, json_response({"Members": [], "Members@odata.count": 0})
    )

    with pytest.raises(CollectionCardinalityError):
        controller.perform_action("On")

    assert [r[0] for r in transport.requests] == ["GET"]


def test_close_closes_transport(target):
    controller, transport = controller_for(target)

    controller.close()

    assert transport.closed


def test_factory_builds_https_controller(target):
    controller = create_power_controller(target)

    assert isinstance(controller, RedfishController)
    assert isinstance(controller.transport, HTTPSTransport)
    controller.close()


def test_factory_uses_given_transport(target):
    transport = FakeTransport()

    controller = create_power_controller(target, transport)

    assert controller.transport is transport
