import time
from typing import Optional

import pytest

from sdvkit.api import Chariott, ChariottError
from sdvkit.dog_mode_state import (
    ACTIVATE_AIR_CONDITIONING_ID,
    AIR_CONDITIONING_ACTIVATION_TIMEOUT,
    AIR_CONDITIONING_FAILURE_MESSAGE,
    FUNCTION_INVOCATION_THROTTLING_DURATION,
    SEND_NOTIFICATION_ID,
    SET_UI_MESSAGE_ID,
    VDT_NAMESPACE,
    DogModeState,
    inspect_dependency,
    on_dog_mode_timer,
)
from sdvkit.inspection import Entry
from sdvkit.value import InvalidType, InvalidValueType, Value


class CarControllerMock(Chariott):
    def __init__(self, entries=None):
        self.ui_message: Optional[str] = None
        self.notification: Optional[str] = None
        self.air_conditioning_state: Optional[bool] = None
        self.entries = entries or {}
        self.inspected = []

    def snapshot(self):
        return (self.ui_message, self.notification, self.air_conditioning_state)

    async def invoke(self, namespace, command, args):
        arg = Value.from_python(next(iter(args)))
        if namespace == VDT_NAMESPACE:
            if command == SET_UI_MESSAGE_ID:
                try:
                    self.ui_message = arg.into_string()
                except InvalidValueType:
                    pass
            elif command == SEND_NOTIFICATION_ID:
                try:
                    self.notification = arg.into_string()
                except InvalidValueType:
                    pass
            elif command == ACTIVATE_AIR_CONDITIONING_ID:
                try:
                    self.air_conditioning_state = arg.to_bool()
                except InvalidType:
                    pass
        return Value.TRUE

    async def subscribe(self, namespace, channel_id, event_ids):
        raise AssertionError("unexpected subscribe")

    async def discover(self, namespace):
        raise AssertionError("unexpected discover")

    async def inspect(self, namespace, query):
        self.inspected.append((namespace, query))
        return list(self.entries.get(query, []))

    async def write(self, namespace, key, value):
        raise AssertionError("unexpected write")

    async def read(self, namespace, key):
        raise AssertionError("unexpected read")


def test_new_state_defaults():
    before = time.monotonic()
    state = DogModeState()
    assert state.temperature == 25
    assert state.dogmode_status is False
    assert state.battery_level == 100
    assert state.air_conditioning_active is False
    assert state.air_conditioning_activation_time is None
    assert state.write_dog_mode_status is False
    assert state.send_notification_disabled is False
    assert state.set_ui_message_disabled is False
    assert (
        state.last_air_conditioning_invocation_time
        <= before - FUNCTION_INVOCATION_THROTTLING_DURATION + 1.0
    )


def test_replace_changes_only_given_fields():
    state = DogModeState()
    changed = state.replace(temperature=30, dogmode_status=True)
    assert changed.temperature == 30
    assert changed.dogmode_status is True
    assert changed.battery_level == state.battery_level
    assert state.temperature == 25
    assert changed == state.replace(temperature=30, dogmode_status=True)


@pytest.mark.asyncio
async def test_notification_is_sent_when_air_conditioning_timeout_expires():
    controller = CarControllerMock()
    state = DogModeState(
        air_conditioning_active=False,
        air_conditioning_activation_time=time.monotonic()
        - AIR_CONDITIONING_ACTIVATION_TIMEOUT * 2,
    )
    await on_dog_mode_timer(state, controller)
    assert controller.snapshot() == (
        None,
        "Error while activating air conditioning, please return to the car immediately.",
        None,
    )
    assert controller.notification == AIR_CONDITIONING_FAILURE_MESSAGE


@pytest.mark.asyncio
async def test_activation_timestamp_is_reset_when_timeout_expires():
    controller = CarControllerMock()
    state = DogModeState(
        air_conditioning_active=False,
        air_conditioning_activation_time=time.monotonic()
        - AIR_CONDITIONING_ACTIVATION_TIMEOUT * 2,
    )
    result = await on_dog_mode_timer(state, controller)
    assert result.air_conditioning_activation_time is None


@pytest.mark.asyncio
async def test_activation_timestamp_is_reset_when_air_conditioning_is_activated():
    controller = CarControllerMock()
    state = DogModeState(
        air_conditioning_active=True,
        air_conditioning_activation_time=time.monotonic(),
    )
    result = await on_dog_mode_timer(state, controller)
    assert result.air_conditioning_activation_time is None
    assert controller.snapshot() == (None, None, None)


@pytest.mark.asyncio
async def test_timer_does_nothing_without_pending_activation():
    controller = CarControllerMock()
    result = await on_dog_mode_timer(DogModeState(), controller)
    assert result is None
    assert controller.snapshot() == (None, None, None)


@pytest.mark.asyncio
async def test_timer_waits_while_within_timeout():
    controller = CarControllerMock()
    state = DogModeState(air_conditioning_activation_time=time.monotonic())
    result = await on_dog_mode_timer(state, controller)
    assert result is None
    assert controller.notification is None


@pytest.mark.asyncio
async def test_inspect_dependency_accepts_matching_member():
    path = "Vehicle.Cabin.HVAC.AmbientAirTemperature"
    controller = CarControllerMock(
        {path: [Entry(path, {"member_type": "property", "type": "int32"})]}
    )
    await inspect_dependency(
        controller, path, [("member_type", "property"), ("type", "int32")]
    )
    assert controller.inspected == [(VDT_NAMESPACE, path)]


@pytest.mark.asyncio
async def test_inspect_dependency_accepts_if_any_member_matches():
    path = "send_notification"
    controller = CarControllerMock(
        {
            path: [
                Entry(path, {"member_type": "command", "type": "Other"}),
                Entry(path, {"member_type": "command", "type": "ISendNotification"}),
            ]
        }
    )
    await inspect_dependency(
        controller, path, [("member_type", "command"), ("type", "ISendNotification")]
    )
    assert controller.inspected == [(VDT_NAMESPACE, path)]


@pytest.mark.asyncio
async def test_inspect_dependency_fails_without_members():
    controller = CarControllerMock()
    with pytest.raises(ChariottError, match="Could not find a single member"):
        await inspect_dependency(controller, "missing", [("type", "bool")])


@pytest.mark.asyncio
async def test_inspect_dependency_reports_missing_property():
    path = "p"
    controller = CarControllerMock({path: [Entry(path, {"type": "bool"})]})
    with pytest.raises(ChariottError, match="does not specify 'member_type'"):
        await inspect_dependency(
            controller, path, [("member_type", "property"), ("type", "bool")]
        )


@pytest.mark.asyncio
async def test_inspect_dependency_reports_wrong_value():
    path = "p"
    controller = CarControllerMock(
        {path: [Entry(path, {"member_type": "property", "type": "int32"})]}
    )
    with pytest.raises(ChariottError, match="Member is of type"):
        await inspect_dependency(
            controller, path, [("member_type", "property"), ("type", "bool")]
        )


@pytest.mark.asyncio
async def test_inspect_dependency_rejects_empty_expectations():
    path = "p"
    controller = CarControllerMock({path: [Entry(path, {"type": "bool"})]})
    with pytest.raises(ChariottError, match="Expected properties array was empty"):
        await inspect_dependency(controller, path, [])