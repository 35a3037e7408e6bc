"""State of the dog mode feature and the checks that run around it."""

from __future__ import annotations

import dataclasses
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional

from .api import Chariott, ChariottError
from .value import Value

# Namespaces
VDT_NAMESPACE = "sdv.vdt"
KEY_VALUE_STORE_NAMESPACE = "sdv.kvs"

# Boundary conditions
LOW_BATTERY_LEVEL = 19
MIN_TEMPERATURE = 20
MAX_TEMPERATURE = 26

# Method names
ACTIVATE_AIR_CONDITIONING_ID = "Vehicle.Cabin.HVAC.IsAirConditioningActive"
SEND_NOTIFICATION_ID = "send_notification"
SET_UI_MESSAGE_ID = "set_ui_message"

# Event identifiers
DOG_MODE_STATUS_ID = "Feature.DogMode.Status"
CABIN_TEMPERATURE_ID = "Vehicle.Cabin.HVAC.AmbientAirTemperature"
AIR_CONDITIONING_STATE_ID = "Vehicle.Cabin.HVAC.IsAirConditioningActive"
BATTERY_LEVEL_ID = "Vehicle.OBD.HybridBatteryRemaining"

# Durations, in seconds of the monotonic clock.
FUNCTION_INVOCATION_THROTTLING_DURATION = 5.0
AIR_CONDITIONING_ACTIVATION_TIMEOUT = 10.0
TIMEOUT_EVALUATION_INTERVAL = 2.0

AIR_CONDITIONING_FAILURE_MESSAGE = (
    "Error while activating air conditioning, please return to the car immediately."
)


def _initial_invocation_time() -> float:
    return time.monotonic() - FUNCTION_INVOCATION_THROTTLING_DURATION


@dataclass(frozen=True)
class DogModeState:
    """A snapshot of everything the dog mode logic decides on.

    Times are readings of :func:`time.monotonic`.
    """

    temperature: int = 25
    dogmode_status: bool = False
    battery_level: int = 100
    air_conditioning_active: bool = False
    air_conditioning_activation_time: Optional[float] = None
    last_air_conditioning_invocation_time: float = field(
        default_factory=_initial_invocation_time
    )
    write_dog_mode_status: bool = False
    send_notification_disabled: bool = False
    set_ui_message_disabled: bool = False

    def replace(self, **kwargs: object) -> "DogModeState":
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **kwargs)


async def on_dog_mode_timer(
    state: DogModeState, chariott: Chariott
) -> Optional[DogModeState]:
    """Check on a pending air conditioning activation.

    Returns a new state when the pending activation is resolved, either because
    the air conditioning came on or because it timed out (in which case the
    user is notified), and ``None`` otherwise.
    """
    activation_time = state.air_conditioning_activation_time
    if activation_time is None:
        return None
    if state.air_conditioning_active:
        return state.replace(air_conditioning_activation_time=None)
    if time.monotonic() > activation_time + AIR_CONDITIONING_ACTIVATION_TIMEOUT:
        await chariott.invoke(
            VDT_NAMESPACE, SEND_NOTIFICATION_ID, [AIR_CONDITIONING_FAILURE_MESSAGE]
        )
        return state.replace(air_conditioning_activation_time=None)
    return None


def _check_member(entry, expected: list[tuple[str, Value]]) -> Optional[ChariottError]:
    """Return the first mismatch of ``entry`` against ``expected``, or ``None``."""
    if not expected:
        return ChariottError("Expected properties array was empty.")
    for key, expected_value in expected:
        actual = entry.get(key)
        if actual is None:
            return ChariottError(f"Member does not specify {key!r}.")
        if actual != expected_value:
            return ChariottError(
                f"Member is of {key} '{actual!r}' instead of '{expected_value!r}'."
            )
    return None


async def inspect_dependency(
    chariott: Chariott,
    path: str,
    expected_properties: Iterable[tuple[str, object]],
) -> None:
    """Ensure some member under ``path`` in the vehicle namespace has the expected properties.

    Raises :class:`ChariottError` when no member matches; the error describes
    the last member that failed, or that no member was found.
    """
    expected = [(str(k), Value.from_python(v)) for k, v in expected_properties]
    entries = await chariott.inspect(VDT_NAMESPACE, path)
    error = ChariottError("Could not find a single member within the specified path.")
    for entry in entries:
        mismatch = _check_member(entry, expected)
        if mismatch is None:
            return
        error = mismatch
    raise error