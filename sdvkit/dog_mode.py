"""Decision logic of the dog mode feature: react to changes of the vehicle state."""

from __future__ import annotations

import logging
import time
from typing import Optional

from .api import Chariott
from .dog_mode_state import (
    ACTIVATE_AIR_CONDITIONING_ID,
    DOG_MODE_STATUS_ID,
    FUNCTION_INVOCATION_THROTTLING_DURATION,
    KEY_VALUE_STORE_NAMESPACE,
    LOW_BATTERY_LEVEL,
    MAX_TEMPERATURE,
    MIN_TEMPERATURE,
    SEND_NOTIFICATION_ID,
    SET_UI_MESSAGE_ID,
    VDT_NAMESPACE,
    DogModeState,
)

_log = logging.getLogger(__name__)

COOLING_NOTIFICATION = "The car is now being cooled."
COOLING_UI_MESSAGE = "The car is cooled, no need to worry."
LOW_BATTERY_NOTIFICATION = "The battery is low, please return to the car."
LOW_BATTERY_UI_MESSAGE = "The battery is low, the animal is in danger."

_LOGGED_FIELDS = (
    ("Dog mode", "dogmode_status"),
    ("Cabin Temperature", "temperature"),
    ("Air conditioning", "air_conditioning_active"),
    ("Battery level", "battery_level"),
)


async def activate_air_conditioning(chariott: Chariott, value: bool) -> None:
    """Switch the air conditioning on or off."""
    await chariott.invoke(VDT_NAMESPACE, ACTIVATE_AIR_CONDITIONING_ID, [bool(value)])


async def send_notification(chariott: Chariott, message: str, state: DogModeState) -> None:
    """Send ``message`` to the car owner unless notifications are unavailable."""
    if not state.send_notification_disabled:
        await chariott.invoke(VDT_NAMESPACE, SEND_NOTIFICATION_ID, [message])


async def set_ui_message(chariott: Chariott, message: str, state: DogModeState) -> None:
    """Show ``message`` on the vehicle display unless the display is unavailable."""
    if not state.set_ui_message_disabled:
        await chariott.invoke(VDT_NAMESPACE, SET_UI_MESSAGE_ID, [message])


async def _activate_with_throttling(
    value: bool, state: DogModeState, chariott: Chariott
) -> Optional[float]:
    """Switch the air conditioning unless it was switched too recently.

    Returns the time of the invocation, or ``None`` if it was throttled.
    """
    now = time.monotonic()
    if now > state.last_air_conditioning_invocation_time + FUNCTION_INVOCATION_THROTTLING_DURATION:
        await activate_air_conditioning(chariott, value)
        return now
    return None


def _log_changes(state: DogModeState, previous_state: DogModeState) -> None:
    for label, name in _LOGGED_FIELDS:
        current = getattr(state, name)
        if current != getattr(previous_state, name):
            _log.info("%s: %s", label, current)


async def run_dog_mode(
    state: DogModeState, previous_state: DogModeState, chariott: Chariott
) -> Optional[DogModeState]:
    """Act on the transition from ``previous_state`` to ``state``.

    Returns an updated state when the logic changed it, ``None`` otherwise.
    """
    if state == previous_state:
        return None

    _log_changes(state, previous_state)

    if state.write_dog_mode_status and state.dogmode_status != previous_state.dogmode_status:
        await chariott.write(KEY_VALUE_STORE_NAMESPACE, DOG_MODE_STATUS_ID, state.dogmode_status)

    if not state.dogmode_status:
        if previous_state.dogmode_status:
            await activate_air_conditioning(chariott, False)
        return None

    output_state: Optional[DogModeState] = None

    if MIN_TEMPERATURE >= state.temperature and state.air_conditioning_active:
        invoked_at = await _activate_with_throttling(False, state, chariott)
        if invoked_at is not None:
            output_state = state.replace(last_air_conditioning_invocation_time=invoked_at)

    if state.temperature > MAX_TEMPERATURE and not state.air_conditioning_active:
        invoked_at = await _activate_with_throttling(True, state, chariott)
        if invoked_at is not None:
            output_state = state.replace(
                last_air_conditioning_invocation_time=invoked_at,
                air_conditioning_activation_time=invoked_at,
            )

    if state.air_conditioning_active and not previous_state.air_conditioning_active:
        await send_notification(chariott, COOLING_NOTIFICATION, state)
        await set_ui_message(chariott, COOLING_UI_MESSAGE, state)

    if previous_state.battery_level > LOW_BATTERY_LEVEL >= state.battery_level:
        await send_notification(chariott, LOW_BATTERY_NOTIFICATION, state)
        await set_ui_message(chariott, LOW_BATTERY_UI_MESSAGE, state)

    return output_state