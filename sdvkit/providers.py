"""Example providers answering intents, and the vehicle schema they expose."""

from __future__ import annotations

import json
from typing import Optional

from .inspection import Entry
from .messages import (
    DiscoverFulfillment,
    DiscoverIntent,
    InvokeFulfillment,
    InvokeIntent,
    ServiceMessage,
)
from .value import Value, ValueKind

SCHEMA_KIND = "grpc+proto"

CABIN_TEMPERATURE_PROPERTY = "Vehicle.Cabin.HVAC.AmbientAirTemperature"
BATTERY_LEVEL_PROPERTY = "Vehicle.OBD.HybridBatteryRemaining"
AIR_CONDITIONING_STATE_PROPERTY = "Vehicle.Cabin.HVAC.IsAirConditioningActive"
ACTIVATE_AIR_CONDITIONING_COMMAND = "Vehicle.Cabin.HVAC.IsAirConditioningActive"
SEND_NOTIFICATION_COMMAND = "send_notification"
SET_UI_MESSAGE_COMMAND = "set_ui_message"

PARSE_AND_PRINT_JSON_COMMAND = "parse_and_print_json"
JSON_PROCESSED_MESSAGE = "Successfully processed json"


class ProviderError(Exception):
    """An intent could not be fulfilled; ``code`` names the kind of failure."""

    def __init__(self, message: str, code: str = "unknown") -> None:
        super().__init__(message)
        self.code = code


def _require_intent(intent: object) -> object:
    if intent is None:
        raise ProviderError("Intent must be specified.", "invalid_argument")
    return intent


def parse_and_print_json(json_string: str) -> str:
    """Parse ``json_string``, print it in compact form and report success."""
    try:
        parsed = json.loads(json_string)
    except (json.JSONDecodeError, TypeError) as error:
        raise ProviderError("failed to parse json.") from error
    print(json.dumps(parsed, separators=(",", ":"), sort_keys=True, ensure_ascii=False))
    return JSON_PROCESSED_MESSAGE


class InvokeCommandProvider:
    """Answers discover intents and runs the ``parse_and_print_json`` command."""

    def __init__(self, url: str) -> None:
        self.url = str(url)

    def _invoke(self, intent: InvokeIntent) -> InvokeFulfillment:
        if intent.command != PARSE_AND_PRINT_JSON_COMMAND:
            raise ProviderError(f"No command found for {intent.command}")
        argument: Optional[Value] = intent.args[0] if intent.args else None
        if argument is None or argument.kind is not ValueKind.STRING:
            raise ProviderError("unexpected data type.")
        result = parse_and_print_json(argument.as_str())
        return InvokeFulfillment(Value.from_python(result))

    def fulfill(self, intent: object) -> object:
        """Return the fulfillment for ``intent``; raise :class:`ProviderError` otherwise."""
        intent = _require_intent(intent)
        if isinstance(intent, DiscoverIntent):
            return DiscoverFulfillment(
                (ServiceMessage(self.url, SCHEMA_KIND, "invoke.controller.v1"),)
            )
        if isinstance(intent, InvokeIntent):
            return self._invoke(intent)
        raise ProviderError("Unsupported or unknown intent.")


class SimpleProvider:
    """Answers discover intents only."""

    def __init__(self, url: str) -> None:
        self.url = str(url)

    def fulfill(self, intent: object) -> object:
        """Return the fulfillment for ``intent``; raise :class:`ProviderError` otherwise."""
        intent = _require_intent(intent)
        if isinstance(intent, DiscoverIntent):
            return DiscoverFulfillment(
                (ServiceMessage(self.url, SCHEMA_KIND, "example.provider.v1"),)
            )
        raise ProviderError("Unsupported or unknown intent.")


def property_entry(path: str, type_name: str) -> Entry:
    """Describe a readable, watchable, read-only property."""
    return Entry(
        path,
        {
            "member_type": "property",
            "type": type_name,
            "read": True,
            "write": False,
            "watch": True,
        },
    )


def command_entry(path: str, type_name: str) -> Entry:
    """Describe a command."""
    return Entry(path, {"member_type": "command", "type": type_name})


def vdt_schema() -> list[Entry]:
    """The members the simulated vehicle exposes for inspection."""
    return [
        property_entry(CABIN_TEMPERATURE_PROPERTY, "int32"),
        property_entry(BATTERY_LEVEL_PROPERTY, "int32"),
        property_entry(AIR_CONDITIONING_STATE_PROPERTY, "bool"),
        command_entry(ACTIVATE_AIR_CONDITIONING_COMMAND, "IAcmeAirconControl"),
        command_entry(SEND_NOTIFICATION_COMMAND, "ISendNotification"),
        command_entry(SET_UI_MESSAGE_COMMAND, "ISetUiMessage"),
    ]