"""Values, intents, an observable key-value store, detection results and dog mode logic for vehicle providers."""

__version__ = "0.1.0"

__all__ = [
    "api",
    "detection",
    "dog_mode",
    "dog_mode_state",
    "inspection",
    "keyvalue",
    "messages",
    "providers",
    "url",
    "value",
]