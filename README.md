# sdvkit

Building blocks for writing providers and applications that talk to an
intent-based vehicle runtime. Everything is plain Python with no third-party
dependencies.

## Modules

- `sdvkit.keyvalue`: `InMemoryKeyValueStore`, a dictionary-backed store whose
  `set` calls an optional `Observer.on_set(key, value)` before storing, on every
  write, even when the value is unchanged. `get` returns `None` for a missing
  key. The store is not thread safe.
- `sdvkit.value`: `Value`, a frozen tagged value whose `kind` is a `ValueKind`
  (null, bool, int32, int64, float32, float64, string, any, blob). Build one with
  `Value.from_python(obj)`, `Value.new_any(type_url, value)` or
  `Value.new_blob(media_type, data)`; the constants `Value.TRUE`, `Value.FALSE`
  and `Value.NULL` are provided. `to_i32`, `to_i64`, `to_bool` and `as_str` raise
  `InvalidType` on a mismatch; `into_string`, `into_any` and `into_blob` raise
  `InvalidValueType`, which keeps the offending value on `.value`.
- `sdvkit.url`: `parse_socket_address(url)` turns an `http` or `https` URL whose
  host is a literal IP address into an `(ip_address, port)` pair, defaulting the
  port to 80 or 443. Anything else raises `UrlSocketAddrParseError`
  ("invalid scheme", "missing host" or "invalid address").
- `sdvkit.inspection`: `Entry`, a `path` together with named `Value` properties,
  read with `get(key)` or the read-only `items` mapping.
- `sdvkit.messages`: the intents (`InvokeIntent`, `SubscribeIntent`,
  `DiscoverIntent`, `InspectIntent`, `WriteIntent`, `ReadIntent`), their
  fulfillments, `ServiceMessage`, `InspectEntryMessage`, the enums `IntentKind`,
  `ExecutionLocality` and `RegistrationState`, and `intent_kind(intent)`.
- `sdvkit.api`: the abstract `Chariott` client interface (`invoke`,
  `subscribe`, `discover`, `inspect`, `write`, `read`), `FulfillingChariott`,
  which implements all of them on top of one `fulfill(namespace, intent)`
  method, `expect_fulfillment`, `ChariottError`, and the `Service` and `Event`
  records.
- `sdvkit.dog_mode_state`: `DogModeState`, the frozen state snapshot (times are
  `time.monotonic()` readings), with `replace(**changes)`; `on_dog_mode_timer`,
  which resolves a pending air conditioning activation and notifies the owner
  when it timed out; and `inspect_dependency`, which checks that a vehicle member
  has the expected properties.
- `sdvkit.dog_mode`: `run_dog_mode(state, previous_state, chariott)`, which
  switches the air conditioning (throttled to one call per five seconds), writes
  the dog mode status when asked to, and sends notifications and UI messages on
  cooling and low battery; plus `activate_air_conditioning`, `send_notification`
  and `set_ui_message`.
- `sdvkit.detection`: `DetectionObject`, `DetectResponse`, `DetectedObject` and
  `parse_detection_response`, which turns a detection service's JSON answer into
  a flat response listing each object followed by its ancestors.
- `sdvkit.providers`: `SimpleProvider` (discover only) and
  `InvokeCommandProvider` (discover, plus the `parse_and_print_json` command),
  both raising `ProviderError` with a `code` for intents they cannot fulfil;
  `parse_and_print_json`, `property_entry`, `command_entry` and `vdt_schema()`,
  the members of the simulated vehicle.

## Installing

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Examples

```python
from sdvkit.keyvalue import InMemoryKeyValueStore, Observer


class Printer(Observer):
    def on_set(self, key, value):
        print(f"{key} -> {value}")


store = InMemoryKeyValueStore(Printer())
store.set("Vehicle.Cabin.HVAC.AmbientAirTemperature", 23)
assert store.get("Vehicle.Cabin.HVAC.AmbientAirTemperature") == 23
```

```python
from sdvkit.value import Value

assert Value.from_python(42).to_i32() == 42
```

A `FulfillingChariott` only needs `fulfill`; here it answers from a provider in
the same process:

```python
import asyncio

from sdvkit.api import FulfillingChariott
from sdvkit.providers import SimpleProvider


class InProcess(FulfillingChariott):
    def __init__(self, provider):
        self.provider = provider

    async def fulfill(self, namespace, intent):
        return self.provider.fulfill(intent)


client = InProcess(SimpleProvider("http://127.0.0.1:50064"))
services = asyncio.run(client.discover("sdv.simple.provider"))
assert services[0].schema_reference == "example.provider.v1"
```

```python
from sdvkit.detection import parse_detection_response

response = parse_detection_response(
    '{"objects": [{"object": "dog", "confidence": 0.9,'
    ' "parent": {"object": "animal", "confidence": 0.95}}]}'
)
assert [o.object for o in response] == ["dog", "animal"]
```

To drive the dog mode logic, pass the current and previous `DogModeState` and a
`Chariott` implementation to `run_dog_mode`, and call `on_dog_mode_timer`
periodically.

## What this package does not do

- It has no network transport: there is no client that connects to a runtime,
  no server that hosts a provider, and no registration or announcement loop.
  `FulfillingChariott.fulfill` must be supplied by you.
- It has no event streaming: `Event` is a plain record, and there is no way
  here to open a channel and listen for events.
- It does not call a detection service or run a detection model; it only
  parses detection results that you already have.
- It installs no command-line programs.