from __future__ import annotations

import pytest

from litractl.core import commands
from litractl.core.capabilities import (
    get_allowed_temperatures_in_kelvin_for_device,
    get_maximum_brightness_in_lumen_for_device,
    get_maximum_temperature_in_kelvin_for_device,
    get_minimum_brightness_in_lumen_for_device,
    get_minimum_temperature_in_kelvin_for_device,
    get_name_for_device,
)
from litractl.core.errors import (
    ErrorKind,
    InvalidInputError,
    MalformedResponseError,
    OutOfRangeError,
    TransportReadError,
)
from litractl.core.model import Device, DeviceType


class FakeHandle:
    def __init__(self, responses: list[bytes] | None = None) -> None:
        self.responses = list(responses or [])
        self.calls: list[tuple[str, bytes | None]] = []

    def write(self, frame: bytes) -> int:
        self.calls.append(("write", bytes(frame)))
        return len(frame)

    def read_sync(self) -> bytes:
        self.calls.append(("read", None))
        return self.responses.pop(0) if self.responses else bytes(20)

    def close(self) -> None:
        pass

    @property
    def writes(self) -> list[bytes]:
        return [frame for kind, frame in self.calls if kind == "write" and frame is not None]


def _frame(*prefix: int) -> bytes:
    return bytes(prefix).ljust(20, b"\x00")


def _device(device_type: DeviceType = DeviceType.LITRA_GLOW, responses: list[bytes] | None = None) -> Device:
    return Device(hid=FakeHandle(responses), type=device_type, serial_number="ABC123")


def _handle(device: Device) -> FakeHandle:
    assert isinstance(device.hid, FakeHandle)
    return device.hid


def _written_lumen(device: Device) -> int:
    frame = _handle(device).writes[-1]
    assert frame[:4] == bytes([0x11, 0xFF, 0x06, 0x4C])
    return frame[4] * 256 + frame[5]


def test_turn_on_frame() -> None:
    device = _device()
    commands.turn_on(device)
    assert _handle(device).calls == [("write", _frame(0x11, 0xFF, 0x06, 0x1C, 0x01))]


def test_turn_off_frame() -> None:
    device = _device()
    commands.turn_off(device)
    assert _handle(device).calls == [("write", _frame(0x11, 0xFF, 0x06, 0x1C, 0x00))]


def test_is_on_reads_byte_four() -> None:
    device = _device(responses=[_frame(0x11, 0xFF, 0x06, 0x01, 0x01), _frame(0x11, 0xFF, 0x06, 0x01, 0x00)])
    assert commands.is_on(device) is True
    assert commands.is_on(device) is False
    assert _handle(device).calls[:2] == [("write", _frame(0x11, 0xFF, 0x06, 0x01)), ("read", None)]


@pytest.mark.parametrize("power_byte, expected_param", [(0x01, 0x00), (0x00, 0x01)])
def test_toggle_issues_one_query_and_one_power_write(power_byte: int, expected_param: int) -> None:
    device = _device(responses=[_frame(0x11, 0xFF, 0x06, 0x01, power_byte)])
    commands.toggle(device)
    assert _handle(device).calls == [
        ("write", _frame(0x11, 0xFF, 0x06, 0x01)),
        ("read", None),
        ("write", _frame(0x11, 0xFF, 0x06, 0x1C, expected_param)),
    ]


def test_set_temperature_frame() -> None:
    device = _device()
    commands.set_temperature_in_kelvin(device, 2700)
    assert _handle(device).writes == [_frame(0x11, 0xFF, 0x06, 0x9C, 0x0A, 0x8C)]


def test_set_temperature_accepts_integral_float() -> None:
    device = _device()
    commands.set_temperature_in_kelvin(device, 6500.0)
    assert _handle(device).writes == [_frame(0x11, 0xFF, 0x06, 0x9C, 0x19, 0x64)]


@pytest.mark.parametrize("kelvin", [2750, 2600, 6600])
def test_set_temperature_out_of_range(kelvin: int) -> None:
    device = _device(DeviceType.LITRA_BEAM)
    with pytest.raises(OutOfRangeError) as exc:
        commands.set_temperature_in_kelvin(device, kelvin)
    assert exc.value.kind is ErrorKind.OUT_OF_RANGE
    assert exc.value.value == kelvin
    assert (exc.value.minimum, exc.value.maximum) == (2700, 6500)
    assert "between 2700 and 6500" in str(exc.value)
    assert _handle(device).calls == []


@pytest.mark.parametrize("kelvin", [2700.5, "2700", None, True])
def test_set_temperature_rejects_non_integers(kelvin: object) -> None:
    device = _device()
    with pytest.raises(InvalidInputError) as exc:
        commands.set_temperature_in_kelvin(device, kelvin)  # type: ignore[arg-type]
    assert not isinstance(exc.value, OutOfRangeError)
    assert _handle(device).calls == []


def test_get_temperature_decodes_two_bytes() -> None:
    device = _device(responses=[_frame(0x11, 0xFF, 0x06, 0x81, 0x13, 0x88)])
    assert commands.get_temperature_in_kelvin(device) == 5000
    assert _handle(device).calls[0] == ("write", _frame(0x11, 0xFF, 0x06, 0x81))


def test_set_brightness_frame() -> None:
    device = _device(DeviceType.LITRA_BEAM)
    commands.set_brightness_in_lumen(device, 400)
    assert _handle(device).writes == [_frame(0x11, 0xFF, 0x06, 0x4C, 0x01, 0x90)]


@pytest.mark.parametrize("device_type", list(DeviceType))
def test_set_brightness_accepts_bounds(device_type: DeviceType) -> None:
    device = _device(device_type)
    minimum = get_minimum_brightness_in_lumen_for_device(device)
    maximum = get_maximum_brightness_in_lumen_for_device(device)

    commands.set_brightness_in_lumen(device, minimum)
    assert _written_lumen(device) == minimum
    commands.set_brightness_in_lumen(device, maximum)
    assert _written_lumen(device) == maximum


@pytest.mark.parametrize("device_type", list(DeviceType))
def test_set_brightness_rejects_outside_bounds(device_type: DeviceType) -> None:
    device = _device(device_type)
    minimum = get_minimum_brightness_in_lumen_for_device(device)
    maximum = get_maximum_brightness_in_lumen_for_device(device)

    for lumen in (-1, minimum - 1, maximum + 1):
        with pytest.raises(OutOfRangeError) as exc:
            commands.set_brightness_in_lumen(device, lumen)
        assert (exc.value.minimum, exc.value.maximum) == (minimum, maximum)
    assert _handle(device).calls == []


def test_set_brightness_rejects_non_integer() -> None:
    device = _device()
    with pytest.raises(InvalidInputError):
        commands.set_brightness_in_lumen(device, 50.5)  # type: ignore[arg-type]
    assert _handle(device).calls == []


def test_get_brightness_reads_byte_five() -> None:
    device = _device(responses=[_frame(0x11, 0xFF, 0x06, 0x31, 0x00, 0x64)])
    assert commands.get_brightness_in_lumen(device) == 100
    assert _handle(device).calls[0] == ("write", _frame(0x11, 0xFF, 0x06, 0x31))


def test_short_response_raises() -> None:
    device = _device(responses=[bytes([0x11, 0xFF, 0x06, 0x31, 0x00])])
    with pytest.raises(MalformedResponseError):
        commands.get_brightness_in_lumen(device)


@pytest.mark.parametrize("device_type", list(DeviceType))
def test_brightness_percentage_stays_within_bounds(device_type: DeviceType) -> None:
    device = _device(device_type)
    minimum = get_minimum_brightness_in_lumen_for_device(device)
    maximum = get_maximum_brightness_in_lumen_for_device(device)

    for percentage in range(101):
        commands.set_brightness_percentage(device, percentage)
        assert minimum <= _written_lumen(device) <= maximum

    commands.set_brightness_percentage(device, 0)
    assert _written_lumen(device) == minimum
    commands.set_brightness_percentage(device, 100)
    assert _written_lumen(device) == maximum


def test_brightness_percentage_rounds_half_up() -> None:
    device = _device(DeviceType.LITRA_GLOW)
    commands.set_brightness_percentage(device, 5)
    assert _written_lumen(device) == 32
    commands.set_brightness_percentage(device, 50)
    assert _written_lumen(device) == 135


@pytest.mark.parametrize("percentage", [-1, 100.5, 101])
def test_brightness_percentage_out_of_range(percentage: float) -> None:
    device = _device()
    with pytest.raises(OutOfRangeError) as exc:
        commands.set_brightness_percentage(device, percentage)
    assert (exc.value.minimum, exc.value.maximum) == (0, 100)
    assert _handle(device).calls == []


def test_brightness_percentage_rejects_non_numbers() -> None:
    device = _device()
    with pytest.raises(InvalidInputError):
        commands.set_brightness_percentage(device, "50")  # type: ignore[arg-type]


def test_set_rgb_color_handshake() -> None:
    device = _device(DeviceType.LITRA_BEAM)
    commands.set_rgb_color(device, 0x12, 0x34, 0x56)

    color = _frame(0x11, 0xFF, 0x0B, 0x1F, 0, 0, 0x12, 0x34, 0x56, 0, 0, 0, 0, 0, 0, 0, 1)
    assert _handle(device).calls == [
        ("write", _frame(0x11, 0xFF, 0x0B, 0x5F, 1, 1)),
        ("write", _frame(0x11, 0xFF, 0x0A, 0x4B, 1)),
        ("write", _frame(0x11, 0xFF, 0x0A, 0x2E, 0, 100)),
        ("write", color),
        ("read", None),
        ("write", color),
    ]


def test_set_rgb_color_bad_channel_writes_nothing() -> None:
    device = _device(DeviceType.LITRA_BEAM)
    with pytest.raises(ValueError):
        commands.set_rgb_color(device, 300, 0, 0)
    assert _handle(device).calls == []


@pytest.mark.parametrize(
    "device_type, name, minimum, maximum",
    [
        (DeviceType.LITRA_GLOW, "Logitech Litra Glow", 20, 250),
        (DeviceType.LITRA_BEAM, "Logitech Litra Beam", 30, 400),
    ],
)
def test_capability_getters(device_type: DeviceType, name: str, minimum: int, maximum: int) -> None:
    device = _device(device_type)
    assert get_name_for_device(device) == name
    assert get_minimum_brightness_in_lumen_for_device(device) == minimum
    assert get_maximum_brightness_in_lumen_for_device(device) == maximum
    assert get_minimum_temperature_in_kelvin_for_device(device) == 2700
    assert get_maximum_temperature_in_kelvin_for_device(device) == 6500
    assert len(get_allowed_temperatures_in_kelvin_for_device(device)) == 39


class UnreadableHandle(FakeHandle):
    def read_sync(self) -> bytes:
        self.calls.append(("read", None))
        raise TransportReadError("HID read from b'/dev/hidraw3' failed: read error")


def test_transport_read_error_propagates_from_query() -> None:
    device = Device(hid=UnreadableHandle(), type=DeviceType.LITRA_GLOW, serial_number="ABC123")
    with pytest.raises(TransportReadError):
        commands.get_temperature_in_kelvin(device)


def test_toggle_writes_no_power_frame_when_query_fails() -> None:
    handle = UnreadableHandle()
    device = Device(hid=handle, type=DeviceType.LITRA_GLOW, serial_number="ABC123")
    with pytest.raises(TransportReadError):
        commands.toggle(device)
    assert handle.calls == [("write", _frame(0x11, 0xFF, 0x06, 0x01)), ("read", None)]
