"""Litra command operations.

Every operation takes an opened `Device` and talks to it directly: there is no
cached device state, and each query is one write followed by one blocking read
on the same handle. Callers must not interleave operations on one device from
several threads.
"""

from __future__ import annotations

import logging
from numbers import Real

from litractl.core.capabilities import (
    get_allowed_temperatures_in_kelvin_for_device,
    get_maximum_brightness_in_lumen_for_device,
    get_maximum_temperature_in_kelvin_for_device,
    get_minimum_brightness_in_lumen_for_device,
    get_minimum_temperature_in_kelvin_for_device,
)
from litractl.core.errors import InvalidInputError, OutOfRangeError
from litractl.core.frame import (
    FEATURE_LIGHT,
    FEATURE_RGB_EFFECT,
    FEATURE_RGB_ZONE,
    decode_uint8,
    decode_uint16,
    encode_frame,
    integer_to_bytes,
)
from litractl.core.model import Device
from litractl.core.utils import percentage_within_range

OP_GET_POWER = 0x01
OP_SET_POWER = 0x1C
OP_GET_BRIGHTNESS = 0x31
OP_SET_BRIGHTNESS = 0x4C
OP_GET_TEMPERATURE = 0x81
OP_SET_TEMPERATURE = 0x9C

OP_RGB_EXTENDED_MODE = 0x5F
OP_RGB_MODE_SELECT = 0x4B
OP_RGB_CALIBRATE = 0x2E
OP_RGB_COLOR = 0x1F

POWER_OFF = 0x00
POWER_ON = 0x01

LOGGER = logging.getLogger(__name__)


def _write(device: Device, frame: bytes) -> None:
    LOGGER.debug("%s %s -> %s", device.type.value, device.serial_number, frame.hex())
    device.hid.write(frame)


def _query(device: Device, frame: bytes) -> bytes:
    _write(device, frame)
    response = bytes(device.hid.read_sync())
    LOGGER.debug("%s %s <- %s", device.type.value, device.serial_number, response.hex())
    return response


def _require_integer(value: object, quantity: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(f"Provided {quantity} must be an integer", value)
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidInputError(f"Provided {quantity} must be an integer", value)
        return int(value)
    return value


def turn_on(device: Device) -> None:
    _write(device, encode_frame(OP_SET_POWER, FEATURE_LIGHT, [POWER_ON]))


def turn_off(device: Device) -> None:
    _write(device, encode_frame(OP_SET_POWER, FEATURE_LIGHT, [POWER_OFF]))


def toggle(device: Device) -> None:
    if is_on(device):
        turn_off(device)
    else:
        turn_on(device)


def is_on(device: Device) -> bool:
    response = _query(device, encode_frame(OP_GET_POWER, FEATURE_LIGHT))
    return decode_uint8(response, 4) == POWER_ON


def set_temperature_in_kelvin(device: Device, temperature_in_kelvin: int) -> None:
    """Set the color temperature.

    Only multiples of 100 between the device's minimum and maximum are
    accepted; see `get_allowed_temperatures_in_kelvin_for_device`.
    """
    temperature = _require_integer(temperature_in_kelvin, "temperature")

    minimum = get_minimum_temperature_in_kelvin_for_device(device)
    maximum = get_maximum_temperature_in_kelvin_for_device(device)
    if temperature not in get_allowed_temperatures_in_kelvin_for_device(device):
        raise OutOfRangeError(
            f"Provided temperature must be a multiple of 100 between {minimum} and {maximum} for this device",
            temperature_in_kelvin,
            minimum,
            maximum,
        )

    _write(device, encode_frame(OP_SET_TEMPERATURE, FEATURE_LIGHT, integer_to_bytes(temperature)))


def get_temperature_in_kelvin(device: Device) -> int:
    response = _query(device, encode_frame(OP_GET_TEMPERATURE, FEATURE_LIGHT))
    return decode_uint16(response, 4)


def set_brightness_in_lumen(device: Device, brightness_in_lumen: int) -> None:
    brightness = _require_integer(brightness_in_lumen, "brightness")

    minimum = get_minimum_brightness_in_lumen_for_device(device)
    maximum = get_maximum_brightness_in_lumen_for_device(device)
    if brightness < minimum or brightness > maximum:
        raise OutOfRangeError(
            f"Provided brightness must be between {minimum} and {maximum} for this device",
            brightness_in_lumen,
            minimum,
            maximum,
        )

    _write(device, encode_frame(OP_SET_BRIGHTNESS, FEATURE_LIGHT, integer_to_bytes(brightness)))


def get_brightness_in_lumen(device: Device) -> int:
    # Brightness is reported in byte 5 alone.
    response = _query(device, encode_frame(OP_GET_BRIGHTNESS, FEATURE_LIGHT))
    return decode_uint8(response, 5)


def set_brightness_percentage(device: Device, brightness_percentage: float) -> None:
    """Set brightness as a percentage of the device's lumen range.

    0% maps to the device's minimum brightness; other values are scaled
    linearly and rounded to the nearest lumen.
    """
    if isinstance(brightness_percentage, bool) or not isinstance(brightness_percentage, Real):
        raise InvalidInputError("Percentage must be a number", brightness_percentage)
    if not 0 <= brightness_percentage <= 100:
        raise OutOfRangeError(
            "Percentage must be between 0 and 100", brightness_percentage, 0, 100
        )

    minimum = get_minimum_brightness_in_lumen_for_device(device)
    maximum = get_maximum_brightness_in_lumen_for_device(device)
    if brightness_percentage == 0:
        brightness = minimum
    else:
        brightness = percentage_within_range(brightness_percentage, minimum, maximum)
    set_brightness_in_lumen(device, brightness)


def set_rgb_color(device: Device, red: int, green: int, blue: int) -> None:
    """Set the back-panel color of a Litra Beam LX. All zeros turns it off.

    The color frame is written twice with a blocking read in between; the
    read result is unused.
    """
    color_frame = encode_frame(
        OP_RGB_COLOR,
        FEATURE_RGB_EFFECT,
        [0, 0, red, green, blue, 0, 0, 0, 0, 0, 0, 0, 1],
    )

    _write(device, encode_frame(OP_RGB_EXTENDED_MODE, FEATURE_RGB_EFFECT, [1, 1]))
    _write(device, encode_frame(OP_RGB_MODE_SELECT, FEATURE_RGB_ZONE, [1]))
    _write(device, encode_frame(OP_RGB_CALIBRATE, FEATURE_RGB_ZONE, [0, 100]))
    _query(device, color_frame)
    _write(device, color_frame)
