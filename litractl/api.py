"""Public litractl surface: models, errors, device operations and `Client`.

Scripts and other front ends should import from here; the layout of
`litractl.core` and `litractl.transports` may change between releases.
"""

from __future__ import annotations

from litractl.core.capabilities import (
    get_allowed_temperatures_in_kelvin_for_device,
    get_maximum_brightness_in_lumen_for_device,
    get_maximum_temperature_in_kelvin_for_device,
    get_minimum_brightness_in_lumen_for_device,
    get_minimum_temperature_in_kelvin_for_device,
    get_name_for_device,
    get_profile,
)
from litractl.core.commands import (
    get_brightness_in_lumen,
    get_temperature_in_kelvin,
    is_on,
    set_brightness_in_lumen,
    set_brightness_percentage,
    set_rgb_color,
    set_temperature_in_kelvin,
    toggle,
    turn_off,
    turn_on,
)
from litractl.core.device_match import find_device, find_devices
from litractl.core.errors import (
    ErrorKind,
    InvalidInputError,
    LitraError,
    MalformedResponseError,
    OutOfRangeError,
    ProfileLoadError,
    ProfileValidationError,
    TransportError,
    TransportOpenError,
    TransportReadError,
    TransportWriteError,
    UnrecognizedDeviceError,
)
from litractl.core.model import Device, DeviceProfile, DeviceType, HIDDescriptor
from litractl.transports.base import HIDHandle, HIDTransport

__all__ = [
    "ErrorKind",
    "LitraError",
    "InvalidInputError",
    "OutOfRangeError",
    "MalformedResponseError",
    "UnrecognizedDeviceError",
    "ProfileLoadError",
    "ProfileValidationError",
    "TransportError",
    "TransportOpenError",
    "TransportReadError",
    "TransportWriteError",
    "Device",
    "DeviceProfile",
    "DeviceType",
    "HIDDescriptor",
    "HIDHandle",
    "HIDTransport",
    "Client",
    "find_device",
    "find_devices",
    "get_profile",
    "get_name_for_device",
    "get_minimum_brightness_in_lumen_for_device",
    "get_maximum_brightness_in_lumen_for_device",
    "get_minimum_temperature_in_kelvin_for_device",
    "get_maximum_temperature_in_kelvin_for_device",
    "get_allowed_temperatures_in_kelvin_for_device",
    "turn_on",
    "turn_off",
    "toggle",
    "is_on",
    "set_temperature_in_kelvin",
    "get_temperature_in_kelvin",
    "set_brightness_in_lumen",
    "get_brightness_in_lumen",
    "set_brightness_percentage",
    "set_rgb_color",
]


class Client:
    """Public client for discovering Litra devices.

    A `Client` binds discovery to one transport, the hidapi one unless another
    is injected (tests, alternative HID backends).
    """

    def __init__(self, *, transport: HIDTransport | None = None) -> None:
        if transport is None:
            from litractl.transports.hidapi import HIDAPITransport

            transport = HIDAPITransport()
        self._transport = transport

    def find_devices(self) -> list[Device]:
        return find_devices(self._transport)

    def find_device(self, serial_number: str | None = None) -> Device | None:
        """First connected device, or the one with `serial_number`; None if absent.

        Devices opened but not returned are closed again.
        """
        if serial_number is None:
            return find_device(self._transport)

        selected: Device | None = None
        for device in self.find_devices():
            if selected is None and device.serial_number == serial_number:
                selected = device
            else:
                device.hid.close()
        return selected
