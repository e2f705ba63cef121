"""Matching HID descriptors to Litra devices and opening them."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from types import MappingProxyType

from litractl.core.errors import UnrecognizedDeviceError
from litractl.core.model import Device, DeviceType, HIDDescriptor
from litractl.transports.base import HIDTransport

VENDOR_ID = 0x046D
USAGE_PAGE = 0xFF43

DEVICE_TYPE_BY_PRODUCT_ID = MappingProxyType(
    {
        0xC900: DeviceType.LITRA_GLOW,
        0xC901: DeviceType.LITRA_BEAM,
        0xB901: DeviceType.LITRA_BEAM,
        0xC903: DeviceType.LITRA_BEAM,  # Beam LX
    }
)

LOGGER = logging.getLogger(__name__)


def is_litra_device(descriptor: HIDDescriptor) -> bool:
    return (
        descriptor.vendor_id == VENDOR_ID
        and descriptor.product_id in DEVICE_TYPE_BY_PRODUCT_ID
        and descriptor.usage_page == USAGE_PAGE
    )


def get_device_type_by_product_id(product_id: int) -> DeviceType:
    try:
        return DEVICE_TYPE_BY_PRODUCT_ID[product_id]
    except KeyError:
        raise UnrecognizedDeviceError(product_id) from None


def match_descriptors(descriptors: Iterable[HIDDescriptor]) -> list[HIDDescriptor]:
    return [descriptor for descriptor in descriptors if is_litra_device(descriptor)]


def open_device(descriptor: HIDDescriptor, transport: HIDTransport) -> Device:
    device_type = get_device_type_by_product_id(descriptor.product_id)
    handle = transport.open(descriptor.path)
    LOGGER.debug(
        "Opened %s (0x%04x) serial=%s at %r",
        device_type.value,
        descriptor.product_id,
        descriptor.serial_number,
        descriptor.path,
    )
    return Device(hid=handle, type=device_type, serial_number=descriptor.serial_number)


def _default_transport() -> HIDTransport:
    from litractl.transports.hidapi import HIDAPITransport

    return HIDAPITransport()


def find_devices(transport: HIDTransport | None = None) -> list[Device]:
    """Open every connected Litra device, in enumeration order.

    Returns an empty list when nothing matches. If opening any device fails,
    the devices already opened are closed before the error propagates.
    """
    transport = transport or _default_transport()
    matches = match_descriptors(transport.enumerate())
    LOGGER.debug("Found %d Litra interface(s)", len(matches))

    devices: list[Device] = []
    try:
        for descriptor in matches:
            devices.append(open_device(descriptor, transport))
    except Exception:
        for device in devices:
            device.hid.close()
        raise
    return devices


def find_device(transport: HIDTransport | None = None) -> Device | None:
    """Open the first connected Litra device, or return None if there is none."""
    transport = transport or _default_transport()
    for descriptor in transport.enumerate():
        if is_litra_device(descriptor):
            return open_device(descriptor, transport)
    LOGGER.debug("No Litra device found")
    return None
