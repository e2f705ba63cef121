"""Core data models used across profiles, discovery, commands and CLI."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from litractl.transports.base import HIDHandle


class DeviceType(str, Enum):
    LITRA_GLOW = "litra_glow"
    LITRA_BEAM = "litra_beam"


@dataclass(frozen=True)
class DeviceProfile:
    device_type: DeviceType
    name: str
    minimum_brightness_in_lumen: int
    maximum_brightness_in_lumen: int
    allowed_temperatures_in_kelvin: tuple[int, ...]

    @property
    def minimum_temperature_in_kelvin(self) -> int:
        return self.allowed_temperatures_in_kelvin[0]

    @property
    def maximum_temperature_in_kelvin(self) -> int:
        return self.allowed_temperatures_in_kelvin[-1]


@dataclass(frozen=True)
class HIDDescriptor:
    vendor_id: int
    product_id: int
    usage_page: int
    path: bytes | str
    serial_number: str = ""


@dataclass(frozen=True)
class Device:
    """An opened Litra device: transport handle, resolved type and serial."""

    hid: HIDHandle
    type: DeviceType
    serial_number: str
