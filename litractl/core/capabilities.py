"""Per-device capability lookups backed by the packaged profiles."""

from __future__ import annotations

from litractl.core.model import Device, DeviceProfile, DeviceType
from litractl.core.profile_loader import load_profiles


def get_profile(device_type: DeviceType) -> DeviceProfile:
    return load_profiles()[device_type]


def get_minimum_brightness_in_lumen_for_device(device: Device) -> int:
    return get_profile(device.type).minimum_brightness_in_lumen


def get_maximum_brightness_in_lumen_for_device(device: Device) -> int:
    return get_profile(device.type).maximum_brightness_in_lumen


def get_minimum_temperature_in_kelvin_for_device(device: Device) -> int:
    return get_profile(device.type).minimum_temperature_in_kelvin


def get_maximum_temperature_in_kelvin_for_device(device: Device) -> int:
    return get_profile(device.type).maximum_temperature_in_kelvin


def get_allowed_temperatures_in_kelvin_for_device(device: Device) -> tuple[int, ...]:
    return get_profile(device.type).allowed_temperatures_in_kelvin


def get_name_for_device(device: Device) -> str:
    """Human readable name, e.g. "Logitech Litra Glow"."""
    return get_profile(device.type).name
