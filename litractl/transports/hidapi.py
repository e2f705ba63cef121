"""HID transport implementation using the hidapi bindings."""

from __future__ import annotations

import logging
from typing import Any

from litractl.core.errors import (
    TransportError,
    TransportOpenError,
    TransportReadError,
    TransportWriteError,
)
from litractl.core.frame import FRAME_LENGTH
from litractl.core.model import HIDDescriptor

LOGGER = logging.getLogger(__name__)


def _import_hid() -> Any:
    try:
        import hid  # type: ignore
    except ImportError as exc:  # pragma: no cover - import failure path
        raise TransportError(
            "HID transport requires 'hidapi'. Install dependency and retry."
        ) from exc
    return hid


class HIDAPIHandle:
    def __init__(self, device: Any, path: bytes | str) -> None:
        self._device = device
        self._path = path

    def write(self, frame: bytes) -> int:
        try:
            written = self._device.write(bytes(frame))
        except (OSError, ValueError) as exc:
            raise TransportWriteError(f"HID write to {self._path!r} failed: {exc}") from exc
        if written < 0:
            raise TransportWriteError(f"HID write to {self._path!r} failed: {self._device.error()}")
        return written

    def read_sync(self) -> bytes:
        # timeout_ms=0 selects hid_read, which blocks until a report arrives
        try:
            data = self._device.read(FRAME_LENGTH)
        except (OSError, ValueError) as exc:
            raise TransportReadError(f"HID read from {self._path!r} failed: {exc}") from exc
        return bytes(data)

    def close(self) -> None:
        self._device.close()


class HIDAPITransport:
    def enumerate(self) -> list[HIDDescriptor]:
        hid = _import_hid()
        descriptors = [
            HIDDescriptor(
                vendor_id=info["vendor_id"],
                product_id=info["product_id"],
                usage_page=info.get("usage_page", 0),
                path=info["path"],
                serial_number=info.get("serial_number") or "",
            )
            for info in hid.enumerate()
        ]
        LOGGER.debug("hidapi enumerated %d interface(s)", len(descriptors))
        return descriptors

    def open(self, path: bytes | str) -> HIDAPIHandle:
        hid = _import_hid()
        device = hid.device()
        raw_path = path.encode() if isinstance(path, str) else path
        try:
            device.open_path(raw_path)
        except OSError as exc:
            raise TransportOpenError(
                f"Cannot open HID device {path!r}: {exc}. "
                "On Linux, check udev permissions for the hidraw node."
            ) from exc
        return HIDAPIHandle(device, path)
