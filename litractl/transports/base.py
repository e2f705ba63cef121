"""Transport interfaces."""

from __future__ import annotations

from typing import Protocol

from litractl.core.model import HIDDescriptor


class HIDHandle(Protocol):
    def write(self, frame: bytes) -> int:
        """Write one fixed-size frame and return the number of bytes written."""

    def read_sync(self) -> bytes:
        """Block until the next response frame arrives and return it."""

    def close(self) -> None:
        """Release the underlying handle."""


class HIDTransport(Protocol):
    def enumerate(self) -> list[HIDDescriptor]:
        """Describe every connected HID interface."""

    def open(self, path: bytes | str) -> HIDHandle:
        """Open the interface at `path`."""
