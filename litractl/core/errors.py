"""Domain-specific errors for litractl."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    UNRECOGNIZED_DEVICE = "unrecognized_device"
    INVALID_INPUT = "invalid_input"
    OUT_OF_RANGE = "out_of_range"
    MALFORMED_RESPONSE = "malformed_response"
    PROFILE = "profile"
    TRANSPORT = "transport"


class LitraError(Exception):
    """Base error for litractl."""

    kind: ErrorKind


class UnrecognizedDeviceError(LitraError):
    """Raised when a product ID is not a known Litra device."""

    kind = ErrorKind.UNRECOGNIZED_DEVICE

    def __init__(self, product_id: int) -> None:
        super().__init__(f"Unrecognized device with product ID 0x{product_id:04x}")
        self.product_id = product_id


class InvalidInputError(LitraError, ValueError):
    """Raised when a setter receives a value of the wrong type."""

    kind = ErrorKind.INVALID_INPUT

    def __init__(self, message: str, value: object) -> None:
        super().__init__(message)
        self.value = value


class OutOfRangeError(InvalidInputError):
    """Raised when a setter receives a value outside the device's bounds."""

    kind = ErrorKind.OUT_OF_RANGE

    def __init__(self, message: str, value: object, minimum: int, maximum: int) -> None:
        super().__init__(message, value)
        self.minimum = minimum
        self.maximum = maximum


class MalformedResponseError(LitraError):
    """Raised when a response frame is too short to hold the requested field."""

    kind = ErrorKind.MALFORMED_RESPONSE

    def __init__(self, frame: bytes, expected_length: int) -> None:
        super().__init__(
            f"Response frame has {len(frame)} bytes, expected at least {expected_length}"
        )
        self.frame = frame
        self.expected_length = expected_length


class ProfileLoadError(LitraError):
    """Raised when reading packaged device profiles fails."""

    kind = ErrorKind.PROFILE


class ProfileValidationError(LitraError):
    """Raised when a device profile does not conform to schema or semantics."""

    kind = ErrorKind.PROFILE


class TransportError(LitraError):
    """Base transport error."""

    kind = ErrorKind.TRANSPORT


class TransportOpenError(TransportError):
    """Raised when a HID path cannot be opened."""


class TransportWriteError(TransportError):
    """Raised when writing a frame fails."""


class TransportReadError(TransportError):
    """Raised when reading a response frame fails."""
