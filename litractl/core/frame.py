"""Litra HID frame encoding and response decoding."""

from __future__ import annotations

from collections.abc import Sequence

from litractl.core.errors import MalformedResponseError

FRAME_LENGTH = 20
REPORT_ID = 0x11
HEADER_MARKER = 0xFF
HEADER_LENGTH = 4

FEATURE_LIGHT = 0x06
FEATURE_RGB_ZONE = 0x0A
FEATURE_RGB_EFFECT = 0x0B

MAX_UINT16 = 0xFFFF


def encode_frame(opcode: int, feature_group: int, params: Sequence[int] = ()) -> bytes:
    """Build a 20-byte output report: report id, 0xff, group, opcode, params, zero padding."""
    if HEADER_LENGTH + len(params) > FRAME_LENGTH:
        raise ValueError(
            f"{len(params)} parameter bytes do not fit in a {FRAME_LENGTH}-byte frame"
        )
    frame = bytes([REPORT_ID, HEADER_MARKER, feature_group, opcode, *params])
    return frame.ljust(FRAME_LENGTH, b"\x00")


def integer_to_bytes(value: int) -> tuple[int, int]:
    """Split `value` into its big-endian (high, low) byte pair."""
    if not 0 <= value <= MAX_UINT16:
        raise ValueError(f"{value} does not fit in two bytes")
    return value // 256, value % 256


def bytes_to_integer(high: int, low: int) -> int:
    return high * 256 + low


def _require_length(frame: bytes, length: int) -> None:
    if len(frame) < length:
        raise MalformedResponseError(frame, length)


def decode_uint8(frame: bytes, offset: int) -> int:
    _require_length(frame, offset + 1)
    return frame[offset]


def decode_uint16(frame: bytes, offset: int) -> int:
    _require_length(frame, offset + 2)
    return bytes_to_integer(frame[offset], frame[offset + 1])
