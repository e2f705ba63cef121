"""Control Logitech Litra desk lights over USB HID."""

__version__ = "0.1.0"
