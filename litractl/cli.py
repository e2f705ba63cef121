"""Typer CLI entrypoint."""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import ExitStack

import typer

from litractl.api import Client
from litractl.core.capabilities import get_name_for_device
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
from litractl.core.errors import LitraError
from litractl.core.model import Device

app = typer.Typer(help="Control Logitech Litra lights over USB HID")

SerialOption = typer.Option(None, "--serial-number", "-s", help="Serial number of the target device")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log HID frames to stderr"),
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


def _with_device(serial_number: str | None, action: Callable[[Device], None]) -> None:
    try:
        device = Client().find_device(serial_number)
        if device is None:
            if serial_number:
                typer.echo(f"Error: No Litra device found with serial number '{serial_number}'", err=True)
            else:
                typer.echo("Error: No Litra device found", err=True)
            raise typer.Exit(code=1)
        try:
            action(device)
        finally:
            device.hid.close()
    except LitraError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("devices")
def list_devices() -> None:
    """List connected Litra devices and their current state."""
    try:
        devices = Client().find_devices()
        if not devices:
            typer.echo("No Litra devices found")
            return

        with ExitStack() as stack:
            for device in devices:
                stack.callback(device.hid.close)
            for device in devices:
                state = "on" if is_on(device) else "off"
                typer.echo(f"{get_name_for_device(device)} ({device.serial_number}): {state}")
                typer.echo(f"  brightness: {get_brightness_in_lumen(device)} lm")
                typer.echo(f"  temperature: {get_temperature_in_kelvin(device)} K")
    except LitraError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("on")
def on(serial_number: str | None = SerialOption) -> None:
    """Turn the light on."""
    _with_device(serial_number, turn_on)


@app.command("off")
def off(serial_number: str | None = SerialOption) -> None:
    """Turn the light off."""
    _with_device(serial_number, turn_off)


@app.command("toggle")
def toggle_power(serial_number: str | None = SerialOption) -> None:
    """Turn the light off if it is on, otherwise on."""
    _with_device(serial_number, toggle)


@app.command("brightness")
def brightness(
    percentage: float = typer.Argument(..., help="Brightness as a percentage (0-100)"),
    serial_number: str | None = SerialOption,
) -> None:
    """Set brightness as a percentage of the device's range."""
    _with_device(serial_number, lambda device: set_brightness_percentage(device, percentage))


@app.command("brightness-lm")
def brightness_lm(
    lumen: int = typer.Argument(..., help="Brightness in lumen"),
    serial_number: str | None = SerialOption,
) -> None:
    """Set brightness in lumen."""
    _with_device(serial_number, lambda device: set_brightness_in_lumen(device, lumen))


@app.command("temperature")
def temperature(
    kelvin: int = typer.Argument(..., help="Color temperature in Kelvin (multiple of 100)"),
    serial_number: str | None = SerialOption,
) -> None:
    """Set color temperature in Kelvin."""
    _with_device(serial_number, lambda device: set_temperature_in_kelvin(device, kelvin))


@app.command("color")
def color(
    red: int = typer.Argument(..., min=0, max=255),
    green: int = typer.Argument(..., min=0, max=255),
    blue: int = typer.Argument(..., min=0, max=255),
    serial_number: str | None = SerialOption,
) -> None:
    """Set the back-panel color of a Litra Beam LX."""
    _with_device(serial_number, lambda device: set_rgb_color(device, red, green, blue))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
