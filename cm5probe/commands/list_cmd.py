"""List command - shows which peripherals can be tested on this system."""

import click

from cm5probe.commands.run_cmd import build_registry
from cm5probe.models.constants import PinMode
from cm5probe.testers import GPIOTester


def run_list(verbose: bool = False) -> None:
    """Print availability of every registered peripheral.

    Args:
        verbose: Also print the GPIO header pin catalog.
    """
    registry = build_registry()

    click.echo("Available Peripherals:")
    click.echo("=" * 21)
    for name, available in registry.availability().items():
        click.echo(f"  {name:<10} {'Available' if available else 'Not Available'}")

    if not verbose:
        return

    gpio = registry.create("gpio")
    if not isinstance(gpio, GPIOTester):
        return

    click.echo("\nGPIO header catalog:")
    for mode in PinMode:
        pins = gpio.pins_by_mode(mode)
        if pins:
            numbers = ", ".join(str(pin.number) for pin in pins)
            click.echo(f"  {mode.value.upper():<7} {numbers}")
