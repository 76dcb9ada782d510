#!/usr/bin/env python3
"""cm5probe CLI - Command-line interface for peripheral verification."""

import click

from cm5probe.utils.env import ENV_LOG_LEVEL, get_env
from cm5probe.utils.logger import Logger

_OUTPUT_OPTIONS = [
    click.option(
        "--output",
        "-o",
        "outputs",
        multiple=True,
        type=click.Path(),
        help="Write results to file (repeatable; format from suffix)",
    ),
    click.option(
        "--format",
        "fmt",
        type=click.Choice(["json", "yaml", "text"], case_sensitive=False),
        default=None,
        help="Output file format (overrides file suffix)",
    ),
    click.option("--verbose", "-v", is_flag=True, help="Enable debug logging"),
]


def output_options(func):
    """Attach the shared --output/--format/--verbose options."""
    for option in reversed(_OUTPUT_OPTIONS):
        func = option(func)
    return func


@click.group()
def cm5probe():
    """Hardware peripheral verification for compute modules."""
    # Configure logger at startup if not already configured
    if not Logger.is_configured():
        Logger.configure(level=get_env(ENV_LOG_LEVEL, default="INFO"), timestamps=True)


@cm5probe.command(name="list")
@click.option("--verbose", "-v", is_flag=True, help="Show the GPIO pin catalog")
def list_peripherals(verbose):
    """List peripherals and whether they are available."""
    from cm5probe.commands.list_cmd import run_list

    run_list(verbose=verbose)


@cm5probe.command()
@click.argument("peripherals", nargs=-1)
@output_options
def short(peripherals, outputs, fmt, verbose):
    r"""Run short tests for PERIPHERALS (default: all).

    \b
    Examples:
      cm5probe short
      cm5probe short cpu gpio
      cm5probe short -o results.json
    """
    from cm5probe.commands.run_cmd import run_tests

    if verbose:
        Logger.set_level("DEBUG")

    run_tests("short", peripherals, 0, outputs, fmt)


@cm5probe.command()
@click.argument("seconds", type=click.IntRange(min=1))
@click.argument("peripherals", nargs=-1)
@output_options
def monitor(seconds, peripherals, outputs, fmt, verbose):
    r"""Run monitoring tests for SECONDS on PERIPHERALS (default: all).

    \b
    Examples:
      cm5probe monitor 60
      cm5probe monitor 30 gpio -o gpio.yaml
    """
    from cm5probe.commands.run_cmd import run_tests

    if verbose:
        Logger.set_level("DEBUG")

    run_tests("monitor", peripherals, seconds, outputs, fmt)


@cm5probe.command()
@click.option("--verbose", "-v", is_flag=True, help="Show detailed version information")
def version(verbose):
    """Display cm5probe version information."""
    from cm5probe.commands.version_cmd import run_version

    run_version(verbose=verbose)


if __name__ == "__main__":
    cm5probe()
