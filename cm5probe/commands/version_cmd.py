"""
Version command - displays cm5probe version information
"""

import click

from cm5probe.version.cm5probe_version import CM5PROBE_VERSION


def run_version(verbose: bool = False) -> None:
    """
    Display cm5probe version information.

    Args:
        verbose: If True, show additional details like full hash and date
    """
    if verbose:
        click.echo(f"cm5probe version {CM5PROBE_VERSION.full_version()}")
        click.echo("\nDetailed version information:")
        click.echo(f"  Semantic Version: {CM5PROBE_VERSION}")
        click.echo(f"  Release Date:     {CM5PROBE_VERSION.date_string()}")
        click.echo(f"  Package Hash:     {CM5PROBE_VERSION.hash}")
    else:
        click.echo(f"cm5probe {CM5PROBE_VERSION}")
