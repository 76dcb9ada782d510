"""Short and monitor commands - run peripheral testers via the registry.

CLI Examples:
    cm5probe short                        # Short tests for all peripherals
    cm5probe short cpu                    # Short CPU test only
    cm5probe monitor 60                   # Monitor all peripherals for 60s
    cm5probe monitor 30 gpio              # Monitor GPIO for 30s
    cm5probe short -o results.json        # Save to JSON
    cm5probe short -o a.json -o b.yaml    # Multiple outputs
"""

import sys
from pathlib import Path

import click

from cm5probe.models.constants import DEFAULT_ROOT, GPIO_EXPORT_SETTLE_SECONDS
from cm5probe.testers import (
    OutputFormat,
    PeripheralTester,
    ReportCollection,
    TesterNotFoundError,
    TesterRegistry,
    TesterRunner,
)
from cm5probe.utils.env import (
    ENV_GPIO_SETTLE_SECONDS,
    ENV_ROOT,
    EnvVarTypeError,
    get_env,
)


def build_registry() -> TesterRegistry:
    """Create the tester registry from environment configuration."""
    root = get_env(ENV_ROOT, default=DEFAULT_ROOT, log=True)
    try:
        settle = get_env(
            ENV_GPIO_SETTLE_SECONDS,
            default=GPIO_EXPORT_SETTLE_SECONDS,
            as_type=float,
            log=True,
        )
    except EnvVarTypeError as e:
        raise click.ClickException(str(e)) from e
    return TesterRegistry(
        root=root,
        tester_options={"gpio": {"settle_seconds": settle}},
    )


def select_testers(
    registry: TesterRegistry, peripherals: tuple[str, ...]
) -> list[PeripheralTester]:
    """Instantiate the requested testers, or all of them.

    A peripheral named explicitly must be available; when none is named,
    unavailable testers are left in and the runner skips them.
    """
    try:
        testers = registry.create_all(list(peripherals) or None)
    except TesterNotFoundError as e:
        raise click.ClickException(str(e)) from e

    if peripherals:
        for tester in testers:
            if not tester.is_available():
                click.echo(
                    f"{tester.get_peripheral_name()} peripheral is not available "
                    "on this system.",
                    err=True,
                )
                sys.exit(1)
    return testers


def get_output_format(output: str | None, fmt: str | None) -> OutputFormat:
    """Determine output format from filename or explicit format."""
    if fmt:
        return OutputFormat(fmt.lower())

    if output:
        suffix = Path(output).suffix.lower()
        if suffix == ".json":
            return OutputFormat.JSON
        elif suffix in (".yaml", ".yml"):
            return OutputFormat.YAML

    return OutputFormat.TEXT


def emit_reports(
    reports: ReportCollection, outputs: tuple[str, ...], fmt: str | None
) -> None:
    """Print reports to stdout and write each requested output file."""
    reports.emit_stdout()
    for output in outputs:
        reports.emit(output, get_output_format(output, fmt))
        click.echo(f"Results written to {output}")


def run_tests(
    mode: str,
    peripherals: tuple[str, ...],
    duration: int,
    outputs: tuple[str, ...],
    fmt: str | None,
) -> None:
    """Run short or monitor tests and exit non-zero if any failed.

    Args:
        mode: "short" or "monitor".
        peripherals: Peripheral names; empty means all registered.
        duration: Monitor duration in seconds (ignored for short tests).
        outputs: Files to write results to.
        fmt: Explicit output format overriding the file suffix.
    """
    runner = TesterRunner(select_testers(build_registry(), peripherals))

    if mode == "monitor":
        click.echo(f"Running monitoring tests ({duration} seconds)...\n")
        reports = runner.run_monitor(duration)
    else:
        click.echo("Running short tests...\n")
        reports = runner.run_short()

    emit_reports(reports, outputs, fmt)

    failed = len(reports.failed)
    if failed:
        click.echo(f"{failed} test(s) failed.")
        sys.exit(1)
    click.echo("All tests passed!")
