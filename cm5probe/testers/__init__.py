"""Peripheral testers for cm5probe.

This module provides:
- PeripheralTester: Base class every peripheral tester implements
- CPUTester / GPIOTester: Concrete testers
- TesterRegistry: Name-to-tester lookup and instantiation
- TesterRunner: Sequential execution and report collection
- ReportCollection: Report emission (JSON/YAML/text)

Quick Start:
    from cm5probe.testers import TesterRegistry, TesterRunner

    runner = TesterRunner(TesterRegistry().create_all())
    reports = runner.run_short()
    reports.emit_stdout()
"""

from cm5probe.testers.base import PeripheralTester
from cm5probe.testers.cpu import CPUTester
from cm5probe.testers.gpio import GPIOTester
from cm5probe.testers.registry import (
    TesterNotFoundError,
    TesterRegistry,
    TesterRegistryError,
)
from cm5probe.testers.results import OutputFormat, ReportCollection
from cm5probe.testers.runner import TesterRunner

__all__ = [
    # Testers
    "CPUTester",
    "GPIOTester",
    "PeripheralTester",
    # Registry
    "TesterNotFoundError",
    "TesterRegistry",
    "TesterRegistryError",
    # Results
    "OutputFormat",
    "ReportCollection",
    # Runner
    "TesterRunner",
]
