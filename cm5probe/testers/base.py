"""Base class for peripheral testers."""

import logging
import time
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path

from cm5probe.models.constants import DEFAULT_ROOT, TestResult
from cm5probe.models.report_models import TestReport
from cm5probe.utils.logger import Logger


class PeripheralTester(ABC):
    """Abstract base class for all peripheral testers.

    Every tester answers the same four questions: what it is called, whether
    its hardware is present, whether a quick pass over the hardware succeeds
    (short test), and whether the hardware stays stable over time (monitor
    test). Orchestrators hold a list of testers and only ever talk to them
    through this interface.

    Example:
        >>> for tester in (CPUTester(), GPIOTester()):
        ...     if tester.is_available():
        ...         report = tester.short_test()
        ...         print(report.peripheral_name, report.result)
    """

    def __init__(self, root: str | Path = DEFAULT_ROOT) -> None:
        """Initialize the tester.

        Args:
            root: Filesystem root that all probed paths are resolved under.
        """
        self.root = Path(root)

    # -------------------------------------------------------------------------
    # Contract
    # -------------------------------------------------------------------------

    @abstractmethod
    def get_peripheral_name(self) -> str:
        """
        Get the peripheral identifier.

        Returns:
            Constant name such as "CPU" or "GPIO"
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if the peripheral's kernel interface exists.

        Must only look at the filesystem; never exports or configures
        hardware.

        Returns:
            True if the peripheral can be tested on this system
        """
        pass

    @abstractmethod
    def short_test(self) -> TestReport:
        """
        Run every sub-check once and aggregate the outcome.

        Returns:
            TestReport for the whole run
        """
        pass

    @abstractmethod
    def monitor_test(self, duration: float) -> TestReport:
        """
        Sample the peripheral repeatedly for the given time.

        Args:
            duration: Monitoring duration in seconds

        Returns:
            TestReport with the stability verdict
        """
        pass

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @property
    def logger(self) -> logging.Logger:
        """Logger named after the concrete tester class."""
        return Logger.get_or_default(f"testers.{type(self).__name__}")

    def create_report(
        self,
        result: TestResult,
        details: str,
        started: float,
        checks: dict[str, TestResult] | None = None,
    ) -> TestReport:
        """Build the report for a finished call.

        Args:
            result: Aggregate outcome.
            details: Human-readable details.
            started: ``time.perf_counter()`` value taken when the call began.
            checks: Optional per-sub-check outcomes.

        Returns:
            Frozen TestReport stamped with the current time.
        """
        return TestReport(
            result=result,
            peripheral_name=self.get_peripheral_name(),
            duration=max(0.0, time.perf_counter() - started),
            details=details,
            timestamp=datetime.now(timezone.utc),
            checks=checks or {},
        )

    def unavailable_report(self, started: float) -> TestReport:
        """Report returned by either test when is_available() is False."""
        return self.create_report(
            TestResult.NOT_SUPPORTED,
            f"{self.get_peripheral_name()} interface not available",
            started,
        )

    @staticmethod
    def format_checks(checks: dict[str, TestResult]) -> list[str]:
        """Render sub-check outcomes as 'Name: LABEL' lines."""
        return [f"{name}: {result.label}" for name, result in checks.items()]
