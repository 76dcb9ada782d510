"""Runner executing testers and collecting their reports.

Usage:
    from cm5probe.testers.registry import TesterRegistry
    from cm5probe.testers.runner import TesterRunner

    runner = TesterRunner(TesterRegistry().create_all())
    reports = runner.run_short()
    reports.emit_stdout()
"""

from cm5probe.models.constants import TestResult
from cm5probe.models.report_models import TestReport
from cm5probe.testers.base import PeripheralTester
from cm5probe.testers.results import ReportCollection
from cm5probe.utils.logger import Logger


class TesterRunner:
    """Runs short or monitor tests over a set of testers, one at a time.

    Testers whose is_available() is False are not run; a SKIPPED report is
    recorded for them instead.

    Example:
        >>> runner = TesterRunner([CPUTester(), GPIOTester()])
        >>> reports = runner.run_monitor(duration=60)
        >>> reports.all_passed
    """

    def __init__(self, testers: list[PeripheralTester] | None = None) -> None:
        """Initialize the runner."""
        self._testers: list[PeripheralTester] = list(testers or [])
        self._log = Logger.get_or_default("runner")

    def add_tester(self, tester: PeripheralTester) -> None:
        """Queue a tester."""
        self._testers.append(tester)

    @property
    def tester_count(self) -> int:
        """Return number of queued testers."""
        return len(self._testers)

    def run_short(self) -> ReportCollection:
        """Run short_test() on every available tester."""
        return self._run("short", lambda tester: tester.short_test())

    def run_monitor(self, duration: float) -> ReportCollection:
        """Run monitor_test(duration) on every available tester."""
        if duration <= 0:
            raise ValueError(f"duration must be positive, got {duration}")
        return self._run("monitor", lambda tester: tester.monitor_test(duration))

    def _run(self, mode, invoke) -> ReportCollection:
        reports = ReportCollection(mode=mode)
        for tester in self._testers:
            name = tester.get_peripheral_name()
            if not tester.is_available():
                self._log.info(f"{name}: not available, skipping")
                reports.add(self._skipped_report(name))
                continue

            self._log.info(f"{name}: running {mode} test")
            report = invoke(tester)
            self._log.info(f"{name}: {report.result.label} in {report.duration_ms} ms")
            reports.add(report)

        reports.finalize()
        return reports

    @staticmethod
    def _skipped_report(name: str) -> TestReport:
        return TestReport(
            result=TestResult.SKIPPED,
            peripheral_name=name,
            duration=0.0,
            details=f"{name} not available, skipped",
        )
