"""Tests for the tester runner."""

import pytest

from cm5probe.models.constants import TestResult
from cm5probe.testers import PeripheralTester
from cm5probe.testers.runner import TesterRunner


class StubTester(PeripheralTester):
    """Tester returning fixed results and recording calls."""

    def __init__(self, name, available=True, result=TestResult.SUCCESS):
        super().__init__()
        self.name = name
        self.available = available
        self.result = result
        self.calls = []

    def get_peripheral_name(self):
        return self.name

    def is_available(self):
        return self.available

    def short_test(self):
        self.calls.append("short")
        return self.create_report(self.result, "stub", 0.0)

    def monitor_test(self, duration):
        self.calls.append(("monitor", duration))
        return self.create_report(self.result, "stub", 0.0)


def test_run_short_in_order():
    cpu = StubTester("CPU")
    gpio = StubTester("GPIO", result=TestResult.FAILURE)
    runner = TesterRunner([cpu, gpio])

    reports = runner.run_short()

    assert [r.peripheral_name for r in reports.reports] == ["CPU", "GPIO"]
    assert cpu.calls == ["short"]
    assert gpio.calls == ["short"]
    assert reports.all_passed is False
    assert reports.to_dict()["metadata"]["mode"] == "short"


def test_unavailable_tester_is_skipped():
    """Unavailable testers are never invoked and get a SKIPPED report."""
    gpio = StubTester("GPIO", available=False)
    runner = TesterRunner([StubTester("CPU"), gpio])

    reports = runner.run_short()
    skipped = reports.reports[1]

    assert gpio.calls == []
    assert skipped.result == TestResult.SKIPPED
    assert skipped.duration == 0.0
    assert skipped.details == "GPIO not available, skipped"
    assert reports.all_passed is True


def test_run_monitor_passes_duration():
    cpu = StubTester("CPU")
    runner = TesterRunner()
    runner.add_tester(cpu)

    reports = runner.run_monitor(5)

    assert runner.tester_count == 1
    assert cpu.calls == [("monitor", 5)]
    assert reports.to_dict()["metadata"]["mode"] == "monitor"
    assert reports.to_dict()["metadata"]["timestamp_end"] is not None


@pytest.mark.parametrize("duration", [0, -1])
def test_run_monitor_rejects_non_positive_duration(duration):
    with pytest.raises(ValueError):
        TesterRunner([StubTester("CPU")]).run_monitor(duration)


def test_empty_runner():
    reports = TesterRunner().run_short()
    assert len(reports) == 0
    assert reports.all_passed is True
