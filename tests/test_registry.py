"""Tests for the tester registry."""

import pytest

from cm5probe.models.constants import TestResult
from cm5probe.testers import CPUTester, GPIOTester, PeripheralTester
from cm5probe.testers.registry import TesterNotFoundError, TesterRegistry


class MockTester(PeripheralTester):
    """A mock tester for registry tests."""

    def __init__(self, root="/", label="MOCK"):
        super().__init__(root)
        self.label = label

    def get_peripheral_name(self):
        return self.label

    def is_available(self):
        return True

    def short_test(self):
        return self.create_report(TestResult.SUCCESS, "", 0.0)

    def monitor_test(self, duration):
        return self.create_report(TestResult.SUCCESS, "", 0.0)


def test_default_testers(tmp_path):
    registry = TesterRegistry(root=tmp_path)

    assert registry.names == ["cpu", "gpio"]
    assert len(registry) == 2
    assert "CPU" in registry
    assert "uart" not in registry


def test_get_tester_class_case_insensitive(tmp_path):
    registry = TesterRegistry(root=tmp_path)
    assert registry.get_tester_class("GPIO") is GPIOTester


def test_unknown_tester(tmp_path):
    registry = TesterRegistry(root=tmp_path)

    with pytest.raises(TesterNotFoundError) as exc_info:
        registry.create("camera")

    assert exc_info.value.name == "camera"
    assert "cpu, gpio" in str(exc_info.value)


def test_create_passes_root_and_options(tmp_path):
    registry = TesterRegistry(
        root=tmp_path, tester_options={"gpio": {"settle_seconds": 0.5}}
    )

    gpio = registry.create("gpio")
    cpu = registry.create("cpu")

    assert isinstance(gpio, GPIOTester)
    assert gpio.root == tmp_path
    assert gpio.gpio.settle_seconds == 0.5
    assert isinstance(cpu, CPUTester)
    assert cpu.root == tmp_path


def test_create_all_respects_order(tmp_path):
    registry = TesterRegistry(root=tmp_path)
    testers = registry.create_all(["gpio", "cpu"])
    assert [t.get_peripheral_name() for t in testers] == ["GPIO", "CPU"]


def test_register_custom_tester(tmp_path):
    registry = TesterRegistry(root=tmp_path, tester_options={"mock": {"label": "M"}})
    registry.register("Mock", MockTester)

    assert "mock" in registry
    assert registry.create("mock").get_peripheral_name() == "M"


def test_availability(fake_root, gpio_kernel):
    assert TesterRegistry(root=fake_root).availability() == {
        "CPU": True,
        "GPIO": True,
    }


def test_availability_on_empty_root(tmp_path):
    assert TesterRegistry(root=tmp_path).availability() == {
        "CPU": False,
        "GPIO": False,
    }
