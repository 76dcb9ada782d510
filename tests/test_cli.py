"""Tests for the command-line interface."""

import json
import logging

import pytest
from click.testing import CliRunner

from cm5probe.cli import cm5probe
from cm5probe.utils.env import ENV_GPIO_SETTLE_SECONDS, ENV_LOG_LEVEL, ENV_ROOT
from cm5probe.utils.logger import Logger


@pytest.fixture
def cli_env(fake_root, monkeypatch):
    """Point the CLI at the fake root and reconfigure logging per invocation."""
    monkeypatch.setenv(ENV_ROOT, str(fake_root))
    monkeypatch.setenv(ENV_GPIO_SETTLE_SECONDS, "0")
    monkeypatch.setenv(ENV_LOG_LEVEL, "WARNING")
    monkeypatch.setattr(Logger, "_configured", False)
    yield fake_root

    root_logger = logging.getLogger("cm5probe")
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)


def invoke(*args):
    return CliRunner().invoke(cm5probe, list(args))


def test_version(cli_env):
    result = invoke("version")
    assert result.exit_code == 0
    assert result.output.strip() == "cm5probe 1.0.0"


def test_version_verbose(cli_env):
    result = invoke("version", "-v")
    assert "Package Hash:" in result.output


def test_list(cli_env, gpio_kernel):
    result = invoke("list")

    assert result.exit_code == 0
    assert "Available Peripherals:" in result.output
    assert "CPU        Available" in result.output
    assert "GPIO       Available" in result.output


def test_list_without_gpio(cli_env):
    result = invoke("list")
    assert "GPIO       Not Available" in result.output


def test_list_verbose_shows_catalog(cli_env, gpio_kernel):
    result = invoke("list", "-v")
    assert "PWM     12, 13, 18" in result.output
    assert "UART    14, 15" in result.output


def test_short_cpu_passes(cli_env):
    result = invoke("short", "cpu")

    assert result.exit_code == 0
    assert "Running short tests..." in result.output
    assert "[CPU] PASS" in result.output
    assert "All tests passed!" in result.output


def test_short_all_skips_missing_gpio(cli_env):
    """Without a GPIO interface the GPIO tester is skipped, not failed."""
    result = invoke("short")

    assert result.exit_code == 0
    assert "[GPIO] SKIPPED" in result.output


def test_short_gpio_fails_without_buses(cli_env, gpio_kernel, fake_clock):
    result = invoke("short", "GPIO")

    assert result.exit_code == 1
    assert "[GPIO] FAIL" in result.output
    assert "1 test(s) failed." in result.output
    assert gpio_kernel.exported_pins == []


def test_short_gpio_passes_with_buses(cli_env, gpio_kernel, with_buses, fake_clock):
    result = invoke("short", "gpio")
    assert result.exit_code == 0


def test_named_peripheral_unavailable(cli_env):
    result = invoke("short", "gpio")

    assert result.exit_code == 1
    assert "GPIO peripheral is not available on this system." in result.output


def test_unknown_peripheral(cli_env):
    result = invoke("short", "camera")

    assert result.exit_code == 1
    assert "Unknown peripheral: 'camera'" in result.output


def test_short_writes_output_files(cli_env, tmp_path):
    json_path = tmp_path / "out" / "results.json"
    json_path.parent.mkdir()
    yaml_path = tmp_path / "out" / "results.yml"

    result = invoke("short", "cpu", "-o", str(json_path), "-o", str(yaml_path))

    assert result.exit_code == 0
    assert f"Results written to {json_path}" in result.output
    data = json.loads(json_path.read_text())
    assert data["reports"][0]["peripheral_name"] == "CPU"
    assert yaml_path.read_text().startswith("metadata:")


def test_explicit_format_overrides_suffix(cli_env, tmp_path):
    path = tmp_path / "results.json"
    invoke("short", "cpu", "-o", str(path), "--format", "text")
    assert path.read_text().startswith("[CPU] PASS")


def test_monitor_cpu(cli_env, fake_clock):
    result = invoke("monitor", "3", "cpu")

    assert result.exit_code == 0
    assert "Running monitoring tests (3 seconds)..." in result.output
    assert "CPU monitoring completed for 3 seconds" in result.output
    assert fake_clock.sleeps == [1.0, 1.0, 1.0]


def test_monitor_rejects_zero_seconds(cli_env):
    result = invoke("monitor", "0")
    assert result.exit_code == 2


@pytest.mark.parametrize("command", [["short", "cpu"], ["list"]])
def test_malformed_settle_delay(cli_env, monkeypatch, command):
    monkeypatch.setenv(ENV_GPIO_SETTLE_SECONDS, "soon")
    result = invoke(*command)

    assert result.exit_code == 1
    expected = "Cannot convert CM5PROBE_GPIO_SETTLE_SECONDS='soon' to float"
    assert expected in result.output
    assert "Traceback" not in result.output
