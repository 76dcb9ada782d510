"""Shared fixtures: a fake filesystem root, a simulated GPIO kernel and a fake clock."""

import errno
import shutil
import time
from pathlib import Path

import pytest

from cm5probe.backends.gpio_sysfs import GPIOSysfs

CPUINFO = """\
processor\t: 0
BogoMIPS\t: 108.00
Features\t: fp asimd evtstrm crc32 cpuid
CPU implementer\t: 0x41
CPU architecture: 8
CPU variant\t: 0x4
CPU part\t: 0xd0b
model name\t: Cortex-A76
cpu cores\t: 4

processor\t: 1
model name\t: Something Else
cpu cores\t: 99
"""


class FakeClock:
    """Monotonic clock that only moves when sleep() is called."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeGPIOKernel:
    """Simulates the sysfs GPIO driver under a temporary root.

    Writing a pin number to ``export`` creates ``gpio<N>`` with direction
    and value files; writing to ``unexport`` removes it. Exporting a pin
    that is already exported fails with EBUSY.
    """

    def __init__(self, root: Path) -> None:
        self.base = root / "sys/class/gpio"
        self.base.mkdir(parents=True)
        (self.base / "export").touch()
        (self.base / "unexport").touch()
        self.deny_export = False
        self.ignore_export = False
        self.unwritable: set[str] = set()
        self.exports: list[int] = []
        self.unexports: list[int] = []

    def hold(self, pin: int) -> None:
        """Export ``pin`` on behalf of another owner."""
        pin_dir = self.base / f"gpio{pin}"
        pin_dir.mkdir()
        (pin_dir / "direction").write_text("out\n")
        (pin_dir / "value").write_text("1\n")

    @property
    def exported_pins(self) -> list[int]:
        return sorted(int(p.name[4:]) for p in self.base.glob("gpio[0-9]*"))

    def handle(self, path: Path, text: str) -> None:
        if path == self.base / "export":
            if self.deny_export:
                raise PermissionError(13, "Permission denied", str(path))
            pin = int(text)
            pin_dir = self.base / f"gpio{pin}"
            if pin_dir.exists():
                raise OSError(errno.EBUSY, "Device or resource busy", str(path))
            self.exports.append(pin)
            if self.ignore_export:
                return
            pin_dir.mkdir()
            (pin_dir / "direction").write_text("in\n")
            (pin_dir / "value").write_text("0\n")
            return

        if path == self.base / "unexport":
            pin = int(text)
            self.unexports.append(pin)
            shutil.rmtree(self.base / f"gpio{pin}", ignore_errors=True)
            return

        if path.name in self.unwritable:
            raise PermissionError(13, "Permission denied", str(path))
        if not path.parent.is_dir():
            raise FileNotFoundError(2, "No such file or directory", str(path))
        path.write_text(text + "\n")


@pytest.fixture
def fake_root(tmp_path: Path) -> Path:
    """Filesystem root holding a Raspberry Pi style /proc and /sys tree."""
    (tmp_path / "proc").mkdir()
    (tmp_path / "proc/cpuinfo").write_text(CPUINFO)

    freq = tmp_path / "sys/devices/system/cpu/cpu0/cpufreq"
    freq.mkdir(parents=True)
    (freq / "cpuinfo_max_freq").write_text("2400000\n")

    zone = tmp_path / "sys/class/thermal/thermal_zone0"
    zone.mkdir(parents=True)
    (zone / "temp").write_text("45500\n")
    return tmp_path


@pytest.fixture
def gpio_kernel(fake_root: Path, monkeypatch: pytest.MonkeyPatch) -> FakeGPIOKernel:
    """Route GPIOSysfs writes through a simulated kernel driver."""
    kernel = FakeGPIOKernel(fake_root)

    def kernel_write(self: GPIOSysfs, path: Path, text: str) -> bool:
        try:
            kernel.handle(path, text)
        except OSError:
            return False
        return True

    monkeypatch.setattr(GPIOSysfs, "_write", kernel_write)
    return kernel


@pytest.fixture
def with_buses(fake_root: Path) -> Path:
    """Add PWM controller and I2C/SPI/UART device nodes to the fake root."""
    (fake_root / "sys/class/pwm/pwmchip0").mkdir(parents=True)
    dev = fake_root / "dev"
    dev.mkdir()
    for node in ("i2c-1", "spidev0.0", "ttyAMA0"):
        (dev / node).touch()
    return fake_root


@pytest.fixture
def fake_clock(monkeypatch: pytest.MonkeyPatch) -> FakeClock:
    """Replace time.monotonic and time.sleep with a fake clock."""
    clock = FakeClock()
    monkeypatch.setattr(time, "monotonic", clock.monotonic)
    monkeypatch.setattr(time, "sleep", clock.sleep)
    return clock
