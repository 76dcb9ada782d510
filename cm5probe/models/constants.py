"""Constants for cm5probe models, testers and commands."""

import sys

if sys.version_info >= (3, 11):  # noqa: UP036
    from enum import StrEnum
else:
    from backports.strenum import StrEnum  # noqa: UP035


class TestResult(StrEnum):
    """Outcome of a single test or sub-check.

    NOT_SUPPORTED means the peripheral or interface is absent on this
    hardware; FAILURE means it is present but misbehaved.
    """

    __test__ = False  # Tell pytest not to collect this as a test class

    SUCCESS = "success"
    FAILURE = "failure"
    NOT_SUPPORTED = "not_supported"
    TIMEOUT = "timeout"
    SKIPPED = "skipped"

    @property
    def label(self) -> str:
        """Short upper-case label for text output (e.g., 'PASS')."""
        return _RESULT_LABELS[self]


_RESULT_LABELS: dict[TestResult, str] = {
    TestResult.SUCCESS: "PASS",
    TestResult.FAILURE: "FAIL",
    TestResult.NOT_SUPPORTED: "NOT SUPPORTED",
    TestResult.TIMEOUT: "TIMEOUT",
    TestResult.SKIPPED: "SKIPPED",
}


class PinMode(StrEnum):
    """Intended function of a header pin."""

    INPUT = "input"
    OUTPUT = "output"
    PWM = "pwm"
    I2C = "i2c"
    SPI = "spi"
    UART = "uart"


# Peripheral identifiers
CPU_PERIPHERAL = "CPU"
GPIO_PERIPHERAL = "GPIO"

# CPU data sources (relative to the filesystem root)
PROC_CPUINFO = "proc/cpuinfo"
CPU_MAX_FREQ = "sys/devices/system/cpu/cpu0/cpufreq/cpuinfo_max_freq"
THERMAL_SENSOR_PATHS = (
    "sys/class/thermal/thermal_zone0/temp",
    "sys/class/hwmon/hwmon0/temp1_input",
    "proc/acpi/thermal_zone/THM0/temperature",
)

# CPU thresholds
BENCHMARK_PRIME_LIMIT = 10000
BENCHMARK_EXPECTED_LAST_PRIME = 9973
MULTI_CORE_ITERATIONS = 1000
MILLIDEGREE_THRESHOLD = 1000.0  # raw readings above this are millidegrees
TEMPERATURE_MIN_C = 0.0
TEMPERATURE_MAX_C = 100.0
TEMPERATURE_MAX_VARIATION_C = 20.0
TEMPERATURE_SAMPLE_INTERVAL_SECONDS = 1.0

# GPIO sysfs layout (relative to the filesystem root)
GPIO_SYSFS_DIR = "sys/class/gpio"
PWM_CHIP_PATH = "sys/class/pwm/pwmchip0"
I2C_DEVICES = ("dev/i2c-0", "dev/i2c-1")
SPI_DEVICES = ("dev/spidev0.0", "dev/spidev0.1")
UART_DEVICES = ("dev/ttyAMA0", "dev/ttyS0")

# GPIO test parameters
DIGITAL_IO_PINS = (2, 3, 4)
PWM_TEST_PIN = 18
STABILITY_TEST_PIN = 2
DIGITAL_IO_TOGGLE_SECONDS = 0.01
GPIO_EXPORT_SETTLE_SECONDS = 0.1
STABILITY_POLL_INTERVAL_SECONDS = 0.1
STABILITY_MIN_RATIO = 0.95

# Defaults
DEFAULT_ROOT = "/"
