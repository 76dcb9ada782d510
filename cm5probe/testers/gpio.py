"""GPIO tester: digital I/O, PWM and bus interface checks over sysfs."""

import time
from pathlib import Path

from cm5probe.backends.gpio_sysfs import GPIOError, GPIOSysfs
from cm5probe.models.constants import (
    DEFAULT_ROOT,
    DIGITAL_IO_PINS,
    DIGITAL_IO_TOGGLE_SECONDS,
    GPIO_EXPORT_SETTLE_SECONDS,
    GPIO_PERIPHERAL,
    I2C_DEVICES,
    PWM_CHIP_PATH,
    PWM_TEST_PIN,
    SPI_DEVICES,
    STABILITY_MIN_RATIO,
    STABILITY_POLL_INTERVAL_SECONDS,
    STABILITY_TEST_PIN,
    UART_DEVICES,
    PinMode,
    TestResult,
)
from cm5probe.models.report_models import GPIOPin, TestReport
from cm5probe.testers.base import PeripheralTester


def _pin(number: int, mode: PinMode) -> GPIOPin:
    if mode == PinMode.PWM:
        return GPIOPin(number=number, mode=mode, pwm_frequency=1000, pwm_duty_cycle=50)
    return GPIOPin(number=number, mode=mode)


# 40-pin HAT compatible header layout
DEFAULT_PIN_CATALOG: tuple[GPIOPin, ...] = (
    *(_pin(n, PinMode.OUTPUT) for n in range(2, 12)),
    _pin(12, PinMode.PWM),  # PWM0
    _pin(13, PinMode.PWM),  # PWM1
    _pin(14, PinMode.UART),  # TXD
    _pin(15, PinMode.UART),  # RXD
    _pin(16, PinMode.OUTPUT),
    _pin(17, PinMode.OUTPUT),
    _pin(18, PinMode.PWM),  # PWM0
    _pin(19, PinMode.SPI),  # MISO (SPI1)
    _pin(20, PinMode.SPI),  # MOSI (SPI1)
    _pin(21, PinMode.SPI),  # SCLK (SPI1)
    _pin(22, PinMode.OUTPUT),
    _pin(23, PinMode.SPI),
    _pin(24, PinMode.SPI),
    _pin(25, PinMode.OUTPUT),
    _pin(26, PinMode.OUTPUT),
    _pin(27, PinMode.OUTPUT),
)


class GPIOTester(PeripheralTester):
    """Tester for the GPIO header and the buses multiplexed onto it.

    Short test toggles a few pins through export/write/read/unexport and
    checks that PWM, I2C, SPI and UART interfaces are present. Monitor test
    polls one input pin and requires 95% of reads to succeed.

    Every pin exported by a sub-check is unexported before that sub-check
    returns.
    """

    def __init__(
        self,
        root: str | Path = DEFAULT_ROOT,
        settle_seconds: float = GPIO_EXPORT_SETTLE_SECONDS,
        pins: tuple[GPIOPin, ...] = DEFAULT_PIN_CATALOG,
    ) -> None:
        """Initialize the GPIO tester.

        Args:
            root: Filesystem root that all probed paths are resolved under.
            settle_seconds: Delay after each export before checking the pin
                directory.
            pins: Header pin catalog.
        """
        super().__init__(root)
        self.gpio = GPIOSysfs(self.root, settle_seconds=settle_seconds)
        self.pins = pins

    # -------------------------------------------------------------------------
    # Contract
    # -------------------------------------------------------------------------

    def get_peripheral_name(self) -> str:
        """Return "GPIO"."""
        return GPIO_PERIPHERAL

    def is_available(self) -> bool:
        """Check if /sys/class/gpio exists."""
        return self.gpio.is_available()

    def short_test(self) -> TestReport:
        """Run digital I/O, PWM, I2C, SPI and UART checks.

        Any sub-check other than SUCCESS, NOT_SUPPORTED included, fails the
        run.
        """
        started = time.perf_counter()
        if not self.is_available():
            return self.unavailable_report(started)

        checks = {
            "Digital I/O": self.test_digital_io(),
            "PWM": self.test_pwm(),
            "I2C": self.test_i2c(),
            "SPI": self.test_spi(),
            "UART": self.test_uart(),
        }

        all_passed = all(result == TestResult.SUCCESS for result in checks.values())
        overall = TestResult.SUCCESS if all_passed else TestResult.FAILURE
        self.logger.info(f"Short test: {overall.label}")
        return self.create_report(
            overall, "\n".join(self.format_checks(checks)), started, checks
        )

    def monitor_test(self, duration: float) -> TestReport:
        """Poll a pin for ``duration`` seconds and judge read stability."""
        started = time.perf_counter()
        if not self.is_available():
            return self.unavailable_report(started)

        result, summary = self.monitor_gpio_stability(duration)
        details = f"GPIO monitoring completed for {duration:g} seconds\n{summary}"
        return self.create_report(result, details, started, {"Stability": result})

    # -------------------------------------------------------------------------
    # Catalog
    # -------------------------------------------------------------------------

    def pins_by_mode(self, mode: PinMode) -> list[GPIOPin]:
        """Return catalog entries with the given intended function."""
        return [pin for pin in self.pins if pin.mode == mode]

    # -------------------------------------------------------------------------
    # Sub-checks
    # -------------------------------------------------------------------------

    def test_digital_io(self, pins: tuple[int, ...] = DIGITAL_IO_PINS) -> TestResult:
        """Toggle each pin as output, then read it back as input."""
        for pin in pins:
            try:
                with self.gpio.exported(pin):
                    if not self._exercise_pin(pin):
                        return TestResult.FAILURE
            except GPIOError as e:
                self.logger.warning(str(e))
                return TestResult.FAILURE
        return TestResult.SUCCESS

    def _exercise_pin(self, pin: int) -> bool:
        gpio = self.gpio
        if not gpio.set_direction(pin, output=True):
            self.logger.warning(f"GPIO {pin}: cannot set direction to out")
            return False
        if not gpio.write_value(pin, 1):
            self.logger.warning(f"GPIO {pin}: cannot write 1")
            return False

        time.sleep(DIGITAL_IO_TOGGLE_SECONDS)

        if not gpio.write_value(pin, 0):
            self.logger.warning(f"GPIO {pin}: cannot write 0")
            return False
        if not gpio.set_direction(pin, output=False):
            self.logger.warning(f"GPIO {pin}: cannot set direction to in")
            return False
        if gpio.read_value(pin) is None:
            self.logger.warning(f"GPIO {pin}: read back failed")
            return False

        self.logger.debug(f"GPIO {pin}: round trip ok")
        return True

    def test_pwm(self, pin: int = PWM_TEST_PIN) -> TestResult:
        """Export the PWM pin and check a PWM controller is registered."""
        try:
            with self.gpio.exported(pin):
                present = (self.root / PWM_CHIP_PATH).exists()
        except GPIOError as e:
            self.logger.warning(str(e))
            return TestResult.FAILURE

        return TestResult.SUCCESS if present else TestResult.NOT_SUPPORTED

    def test_i2c(self) -> TestResult:
        """Check for an I2C bus device node."""
        return self._probe_devices(I2C_DEVICES)

    def test_spi(self) -> TestResult:
        """Check for an SPI device node."""
        return self._probe_devices(SPI_DEVICES)

    def test_uart(self) -> TestResult:
        """Check for a UART device node."""
        return self._probe_devices(UART_DEVICES)

    def _probe_devices(self, candidates: tuple[str, ...]) -> TestResult:
        for candidate in candidates:
            if (self.root / candidate).exists():
                self.logger.debug(f"Found /{candidate}")
                return TestResult.SUCCESS
        return TestResult.NOT_SUPPORTED

    def monitor_gpio_stability(
        self, duration: float, pin: int = STABILITY_TEST_PIN
    ) -> tuple[TestResult, str]:
        """Poll ``pin`` every 100 ms for ``duration`` seconds.

        Returns
        -------
            (result, summary) where result is FAILURE if the pin cannot be
            set up, NOT_SUPPORTED if no read was attempted, SUCCESS if at
            least 95% of reads succeeded, else FAILURE
        """
        successful = 0
        attempted = 0
        try:
            with self.gpio.exported(pin):
                if not self.gpio.set_direction(pin, output=False):
                    return TestResult.FAILURE, f"GPIO {pin}: cannot set direction to in"

                end_time = time.monotonic() + duration
                while time.monotonic() < end_time:
                    if self.gpio.read_value(pin) is not None:
                        successful += 1
                    attempted += 1
                    time.sleep(STABILITY_POLL_INTERVAL_SECONDS)
        except GPIOError as e:
            return TestResult.FAILURE, str(e)

        if attempted == 0:
            return TestResult.NOT_SUPPORTED, "No reads attempted"

        ratio = successful / attempted
        summary = f"Reads: {successful}/{attempted} successful ({ratio:.1%})"
        self.logger.info(summary)

        if ratio >= STABILITY_MIN_RATIO:
            return TestResult.SUCCESS, summary
        return TestResult.FAILURE, summary
