"""GPIO access through the legacy sysfs interface.

The kernel exposes user-space GPIO control as plain text files:

- /sys/class/gpio/export: write a pin number to lease the pin
- /sys/class/gpio/unexport: write a pin number to release it
- /sys/class/gpio/gpio<N>/direction: "in" or "out"
- /sys/class/gpio/gpio<N>/value: "0" or "1"

Every primitive reports failure through its return value. Only the scoped
``exported()`` lease raises, so callers can bail out of a sequence and still
get the pin released.
"""

import time
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from cm5probe.models.constants import (
    DEFAULT_ROOT,
    GPIO_EXPORT_SETTLE_SECONDS,
    GPIO_SYSFS_DIR,
)
from cm5probe.utils.logger import Logger


class GPIOError(Exception):
    """Base exception for GPIO sysfs errors."""

    pass


class GPIOExportError(GPIOError):
    """Raised when a pin cannot be exported."""

    def __init__(self, pin: int) -> None:
        self.pin = pin
        super().__init__(f"Failed to export GPIO {pin}")


class GPIOSysfs:
    """Thin wrapper over the sysfs GPIO control files.

    Example:
        >>> gpio = GPIOSysfs()
        >>> with gpio.exported(17):
        ...     gpio.set_direction(17, output=False)
        ...     value = gpio.read_value(17)
    """

    def __init__(
        self,
        root: str | Path = DEFAULT_ROOT,
        settle_seconds: float = GPIO_EXPORT_SETTLE_SECONDS,
    ) -> None:
        """Initialize the wrapper.

        Args:
            root: Filesystem root the sysfs tree is resolved under.
            settle_seconds: Time the kernel is given to create the pin
                directory after an export.
        """
        self.base = Path(root) / GPIO_SYSFS_DIR
        self.settle_seconds = settle_seconds
        self._log = Logger.get_or_default("backends.gpio_sysfs")

    def is_available(self) -> bool:
        """Check if the sysfs GPIO class directory exists."""
        return self.base.is_dir()

    def pin_dir(self, pin: int) -> Path:
        """Return the per-pin directory created by an export."""
        return self.base / f"gpio{pin}"

    def is_exported(self, pin: int) -> bool:
        """Check if a pin directory currently exists."""
        return self.pin_dir(pin).is_dir()

    # -------------------------------------------------------------------------
    # Primitives
    # -------------------------------------------------------------------------

    def export(self, pin: int) -> bool:
        """Export a pin and wait for its directory to appear.

        Returns:
            True if the pin directory exists after the settle delay.
        """
        return self.request_export(pin) and self.wait_exported(pin)

    def request_export(self, pin: int) -> bool:
        """Write the pin number to the export control file.

        Returns:
            False if the kernel refused the write, e.g. EBUSY for a pin
            someone else already holds.
        """
        return self._write(self.base / "export", str(pin))

    def wait_exported(self, pin: int) -> bool:
        """Give the kernel the settle delay, then check the pin directory."""
        time.sleep(self.settle_seconds)

        if not self.is_exported(pin):
            self._log.warning(
                f"GPIO {pin} export accepted but {self.pin_dir(pin)} missing"
            )
            return False
        return True

    def unexport(self, pin: int) -> bool:
        """Release a pin.

        Returns:
            True if the unexport control file accepted the write.
        """
        return self._write(self.base / "unexport", str(pin))

    def set_direction(self, pin: int, output: bool) -> bool:
        """Configure a pin as output ("out") or input ("in")."""
        return self._write(self.pin_dir(pin) / "direction", "out" if output else "in")

    def write_value(self, pin: int, value: int) -> bool:
        """Drive an output pin to 0 or 1."""
        return self._write(self.pin_dir(pin) / "value", "1" if value else "0")

    def read_value(self, pin: int) -> int | None:
        """Read the logic level of a pin.

        Returns:
            0 or 1, or None if the value file is unreadable or malformed.
        """
        value_file = self.pin_dir(pin) / "value"
        try:
            text = value_file.read_text().strip()
        except OSError as e:
            self._log.debug(f"Cannot read {value_file}: {e}")
            return None

        if text not in ("0", "1"):
            self._log.debug(f"Unexpected value in {value_file}: {text!r}")
            return None
        return int(text)

    # -------------------------------------------------------------------------
    # Scoped lease
    # -------------------------------------------------------------------------

    @contextmanager
    def exported(self, pin: int) -> Iterator[int]:
        """Hold a pin exported for the duration of a ``with`` block.

        The pin is unexported when the block exits, however it exits.

        Raises:
            GPIOExportError: If the export does not take effect. A refused
                write leaves the pin alone, it may belong to another user.
                An accepted write whose directory never appears is
                unexported before raising.
        """
        if not self.request_export(pin):
            raise GPIOExportError(pin)
        if not self.wait_exported(pin):
            self.unexport(pin)
            raise GPIOExportError(pin)

        self._log.debug(f"GPIO {pin} exported")
        try:
            yield pin
        finally:
            if not self.unexport(pin):
                self._log.warning(f"GPIO {pin} could not be unexported")
            else:
                self._log.debug(f"GPIO {pin} unexported")

    def _write(self, path: Path, text: str) -> bool:
        try:
            path.write_text(text)
        except OSError as e:
            self._log.debug(f"Cannot write {text!r} to {path}: {e}")
            return False
        return True
