"""Kernel interface backends used by the testers.

- ThermalProbe: temperature from thermal zone / hwmon / ACPI files
- GPIOSysfs: export, direction and value control through /sys/class/gpio
"""

from cm5probe.backends.gpio_sysfs import GPIOError, GPIOExportError, GPIOSysfs
from cm5probe.backends.thermal import ThermalProbe, normalize_reading

__all__ = [
    "GPIOError",
    "GPIOExportError",
    "GPIOSysfs",
    "ThermalProbe",
    "normalize_reading",
]
