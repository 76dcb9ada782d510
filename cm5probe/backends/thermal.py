"""Thermal probe over the ranked Linux temperature sensor interfaces."""

import math
from pathlib import Path

from cm5probe.models.constants import (
    DEFAULT_ROOT,
    MILLIDEGREE_THRESHOLD,
    THERMAL_SENSOR_PATHS,
)
from cm5probe.utils.logger import Logger


def normalize_reading(raw: float) -> float:
    """Convert a raw sensor reading to degrees Celsius.

    Sysfs thermal zones and hwmon report millidegrees, the legacy ACPI
    interface reports degrees. Anything above 1000 is taken as millidegrees.

    Args:
        raw: Value parsed from the sensor file.

    Returns
    -------
        Temperature in Celsius
    """
    if raw > MILLIDEGREE_THRESHOLD:
        return raw / 1000.0
    return raw


class ThermalProbe:
    """Reads CPU temperature from the first usable sensor.

    Uses, in order:
    - /sys/class/thermal/thermal_zone0/temp
    - /sys/class/hwmon/hwmon0/temp1_input
    - /proc/acpi/thermal_zone/THM0/temperature
    """

    def __init__(
        self,
        root: str | Path = DEFAULT_ROOT,
        sensor_paths: tuple[str, ...] = THERMAL_SENSOR_PATHS,
    ) -> None:
        """Initialize the probe.

        Args:
            root: Filesystem root the sensor paths are resolved under.
            sensor_paths: Candidate sensor files, most preferred first.
        """
        self.root = Path(root)
        self.sensor_paths = tuple(self.root / p for p in sensor_paths)
        self._log = Logger.get_or_default("backends.thermal")

    def read_celsius(self) -> float | None:
        """Read the current temperature.

        Returns
        -------
            Temperature in Celsius from the first readable, parseable
            candidate, or None if no candidate yields a value
        """
        for sensor in self.sensor_paths:
            raw = self._read_raw(sensor)
            if raw is not None:
                return normalize_reading(raw)

        self._log.debug("No readable thermal sensor")
        return None

    def _read_raw(self, sensor: Path) -> float | None:
        try:
            text = sensor.read_text()
        except OSError:
            return None

        fields = text.split()
        try:
            raw = float(fields[0])
        except (IndexError, ValueError):
            raw = math.nan

        if not math.isfinite(raw):
            self._log.debug(f"Unparseable thermal reading in {sensor}: {text!r}")
            return None
        return raw
