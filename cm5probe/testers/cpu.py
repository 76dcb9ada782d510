"""CPU tester: information, computation, thermal and multi-core checks."""

import math
import threading
import time
from pathlib import Path

import psutil

from cm5probe.backends.thermal import ThermalProbe
from cm5probe.models.constants import (
    BENCHMARK_EXPECTED_LAST_PRIME,
    BENCHMARK_PRIME_LIMIT,
    CPU_MAX_FREQ,
    CPU_PERIPHERAL,
    DEFAULT_ROOT,
    MULTI_CORE_ITERATIONS,
    PROC_CPUINFO,
    TEMPERATURE_MAX_C,
    TEMPERATURE_MAX_VARIATION_C,
    TEMPERATURE_MIN_C,
    TEMPERATURE_SAMPLE_INTERVAL_SECONDS,
    TestResult,
)
from cm5probe.models.report_models import CPUInfo, TestReport
from cm5probe.testers.base import PeripheralTester

# /proc/cpuinfo keys, first occurrence wins
_CPUINFO_FIELDS = {
    "model name": "model_name",
    "cpu cores": "cores",
    "CPU architecture": "architecture",
}


def compute_primes(limit: int) -> list[int]:
    """Return all primes <= limit by trial division up to sqrt(n)."""
    primes = []
    for num in range(2, limit + 1):
        for divisor in range(2, math.isqrt(num) + 1):
            if num % divisor == 0:
                break
        else:
            primes.append(num)
    return primes


def parse_cpuinfo(text: str) -> dict[str, str]:
    """Extract model name, core count and architecture from /proc/cpuinfo.

    Args:
        text: Contents of /proc/cpuinfo

    Returns
    -------
        Mapping of CPUInfo field name to the raw value of its first match
    """
    fields: dict[str, str] = {}
    for line in text.splitlines():
        key, sep, value = line.partition(":")
        if not sep:
            continue
        field = _CPUINFO_FIELDS.get(key.strip())
        if field is not None and field not in fields:
            fields[field] = value.strip()
    return fields


class CPUTester(PeripheralTester):
    """Tester for the CPU.

    Short test runs a prime-sieve sanity check, a temperature range check and
    a one-thread-per-core check. Monitor test watches temperature variation.

    Uses:
    - /proc/cpuinfo: model, core count, architecture
    - /sys/devices/system/cpu/cpu0/cpufreq/cpuinfo_max_freq: max frequency
    - thermal sensors via ThermalProbe
    """

    def __init__(self, root: str | Path = DEFAULT_ROOT) -> None:
        """Initialize the CPU tester and capture static CPU information.

        Args:
            root: Filesystem root that all probed paths are resolved under.
        """
        super().__init__(root)
        self.thermal = ThermalProbe(self.root)
        self.cpu_info = self.get_cpu_info() if self.is_available() else CPUInfo()

    # -------------------------------------------------------------------------
    # Contract
    # -------------------------------------------------------------------------

    def get_peripheral_name(self) -> str:
        """Return "CPU"."""
        return CPU_PERIPHERAL

    def is_available(self) -> bool:
        """Check if /proc/cpuinfo exists."""
        return (self.root / PROC_CPUINFO).exists()

    def short_test(self) -> TestReport:
        """Run benchmark, temperature and multi-core checks.

        A NOT_SUPPORTED temperature check does not fail the run; every other
        non-SUCCESS sub-check does.
        """
        started = time.perf_counter()
        if not self.is_available():
            return self.unavailable_report(started)

        info = self.cpu_info
        lines = [
            f"CPU Model: {info.model_name}",
            f"Cores: {info.cores}",
            f"Architecture: {info.architecture}",
            f"Frequency: {info.frequency_mhz:.1f} MHz",
        ]

        checks = {
            "Benchmark": self.benchmark_cpu(),
            "Temperature": self.test_temperature(),
            "Multi-core": self.test_multi_core(),
        }
        lines.extend(self.format_checks(checks))
        if info.temperature_c is not None:
            lines.append(f"Captured temperature: {info.temperature_c:.1f} C")

        all_passed = all(
            result == TestResult.SUCCESS
            or (name == "Temperature" and result == TestResult.NOT_SUPPORTED)
            for name, result in checks.items()
        )
        overall = TestResult.SUCCESS if all_passed else TestResult.FAILURE
        self.logger.info(f"Short test: {overall.label}")
        return self.create_report(overall, "\n".join(lines), started, checks)

    def monitor_test(self, duration: float) -> TestReport:
        """Watch temperature stability for ``duration`` seconds."""
        started = time.perf_counter()
        if not self.is_available():
            return self.unavailable_report(started)

        result, summary = self.monitor_temperature(duration)
        details = f"CPU monitoring completed for {duration:g} seconds\n{summary}"
        return self.create_report(result, details, started, {"Temperature": result})

    # -------------------------------------------------------------------------
    # Information
    # -------------------------------------------------------------------------

    def get_cpu_info(self) -> CPUInfo:
        """Collect static CPU information.

        Returns
        -------
            CPUInfo; fields that cannot be read keep their defaults
        """
        fields: dict[str, str] = {}
        try:
            fields = parse_cpuinfo((self.root / PROC_CPUINFO).read_text())
        except OSError as e:
            self.logger.warning(f"Cannot read /proc/cpuinfo: {e}")

        try:
            cores = int(fields.get("cores", "0"))
        except ValueError:
            cores = 0

        return CPUInfo(
            model_name=fields.get("model_name", ""),
            cores=max(0, cores),
            architecture=fields.get("architecture", ""),
            frequency_mhz=self._read_max_frequency_mhz(),
            temperature_c=self.thermal.read_celsius(),
        )

    def _read_max_frequency_mhz(self) -> float:
        """Read cpuinfo_max_freq (kHz) as MHz, 0.0 when unavailable."""
        try:
            freq_khz = float((self.root / CPU_MAX_FREQ).read_text().strip())
        except (OSError, ValueError):
            return 0.0
        return max(0.0, freq_khz / 1000.0)

    # -------------------------------------------------------------------------
    # Sub-checks
    # -------------------------------------------------------------------------

    def benchmark_cpu(self) -> TestResult:
        """Compute primes <= 10000 and verify the largest is 9973."""
        primes = compute_primes(BENCHMARK_PRIME_LIMIT)
        if not primes or primes[-1] != BENCHMARK_EXPECTED_LAST_PRIME:
            self.logger.warning(
                f"Prime check mismatch: last prime {primes[-1] if primes else None}"
            )
            return TestResult.FAILURE
        return TestResult.SUCCESS

    def test_temperature(self) -> TestResult:
        """Check the live temperature is within 0-100 C."""
        temp = self.thermal.read_celsius()
        if temp is None:
            return TestResult.NOT_SUPPORTED
        if not TEMPERATURE_MIN_C <= temp <= TEMPERATURE_MAX_C:
            self.logger.warning(f"Temperature out of range: {temp:.1f} C")
            return TestResult.FAILURE
        return TestResult.SUCCESS

    def test_multi_core(self) -> TestResult:
        """Run one thread per logical core and check each produced a result."""
        num_threads = psutil.cpu_count(logical=True) or 0
        if num_threads == 0:
            return TestResult.NOT_SUPPORTED

        results = [0] * num_threads

        def worker(index: int) -> None:
            total = 0
            for j in range(1, MULTI_CORE_ITERATIONS + 1):
                total += j * (index + 1)
            results[index] = total

        threads = [
            threading.Thread(target=worker, args=(i,), name=f"cm5probe-core-{i}")
            for i in range(num_threads)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        idle = [i for i, value in enumerate(results) if value == 0]
        if idle:
            self.logger.warning(f"Threads produced no result: {idle}")
            return TestResult.FAILURE

        self.logger.debug(f"{num_threads} threads completed")
        return TestResult.SUCCESS

    def monitor_temperature(self, duration: float) -> tuple[TestResult, str]:
        """Sample temperature once per second for ``duration`` seconds.

        Returns
        -------
            (result, summary) where result is NOT_SUPPORTED without any
            successful sample, SUCCESS if max - min <= 20 C, else FAILURE
        """
        end_time = time.monotonic() + duration
        samples: list[float] = []

        while time.monotonic() < end_time:
            temp = self.thermal.read_celsius()
            if temp is not None:
                samples.append(temp)
            time.sleep(TEMPERATURE_SAMPLE_INTERVAL_SECONDS)

        if not samples:
            return TestResult.NOT_SUPPORTED, "No temperature samples"

        min_temp, max_temp = min(samples), max(samples)
        variation = max_temp - min_temp
        summary = (
            f"Samples: {len(samples)}, min {min_temp:.1f} C, "
            f"max {max_temp:.1f} C, variation {variation:.1f} C"
        )
        self.logger.info(summary)

        if variation <= TEMPERATURE_MAX_VARIATION_C:
            return TestResult.SUCCESS, summary
        return TestResult.FAILURE, summary
