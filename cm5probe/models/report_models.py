"""Pydantic models for test reports and peripheral descriptions."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from cm5probe.models.constants import PinMode, TestResult


class TestReport(BaseModel):
    """Immutable outcome of one short_test or monitor_test call."""

    __test__ = False  # Tell pytest not to collect this as a test class

    model_config = ConfigDict(frozen=True)

    result: TestResult = Field(..., description="Aggregate outcome of the call")
    peripheral_name: str = Field(..., description="Tester identifier (e.g., 'CPU')")
    duration: float = Field(
        ..., ge=0, description="Wall-clock time spent in the call, in seconds"
    )
    details: str = Field("", description="Free-form human-readable details")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Capture time (UTC)",
    )
    checks: dict[str, TestResult] = Field(
        default_factory=dict,
        description="Outcome of each sub-check by name (e.g., {'benchmark': ...})",
    )

    @property
    def passed(self) -> bool:
        """Whether the aggregate result is SUCCESS."""
        return self.result == TestResult.SUCCESS

    @property
    def duration_ms(self) -> int:
        """Duration rounded to whole milliseconds."""
        return round(self.duration * 1000)


class CPUInfo(BaseModel):
    """Static CPU description captured when a CPU tester is constructed."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_name: str = Field("", description="'model name' from /proc/cpuinfo")
    cores: int = Field(0, ge=0, description="'cpu cores' from /proc/cpuinfo")
    architecture: str = Field(
        "", description="'CPU architecture' from /proc/cpuinfo (e.g., '8')"
    )
    frequency_mhz: float = Field(0.0, ge=0, description="Maximum frequency in MHz")
    temperature_c: float | None = Field(
        None, description="Temperature at capture time, or None if unreadable"
    )


class GPIOPin(BaseModel):
    """Catalog entry describing one header pin.

    Configuration data only; whether a pin is exported is never stored here.
    """

    model_config = ConfigDict(frozen=True)

    number: int = Field(..., ge=0, description="BCM GPIO number")
    mode: PinMode = Field(..., description="Intended pin function")
    pull_up: bool = Field(False, description="Internal pull-up enabled")
    pull_down: bool = Field(False, description="Internal pull-down enabled")
    pwm_frequency: int = Field(0, ge=0, description="PWM frequency in Hz")
    pwm_duty_cycle: int = Field(
        0, ge=0, le=100, description="PWM duty cycle in percent"
    )
