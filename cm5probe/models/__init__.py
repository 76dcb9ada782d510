"""Pydantic models and constants for structured output."""

from cm5probe.models.constants import PinMode, TestResult
from cm5probe.models.report_models import CPUInfo, GPIOPin, TestReport

__all__ = [
    "CPUInfo",
    "GPIOPin",
    "PinMode",
    "TestReport",
    "TestResult",
]
