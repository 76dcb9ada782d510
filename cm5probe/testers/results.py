"""Report collection and emission.

Supports multiple output formats: JSON, YAML, and text.

Usage:
    from cm5probe.testers.results import ReportCollection, OutputFormat

    reports = ReportCollection(mode="short")
    reports.add(cpu_tester.short_test())
    reports.add(gpio_tester.short_test())

    reports.emit("results.json", OutputFormat.JSON)
    reports.emit(sys.stdout, OutputFormat.TEXT)
"""

import json
import sys
from datetime import datetime, timezone
from enum import Enum
from io import StringIO
from pathlib import Path
from typing import Any, TextIO

import yaml

from cm5probe.models.constants import TestResult
from cm5probe.models.report_models import TestReport
from cm5probe.version.cm5probe_version import CM5PROBE_VERSION


class OutputFormat(Enum):
    """Supported output formats for reports."""

    JSON = "json"
    YAML = "yaml"
    TEXT = "text"  # Human-readable text for stdout


class ReportCollection:
    """Ordered collection of TestReports with flexible emission.

    SKIPPED reports (peripheral not present) count neither as passed nor
    failed; any other non-SUCCESS report is a failure.

    Example:
        >>> reports = ReportCollection(mode="short")
        >>> reports.add(CPUTester().short_test())
        >>> reports.all_passed
        True
    """

    def __init__(self, mode: str = "short") -> None:
        """Initialize an empty collection.

        Args:
            mode: "short" or "monitor", recorded in the metadata.
        """
        self._reports: list[TestReport] = []
        self._metadata: dict[str, Any] = {
            "mode": mode,
            "timestamp_start": datetime.now(timezone.utc).isoformat(),
            "timestamp_end": None,
            **CM5PROBE_VERSION.report_metadata(),
        }

    def add(self, report: TestReport) -> None:
        """Append a report."""
        self._reports.append(report)

    def finalize(self) -> None:
        """Mark the collection as complete, setting end timestamp."""
        self._metadata["timestamp_end"] = datetime.now(timezone.utc).isoformat()

    @property
    def reports(self) -> list[TestReport]:
        """Get a copy of the collected reports."""
        return list(self._reports)

    @property
    def failed(self) -> list[TestReport]:
        """Reports that are neither SUCCESS nor SKIPPED."""
        return [
            r
            for r in self._reports
            if r.result not in (TestResult.SUCCESS, TestResult.SKIPPED)
        ]

    @property
    def all_passed(self) -> bool:
        """True when no collected report failed."""
        return not self.failed

    def to_dict(self) -> dict[str, Any]:
        """Convert the collection to a dictionary for serialization."""
        return {
            "metadata": self._metadata,
            "reports": [r.model_dump(mode="json") for r in self._reports],
            "summary": self._generate_summary(),
        }

    def _generate_summary(self) -> dict[str, Any]:
        total = len(self._reports)
        skipped = sum(1 for r in self._reports if r.result == TestResult.SKIPPED)
        failed = len(self.failed)
        return {
            "total_tests": total,
            "passed": total - skipped - failed,
            "failed": failed,
            "skipped": skipped,
        }

    # -------------------------------------------------------------------------
    # Emission Methods
    # -------------------------------------------------------------------------

    def emit(
        self,
        output: str | Path | TextIO,
        format: OutputFormat = OutputFormat.JSON,
        indent: int = 2,
    ) -> None:
        """Emit reports to a file or stream.

        Args:
            output: File path or file-like object (e.g., sys.stdout).
            format: Output format (JSON, YAML, TEXT).
            indent: Indentation level for JSON/YAML.
        """
        self.finalize()

        if format == OutputFormat.JSON:
            content = json.dumps(self.to_dict(), indent=indent)
        elif format == OutputFormat.YAML:
            content = yaml.safe_dump(
                self.to_dict(), indent=indent, default_flow_style=False, sort_keys=False
            )
        elif format == OutputFormat.TEXT:
            content = self._to_text()
        else:
            raise ValueError(f"Unknown format: {format}")

        self._write_output(output, content)

    def _to_text(self) -> str:
        output = StringIO()
        summary = self._generate_summary()

        for report in self._reports:
            output.write(f"[{report.peripheral_name}] {report.result.label}\n")
            output.write(f"  Duration: {report.duration_ms} ms\n")
            for line in report.details.splitlines():
                output.write(f"  {line}\n")
            output.write("\n")

        output.write("-" * 40 + "\n")
        output.write(
            f"Tests Run: {summary['total_tests']}  Passed: {summary['passed']}  "
            f"Failed: {summary['failed']}  Skipped: {summary['skipped']}\n"
        )
        return output.getvalue()

    def _write_output(self, output: str | Path | TextIO, content: str) -> None:
        if isinstance(output, str | Path):
            Path(output).write_text(content)
        else:
            output.write(content)
            if output is not sys.stdout and output is not sys.stderr:
                output.flush()

    def emit_stdout(self) -> None:
        """Emit human-readable reports to stdout."""
        self.emit(sys.stdout, OutputFormat.TEXT)

    def __len__(self) -> int:
        """Return number of reports."""
        return len(self._reports)
