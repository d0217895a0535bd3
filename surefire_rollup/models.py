"""Data model for parsed test cases and per-class aggregates.

A :class:`TestCaseResult` is one observed test execution as read from a
report.  Results are reduced to :class:`OutcomeDelta` values, which are added
into the mutable :class:`ClassReport` owned by a test index entry.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TestStatus(str, Enum):
    PASSED = "passed"
    SKIPPED = "skipped"
    ERROR = "error"
    FAILURE = "failure"

    # keep pytest from collecting the enum as a test class
    __test__ = False


@dataclass(frozen=True)
class TestCaseResult:
    """One test case as reported by the test runner."""

    __test__ = False

    classname: str
    name: str
    status: TestStatus
    duration_ms: int = 0
    message: Optional[str] = None

    def to_delta(self) -> "OutcomeDelta":
        return OutcomeDelta.for_status(self.status, self.duration_ms)


@dataclass(frozen=True)
class OutcomeDelta:
    """Counts and duration to add to a class report."""

    tests: int = 0
    skipped: int = 0
    errors: int = 0
    failures: int = 0
    duration_ms: int = 0

    @classmethod
    def for_status(cls, status: TestStatus, duration_ms: int = 0) -> "OutcomeDelta":
        """Return the delta contributed by a single test with *status*."""
        status = TestStatus(status)
        if status is TestStatus.SKIPPED:
            # surefire reports meaningless times for skipped tests
            return cls(tests=1, skipped=1)
        return cls(
            tests=1,
            errors=1 if status is TestStatus.ERROR else 0,
            failures=1 if status is TestStatus.FAILURE else 0,
            duration_ms=duration_ms,
        )


@dataclass
class ClassReport:
    """Aggregated outcome of every test recorded for one class identity."""

    tests: int = 0
    skipped: int = 0
    errors: int = 0
    failures: int = 0
    duration_ms: int = 0

    def add(self, delta: OutcomeDelta | "ClassReport") -> None:
        self.tests += delta.tests
        self.skipped += delta.skipped
        self.errors += delta.errors
        self.failures += delta.failures
        self.duration_ms += delta.duration_ms

    def as_delta(self) -> OutcomeDelta:
        return OutcomeDelta(
            tests=self.tests,
            skipped=self.skipped,
            errors=self.errors,
            failures=self.failures,
            duration_ms=self.duration_ms,
        )

    @property
    def executed_tests(self) -> int:
        return self.tests - self.skipped

    @property
    def passed_tests(self) -> int:
        return self.executed_tests - self.errors - self.failures
