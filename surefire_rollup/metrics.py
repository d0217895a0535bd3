"""Measures derived from a class report.

Metric keys follow the core test metrics of the analysis platform the
measures are published to.
"""
from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict

from .models import ClassReport

SKIPPED_TESTS = "skipped_tests"
TESTS = "tests"
TEST_ERRORS = "test_errors"
TEST_FAILURES = "test_failures"
TEST_EXECUTION_TIME = "test_execution_time"
TEST_SUCCESS_DENSITY = "test_success_density"

METRICS = (
    SKIPPED_TESTS,
    TESTS,
    TEST_ERRORS,
    TEST_FAILURES,
    TEST_EXECUTION_TIME,
    TEST_SUCCESS_DENSITY,
)


def scale_value(value: float, decimals: int = 2) -> float:
    """Round *value* half-up to *decimals* places; NaN passes through."""
    if math.isnan(value) or math.isinf(value):
        return value
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def success_density(report: ClassReport) -> float:
    """Percentage of executed tests that passed, NaN when nothing ran."""
    executed = report.executed_tests
    if executed <= 0:
        return math.nan
    return scale_value(report.passed_tests * 100.0 / executed)


def compute_measures(report: ClassReport) -> Dict[str, float]:
    """Return the measures of *report* in publishing order.

    Inapplicable values are returned as NaN; publishers drop them.
    """
    return {
        SKIPPED_TESTS: float(report.skipped),
        TESTS: float(report.executed_tests),
        TEST_ERRORS: float(report.errors),
        TEST_FAILURES: float(report.failures),
        TEST_EXECUTION_TIME: float(report.duration_ms),
        TEST_SUCCESS_DENSITY: success_density(report),
    }


def is_publishable(report: ClassReport) -> bool:
    return report.tests > 0
