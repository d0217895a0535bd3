import math

import pytest

from surefire_rollup.metrics import (
    compute_measures,
    is_publishable,
    scale_value,
    success_density,
)
from surefire_rollup.models import ClassReport


def test_measures_for_mixed_report():
    report = ClassReport(tests=5, skipped=1, errors=0, failures=1, duration_ms=321)

    assert compute_measures(report) == {
        "skipped_tests": 1.0,
        "tests": 4.0,
        "test_errors": 0.0,
        "test_failures": 1.0,
        "test_execution_time": 321.0,
        "test_success_density": 75.0,
    }


def test_all_skipped_has_no_density():
    measures = compute_measures(ClassReport(tests=2, skipped=2))

    assert measures["skipped_tests"] == 2.0
    assert measures["tests"] == 0.0
    assert math.isnan(measures["test_success_density"])


def test_density_is_rounded_to_two_decimals():
    assert success_density(ClassReport(tests=3, failures=1)) == 66.67
    assert success_density(ClassReport(tests=3, errors=2)) == 33.33
    assert success_density(ClassReport(tests=8, failures=1)) == 87.5


@pytest.mark.parametrize(
    "value, expected",
    [(0.125, 0.13), (2.675, 2.68), (10.0, 10.0), (-1.005, -1.01)],
)
def test_scale_value_rounds_half_up(value, expected):
    assert scale_value(value) == expected


def test_scale_value_keeps_nan():
    assert math.isnan(scale_value(math.nan))


def test_only_reports_with_tests_are_publishable():
    assert is_publishable(ClassReport(tests=1, skipped=1))
    assert not is_publishable(ClassReport())
