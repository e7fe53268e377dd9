"""
Unit tests for the critical-value table and confidence levels.
"""

import numpy as np
import pytest
from scipy import stats

from scattercpd.exceptions import ConfigurationError
from scattercpd.student import NSTUDENT, STUDENT, STUDENT_PCT, Confidence, critical_value


def test_table_shape_and_read_only():
    assert STUDENT.shape == (NSTUDENT + 1, len(Confidence))
    assert not STUDENT.flags.writeable
    with pytest.raises(ValueError):
        STUDENT[1, 0] = 0.0


def test_table_non_decreasing_with_confidence():
    assert np.all(np.diff(STUDENT, axis=1) >= 0)


def test_table_non_increasing_with_degrees_of_freedom():
    assert np.all(np.diff(STUDENT[1:], axis=0) <= 0)
    assert np.all(STUDENT[NSTUDENT] >= STUDENT[0])


def test_table_matches_t_distribution():
    df = np.arange(1, NSTUDENT + 1)
    for col, pct in enumerate(STUDENT_PCT[:-1]):
        q = 1.0 - (1.0 - pct / 100.0) / 2.0
        np.testing.assert_allclose(STUDENT[1:, col], stats.t.ppf(q, df), atol=2e-3)
        assert STUDENT[0, col] == pytest.approx(stats.norm.ppf(q), abs=2e-3)

    # the last column carries the one-sided 99.9% quantiles of the ministat table
    np.testing.assert_allclose(STUDENT[1:, -1], stats.t.ppf(0.999, df), atol=2e-3)
    assert STUDENT[0, -1] == pytest.approx(stats.norm.ppf(0.999), abs=2e-3)


@pytest.mark.parametrize("df, row", [(1, 1), (50, 50), (100, 100), (101, 0), (150, 0), (0, 0)])
def test_critical_value_rows(df, row):
    for conf in Confidence:
        assert critical_value(df, conf) == STUDENT[row, int(conf)]


def test_known_critical_values():
    assert critical_value(1, Confidence.CONF95) == 12.706
    assert critical_value(21, Confidence.CONF95) == 2.080
    assert critical_value(1000, Confidence.CONF95) == 1.960


def test_confidence_order_and_percent():
    assert [c.percent for c in Confidence] == [80.0, 90.0, 95.0, 98.0, 99.0, 99.5]
    assert [int(c) for c in Confidence] == list(range(6))


def test_confidence_from_percent():
    assert Confidence.from_percent(95) is Confidence.CONF95
    assert Confidence.from_percent(99.5) is Confidence.CONF99P5

    with pytest.raises(ConfigurationError):
        Confidence.from_percent(97)
