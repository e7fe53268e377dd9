"""
Unit tests for the significance gate.
"""

import math

import pytest

from scattercpd.schema import Stats, TResult
from scattercpd.student import Confidence
from scattercpd.ttest import significance_margin, ttest


def test_significant_difference():
    before = Stats(mean=1.0, variance=1.0, count=10)
    after = Stats(mean=3.0, variance=1.0, count=10)

    r = ttest(before, after, Confidence.CONF95)
    assert r.difference == -2.0
    assert r.percent == pytest.approx(-200.0 / 3.0)


def test_difference_within_margin_is_rejected():
    before = Stats(mean=1.0, variance=1.0, count=10)
    after = Stats(mean=1.5, variance=1.0, count=10)

    assert ttest(before, after, Confidence.CONF95) == TResult()


def test_margin_uses_pooled_standard_error():
    before = Stats(mean=0.0, variance=1.0, count=10)
    after = Stats(mean=0.0, variance=1.0, count=10)

    # df = 18, spool = 1
    e = significance_margin(before, after, Confidence.CONF95)
    assert e == pytest.approx(2.101 * math.sqrt(0.2))


def test_margin_grows_with_confidence():
    before = Stats(mean=10.0, variance=4.0, count=20)
    after = Stats(mean=11.2, variance=5.0, count=25)

    margins = [significance_margin(before, after, c) for c in Confidence]
    assert margins == sorted(margins)

    significant = [ttest(before, after, c).difference != 0 for c in Confidence]
    # once rejected, a higher level never accepts again
    assert significant == sorted(significant, reverse=True)
    assert significant[0] and not significant[-1]


def test_zero_reference_mean_gives_infinite_percent():
    before = Stats(mean=1.0, variance=1.0, count=10)
    after = Stats(mean=0.0, variance=1.0, count=10)

    r = ttest(before, after, Confidence.CONF95)
    assert r.difference == 1.0
    assert math.isinf(r.percent)


def test_degenerate_groups_do_not_raise():
    before = Stats(mean=1.0, variance=0.0, count=1)
    after = Stats(mean=2.0, variance=0.0, count=1)

    # 0/0 pooled variance gives a NaN margin, which is not a rejection
    assert math.isnan(significance_margin(before, after, Confidence.CONF95))
    assert ttest(before, after, Confidence.CONF95).difference == -1.0


def test_zero_variance_groups():
    before = Stats(mean=1.0, variance=0.0, count=5)
    after = Stats(mean=1.0, variance=0.0, count=5)

    assert ttest(before, after, Confidence.CONF99) == TResult()
