"""Pooled two-sample Student's t-test used to gate detected splits."""

import numpy as np

from .schema import Stats, TResult
from .student import Confidence, critical_value


def significance_margin(before: Stats, after: Stats, confidence: Confidence) -> float:
    """Half-width e = t * s of the interval the mean difference must exceed."""
    t = critical_value(before.count + after.count - 2, confidence)

    dn = np.float64(before.count)
    rn = np.float64(after.count)

    with np.errstate(all="ignore"):
        spool = (dn - 1) * before.variance + (rn - 1) * after.variance
        spool /= dn + rn - 2
        spool = np.sqrt(spool)
        s = spool * np.sqrt(1 / dn + 1 / rn)
        return float(t * s)


# From https://github.com/codahale/ministat/blob/master/src/ministat.c
def ttest(before: Stats, after: Stats, confidence: Confidence) -> TResult:
    e = significance_margin(before, after, confidence)
    d = np.float64(before.mean) - np.float64(after.mean)

    # NaN margins compare False here and are reported as a difference
    if abs(d) <= e:
        return TResult()

    with np.errstate(all="ignore"):
        percent = d * 100 / np.float64(after.mean)
    return TResult(difference=float(d), percent=float(percent))
