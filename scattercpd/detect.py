"""
Single change point detection by between-class scatter maximisation.

http://excelsior.cs.ucsb.edu/papers/as06.pdf

The estimator examines the distributions on either side of each candidate
split and picks the index where they are most dissimilar. A window need not
contain a change point at all, so the split is then gated by a Student's
t-test to cut down on false positives.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np
import pandas as pd
from numba import njit

from .config import coerce_confidence, config
from .exceptions import WindowValidationError
from .schema import ChangePoint, Stats
from .student import Confidence
from .ttest import ttest
from .utils import as_window, prefix_sums

logger = logging.getLogger(__name__)


# The paper also defines a within-class scatter sw and minimises sw/sb, then
# proves that is equivalent to maximising sb. sb depends only on the means;
# variances are computed for the t-test, and only when sb reaches a new max.
#
# Variance uses (count - 1) inside the correction term as well as outside it.

@njit(error_model="numpy")
def _scan_njit(cumsum, cumsumsq, min_sample_size):
    n = cumsum.shape[0]
    total = 0.0
    totalsq = 0.0
    if n > 0:
        total = cumsum[n - 1]
        totalsq = cumsumsq[n - 1]

    # sb is never negative, so 0 is a safe floor
    maxsb = 0.0
    idx = 0
    m1 = 0.0
    v1 = 0.0
    m2 = 0.0
    v2 = 0.0
    c1 = 0
    c2 = 0

    for l in range(min_sample_size, n - 1 - min_sample_size):
        n1 = float(l + 1)
        mean1 = cumsum[l] / n1

        n2 = float(n - l - 1)
        sum2 = total - cumsum[l]
        mean2 = sum2 / n2

        sb = ((n1 * n2) / (n1 + n2)) * (mean1 - mean2) * (mean1 - mean2)
        if maxsb < sb:
            maxsb = sb
            idx = l
            m1 = mean1
            v1 = (cumsumsq[l] - (cumsum[l] * cumsum[l]) / (n1 - 1)) / (n1 - 1)
            c1 = l + 1
            m2 = mean2
            v2 = ((totalsq - cumsumsq[l]) - (sum2 * sum2) / (n2 - 1)) / (n2 - 1)
            c2 = n - l - 1

    return idx, maxsb, m1, v1, c1, m2, v2, c2


def scan_scatter(cumsum, cumsumsq, min_sample_size):
    n = len(cumsum)
    total = cumsum[-1] if n else np.float64(0.0)
    totalsq = cumsumsq[-1] if n else np.float64(0.0)

    maxsb = np.float64(0.0)
    idx = 0
    m1 = v1 = m2 = v2 = np.float64(0.0)
    c1 = c2 = 0

    with np.errstate(all="ignore"):
        for l in range(min_sample_size, n - 1 - min_sample_size):
            n1 = np.float64(l + 1)
            mean1 = cumsum[l] / n1

            n2 = np.float64(n - l - 1)
            sum2 = total - cumsum[l]
            mean2 = sum2 / n2

            sb = ((n1 * n2) / (n1 + n2)) * (mean1 - mean2) * (mean1 - mean2)
            if maxsb < sb:
                maxsb = sb; idx = l
                m1 = mean1
                v1 = (cumsumsq[l] - (cumsum[l] * cumsum[l]) / (n1 - 1)) / (n1 - 1)
                c1 = l + 1
                m2 = mean2
                v2 = ((totalsq - cumsumsq[l]) - (sum2 * sum2) / (n2 - 1)) / (n2 - 1)
                c2 = n - l - 1

    return idx, maxsb, m1, v1, c1, m2, v2, c2


def _scan_fast(cumsum, cumsumsq, min_sample_size, use_numba):
    if use_numba:
        return _scan_njit(cumsum, cumsumsq, int(min_sample_size))
    return scan_scatter(cumsum, cumsumsq, int(min_sample_size))


def _as_count(value):
    try:
        count = int(value)
    except (TypeError, ValueError, OverflowError):
        raise WindowValidationError(f"min_sample_size must be an integer, got {value!r}") from None
    if isinstance(value, bool) or count != value:
        raise WindowValidationError(f"min_sample_size must be an integer, got {value!r}")
    return count


def _resolve(min_sample_size, confidence, use_numba):
    dcfg = config.detector
    min_sample_size = dcfg.min_sample_size if min_sample_size is None else _as_count(min_sample_size)
    if min_sample_size < 0:
        raise WindowValidationError(f"min_sample_size must be >= 0, got {min_sample_size}")
    confidence = dcfg.confidence if confidence is None else coerce_confidence(confidence)
    use_numba = dcfg.use_numba if use_numba is None else bool(use_numba)
    return min_sample_size, confidence, use_numba


def detect_change(
    window,
    min_sample_size: Optional[int] = None,
    confidence: Optional[Confidence] = None,
    *,
    use_numba: Optional[bool] = None,
) -> ChangePoint:
    """
    Locate the most likely change point in ``window`` and test it.

    ``index`` is the last position before the shift. When no split is
    evaluated, or no split separates the means at all, the result is index 0
    with empty Stats and a zero TResult, the same as a rejected split;
    ``ChangePoint.outcome`` distinguishes the two.

    Unset arguments fall back to ``config.detector``.
    """
    min_sample_size, confidence, use_numba = _resolve(min_sample_size, confidence, use_numba)
    y = as_window(window)

    # flat windows have no split, even where prefix-sum rounding leaves
    # ulp-sized scatter
    if y.size and y.min() == y.max():
        logger.debug("flat window: n=%d", y.size)
        return ChangePoint()

    cumsum, cumsumsq = prefix_sums(y)

    idx, maxsb, m1, v1, c1, m2, v2, c2 = _scan_fast(cumsum, cumsumsq, min_sample_size, use_numba)

    if c1 == 0:
        logger.debug("no candidate split: n=%d min_sample_size=%d", len(y), min_sample_size)
        return ChangePoint()

    before = Stats(mean=float(m1), variance=float(v1), count=int(c1))
    after = Stats(mean=float(m2), variance=float(v2), count=int(c2))
    tresult = ttest(before, after, confidence)

    logger.debug(
        "split at %d (sb=%g) before=%s after=%s conf=%s%% -> difference=%g",
        idx, maxsb, before, after, confidence.percent, tresult.difference,
    )
    return ChangePoint(index=int(idx), tresult=tresult, before=before, after=after)


@dataclass
class ChangeDetector:
    """
    Detector with fixed scan parameters, for repeated checks of a sliding window.

    Unset fields are taken from ``config.detector`` on construction.
    """

    min_sample_size: Optional[int] = None
    confidence: Optional[Confidence] = None
    use_numba: Optional[bool] = None

    def __post_init__(self) -> None:
        self.min_sample_size, self.confidence, self.use_numba = _resolve(
            self.min_sample_size, self.confidence, self.use_numba
        )

    def check(self, window) -> ChangePoint:
        return detect_change(
            window, self.min_sample_size, self.confidence, use_numba=self.use_numba
        )


def _window_ends(n, window, step):
    if window < 1:
        raise WindowValidationError(f"window must be >= 1, got {window}")
    if step < 1:
        raise WindowValidationError(f"step must be >= 1, got {step}")
    return range(window, n + 1, step)


def detect_on_array(values, window: int, step: int = 1, *,
                    min_sample_size=None, confidence=None, use_numba=None) -> List[ChangePoint]:
    """Run ``detect_change`` on each trailing window ``values[end-window:end]``."""
    y = as_window(values)
    detector = ChangeDetector(min_sample_size, confidence, use_numba)
    return [detector.check(y[end - window:end]) for end in _window_ends(len(y), window, step)]


def detect_on_df_window(df: pd.DataFrame, window: int, value_col: str = "value",
                        time_col: Optional[str] = None, step: int = 1, *,
                        min_sample_size=None, confidence=None, use_numba=None) -> pd.DataFrame:
    """
    Per-window detection over a DataFrame column.

    One row per window, labelled by its last row ``t``. ``cp_location`` is the
    absolute row position of the split, -1 when no significant change.
    """
    for col in (value_col, time_col):
        if col is not None and col not in df:
            raise WindowValidationError(f"missing column {col!r}")

    y = as_window(df[value_col].to_numpy())
    detector = ChangeDetector(min_sample_size, confidence, use_numba)
    rows = []
    for end in _window_ends(len(y), window, step):
        start = end - window
        cp = detector.check(y[start:end])
        row = {
            "t": end - 1,
            "cp_location": start + cp.index if cp.significant else -1,
            "cp_location_norm": cp.index / window if cp.significant else np.nan,
            "difference": cp.difference,
            "percent": cp.percent,
            "outcome": cp.outcome.value,
        }
        if time_col is not None:
            row[time_col] = df[time_col].iloc[end - 1]
        rows.append(row)

    logger.info("scanned %d windows of %d points, %d significant",
                len(rows), window, sum(r["cp_location"] >= 0 for r in rows))
    columns = ["t"] + ([time_col] if time_col is not None else []) + [
        "cp_location", "cp_location_norm", "difference", "percent", "outcome"]
    return pd.DataFrame(rows, columns=columns)
