"""
Result types for change detection.

A zero ``difference`` is the compatibility marker for "no significant change";
``Outcome`` tells apart the two cases that collapse onto it.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from enum import Enum


class Outcome(str, Enum):
    NO_CANDIDATE = "no_candidate"
    NOT_SIGNIFICANT = "not_significant"
    SIGNIFICANT = "significant"


@dataclass(frozen=True)
class Stats:
    """Mean, variance and size of one side of a split."""

    mean: float = 0.0
    variance: float = 0.0
    count: int = 0


@dataclass(frozen=True)
class TResult:
    """
    Result of a Student's t-test.

    Fields:
    - difference: before.mean - after.mean, 0 when not significant
    - percent: difference relative to the after mean, in percent
    """

    difference: float = 0.0
    percent: float = 0.0


@dataclass(frozen=True)
class ChangePoint:
    index: int = 0
    tresult: TResult = field(default_factory=TResult)
    before: Stats = field(default_factory=Stats)
    after: Stats = field(default_factory=Stats)

    @property
    def difference(self) -> float:
        return self.tresult.difference

    @property
    def percent(self) -> float:
        return self.tresult.percent

    @property
    def significant(self) -> bool:
        return self.tresult.difference != 0

    @property
    def outcome(self) -> Outcome:
        # index 0 is only reachable as the sentinel: a real split needs
        # before.count = index + 1 >= 1
        if self.before.count == 0:
            return Outcome.NO_CANDIDATE
        if self.significant:
            return Outcome.SIGNIFICANT
        return Outcome.NOT_SIGNIFICANT

    def to_dict(self) -> dict:
        d = asdict(self)
        d["outcome"] = self.outcome.value
        d["finite_percent"] = math.isfinite(self.tresult.percent)
        return d
