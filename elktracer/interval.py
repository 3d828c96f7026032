"""
Closed numeric ranges used to bound acceptable ray hit distances.
"""

from __future__ import annotations
import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Interval:
    """A range [min, max] on the real line.

    An interval with min > max is empty and contains nothing.
    """
    min: float = math.inf
    max: float = -math.inf

    def size(self) -> float:
        return self.max - self.min

    def contains(self, value: float) -> bool:
        """Inclusive membership test."""
        return self.min <= value <= self.max

    def surrounds(self, value: float) -> bool:
        """Exclusive membership test."""
        return self.min < value < self.max

    def clamp(self, value: float) -> float:
        if value < self.min:
            return self.min
        if value > self.max:
            return self.max
        return value

    def with_max(self, new_max: float) -> Interval:
        """Return a copy of this interval with the upper bound replaced."""
        return Interval(self.min, new_max)


Interval.EMPTY = Interval(math.inf, -math.inf)
Interval.UNIVERSE = Interval(-math.inf, math.inf)
