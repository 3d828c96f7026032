"""
RGB color in linear [0, 1] space.

Channels may exceed the range while light is being accumulated; they are
only clamped when converted to bytes for output.
"""

from __future__ import annotations
import math
from typing import Tuple

from .interval import Interval
from .vec3 import Vec3

# Upper bound keeps 256 * value below 256 so a channel never overflows a byte
_INTENSITY = Interval(0.0, 0.999)


def linear_to_gamma(linear_component: float) -> float:
    """Apply a gamma 2 curve; non-positive input maps to 0."""
    if linear_component > 0.0:
        return math.sqrt(linear_component)
    return 0.0


class Color(Vec3):
    """An RGB color sharing the arithmetic of Vec3."""

    __slots__ = ()

    def __init__(self, r: float = 0.0, g: float = 0.0, b: float = 0.0):
        super().__init__(r, g, b)

    @property
    def r(self) -> float:
        return self.x

    @property
    def g(self) -> float:
        return self.y

    @property
    def b(self) -> float:
        return self.z

    @classmethod
    def black(cls) -> Color:
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def white(cls) -> Color:
        return cls(1.0, 1.0, 1.0)

    def to_bytes(self) -> Tuple[int, int, int]:
        """Gamma-correct and quantize each channel to an integer in [0, 255]."""
        return tuple(
            int(256 * _INTENSITY.clamp(linear_to_gamma(c)))
            for c in (self.r, self.g, self.b)
        )

    def as_rgba(self, alpha: int = 255) -> Tuple[int, int, int, int]:
        """Byte channels plus a constant alpha, ready for the image buffer."""
        r, g, b = self.to_bytes()
        return r, g, b, alpha
