"""Extended-range colors used as convolution accumulators."""

import numbers
from dataclasses import dataclass
from typing import NamedTuple


def clamp_0_255(value: float) -> float:
    """Restrict a channel value to [0, 255]."""
    if value < 0:
        return 0.0
    if value > 255:
        return 255.0
    return value


def to_byte(value: float) -> int:
    """Clamp and round a channel value to 0..255 (round half to even)."""
    return int(round(clamp_0_255(value)))


class Color32(NamedTuple):
    """8-bit per channel color."""
    a: int
    r: int
    g: int
    b: int


@dataclass(frozen=True)
class PreciseColor:
    """ARGB color with unbounded float channels.

    Arithmetic never clamps; out-of-range and fractional values are only
    resolved by ``to_color32``.
    """
    a: float
    r: float
    g: float
    b: float

    @classmethod
    def zero(cls) -> "PreciseColor":
        return cls(0.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_argb(cls, a: float, r: float, g: float, b: float) -> "PreciseColor":
        return cls(float(a), float(r), float(g), float(b))

    @classmethod
    def from_color32(cls, color: Color32) -> "PreciseColor":
        return cls.from_argb(color.a, color.r, color.g, color.b)

    def to_color32(self) -> Color32:
        """Clamp each channel independently to [0, 255] and round."""
        return Color32(to_byte(self.a), to_byte(self.r), to_byte(self.g), to_byte(self.b))

    def __add__(self, other: "PreciseColor") -> "PreciseColor":
        if not isinstance(other, PreciseColor):
            return NotImplemented
        return PreciseColor(self.a + other.a, self.r + other.r, self.g + other.g, self.b + other.b)

    def __sub__(self, other: "PreciseColor") -> "PreciseColor":
        if not isinstance(other, PreciseColor):
            return NotImplemented
        return PreciseColor(self.a - other.a, self.r - other.r, self.g - other.g, self.b - other.b)

    def __mul__(self, scalar: float) -> "PreciseColor":
        if not isinstance(scalar, numbers.Real):
            return NotImplemented
        return PreciseColor(scalar * self.a, scalar * self.r, scalar * self.g, scalar * self.b)

    __rmul__ = __mul__
