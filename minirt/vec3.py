"""Three-component vectors used for points, directions and colours."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Union

NEAR_ZERO = 1e-8

Operand = Union["Vec3", float, int]


@dataclass(frozen=True, slots=True)
class Vec3:
    """An immutable 3D vector; also used as an RGB colour in [0, 1]."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    @staticmethod
    def _coerce(other: Operand) -> Vec3 | None:
        if isinstance(other, Vec3):
            return other
        if isinstance(other, (int, float)):
            return splat(float(other))
        return None

    def __add__(self, other: Operand) -> Vec3:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return Vec3(self.x + rhs.x, self.y + rhs.y, self.z + rhs.z)

    __radd__ = __add__

    def __sub__(self, other: Operand) -> Vec3:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return Vec3(self.x - rhs.x, self.y - rhs.y, self.z - rhs.z)

    def __mul__(self, other: Operand) -> Vec3:
        """Component-wise product with a vector, or scaling by a number."""
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return Vec3(self.x * rhs.x, self.y * rhs.y, self.z * rhs.z)

    __rmul__ = __mul__

    def __truediv__(self, other: Operand) -> Vec3:
        """Component-wise division; a zero divisor yields a zero component."""
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return Vec3(
            *(a / b if b != 0 else 0.0 for a, b in zip(self, rhs))
        )

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalize(self) -> Vec3:
        """Return the unit vector, or the zero vector if the length is zero."""
        length = self.length()
        if length == 0:
            return Vec3()
        return Vec3(self.x / length, self.y / length, self.z / length)

    def unit(self) -> Vec3:
        """Divide by the length, component-wise guarded against zero."""
        return self / splat(self.length())

    def reflect(self, normal: Vec3) -> Vec3:
        """Reflect this vector about ``normal``."""
        return self - normal * (2.0 * self.dot(normal))

    def near_zero(self) -> bool:
        return all(abs(c) < NEAR_ZERO for c in self)

    def gamma(self) -> Vec3:
        return Vec3(*(linear_to_gamma(c) for c in self))

    def to_color(self, alpha: float) -> int:
        """Pack into a 32-bit RGBA integer, clamping each channel to [0, 1]."""
        r, g, b, a = (
            int(clamp(c, 0.0, 1.0) * 255.0) for c in (self.x, self.y, self.z, alpha)
        )
        return (r << 24) | (g << 16) | (b << 8) | a


def splat(value: float) -> Vec3:
    """Return a vector with every component equal to ``value``."""
    return Vec3(value, value, value)


def clamp(value: float, low: float, high: float) -> float:
    if value < low:
        return low
    if value > high:
        return high
    return value


def linear_to_gamma(component: float) -> float:
    return component if component > 0 else 0.0


def degrees_to_rad(deg: float) -> float:
    return deg * (math.pi / 180)


def rad_to_deg(rad: float) -> float:
    return rad * (180 / math.pi)