"""A small, deterministic linear congruential random source."""

from __future__ import annotations

from minirt.vec3 import Vec3, clamp

DEFAULT_SEED = 123456789
_MASK32 = 0xFFFFFFFF
_UINT64_MAX = float(0xFFFFFFFFFFFFFFFF)


class FastRandom:
    """Linear congruential generator producing reproducible samples."""

    def __init__(self, seed: int = DEFAULT_SEED) -> None:
        self.seed = seed & _MASK32

    def next_u32(self) -> int:
        self.seed = (1664525 * self.seed + 1013904223) & _MASK32
        return self.seed

    def random(self) -> float:
        """Return a float in [0, 1] built from two 32-bit draws."""
        high = self.next_u32()
        low = self.next_u32()
        return float((high << 32) | low) / _UINT64_MAX

    def vector(self) -> Vec3:
        return Vec3(self.random(), self.random(), self.random())

    def clamped_vector(self, low: float, high: float) -> Vec3:
        """Return a vector with components centred on zero, clamped to [low, high]."""
        scale = high - low
        return Vec3(
            *(clamp((self.random() - 0.5) * scale, low, high) for _ in range(3))
        )

    def unit_vector(self) -> Vec3:
        return self.clamped_vector(-1.0, 1.0).unit()

    def on_hemisphere(self, normal: Vec3) -> Vec3:
        """Return a unit vector in the hemisphere around ``normal``."""
        candidate = self.unit_vector()
        if candidate.dot(normal) > 0.0:
            return candidate
        return -candidate