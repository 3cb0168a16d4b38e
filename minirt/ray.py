"""Rays carrying the ambient light they fall back to on a miss."""

from __future__ import annotations

from dataclasses import dataclass, field

from minirt.vec3 import Vec3


@dataclass(frozen=True, slots=True)
class Ray:
    """A ray from ``origin`` along ``direction``."""

    origin: Vec3
    direction: Vec3
    ambient: Vec3 = field(default_factory=Vec3)
    ambient_intensity: float = 0.0

    def at(self, t: float) -> Vec3:
        """Return the point at parameter ``t`` along the ray."""
        return self.origin + self.direction * t