"""Pinhole camera, per-pixel sampling and the recursive shading model."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Protocol, Sequence

from minirt.objects import (
    FLOAT_NEAR_ZERO,
    HitRecord,
    ObjectType,
    Props,
    SceneObject,
    world_hit,
)
from minirt.ray import Ray
from minirt.rng import FastRandom
from minirt.vec3 import Vec3, degrees_to_rad, splat

MAX_DEPTH = 10
MIN_REFLECTION_DROPOUT = 0.01
MIN_DIST = 0.001
MAX_DIST = math.inf
PHONG_SHININESS = 32.0
STANDARD_SAMPLES_PER_PIXEL = 4

_SHADOW_MIN = 0.0001
_SHADOW_MARGIN = 1e-4


class PixelTarget(Protocol):
    """Anything a camera can draw into."""

    width: int
    height: int

    def put_pixel(self, x: int, y: int, color: int) -> None: ...


def distance_attenuation(distance: float) -> float:
    """Light falloff factor for a light ``distance`` away."""
    distance = max(distance, 1e-6)
    att = 1.0 / (1.0 + 0.1 * distance + 0.032 * distance * distance)
    return att * 6.0


@dataclass
class _Shading:
    rec: HitRecord
    view_dir: Vec3
    light_acc: Vec3 = field(default_factory=Vec3)


def _lambert(shade: _Shading, light: Props, to_light: Vec3) -> None:
    ndotl = shade.rec.normal.dot(to_light.unit())
    if ndotl > 0.0:
        scale = light.brightness * ndotl * distance_attenuation(to_light.length())
        shade.light_acc = shade.light_acc + (light.color * scale) * shade.rec.material.color


def _phong(shade: _Shading, light: Props, to_light: Vec3) -> None:
    reflect_dir = (-to_light.unit()).reflect(shade.rec.normal)
    rdotv = reflect_dir.unit().dot(shade.view_dir)
    if rdotv > 0.0:
        scale = (
            light.brightness
            * rdotv**PHONG_SHININESS
            * shade.rec.material.reflectivity
            * distance_attenuation(to_light.length())
        )
        shade.light_acc = shade.light_acc + light.color * scale


def _apply_point_light(shade: _Shading, light: Props, world: Sequence[SceneObject]) -> None:
    to_light = light.position - shade.rec.point
    shadow_ray = Ray(
        shade.rec.point + shade.rec.normal * FLOAT_NEAR_ZERO,
        to_light.unit(),
    )
    blocked = world_hit(world, shadow_ray, _SHADOW_MIN, to_light.length() - _SHADOW_MARGIN)
    if blocked is None:
        _lambert(shade, light, to_light)
        _phong(shade, light, to_light)


def _scatter(incoming: Ray, rec: HitRecord, rng: FastRandom) -> Ray:
    if rng.random() < rec.material.scatter:
        direction = (rng.on_hemisphere(rec.normal) + rec.normal).unit()
    else:
        direction = incoming.direction.reflect(rec.normal).unit()
    return Ray(rec.point, direction)


def ray_color(
    ray: Ray,
    world: Sequence[SceneObject],
    depth: int,
    left_reflect: float,
    rng: FastRandom,
) -> Vec3:
    """Return the colour seen along ``ray``."""
    ambient = ray.ambient * ray.ambient_intensity
    if depth <= 0 or left_reflect < MIN_REFLECTION_DROPOUT:
        return ambient
    rec = world_hit(world, ray, MIN_DIST, MAX_DIST)
    if rec is None:
        return ambient
    material = rec.material
    if material.is_emitting:
        return material.color
    shade = _Shading(rec=rec, view_dir=(-ray.direction).unit())
    next_color = ray_color(
        _scatter(ray, rec, rng), world, depth - 1, left_reflect * material.reflectivity, rng
    )
    for obj in world:
        if obj.type == ObjectType.POINT_LIGHT:
            _apply_point_light(shade, obj.props, world)
    return (ambient + shade.light_acc) * (1.0 - material.reflectivity) + next_color * material.reflectivity


@dataclass
class Camera:
    """A camera at ``center`` looking at ``look_at`` with a vertical ``fov`` in degrees."""

    center: Vec3 = field(default_factory=Vec3)
    look_at: Vec3 = field(default_factory=lambda: Vec3(0.0, 0.0, -1.0))
    fov: float = 90.0
    image_width: int = 120
    image_height: int = 80
    samples_per_pixel: int = STANDARD_SAMPLES_PER_PIXEL
    ambient: Vec3 = field(default_factory=lambda: Vec3(1.0, 1.0, 1.0))
    ambient_intensity: float = 0.2
    vec_up: Vec3 = field(default_factory=lambda: Vec3(0.0, 1.0, 0.0))

    focal_length: float = field(init=False, default=0.0, repr=False)
    viewport_height: float = field(init=False, default=0.0, repr=False)
    viewport_width: float = field(init=False, default=0.0, repr=False)
    w: Vec3 = field(init=False, default_factory=Vec3, repr=False)
    u: Vec3 = field(init=False, default_factory=Vec3, repr=False)
    v: Vec3 = field(init=False, default_factory=Vec3, repr=False)
    viewport_u: Vec3 = field(init=False, default_factory=Vec3, repr=False)
    viewport_v: Vec3 = field(init=False, default_factory=Vec3, repr=False)
    delta_u: Vec3 = field(init=False, default_factory=Vec3, repr=False)
    delta_v: Vec3 = field(init=False, default_factory=Vec3, repr=False)
    upper_left: Vec3 = field(init=False, default_factory=Vec3, repr=False)

    def __post_init__(self) -> None:
        self.recalculate()

    def recalculate(self) -> None:
        """Recompute the viewport from position, target, fov and image size."""
        h = math.tan(degrees_to_rad(self.fov) / 2)
        self.focal_length = (self.center - self.look_at).length()
        self.viewport_height = 2 * h * self.focal_length
        self.viewport_width = self.viewport_height * (
            float(self.image_width) / float(self.image_height)
        )
        self.w = (self.center - self.look_at).unit()
        self.u = self.w.cross(self.vec_up).unit()
        self.v = self.w.cross(self.u)
        self.viewport_u = self.u * self.viewport_width
        self.viewport_v = self.v * self.viewport_height
        self.delta_u = self.viewport_u / splat(float(self.image_width))
        self.delta_v = self.viewport_v / splat(float(self.image_height))
        self.upper_left = (
            self.center
            - self.w * self.focal_length
            - self.viewport_u / 2.0
            - self.viewport_v / 2.0
        )

    def move(self, offset: Vec3) -> None:
        """Shift the point the camera looks at."""
        self.look_at = self.look_at + offset
        self.recalculate()

    def zoom(self, factor: float) -> None:
        """Scale the field of view by ``factor``."""
        self.fov *= factor
        self.recalculate()

    def resize(self, width: int, height: int) -> None:
        """Adapt the viewport to a new image size."""
        self.image_width = width
        self.image_height = height
        self.recalculate()

    def _sample_ray(self, pixel_center: Vec3, rng: FastRandom) -> Ray:
        jitter = Vec3(rng.random() - 0.5, rng.random() - 0.5, 0.0)
        sample_pos = pixel_center + jitter * (self.delta_u + self.delta_v)
        return Ray(self.center, sample_pos - self.center, self.ambient, self.ambient_intensity)

    def _pixel_color(
        self, world: Sequence[SceneObject], pixel00: Vec3, x: int, y: int, rng: FastRandom
    ) -> Vec3:
        pixel_center = pixel00 + (self.delta_u * float(x) + self.delta_v * float(y))
        weight = 1.0 / float(self.samples_per_pixel)
        color = Vec3()
        for _ in range(self.samples_per_pixel):
            sample = ray_color(self._sample_ray(pixel_center, rng), world, MAX_DEPTH, 1.0, rng)
            color = color + sample * weight
        return color

    def render(self, world: Sequence[SceneObject], image: PixelTarget, rng: FastRandom) -> None:
        """Trace every pixel of ``image`` and write the packed colours into it."""
        pixel00 = self.upper_left + (self.delta_u + self.delta_v) * 0.5
        for y in range(image.height):
            for x in range(image.width):
                color = self._pixel_color(world, pixel00, x, y, rng)
                image.put_pixel(x, y, color.to_color(1.0))