"""Scene objects and ray intersection against spheres, planes and cylinders."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable

from minirt.ray import Ray
from minirt.vec3 import NEAR_ZERO, Vec3, splat

FLOAT_NEAR_ZERO = 1e-6
_CAP_TOLERANCE = 1e-6


class ObjectType(IntEnum):
    """Kinds of objects a scene can hold."""

    SPHERE = 0
    CYLINDER = 1
    PLANE = 2
    POINT_LIGHT = 3
    ERROR = 0xFFFF


@dataclass
class Material:
    """Surface appearance of an object."""

    color: Vec3 = field(default_factory=Vec3)
    reflectivity: float = 0.0
    is_emitting: bool = False
    scatter: float = 0.0


@dataclass
class Props:
    """Geometric and lighting properties shared by every object kind."""

    position: Vec3 = field(default_factory=Vec3)
    rotation: Vec3 = field(default_factory=Vec3)
    color: Vec3 = field(default_factory=Vec3)
    radius: float = 0.0
    diameter: float = 0.0
    height: float = 0.0
    brightness: float = 0.0


@dataclass
class SceneObject:
    """One entry of the scene: its kind, geometry and material."""

    type: ObjectType
    props: Props = field(default_factory=Props)
    material: Material = field(default_factory=Material)


@dataclass
class HitRecord:
    """Where and how a ray met a surface."""

    point: Vec3
    normal: Vec3
    t: float
    material: Material | None = None
    front_face: bool = False

    def set_face_normal(self, ray: Ray, outward_normal: Vec3) -> None:
        """Store the normal so that it always faces against the ray."""
        self.front_face = ray.direction.dot(outward_normal) < 0
        self.normal = outward_normal if self.front_face else -outward_normal


def hit_sphere(obj: SceneObject, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
    """Intersect ``ray`` with a sphere object.

    The nearer root is reported whenever either root lies inside the range.
    """
    props = obj.props
    oc = props.position - ray.origin
    a = ray.direction.dot(ray.direction)
    h = ray.direction.dot(oc)
    c = oc.dot(oc) - props.radius * props.radius
    disc = h * h - a * c
    if disc < 0:
        return None
    sqrt_d = math.sqrt(disc)
    if a == 0:
        return None
    root = (h - sqrt_d) / a
    far = (h + sqrt_d) / a
    if (root <= t_min or t_max <= root) and (far <= t_min or t_max <= far):
        return None
    point = ray.at(root)
    rec = HitRecord(point=point, normal=Vec3(), t=root, material=obj.material)
    rec.set_face_normal(ray, (point - props.position) / splat(props.radius))
    return rec


def hit_plane(obj: SceneObject, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
    """Intersect ``ray`` with an infinite plane object."""
    props = obj.props
    normal = props.rotation.unit()
    denom = normal.dot(ray.direction)
    if abs(denom) < NEAR_ZERO:
        return None
    d = normal.dot(props.position)
    t = (d - normal.dot(ray.origin)) / denom
    if t < t_min or t > t_max:
        return None
    rec = HitRecord(point=ray.at(t), normal=Vec3(), t=t, material=obj.material)
    rec.set_face_normal(ray, normal)
    return rec


def _body_hit(axis: Vec3, props: Props, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
    ro_base = ray.origin - props.position
    d_perp = ray.direction - axis * ray.direction.dot(axis)
    o_perp = ro_base - axis * ro_base.dot(axis)
    a = d_perp.dot(d_perp)
    b = 2.0 * d_perp.dot(o_perp)
    c = o_perp.dot(o_perp) - props.radius * props.radius
    if abs(a) <= FLOAT_NEAR_ZERO:
        return None
    disc = b * b - 4.0 * a * c
    if disc < 0.0:
        return None
    # Only the nearer root is considered.
    t = (-b - math.sqrt(disc)) / (2.0 * a)
    if not (t_min < t < t_max):
        return None
    point = ray.at(t)
    proj = (point - props.position).dot(axis)
    if -FLOAT_NEAR_ZERO <= proj <= props.height + FLOAT_NEAR_ZERO:
        normal = (point - props.position - axis * proj).unit()
        return HitRecord(point=point, normal=normal, t=t)
    return None


def _cap_hit(axis: Vec3, props: Props, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
    caps = (
        (props.position, -axis),
        (props.position + axis * props.height, axis),
    )
    denom = axis.dot(ray.direction)
    if abs(denom) < FLOAT_NEAR_ZERO:
        return None
    best: HitRecord | None = None
    limit = props.radius * props.radius + _CAP_TOLERANCE
    for centre, cap_normal in caps:
        t = axis.dot(centre - ray.origin) / denom
        if not (t_min < t < t_max):
            continue
        point = ray.at(t)
        offset = point - centre
        radial = offset - axis * offset.dot(axis)
        if radial.dot(radial) <= limit and (best is None or t < best.t):
            best = HitRecord(point=point, normal=cap_normal, t=t)
    return best


def hit_cylinder(obj: SceneObject, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
    """Intersect ``ray`` with a capped cylinder object."""
    props = obj.props
    axis = props.rotation.unit()
    body = _body_hit(axis, props, ray, t_min, t_max)
    cap = _cap_hit(axis, props, ray, t_min, t_max)
    candidates = [hit for hit in (body, cap) if hit is not None]
    if not candidates:
        return None
    best = body if cap is None or (body is not None and body.t <= cap.t) else cap
    rec = HitRecord(point=best.point, normal=Vec3(), t=best.t, material=obj.material)
    rec.set_face_normal(ray, best.normal.unit())
    return rec


_HITTERS = {
    ObjectType.SPHERE: hit_sphere,
    ObjectType.PLANE: hit_plane,
    ObjectType.CYLINDER: hit_cylinder,
}


def world_hit(
    world: Iterable[SceneObject], ray: Ray, t_min: float, t_max: float
) -> HitRecord | None:
    """Return the closest hit among all objects, or ``None`` on a miss."""
    closest: HitRecord | None = None
    for obj in world:
        hitter = _HITTERS.get(obj.type)
        if hitter is None:
            continue
        rec = hitter(obj, ray, t_min, t_max)
        if rec is not None and (closest is None or rec.t < closest.t):
            rec.material = obj.material
            closest = rec
    return closest