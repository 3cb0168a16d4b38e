import math

import pytest

from minirt.camera import Camera, distance_attenuation, ray_color
from minirt.image import Image
from minirt.objects import Material, ObjectType, Props, SceneObject
from minirt.ray import Ray
from minirt.rng import FastRandom
from minirt.vec3 import Vec3


def _sphere(position, radius, material):
    return SceneObject(ObjectType.SPHERE, Props(position=position, radius=radius), material)


def _light(position, brightness=1.0, color=Vec3(1.0, 1.0, 1.0)):
    return SceneObject(
        ObjectType.POINT_LIGHT,
        Props(position=position, brightness=brightness, color=color),
        Material(color=color, is_emitting=True),
    )


def test_attenuation_at_zero_distance_is_full_gain():
    assert distance_attenuation(0.0) == pytest.approx(6.0, rel=1e-5)


def test_attenuation_decreases_with_distance():
    values = [distance_attenuation(d) for d in (0.5, 1.0, 2.0, 5.0, 20.0)]
    assert all(a > b for a, b in zip(values, values[1:]))


def test_negative_distance_treated_as_tiny():
    assert distance_attenuation(-3.0) == distance_attenuation(0.0)


def test_viewport_matches_fov_and_aspect():
    cam = Camera(fov=90, image_width=120, image_height=80)
    assert cam.focal_length == pytest.approx(1.0)
    assert cam.viewport_height == pytest.approx(2.0)
    assert cam.viewport_width == pytest.approx(cam.viewport_height * 120 / 80)


def test_camera_basis_is_orthonormal():
    cam = Camera(center=Vec3(1, 2, 3), look_at=Vec3(-2, 0, -4))
    for axis in (cam.w, cam.u, cam.v):
        assert axis.length() == pytest.approx(1.0)
    assert cam.w.dot(cam.u) == pytest.approx(0.0, abs=1e-9)
    assert cam.w.dot(cam.v) == pytest.approx(0.0, abs=1e-9)
    assert cam.u.dot(cam.v) == pytest.approx(0.0, abs=1e-9)


def test_pixel_deltas_span_viewport():
    cam = Camera(image_width=64, image_height=32)
    assert cam.delta_u.length() * 64 == pytest.approx(cam.viewport_width)
    assert cam.delta_v.length() * 32 == pytest.approx(cam.viewport_height)


def test_upper_left_is_offset_from_view_centre():
    cam = Camera()
    view_centre = cam.center - cam.w * cam.focal_length
    rebuilt = cam.upper_left + cam.viewport_u / 2.0 + cam.viewport_v / 2.0
    assert rebuilt.x == pytest.approx(view_centre.x)
    assert rebuilt.y == pytest.approx(view_centre.y)
    assert rebuilt.z == pytest.approx(view_centre.z)


def test_move_shifts_target_and_recalculates():
    cam = Camera()
    cam.move(Vec3(0.0, 0.0, -1.0))
    assert cam.look_at == Vec3(0.0, 0.0, -2.0)
    assert cam.focal_length == pytest.approx(2.0)


def test_zoom_scales_fov_and_viewport():
    cam = Camera(fov=60)
    before = cam.viewport_height
    cam.zoom(1.5)
    assert cam.fov == pytest.approx(90)
    assert cam.viewport_height > before


def test_resize_updates_deltas():
    cam = Camera(image_width=100, image_height=100)
    cam.resize(50, 100)
    assert cam.image_width == 50
    assert cam.viewport_width == pytest.approx(cam.viewport_height / 2)
    assert cam.delta_u.length() * 50 == pytest.approx(cam.viewport_width)


def test_miss_returns_scaled_ambient():
    ray = Ray(Vec3(), Vec3(0, 0, -1), Vec3(1.0, 0.5, 0.25), 0.5)
    result = ray_color(ray, [], 5, 1.0, FastRandom())
    assert result == Vec3(1.0, 0.5, 0.25) * 0.5


def test_zero_depth_returns_ambient_even_with_hit():
    world = [_sphere(Vec3(0, 0, -5), 1.0, Material(color=Vec3(1, 0, 0)))]
    ray = Ray(Vec3(), Vec3(0, 0, -1), Vec3(0.2, 0.2, 0.2), 1.0)
    assert ray_color(ray, world, 0, 1.0, FastRandom()) == Vec3(0.2, 0.2, 0.2)


def test_emitting_surface_returns_its_colour():
    glow = Material(color=Vec3(0.3, 0.6, 0.9), is_emitting=True)
    world = [_sphere(Vec3(0, 0, -5), 1.0, glow)]
    ray = Ray(Vec3(), Vec3(0, 0, -1))
    assert ray_color(ray, world, 5, 1.0, FastRandom()) == Vec3(0.3, 0.6, 0.9)


def test_direct_light_uses_lambert_falloff():
    matte = Material(color=Vec3(1, 1, 1), reflectivity=0.0, scatter=0.5)
    world = [_sphere(Vec3(0, 0, -5), 1.0, matte), _light(Vec3(0, 0, 0))]
    ray = Ray(Vec3(), Vec3(0, 0, -1))
    result = ray_color(ray, world, 5, 1.0, FastRandom())
    expected = distance_attenuation(4.0)
    assert result.x == pytest.approx(expected, rel=1e-6)
    assert result.y == pytest.approx(expected, rel=1e-6)
    assert result.z == pytest.approx(expected, rel=1e-6)


def test_light_behind_surface_adds_nothing():
    matte = Material(color=Vec3(1, 1, 1), reflectivity=0.0, scatter=0.5)
    world = [_sphere(Vec3(0, 0, -5), 1.0, matte), _light(Vec3(0, 0, -20))]
    ray = Ray(Vec3(), Vec3(0, 0, -1), Vec3(1, 1, 1), 0.1)
    result = ray_color(ray, world, 5, 1.0, FastRandom())
    assert result == Vec3(1, 1, 1) * 0.1


def test_render_empty_world_fills_with_ambient():
    cam = Camera(image_width=4, image_height=3, samples_per_pixel=2)
    image = Image(4, 3)
    cam.render([], image, FastRandom())
    expected = (cam.ambient * cam.ambient_intensity).to_color(1.0)
    assert all(image.pixel(x, y) == expected for y in range(3) for x in range(4))


def test_render_is_reproducible_with_same_seed():
    material = Material(color=Vec3(0.8, 0.2, 0.2), reflectivity=0.1, scatter=0.5)
    world = [_sphere(Vec3(0, 0, -3), 1.0, material), _light(Vec3(2, 2, 0))]
    cam = Camera(image_width=5, image_height=4, samples_per_pixel=2)
    first, second = Image(5, 4), Image(5, 4)
    cam.render(world, first, FastRandom(7))
    cam.render(world, second, FastRandom(7))
    assert first.to_ppm() == second.to_ppm()
    centre_hit = first.pixel(2, 2)
    background = (cam.ambient * cam.ambient_intensity).to_color(1.0)
    assert centre_hit != background or math.isclose(0.0, 1.0)