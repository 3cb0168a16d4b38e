import pytest

from minirt.ray import Ray
from minirt.vec3 import Vec3

ORIGIN = Vec3(1, 2, 3)
DIRECTION = Vec3(0, 0, -1)


def test_at_zero_is_origin():
    assert Ray(ORIGIN, DIRECTION).at(0) == ORIGIN


def test_at_one_is_origin_plus_direction():
    assert Ray(ORIGIN, DIRECTION).at(1) == ORIGIN + DIRECTION


def test_at_is_linear():
    ray = Ray(ORIGIN, Vec3(0.5, -1.5, 2.0))
    mid = ray.at(2.0)
    expected_mid = (ray.at(1.0) + ray.at(3.0)) / 2
    assert mid.x == pytest.approx(expected_mid.x)
    assert mid.y == pytest.approx(expected_mid.y)
    assert mid.z == pytest.approx(expected_mid.z)


def test_distance_along_unit_direction():
    ray = Ray(ORIGIN, DIRECTION)
    assert (ray.at(4.0) - ORIGIN).length() == pytest.approx(4.0)


def test_defaults_have_no_ambient():
    ray = Ray(ORIGIN, DIRECTION)
    assert ray.ambient == Vec3(0, 0, 0)
    assert ray.ambient_intensity == 0.0


def test_ambient_kept():
    ray = Ray(ORIGIN, DIRECTION, Vec3(1, 1, 1), 0.2)
    assert ray.ambient == Vec3(1, 1, 1)
    assert ray.ambient_intensity == 0.2