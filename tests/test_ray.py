"""Tests for Ray class."""

import pytest

from elktracer.vec3 import Vec3, Point3
from elktracer.ray import Ray


class TestRay:
    """Test Ray evaluation."""

    def test_at(self):
        ray = Ray(Point3(1, 1, 0), Vec3(0.7, 0.2, 0.1))
        assert ray.at(3.0) == Point3(3.1, 1.6, 0.3)

    def test_at_unnormalized_direction(self):
        ray = Ray(Point3(1, 2, 3), Vec3(4, 5, 6))
        assert ray.at(2.0) == Point3(9, 12, 15)

    def test_at_zero_is_origin(self):
        ray = Ray(Point3(1, 2, 3), Vec3(0, 0, -1))
        assert ray.at(0.0) == Point3(1, 2, 3)

    def test_direction_not_normalized(self):
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, -2))
        assert ray.direction.magnitude() == 2.0

    def test_is_read_only(self):
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, -1))
        with pytest.raises(AttributeError):
            ray.origin = Point3(1, 1, 1)
