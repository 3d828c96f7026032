"""Tests for Scene."""

import math

import pytest

from elktracer.color import Color
from elktracer.interval import Interval
from elktracer.materials import Lambert, Metal
from elktracer.ray import Ray
from elktracer.scene import Scene
from elktracer.shapes import Sphere
from elktracer.vec3 import Vec3, Point3

FORWARD = Interval(0.001, math.inf)


@pytest.fixture
def scene():
    s = Scene()
    s.add_material(Lambert(Color(0.5, 0.5, 0.5)))
    s.add_material(Metal(Color(0.7, 0.7, 0.7), 0.0))
    return s


class TestSceneMaterials:
    """Test the material arena."""

    def test_handles_are_sequential(self):
        s = Scene()
        assert s.add_material(Lambert(Color(1, 0, 0))) == 0
        assert s.add_material(Lambert(Color(0, 1, 0))) == 1
        assert s.material(1) == Lambert(Color(0, 1, 0))

    def test_material_shared_between_objects(self, scene):
        scene.add(Sphere(Point3(0, 0, -1), 0.5, 1))
        scene.add(Sphere(Point3(2, 0, -1), 0.5, 1))
        assert scene.material(scene.objects[0].material) is scene.material(scene.objects[1].material)

    def test_unknown_handle_rejected(self, scene):
        with pytest.raises(IndexError):
            scene.add(Sphere(Point3(0, 0, -1), 0.5, 7))

    def test_constructor_with_objects(self):
        s = Scene([Sphere(Point3(0, 0, -1), 0.5, 0)], [Lambert(Color(1, 1, 1))])
        assert len(s) == 1


class TestNearestHit:
    """Test Scene.find_nearest_hit."""

    def test_empty_scene(self):
        assert Scene().find_nearest_hit(Ray(Point3(), Vec3(0, 0, -1)), FORWARD) is None

    @pytest.mark.parametrize("order", [(0, 1), (1, 0)])
    def test_nearest_wins_regardless_of_order(self, scene, order):
        spheres = [Sphere(Point3(0, 0, -3), 1.0, 0), Sphere(Point3(0, 0, -10), 1.0, 1)]
        for i in order:
            scene.add(spheres[i])

        hit = scene.find_nearest_hit(Ray(Point3(0, 0, 0), Vec3(0, 0, -1)), FORWARD)
        assert abs(hit.t - 2.0) < 1e-9
        assert hit.material == 0

    def test_respects_interval(self, scene):
        scene.add(Sphere(Point3(0, 0, -3), 1.0, 0))
        scene.add(Sphere(Point3(0, 0, -10), 1.0, 1))

        hit = scene.find_nearest_hit(Ray(Point3(0, 0, 0), Vec3(0, 0, -1)), Interval(5.0, math.inf))
        assert abs(hit.t - 9.0) < 1e-9
        assert hit.material == 1

    def test_miss(self, scene):
        scene.add(Sphere(Point3(0, 0, -3), 1.0, 0))
        assert scene.find_nearest_hit(Ray(Point3(0, 0, 0), Vec3(0, 1, 0)), FORWARD) is None

    def test_clear(self, scene):
        scene.add(Sphere(Point3(0, 0, -3), 1.0, 0))
        scene.clear()
        assert len(scene) == 0
        assert len(scene.materials) == 2
