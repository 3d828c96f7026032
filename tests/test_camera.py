"""Tests for Camera and CameraDescriptor."""

import math

import pytest

from elktracer.camera import Camera, CameraDescriptor
from elktracer.vec3 import Vec3, Point3


def forward_descriptor(**overrides):
    params = dict(
        position=Point3(0, 0, 0),
        look_at=Point3(0, 0, -1),
        up=Vec3(0, 1, 0),
        fov_vertical_degrees=90.0,
        defocus_angle=0.0,
        focus_distance=1.0,
    )
    params.update(overrides)
    return CameraDescriptor(**params)


class TestCameraDescriptor:
    """Test CameraDescriptor defaults."""

    def test_defaults(self):
        descriptor = CameraDescriptor()
        assert descriptor.position == Point3(10, 2, 0)
        assert descriptor.look_at == Point3(0, 0, 0)
        assert descriptor.up == Vec3(0, 1, 0)
        assert descriptor.fov_vertical_degrees == 15.0
        assert descriptor.defocus_angle == 0.5
        assert descriptor.focus_distance == 10.0

    def test_is_frozen(self):
        descriptor = CameraDescriptor()
        with pytest.raises(AttributeError):
            descriptor.focus_distance = 3.0


class TestViewport:
    """Test viewport computation."""

    def test_starts_uninitialized(self, rng):
        cam = Camera()
        assert not cam.is_ready
        with pytest.raises(RuntimeError):
            cam.get_ray(0, 0, rng)

    def test_reset_makes_ready(self):
        cam = Camera()
        cam.reset_viewport(forward_descriptor(), 3, 3)
        assert cam.is_ready
        assert (cam.image_width, cam.image_height) == (3, 3)

    def test_pixel_grid(self):
        cam = Camera()
        cam.reset_viewport(forward_descriptor(), 3, 3)

        # 90 degree fov at focus distance 1 spans [-1, 1] on both axes
        assert cam.pixel_delta_x == Vec3(2 / 3, 0, 0)
        assert cam.pixel_delta_y == Vec3(0, -2 / 3, 0)
        assert cam.upper_left_pixel == Point3(-2 / 3, 2 / 3, -1)

    def test_viewport_width_follows_pixel_ratio(self):
        cam = Camera()
        cam.reset_viewport(forward_descriptor(), 4, 2)
        assert cam.pixel_delta_x == Vec3(1, 0, 0)
        assert cam.pixel_delta_y == Vec3(0, -1, 0)

    def test_focus_distance_scales_viewport(self):
        cam = Camera()
        cam.reset_viewport(forward_descriptor(focus_distance=2.0), 3, 3)
        assert cam.upper_left_pixel == Point3(-4 / 3, 4 / 3, -2)

    def test_reset_recomputes(self):
        cam = Camera()
        cam.reset_viewport(forward_descriptor(), 3, 3)
        cam.reset_viewport(forward_descriptor(position=Point3(0, 0, 5), look_at=Point3(0, 0, 4)), 3, 3)
        assert cam.position == Point3(0, 0, 5)
        assert cam.upper_left_pixel == Point3(-2 / 3, 2 / 3, 4)

    def test_defocus_disk_basis_vectors_independent(self):
        cam = Camera()
        cam.reset_viewport(forward_descriptor(defocus_angle=10.0, focus_distance=2.0), 3, 3)
        radius = 2.0 * math.tan(math.radians(5.0))

        assert cam.defocus_disk_x == Vec3(radius, 0, 0)
        assert cam.defocus_disk_y == Vec3(0, radius, 0)


class TestCameraRays:
    """Test Camera.get_ray()."""

    def test_center_ray(self, rng):
        cam = Camera()
        cam.reset_viewport(forward_descriptor(), 3, 3)

        for _ in range(50):
            ray = cam.get_ray(1, 1, rng)
            assert ray.origin == Point3(0, 0, 0)
            # Jitter stays within half a pixel of the center
            assert abs(ray.direction.x) <= 1 / 3 + 1e-12
            assert abs(ray.direction.y) <= 1 / 3 + 1e-12
            assert ray.direction.z == pytest.approx(-1.0)

    def test_top_left_ray_points_up_and_left(self, rng):
        cam = Camera()
        cam.reset_viewport(forward_descriptor(), 3, 3)
        ray = cam.get_ray(0, 0, rng)
        assert ray.direction.x < 0
        assert ray.direction.y > 0

    def test_rays_are_jittered(self, rng):
        cam = Camera()
        cam.reset_viewport(forward_descriptor(), 3, 3)
        a = cam.get_ray(1, 1, rng)
        b = cam.get_ray(1, 1, rng)
        assert a.direction != b.direction

    def test_pinhole_origin_fixed(self, rng):
        cam = Camera()
        cam.reset_viewport(forward_descriptor(position=Point3(1, 2, 3), look_at=Point3(1, 2, 2)), 5, 5)
        for _ in range(10):
            assert cam.get_ray(2, 2, rng).origin == Point3(1, 2, 3)

    def test_defocus_origin_on_lens_disk(self, rng):
        cam = Camera()
        cam.reset_viewport(forward_descriptor(defocus_angle=20.0, focus_distance=3.0), 5, 5)
        radius = 3.0 * math.tan(math.radians(10.0))

        origins = [cam.get_ray(2, 2, rng).origin for _ in range(100)]
        for origin in origins:
            assert origin.z == pytest.approx(0.0)
            assert math.hypot(origin.x, origin.y) < radius + 1e-12
        # Both lens axes are sampled
        assert max(abs(o.x) for o in origins) > radius / 4
        assert max(abs(o.y) for o in origins) > radius / 4

    def test_defocus_rays_converge_on_focus_plane(self, rng):
        cam = Camera()
        cam.reset_viewport(forward_descriptor(defocus_angle=20.0, focus_distance=3.0), 1, 1)
        for _ in range(20):
            ray = cam.get_ray(0, 0, rng)
            target = ray.at(1.0)
            assert target.z == pytest.approx(-3.0)
            # Single pixel spans the whole viewport: [-3, 3] on x and y
            assert abs(target.x) <= 3.0 + 1e-9
            assert abs(target.y) <= 3.0 + 1e-9
