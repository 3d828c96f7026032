"""
Camera module for generating primary rays.

Supports:
- Perspective projection
- Depth of field (defocus blur through a thin-lens disk)
- Configurable vertical field of view
- Arbitrary positioning via look-at
"""

from __future__ import annotations
from dataclasses import dataclass, field
import math

import numpy as np

from .vec3 import Vec3, Point3
from .ray import Ray


@dataclass(frozen=True)
class CameraDescriptor:
    """Immutable per-render camera configuration.

    Attributes:
        position: Camera position in world space
        look_at: Point the camera is looking at
        up: World up vector
        fov_vertical_degrees: Vertical field of view in degrees
        defocus_angle: Cone angle of rays through a pixel, in degrees (0 = pinhole)
        focus_distance: Distance from the camera to the plane of perfect focus
    """
    position: Point3 = field(default_factory=lambda: Point3(10.0, 2.0, 0.0))
    look_at: Point3 = field(default_factory=lambda: Point3(0.0, 0.0, 0.0))
    up: Vec3 = field(default_factory=lambda: Vec3(0.0, 1.0, 0.0))
    fov_vertical_degrees: float = 15.0
    defocus_angle: float = 0.5
    focus_distance: float = 10.0


class Camera:
    """Viewport state derived from a CameraDescriptor and an output size.

    A new camera is uninitialized; `reset_viewport` computes and caches the
    viewport, after which `get_ray` may be called. The viewport must be reset
    whenever the descriptor or the resolution changes.
    """

    def __init__(self):
        self._ready = False
        self.image_width = 0
        self.image_height = 0
        self.position = Point3()
        self.defocus_angle = 0.0
        self.defocus_disk_x = Vec3()
        self.defocus_disk_y = Vec3()
        self.upper_left_pixel = Point3()
        self.pixel_delta_x = Vec3()
        self.pixel_delta_y = Vec3()

    @property
    def is_ready(self) -> bool:
        return self._ready

    def reset_viewport(self, descriptor: CameraDescriptor, image_width: int, image_height: int) -> None:
        """Recompute the cached viewport for a descriptor and output size."""
        self.image_width = image_width
        self.image_height = image_height

        focus_distance = descriptor.focus_distance
        theta = math.radians(descriptor.fov_vertical_degrees)
        viewport_height = 2.0 * math.tan(theta / 2) * focus_distance
        viewport_width = viewport_height * (image_width / image_height)

        # Compute orthonormal camera basis
        w = (descriptor.position - descriptor.look_at).unit()  # Points backward from camera
        u = descriptor.up.cross(w).unit()                      # Points right
        v = w.cross(u)                                         # Points up

        # Image rows run top to bottom, so the vertical edge points down
        edge_x = u * viewport_width
        edge_y = -v * viewport_height

        self.pixel_delta_x = edge_x / image_width
        self.pixel_delta_y = edge_y / image_height

        viewport_upper_left = (
            descriptor.position
            - w * focus_distance
            - edge_x / 2
            - edge_y / 2
        )
        self.upper_left_pixel = viewport_upper_left + (self.pixel_delta_x + self.pixel_delta_y) * 0.5

        defocus_radius = focus_distance * math.tan(math.radians(descriptor.defocus_angle / 2))
        self.defocus_disk_x = u * defocus_radius
        self.defocus_disk_y = v * defocus_radius
        self.defocus_angle = descriptor.defocus_angle

        self.position = descriptor.position
        self._ready = True

    def get_ray(self, x: int, y: int, rng: np.random.Generator) -> Ray:
        """Generate a jittered ray through pixel (x, y).

        Args:
            x: Pixel column (0 = left)
            y: Pixel row (0 = top)
            rng: Random source for the sub-pixel offset and lens sample

        Returns:
            A ray from the camera (or a point on its lens) through the pixel
        """
        if not self._ready:
            raise RuntimeError("Camera viewport has not been initialized; call reset_viewport first")

        offset_x, offset_y = rng.random(2) - 0.5
        pixel_sample = (
            self.upper_left_pixel
            + self.pixel_delta_x * (x + offset_x)
            + self.pixel_delta_y * (y + offset_y)
        )

        if self.defocus_angle <= 0:
            origin = self.position
        else:
            origin = self._defocus_disk_sample(rng)

        return Ray(origin, pixel_sample - origin)

    def _defocus_disk_sample(self, rng: np.random.Generator) -> Point3:
        """Return a random point on the camera's defocus disk."""
        p = Vec3.random_in_unit_disk(rng)
        return self.position + self.defocus_disk_x * p.x + self.defocus_disk_y * p.y

    def __repr__(self) -> str:
        if not self._ready:
            return "Camera(uninitialized)"
        return f"Camera(position={self.position}, {self.image_width}x{self.image_height})"
