"""
Geometric shapes for the ray tracer.

Each shape has a `hit` method returning a HitRecord for the nearest
intersection inside an open distance interval.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union
import math

from .interval import Interval
from .vec3 import Vec3, Point3
from .ray import Ray


@dataclass(frozen=True)
class HitRecord:
    """Stores information about a ray-object intersection.

    Attributes:
        point: The intersection point in world space
        normal: The surface normal at the intersection (always points against ray)
        t: The ray parameter at intersection
        front_face: True if ray hit from outside the object
        material: Handle of the hit object's material in the scene arena
    """
    point: Point3
    normal: Vec3
    t: float
    front_face: bool
    material: int

    @classmethod
    def from_outward_normal(cls, ray: Ray, t: float, point: Point3,
                            outward_normal: Vec3, material: int) -> HitRecord:
        """Build a record whose normal is flipped to face the incoming ray.

        Args:
            ray: The incoming ray
            t: Ray parameter of the hit
            point: The hit point
            outward_normal: The geometric normal pointing outward from surface
            material: Material handle of the hit object
        """
        front_face = ray.direction.dot(outward_normal) < 0
        normal = outward_normal if front_face else -outward_normal
        return cls(point=point, normal=normal, t=t, front_face=front_face, material=material)


@dataclass(frozen=True)
class Sphere:
    """A sphere defined by center and radius.

    A negative radius turns the outward normal inward, which models a
    hollow shell (e.g. an air bubble inside glass). Intersection is
    unaffected by the sign.
    """
    center: Point3
    radius: float
    material: int = 0

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        """Test ray-sphere intersection using the half-b quadratic form.

        |O + tD - C|^2 = r^2 expands to a t^2 - 2h t + c = 0 with
        a = D.D, h = D.(C - O), c = (C - O).(C - O) - r^2.
        """
        oc = self.center - ray.origin
        a = ray.direction.length_squared()
        if a == 0:
            return None
        h = ray.direction.dot(oc)
        c = oc.length_squared() - self.radius * self.radius

        discriminant = h * h - a * c
        if discriminant < 0:
            return None

        sqrtd = math.sqrt(discriminant)

        # Find the nearest root in the acceptable range
        root = (h - sqrtd) / a
        if not ray_t.surrounds(root):
            root = (h + sqrtd) / a
            if not ray_t.surrounds(root):
                return None

        point = ray.at(root)
        outward_normal = (point - self.center) / self.radius
        return HitRecord.from_outward_normal(ray, root, point, outward_normal, self.material)

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius}, material={self.material})"


# Closed set of geometry kinds the scene can hold
Hittable = Union[Sphere]
