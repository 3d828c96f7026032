"""
Scene container: the objects to render and the materials they share.

Materials live in an arena indexed by small integer handles. Geometry
stores the handle rather than the material itself, so the whole scene is
plain read-only data for the duration of a render.
"""

from __future__ import annotations
from typing import Iterable, Iterator, List, Optional

from .interval import Interval
from .materials import Material
from .ray import Ray
from .shapes import HitRecord, Hittable


class Scene:
    """An unordered list of hittable objects plus their material arena."""

    def __init__(self, objects: Optional[Iterable[Hittable]] = None,
                 materials: Optional[Iterable[Material]] = None):
        self.materials: List[Material] = list(materials) if materials is not None else []
        self.objects: List[Hittable] = []
        for obj in objects or ():
            self.add(obj)

    def add_material(self, material: Material) -> int:
        """Store a material and return its handle."""
        self.materials.append(material)
        return len(self.materials) - 1

    def material(self, handle: int) -> Material:
        return self.materials[handle]

    def add(self, obj: Hittable) -> None:
        """Add an object; its material handle must already be registered."""
        if not 0 <= obj.material < len(self.materials):
            raise IndexError(
                f"Material handle {obj.material} out of range "
                f"({len(self.materials)} materials registered)"
            )
        self.objects.append(obj)

    def clear(self) -> None:
        """Remove all objects (materials are kept)."""
        self.objects.clear()

    def find_nearest_hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        """Find the closest intersection among all objects.

        Every object is tested; each accepted hit shrinks the upper bound so
        later objects only count when they are nearer still.
        """
        closest_hit: Optional[HitRecord] = None
        closest_t = ray_t.max

        for obj in self.objects:
            hit_record = obj.hit(ray, ray_t.with_max(closest_t))
            if hit_record is not None:
                closest_hit = hit_record
                closest_t = hit_record.t

        return closest_hit

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)
