"""
Surface materials and their scattering behavior.

Implements:
- Lambert diffuse
- Metal (specular reflection with fuzziness)
- Dielectric (glass, water - with refraction)

Materials are plain immutable values. The set of variants is closed: the
`Material` union lists every kind and `scatter` is the single place where
a material is dispatched on. Randomness always comes from the caller's
generator, so one material can be shared by any number of objects and
threads.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union
import math

import numpy as np

from .color import Color
from .ray import Ray
from .vec3 import Vec3


@dataclass(frozen=True)
class ScatterResult:
    """Result of a material scatter operation."""
    scattered_ray: Ray
    attenuation: Color


@dataclass(frozen=True)
class Lambert:
    """Diffuse material with Lambertian (ideal matte) scattering."""
    albedo: Color


@dataclass(frozen=True)
class Metal:
    """Metallic material with specular reflection.

    Attributes:
        albedo: The reflection color
        fuzziness: Radius of the random perturbation added to the mirror
            direction, clamped to [0, 1] (0 = perfect mirror)
    """
    albedo: Color
    fuzziness: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, 'fuzziness', min(max(float(self.fuzziness), 0.0), 1.0))


@dataclass(frozen=True)
class Dielectric:
    """Transparent material with refraction (glass = 1.5, diamond = 2.4)."""
    refraction_index: float = 1.5


Material = Union[Lambert, Metal, Dielectric]


def scatter(material: Material, ray_in: Ray, hit_point: Vec3, normal: Vec3,
            front_face: bool, rng: np.random.Generator) -> Optional[ScatterResult]:
    """Compute the scattered ray and attenuation.

    Args:
        material: The surface material
        ray_in: The incoming ray
        hit_point: Point of intersection
        normal: Unit surface normal, facing against the incoming ray
        front_face: Whether the ray hit from outside
        rng: Random source for stochastic scattering

    Returns:
        ScatterResult if the ray scatters, None if it is absorbed
    """
    match material:
        case Lambert(albedo=albedo):
            return _scatter_lambert(albedo, hit_point, normal, rng)
        case Metal(albedo=albedo, fuzziness=fuzziness):
            return _scatter_metal(albedo, fuzziness, ray_in, hit_point, normal, rng)
        case Dielectric(refraction_index=refraction_index):
            return _scatter_dielectric(refraction_index, ray_in, hit_point, normal, front_face, rng)
    raise TypeError(f"Unsupported material: {material!r}")


def _scatter_lambert(albedo: Color, hit_point: Vec3, normal: Vec3,
                     rng: np.random.Generator) -> ScatterResult:
    scatter_direction = normal + Vec3.random_unit(rng)

    # Catch degenerate scatter direction
    if scatter_direction.near_zero():
        scatter_direction = normal

    return ScatterResult(Ray(hit_point, scatter_direction), albedo)


def _scatter_metal(albedo: Color, fuzziness: float, ray_in: Ray, hit_point: Vec3,
                   normal: Vec3, rng: np.random.Generator) -> Optional[ScatterResult]:
    reflected = ray_in.direction.reflect(normal).unit()
    reflected = reflected + Vec3.random_unit(rng) * fuzziness

    # Fuzzed reflections pointing into the surface are absorbed
    if reflected.dot(normal) <= 0:
        return None
    return ScatterResult(Ray(hit_point, reflected), albedo)


def _scatter_dielectric(refraction_index: float, ray_in: Ray, hit_point: Vec3, normal: Vec3,
                        front_face: bool, rng: np.random.Generator) -> ScatterResult:
    # Entering from vacuum uses 1/n, leaving into vacuum uses n
    ratio = 1.0 / refraction_index if front_face else refraction_index

    unit_direction = ray_in.direction.unit()
    cos_theta = min(-unit_direction.dot(normal), 1.0)
    sin_theta = math.sqrt(1.0 - cos_theta * cos_theta)

    cannot_refract = ratio * sin_theta > 1.0

    if cannot_refract or rng.random() < reflectance(cos_theta, ratio):
        direction = unit_direction.reflect(normal)
    else:
        direction = unit_direction.refract(normal, ratio)

    return ScatterResult(Ray(hit_point, direction), Color.white())


def reflectance(cosine: float, ratio: float) -> float:
    """Schlick's approximation for reflectance."""
    r0 = (1 - ratio) / (1 + ratio)
    r0 = r0 * r0
    return r0 + (1 - r0) * pow(1 - cosine, 5)
