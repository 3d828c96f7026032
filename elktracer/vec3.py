"""
Vector3 class for 3D math operations.

This is the fundamental building block of the ray tracer, used for:
- Points in 3D space
- Direction vectors
- Surface normals and scatter directions
"""

from __future__ import annotations
import math
from typing import Union
import numpy as np


class Vec3:
    """An immutable 3D vector supporting common vector operations.

    Uses numpy internally for efficient computation while providing
    a clean, Pythonic API. Every operation returns a new instance.
    """

    __slots__ = ('_data',)

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self._data = np.array([x, y, z], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Vec3:
        """Create a vector of this type from a numpy array."""
        v = cls.__new__(cls)
        v._data = np.asarray(arr, dtype=np.float64)
        return v

    @classmethod
    def zero(cls) -> Vec3:
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def one(cls) -> Vec3:
        return cls(1.0, 1.0, 1.0)

    @property
    def x(self) -> float:
        return float(self._data[0])

    @property
    def y(self) -> float:
        return float(self._data[1])

    @property
    def z(self) -> float:
        return float(self._data[2])

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.x:.4f}, {self.y:.4f}, {self.z:.4f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec3):
            return NotImplemented
        return np.allclose(self._data, other._data)

    def __hash__(self) -> int:
        return hash(tuple(self._data))

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    def __neg__(self) -> Vec3:
        return self.from_array(-self._data)

    def __add__(self, other: Union[Vec3, float]) -> Vec3:
        if isinstance(other, Vec3):
            return self.from_array(self._data + other._data)
        return self.from_array(self._data + other)

    def __radd__(self, other: float) -> Vec3:
        return self.from_array(other + self._data)

    def __sub__(self, other: Union[Vec3, float]) -> Vec3:
        if isinstance(other, Vec3):
            return self.from_array(self._data - other._data)
        return self.from_array(self._data - other)

    def __rsub__(self, other: float) -> Vec3:
        return self.from_array(other - self._data)

    def __mul__(self, other: Union[Vec3, float]) -> Vec3:
        if isinstance(other, Vec3):
            return self.from_array(self._data * other._data)
        return self.from_array(self._data * other)

    def __rmul__(self, other: float) -> Vec3:
        return self.from_array(other * self._data)

    def __truediv__(self, other: Union[Vec3, float]) -> Vec3:
        if isinstance(other, Vec3):
            return self.from_array(self._data / other._data)
        return self.from_array(self._data / other)

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def magnitude(self) -> float:
        """Return the Euclidean length of the vector."""
        return math.sqrt(self.length_squared())

    length = magnitude

    def length_squared(self) -> float:
        """Return the squared magnitude (avoids sqrt for comparisons)."""
        return float(np.dot(self._data, self._data))

    def unit(self) -> Vec3:
        """Return a unit vector in the same direction.

        A zero-length vector has no direction; the result is then NaN in
        every component and callers must guard against it.
        """
        with np.errstate(divide='ignore', invalid='ignore'):
            return self.from_array(self._data / self.magnitude())

    def dot(self, other: Vec3) -> float:
        """Compute dot product with another vector."""
        return float(np.dot(self._data, other._data))

    def cross(self, other: Vec3) -> Vec3:
        """Compute cross product with another vector."""
        return self.from_array(np.cross(self._data, other._data))

    def reflect(self, normal: Vec3) -> Vec3:
        """Reflect this vector around the given normal: v - 2(v.n)n."""
        return self - normal * (2.0 * self.dot(normal))

    def refract(self, normal: Vec3, eta_ratio: float) -> Vec3:
        """Refract this unit vector through a surface with Snell's law.

        Total internal reflection is not detected here; callers decide
        between reflection and refraction before calling.

        Args:
            normal: Unit surface normal, facing against this vector
            eta_ratio: Ratio of refractive indices (n1/n2)

        Returns:
            Refracted direction vector
        """
        cos_theta = min(-self.dot(normal), 1.0)
        r_out_perp = (self + normal * cos_theta) * eta_ratio
        r_out_parallel = normal * (-math.sqrt(abs(1.0 - r_out_perp.length_squared())))
        return r_out_perp + r_out_parallel

    def near_zero(self, epsilon: float = 1e-8) -> bool:
        """Check if vector is close to zero in all dimensions."""
        return bool(np.all(np.abs(self._data) < epsilon))

    def to_array(self) -> np.ndarray:
        """Return the underlying numpy array (copy)."""
        return self._data.copy()

    @staticmethod
    def random(rng: np.random.Generator, min_val: float = 0.0, max_val: float = 1.0) -> Vec3:
        """Generate a random vector with components in [min_val, max_val)."""
        return Vec3.from_array(rng.uniform(min_val, max_val, 3))

    @staticmethod
    def random_unit(rng: np.random.Generator) -> Vec3:
        """Generate a random unit vector (uniform on sphere surface).

        Rejection-samples the [-1, 1] cube until the point falls inside the
        unit ball, skipping points so close to the origin that normalizing
        them would blow up.
        """
        while True:
            p = Vec3.random(rng, -1.0, 1.0)
            len_sq = p.length_squared()
            if 1e-160 < len_sq <= 1.0:
                return p / math.sqrt(len_sq)

    @staticmethod
    def random_in_unit_disk(rng: np.random.Generator) -> Vec3:
        """Generate a random point inside the unit disk (z=0)."""
        while True:
            x, y = rng.uniform(-1.0, 1.0, 2)
            if x * x + y * y < 1.0:
                return Vec3(x, y, 0.0)


# Convenience type alias
Point3 = Vec3
