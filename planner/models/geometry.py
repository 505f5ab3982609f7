"""Geometric primitives used throughout the planner."""

from __future__ import annotations
import math
from pydantic import BaseModel

# Position / rotation / scale triples as they travel to and from the browser.
Vec3 = tuple[float, float, float]


class Point2D(BaseModel):
    """Point on the floor plane (X-Z in Three.js convention)."""
    x: float
    z: float

    def distance_to(self, other: Point2D) -> float:
        return math.sqrt((self.x - other.x) ** 2 + (self.z - other.z) ** 2)

    def __add__(self, other: Point2D | Vector2D) -> Point2D:
        return Point2D(x=self.x + other.x, z=self.z + other.z)


class Point3D(BaseModel):
    """Point in 3D space."""
    x: float
    y: float
    z: float

    @classmethod
    def from_tuple(cls, values: Vec3) -> Point3D:
        return cls(x=values[0], y=values[1], z=values[2])

    def to_tuple(self) -> Vec3:
        return (self.x, self.y, self.z)

    def to_floor(self) -> Point2D:
        """Drop the vertical component."""
        return Point2D(x=self.x, z=self.z)


class Vector2D(BaseModel):
    """2D vector for direction calculations on the floor plane."""
    x: float
    z: float

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.z * self.z)

    def normalized(self) -> Vector2D:
        ln = self.length()
        if ln < 1e-10:
            return Vector2D(x=0.0, z=0.0)
        return Vector2D(x=self.x / ln, z=self.z / ln)

    def __mul__(self, scalar: float) -> Vector2D:
        return Vector2D(x=self.x * scalar, z=self.z * scalar)


def direction_from_points(start: Point2D, end: Point2D) -> Vector2D:
    """Get direction vector from start to end."""
    return Vector2D(x=end.x - start.x, z=end.z - start.z)


def distance(a: Point2D, b: Point2D) -> float:
    return a.distance_to(b)


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp value into [lo, hi]. When lo > hi the lower bound wins."""
    return max(lo, min(hi, value))
